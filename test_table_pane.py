import unittest
from datetime import date
from unittest import mock

from document import Document
from render import build_view
from table_editor import TableEditor
from table_pane import TablePane


class DummyWin:
    def __init__(self, h=24, w=120):
        self._h = h
        self._w = w
        self.lines = {}
        self._y = 0
        self.attrs = []

    def getmaxyx(self):
        return self._h, self._w

    def erase(self):
        self.lines = {}

    def refresh(self):
        pass

    def addstr(self, *args):
        if len(args) == 4:
            y, x, text, attr = args
            self._y = y
            line = self.lines.get(y, "")
            self.lines[y] = line.ljust(x) + text
        else:
            text, attr = args
            self.lines[self._y] = self.lines.get(self._y, "") + text
        self.attrs.append((self._y, text, attr))

    def addnstr(self, y, x, text, n, attr):
        self.lines[y] = text[:n]


def _editor():
    doc = Document.from_dict(
        {
            "title": "Plants",
            "subtitle": "watering",
            "columns": [
                {"name": "plant", "width": 6, "column_type": "string"},
                {"name": "next", "width": 10, "column_type": "date"},
            ],
            "data": [["fern", "02/01/2024"], ["cactus", "01/01/2020"]],
        }
    )
    return TableEditor(doc)


@mock.patch("table_pane.curses.color_pair", side_effect=lambda n: n)
class TablePaneDrawTests(unittest.TestCase):
    def test_table_layout(self, _color_pair):
        win = DummyWin()
        pane = TablePane()
        pane.draw(win, build_view(_editor(), today=date(2024, 1, 1)))

        self.assertEqual(win.lines[0], "Plants")
        self.assertEqual(win.lines[2].strip(), "watering")
        self.assertEqual(win.lines[3].strip(), "View: All")
        self.assertEqual(win.lines[4], "    +---+--------+------------+")
        self.assertEqual(win.lines[5], "    |   | plant_ | next@      |")
        self.assertEqual(win.lines[6], "    +===+========+============+")
        self.assertEqual(win.lines[7], "    | 1 | fern   | 02/01/2024 |")
        self.assertEqual(win.lines[8], "    | 2 | cactus | 01/01/2020 |")
        self.assertEqual(win.lines[9], "    +---+--------+------------+")
        self.assertEqual(win.lines[10].strip(), "2 entries")

    def test_cells_are_colored_by_status(self, _color_pair):
        win = DummyWin()
        pane = TablePane()
        pane.draw(win, build_view(_editor(), today=date(2024, 1, 1)))
        attrs = {text: attr for _, text, attr in win.attrs}
        # selected row uses the inverse of the status color
        self.assertEqual(attrs["02/01/2024"], TablePane.PAIR_INV_GREEN)
        self.assertEqual(attrs["01/01/2020"], TablePane.PAIR_RED)

    def test_element_fields_show_edit_buffer(self, _color_pair):
        ed = _editor()
        ed.doc.open_current_row()
        for ch in (ord("1"), 10, ord("r")):
            ed.handle_key(ch)
        win = DummyWin()
        TablePane().draw(win, build_view(ed, today=date(2024, 1, 1)))
        self.assertEqual(win.lines[4].strip(), "Row 1")
        self.assertEqual(win.lines[6].strip(), "[1|plant_]")
        self.assertEqual(win.lines[7].strip(), "fern -> r")

    def test_empty_table_draws_hint(self, _color_pair):
        ed = _editor()
        ed.doc.data = ed.doc.data.iloc[0:0]
        ed.doc.clamp_cursor()
        win = DummyWin()
        TablePane().draw(win, build_view(ed, today=date(2024, 1, 1)))
        self.assertEqual(win.lines[7].strip(), "(no rows; press i to add one)")
        self.assertEqual(win.lines[8], "    +---+--------+------------+")
        self.assertEqual(win.lines[9].strip(), "0 entries")

    def test_document_without_columns_hints_at_column_wizard(self, _color_pair):
        win = DummyWin()
        TablePane().draw(win, build_view(TableEditor(Document())))
        self.assertEqual(win.lines[7].strip(), "(no columns; press c then i)")

    def test_grid_height_leaves_room_for_chrome(self, _color_pair):
        self.assertEqual(TablePane().grid_height(DummyWin(h=30)), 21)
        self.assertEqual(TablePane().grid_height(DummyWin(h=5)), 1)


if __name__ == "__main__":
    unittest.main()
