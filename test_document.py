import unittest

import pandas as pd

from column_types import Column
from document import Document, Focus, NumMode
from table_ops import TableShapeError


def _doc(rows=5, cols=3):
    payload = {
        "title": "Inventory",
        "subtitle": "spring",
        "columns": [
            {"name": f"c{i}", "width": 4, "column_type": "string"} for i in range(cols)
        ],
        "data": [[f"r{r}c{c}" for c in range(cols)] for r in range(rows)],
    }
    return Document.from_dict(payload, path="inv.json")


class NavigationTests(unittest.TestCase):
    def test_navigate_row_clamps_both_ends(self):
        doc = _doc()
        doc.navigate_row(0, 1)
        self.assertEqual(doc.curr_row, 1)
        doc.navigate_row(10, 1)
        self.assertEqual(doc.curr_row, 4)
        doc.navigate_row(-3, -1)
        self.assertEqual(doc.curr_row, 1)
        doc.navigate_row(-10, -1)
        self.assertEqual(doc.curr_row, 0)

    def test_navigate_row_on_empty_table_stays_at_zero(self):
        doc = _doc(rows=0)
        doc.navigate_row(3, 1)
        self.assertEqual(doc.curr_row, 0)

    def test_goto_row_is_one_based_and_ignores_out_of_range(self):
        doc = _doc()
        doc.goto_row(3)
        self.assertEqual(doc.curr_row, 2)
        doc.goto_row(0)
        self.assertEqual(doc.curr_row, 2)
        doc.goto_row(6)
        self.assertEqual(doc.curr_row, 2)

    def test_navigate_col_wraps_single_steps(self):
        doc = _doc()
        doc.navigate_col(-1)
        self.assertEqual(doc.curr_col, 2)
        doc.navigate_col(1)
        self.assertEqual(doc.curr_col, 0)

    def test_navigate_col_clamps_larger_steps(self):
        doc = _doc()
        doc.navigate_col(5)
        self.assertEqual(doc.curr_col, 2)
        doc.navigate_col(-5)
        self.assertEqual(doc.curr_col, 0)

    def test_row_labels_follow_numbering_mode(self):
        doc = _doc()
        doc.curr_row = 2
        self.assertEqual([doc.row_label(r) for r in range(5)], [1, 2, 3, 4, 5])
        doc.toggle_numbering_mode()
        self.assertIs(doc.num_mode, NumMode.RELATIVE)
        self.assertEqual([doc.row_label(r) for r in range(5)], [2, 1, 0, 1, 2])
        doc.toggle_numbering_mode()
        self.assertIs(doc.num_mode, NumMode.ABSOLUTE)


class FocusTests(unittest.TestCase):
    def test_open_current_row_needs_rows(self):
        doc = _doc(rows=0)
        self.assertFalse(doc.open_current_row())
        self.assertIs(doc.focus, Focus.TABLE)
        doc = _doc()
        self.assertTrue(doc.open_current_row())
        self.assertIs(doc.focus, Focus.ELEMENT)

    def test_open_columns_resets_column_cursor(self):
        doc = _doc()
        doc.curr_col = 2
        doc.open_columns()
        self.assertIs(doc.focus, Focus.COLUMN)
        self.assertEqual(doc.curr_col, 0)

    def test_begin_new_row_selects_placeholder(self):
        doc = _doc()
        self.assertTrue(doc.begin_new_row())
        self.assertIs(doc.focus, Focus.NEW_ELEMENT)
        self.assertEqual(doc.curr_row, 5)
        self.assertEqual(doc.row(5), ["", "", ""])

    def test_begin_new_row_without_columns_fails(self):
        doc = Document()
        self.assertFalse(doc.begin_new_row())
        self.assertIs(doc.focus, Focus.TABLE)

    def test_begin_new_column_selects_placeholder(self):
        doc = _doc()
        doc.begin_new_column()
        self.assertIs(doc.focus, Focus.NEW_COLUMN)
        self.assertEqual(doc.curr_col, 3)

    def test_deletes_return_to_table(self):
        doc = _doc()
        doc.open_current_row()
        doc.delete_current_row()
        self.assertIs(doc.focus, Focus.TABLE)
        self.assertEqual(doc.row_count, 4)

        doc.open_columns()
        doc.delete_current_column()
        self.assertIs(doc.focus, Focus.TABLE)
        self.assertEqual(doc.col_count, 2)


class PersistenceTests(unittest.TestCase):
    def test_to_dict_from_dict_preserves_document(self):
        doc = _doc()
        doc.curr_row = 3
        doc.curr_col = 1
        doc.toggle_numbering_mode()
        payload = doc.to_dict()

        self.assertEqual(payload["num_mode"], "Relative")
        self.assertEqual(payload["table_focus"], "Table")
        self.assertEqual(payload["columns"][0], {"name": "c0", "width": 4, "column_type": "string"})

        back = Document.from_dict(payload)
        self.assertEqual(back.to_dict(), payload)

    def test_from_dict_rejects_ragged_rows(self):
        payload = _doc().to_dict()
        payload["data"][2] = ["only one"]
        with self.assertRaises(ValueError):
            Document.from_dict(payload)

    def test_from_dict_resets_wizard_focus(self):
        payload = _doc().to_dict()
        payload["table_focus"] = "NewColumn"
        self.assertIs(Document.from_dict(payload).focus, Focus.TABLE)
        payload["table_focus"] = "Column"
        self.assertIs(Document.from_dict(payload).focus, Focus.COLUMN)

    def test_from_dict_element_focus_without_rows_falls_back_to_table(self):
        payload = _doc(rows=0).to_dict()
        payload["table_focus"] = "Element"
        self.assertIs(Document.from_dict(payload).focus, Focus.TABLE)
        payload = _doc(rows=1).to_dict()
        payload["table_focus"] = "Element"
        self.assertIs(Document.from_dict(payload).focus, Focus.ELEMENT)

    def test_from_dict_raises_narrow_widths_to_name_floor(self):
        payload = _doc().to_dict()
        payload["columns"][0] = {"name": "longname", "width": 2, "column_type": "string"}
        payload["columns"][1] = {"name": "short", "column_type": "string"}
        doc = Document.from_dict(payload)
        self.assertEqual(doc.columns[0].width, len("longname") + 1)
        self.assertEqual(doc.columns[1].width, len("short") + 1)
        self.assertEqual(doc.columns[2].width, 4)

    def test_from_dict_clamps_cursor(self):
        payload = _doc().to_dict()
        payload["curr_row"] = 99
        payload["curr_col"] = -4
        doc = Document.from_dict(payload)
        self.assertEqual((doc.curr_row, doc.curr_col), (4, 0))

    def test_load_path_wins_over_stored_path(self):
        payload = _doc().to_dict()
        self.assertEqual(Document.from_dict(payload, path="moved.json").path, "moved.json")
        self.assertEqual(Document.from_dict(payload).path, "inv.json")

    def test_constructor_rejects_mismatched_grid(self):
        with self.assertRaises(TableShapeError):
            Document(columns=[Column("a")], data=pd.DataFrame([["x", "y"]], dtype=object))


if __name__ == "__main__":
    unittest.main()
