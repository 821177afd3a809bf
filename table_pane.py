# ~/Apps/vitab/table_pane.py
import curses

from column_types import Status
from document import Focus


class TablePane:
    PAIR_WHITE = 1
    PAIR_INV_WHITE = 2
    PAIR_RED = 3
    PAIR_INV_RED = 4
    PAIR_GREEN = 5
    PAIR_INV_GREEN = 6
    PAIR_YELLOW = 7
    PAIR_INV_YELLOW = 8
    PAIR_BLUE = 9
    PAIR_INV_BLUE = 10

    # first grid row sits below title, subtitle, view line and 3 header lines
    GRID_TOP = 7
    GRID_MARGIN = GRID_TOP + 2

    STATUS_PAIRS = {
        Status.OK: PAIR_WHITE,
        Status.TODAY: PAIR_WHITE,
        Status.PAST: PAIR_RED,
        Status.FUTURE: PAIR_GREEN,
        Status.FLAGGED: PAIR_BLUE,
        Status.EMPTY: PAIR_YELLOW,
    }

    def __init__(self):
        try:
            curses.start_color()
            colors = [
                curses.COLOR_WHITE,
                curses.COLOR_RED,
                curses.COLOR_GREEN,
                curses.COLOR_YELLOW,
                curses.COLOR_BLUE,
            ]
            for i, color in enumerate(colors):
                pair = self.PAIR_WHITE + i * 2
                curses.init_pair(pair, color, curses.COLOR_BLACK)
                curses.init_pair(pair + 1, curses.COLOR_BLACK, color)
        except curses.error:
            pass

    def grid_height(self, win) -> int:
        h, _ = win.getmaxyx()
        return max(1, h - self.GRID_MARGIN)

    # ---------- primitives ----------
    def _label(self, win, y, x, text, pair=PAIR_WHITE):
        try:
            win.addstr(y, x, text, curses.color_pair(pair))
        except curses.error:
            pass

    def _add(self, win, text, pair=PAIR_WHITE):
        try:
            win.addstr(text, curses.color_pair(pair))
        except curses.error:
            pass

    def _status_pair(self, status, inverse=False):
        pair = self.STATUS_PAIRS.get(status, self.PAIR_WHITE)
        return pair + 1 if inverse else pair

    # ---------- sections ----------
    def _border(self, win, y, view, fill):
        self._label(win, y, 4, "+" + fill * (view.number_width + 2) + "+")
        for header in view.headers:
            self._add(win, fill * (header.width + 2) + "+")

    def _draw_headers(self, win, view):
        self._border(win, 4, view, "-")
        self._label(win, 5, 4, f"| {' ' * view.number_width} ")
        for header in view.headers:
            self._add(win, "| ")
            pair = self.PAIR_INV_WHITE if header.highlighted else self.PAIR_WHITE
            self._add(win, header.text, pair)
            self._add(win, " ")
        self._add(win, "|")
        self._border(win, 6, view, "=")

    def _draw_rows(self, win, view):
        y = self.GRID_TOP
        if view.empty:
            if view.headers:
                hint = "(no rows; press i to add one)"
            else:
                hint = "(no columns; press c then i)"
            self._label(win, y, 6, hint, self.PAIR_YELLOW)
            y += 1
        for row in view.rows:
            base = self.PAIR_INV_WHITE if row.selected else self.PAIR_WHITE
            self._label(win, y, 4, f"| {row.label}", base)
            for cell in row.cells:
                self._add(win, "| ", base)
                self._add(win, cell.text, self._status_pair(cell.status, row.selected))
                self._add(win, " ", base)
            self._add(win, "|", base)
            y += 1
        self._border(win, y, view, "-")
        self._label(win, y + 1, 5, view.footer)

    def _draw_element(self, win, view):
        if not view.fields:
            return
        self._label(win, 4, 4, view.heading)
        y = 6
        for fv in view.fields:
            self._label(win, y, 4, fv.label)
            self._label(win, y + 1, 6, fv.value, self._status_pair(fv.status))
            if fv.editing:
                self._add(win, f" -> {fv.buffer}")
                self._add(win, " ", self.PAIR_INV_WHITE)
            y += 3

    def _draw_column(self, win, view):
        y = 8
        for fv in view.fields:
            self._label(win, y, 8, f"{fv.label} {fv.value}")
            if fv.editing:
                self._add(win, f" -> {fv.buffer}")
                self._add(win, " ", self.PAIR_INV_WHITE)
            y += 1

    # ---------- rendering ----------
    def draw(self, win, view):
        win.erase()
        self._label(win, 0, 0, view.title)
        self._label(win, 2, 4, view.subtitle)

        if view.focus is Focus.TABLE:
            self._label(win, 3, 4, "View: ")
            self._add(win, view.view_label, self.PAIR_INV_WHITE)
            self._draw_headers(win, view)
            self._draw_rows(win, view)
        elif view.focus in (Focus.ELEMENT, Focus.NEW_ELEMENT):
            self._draw_element(win, view)
        elif view.focus in (Focus.COLUMN, Focus.NEW_COLUMN):
            self._draw_headers(win, view)
            self._draw_column(win, view)
        else:
            self._label(win, 4, 4, view.heading)

        win.refresh()

    def draw_status(self, win, text, error=False):
        win.erase()
        _, w = win.getmaxyx()
        pair = self.PAIR_RED if error else self.PAIR_WHITE
        try:
            # the last cell of a window cannot be written without an error
            win.addnstr(0, 0, text, max(0, w - 1), curses.color_pair(pair))
        except curses.error:
            pass
        win.refresh()
