# ~/Apps/vitab/orchestrator.py
import curses
import logging

from config_paths import HISTORY_PATH, ensure_config_dirs
from history_manager import HistoryManager
from render import build_view
from screen_layout import ScreenLayout
from status_bar import render_status, status_context
from table_editor import TableEditor
from table_pane import TablePane

logger = logging.getLogger(__name__)


class Orchestrator:
    def __init__(self, stdscr, doc, config):
        self.stdscr = stdscr
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.noecho()
        self.stdscr.keypad(True)

        ensure_config_dirs()

        self.layout = ScreenLayout(stdscr)
        self.pane = TablePane()

        # ---- history ----
        self.history_mgr = HistoryManager(
            HISTORY_PATH, max_items=config.get("HISTORY_MAX", 100)
        )
        self.history_mgr.load()

        self.editor = TableEditor(
            doc,
            page_step=config.get("PAGE_STEP", 10),
            history=self.history_mgr,
        )

    # ---------------- UI ----------------

    def redraw(self):
        view = build_view(self.editor, height=self.pane.grid_height(self.layout.table_win))
        self.pane.draw(self.layout.table_win, view)

        _, w = self.layout.status_win.getmaxyx()
        text = render_status(status_context(self.editor), w)
        self.pane.draw_status(self.layout.status_win, text, error=bool(self.editor.error))

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self.redraw()

        while not self.editor.quit_requested:
            ch = self.stdscr.getch()
            if ch == -1:
                continue
            if ch == curses.KEY_RESIZE:
                self.layout.rebuild()
                self.redraw()
                continue

            self.editor.handle_key(ch)
            if self.editor.error:
                logger.info("%s", self.editor.error)
            self.redraw()
