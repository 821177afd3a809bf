import curses


class CommandLine:
    """Buffer for the ``:`` command line, with history recall."""

    def __init__(self):
        self.buffer = ""
        self.cursor = 0
        self.active = False
        self.history = []
        self.history_idx = None  # None means not navigating history

    # ---------- state helpers ----------
    def reset(self):
        self.buffer = ""
        self.cursor = 0
        self.active = False
        self.history_idx = None

    def activate(self):
        self.reset()
        self.active = True

    def get_buffer(self):
        return self.buffer

    def set_history(self, entries):
        self.history = list(entries or [])
        self.history_idx = None

    def _apply_history(self):
        if self.history_idx is None:
            return
        if 0 <= self.history_idx < len(self.history):
            self.buffer = self.history[self.history_idx]
        else:
            self.buffer = ""
        self.cursor = len(self.buffer)

    # ---------- input handling ----------
    def handle_key(self, ch):
        if not self.active:
            return None

        # history navigation
        if ch in (16, curses.KEY_UP):  # Ctrl+P
            if self.history:
                if self.history_idx is None:
                    self.history_idx = len(self.history) - 1
                else:
                    self.history_idx = max(0, self.history_idx - 1)
                self._apply_history()
            return None
        if ch in (14, curses.KEY_DOWN):  # Ctrl+N
            if self.history and self.history_idx is not None:
                self.history_idx += 1
                if self.history_idx >= len(self.history):
                    self.history_idx = None
                    self.buffer = ""
                    self.cursor = 0
                else:
                    self._apply_history()
            return None

        if ch == 9:  # Tab
            return None

        if ch in (10, 13, curses.KEY_ENTER):
            return "submit"

        if ch == 27:  # Esc
            self.reset()
            return "cancel"

        if ch == 21:  # Ctrl+U, kill to line start
            if self.cursor > 0:
                self.buffer = self.buffer[self.cursor :]
                self.cursor = 0
                self.history_idx = None
            return None

        if ch in (curses.KEY_BACKSPACE, 127, 8):
            if self.cursor > 0:
                self.buffer = (
                    self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
                )
                self.cursor -= 1
            self.history_idx = None
            return None

        if ch == curses.KEY_LEFT:
            self.cursor = max(0, self.cursor - 1)
            return None

        if ch == curses.KEY_RIGHT:
            self.cursor = min(len(self.buffer), self.cursor + 1)
            return None

        if ch in (curses.KEY_HOME, 1):  # Home or Ctrl+A
            self.cursor = 0
            return None

        if ch in (curses.KEY_END, 5):  # End or Ctrl+E
            self.cursor = len(self.buffer)
            return None

        if 32 <= ch <= 126:
            self.buffer = (
                self.buffer[: self.cursor] + chr(ch) + self.buffer[self.cursor :]
            )
            self.cursor += 1
            self.history_idx = None
            return None

        return None
