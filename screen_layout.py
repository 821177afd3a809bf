import curses


class ScreenLayout:
    """Table window over a one-line status window, rebuilt on resize."""

    STATUS_H = 1

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.rebuild()

    def rebuild(self):
        self.H, self.W = self.stdscr.getmaxyx()
        self.table_h = max(1, self.H - self.STATUS_H)

        self.table_win = curses.newwin(self.table_h, self.W, 0, 0)
        self.status_win = curses.newwin(self.STATUS_H, self.W, self.table_h, 0)
        # neither window owns the cursor; the edit cursor is drawn inverse
        for win in (self.table_win, self.status_win):
            win.leaveok(True)
