class EditorCounts:
    """Numeric prefix (count) tracking for TableEditor."""

    def __init__(self):
        self.pending = 0

    def reset(self):
        self.pending = 0

    def push_digit(self, digit: int):
        if digit < 0 or digit > 9:
            return
        self.pending = self.pending * 10 + digit

    def pop_digit(self):
        self.pending //= 10
