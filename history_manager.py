import os
from typing import List


class HistoryManager:
    """Command-line history kept in memory and appended to a log file."""

    def __init__(self, history_path: str, max_items: int = 100):
        self.history_path = history_path
        self.max_items = max_items
        self.history: List[str] = []

    def load(self) -> List[str]:
        if not os.path.exists(self.history_path):
            # No history; create empty file best-effort
            try:
                with open(self.history_path, "w", encoding="utf-8") as f:
                    f.write("")
            except OSError:
                pass
            self.history = []
            return self.history

        try:
            with open(self.history_path, "r", encoding="utf-8") as f:
                data = [l.rstrip("\n") for l in f if l.strip()]
        except OSError:
            data = []
        self.history = data[-self.max_items :] if self.max_items else []
        return self.history

    def append(self, entry: str) -> None:
        if not entry:
            return
        self.history.append(entry)
        if len(self.history) > self.max_items:
            self.history = self.history[-self.max_items :] if self.max_items else []

    def persist(self, entry: str) -> None:
        if not entry:
            return
        try:
            with open(self.history_path, "a", encoding="utf-8") as f:
                f.write(entry + "\n")
        except OSError:
            pass

    @property
    def items(self) -> List[str]:
        return list(self.history)
