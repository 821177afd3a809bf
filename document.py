from enum import Enum
from typing import Optional

import pandas as pd

from column_types import Column
from table_ops import TableOps, TableShapeError


class Focus(Enum):
    TABLE = "Table"
    ELEMENT = "Element"
    NEW_ELEMENT = "NewElement"
    VIEW = "View"
    SORT = "Sort"
    COLUMN = "Column"
    NEW_COLUMN = "NewColumn"


class NumMode(Enum):
    ABSOLUTE = "Absolute"
    RELATIVE = "Relative"


def empty_frame(columns: int = 0, rows: int = 0) -> pd.DataFrame:
    return pd.DataFrame(
        [[""] * columns for _ in range(rows)],
        columns=pd.RangeIndex(columns),
        index=pd.RangeIndex(rows),
        dtype=object,
    )


class Document:
    """A titled table of typed columns plus the cursor and focus over it."""

    def __init__(
        self,
        title: str = "",
        subtitle: str = "",
        path: str = "",
        columns: Optional[list[Column]] = None,
        data: Optional[pd.DataFrame] = None,
        curr_row: int = 0,
        curr_col: int = 0,
        num_mode: NumMode = NumMode.ABSOLUTE,
        focus: Focus = Focus.TABLE,
    ):
        self.title = title
        self.subtitle = subtitle
        self.path = path
        self.columns: list[Column] = list(columns or [])
        if data is None:
            data = empty_frame(len(self.columns))
        if data.shape[1] != len(self.columns):
            raise TableShapeError(
                f"{data.shape[1]} cells per row for {len(self.columns)} columns"
            )
        self.data: pd.DataFrame = data
        self.num_mode = num_mode
        self.focus = focus
        self.curr_row = curr_row
        self.curr_col = curr_col
        self.clamp_cursor()
        self.ops = TableOps(self)

    # ---------- shape ----------
    @property
    def row_count(self) -> int:
        return len(self.data)

    @property
    def col_count(self) -> int:
        return len(self.columns)

    @property
    def is_empty(self) -> bool:
        return self.row_count == 0

    def cell(self, row: int, col: int) -> str:
        return self.data.iat[row, col]

    def row(self, row: int) -> list[str]:
        return list(self.data.iloc[row])

    def clamp_cursor(self):
        self.curr_row = min(max(0, self.curr_row), max(0, self.row_count - 1))
        self.curr_col = min(max(0, self.curr_col), max(0, self.col_count - 1))

    # ---------- navigation ----------
    def navigate_row(self, delta: int, default_step: int):
        step = delta if delta != 0 else default_step
        if self.is_empty:
            self.curr_row = 0
            return
        self.curr_row = min(max(0, self.curr_row + step), self.row_count - 1)

    def goto_row(self, n: int):
        if 0 < n <= self.row_count:
            self.curr_row = n - 1

    def navigate_col(self, delta: int):
        if self.col_count == 0:
            self.curr_col = 0
            return
        if delta == 0:
            delta = 1
        last = self.col_count - 1
        target = self.curr_col + delta
        if 0 <= target <= last:
            self.curr_col = target
        elif abs(delta) == 1:
            self.curr_col = last if target < 0 else 0
        else:
            self.curr_col = 0 if target < 0 else last

    def toggle_numbering_mode(self):
        if self.num_mode is NumMode.ABSOLUTE:
            self.num_mode = NumMode.RELATIVE
        else:
            self.num_mode = NumMode.ABSOLUTE

    def row_label(self, row: int) -> int:
        if self.num_mode is NumMode.RELATIVE:
            return abs(row - self.curr_row)
        return row + 1

    # ---------- focus ----------
    def to_table(self):
        self.focus = Focus.TABLE

    def to_view(self):
        self.focus = Focus.VIEW

    def to_sort(self):
        self.focus = Focus.SORT

    def open_current_row(self) -> bool:
        if self.is_empty:
            return False
        self.focus = Focus.ELEMENT
        return True

    def open_columns(self):
        # allowed with no columns so the first one can be inserted from here
        self.focus = Focus.COLUMN
        self.curr_col = 0

    # ---------- wizards / deletes ----------
    def begin_new_row(self) -> bool:
        if not self.ops.insert_row_placeholder():
            return False
        self.curr_row = self.row_count - 1
        self.focus = Focus.NEW_ELEMENT
        return True

    def begin_new_column(self) -> bool:
        self.ops.insert_column_placeholder()
        self.curr_col = self.col_count - 1
        self.focus = Focus.NEW_COLUMN
        return True

    def delete_current_row(self):
        if not self.is_empty:
            self.ops.delete_row(self.curr_row)
        self.focus = Focus.TABLE

    def delete_current_column(self):
        if self.col_count:
            self.ops.delete_column(self.curr_col)
        self.focus = Focus.TABLE

    # ---------- persistence ----------
    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "columns": [c.to_dict() for c in self.columns],
            "data": [self.row(r) for r in range(self.row_count)],
            "curr_row": self.curr_row,
            "curr_col": self.curr_col,
            "num_mode": self.num_mode.value,
            "table_focus": self.focus.value,
            "path": self.path,
        }

    @classmethod
    def from_dict(cls, payload: dict, path: Optional[str] = None) -> "Document":
        if not isinstance(payload, dict):
            raise ValueError("document must be a JSON object")
        columns = [Column.from_dict(c) for c in payload.get("columns", [])]
        rows = payload.get("data", [])
        if not isinstance(rows, list):
            raise ValueError("'data' must be a list of rows")
        for idx, row in enumerate(rows):
            if not isinstance(row, list) or len(row) != len(columns):
                raise ValueError(
                    f"row {idx + 1} has {len(row) if isinstance(row, list) else 'no'} "
                    f"cells, expected {len(columns)}"
                )
        if not rows:
            data = empty_frame(len(columns))
        else:
            data = pd.DataFrame(
                [["" if v is None else str(v) for v in row] for row in rows],
                columns=pd.RangeIndex(len(columns)),
                dtype=object,
            )

        focus = Focus(payload.get("table_focus", Focus.TABLE.value))
        if focus in (Focus.NEW_ELEMENT, Focus.NEW_COLUMN):
            focus = Focus.TABLE
        elif focus is Focus.ELEMENT and not rows:
            focus = Focus.TABLE
        return cls(
            title=str(payload.get("title", "")),
            subtitle=str(payload.get("subtitle", "")),
            path=str(path or payload.get("path") or ""),
            columns=columns,
            data=data,
            curr_row=int(payload.get("curr_row", 0)),
            curr_col=int(payload.get("curr_col", 0)),
            num_mode=NumMode(payload.get("num_mode", NumMode.ABSOLUTE.value)),
            focus=focus,
        )
