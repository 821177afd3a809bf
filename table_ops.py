import pandas as pd

from column_types import BooleanType, Column, format_cell, get_type, parse_type_tag


class TableShapeError(Exception):
    """Raised when a column list and its grid would disagree on width."""


class TableOps:
    """Structural and cell-level edits on a Document's columns and grid.

    Every structural edit builds the new column list and the new frame
    first and publishes both through ``_publish``, so no caller ever sees
    a row whose cell count differs from the column count.
    """

    def __init__(self, doc):
        self.doc = doc

    def _publish(self, columns, data: pd.DataFrame):
        if data.shape[1] != len(columns):
            raise TableShapeError(
                f"{data.shape[1]} cells per row for {len(columns)} columns"
            )
        data.columns = pd.RangeIndex(len(columns))
        self.doc.columns = columns
        self.doc.data = data

    # ----- rows -----
    def insert_row_placeholder(self) -> bool:
        if self.doc.col_count == 0:
            return False
        data = self.doc.data.copy()
        data.loc[len(data)] = [""] * self.doc.col_count
        self._publish(list(self.doc.columns), data)
        return True

    def delete_row(self, row: int):
        data = self.doc.data
        if not 0 <= row < len(data):
            return
        data = data.drop(index=data.index[row]).reset_index(drop=True)
        self._publish(list(self.doc.columns), data)
        self.doc.curr_row = min(row, max(0, len(data) - 1))

    # ----- columns -----
    def insert_column_placeholder(self):
        columns = list(self.doc.columns) + [Column(name="", width=1, column_type="string")]
        data = self.doc.data.copy()
        data[len(columns) - 1] = ""
        self._publish(columns, data.astype(object))

    def delete_column(self, col: int):
        if not 0 <= col < self.doc.col_count:
            return
        columns = [c for i, c in enumerate(self.doc.columns) if i != col]
        data = self.doc.data.drop(columns=self.doc.data.columns[col])
        self._publish(columns, data)
        self.doc.curr_col = min(col, max(0, len(columns) - 1))

    def move_column(self, col: int, direction: str) -> int:
        """Swap ``col`` with its neighbour; returns the column's new index."""
        other = col - 1 if direction == "left" else col + 1
        if not (0 <= col < self.doc.col_count and 0 <= other < self.doc.col_count):
            return col

        order = list(range(self.doc.col_count))
        order[col], order[other] = order[other], order[col]
        columns = [self.doc.columns[i] for i in order]
        data = self.doc.data.iloc[:, order].copy()
        self._publish(columns, data)
        if self.doc.curr_col == col:
            self.doc.curr_col = other
        return other

    def resize_column(self, col: int, delta: int = 1, direction: str = "grow"):
        column = self.doc.columns[col]
        amount = delta if delta > 0 else 1
        if direction == "grow":
            column.width = max(column.width + amount, column.min_width)
        else:
            column.width = max(column.width - amount, column.min_width)

    def autosize_column(self, col: int):
        column = self.doc.columns[col]
        ctype = get_type(column.column_type)
        if isinstance(ctype, BooleanType):
            column.width = max(ctype.min_width, column.min_width)
            return
        cells = self.doc.data.iloc[:, col]
        longest = 0
        if len(cells):
            longest = int(
                cells.map(lambda v: len(format_cell(v, column.column_type)[0])).max()
            )
        column.width = max(column.min_width, longest)

    def autosize_columns(self):
        for col in range(self.doc.col_count):
            self.autosize_column(col)

    # ----- cells -----
    def commit_cell(self, row: int, col: int, raw: str, toggle_empty: bool = True):
        column = self.doc.columns[col]
        ctype = get_type(column.column_type)
        current = self.doc.data.iat[row, col]
        if isinstance(ctype, BooleanType):
            if raw == "" and toggle_empty:
                value = ctype.toggle(current)
            else:
                value = raw
        else:
            value = ctype.normalize(raw, current)
        self.doc.data.iat[row, col] = value
        return value

    # ----- column fields -----
    def commit_column_name(self, col: int, text: str, require_non_empty: bool = False) -> bool:
        if require_non_empty and not text:
            return False
        column = self.doc.columns[col]
        column.name = text
        column.width = max(column.width, column.min_width)
        return True

    def commit_column_width(self, col: int, text: str) -> bool:
        try:
            width = int(text.strip())
        except ValueError:
            return False
        column = self.doc.columns[col]
        column.width = max(width, column.min_width)
        return True

    def commit_column_type(self, col: int, text: str) -> bool:
        tag = parse_type_tag(text)
        if tag is None:
            return False
        # cell text is kept verbatim; it is reformatted at render time
        self.doc.columns[col].column_type = tag
        return True
