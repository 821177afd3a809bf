from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from column_types import format_cell, glyph_for
from document import Focus
from table_editor import COLUMN_FIELDS, Mode


@dataclass
class HeaderView:
    text: str
    width: int
    highlighted: bool = False


@dataclass
class CellView:
    text: str
    status: str


@dataclass
class RowView:
    index: int
    label: str
    cells: list[CellView]
    selected: bool = False


@dataclass
class FieldView:
    index: int
    label: str
    value: str
    status: str = "ok"
    editing: bool = False
    buffer: str = ""


@dataclass
class TableView:
    """Everything the painter needs for one frame; no curses types inside."""

    title: str
    subtitle: str
    focus: Focus
    view_label: str = "All"
    headers: list[HeaderView] = field(default_factory=list)
    rows: list[RowView] = field(default_factory=list)
    number_width: int = 1
    footer: str = ""
    heading: str = ""
    fields: list[FieldView] = field(default_factory=list)
    empty: bool = False


def fit_left(text: str, n: int, pad: str = " ") -> str:
    if n >= len(text):
        return text + pad * (n - len(text))
    if n < 2:
        return text[:n]
    return text[: n - 2] + ".."


def fit_right(text: str, n: int, pad: str = " ") -> str:
    if n > len(text):
        return pad * (n - len(text)) + text
    return text


def number_width(row_count: int) -> int:
    return len(str(max(1, row_count)))


def entries_label(count: int) -> str:
    return f"{count} {'entry' if count == 1 else 'entries'}"


def visible_row_range(curr_row: int, row_count: int, height: Optional[int]):
    if height is None or height <= 0 or row_count <= height:
        return 0, row_count
    start = 0 if curr_row < height else curr_row - height + 1
    return start, min(row_count, start + height)


def _headers(doc) -> list[HeaderView]:
    headers = []
    for idx, col in enumerate(doc.columns):
        label = col.name + glyph_for(col.column_type)
        highlighted = doc.focus is Focus.COLUMN and idx == doc.curr_col
        text = fit_left(label, max(col.width, len(label)))
        headers.append(HeaderView(text=text, width=col.width, highlighted=highlighted))
    return headers


def _rows(doc, height, today) -> list[RowView]:
    width = number_width(doc.row_count)
    start, end = visible_row_range(doc.curr_row, doc.row_count, height)
    rows = []
    for r in range(start, end):
        cells = []
        for c, col in enumerate(doc.columns):
            text, status = format_cell(doc.cell(r, c), col.column_type, today=today)
            cells.append(CellView(fit_left(text, col.width), status))
        rows.append(
            RowView(
                index=r,
                label=fit_right(f"{doc.row_label(r)} ", width + 1),
                cells=cells,
                selected=r == doc.curr_row,
            )
        )
    return rows


def _element_fields(editor, today) -> list[FieldView]:
    doc = editor.doc
    editing = editor.mode is Mode.TEXT or doc.focus is Focus.NEW_ELEMENT
    fields = []
    for c, col in enumerate(doc.columns):
        raw = doc.cell(doc.curr_row, c)
        _, status = format_cell(raw, col.column_type, today=today)
        index = c + 1
        active = editing and editor.field_index == index
        fields.append(
            FieldView(
                index=index,
                label=f"[{index}|{col.name}{glyph_for(col.column_type)}]",
                value=raw,
                status=status,
                editing=active,
                buffer=editor.text_buffer if active else "",
            )
        )
    return fields


def _column_fields(editor) -> list[FieldView]:
    doc = editor.doc
    col = doc.columns[doc.curr_col]
    editing = editor.mode is Mode.TEXT or doc.focus is Focus.NEW_COLUMN
    values = {"name": col.name, "width": str(col.width), "type": col.column_type}
    fields = []
    for i, name in enumerate(COLUMN_FIELDS, start=1):
        active = editing and editor.field_index == i
        fields.append(
            FieldView(
                index=i,
                label=f"[{i}|{name}]:",
                value=values[name],
                editing=active,
                buffer=editor.text_buffer if active else "",
            )
        )
    return fields


def build_view(editor, height: Optional[int] = None, today: Optional[date] = None) -> TableView:
    """Describe the frame for the editor's current focus.

    ``height`` bounds the number of grid rows; the window scrolls so the
    current row stays visible.
    """
    doc = editor.doc
    view = TableView(title=doc.title, subtitle=doc.subtitle, focus=doc.focus)
    view.number_width = number_width(doc.row_count)
    view.empty = doc.is_empty

    if doc.focus is Focus.TABLE:
        view.headers = _headers(doc)
        view.rows = _rows(doc, height, today)
        view.footer = entries_label(doc.row_count)
    elif doc.focus in (Focus.ELEMENT, Focus.NEW_ELEMENT):
        if not doc.is_empty:
            view.heading = f"Row {doc.curr_row + 1}"
            view.fields = _element_fields(editor, today)
    elif doc.focus in (Focus.COLUMN, Focus.NEW_COLUMN):
        view.headers = _headers(doc)
        if doc.col_count:
            view.fields = _column_fields(editor)
    elif doc.focus is Focus.VIEW:
        view.heading = "Views are not implemented yet"
    elif doc.focus is Focus.SORT:
        view.heading = "Sorting is not implemented yet"
    return view
