# ~/Apps/vitab/table_editor.py
import curses
from enum import Enum

from command_interpreter import CommandInterpreter
from command_line import CommandLine
from document import Document, Focus
from editor_counts import EditorCounts

ESC = 27
ENTER_KEYS = (10, 13, curses.KEY_ENTER)
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 127, 8)

COLUMN_FIELDS = ("name", "width", "type")


class Mode(Enum):
    NORMAL = "Normal"
    TEXT = "Text"
    COMMAND = "Command"


class TableEditor:
    """Modal key handling for a Document.

    Keys are dispatched on the input mode first and then, in Normal mode,
    through the binding table of the current focus. A handler returns True
    when the pending count must survive the key (digits, and entries into
    Text mode where the count names the field being edited).
    """

    def __init__(self, doc: Document, interpreter=None, page_step=10, history=None):
        self.doc = doc
        self.interpreter = interpreter or CommandInterpreter()
        self.page_step = page_step
        self.history = history

        self.mode = Mode.NORMAL
        self.counts = EditorCounts()
        self.text_buffer = ""
        self.command = CommandLine()
        if history is not None:
            self.command.set_history(history.items)

        # per-key feedback, cleared when the next key arrives
        self.message = None
        self.error = None
        self.quit_requested = False

        table_keys = {
            ord("j"): self._row_down,
            ord("k"): self._row_up,
            ord("J"): self._page_down,
            ord("K"): self._page_up,
            ord("G"): self._goto_row,
            ord("c"): self._open_columns,
            ord("s"): self._open_sort,
            ord("v"): self._open_view,
            ord("n"): self._toggle_numbering,
            ord("i"): self._new_row,
            ord("d"): self._delete_row,
            ord("="): self._autosize_all,
        }
        element_keys = {
            ord("q"): self._to_table,
            ESC: self._to_table,
            ord("j"): self._row_down,
            ord("k"): self._row_up,
            ord("d"): self._delete_row,
        }
        column_keys = {
            ord("q"): self._to_table,
            ESC: self._to_table,
            ord("c"): self._to_table,
            ord("h"): self._col_prev,
            ord("l"): self._col_next,
            ord("H"): self._move_col_left,
            ord("L"): self._move_col_right,
            ord("="): self._autosize_current,
            ord("+"): self._grow_col,
            ord("-"): self._shrink_col,
            ord("i"): self._new_column,
            ord("d"): self._delete_column,
        }
        stub_keys = {
            ord("q"): self._to_table,
            ESC: self._to_table,
        }
        for key in ENTER_KEYS:
            table_keys[key] = self._open_row
            element_keys[key] = self._edit_element_field
            column_keys[key] = self._edit_column_field

        self._normal_keys = {
            Focus.TABLE: table_keys,
            Focus.ELEMENT: element_keys,
            Focus.COLUMN: column_keys,
            Focus.VIEW: stub_keys,
            Focus.SORT: stub_keys,
        }
        self._modes = {
            Mode.NORMAL: self._handle_normal,
            Mode.TEXT: self._handle_text,
            Mode.COMMAND: self._handle_command,
        }
        self._text_commits = {
            Focus.ELEMENT: self._commit_element_field,
            Focus.NEW_ELEMENT: self._commit_new_element_field,
            Focus.COLUMN: self._commit_column_field,
            Focus.NEW_COLUMN: self._commit_new_column_field,
        }

    # ---------- public API ----------
    @property
    def pending_count(self) -> int:
        return self.counts.pending

    @property
    def field_index(self) -> int:
        """1-based field under edit while in Text mode."""
        return self.counts.pending

    def handle_key(self, ch: int):
        self.message = None
        self.error = None
        preserve = self._modes[self.mode](ch)
        if not preserve:
            self.counts.reset()

    # ---------- normal mode ----------
    def _handle_normal(self, ch) -> bool:
        if ord("0") <= ch <= ord("9"):
            self.counts.push_digit(ch - ord("0"))
            return True
        if ch in BACKSPACE_KEYS:
            self.counts.pop_digit()
            return True
        if ch == ord(":"):
            self.mode = Mode.COMMAND
            self.command.activate()
            return False

        action = self._normal_keys.get(self.doc.focus, {}).get(ch)
        if action is None:
            return False
        return bool(action())

    def _enter_text(self, field: int) -> bool:
        self.counts.pending = field
        self.text_buffer = ""
        self.mode = Mode.TEXT
        return True

    def _to_table(self):
        self.doc.to_table()

    def _open_view(self):
        self.doc.to_view()

    def _open_sort(self):
        self.doc.to_sort()

    def _row_down(self):
        self.doc.navigate_row(self.counts.pending, 1)

    def _row_up(self):
        self.doc.navigate_row(-self.counts.pending, -1)

    def _page_down(self):
        self.doc.navigate_row(self.counts.pending, self.page_step)

    def _page_up(self):
        self.doc.navigate_row(-self.counts.pending, -self.page_step)

    def _goto_row(self):
        self.doc.goto_row(self.counts.pending)

    def _toggle_numbering(self):
        self.doc.toggle_numbering_mode()

    def _open_row(self):
        if not self.doc.open_current_row():
            self.message = "No rows"

    def _open_columns(self):
        self.doc.open_columns()

    def _new_row(self):
        if not self.doc.begin_new_row():
            self.message = "No columns"
            return False
        return self._enter_text(1)

    def _delete_row(self):
        if self.doc.is_empty:
            self.message = "No rows"
        self.doc.delete_current_row()

    def _autosize_all(self):
        self.doc.ops.autosize_columns()

    def _edit_element_field(self):
        if self.doc.is_empty:
            self.message = "No rows"
            return False
        field = self.counts.pending
        if 1 <= field <= self.doc.col_count:
            return self._enter_text(field)
        return False

    # ----- column focus -----
    def _col_prev(self):
        self.doc.navigate_col(-(self.counts.pending or 1))

    def _col_next(self):
        self.doc.navigate_col(self.counts.pending or 1)

    def _move_col_left(self):
        if self.doc.col_count:
            self.doc.ops.move_column(self.doc.curr_col, "left")

    def _move_col_right(self):
        if self.doc.col_count:
            self.doc.ops.move_column(self.doc.curr_col, "right")

    def _autosize_current(self):
        if self.doc.col_count:
            self.doc.ops.autosize_column(self.doc.curr_col)

    def _grow_col(self):
        if self.doc.col_count:
            self.doc.ops.resize_column(self.doc.curr_col, self.counts.pending or 1, "grow")

    def _shrink_col(self):
        if self.doc.col_count:
            self.doc.ops.resize_column(self.doc.curr_col, self.counts.pending or 1, "shrink")

    def _new_column(self):
        self.doc.begin_new_column()
        return self._enter_text(1)

    def _delete_column(self):
        if not self.doc.col_count:
            self.message = "No columns"
        self.doc.delete_current_column()

    def _edit_column_field(self):
        field = self.counts.pending
        if self.doc.col_count and 1 <= field <= len(COLUMN_FIELDS):
            return self._enter_text(field)
        return False

    # ---------- text mode ----------
    def _handle_text(self, ch) -> bool:
        if ch in ENTER_KEYS:
            commit = self._text_commits.get(self.doc.focus)
            if commit is None:
                self._leave_text()
                return False
            return commit()

        if ch == ESC:
            self._leave_text()
            self.doc.to_table()
            return False

        if ch in BACKSPACE_KEYS:
            self.text_buffer = self.text_buffer[:-1]
            return True

        # arrows and other function keys are not text
        if curses.KEY_MIN <= ch <= curses.KEY_MAX:
            return True

        if 32 <= ch <= 126 or (160 <= ch <= 0x10FFFF and chr(ch).isprintable()):
            self.text_buffer += chr(ch)
        return True

    def _leave_text(self):
        self.text_buffer = ""
        self.mode = Mode.NORMAL

    def _commit_element_field(self) -> bool:
        self.doc.ops.commit_cell(
            self.doc.curr_row, self.field_index - 1, self.text_buffer
        )
        self._leave_text()
        return False

    def _commit_new_element_field(self) -> bool:
        field = self.field_index
        row = self.doc.row_count - 1
        self.doc.ops.commit_cell(row, field - 1, self.text_buffer, toggle_empty=False)
        self.text_buffer = ""
        if field < self.doc.col_count:
            self.counts.pending = field + 1
            return True
        self.doc.curr_row = row
        self.doc.to_table()
        self._leave_text()
        return False

    def _commit_column_field(self) -> bool:
        ops, col, text = self.doc.ops, self.doc.curr_col, self.text_buffer
        field = COLUMN_FIELDS[self.field_index - 1]
        if field == "name":
            ok = ops.commit_column_name(col, text)
        elif field == "width":
            ok = ops.commit_column_width(col, text)
        else:
            ok = ops.commit_column_type(col, text)
        if not ok:
            # rejected; stay on the field so the input can be corrected
            return True
        self._leave_text()
        return False

    def _commit_new_column_field(self) -> bool:
        ops, col, text = self.doc.ops, self.doc.curr_col, self.text_buffer
        field = COLUMN_FIELDS[self.field_index - 1]
        if field == "name":
            if not ops.commit_column_name(col, text, require_non_empty=True):
                return True
            column = self.doc.columns[col]
            column.width = column.min_width
        elif field == "width":
            if text and not ops.commit_column_width(col, text):
                return True
        else:
            if not ops.commit_column_type(col, text):
                return True
            self.doc.curr_col = col
            self.doc.to_table()
            self._leave_text()
            return False

        self.text_buffer = ""
        self.counts.pending = self.field_index + 1
        return True

    # ---------- command mode ----------
    def _handle_command(self, ch) -> bool:
        result = self.command.handle_key(ch)
        if result == "submit":
            self._run_command(self.command.get_buffer())
        elif result == "cancel":
            self.mode = Mode.NORMAL
        return False

    def _run_command(self, line: str):
        focus = self.doc.focus
        result = self.interpreter.execute(line, self.doc)
        if result.document is not self.doc:
            self.doc = result.document
        else:
            self.doc.focus = focus

        self.message = result.message
        self.error = result.error
        if result.quit:
            self.quit_requested = True

        line = line.strip()
        if line and self.history is not None and result.error is None:
            self.history.append(line)
            self.history.persist(line)
            self.command.set_history(self.history.items)

        self.command.reset()
        self.mode = Mode.NORMAL
