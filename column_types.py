import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

import pandas as pd


class Status:
    OK = "ok"
    EMPTY = "empty"
    FLAGGED = "flagged"
    PAST = "past"
    TODAY = "today"
    FUTURE = "future"


class ColumnType:
    """Formatting and validation for one column type tag."""

    tag = ""
    glyph = "!"
    min_width = 0

    def format(self, raw: str, today: Optional[date] = None) -> tuple[str, str]:
        return raw, Status.OK

    def validate(self, raw: str) -> bool:
        return self.format(raw)[1] != Status.FLAGGED

    def normalize(self, raw: str, current: str = "") -> str:
        return raw

    def __repr__(self):
        return f"ColumnType({self.tag!r})"


class StringType(ColumnType):
    tag = "string"
    glyph = "_"


class BooleanType(ColumnType):
    tag = "boolean"
    glyph = "?"
    min_width = 3

    CHECKED = "[X]"
    UNCHECKED = "[ ]"

    def format(self, raw, today=None):
        if raw in ("t", "T"):
            return self.CHECKED, Status.OK
        return self.UNCHECKED, Status.OK

    def toggle(self, current: str) -> str:
        return "f" if current == "t" else "t"


class NumberType(ColumnType):
    tag = "number"
    glyph = "#"

    # optional sign then digits only; no blanks, no "_" separators
    _INTEGER = re.compile(r"^[+-]?\d+$")

    def format(self, raw, today=None):
        if self._INTEGER.match(raw):
            return raw, Status.OK
        if raw == "":
            return "", Status.OK
        return "?", Status.FLAGGED


class DateType(ColumnType):
    tag = "date"
    glyph = "@"

    _CANONICAL = re.compile(r"^\d{2}/\d{2}/\d{4}$")
    _LOOSE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
    FORMAT = "%d/%m/%Y"

    def parse(self, raw: str) -> Optional[date]:
        if len(raw) != 10 or not self._CANONICAL.match(raw):
            return None
        parsed = pd.to_datetime(raw, format=self.FORMAT, errors="coerce")
        if pd.isna(parsed):
            return None
        return parsed.date()

    def format(self, raw, today=None):
        parsed = self.parse(raw)
        if parsed is None:
            return "?", Status.FLAGGED
        if today is None:
            today = pd.Timestamp.today().date()
        if parsed < today:
            return raw, Status.PAST
        if parsed == today:
            return raw, Status.TODAY
        return raw, Status.FUTURE

    def normalize(self, raw, current=""):
        m = self._LOOSE.match(raw)
        if not m:
            return raw
        day, month, year = m.groups()
        return f"{day:0>2}/{month:0>2}/{year}"


class MultiselectType(ColumnType):
    tag = "multiselect"
    glyph = "="
    SEPARATOR = ","

    def tokens(self, raw: str) -> list[str]:
        seen: list[str] = []
        for part in raw.split(self.SEPARATOR):
            token = part.strip()
            if token and token not in seen:
                seen.append(token)
        return seen

    def format(self, raw, today=None):
        tokens = self.tokens(raw)
        if not tokens:
            return "", Status.EMPTY
        return ", ".join(tokens), Status.OK


COLUMN_TYPES: dict[str, ColumnType] = {
    t.tag: t
    for t in (DateType(), StringType(), BooleanType(), MultiselectType(), NumberType())
}

TYPE_TAGS = list(COLUMN_TYPES.keys())


def get_type(tag: str) -> ColumnType:
    return COLUMN_TYPES[tag]


def parse_type_tag(text: str) -> Optional[str]:
    """Map user input such as ``Date`` or `` number`` onto a known tag."""
    key = (text or "").strip().lower()
    return key if key in COLUMN_TYPES else None


def format_cell(raw: str, tag: str, today: Optional[date] = None) -> tuple[str, str]:
    return get_type(tag).format("" if raw is None else str(raw), today=today)


def glyph_for(tag: str) -> str:
    return get_type(tag).glyph


@dataclass
class Column:
    name: str = ""
    width: int = 1
    column_type: str = "string"

    @property
    def min_width(self) -> int:
        return len(self.name) + 1

    def to_dict(self) -> dict:
        return {"name": self.name, "width": self.width, "column_type": self.column_type}

    @classmethod
    def from_dict(cls, data: dict) -> "Column":
        raw_tag = data.get("column_type", data.get("type", "string"))
        tag = parse_type_tag(raw_tag) if isinstance(raw_tag, str) else None
        if tag is None:
            raise ValueError(
                f"Unknown column type {raw_tag!r} (use one of: {', '.join(TYPE_TAGS)})"
            )
        name = str(data.get("name", ""))
        width = int(data.get("width", len(name) + 1))
        return cls(name=name, width=max(width, len(name) + 1), column_type=tag)
