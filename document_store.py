import json
import logging
import os

from column_types import get_type
from document import Document

logger = logging.getLogger(__name__)


class DocumentLoadError(Exception):
    pass


class DocumentSaveError(Exception):
    pass


def invalid_cell_count(doc: Document, col: int) -> int:
    ctype = get_type(doc.columns[col].column_type)
    return int(sum(not ctype.validate(v) for v in doc.data.iloc[:, col]))


class DocumentStore:
    """Reads and writes documents as pretty-printed JSON files."""

    def load(self, path: str) -> Document:
        if not path or not os.path.exists(path):
            raise DocumentLoadError(f"No file to read: '{path}'")
        try:
            with open(path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DocumentLoadError(f"Problem reading json: {e}") from e

        try:
            doc = Document.from_dict(payload, path=path)
        except (ValueError, TypeError, KeyError) as e:
            raise DocumentLoadError(f"Problem reading json: {e}") from e

        logger.info(
            "loaded %s (%d columns, %d rows)", path, doc.col_count, doc.row_count
        )
        for col, column in enumerate(doc.columns):
            bad = invalid_cell_count(doc, col)
            if bad:
                logger.warning(
                    "%s: %d cell(s) in column %r are not valid %s values",
                    path,
                    bad,
                    column.name,
                    column.column_type,
                )
        return doc

    def save(self, doc: Document, path: str | None = None) -> str:
        target = path or doc.path
        if not target:
            raise DocumentSaveError("No file name")
        try:
            with open(target, "w", encoding="utf-8") as f:
                json.dump(doc.to_dict(), f, indent=2)
                f.write("\n")
        except OSError as e:
            raise DocumentSaveError(f"Problem saving json: {e}") from e
        logger.info("wrote %s", target)
        return target
