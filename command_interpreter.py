import logging
from dataclasses import dataclass
from typing import Optional

from document import Document
from document_store import DocumentLoadError, DocumentSaveError, DocumentStore

logger = logging.getLogger(__name__)


class CommandError(Exception):
    pass


@dataclass
class CommandResult:
    document: Document
    message: Optional[str] = None
    error: Optional[str] = None
    quit: bool = False


HELP_TEXT = (
    "w|write [path]  q|quit  x  o|open <path>  t|title <text>  "
    "s|subtitle <text>  wf|whatfile  h|help"
)


class CommandInterpreter:
    """Runs ``:`` command lines against a document.

    Commands are global: they never look at focus or mode, and every
    effect is returned in a ``CommandResult`` instead of being applied to
    shared state.
    """

    def __init__(self, store: Optional[DocumentStore] = None):
        self.store = store or DocumentStore()
        self._handlers = {
            "w": self._write,
            "write": self._write,
            "q": self._quit,
            "quit": self._quit,
            "x": self._write_quit,
            "o": self._open,
            "open": self._open,
            "t": self._title,
            "title": self._title,
            "s": self._subtitle,
            "subtitle": self._subtitle,
            "wf": self._whatfile,
            "whatfile": self._whatfile,
            "h": self._help,
            "help": self._help,
        }

    def execute(self, line: str, doc: Document) -> CommandResult:
        text = (line or "").lstrip()
        tokens = text.split()
        if not tokens:
            return CommandResult(doc)

        verb, args = tokens[0], tokens[1:]
        rest = text[len(verb) :].lstrip()
        handler = self._handlers.get(verb)
        if handler is None:
            return CommandResult(doc, error=f"Error: Unknown command '{verb}'")

        try:
            result = handler(doc, args, rest)
        except CommandError as e:
            logger.info("command %r failed: %s", verb, e)
            return CommandResult(doc, error=str(e))
        logger.debug("command %r ok", verb)
        return result

    # ---------- verbs ----------
    def _save(self, doc: Document, path: Optional[str] = None) -> str:
        try:
            return self.store.save(doc, path)
        except DocumentSaveError as e:
            raise CommandError(str(e)) from e

    def _write(self, doc, args, rest):
        if len(args) > 1:
            raise CommandError("Usage Error: Extra argument(s) to '(w|write) [path]'")
        previous = doc.path
        if args:
            doc.path = args[0]
        try:
            written = self._save(doc)
        except CommandError:
            doc.path = previous
            raise
        return CommandResult(doc, message=f"'{written}' written")

    def _quit(self, doc, args, rest):
        if args:
            raise CommandError("Usage Error: Extra argument(s) to '(q|quit)'")
        return CommandResult(doc, quit=True)

    def _write_quit(self, doc, args, rest):
        if args:
            raise CommandError("Usage Error: Extra argument(s) to 'x'")
        written = self._save(doc)
        return CommandResult(doc, message=f"'{written}' written", quit=True)

    def _open(self, doc, args, rest):
        if not args:
            raise CommandError(
                "Usage Error: Insufficient arguments to '(o|open) <filepath>'"
            )
        if len(args) > 1:
            raise CommandError("Usage Error: Extra argument(s) to '(o|open) <filepath>'")
        try:
            opened = self.store.load(args[0])
        except DocumentLoadError as e:
            raise CommandError(str(e)) from e
        return CommandResult(opened, message=f"'{args[0]}' opened")

    def _title(self, doc, args, rest):
        doc.title = rest
        return CommandResult(doc)

    def _subtitle(self, doc, args, rest):
        doc.subtitle = rest
        return CommandResult(doc)

    def _whatfile(self, doc, args, rest):
        return CommandResult(doc, message=doc.path)

    def _help(self, doc, args, rest):
        return CommandResult(doc, message=HELP_TEXT)
