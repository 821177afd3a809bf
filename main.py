import curses
import logging
import os
import sys

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")

from _version import __version__
from config_paths import LOG_PATH, ensure_config_dirs, load_config
from document_store import DocumentLoadError, DocumentStore

USAGE = (
    "vitab - modal terminal table editor\n\n"
    "Usage:\n  vitab [path]\n  vitab -v\n  vitab -h\n"
)


def _configure_logging(level: str):
    try:
        ensure_config_dirs()
        handler = logging.FileHandler(LOG_PATH, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)


def parse_args(args, config):
    """Return (action, path) where action is 'version', 'help' or 'edit'."""
    if "-v" in args or "-V" in args:
        return "version", None
    if "-h" in args or len(args) > 1:
        return "help", None
    path = args[0] if args else config.get("DEFAULT_PATH", "table.json")
    return "edit", path


def main():
    config = load_config()
    action, path = parse_args(sys.argv[1:], config)

    if action == "version":
        print(__version__)
        return
    if action == "help":
        print(USAGE)
        return

    _configure_logging(config.get("LOG_LEVEL", "WARNING"))

    try:
        doc = DocumentStore().load(path)
    except DocumentLoadError as e:
        print(f"Load failed: {e}", file=sys.stderr)
        sys.exit(1)

    from orchestrator import Orchestrator

    def curses_main(stdscr):
        Orchestrator(stdscr, doc, config).run()

    curses.wrapper(curses_main)


if __name__ == "__main__":
    main()
