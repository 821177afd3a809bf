import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "vitab")
HISTORY_PATH = os.path.join(CONFIG_DIR, "history.log")
LOG_PATH = os.path.join(CONFIG_DIR, "vitab.log")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")

# default settings
DEFAULT_PATH_DEFAULT = "table.json"
PAGE_STEP_DEFAULT = 10
HISTORY_MAX_DEFAULT = 100
LOG_LEVEL_DEFAULT = "WARNING"
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)
    if not os.path.exists(HISTORY_PATH):
        try:
            with open(HISTORY_PATH, "w", encoding="utf-8") as f:
                f.write("")
        except OSError:
            pass


def load_config():
    cfg = {
        "DEFAULT_PATH": DEFAULT_PATH_DEFAULT,
        "PAGE_STEP": PAGE_STEP_DEFAULT,
        "HISTORY_MAX": HISTORY_MAX_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if os.path.exists(CONFIG_JSON):
        try:
            import json

            with open(CONFIG_JSON, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return cfg

        if isinstance(data, dict):
            path = data.get("default_path")
            if isinstance(path, str) and path.strip():
                cfg["DEFAULT_PATH"] = path.strip()

            step = data.get("page_step")
            if isinstance(step, int) and not isinstance(step, bool) and step > 0:
                cfg["PAGE_STEP"] = step

            max_items = data.get("history_max")
            if (
                isinstance(max_items, int)
                and not isinstance(max_items, bool)
                and max_items >= 0
            ):
                cfg["HISTORY_MAX"] = max_items

            level = data.get("log_level")
            if isinstance(level, str) and level.upper() in _LOG_LEVELS:
                cfg["LOG_LEVEL"] = level.upper()

    return cfg
