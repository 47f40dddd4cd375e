"""Pre-DB bootstrap configuration. Zero imports from the rest of the app.

Stores user preferences that must be known before opening the DB (e.g. the
data folder holding finance.db and logs.txt).
Config lives in ~/.finance_tracker/config.json to avoid a bootstrapping problem.
"""
import json
import os
from pathlib import Path

CONFIG_DIR = Path.home() / ".finance_tracker"
CONFIG_FILE = CONFIG_DIR / "config.json"
APP_DIR = Path(__file__).resolve().parent.parent

DEFAULTS = {
    "appearance_mode": "system",
    "currency_symbol": "₹",
    "date_format": "YYYY-MM-DD",
}


def load_config() -> dict:
    """Returns {} on missing or corrupt file; never raises."""
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}
    except Exception:
        return {}


def save_config(config: dict) -> None:
    """Creates ~/.finance_tracker/ if needed; atomic write via .tmp + os.replace()."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    tmp = CONFIG_FILE.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2, ensure_ascii=False)
        os.replace(tmp, CONFIG_FILE)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def get_setting(key: str) -> str:
    """Return a preference from the config file, falling back to DEFAULTS."""
    value = load_config().get(key)
    return value if isinstance(value, str) and value else DEFAULTS.get(key, "")


def set_setting(key: str, value: str | None) -> None:
    config = load_config()
    if value is None:
        config.pop(key, None)
    else:
        config[key] = value
    save_config(config)


def get_data_folder() -> str:
    """Return config["data_folder"], or the application folder if not set."""
    folder = load_config().get("data_folder")
    return folder if folder else str(APP_DIR)


def set_data_folder(path: str | None) -> None:
    set_setting("data_folder", path)
