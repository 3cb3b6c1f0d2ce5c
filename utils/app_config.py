"""Pre-storage bootstrap configuration. Zero imports from the rest of the app
apart from constants.

Holds the preferences needed before the transaction store is opened (which
backend, where its files live). Config lives in ~/.moneytracker/config.json,
or under $MONEY_TRACKER_HOME when that is set.
"""
import json
import os
from pathlib import Path

from utils.constants import APPEARANCE_MODES, BACKENDS, DEFAULT_BACKEND

CONFIG_DIR = Path(os.environ.get("MONEY_TRACKER_HOME") or Path.home() / ".moneytracker")
CONFIG_FILE = CONFIG_DIR / "config.json"


def load_config() -> dict:
    """Returns {} on missing or corrupt file; never raises."""
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            config = json.load(f)
    except Exception:
        return {}
    return config if isinstance(config, dict) else {}


def save_config(config: dict) -> None:
    """Creates the config dir if needed; atomic write via .tmp + os.replace()."""
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    tmp = CONFIG_FILE.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, CONFIG_FILE)
    except Exception:
        try:
            tmp.unlink(missing_ok=True)
        except Exception:
            pass


def get_setting(key: str, default=None):
    return load_config().get(key, default)


def set_setting(key: str, value) -> None:
    """Store value under key; None removes the key."""
    config = load_config()
    if value is None:
        config.pop(key, None)
    else:
        config[key] = value
    save_config(config)


def get_data_folder() -> str | None:
    """Return config["data_folder"] or None if not set."""
    return get_setting("data_folder")


def set_data_folder(path: str | None) -> None:
    set_setting("data_folder", path)


def get_backend() -> str:
    backend = get_setting("backend", DEFAULT_BACKEND)
    return backend if backend in BACKENDS else DEFAULT_BACKEND


def set_backend(backend: str) -> None:
    if backend not in BACKENDS:
        raise ValueError(f"Unknown storage backend: {backend}")
    set_setting("backend", backend)


def get_appearance_mode() -> str:
    mode = get_setting("appearance_mode", "system")
    return mode if mode in APPEARANCE_MODES else "system"


def set_appearance_mode(mode: str) -> None:
    if mode not in APPEARANCE_MODES:
        raise ValueError(f"Unknown appearance mode: {mode}")
    set_setting("appearance_mode", mode)
