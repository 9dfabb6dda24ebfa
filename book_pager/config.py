"""
Config: default paper format, automatic-mode page budget and page store location,
kept in .book_pager.json. Paths are relative to the config file directory.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict

from book_pager.formats import UnknownPaperFormatError, get_format
from book_pager.models import DEFAULT_CHARS_PER_PAGE, PaperFormat

CONFIG_FILENAME = ".book_pager.json"
CONFIG_ENV = "BOOK_PAGER_CONFIG"
DEFAULT_PAPER_FORMAT = PaperFormat.A4.value
DEFAULT_STORE_PATH = "pages.json"


def _find_repo_root() -> Path | None:
    """Walk up from package dir to find a directory containing pyproject.toml or .book_pager.json."""
    try:
        start = Path(__file__).resolve().parent
    except NameError:
        return None
    for parent in [start, *start.parents]:
        if (parent / "pyproject.toml").exists() or (parent / CONFIG_FILENAME).exists():
            return parent
    return None


def get_config_path() -> Path:
    """Path to the config file. Env BOOK_PAGER_CONFIG wins; else cwd; else repo root; else cwd for create."""
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path).resolve()
    cwd_file = (Path.cwd() / CONFIG_FILENAME).resolve()
    if cwd_file.exists():
        return cwd_file
    repo = _find_repo_root()
    if repo is not None and (repo / CONFIG_FILENAME).exists():
        return repo / CONFIG_FILENAME
    return cwd_file


def _default_config() -> Dict[str, Any]:
    return {
        "paper_format": DEFAULT_PAPER_FORMAT,
        "chars_per_page": DEFAULT_CHARS_PER_PAGE,
        "store_path": DEFAULT_STORE_PATH,
    }


def _find_config_file() -> Path | None:
    """Return path to existing .book_pager.json, or None."""
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        p = Path(env_path).resolve()
        return p if p.exists() else None
    for d in [Path.cwd(), *Path.cwd().parents]:
        cf = (d / CONFIG_FILENAME).resolve()
        if cf.exists():
            return cf
    repo = _find_repo_root()
    if repo is not None:
        rp = (repo / CONFIG_FILENAME).resolve()
        if rp.exists():
            return rp
    return None


def _sanitize(data: Dict[str, Any]) -> Dict[str, Any]:
    """Replace missing or invalid values with defaults."""
    defaults = _default_config()
    try:
        data["paper_format"] = get_format(data.get("paper_format", DEFAULT_PAPER_FORMAT)).name.value
    except UnknownPaperFormatError:
        data["paper_format"] = defaults["paper_format"]
    budget = data.get("chars_per_page")
    if not isinstance(budget, int) or isinstance(budget, bool) or budget <= 0:
        data["chars_per_page"] = defaults["chars_per_page"]
    if not isinstance(data.get("store_path"), str) or not data["store_path"].strip():
        data["store_path"] = defaults["store_path"]
    return data


def load_config() -> Dict[str, Any]:
    """Load config from file or return defaults. Never raises."""
    path = _find_config_file()
    if path is None:
        out = _default_config()
        out["_config_file"] = str(get_config_path())
        out["_no_file"] = True
        return out
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError):
        out = _default_config()
        out["_config_file"] = str(path)
        out["_load_error"] = True
        return out
    if not isinstance(data, dict):
        data = {}
    data = _sanitize(data)
    data["_config_file"] = str(path)
    data["_no_file"] = False
    return data


def save_config(data: Dict[str, Any]) -> None:
    """Save config. Only writes paper_format, chars_per_page, store_path."""
    path = data.get("_config_file")
    path = Path(path) if path else get_config_path()
    to_save = {
        "paper_format": data.get("paper_format", DEFAULT_PAPER_FORMAT),
        "chars_per_page": data.get("chars_per_page", DEFAULT_CHARS_PER_PAGE),
        "store_path": data.get("store_path", DEFAULT_STORE_PATH),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(to_save, f, indent=2)


def _config_base_path(data: Dict[str, Any]) -> Path:
    cf = data.get("_config_file")
    return Path(cf).parent if cf else Path.cwd()


def get_store_path() -> Path:
    """Resolved page store path."""
    data = load_config()
    return (_config_base_path(data) / data["store_path"]).resolve()


def get_paper_format() -> PaperFormat:
    return PaperFormat(load_config()["paper_format"])


def get_chars_per_page() -> int:
    return load_config()["chars_per_page"]


def get_config() -> Dict[str, Any]:
    """Full config with resolved store path."""
    data = load_config()
    data["_resolved_store_path"] = str((_config_base_path(data) / data["store_path"]).resolve())
    return data


def _writable_config() -> Dict[str, Any]:
    data = load_config()
    if data.get("_load_error"):
        fresh = _default_config()
        fresh["_config_file"] = data["_config_file"]
        return fresh
    return data


def set_paper_format(name: str) -> Dict[str, Any]:
    """Set the default paper format. Saves config."""
    try:
        spec = get_format(name)
    except UnknownPaperFormatError as e:
        return {"ok": False, "error": str(e.args[0]), "config": get_config()}
    data = _writable_config()
    data["paper_format"] = spec.name.value
    save_config(data)
    return {"ok": True, "config": get_config()}


def set_chars_per_page(chars: int) -> Dict[str, Any]:
    """Set the automatic-mode page budget. Saves config."""
    if chars <= 0:
        return {"ok": False, "error": f"Page budget must be positive, got {chars}.", "config": get_config()}
    data = _writable_config()
    data["chars_per_page"] = chars
    save_config(data)
    return {"ok": True, "config": get_config()}


def set_store_path(path: str) -> Dict[str, Any]:
    """Set the page store file (relative to the config file directory). Saves config."""
    path = (path or "").strip()
    if not path:
        return {"ok": False, "error": "Store path cannot be empty.", "config": get_config()}
    data = _writable_config()
    data["store_path"] = path
    save_config(data)
    return {"ok": True, "config": get_config()}
