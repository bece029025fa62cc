"""Utility helpers for anagram keys, parsing, presentation, logging, and config."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Iterable

logger = logging.getLogger(__name__)


def _choose_app_dir() -> Path:
    """
    Pick a writable app directory.

    Preferred location is user home, with local workspace fallback when blocked.
    """
    preferred = Path.home() / ".anagram_dictionary_app"
    try:
        preferred.mkdir(parents=True, exist_ok=True)
        return preferred
    except OSError:
        fallback = Path(".anagram_dictionary_app")
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


APP_DIR = _choose_app_dir()
CONFIG_PATH = APP_DIR / "config.json"
LOG_PATH = APP_DIR / "app.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

NON_ALNUM_PATTERN = re.compile(r"[\W_]+")
WHITESPACE_PATTERN = re.compile(r"\S+")


def ensure_app_dirs() -> None:
    """Create the app directory if it does not already exist."""
    APP_DIR.mkdir(parents=True, exist_ok=True)


def setup_logging(level: str = "INFO", filename: Path | None = LOG_PATH) -> None:
    """Configure logging once per run, to the app log file or stdout when filename is None."""
    resolved = getattr(logging, str(level).upper(), logging.INFO)
    if filename is None:
        logging.basicConfig(level=resolved, format=LOG_FORMAT)
        return
    ensure_app_dirs()
    logging.basicConfig(filename=str(filename), level=resolved, format=LOG_FORMAT)


def load_config() -> dict[str, Any]:
    """Load config from the user home config file."""
    ensure_app_dirs()
    if not CONFIG_PATH.exists():
        return {}
    try:
        return json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        logging.exception("Failed to load config from %s", CONFIG_PATH)
        return {}


def save_config(config: dict[str, Any]) -> None:
    """Persist config to disk."""
    ensure_app_dirs()
    try:
        CONFIG_PATH.write_text(json.dumps(config, indent=2), encoding="utf-8")
    except Exception:
        logging.exception("Failed to save config to %s", CONFIG_PATH)


def compute_key(text: str) -> str | None:
    """
    Canonical anagram key for a text, or None when the text is unusable.

    Steps:
    1) Drop every non-alphanumeric character (punctuation, whitespace, symbols).
    2) Return None if nothing is left.
    3) Lowercase.
    4) Sort characters by code point.

    "God" and "dog" both produce "dgo"; "###" produces None.
    """
    filtered = NON_ALNUM_PATTERN.sub("", text)
    if not filtered:
        return None
    return "".join(sorted(filtered.lower()))


def parse_words(raw_text: str) -> list[str]:
    """Split text into whitespace-separated words."""
    if not raw_text or not raw_text.strip():
        return []
    return WHITESPACE_PATTERN.findall(raw_text)


def format_group(group: Iterable[str]) -> str:
    """Render a group as a bracketed, comma-separated list."""
    return "[" + ", ".join(group) + "]"


def describe_lookup(query: str, group: tuple[str, ...] | None) -> str:
    if group:
        return f"Matching anagrams for '{query}': {format_group(group)}."
    return f"No matching anagrams were found for '{query}'."


def log_insert(text: str, key: str | None, inserted: bool) -> None:
    """Insert trace hook that reports through the logging module."""
    if key is None:
        logger.warning("Failed to compute a valid anagram key for the text %r.", text)
    elif inserted:
        logger.debug("Inserted %r into the anagram dictionary under key %r.", text, key)
    else:
        logger.debug("%r already exists within the anagram dictionary.", text)


def log_lookup(text: str, key: str | None, matches: tuple[str, ...] | None) -> None:
    """Lookup trace hook that reports through the logging module."""
    if key is None:
        logger.warning("Failed to compute a valid anagram key for the text %r.", text)
    logger.info("%s", describe_lookup(text, matches))
