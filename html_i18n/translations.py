"""
Loading translation tables from JSON.

Two layouts are supported:

    locales/en.json  {"hello": "Hello", "nav": {"home": "Home"}}
    locales/fr.json  {"hello": "Bonjour"}

or a single file holding every language:

    translations.json  {"en": {"hello": "Hello"}, "fr": {"hello": "Bonjour"}}

A single-language file can also be named explicitly as ``fr=path/to/file.json``.

Nested objects inside a language table are flattened with dotted keys
(``nav.home``). Later sources override earlier ones key by key.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from html_i18n.config import TRANSLATIONS_SUFFIX
from html_i18n.errors import TranslationsLoadError
from html_i18n.models import TranslationTable


logger = logging.getLogger(__name__)


def flatten_keys(data: dict, path: Path, prefix: str = "") -> dict[str, str]:
    """Flatten nested objects to dotted keys; leaves must be strings."""
    flat: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(flatten_keys(value, path, full_key))
        elif isinstance(value, str):
            flat[full_key] = value
        else:
            raise TranslationsLoadError(
                path, f"value of {full_key!r} must be a string, got {type(value).__name__}"
            )
    return flat


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise TranslationsLoadError(path, "file not found")
    except json.JSONDecodeError as e:
        raise TranslationsLoadError(path, f"invalid JSON ({e.msg} at line {e.lineno})") from e


def load_translations_file(path: str | Path, language: str | None = None) -> dict[str, dict[str, str]]:
    """Load one JSON file.

    With ``language`` the file is that language's table. Otherwise a file
    whose top-level values are all objects is a full table (language ->
    key -> string), and any other object is the table of the language named
    by the file stem.
    """
    path = Path(path)
    data = _as_object(_read_json(path), path)

    if language:
        return {language: flatten_keys(data, path)}
    if data and all(isinstance(v, dict) for v in data.values()):
        return {lang: flatten_keys(values, path) for lang, values in data.items()}
    return {path.stem: flatten_keys(data, path)}


def load_translations_dir(path: str | Path) -> dict[str, dict[str, str]]:
    """Load every ``<language>.json`` file in a directory, sorted by name."""
    path = Path(path)
    if not path.is_dir():
        raise TranslationsLoadError(path, "not a directory")

    tables: dict[str, dict[str, str]] = {}
    for file in sorted(path.glob(f"*{TRANSLATIONS_SUFFIX}")):
        tables[file.stem] = flatten_keys(_as_object(_read_json(file), file), file)
    return tables


def _as_object(data: Any, path: Path) -> dict:
    if not isinstance(data, dict):
        raise TranslationsLoadError(path, "top-level JSON value must be an object")
    return data


def split_source(item: str | Path) -> tuple[str | None, Path]:
    """Split ``"fr=locales/fr.json"`` into ``("fr", Path("locales/fr.json"))``."""
    if isinstance(item, str) and "=" in item:
        language, _, path = item.partition("=")
        if language and "/" not in language and "\\" not in language:
            return language, Path(path)
    return None, Path(item)


def load_translations(paths: Iterable[str | Path]) -> TranslationTable:
    """Merge translation files and directories into one table.

    Args:
        paths: JSON files, directories of ``<language>.json`` files, or
            ``LANG=FILE`` strings

    Returns:
        TranslationTable with languages in first-seen order

    Raises:
        TranslationsLoadError: unreadable file, bad JSON or nothing loaded
    """
    merged: dict[str, dict[str, str]] = {}
    sources = []
    for item in paths:
        language, source = split_source(item)
        sources.append(source)
        if language:
            loaded = load_translations_file(source, language)
        elif source.is_dir():
            loaded = load_translations_dir(source)
        else:
            loaded = load_translations_file(source)
        for lang, values in loaded.items():
            merged.setdefault(lang, {}).update(values)
        logger.debug("Loaded %s from %s", ", ".join(loaded) or "nothing", source)

    if not merged:
        where = sources[0] if sources else Path(".")
        raise TranslationsLoadError(where, "no translations found")
    return TranslationTable(merged)
