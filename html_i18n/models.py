"""
Core data models for html-i18n.

This module defines the values that flow through the generator:
- TranslationTable: read-only language -> (key -> string) mapping
- TranslationMeta / DocumentMeta: context handed to caller hooks
- OutputArtifact: one rendered page for one language

The table is fixed for a whole run. Documents themselves are plain
BeautifulSoup trees (see html_i18n.documents) and are not modelled here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from html_i18n.errors import ConfigError
from html_i18n.writer import output_path_for


TranslationKey = str
Translations = Mapping[TranslationKey, str]


class TranslationTable(Mapping[str, Translations]):
    """Immutable mapping of language code to its key/value table.

    The declared languages are exactly the keys of the mapping, in the
    order they were given.

    Usage:
        table = TranslationTable({"en": {"hello": "Hello"}, "fr": {"hello": "Bonjour"}})
        table.languages           # ["en", "fr"]
        table.lookup("fr", "hello")  # "Bonjour"
        table.lookup("fr", "bye")    # None
    """

    def __init__(self, data: Mapping[str, Mapping[TranslationKey, str]]):
        if not data:
            raise ConfigError("translations must declare at least one language")

        tables: dict[str, Translations] = {}
        for language, values in data.items():
            if not isinstance(language, str) or not language:
                raise ConfigError(f"invalid language code: {language!r}")
            if not isinstance(values, Mapping):
                raise ConfigError(f"translations for {language!r} must be a mapping")
            for key, value in values.items():
                if not isinstance(key, str) or not isinstance(value, str):
                    raise ConfigError(
                        f"translations for {language!r} must map strings to strings "
                        f"(got {key!r}: {type(value).__name__})"
                    )
            tables[language] = MappingProxyType(dict(values))

        self._tables = tables

    def __getitem__(self, language: str) -> Translations:
        return self._tables[language]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    def __repr__(self) -> str:
        sizes = ", ".join(f"{lang}={len(t)}" for lang, t in self._tables.items())
        return f"TranslationTable({sizes})"

    @property
    def languages(self) -> list[str]:
        return list(self._tables)

    def lookup(self, language: str, key: TranslationKey) -> Optional[str]:
        """Return the value for ``key`` or None when the language lacks it."""
        return self._tables[language].get(key)

    def missing_keys(self, language: str, keys: Iterable[TranslationKey]) -> list[TranslationKey]:
        """Keys from ``keys`` (deduplicated, order kept) absent for ``language``."""
        table = self._tables[language]
        seen: set[str] = set()
        missing = []
        for key in keys:
            if key in seen:
                continue
            seen.add(key)
            if key not in table:
                missing.append(key)
        return missing


@dataclass(frozen=True)
class DocumentMeta:
    """Context passed to the before/after document hooks."""
    language: str
    translations: Translations


@dataclass(frozen=True)
class TranslationMeta:
    """Context passed to the format and modify-element hooks."""
    key: TranslationKey
    language: str
    translations: Translations


@dataclass
class OutputArtifact:
    """A serialized page for one (source file, language) pair."""
    source: Path
    language: str
    html: str
    destination: Path = field(init=False)

    def __post_init__(self):
        self.source = Path(self.source)
        self.destination = output_path_for(self.source, self.language)
