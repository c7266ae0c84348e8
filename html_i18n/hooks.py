"""
Ready-made hooks for common setups.

    from html_i18n.hooks import attribute_key, set_document_lang

    generate_html_i18n(
        "dist",
        translations=table,
        selector="[data-i18n]",
        get_translation_key=attribute_key("data-i18n"),
        modify_document_after=set_document_lang,
    )
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from bs4 import BeautifulSoup, Tag

from html_i18n.models import DocumentMeta, TranslationKey, Translations


def attribute_key(attribute: str) -> Callable[[Tag], Optional[TranslationKey]]:
    """Build a key extractor reading ``attribute`` from each element."""

    def get_translation_key(element: Tag) -> Optional[TranslationKey]:
        value = element.get(attribute)
        if isinstance(value, list):
            # multi-valued attributes such as class come back as lists
            value = " ".join(value)
        return value or None

    return get_translation_key


def set_document_lang(document: BeautifulSoup, meta: DocumentMeta) -> None:
    """Set ``<html lang>`` to the language being generated.

    Documents without an ``<html>`` element are left untouched.
    """
    root = document.find("html")
    if root is not None:
        root["lang"] = meta.language


def ignore_languages(languages: Iterable[str]) -> Callable[[TranslationKey, str, Translations], bool]:
    """Missing-translation filter silencing warnings for ``languages``."""
    ignored = frozenset(languages)

    def missing_translation_verbose_filter(key: TranslationKey, language: str, translations: Translations) -> bool:
        return language not in ignored

    return missing_translation_verbose_filter
