"""
Project-wide constants and defaults.

This module defines the values shared by the pipeline, the loaders and the
command-line interface so that every entry point behaves the same way when an
option is left unset.

Module Contents:
    APP_NAME: Application name for display purposes
    DEFAULT_PATTERN: Glob pattern used when no ``glob`` option is configured
    DEFAULT_SELECTOR: CSS selector used by the CLI
    DEFAULT_KEY_ATTRIBUTE: Attribute holding the translation key (CLI)
    DEFAULT_PARSER: BeautifulSoup tree builder
    ENCODING: Encoding used to read templates and write artifacts
    TRANSLATIONS_SUFFIX: Suffix of translation files inside a directory

Example:
    >>> from html_i18n.config import DEFAULT_PATTERN
    >>> print(f"Scanning {DEFAULT_PATTERN}")
"""

# Application name for display and identification
APP_NAME = "html-i18n"

# Only templates directly under the output directory are picked up
DEFAULT_PATTERN = "*.html"

DEFAULT_SELECTOR = "[data-i18n]"
DEFAULT_KEY_ATTRIBUTE = "data-i18n"

# Pure-python builder shipped with bs4; lxml/html5lib can be selected instead
DEFAULT_PARSER = "html.parser"

ENCODING = "utf-8"

TRANSLATIONS_SUFFIX = ".json"
