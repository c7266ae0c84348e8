"""
html-i18n: per-language static HTML pages from translation tables

Walks built HTML templates, looks up a translation key on every selected
element, substitutes the localized text and writes one copy per language:

    dist/index.html  ->  dist/en/index.html, dist/fr/index.html

License: MIT
"""

__version__ = "0.1.0"

from html_i18n.errors import ConfigError, HookError, HtmlI18nError, TranslationsLoadError
from html_i18n.models import DocumentMeta, OutputArtifact, TranslationMeta, TranslationTable
from html_i18n.pipeline import GenerateConfig, GenerateResult, HtmlI18nGenerator, generate_html_i18n

__all__ = [
    "ConfigError",
    "DocumentMeta",
    "GenerateConfig",
    "GenerateResult",
    "HookError",
    "HtmlI18nError",
    "HtmlI18nGenerator",
    "OutputArtifact",
    "TranslationMeta",
    "TranslationTable",
    "TranslationsLoadError",
    "generate_html_i18n",
]
