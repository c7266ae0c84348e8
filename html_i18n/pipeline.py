"""
Main generation pipeline for html-i18n.

This module turns a directory of built HTML templates into one translated
copy per language:
1. Discover templates in the output directory
2. For each language, for each template: parse a fresh document
3. Run the before-document hook
4. For each selected element: extract key, resolve, format, substitute, modify
5. Run the after-document hook
6. Serialize and write to <dir>/<language>/<name>
7. Optionally delete the templates once every language is written

Design:
- Hooks are plain callables stored on GenerateConfig
- A failing hook aborts the whole run (HookError)
- A missing translation never fails; it renders as an empty string
- Progress callbacks for CLI integration
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Sequence, Union

import soupsieve
from bs4 import BeautifulSoup, FeatureNotFound, Tag

from html_i18n.config import DEFAULT_PARSER, ENCODING
from html_i18n.diagnostics import MISSING_TRANSLATION, DiagnosticEvent, DiagnosticsReporter
from html_i18n.discovery import discover_files, resolve_patterns
from html_i18n.documents import (
    parse_document,
    select_elements,
    serialize_document,
    set_inner_html,
)
from html_i18n.errors import ConfigError, HookError
from html_i18n.models import (
    DocumentMeta,
    OutputArtifact,
    TranslationKey,
    TranslationMeta,
    Translations,
    TranslationTable,
)
from html_i18n.writer import delete_sources, is_safe_language_path, write_artifact


logger = logging.getLogger(__name__)

# Type aliases for the hook slots
GlobFunction = Callable[[Path], Union[str, Sequence[str]]]
KeyExtractor = Callable[[Tag], Optional[TranslationKey]]
FormatHook = Callable[[str, TranslationMeta], str]
ElementHook = Callable[[Tag, str, TranslationMeta], None]
DocumentHook = Callable[[BeautifulSoup, DocumentMeta], None]
MissingFilter = Callable[[TranslationKey, str, Translations], bool]
ProgressCallback = Callable[[str, float], None]


def _always(key: TranslationKey, language: str, translations: Translations) -> bool:
    return True


@dataclass
class GenerateConfig:
    """Configuration for the generator.

    ``translations``, ``selector`` and ``get_translation_key`` are required;
    every other hook is optional and skipped when None.
    """
    translations: Union[TranslationTable, Mapping[str, Mapping[str, str]]]
    selector: str
    get_translation_key: KeyExtractor

    # Discovery
    glob: Optional[GlobFunction] = None

    # Substitution hooks
    format_translation: Optional[FormatHook] = None
    modify_element: Optional[ElementHook] = None
    modify_document_before: Optional[DocumentHook] = None
    modify_document_after: Optional[DocumentHook] = None

    # Output
    delete_source_html_files: bool = False

    # Diagnostics
    verbose: bool = True
    missing_translation_verbose_filter: MissingFilter = _always

    # Parsing
    parser: str = DEFAULT_PARSER
    encoding: str = ENCODING

    def __post_init__(self):
        if not isinstance(self.translations, TranslationTable):
            self.translations = TranslationTable(self.translations or {})

    def validate(self) -> None:
        """Raise ConfigError if the configuration cannot run."""
        if not isinstance(self.selector, str) or not self.selector.strip():
            raise ConfigError("selector must be a non-empty CSS selector")
        try:
            soupsieve.compile(self.selector)
        except soupsieve.SelectorSyntaxError as e:
            raise ConfigError(f"invalid selector {self.selector!r}: {e}") from e
        try:
            BeautifulSoup("", self.parser)
        except FeatureNotFound as e:
            raise ConfigError(f"unknown parser {self.parser!r}: install it or use html.parser") from e
        if not callable(self.get_translation_key):
            raise ConfigError("get_translation_key must be callable")
        for name in (
            "glob",
            "format_translation",
            "modify_element",
            "modify_document_before",
            "modify_document_after",
        ):
            hook = getattr(self, name)
            if hook is not None and not callable(hook):
                raise ConfigError(f"{name} must be callable")
        if not callable(self.missing_translation_verbose_filter):
            raise ConfigError("missing_translation_verbose_filter must be callable")
        for language in self.translations.languages:
            if not is_safe_language_path(language):
                raise ConfigError(f"language {language!r} would escape the output directory")

    def to_dict(self) -> dict:
        """Serialize config for logging/debugging."""
        return {
            "languages": self.translations.languages,
            "selector": self.selector,
            "glob": self.glob is not None,
            "format_translation": self.format_translation is not None,
            "modify_element": self.modify_element is not None,
            "modify_document_before": self.modify_document_before is not None,
            "modify_document_after": self.modify_document_after is not None,
            "delete_source_html_files": self.delete_source_html_files,
            "verbose": self.verbose,
            "parser": self.parser,
        }


@dataclass
class GenerateResult:
    """Result of a generation run."""
    config: GenerateConfig
    sources: list[Path] = field(default_factory=list)
    outputs: dict[Path, list[Path]] = field(default_factory=dict)
    deleted: list[Path] = field(default_factory=list)
    diagnostics: DiagnosticsReporter = field(default_factory=DiagnosticsReporter)

    @property
    def empty(self) -> bool:
        """True when discovery matched no template."""
        return not self.sources

    @property
    def artifacts(self) -> int:
        return sum(len(paths) for paths in self.outputs.values())

    @property
    def missing_translations(self) -> list[DiagnosticEvent]:
        return self.diagnostics.by_kind(MISSING_TRANSLATION)


class HtmlI18nGenerator:
    """Renders translated copies of HTML templates.

    Usage:
        config = GenerateConfig(
            translations={"en": {"hello": "Hello"}, "fr": {"hello": "Bonjour"}},
            selector="[data-i18n]",
            get_translation_key=lambda el: el.get("data-i18n"),
        )
        result = HtmlI18nGenerator(config).run("dist")
        # dist/en/index.html, dist/fr/index.html
    """

    def __init__(
        self,
        config: GenerateConfig,
        progress_callback: ProgressCallback | None = None,
        diagnostics: DiagnosticsReporter | None = None,
    ):
        config.validate()
        self.config = config
        self.translations: TranslationTable = config.translations
        self.progress_callback = progress_callback or (lambda msg, pct: None)
        self.diagnostics = diagnostics or DiagnosticsReporter()

    def run(self, output_dir: Path | str) -> GenerateResult:
        """Discover templates under ``output_dir`` and write every language.

        Returns:
            GenerateResult with sources, outputs and diagnostics. When no
            template matches, the result is empty and a discovery_empty
            event is recorded.

        Raises:
            HookError: a hook or the key extractor raised
            OSError: a file could not be read, written or deleted
        """
        output_dir = Path(output_dir)
        result = GenerateResult(config=self.config, diagnostics=self.diagnostics)

        raw_patterns = None
        if self.config.glob:
            raw_patterns = self._call("glob", None, None, self.config.glob, output_dir)
        patterns = resolve_patterns(output_dir, raw_patterns)
        files = discover_files(output_dir, patterns)

        if not files:
            self.diagnostics.discovery_empty(patterns)
            self.progress_callback("No HTML files found", 1.0)
            return result

        self.diagnostics.discovered(files, patterns)
        result.sources = files

        languages = self.translations.languages
        total = len(languages) * len(files)
        done = 0

        for language in languages:
            for source in files:
                html = source.read_text(encoding=self.config.encoding)
                rendered = self.render(html, language, source=source)

                artifact = OutputArtifact(source=source, language=language, html=rendered)
                destination = write_artifact(artifact, encoding=self.config.encoding)
                self.diagnostics.record_output(source, destination, language)

                done += 1
                self.progress_callback(f"Generated {language}/{source.name}", done / total)

        # Only after every language is written: another language may still need the file
        if self.config.delete_source_html_files:
            for path in delete_sources(files):
                self.diagnostics.source_deleted(path)
                result.deleted.append(path)

        result.outputs = self.diagnostics.outputs
        self.progress_callback("Complete!", 1.0)
        return result

    def render(self, html: str, language: str, source: Path | None = None) -> str:
        """Translate one template into ``language`` and return the new HTML.

        A fresh document is parsed on every call.
        """
        if language not in self.translations:
            raise ConfigError(f"language {language!r} is not declared in translations")
        translations = self.translations[language]
        document = parse_document(html, self.config.parser)
        doc_meta = DocumentMeta(language=language, translations=translations)

        if self.config.modify_document_before:
            self._call("modify_document_before", language, source,
                       self.config.modify_document_before, document, doc_meta)

        for element in select_elements(document, self.config.selector):
            self._translate_element(element, language, translations, source)

        if self.config.modify_document_after:
            self._call("modify_document_after", language, source,
                       self.config.modify_document_after, document, doc_meta)

        return serialize_document(document)

    def _translate_element(
        self,
        element: Tag,
        language: str,
        translations: Translations,
        source: Path | None,
    ) -> None:
        key = self._call("get_translation_key", language, source,
                         self.config.get_translation_key, element)
        if not key:
            return
        if not isinstance(key, str):
            raise HookError(
                "get_translation_key", language, source,
                f"expected str key, got {type(key).__name__}",
            )

        value = translations.get(key)
        if value is None:
            self._report_missing(key, language, translations, source)
            value = ""

        meta = TranslationMeta(key=key, language=language, translations=translations)

        if self.config.format_translation:
            fragment = self._call("format_translation", language, source,
                                  self.config.format_translation, value, meta)
            if fragment is None:
                fragment = ""
            if not isinstance(fragment, str):
                raise HookError(
                    "format_translation", language, source,
                    f"expected str, got {type(fragment).__name__}",
                )
        else:
            fragment = value or ""

        set_inner_html(element, fragment)

        if self.config.modify_element:
            self._call("modify_element", language, source,
                       self.config.modify_element, element, value, meta)

    def _report_missing(
        self,
        key: TranslationKey,
        language: str,
        translations: Translations,
        source: Path | None,
    ) -> None:
        if not self.config.verbose:
            return
        wanted = self._call("missing_translation_verbose_filter", language, source,
                            self.config.missing_translation_verbose_filter,
                            key, language, translations)
        if wanted:
            self.diagnostics.missing_translation(key, language, source)

    def _call(self, name: str, language: str | None, source: Path | None, hook: Callable, *args) -> Any:
        try:
            return hook(*args)
        except Exception as e:
            raise HookError(name, language, source, str(e)) from e


# ============================================================================
# Convenience Functions
# ============================================================================

def generate_html_i18n(
    output_dir: Path | str,
    translations: Union[TranslationTable, Mapping[str, Mapping[str, str]]],
    selector: str,
    get_translation_key: KeyExtractor,
    progress_callback: ProgressCallback | None = None,
    **options: Any,
) -> GenerateResult:
    """Generate translated pages in one call.

        generate_html_i18n(
            "dist",
            translations={"en": en, "fr": fr},
            selector="[data-i18n]",
            get_translation_key=lambda el: el.get("data-i18n"),
            delete_source_html_files=True,
        )

    ``options`` are any other GenerateConfig fields.
    """
    config = GenerateConfig(
        translations=translations,
        selector=selector,
        get_translation_key=get_translation_key,
        **options,
    )
    generator = HtmlI18nGenerator(config, progress_callback=progress_callback)
    logger.debug("Running with %s", config.to_dict())
    return generator.run(output_dir)
