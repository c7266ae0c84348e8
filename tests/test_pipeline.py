"""
Tests for the generation pipeline.

Tests cover:
- Element substitution and the default formatter
- Hook ordering (before -> per element -> after)
- Missing translation fallback and its diagnostics
- Document isolation between languages
- Failure semantics (HookError aborts the run)
- Configuration validation
"""

import pytest

from html_i18n.errors import ConfigError, HookError
from html_i18n.hooks import attribute_key
from html_i18n.models import DocumentMeta, TranslationMeta
from html_i18n.pipeline import GenerateConfig, HtmlI18nGenerator


PAGE = (
    '<html><head><title data-i18n="title">t</title></head>'
    '<body><h1 data-i18n="hello">x</h1><p data-i18n="missing">y</p><p>keep</p></body></html>'
)

TRANSLATIONS = {
    "en": {"title": "Home", "hello": "Hello"},
    "fr": {"title": "Accueil", "hello": "Bonjour"},
}


def make_generator(**options):
    options.setdefault("translations", TRANSLATIONS)
    options.setdefault("selector", "[data-i18n]")
    options.setdefault("get_translation_key", attribute_key("data-i18n"))
    return HtmlI18nGenerator(GenerateConfig(**options))


class TestSubstitution:
    """Test basic element substitution."""

    def test_replaces_inner_content(self):
        """Selected elements get the translated value as content."""
        html = make_generator().render(PAGE, "fr")

        assert '<title data-i18n="title">Accueil</title>' in html
        assert '<h1 data-i18n="hello">Bonjour</h1>' in html
        assert "<p>keep</p>" in html

    def test_values_are_markup(self):
        """Translation values are inserted as HTML."""
        generator = make_generator(translations={"en": {"hello": "Hi <b>there</b>"}})

        html = generator.render('<p data-i18n="hello">x</p>', "en")

        assert html == '<p data-i18n="hello">Hi <b>there</b></p>'

    def test_element_without_key_untouched(self):
        """Elements whose key is None or empty are skipped."""
        generator = make_generator(get_translation_key=lambda el: el.get("data-key"))

        html = generator.render('<p data-i18n="hello">keep</p>', "en")

        assert html == '<p data-i18n="hello">keep</p>'

    def test_no_match_is_fine(self):
        """A selector matching nothing leaves the document unchanged."""
        html = make_generator(selector=".nothing").render("<p>text</p>", "en")

        assert html == "<p>text</p>"

    def test_format_hook(self):
        """format_translation output replaces the element content."""
        generator = make_generator(
            translations={"en": {"icon": "With icon - {icon}"}},
            format_translation=lambda value, meta: value.replace("{icon}", '<i class="icon"></i>'),
        )

        html = generator.render('<span data-i18n="icon"></span>', "en")

        assert html == '<span data-i18n="icon">With icon - <i class="icon"></i></span>'

    def test_format_hook_meta(self):
        """The formatter receives key, language and that language's table."""
        seen = []

        def fmt(value, meta):
            seen.append((value, meta))
            return value

        make_generator(format_translation=fmt).render('<p data-i18n="hello"></p>', "fr")

        value, meta = seen[0]
        assert value == "Bonjour"
        assert meta == TranslationMeta(key="hello", language="fr", translations=meta.translations)
        assert dict(meta.translations) == TRANSLATIONS["fr"]

    def test_modify_element_gets_unformatted_value(self):
        """modify_element runs after substitution with the pre-format value."""
        calls = []

        def modify(element, value, meta):
            calls.append((element.decode_contents(), value))
            element["data-done"] = "1"

        generator = make_generator(
            format_translation=lambda value, meta: value.upper(),
            modify_element=modify,
        )

        html = generator.render('<p data-i18n="hello">x</p>', "en")

        assert calls == [("HELLO", "Hello")]
        assert 'data-done="1"' in html

    def test_unknown_language(self):
        """Rendering a language that is not declared is a config error."""
        with pytest.raises(ConfigError):
            make_generator().render(PAGE, "de")


class TestHookOrdering:
    """Test that hooks run in a fixed order."""

    def test_full_sequence(self):
        """before -> (extract, format, modify) per element in order -> after."""
        calls = []

        def extract(element):
            key = element.get("data-i18n")
            calls.append(("extract", key))
            return key

        def fmt(value, meta):
            calls.append(("format", meta.key))
            return value

        def modify(element, value, meta):
            calls.append(("modify", meta.key))

        generator = make_generator(
            translations={"en": {"a": "A", "b": "B"}},
            get_translation_key=extract,
            format_translation=fmt,
            modify_element=modify,
            modify_document_before=lambda doc, meta: calls.append(("before", meta.language)),
            modify_document_after=lambda doc, meta: calls.append(("after", meta.language)),
        )

        generator.render('<p data-i18n="a"></p><p data-i18n="b"></p>', "en")

        assert calls == [
            ("before", "en"),
            ("extract", "a"), ("format", "a"), ("modify", "a"),
            ("extract", "b"), ("format", "b"), ("modify", "b"),
            ("after", "en"),
        ]

    def test_before_hook_visible_downstream(self):
        """An attribute set by the before hook is seen by modify and after hooks."""
        seen = {}

        def before(document, meta):
            document.find("html")["data-stage"] = meta.language

        def modify(element, value, meta):
            seen["modify"] = element.find_parent("html").get("data-stage")

        def after(document, meta):
            seen["after"] = document.find("html").get("data-stage")

        generator = make_generator(
            modify_document_before=before,
            modify_element=modify,
            modify_document_after=after,
        )

        html = generator.render(PAGE, "fr")

        assert seen == {"modify": "fr", "after": "fr"}
        assert 'data-stage="fr"' in html

    def test_before_hook_can_add_elements(self):
        """Elements added by the before hook are selected and translated."""
        def before(document, meta):
            tag = document.new_tag("span", attrs={"data-i18n": "hello"})
            document.find("body").append(tag)

        html = make_generator(modify_document_before=before).render(PAGE, "en")

        assert '<span data-i18n="hello">Hello</span>' in html

    def test_document_meta(self):
        """Document hooks receive the language and its table."""
        metas = []

        make_generator(modify_document_after=lambda doc, meta: metas.append(meta)).render(PAGE, "en")

        assert isinstance(metas[0], DocumentMeta)
        assert metas[0].language == "en"
        assert metas[0].translations["hello"] == "Hello"


class TestMissingTranslations:
    """Test the empty-string fallback and diagnostics."""

    def test_missing_key_renders_empty(self):
        """A missing key empties the element and records one diagnostic."""
        generator = make_generator(translations={"en": {}})

        html = generator.render('<div data-i18n="hello">x</div>', "en")

        assert html == '<div data-i18n="hello"></div>'
        missing = generator.diagnostics.by_kind("missing_translation")
        assert len(missing) == 1
        assert (missing[0].key, missing[0].language) == ("hello", "en")

    def test_empty_value_is_not_missing(self):
        """A key present with an empty value renders empty without a warning."""
        generator = make_generator(translations={"en": {"hello": ""}})

        html = generator.render('<div data-i18n="hello">x</div>', "en")

        assert html == '<div data-i18n="hello"></div>'
        assert generator.diagnostics.by_kind("missing_translation") == []

    def test_not_verbose(self):
        """verbose=False records nothing and never calls the filter."""
        def never(key, language, translations):
            raise AssertionError("filter must not be called")

        generator = make_generator(
            translations={"en": {}},
            verbose=False,
            missing_translation_verbose_filter=never,
        )

        generator.render('<div data-i18n="hello">x</div>', "en")

        assert generator.diagnostics.events == []

    def test_filter(self):
        """The filter decides per (key, language) whether to report."""
        calls = []

        def only_fr(key, language, translations):
            calls.append((key, language, dict(translations)))
            return language == "fr"

        generator = make_generator(
            translations={"en": {}, "fr": {"other": "x"}},
            missing_translation_verbose_filter=only_fr,
        )

        generator.render('<p data-i18n="hello"></p>', "en")
        generator.render('<p data-i18n="hello"></p>', "fr")

        assert calls == [("hello", "en", {}), ("hello", "fr", {"other": "x"})]
        missing = generator.diagnostics.by_kind("missing_translation")
        assert [(e.key, e.language) for e in missing] == [("hello", "fr")]

    def test_formatter_receives_empty_string(self):
        """The formatter and modify hook see "" for a missing key."""
        seen = []
        generator = make_generator(
            translations={"en": {}},
            format_translation=lambda value, meta: seen.append(("format", value)) or "[missing]",
            modify_element=lambda el, value, meta: seen.append(("modify", value)),
        )

        html = generator.render('<p data-i18n="k">x</p>', "en")

        assert seen == [("format", ""), ("modify", "")]
        assert html == '<p data-i18n="k">[missing]</p>'


class TestIsolation:
    """Test that languages never share a document."""

    def test_mutations_do_not_leak(self):
        """Changes made while rendering one language are absent from another."""
        def before(document, meta):
            if meta.language == "en":
                document.find("head").append(document.new_tag("meta", attrs={"name": "only-en"}))

        def modify(element, value, meta):
            if meta.language == "en":
                element["class"] = "english"

        generator = make_generator(modify_document_before=before, modify_element=modify)

        en = generator.render(PAGE, "en")
        fr = generator.render(PAGE, "fr")

        assert "only-en" in en and "english" in en
        assert "only-en" not in fr and "english" not in fr
        assert "Hello" not in fr


class TestFailures:
    """Test that hook failures abort with HookError."""

    def test_extractor_failure(self):
        """An extractor exception is wrapped and chained."""
        def boom(element):
            raise RuntimeError("bad element")

        with pytest.raises(HookError) as exc:
            make_generator(get_translation_key=boom).render(PAGE, "en")

        assert exc.value.hook == "get_translation_key"
        assert exc.value.language == "en"
        assert isinstance(exc.value.__cause__, RuntimeError)

    def test_after_hook_failure(self):
        """Document hook failures are fatal too."""
        def after(document, meta):
            raise ValueError("nope")

        with pytest.raises(HookError, match="modify_document_after"):
            make_generator(modify_document_after=after).render(PAGE, "fr")

    def test_formatter_must_return_string(self):
        """A formatter returning a non-string is a hook failure."""
        with pytest.raises(HookError, match="format_translation"):
            make_generator(format_translation=lambda value, meta: 42).render(PAGE, "en")

    def test_extractor_must_return_string(self):
        """A non-string key, such as the list bs4 returns for class, is a hook failure."""
        generator = make_generator(
            translations={"en": {"a b": "x"}},
            selector="p",
            get_translation_key=lambda el: el.get("class"),
        )

        with pytest.raises(HookError) as exc:
            generator.render('<p class="a b">x</p>', "en")

        assert exc.value.hook == "get_translation_key"
        assert "list" in str(exc.value)


class TestConfig:
    """Test configuration validation."""

    def test_mapping_coerced_to_table(self):
        """A plain dict becomes a TranslationTable."""
        config = GenerateConfig(
            translations=TRANSLATIONS,
            selector="[data-i18n]",
            get_translation_key=attribute_key("data-i18n"),
        )

        assert config.translations.languages == ["en", "fr"]
        assert config.to_dict()["languages"] == ["en", "fr"]
        assert config.verbose is True
        assert config.delete_source_html_files is False

    def test_empty_translations(self):
        """At least one language is required."""
        with pytest.raises(ConfigError):
            make_generator(translations={})

    def test_blank_selector(self):
        """The selector is required."""
        with pytest.raises(ConfigError):
            make_generator(selector="  ")

    def test_hook_must_be_callable(self):
        """Hooks must be callables."""
        with pytest.raises(ConfigError):
            make_generator(modify_element="not a function")

    def test_language_must_be_directory_name(self):
        """Languages that would escape the output directory are rejected."""
        with pytest.raises(ConfigError):
            make_generator(translations={"../evil": {}})

    def test_nested_language_allowed(self):
        """Languages may name nested directories."""
        generator = make_generator(translations={"zh/hant": {"hello": "H"}})

        assert generator.render('<p data-i18n="hello"></p>', "zh/hant") == '<p data-i18n="hello">H</p>'

    def test_malformed_selector(self):
        """A selector soupsieve cannot compile is rejected up front."""
        with pytest.raises(ConfigError, match="invalid selector") as exc:
            make_generator(selector="[[bad")

        assert exc.value.__cause__ is not None

    def test_unknown_parser(self):
        """A tree builder that is not installed is a config error."""
        with pytest.raises(ConfigError, match="unknown parser"):
            make_generator(parser="nope")
