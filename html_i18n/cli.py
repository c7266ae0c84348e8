"""
Command-line interface for html-i18n.

Provides commands for:
- Generating translated copies of built HTML pages
- Reporting translation coverage of the templates

Usage:
    html-i18n generate dist --translations locales/
    html-i18n generate dist -t en=en.json -t fr=fr.json --delete-sources
    html-i18n scan dist --translations locales/
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn

from html_i18n import __version__
from html_i18n.config import APP_NAME, DEFAULT_KEY_ATTRIBUTE, DEFAULT_PARSER, DEFAULT_SELECTOR
from html_i18n.discovery import discover_files
from html_i18n.documents import parse_document, select_elements
from html_i18n.errors import HtmlI18nError
from html_i18n.hooks import attribute_key, ignore_languages, set_document_lang
from html_i18n.models import TranslationTable
from html_i18n.pipeline import GenerateConfig, HtmlI18nGenerator
from html_i18n.translations import load_translations

app = typer.Typer(
    name=APP_NAME,
    help="Generate per-language static HTML pages from translation tables",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{APP_NAME} v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """html-i18n: translate built HTML pages into language folders."""
    pass


def _setup_logging(debug: bool, quiet: bool = False) -> None:
    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(format="%(name)s: %(message)s")
    logging.getLogger("html_i18n").setLevel(level)


def _load_table(sources: List[str]) -> TranslationTable:
    try:
        table = load_translations(sources)
    except HtmlI18nError as e:
        console.print(f"[red]Error:[/] {e}", style="bold")
        raise typer.Exit(1)
    console.print(
        "[green]Loaded translations:[/] "
        + ", ".join(f"{lang} ({len(table[lang])} keys)" for lang in table.languages)
    )
    return table


def _relative(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


@app.command()
def generate(
    output_dir: Path = typer.Argument(
        ...,
        help="Build output directory containing the HTML templates",
    ),
    translations: List[str] = typer.Option(
        ..., "--translations", "-t",
        help="JSON file, directory of <lang>.json files, or LANG=FILE (repeatable)",
    ),
    selector: str = typer.Option(
        DEFAULT_SELECTOR, "--selector", "-s",
        help="CSS selector of the elements to translate",
    ),
    attribute: str = typer.Option(
        DEFAULT_KEY_ATTRIBUTE, "--attribute", "-a",
        help="Attribute holding the translation key",
    ),
    patterns: Optional[List[str]] = typer.Option(
        None, "--pattern", "-p",
        help="Glob pattern relative to OUTPUT_DIR (repeatable, default *.html)",
    ),
    set_lang: bool = typer.Option(
        True, "--set-lang/--no-set-lang",
        help="Set <html lang> to the generated language",
    ),
    delete_sources: bool = typer.Option(
        False, "--delete-sources",
        help="Delete the templates after every language is generated",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Do not report missing translations",
    ),
    ignore_missing: Optional[List[str]] = typer.Option(
        None, "--ignore-missing",
        help="Language whose missing translations are not reported (repeatable)",
    ),
    parser: str = typer.Option(
        DEFAULT_PARSER, "--parser",
        help="BeautifulSoup tree builder (html.parser, lxml, html5lib)",
    ),
    debug: bool = typer.Option(
        False, "--debug",
        help="Enable debug logging",
    ),
):
    """Generate <dir>/<lang>/<page>.html for every template and language."""
    _setup_logging(debug, quiet)
    output_dir = output_dir.resolve()
    table = _load_table(translations)

    options = {}
    if patterns:
        options["glob"] = lambda _: list(patterns)
    if set_lang:
        options["modify_document_after"] = set_document_lang
    if ignore_missing:
        options["missing_translation_verbose_filter"] = ignore_languages(ignore_missing)

    try:
        config = GenerateConfig(
            translations=table,
            selector=selector,
            get_translation_key=attribute_key(attribute),
            delete_source_html_files=delete_sources,
            verbose=not quiet,
            parser=parser,
            **options,
        )
        generator = HtmlI18nGenerator(config)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Generating...", total=100)

            def update_progress(msg: str, pct: float):
                progress.update(task, description=msg, completed=int(pct * 100))

            generator.progress_callback = update_progress
            result = generator.run(output_dir)
    except HtmlI18nError as e:
        console.print(f"[red]Error:[/] {e}", style="bold")
        raise typer.Exit(1)

    if result.empty:
        event = result.diagnostics.by_kind("discovery_empty")[0]
        console.print(f"[yellow]{event.message}[/]")
        return

    console.print("\n[bold]Result of scanning HTML files to generate[/]")
    for source in result.sources:
        console.print(f"  [dim]{output_dir.name}/[/][green]{_relative(source, output_dir)}[/]")

    out_table = Table(title="Generated HTML files")
    out_table.add_column("Source", style="cyan")
    out_table.add_column("Outputs", style="green")
    for source, outputs in result.outputs.items():
        out_table.add_row(
            _relative(source, output_dir),
            "\n".join(_relative(p, output_dir) for p in outputs),
        )
    console.print(out_table)

    missing = result.missing_translations
    if missing:
        console.print(f"[yellow]{len(missing)} missing translation(s) rendered as empty text[/]")
    counts = result.diagnostics.summarize()
    console.print(f"[dim]{counts['info']} info event(s), {counts['warn']} warning(s)[/]")
    if result.deleted:
        console.print(f"[dim]Deleted {len(result.deleted)} source file(s)[/]")
    console.print(f"\n[bold green]Generated {result.artifacts} file(s)![/]")


@app.command()
def scan(
    output_dir: Path = typer.Argument(
        ...,
        help="Build output directory containing the HTML templates",
    ),
    translations: List[str] = typer.Option(
        ..., "--translations", "-t",
        help="JSON file, directory of <lang>.json files, or LANG=FILE (repeatable)",
    ),
    selector: str = typer.Option(
        DEFAULT_SELECTOR, "--selector", "-s",
        help="CSS selector of the elements to translate",
    ),
    attribute: str = typer.Option(
        DEFAULT_KEY_ATTRIBUTE, "--attribute", "-a",
        help="Attribute holding the translation key",
    ),
    patterns: Optional[List[str]] = typer.Option(
        None, "--pattern", "-p",
        help="Glob pattern relative to OUTPUT_DIR (repeatable, default *.html)",
    ),
    parser: str = typer.Option(
        DEFAULT_PARSER, "--parser",
        help="BeautifulSoup tree builder (html.parser, lxml, html5lib)",
    ),
):
    """Report which template keys each language is missing. Writes nothing."""
    _setup_logging(False)
    output_dir = output_dir.resolve()
    table = _load_table(translations)
    get_key = attribute_key(attribute)
    try:
        GenerateConfig(
            translations=table, selector=selector, get_translation_key=get_key, parser=parser,
        ).validate()
    except HtmlI18nError as e:
        console.print(f"[red]Error:[/] {e}", style="bold")
        raise typer.Exit(1)

    files = discover_files(output_dir, patterns or None)
    if not files:
        console.print(f"[yellow]No HTML files found in {output_dir}[/]")
        return

    keys: list[str] = []
    for path in files:
        document = parse_document(path.read_text(encoding="utf-8"), parser)
        for element in select_elements(document, selector):
            key = get_key(element)
            if key:
                keys.append(key)

    unique_keys = list(dict.fromkeys(keys))
    console.print(f"[green]Found {len(unique_keys)} key(s) in {len(files)} file(s)[/]")

    report = Table(title="Translation coverage")
    report.add_column("Language", style="cyan")
    report.add_column("Missing", style="yellow")
    report.add_column("Keys", style="dim")
    for language in table.languages:
        missing = table.missing_keys(language, unique_keys)
        report.add_row(language, str(len(missing)), ", ".join(missing) or "-")
    console.print(report)
