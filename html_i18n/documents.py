"""
HTML document capability on top of BeautifulSoup.

The generator only needs four operations from a DOM library:

    parse_document(text)            -> BeautifulSoup
    select_elements(doc, selector)  -> list[Tag] in document order
    set_inner_html(tag, fragment)   -> replace a tag's children
    serialize_document(doc)         -> str

Every call to parse_document builds a brand new tree, so a document is never
shared between two languages.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from html_i18n.config import DEFAULT_PARSER


def parse_document(html: str, parser: str = DEFAULT_PARSER) -> BeautifulSoup:
    return BeautifulSoup(html, parser)


def select_elements(document: BeautifulSoup, selector: str) -> list[Tag]:
    """Return every element matching the CSS ``selector``, in document order."""
    return list(document.select(selector))


def set_inner_html(element: Tag, fragment: str) -> None:
    """Replace the children of ``element`` with the parsed ``fragment``.

    The fragment is parsed as markup, so ``"<b>Hi</b>"`` becomes a child tag
    rather than escaped text. An empty fragment leaves the element empty.
    Fragments always go through html.parser, which does not wrap them in
    <html>/<body> the way lxml and html5lib do.
    """
    element.clear()
    if not fragment:
        return
    parsed = BeautifulSoup(fragment, "html.parser")
    for child in list(parsed.contents):
        element.append(child.extract())


def serialize_document(document: BeautifulSoup) -> str:
    return str(document)
