"""
Entry point for running html-i18n as a module.

Usage:
    python -m html_i18n --help
    python -m html_i18n generate dist --translations locales/
    python -m html_i18n scan dist --translations locales/
"""
from .cli import app


if __name__ == "__main__":
    app()
