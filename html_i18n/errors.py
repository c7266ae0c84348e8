"""Exception hierarchy for html-i18n."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class HtmlI18nError(Exception):
    """Base class for every error raised by html-i18n."""


class ConfigError(HtmlI18nError):
    """Invalid generator configuration, raised before any file is touched."""


class TranslationsLoadError(HtmlI18nError):
    """A translation file could not be read or has the wrong shape."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class HookError(HtmlI18nError):
    """A caller-supplied hook or key extractor failed.

    The original exception is available as ``__cause__``. The whole run is
    aborted when this is raised.
    """

    def __init__(
        self,
        hook: str,
        language: Optional[str] = None,
        source: Optional[Path] = None,
        reason: str = "",
    ):
        self.hook = hook
        self.language = language
        self.source = source
        message = f"{hook} failed"
        if source is not None:
            message += f" for {source}"
        if language:
            message += f" [{language}]"
        if reason:
            message += f": {reason}"
        super().__init__(message)
