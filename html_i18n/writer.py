"""
Output writer: destination paths, directory creation and persistence.

Artifacts land in a sibling directory named after the language:

    <dir>/<name>.html  ->  <dir>/<language>/<name>.html

Writes overwrite any existing file (last write wins). Filesystem errors are
not caught here; they abort the run.
"""

from __future__ import annotations

import logging
from pathlib import Path, PureWindowsPath
from typing import TYPE_CHECKING, Iterable

from html_i18n.config import ENCODING

if TYPE_CHECKING:
    from html_i18n.models import OutputArtifact


logger = logging.getLogger(__name__)


def output_path_for(source: Path | str, language: str) -> Path:
    """Derive the destination of ``source`` for ``language``.

    Example:
        >>> output_path_for("dist/index.html", "fr")
        PosixPath('dist/fr/index.html')
    """
    source = Path(source)
    return source.parent / language / source.name


def is_safe_language_path(language: str) -> bool:
    """True when ``language`` names a directory below the template's directory.

    Nested names such as ``zh/hant`` are allowed. Absolute paths, empty
    segments and ``.``/``..`` segments are not.
    """
    if not language or "\0" in language:
        return False
    if language[0] in "/\\" or PureWindowsPath(language).drive:
        return False
    segments = language.replace("\\", "/").split("/")
    return all(segment not in ("", ".", "..") for segment in segments)


def write_artifact(artifact: OutputArtifact, encoding: str = ENCODING) -> Path:
    """Write one artifact, creating its language directory if needed."""
    destination = artifact.destination
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(artifact.html, encoding=encoding)
    logger.debug("Wrote %s", destination)
    return destination


def delete_sources(paths: Iterable[Path]) -> list[Path]:
    """Delete template files once every language has been written.

    Files that already disappeared are skipped; any other OS error propagates.
    """
    deleted = []
    for path in paths:
        try:
            Path(path).unlink()
        except FileNotFoundError:
            logger.debug("Source already removed: %s", path)
            continue
        deleted.append(Path(path))
    return deleted
