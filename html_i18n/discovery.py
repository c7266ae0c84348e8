"""
Template discovery.

Resolves the configured glob pattern(s) against the build output directory
and returns the HTML templates to translate. Generated language directories
are not matched by the default pattern because it is not recursive.
"""

from __future__ import annotations

import glob as globlib
import logging
from pathlib import Path
from typing import Sequence, Union

from html_i18n.config import DEFAULT_PATTERN


logger = logging.getLogger(__name__)

Patterns = Union[str, Sequence[str]]


def default_patterns(output_dir: Path | str) -> str:
    return str(Path(output_dir) / DEFAULT_PATTERN)


def resolve_patterns(output_dir: Path | str, patterns: Patterns | None = None) -> list[str]:
    """Normalize ``patterns`` to a list of absolute glob expressions.

    Relative patterns are taken relative to ``output_dir``.
    """
    output_dir = Path(output_dir)
    if patterns is None:
        patterns = default_patterns(output_dir)
    if isinstance(patterns, (str, Path)):
        patterns = [patterns]

    resolved = []
    for pattern in patterns:
        pattern = str(pattern)
        if not Path(pattern).is_absolute():
            pattern = str(output_dir / pattern)
        resolved.append(pattern)
    return resolved


def discover_files(output_dir: Path | str, patterns: Patterns | None = None) -> list[Path]:
    """Find template files under ``output_dir``.

    Args:
        output_dir: Build output directory
        patterns: Glob pattern or patterns (default: ``*.html`` directly
            under ``output_dir``)

    Returns:
        Sorted, de-duplicated list of matching regular files. May be empty.
    """
    found: set[Path] = set()
    for pattern in resolve_patterns(output_dir, patterns):
        for match in globlib.glob(pattern, recursive=True):
            path = Path(match)
            if path.is_file():
                found.add(path)

    files = sorted(found)
    logger.debug("Discovered %d file(s) under %s", len(files), output_dir)
    return files
