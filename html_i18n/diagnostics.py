"""Run diagnostics for html-i18n.

Collects what happened during a run as an ordered list of typed events so
callers (the CLI, tests, a build tool) can present it however they like.
Each event is also forwarded to the ``html_i18n`` logger. Reporting never
changes control flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Dict, List, Optional


logger = logging.getLogger(__name__)

DISCOVERED = "discovered"
DISCOVERY_EMPTY = "discovery_empty"
MISSING_TRANSLATION = "missing_translation"
GENERATED = "generated"
DELETED = "deleted"

_LEVELS = {"info": logging.INFO, "warn": logging.WARNING}


@dataclass
class DiagnosticEvent:
    """One diagnostic with kind, severity and human-readable message."""

    kind: str
    severity: str  # info | warn
    message: str
    key: Optional[str] = None
    language: Optional[str] = None
    path: Optional[Path] = None


@dataclass
class DiagnosticsReporter:
    """Accumulates events and the source -> outputs summary for one run."""

    events: List[DiagnosticEvent] = field(default_factory=list)
    outputs: Dict[Path, List[Path]] = field(default_factory=dict)

    def emit(self, event: DiagnosticEvent) -> DiagnosticEvent:
        self.events.append(event)
        logger.log(_LEVELS.get(event.severity, logging.INFO), event.message)
        return event

    def discovered(self, files: List[Path], patterns: List[str]) -> None:
        for path in files:
            self.emit(DiagnosticEvent(DISCOVERED, "info", f"Found template {path}", path=path))
        logger.info("Scanning %d HTML file(s) matched by %s", len(files), ", ".join(patterns))

    def discovery_empty(self, patterns: List[str]) -> DiagnosticEvent:
        return self.emit(
            DiagnosticEvent(
                DISCOVERY_EMPTY,
                "info",
                f"HTML files not found by {', '.join(patterns)} pattern",
            )
        )

    def missing_translation(self, key: str, language: str, path: Optional[Path] = None) -> DiagnosticEvent:
        return self.emit(
            DiagnosticEvent(
                MISSING_TRANSLATION,
                "warn",
                f"Translation not found: {language}.{key}",
                key=key,
                language=language,
                path=path,
            )
        )

    def record_output(self, source: Path, destination: Path, language: str) -> None:
        self.outputs.setdefault(source, []).append(destination)
        self.emit(
            DiagnosticEvent(GENERATED, "info", f"Generated {destination}", language=language, path=destination)
        )

    def source_deleted(self, path: Path) -> None:
        self.emit(DiagnosticEvent(DELETED, "info", f"Deleted source {path}", path=path))

    def by_kind(self, kind: str) -> List[DiagnosticEvent]:
        return [e for e in self.events if e.kind == kind]

    def summarize(self) -> Dict[str, int]:
        summary = {"info": 0, "warn": 0}
        for e in self.events:
            if e.severity in summary:
                summary[e.severity] += 1
        return summary
