from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .models import LintStage, Severity


@dataclass(frozen=True, slots=True)
class DiagnosticCatalogEntry:
    code: str
    severity: Severity
    stage: LintStage
    suggested_action: str

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("diagnostic catalog code must be non-empty")
        if not self.suggested_action:
            raise ValueError(
                f"diagnostic catalog entry '{self.code}' suggested_action must be non-empty"
            )


def _entry(
    code: str,
    severity: Severity,
    stage: LintStage,
    suggested_action: str,
) -> DiagnosticCatalogEntry:
    return DiagnosticCatalogEntry(
        code=code,
        severity=severity,
        stage=stage,
        suggested_action=suggested_action,
    )


def _build_catalog(
    entries: tuple[DiagnosticCatalogEntry, ...],
) -> Mapping[str, DiagnosticCatalogEntry]:
    catalog: dict[str, DiagnosticCatalogEntry] = {}
    for entry in entries:
        if entry.code in catalog:
            raise ValueError(f"duplicate diagnostic catalog code: {entry.code}")
        catalog[entry.code] = entry
    return MappingProxyType(catalog)


_CATALOG_ENTRIES: tuple[DiagnosticCatalogEntry, ...] = (
    _entry(
        "E_CONFIG_INVALID",
        Severity.ERROR,
        LintStage.CONFIG,
        "fix the lint configuration file and retry",
    ),
    _entry(
        "E_PARSE_INPUT_UNREADABLE",
        Severity.ERROR,
        LintStage.PARSE,
        "check that the compiler output file exists and is readable UTF-8 text",
    ),
    _entry(
        "E_PARSE_LINE_NUMBER_INVALID",
        Severity.ERROR,
        LintStage.PARSE,
        "regenerate compiler output with file:line positions",
    ),
    _entry(
        "E_SCAN_FILE_UNREADABLE",
        Severity.ERROR,
        LintStage.SCAN,
        "check that every source file is readable UTF-8 text",
    ),
    _entry(
        "E_SCAN_WALK_FAILED",
        Severity.ERROR,
        LintStage.SCAN,
        "check that the package directory exists and is traversable",
    ),
    _entry(
        "W_ANNOTATION_TYPO",
        Severity.WARNING,
        LintStage.SCAN,
        "spell the annotation as //no-escape, //no-bounds-check or //must-inline",
    ),
    _entry(
        "E_RECONCILE_ESCAPES",
        Severity.ERROR,
        LintStage.RECONCILE,
        "keep the value on the stack or drop the //no-escape annotation",
    ),
    _entry(
        "E_RECONCILE_BOUNDS_CHECK",
        Severity.ERROR,
        LintStage.RECONCILE,
        "prove the index in range or drop the //no-bounds-check annotation",
    ),
    _entry(
        "E_RECONCILE_NOT_INLINED",
        Severity.ERROR,
        LintStage.RECONCILE,
        "reduce the callee cost below the inlining budget or drop the //must-inline annotation",
    ),
)


CANONICAL_DIAGNOSTIC_CATALOG: Mapping[str, DiagnosticCatalogEntry] = _build_catalog(
    _CATALOG_ENTRIES
)

REQUIRED_CATALOG_FIELDS: tuple[str, ...] = ("code", "severity", "stage", "suggested_action")
