from __future__ import annotations

import json
from collections.abc import Iterable

from .models import DiagnosticEvent, Severity

_SEVERITY_RANK: dict[Severity, int] = {
    Severity.ERROR: 0,
    Severity.WARNING: 1,
}


def canonical_witness_json(witness: object | None) -> str:
    if witness is None:
        return ""
    return json.dumps(witness, sort_keys=True, separators=(",", ":"), ensure_ascii=True)


def _location_sort_key(event: DiagnosticEvent) -> tuple[int, str, int]:
    # Events without a location sort after located ones.
    if event.file is None:
        return (1, "", 0)
    return (0, event.file, event.line if event.line is not None else 0)


def diagnostic_sort_key(
    event: DiagnosticEvent,
) -> tuple[tuple[int, str, int], int, str, str, str]:
    return (
        _location_sort_key(event),
        _SEVERITY_RANK[event.severity],
        event.code,
        event.message,
        canonical_witness_json(event.witness),
    )


def sort_diagnostics(events: Iterable[DiagnosticEvent]) -> list[DiagnosticEvent]:
    return sorted(events, key=diagnostic_sort_key)
