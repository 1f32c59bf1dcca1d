from __future__ import annotations

from random import Random

import pytest
from pydantic import ValidationError

from escapelint.diagnostics import (
    CANONICAL_DIAGNOSTIC_CATALOG,
    REQUIRED_CATALOG_FIELDS,
    DiagnosticEvent,
    DiagnosticSink,
    LintStage,
    Severity,
    build_diagnostic_event,
    canonical_witness_json,
    render_diagnostic_line,
    sort_diagnostics,
)

pytestmark = pytest.mark.unit


def _event(**overrides: object) -> DiagnosticEvent:
    payload: dict[str, object] = {
        "code": "E_RECONCILE_ESCAPES",
        "severity": Severity.ERROR,
        "message": "m",
        "suggested_action": "a",
        "stage": LintStage.RECONCILE,
        "file": "a.go",
        "line": 3,
        "witness": {"k": 1},
    }
    payload.update(overrides)
    return DiagnosticEvent(**payload)


def test_build_diagnostic_event_fills_fields_from_catalog() -> None:
    event = build_diagnostic_event(code="W_ANNOTATION_TYPO", message="typo", file="a.go", line=1)

    entry = CANONICAL_DIAGNOSTIC_CATALOG["W_ANNOTATION_TYPO"]
    assert event.severity is entry.severity is Severity.WARNING
    assert event.stage is entry.stage is LintStage.SCAN
    assert event.suggested_action == entry.suggested_action


def test_build_diagnostic_event_requires_explicit_fields_for_unknown_codes() -> None:
    with pytest.raises(ValueError, match="not in canonical catalog"):
        build_diagnostic_event(code="E_UNKNOWN", message="x")

    event = build_diagnostic_event(
        code="E_UNKNOWN",
        message="x",
        severity=Severity.ERROR,
        stage=LintStage.PARSE,
        suggested_action="retry",
    )
    assert event.code == "E_UNKNOWN"


def test_catalog_entries_are_complete() -> None:
    for code, entry in CANONICAL_DIAGNOSTIC_CATALOG.items():
        assert entry.code == code
        for field_name in REQUIRED_CATALOG_FIELDS:
            assert getattr(entry, field_name)


def test_diagnostic_event_is_frozen_and_strict() -> None:
    event = _event()
    with pytest.raises(ValidationError):
        event.message = "other"  # type: ignore[misc]
    with pytest.raises(ValidationError):
        _event(unexpected=True)
    with pytest.raises(ValidationError):
        _event(line=0)


def test_witness_is_normalized_to_sorted_json() -> None:
    event = _event(witness={"b": (1, 2), "a": {"d": 4, "c": 3}})

    assert canonical_witness_json(event.witness) == '{"a":{"c":3,"d":4},"b":[1,2]}'
    assert canonical_witness_json(None) == ""
    with pytest.raises(ValidationError):
        _event(witness={1: "x"})


def test_sort_diagnostics_orders_by_location_then_severity_and_code() -> None:
    events = [
        _event(message="unlocated", file=None, line=None),
        _event(message="b-2", file="b.go", line=2),
        _event(message="a-10", line=10),
        _event(message="a-3-warning", severity=Severity.WARNING, code="W_ANNOTATION_TYPO"),
        _event(message="a-3-bounds", code="E_RECONCILE_BOUNDS_CHECK"),
        _event(message="a-3-escapes"),
    ]
    shuffled = list(events)
    Random(7).shuffle(shuffled)

    ordered = sort_diagnostics(shuffled)

    assert [event.message for event in ordered] == [
        "a-3-bounds",
        "a-3-escapes",
        "a-3-warning",
        "a-10",
        "b-2",
        "unlocated",
    ]


def test_sink_collects_in_emission_order() -> None:
    sink = DiagnosticSink()
    sink.emit(_event(message="first", severity=Severity.WARNING))
    assert sink.has_errors() is False

    sink.extend([_event(message="second"), _event(message="third")])

    assert [event.message for event in sink.events] == ["first", "second", "third"]
    assert len(sink) == 3
    assert sink.has_errors() is True


def test_render_diagnostic_line_prefixes_message() -> None:
    assert render_diagnostic_line(_event(message="hello"), "tag: ") == "tag: hello"
