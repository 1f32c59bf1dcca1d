from .catalog import CANONICAL_DIAGNOSTIC_CATALOG, REQUIRED_CATALOG_FIELDS
from .events import build_diagnostic_event, render_diagnostic_line
from .models import DiagnosticEvent, LintStage, Severity
from .sink import DiagnosticSink
from .sort import canonical_witness_json, diagnostic_sort_key, sort_diagnostics

__all__ = [
    "CANONICAL_DIAGNOSTIC_CATALOG",
    "DiagnosticEvent",
    "DiagnosticSink",
    "LintStage",
    "REQUIRED_CATALOG_FIELDS",
    "Severity",
    "build_diagnostic_event",
    "canonical_witness_json",
    "diagnostic_sort_key",
    "render_diagnostic_line",
    "sort_diagnostics",
]
