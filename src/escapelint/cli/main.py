from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import typer

from escapelint.config import LOG_PREFIX, ConfigError, LintConfig, load_lint_config
from escapelint.diagnostics import (
    DiagnosticEvent,
    DiagnosticSink,
    LintStage,
    render_diagnostic_line,
    sort_diagnostics,
)
from escapelint.model import AnnotationScan, HintIndex
from escapelint.parser import ParseError, parse_compiler_output, scan_annotations
from escapelint.reconcile import reconcile

app = typer.Typer(help="Cross-check //no-escape, //no-bounds-check and //must-inline annotations")

EXIT_OK = 0
EXIT_FAIL = 1

_FILE_OPTION = typer.Option(
    None,
    "-f",
    "--file",
    help="Path to the compiler output file",
)
_PKG_OPTION = typer.Option(
    ".",
    "-pkg",
    "--pkg",
    help="Path to the package directory",
    show_default=True,
)
_NO_FAIL_OPTION = typer.Option(
    False,
    "-no-fail",
    "--no-fail",
    help="Exit with status code 0 even if errors are found",
)
_CONFIG_OPTION = typer.Option(
    None,
    "--config",
    help="Optional YAML file overriding lint settings",
)


@dataclass(frozen=True, slots=True)
class LintOutcome:
    annotations_valid: bool
    results_valid: bool
    diagnostics: tuple[DiagnosticEvent, ...]

    @property
    def valid(self) -> bool:
        return self.annotations_valid and self.results_valid


def _execute_parse_hints(compiler_output: str) -> HintIndex:
    return parse_compiler_output(compiler_output)


def _execute_scan(pkg: str, sink: DiagnosticSink, config: LintConfig) -> AnnotationScan:
    return scan_annotations(pkg, sink=sink, config=config)


def run_lint(compiler_output: str, pkg: str, config: LintConfig) -> LintOutcome:
    """Parse both inputs, reconcile them and collect every emitted diagnostic."""
    sink = DiagnosticSink()
    hints = _execute_parse_hints(compiler_output)
    scan = _execute_scan(pkg, sink, config)
    results_valid = reconcile(hints, scan.annotations, sink)
    return LintOutcome(
        annotations_valid=scan.valid,
        results_valid=results_valid,
        diagnostics=tuple(sort_diagnostics(sink.events)),
    )


@app.command()
def lint(
    ctx: typer.Context,
    file: str | None = _FILE_OPTION,
    pkg: str = _PKG_OPTION,
    no_fail: bool = _NO_FAIL_OPTION,
    config: str | None = _CONFIG_OPTION,
) -> None:
    """Check compiler optimization decisions against source annotations."""
    if not file:
        typer.echo("error: compiler output file is required", err=True)
        typer.echo(ctx.get_usage(), err=True)
        raise typer.Exit(code=EXIT_FAIL)

    try:
        lint_config = load_lint_config(config)
    except ConfigError as exc:
        typer.echo(f"{LOG_PREFIX}invalid config: {exc.message}")
        raise typer.Exit(code=EXIT_FAIL) from exc

    try:
        outcome = run_lint(file, pkg, lint_config)
    except ParseError as exc:
        _print_fatal(exc, prefix=lint_config.log_prefix)
        raise typer.Exit(code=EXIT_FAIL) from exc

    _print_diagnostics(outcome.diagnostics, prefix=lint_config.log_prefix)
    raise typer.Exit(code=_derive_exit_code(outcome, no_fail=no_fail))


def _derive_exit_code(outcome: LintOutcome, *, no_fail: bool) -> int:
    if outcome.valid or no_fail:
        return EXIT_OK
    return EXIT_FAIL


def _print_fatal(exc: ParseError, *, prefix: str) -> None:
    event = exc.to_diagnostic()
    context = (
        "error parsing compiler output"
        if event.stage is LintStage.PARSE
        else "error parsing source code"
    )
    typer.echo(f"{prefix}{context}: {event.message}")


def _print_diagnostics(diagnostics: Sequence[DiagnosticEvent], *, prefix: str) -> None:
    for event in diagnostics:
        typer.echo(render_diagnostic_line(event, prefix))


def main() -> None:
    app()
