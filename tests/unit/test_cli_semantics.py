from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from escapelint.cli import main as cli_main
from escapelint.config import LintConfig
from escapelint.diagnostics import DiagnosticSink
from escapelint.model import (
    Annotation,
    AnnotationScan,
    CompilerHint,
    HintIndex,
    Position,
    TypoFinding,
)
from escapelint.parser import ParseErrorCode
from escapelint.parser.errors import build_parse_error

pytestmark = pytest.mark.unit

runner = CliRunner()
EXIT_FAIL = 1


def _stub_inputs(
    monkeypatch: pytest.MonkeyPatch,
    *,
    hints: HintIndex,
    scan: AnnotationScan,
) -> None:
    def fake_scan(pkg: str, sink: DiagnosticSink, config: LintConfig) -> AnnotationScan:
        del pkg, sink, config
        return scan

    monkeypatch.setattr(cli_main, "_execute_parse_hints", lambda compiler_output: hints)
    monkeypatch.setattr(cli_main, "_execute_scan", fake_scan)


def test_missing_compiler_output_prints_usage_and_exits_before_parsing(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def fail_parse(compiler_output: str) -> HintIndex:
        raise AssertionError("parsing must not start without -f")

    monkeypatch.setattr(cli_main, "_execute_parse_hints", fail_parse)

    result = runner.invoke(cli_main.app, [])

    assert result.exit_code == EXIT_FAIL
    assert "compiler output file is required" in result.output
    assert "Usage" in result.output


def test_clean_run_exits_zero_without_output(monkeypatch: pytest.MonkeyPatch) -> None:
    position = Position("main.go", 3)
    _stub_inputs(
        monkeypatch,
        hints={position: (CompilerHint.INLINED,)},
        scan=AnnotationScan(annotations={position: (Annotation.MUST_INLINE,)}),
    )

    result = runner.invoke(cli_main.app, ["-f", "out.txt", "-pkg", "."])

    assert result.exit_code == 0
    assert result.output == ""


def test_violation_exits_one_and_prints_tagged_line(monkeypatch: pytest.MonkeyPatch) -> None:
    position = Position("main.go", 3)
    _stub_inputs(
        monkeypatch,
        hints={position: (CompilerHint.ESCAPES_TO_HEAP,)},
        scan=AnnotationScan(annotations={position: (Annotation.NO_ESCAPE,)}),
    )

    result = runner.invoke(cli_main.app, ["-f", "out.txt"])

    assert result.exit_code == EXIT_FAIL
    assert result.output.splitlines() == [
        "go-escape-lint: variable at main.go:3 is marked as no-escape but escapes to heap"
    ]


def test_no_fail_suppresses_violation_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    _stub_inputs(
        monkeypatch,
        hints={},
        scan=AnnotationScan(annotations={Position("a.go", 1): (Annotation.MUST_INLINE,)}),
    )

    for flag in ("-no-fail", "--no-fail"):
        result = runner.invoke(cli_main.app, ["--file", "out.txt", flag])
        assert result.exit_code == 0
        assert "is not inlined" in result.output


def test_typo_alone_fails_the_run(monkeypatch: pytest.MonkeyPatch) -> None:
    _stub_inputs(
        monkeypatch,
        hints={},
        scan=AnnotationScan(
            annotations={},
            typos=(TypoFinding(Position("a.go", 1), "//no-escap"),),
        ),
    )

    result = runner.invoke(cli_main.app, ["-f", "out.txt"])

    assert result.exit_code == EXIT_FAIL


def test_fatal_parse_error_exits_non_zero_even_with_no_fail(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def broken_parse(compiler_output: str) -> HintIndex:
        raise build_parse_error(
            ParseErrorCode.E_PARSE_LINE_NUMBER_INVALID,
            "failed to parse line number 'abc' at line 2",
            "main.go:abc: moved to heap",
            source=compiler_output,
            line_ordinal=2,
        )

    monkeypatch.setattr(cli_main, "_execute_parse_hints", broken_parse)

    result = runner.invoke(cli_main.app, ["-f", "out.txt", "-no-fail"])

    assert result.exit_code == EXIT_FAIL
    assert result.output.splitlines() == [
        "go-escape-lint: error parsing compiler output: "
        "failed to parse line number 'abc' at line 2"
    ]


def test_fatal_scan_error_is_reported_as_source_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def broken_scan(pkg: str, sink: DiagnosticSink, config: LintConfig) -> AnnotationScan:
        raise build_parse_error(
            ParseErrorCode.E_SCAN_WALK_FAILED,
            f"failed to walk '{pkg}': No such file or directory",
            pkg,
            source=pkg,
        )

    monkeypatch.setattr(cli_main, "_execute_parse_hints", lambda compiler_output: {})
    monkeypatch.setattr(cli_main, "_execute_scan", broken_scan)

    result = runner.invoke(cli_main.app, ["-f", "out.txt", "-pkg", "nowhere"])

    assert result.exit_code == EXIT_FAIL
    assert result.output.startswith("go-escape-lint: error parsing source code: ")


def test_invalid_config_is_fatal(tmp_path: Path) -> None:
    config = tmp_path / "lint.yaml"
    config.write_text("lint:\n  colour: red\n", encoding="utf-8")

    result = runner.invoke(cli_main.app, ["-f", "out.txt", "--config", str(config)])

    assert result.exit_code == EXIT_FAIL
    assert "invalid config: unknown config keys: colour" in result.output
