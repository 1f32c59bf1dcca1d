from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from escapelint.diagnostics import DiagnosticEvent, build_diagnostic_event


class ParseErrorCode(StrEnum):
    E_PARSE_INPUT_UNREADABLE = "E_PARSE_INPUT_UNREADABLE"
    E_PARSE_LINE_NUMBER_INVALID = "E_PARSE_LINE_NUMBER_INVALID"
    E_SCAN_FILE_UNREADABLE = "E_SCAN_FILE_UNREADABLE"
    E_SCAN_WALK_FAILED = "E_SCAN_WALK_FAILED"


@dataclass(frozen=True, slots=True)
class ParseErrorDetail:
    code: str
    message: str
    input_text: str
    source: str | None = None
    line_ordinal: int | None = None


class ParseError(ValueError):
    def __init__(self, detail: ParseErrorDetail) -> None:
        super().__init__(f"{detail.code}: {detail.message}")
        self.detail = detail

    def to_diagnostic(self) -> DiagnosticEvent:
        return build_diagnostic_event(
            code=self.detail.code,
            message=self.detail.message,
            file=self.detail.source,
            line=self.detail.line_ordinal,
            witness={"input_text": self.detail.input_text},
        )


def build_parse_error(
    code: ParseErrorCode,
    message: str,
    input_text: str,
    *,
    source: str | None = None,
    line_ordinal: int | None = None,
) -> ParseError:
    return ParseError(
        ParseErrorDetail(
            code=code.value,
            message=message,
            input_text=input_text,
            source=source,
            line_ordinal=line_ordinal,
        )
    )
