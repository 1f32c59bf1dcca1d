from __future__ import annotations

import os
import re
from collections.abc import Iterable

from escapelint.model import (
    HINT_PATTERNS,
    CompilerHint,
    HintIndex,
    Position,
    freeze_index,
    join_canonical,
)

from .errors import ParseErrorCode, build_parse_error
from .text import iter_physical_lines, open_text_document

_LINE_NUMBER_PATTERN = re.compile(r"[+-]?[0-9]+", flags=re.ASCII)


def classify_hint(line: str) -> CompilerHint | None:
    for needle, hint in HINT_PATTERNS:
        if needle in line:
            return hint
    return None


def parse_position_token(
    line: str,
    *,
    base_dir: str,
    line_ordinal: int,
    source: str | None = None,
) -> Position | None:
    """Read the leading ``path:line[:col]:`` token of a diagnostic line.

    Returns ``None`` when the line carries no ``path:line`` pair at all.
    A line field that is not a positive integer is fatal.
    """
    tokens = line.split()
    if not tokens:
        return None
    fields = tokens[0].split(":")
    if len(fields) < 2:
        return None

    file_field, line_field = fields[0], fields[1]
    if _LINE_NUMBER_PATTERN.fullmatch(line_field) is None:
        raise build_parse_error(
            ParseErrorCode.E_PARSE_LINE_NUMBER_INVALID,
            f"failed to parse line number '{line_field}' at line {line_ordinal}",
            line,
            source=source,
            line_ordinal=line_ordinal,
        )
    line_number = int(line_field)
    if line_number < 1 or not file_field:
        raise build_parse_error(
            ParseErrorCode.E_PARSE_LINE_NUMBER_INVALID,
            f"invalid position '{file_field}:{line_field}' at line {line_ordinal}",
            line,
            source=source,
            line_ordinal=line_ordinal,
        )
    return Position(file=join_canonical(base_dir, file_field), line=line_number)


def parse_compiler_lines(
    lines: Iterable[str],
    *,
    base_dir: str,
    source: str | None = None,
) -> HintIndex:
    entries: dict[Position, list[CompilerHint]] = {}
    for line_ordinal, line in enumerate(lines, start=1):
        hint = classify_hint(line)
        if hint is None:
            continue
        position = parse_position_token(
            line,
            base_dir=base_dir,
            line_ordinal=line_ordinal,
            source=source,
        )
        if position is None:
            continue
        entries.setdefault(position, []).append(hint)
    return freeze_index(entries)


def parse_compiler_output(path: str | os.PathLike[str]) -> HintIndex:
    """Build the hint index for a compiler diagnostic document.

    File references inside the document are resolved against the directory
    that contains it.
    """
    document = os.fspath(path)
    try:
        with open_text_document(document) as handle:
            return parse_compiler_lines(
                iter_physical_lines(handle),
                base_dir=os.path.dirname(document),
                source=document,
            )
    except OSError as exc:
        raise build_parse_error(
            ParseErrorCode.E_PARSE_INPUT_UNREADABLE,
            f"failed to open file: {exc}",
            document,
            source=document,
        ) from exc
