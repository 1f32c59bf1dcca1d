from __future__ import annotations

import os
from collections.abc import Iterable

from escapelint.config import DEFAULT_LINT_CONFIG, LintConfig
from escapelint.diagnostics import DiagnosticEvent, DiagnosticSink, build_diagnostic_event
from escapelint.model import (
    COMMENT_MARKER,
    KNOWN_ANNOTATIONS,
    Annotation,
    AnnotationScan,
    Position,
    TypoFinding,
    canonical_path,
    freeze_index,
)

from .distance import levenshtein_distance
from .errors import ParseErrorCode, build_parse_error
from .text import iter_physical_lines, open_text_document
from .walk import FileVisitor, SourceWalkPolicy, make_file_visitor

_TYPO_CODE = "W_ANNOTATION_TYPO"


def split_code_comment(line: str) -> tuple[str, str]:
    index = line.find(COMMENT_MARKER)
    if index == -1:
        return (line.strip(), "")
    return (line[:index].strip(), line[index:].strip())


def classify_annotation(comment: str) -> Annotation | None:
    for annotation in KNOWN_ANNOTATIONS:
        if annotation.marker in comment:
            return annotation
    return None


def is_probable_typo(
    comment: str,
    *,
    max_comment_length: int = DEFAULT_LINT_CONFIG.max_comment_length,
    threshold: int = DEFAULT_LINT_CONFIG.typo_distance_threshold,
) -> bool:
    # The comment keeps its marker while the names do not, so "//no-escap"
    # is three edits away from "no-escape".
    if len(comment) > max_comment_length:
        return False
    return any(
        levenshtein_distance(comment, annotation.value) <= threshold
        for annotation in KNOWN_ANNOTATIONS
    )


def walk_policy(config: LintConfig) -> SourceWalkPolicy:
    return SourceWalkPolicy(
        source_suffix=config.source_suffix,
        test_suffix=config.test_suffix,
        skip_dir_names=config.skip_dir_names,
    )


def scan_lines(
    path: str,
    lines: Iterable[str],
    *,
    sink: DiagnosticSink | None = None,
    config: LintConfig = DEFAULT_LINT_CONFIG,
) -> tuple[list[tuple[Position, Annotation]], list[TypoFinding]]:
    """Scan one file's lines for annotations and near-miss comments."""
    found: list[tuple[Position, Annotation]] = []
    typos: list[TypoFinding] = []
    for line_number, line in enumerate(lines, start=1):
        code, comment = split_code_comment(line)
        if not code or not comment:
            continue

        annotation = classify_annotation(comment)
        if annotation is not None:
            found.append((Position(file=path, line=line_number), annotation))
            continue

        if is_probable_typo(
            comment,
            max_comment_length=config.max_comment_length,
            threshold=config.typo_distance_threshold,
        ):
            finding = TypoFinding(position=Position(file=path, line=line_number), comment=comment)
            typos.append(finding)
            if sink is not None:
                sink.emit(_typo_diagnostic(finding))
    return (found, typos)


def scan_annotations(
    root: str | os.PathLike[str],
    *,
    sink: DiagnosticSink | None = None,
    config: LintConfig | None = None,
    visit: FileVisitor | None = None,
) -> AnnotationScan:
    """Build the annotation index for every eligible source file under ``root``.

    Suspected typos are reported through ``sink`` and clear the scan's
    validity, but never stop the walk. Unreadable files abort it.
    """
    active = config if config is not None else DEFAULT_LINT_CONFIG
    visitor = visit if visit is not None else make_file_visitor(walk_policy(active))

    entries: dict[Position, list[Annotation]] = {}
    typos: list[TypoFinding] = []
    for file_path in visitor(os.fspath(root)):
        path = canonical_path(file_path)
        try:
            with open_text_document(path) as handle:
                found, file_typos = scan_lines(
                    path,
                    iter_physical_lines(handle),
                    sink=sink,
                    config=active,
                )
        except OSError as exc:
            raise build_parse_error(
                ParseErrorCode.E_SCAN_FILE_UNREADABLE,
                f"failed to read '{path}': {exc.strerror or exc}",
                path,
                source=path,
            ) from exc
        for position, annotation in found:
            entries.setdefault(position, []).append(annotation)
        typos.extend(file_typos)

    return AnnotationScan(annotations=freeze_index(entries), typos=tuple(typos))


def _typo_diagnostic(finding: TypoFinding) -> DiagnosticEvent:
    return build_diagnostic_event(
        code=_TYPO_CODE,
        message=f"probably a typo '{finding.comment}' at {finding.position}",
        file=finding.position.file,
        line=finding.position.line,
        witness={"comment": finding.comment},
    )
