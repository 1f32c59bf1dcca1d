from .types import (
    COMMENT_MARKER,
    HINT_PATTERNS,
    KNOWN_ANNOTATIONS,
    Annotation,
    AnnotationIndex,
    AnnotationScan,
    CompilerHint,
    HintIndex,
    Position,
    TypoFinding,
    canonical_path,
    freeze_index,
    join_canonical,
)

__all__ = [
    "COMMENT_MARKER",
    "HINT_PATTERNS",
    "KNOWN_ANNOTATIONS",
    "Annotation",
    "AnnotationIndex",
    "AnnotationScan",
    "CompilerHint",
    "HintIndex",
    "Position",
    "TypoFinding",
    "canonical_path",
    "freeze_index",
    "join_canonical",
]
