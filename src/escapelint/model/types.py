from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

COMMENT_MARKER = "//"


class Annotation(StrEnum):
    NO_ESCAPE = "no-escape"
    NO_BOUNDS_CHECK = "no-bounds-check"
    MUST_INLINE = "must-inline"

    @property
    def marker(self) -> str:
        return f"{COMMENT_MARKER}{self.value}"


class CompilerHint(StrEnum):
    ESCAPES_TO_HEAP = "escapes-to-heap"
    MOVED_TO_HEAP = "moved-to-heap"
    STAYS_ON_STACK = "stays-on-stack"
    FOUND_IS_IN_BOUNDS = "found-is-in-bounds"
    INLINED = "inlined"


# Priority order: a comment carrying several markers keeps only the first.
KNOWN_ANNOTATIONS: tuple[Annotation, ...] = (
    Annotation.NO_ESCAPE,
    Annotation.NO_BOUNDS_CHECK,
    Annotation.MUST_INLINE,
)

# Priority order: a diagnostic line carrying several substrings keeps only the first.
HINT_PATTERNS: tuple[tuple[str, CompilerHint], ...] = (
    ("escapes to heap", CompilerHint.ESCAPES_TO_HEAP),
    ("moved to heap", CompilerHint.MOVED_TO_HEAP),
    ("stays on stack", CompilerHint.STAYS_ON_STACK),
    ("inlining call", CompilerHint.INLINED),
    ("Found IsInBounds", CompilerHint.FOUND_IS_IN_BOUNDS),
)


def canonical_path(path: str) -> str:
    if not path:
        raise ValueError("path must be non-empty")
    return os.path.normpath(path)


def join_canonical(base_dir: str, name: str) -> str:
    """Resolve ``name`` against the directory of the document that mentioned it.

    An empty ``base_dir`` stands for the current directory, so ``"main.go"``
    read from ``"out.txt"`` and ``"./main.go"`` found by a walk of ``"."`` both
    canonicalize to ``"main.go"``.
    """
    return canonical_path(os.path.join(base_dir, name) if base_dir else name)


@dataclass(frozen=True, slots=True, order=True)
class Position:
    file: str
    line: int

    def __post_init__(self) -> None:
        if not self.file:
            raise ValueError("position file must be non-empty")
        if isinstance(self.line, bool) or not isinstance(self.line, int):
            raise ValueError("position line must be an integer")
        if self.line < 1:
            raise ValueError("position line must be >= 1")

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


type AnnotationIndex = Mapping[Position, tuple[Annotation, ...]]
type HintIndex = Mapping[Position, tuple[CompilerHint, ...]]


def freeze_index[T](entries: Mapping[Position, list[T]]) -> Mapping[Position, tuple[T, ...]]:
    frozen: dict[Position, tuple[T, ...]] = {}
    for position, values in entries.items():
        if values:
            frozen[position] = tuple(values)
    return MappingProxyType(frozen)


@dataclass(frozen=True, slots=True)
class TypoFinding:
    position: Position
    comment: str


@dataclass(frozen=True, slots=True)
class AnnotationScan:
    annotations: AnnotationIndex
    typos: tuple[TypoFinding, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.typos
