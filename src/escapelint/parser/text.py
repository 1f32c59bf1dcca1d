from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import TextIO


@contextmanager
def open_text_document(path: str) -> Iterator[TextIO]:
    # Only "\n" terminates a line; a lone "\r" stays part of the line so line
    # numbers agree with the compiler's own count.
    with open(path, encoding="utf-8", errors="replace", newline="\n") as handle:
        yield handle


def iter_physical_lines(raw_lines: Iterable[str]) -> Iterator[str]:
    for raw in raw_lines:
        line = raw[:-1] if raw.endswith("\n") else raw
        if line.endswith("\r"):
            line = line[:-1]
        yield line
