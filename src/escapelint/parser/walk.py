from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from escapelint.model import canonical_path

from .errors import ParseErrorCode, build_parse_error

type FileVisitor = Callable[[str], Iterable[str]]


@dataclass(frozen=True, slots=True)
class SourceWalkPolicy:
    source_suffix: str = ".go"
    test_suffix: str = "_test.go"
    skip_dir_names: tuple[str, ...] = ("vendor",)
    skip_hidden_dirs: bool = True

    def skips_directory(self, name: str) -> bool:
        if self.skip_hidden_dirs and name.startswith("."):
            return True
        return name in self.skip_dir_names

    def accepts_file(self, name: str) -> bool:
        return name.endswith(self.source_suffix) and not name.endswith(self.test_suffix)


def iter_source_files(root: str, policy: SourceWalkPolicy | None = None) -> Iterator[str]:
    """Yield canonical paths of eligible source files below ``root``.

    Directories and files are visited in sorted order. The root itself is
    never skipped, whatever its name.
    """
    active = policy if policy is not None else SourceWalkPolicy()
    if os.path.isfile(root):
        if active.accepts_file(os.path.basename(root)):
            yield canonical_path(root)
        return

    def _raise(exc: OSError) -> None:
        raise build_parse_error(
            ParseErrorCode.E_SCAN_WALK_FAILED,
            f"failed to walk '{exc.filename or root}': {exc.strerror or exc}",
            root,
            source=root,
        ) from exc

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames[:] = sorted(name for name in dirnames if not active.skips_directory(name))
        for name in sorted(filenames):
            if active.accepts_file(name):
                yield canonical_path(os.path.join(dirpath, name))


def make_file_visitor(policy: SourceWalkPolicy | None = None) -> FileVisitor:
    def visit(root: str) -> Iterator[str]:
        return iter_source_files(root, policy)

    return visit
