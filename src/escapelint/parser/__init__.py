from .annotations import (
    classify_annotation,
    is_probable_typo,
    scan_annotations,
    scan_lines,
    split_code_comment,
    walk_policy,
)
from .compiler_output import (
    classify_hint,
    parse_compiler_lines,
    parse_compiler_output,
    parse_position_token,
)
from .distance import levenshtein_distance
from .errors import ParseError, ParseErrorCode, ParseErrorDetail
from .walk import FileVisitor, SourceWalkPolicy, iter_source_files, make_file_visitor

__all__ = [
    "FileVisitor",
    "ParseError",
    "ParseErrorCode",
    "ParseErrorDetail",
    "SourceWalkPolicy",
    "classify_annotation",
    "classify_hint",
    "is_probable_typo",
    "iter_source_files",
    "levenshtein_distance",
    "make_file_visitor",
    "parse_compiler_lines",
    "parse_compiler_output",
    "parse_position_token",
    "scan_annotations",
    "scan_lines",
    "split_code_comment",
    "walk_policy",
]
