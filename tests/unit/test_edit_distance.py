from __future__ import annotations

import pytest

from escapelint.parser import levenshtein_distance

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        ("", "", 0),
        ("", "abc", 3),
        ("abc", "", 3),
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("no-escape", "no-escape", 0),
        ("no-escap", "no-escape", 1),
        ("//no-escap", "no-escape", 3),
        ("//no-escape", "no-escape", 2),
        ("// no-escape", "no-escape", 3),
        ("//must-inlin", "must-inline", 3),
    ],
)
def test_levenshtein_distance_known_values(a: str, b: str, expected: int) -> None:
    assert levenshtein_distance(a, b) == expected


def test_levenshtein_distance_is_symmetric_for_swapped_operands() -> None:
    assert levenshtein_distance("no-bounds-check", "//no-bound") == levenshtein_distance(
        "//no-bound", "no-bounds-check"
    )


def test_levenshtein_distance_counts_code_points_not_bytes() -> None:
    # Each of these differs by one character but several UTF-8 bytes.
    assert levenshtein_distance("café", "cafe") == 1
    assert levenshtein_distance("日本語", "日本") == 1
    assert levenshtein_distance("🙂", "🙃") == 1
