from __future__ import annotations


def levenshtein_distance(a: str, b: str) -> int:
    """Return the Levenshtein edit distance between ``a`` and ``b``.

    Characters are compared as code points. Only two rows of the dynamic
    programming table are kept, each as wide as the shorter operand.
    """
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for row, char_a in enumerate(a, start=1):
        current = [row] + [0] * len(b)
        for col, char_b in enumerate(b, start=1):
            insertion = previous[col] + 1
            deletion = current[col - 1] + 1
            substitution = previous[col - 1] + (char_a != char_b)
            current[col] = min(insertion, deletion, substitution)
        previous = current

    return previous[len(b)]
