"""Row Ordering — stable key-column ordering shared by every store adapter.

Invariants:
    - Stable: rows with equal keys keep their prior relative order (also when descending)
    - Lexicographic on the raw cell string; a missing cell sorts as ""
    - Header row is never part of the input
"""

from typing import Sequence


def key_cell(values: Sequence[str], key_column: int) -> str:
    if key_column < len(values) and values[key_column] is not None:
        return str(values[key_column])
    return ""


def order_rows(
    rows: Sequence[Sequence[str]], key_column: int, ascending: bool = True,
) -> list[list[str]]:
    """Return data rows ordered by key column. Pure, no IO."""
    return [
        list(row)
        for row in sorted(
            rows, key=lambda r: key_cell(r, key_column), reverse=not ascending,
        )
    ]


def is_sorted(
    rows: Sequence[Sequence[str]], key_column: int, ascending: bool = True,
) -> bool:
    keys = [key_cell(r, key_column) for r in rows]
    pairs = zip(keys, keys[1:])
    if ascending:
        return all(a <= b for a, b in pairs)
    return all(a >= b for a, b in pairs)
