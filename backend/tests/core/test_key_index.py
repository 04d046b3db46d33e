"""Key Index Builder — tests for key → position mapping.

Tests cover:
    - Positions are the 1-based data-row offsets supplied by the store
    - Empty / whitespace / short rows are orphaned, never indexed
    - Duplicate stored keys keep the first position
    - Unknown key column yields an empty index
"""

from inventory_sync.core.key_index import build_key_index


def test_maps_keys_to_positions():
    index = build_key_index([(1, ["PC1", "X"]), (2, ["PC2", "Y"])], 0)
    assert index.get("PC1") == 1
    assert index.get("PC2") == 2
    assert len(index) == 2
    assert "PC1" in index


def test_uses_key_column_not_first_column():
    index = build_key_index([(1, ["X", "PC1"])], 1)
    assert index.get("PC1") == 1
    assert index.get("X") is None


def test_empty_and_short_rows_are_orphaned():
    rows = [(1, ["", "X"]), (2, ["   ", "Y"]), (3, []), (4, ["PC4"])]
    index = build_key_index(rows, 0)
    assert index.orphaned_positions == [1, 2, 3]
    assert index.get("PC4") == 4
    assert len(index) == 1


def test_duplicate_keys_keep_first_position():
    index = build_key_index([(1, ["PC1"]), (2, ["PC1"]), (3, ["PC2"])], 0)
    assert index.get("PC1") == 1
    assert index.duplicate_positions == [2]


def test_unknown_key_column_is_empty():
    index = build_key_index([(1, ["PC1"])], None)
    assert len(index) == 0
    assert index.orphaned_positions == []


def test_padded_stored_key_matches_stripped_key():
    index = build_key_index([(1, [" PC1 "]), (2, ["PC1"])], 0)
    assert index.get("PC1") == 1
    assert index.duplicate_positions == [2]
