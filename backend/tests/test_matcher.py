"""Tests for the match finder."""
import pytest
from mahjong_solitaire.core.matcher import (
    check_stuck,
    check_win,
    find_all_matches,
    get_free_tiles,
    get_hint,
)
from mahjong_solitaire.models.board import TileInstance


def tile(tile_id, type_id, x, y, z=0, removed=False):
    return TileInstance(tile_id, type_id, x, y, z, removed)


@pytest.fixture
def two_rows():
    """Two rows of three; the middle of each row is blocked."""
    return [
        tile("a", "dot-1", 0, 0),
        tile("b", "dot-2", 1, 0),
        tile("c", "dot-3", 2, 0),
        tile("d", "dot-3", 0, 1),
        tile("e", "dot-2", 1, 1),
        tile("f", "dot-1", 2, 1),
    ]


class TestFreeTiles:
    """Test cases for get_free_tiles."""

    def test_free_tiles_in_board_order(self, two_rows):
        """Test that free tiles keep board order."""
        assert [t.id for t in get_free_tiles(two_rows)] == ["a", "c", "d", "f"]

    def test_removed_tiles_excluded(self, two_rows):
        """Test that removed tiles are not listed and stop blocking."""
        tiles = [t.removed() if t.id == "a" else t for t in two_rows]
        assert [t.id for t in get_free_tiles(tiles)] == ["b", "c", "d", "f"]


class TestFindAllMatches:
    """Test cases for find_all_matches."""

    def test_matches_in_discovery_order(self, two_rows):
        """Test that pairs come out in outer/inner index order."""
        matches = find_all_matches(two_rows)
        assert [(a.id, b.id) for a, b in matches] == [("a", "f"), ("c", "d")]

    def test_blocked_tiles_never_matched(self, two_rows):
        """Test that the blocked dot-2 tiles are not offered."""
        ids = {t.id for pair in find_all_matches(two_rows) for t in pair}
        assert "b" not in ids
        assert "e" not in ids

    def test_match_group_members_match(self):
        """Test that different flowers match each other."""
        tiles = [tile("a", "flower-plum", 0, 0), tile("b", "flower-orchid", 5, 0)]
        assert len(find_all_matches(tiles)) == 1

    def test_different_groups_do_not_match(self):
        """Test that a flower does not match a season."""
        tiles = [tile("a", "flower-plum", 0, 0), tile("b", "season-spring", 5, 0)]
        assert find_all_matches(tiles) == []

    def test_unknown_types_never_match(self):
        """Test that types missing from the catalog are ignored."""
        tiles = [tile("a", "mystery", 0, 0), tile("b", "mystery", 5, 0)]
        assert find_all_matches(tiles) == []

    def test_every_pair_is_free_and_active(self, two_rows):
        """Test that no returned pair contains a blocked or removed tile."""
        tiles = [t.removed() if t.id == "c" else t for t in two_rows]
        free_ids = {t.id for t in get_free_tiles(tiles)}
        for first, second in find_all_matches(tiles):
            assert first.id in free_ids and second.id in free_ids
            assert not first.is_removed and not second.is_removed


class TestWinAndStuck:
    """Test cases for check_win and check_stuck."""

    def test_win_when_all_removed(self, two_rows):
        """Test that a fully cleared board is won."""
        assert check_win([t.removed() for t in two_rows])
        assert not check_stuck([t.removed() for t in two_rows])

    def test_empty_board_is_won(self):
        """Test that an empty board counts as won and not stuck."""
        assert check_win([])
        assert not check_stuck([])

    def test_not_won_with_tiles_left(self, two_rows):
        """Test that a board with active tiles is not won."""
        assert not check_win(two_rows)
        assert not check_stuck(two_rows)

    def test_stuck_when_matching_tile_is_covered(self):
        """Test that a pair stacked on itself is stuck."""
        tiles = [tile("a", "dot-1", 0, 0, 0), tile("b", "dot-1", 0, 0, 1)]
        assert check_stuck(tiles)


class TestHint:
    """Test cases for get_hint."""

    def test_hint_is_first_match(self, two_rows):
        """Test that the hint is the first pair found."""
        assert get_hint(two_rows) == ("a", "f")

    def test_hint_is_stable(self, two_rows):
        """Test that the same board always yields the same hint."""
        assert get_hint(two_rows) == get_hint(list(two_rows))

    def test_no_hint_without_matches(self):
        """Test that a stuck board has no hint."""
        tiles = [tile("a", "dot-1", 0, 0), tile("b", "dot-2", 5, 0)]
        assert get_hint(tiles) is None

    def test_hint_is_in_matches(self, two_rows):
        """Test that the hint is one of the available pairs."""
        tiles = [t.removed() if t.id in ("a", "f") else t for t in two_rows]
        hint = get_hint(tiles)
        assert hint in [(a.id, b.id) for a, b in find_all_matches(tiles)]
