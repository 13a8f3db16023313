"""Occlusion model: which tiles are covered or boxed in.

Works on anything with x/y/z coordinates, so the same rules apply to tile
instances during play and to bare positions during board generation.
Layouts stagger some layers by half a cell, hence the tolerances instead of
exact comparisons.
"""
from typing import Any, Iterable, Iterator

# Closer than this on an axis counts as the same cell
SAME_CELL = 0.9
# Closer than this horizontally counts as touching
ADJACENT = 1.1


def _active_others(target: Any, tiles: Iterable[Any]) -> Iterator[Any]:
    """Tiles that can block `target`: active and not `target` itself."""
    target_id = getattr(target, "id", None)
    for other in tiles:
        if other is target or getattr(other, "is_removed", False):
            continue
        if target_id is not None and getattr(other, "id", None) == target_id:
            continue
        yield other


def covers(upper: Any, lower: Any) -> bool:
    """True if `upper` sits on top of `lower`'s cell."""
    return (
        upper.z > lower.z
        and abs(upper.x - lower.x) < SAME_CELL
        and abs(upper.y - lower.y) < SAME_CELL
    )


def in_same_row(a: Any, b: Any) -> bool:
    """True if both sit on the same layer and row."""
    return a.z == b.z and abs(a.y - b.y) < SAME_CELL


def is_left_neighbour(other: Any, target: Any) -> bool:
    """True if `other` touches `target` from the left."""
    return in_same_row(other, target) and 0 < target.x - other.x < ADJACENT


def is_right_neighbour(other: Any, target: Any) -> bool:
    """True if `other` touches `target` from the right."""
    return in_same_row(other, target) and 0 < other.x - target.x < ADJACENT


def is_blocked_above(tile: Any, tiles: Iterable[Any]) -> bool:
    return any(covers(other, tile) for other in _active_others(tile, tiles))


def is_blocked_left(tile: Any, tiles: Iterable[Any]) -> bool:
    return any(is_left_neighbour(other, tile) for other in _active_others(tile, tiles))


def is_blocked_right(tile: Any, tiles: Iterable[Any]) -> bool:
    return any(is_right_neighbour(other, tile) for other in _active_others(tile, tiles))


def is_free_tile(tile: Any, tiles: Iterable[Any]) -> bool:
    """
    Check if a tile can be selected.

    A tile is free when nothing active lies on top of it and at least one of
    its horizontal sides is open. Removed tiles are never free.

    Args:
        tile: Tile (or position) to check.
        tiles: Tiles on the board; removed ones are ignored.

    Returns:
        True if the tile is free.
    """
    if getattr(tile, "is_removed", False):
        return False

    tiles = list(tiles)
    if is_blocked_above(tile, tiles):
        return False

    return not is_blocked_left(tile, tiles) or not is_blocked_right(tile, tiles)


def is_position_available(position: Any, occupied: Iterable[Any]) -> bool:
    """Check whether a position would be free given only the `occupied` slots."""
    return is_free_tile(position, occupied)
