"""Match finder: free tiles, available pairs, win and stuck detection."""
from typing import Dict, List, Optional, Sequence, Tuple

from ..models.board import TileInstance
from ..models.tiles import TileCatalog, TileType, get_catalog, tiles_match
from .occlusion import is_free_tile

TilePair = Tuple[TileInstance, TileInstance]


def get_free_tiles(tiles: Sequence[TileInstance]) -> List[TileInstance]:
    """Active tiles that can currently be selected, in board order."""
    active = [t for t in tiles if not t.is_removed]
    return [t for t in active if is_free_tile(t, active)]


def find_all_matches(
    tiles: Sequence[TileInstance],
    catalog: Optional[TileCatalog] = None,
) -> List[TilePair]:
    """
    Find every pair of free tiles that match.

    Pairs are returned in discovery order (outer index, then inner index, both
    ascending over the free tiles), so the first pair is stable for a given
    board state.

    Args:
        tiles: All tiles on the board.
        catalog: Tile catalog used for the match predicate.

    Returns:
        List of matching (tile, tile) pairs.
    """
    catalog = catalog or get_catalog()
    free_tiles = get_free_tiles(tiles)

    # Catalog lookups are memoized for the duration of this call
    type_cache: Dict[str, Optional[TileType]] = {}

    def lookup(type_id: str) -> Optional[TileType]:
        if type_id not in type_cache:
            type_cache[type_id] = catalog.find(type_id)
        return type_cache[type_id]

    matches: List[TilePair] = []
    for i, tile1 in enumerate(free_tiles):
        type1 = lookup(tile1.type_id)
        if type1 is None:
            continue
        for tile2 in free_tiles[i + 1:]:
            type2 = lookup(tile2.type_id)
            if type2 is not None and tiles_match(type1, type2):
                matches.append((tile1, tile2))

    return matches


def check_win(tiles: Sequence[TileInstance]) -> bool:
    """The game is won once every tile has been removed."""
    return all(t.is_removed for t in tiles)


def check_stuck(tiles: Sequence[TileInstance], catalog: Optional[TileCatalog] = None) -> bool:
    """The game is stuck when tiles remain but no free pair matches."""
    if check_win(tiles):
        return False
    return len(find_all_matches(tiles, catalog)) == 0


def get_hint(
    tiles: Sequence[TileInstance],
    catalog: Optional[TileCatalog] = None,
) -> Optional[Tuple[str, str]]:
    """Ids of the first available matching pair, or None."""
    matches = find_all_matches(tiles, catalog)
    if not matches:
        return None
    tile1, tile2 = matches[0]
    return tile1.id, tile2.id
