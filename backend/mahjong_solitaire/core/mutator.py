"""Board mutations: removing a matched pair and shuffling the remaining tiles."""
import logging
from typing import List, Optional, Sequence

from ..models.board import Board, TileIdSequence, TileInstance
from .generator import BoardGenerator, get_generator

logger = logging.getLogger(__name__)


def remove_tile_pair(tiles: Sequence[TileInstance], tile1_id: str, tile2_id: str) -> List[TileInstance]:
    """
    Mark two tiles as removed.

    The caller is responsible for checking that both tiles are free and
    match; nothing is validated here.

    Returns:
        New tile list; the input is left untouched.
    """
    return [t.removed() if t.id in (tile1_id, tile2_id) else t for t in tiles]


def shuffle_board(
    board: Board,
    generator: Optional[BoardGenerator] = None,
    seed: Optional[int] = None,
) -> Board:
    """
    Redeal the types of the active tiles over their positions.

    Uses the same reverse simulation as board generation on the active
    positions only. Removed tiles are kept as they are, and every active tile
    gets a new id.

    Args:
        board: Board to shuffle.
        generator: Generator providing randomness and settings.
        seed: Optional seed for a reproducible shuffle.

    Returns:
        New board. `solvable` is False when the fallback random deal was used.
    """
    generator = generator or get_generator()
    rng = generator.rng
    if seed is not None:
        rng.seed(seed)

    active_tiles = [t for t in board.tiles if not t.is_removed]
    removed_tiles = [t for t in board.tiles if t.is_removed]

    positions = [t.position for t in active_tiles]
    type_ids = [t.type_id for t in active_tiles]

    placement = generator.place_with_retries(
        positions,
        type_ids,
        generator.settings.max_shuffle_attempts,
        id_start=board.next_tile_id,
    )

    if placement is not None:
        return Board(
            layout=board.layout,
            tiles=placement.tiles + removed_tiles,
            solvable=True,
            next_tile_id=placement.last_id,
            solution=placement.solution,
        )

    logger.warning(
        f"Shuffle of {len(active_tiles)} tiles fell back to a random deal "
        f"(board is not guaranteed solvable)"
    )
    rng.shuffle(type_ids)
    ids = TileIdSequence(start=board.next_tile_id)
    new_tiles = [
        TileInstance(ids.next_id(), type_id, pos.x, pos.y, pos.z)
        for pos, type_id in zip(positions, type_ids)
    ]
    return Board(
        layout=board.layout,
        tiles=new_tiles + removed_tiles,
        solvable=False,
        next_tile_id=ids.last,
    )
