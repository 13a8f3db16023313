"""Board playthrough simulation and solution replay."""
import random
import statistics
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..models.board import Board, SimulationResult, TileInstance
from ..models.tiles import TileCatalog, get_catalog
from .matcher import check_win, find_all_matches
from .mutator import remove_tile_pair
from .occlusion import is_free_tile


class SimulationStrategy(str, Enum):
    """Simulation strategy enumeration."""
    HINT = "hint"      # Always play the hinted (first) match
    RANDOM = "random"  # Play any available match


@dataclass
class PlaythroughResult:
    """Outcome of a single simulated game."""
    cleared: bool
    moves: int


def verify_solution(board: Board, catalog: Optional[TileCatalog] = None) -> bool:
    """
    Replay a board's recorded solution.

    Every pair must be free and matching at its turn, and the board must be
    empty at the end. Degraded boards have no solution and fail.
    """
    catalog = catalog or get_catalog()
    if not board.solution and board.active_tiles:
        return False

    tiles = list(board.tiles)
    for tile1_id, tile2_id in board.solution:
        by_id = {t.id: t for t in tiles}
        tile1 = by_id.get(tile1_id)
        tile2 = by_id.get(tile2_id)
        if tile1 is None or tile2 is None:
            return False
        if not is_free_tile(tile1, tiles) or not is_free_tile(tile2, tiles):
            return False
        if not catalog.ids_match(tile1.type_id, tile2.type_id):
            return False
        tiles = remove_tile_pair(tiles, tile1_id, tile2_id)

    return check_win(tiles)


class BoardSimulator:
    """Plays boards to completion or until stuck."""

    def __init__(self, catalog: Optional[TileCatalog] = None):
        self.catalog = catalog or get_catalog()
        self._rng = random.Random()

    def simulate(
        self,
        board: Board,
        iterations: int = 20,
        strategy: str = "hint",
        seed: Optional[int] = None,
    ) -> SimulationResult:
        """
        Play a board repeatedly.

        Args:
            board: Board to play.
            iterations: Number of playthroughs.
            strategy: Strategy to use (hint/random).
            seed: Optional seed for reproducible runs.

        Returns:
            SimulationResult with statistics.
        """
        if seed is not None:
            self._rng.seed(seed)

        strategy = SimulationStrategy(strategy)
        results = [self.play(board.tiles, strategy) for _ in range(iterations)]

        cleared_count = sum(1 for r in results if r.cleared)
        moves_list = [r.moves for r in results]

        return SimulationResult(
            clear_rate=cleared_count / len(results) if results else 0,
            avg_moves=statistics.mean(moves_list) if moves_list else 0,
            min_moves=min(moves_list) if moves_list else 0,
            max_moves=max(moves_list) if moves_list else 0,
            iterations=iterations,
            strategy=strategy.value,
        )

    def play(self, tiles: List[TileInstance], strategy: SimulationStrategy) -> PlaythroughResult:
        """Remove matches until the board is cleared or stuck."""
        tiles = list(tiles)
        moves = 0

        while not check_win(tiles):
            matches = find_all_matches(tiles, self.catalog)
            if not matches:
                return PlaythroughResult(cleared=False, moves=moves)

            if strategy == SimulationStrategy.RANDOM:
                tile1, tile2 = self._rng.choice(matches)
            else:
                tile1, tile2 = matches[0]

            tiles = remove_tile_pair(tiles, tile1.id, tile2.id)
            moves += 1

        return PlaythroughResult(cleared=True, moves=moves)


# Singleton instance
_simulator = None


def get_simulator() -> BoardSimulator:
    """Get or create simulator singleton instance."""
    global _simulator
    if _simulator is None:
        _simulator = BoardSimulator()
    return _simulator
