"""Game session: tile selection, undo history, hints and shuffles for one game."""
from enum import Enum
from typing import List, Optional, Set, Tuple

from ..models.board import Board, TileInstance
from ..models.layout import Layout
from ..models.layouts import DEFAULT_LAYOUT_ID, get_layout
from .generator import BoardGenerator, get_generator
from .matcher import check_stuck, check_win, get_hint
from .mutator import remove_tile_pair, shuffle_board
from .occlusion import is_free_tile


class SelectionOutcome(str, Enum):
    """What a tile click did."""
    IGNORED = "ignored"        # Game over, unknown, removed or blocked tile
    SELECTED = "selected"      # First tile of a pair picked
    DESELECTED = "deselected"  # Same tile clicked twice
    RESELECTED = "reselected"  # Second tile did not match, it becomes the selection
    MATCHED = "matched"        # Pair removed


class GameSession:
    """
    One game on one board.

    The session owns the board and serializes every move. It checks that a
    pair is free and matching before asking the mutator to remove it.
    """

    def __init__(
        self,
        layout: Optional[Layout] = None,
        generator: Optional[BoardGenerator] = None,
        seed: Optional[int] = None,
        board: Optional[Board] = None,
    ):
        self.generator = generator or get_generator()
        layout = layout or get_layout(DEFAULT_LAYOUT_ID)
        # Resume a saved board instead of dealing a new one
        self.board: Board = board if board is not None else self.generator.generate(layout, seed=seed)
        self.selected_tile_id: Optional[str] = None
        self.hint_pair: Optional[Tuple[str, str]] = None
        self.history: List[Board] = []
        self.matches_made = 0
        self.is_complete = check_win(self.board.tiles)
        self.is_stuck = check_stuck(self.board.tiles, self.generator.catalog)

    @property
    def tiles(self) -> List[TileInstance]:
        return self.board.tiles

    @property
    def tiles_remaining(self) -> int:
        return self.board.tiles_remaining

    @property
    def can_undo(self) -> bool:
        return len(self.history) > 0

    @property
    def free_tile_ids(self) -> Set[str]:
        active = self.board.active_tiles
        return {t.id for t in active if is_free_tile(t, active)}

    def _find_tile(self, tile_id: str) -> Optional[TileInstance]:
        for tile in self.board.tiles:
            if tile.id == tile_id:
                return tile
        return None

    def select_tile(self, tile_id: str) -> SelectionOutcome:
        """Handle a click on a tile."""
        if self.is_complete or self.is_stuck:
            return SelectionOutcome.IGNORED

        tile = self._find_tile(tile_id)
        if tile is None or tile.is_removed or not is_free_tile(tile, self.board.tiles):
            return SelectionOutcome.IGNORED

        if self.selected_tile_id is None:
            self.selected_tile_id = tile_id
            self.hint_pair = None
            return SelectionOutcome.SELECTED

        if self.selected_tile_id == tile_id:
            self.selected_tile_id = None
            return SelectionOutcome.DESELECTED

        selected = self._find_tile(self.selected_tile_id)
        if selected is None or not self.generator.catalog.ids_match(selected.type_id, tile.type_id):
            self.selected_tile_id = tile_id
            return SelectionOutcome.RESELECTED

        self.history.append(self.board)
        self.board = self.board.with_tiles(remove_tile_pair(self.board.tiles, selected.id, tile.id))
        self.matches_made += 1
        self.selected_tile_id = None
        self.hint_pair = None
        self._refresh_status()
        return SelectionOutcome.MATCHED

    def undo(self) -> bool:
        """Restore the board from before the last match. Returns False if there is nothing to undo."""
        if not self.history:
            return False

        self.board = self.history.pop()
        self.matches_made = max(0, self.matches_made - 1)
        self.selected_tile_id = None
        self.hint_pair = None
        self._refresh_status()
        return True

    def shuffle(self, seed: Optional[int] = None) -> Board:
        """Redeal the remaining tiles. History is kept."""
        self.board = shuffle_board(self.board, self.generator, seed=seed)
        self.selected_tile_id = None
        self.hint_pair = None
        self._refresh_status()
        return self.board

    def show_hint(self) -> Optional[Tuple[str, str]]:
        self.hint_pair = get_hint(self.board.tiles, self.generator.catalog)
        self.selected_tile_id = None
        return self.hint_pair

    def new_game(self, layout: Optional[Layout] = None, seed: Optional[int] = None) -> Board:
        """Start over on a fresh board, on the same layout unless another is given."""
        self.board = self.generator.generate(layout or self.board.layout, seed=seed)
        self.selected_tile_id = None
        self.hint_pair = None
        self.history = []
        self.matches_made = 0
        self._refresh_status()
        return self.board

    def _refresh_status(self) -> None:
        self.is_complete = check_win(self.board.tiles)
        self.is_stuck = not self.is_complete and check_stuck(self.board.tiles, self.generator.catalog)
