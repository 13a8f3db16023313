"""Board data models and structures."""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Tuple

from .layout import Layout, Position

TILE_ID_PREFIX = "tile"


@dataclass(frozen=True)
class TileInstance:
    """A tile placed on a board. Only `is_removed` ever changes, by copy."""
    id: str
    type_id: str
    x: float
    y: float
    z: float
    is_removed: bool = False

    @property
    def position(self) -> Position:
        return Position(self.x, self.y, self.z)

    def removed(self) -> "TileInstance":
        """Copy of this tile flagged as removed."""
        return replace(self, is_removed=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "type_id": self.type_id,
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "is_removed": self.is_removed,
        }


class TileIdSequence:
    """Issues board-unique tile ids ("tile-1", "tile-2", ...)."""

    def __init__(self, start: int = 0, prefix: str = TILE_ID_PREFIX):
        self._last = start
        self._prefix = prefix

    @property
    def last(self) -> int:
        """Number of the most recently issued id."""
        return self._last

    def next_id(self) -> str:
        self._last += 1
        return f"{self._prefix}-{self._last}"


@dataclass
class Board:
    """A layout plus every tile instance on it, active and removed."""
    layout: Layout
    tiles: List[TileInstance]
    solvable: bool = True
    next_tile_id: int = 0
    # Forward removal order proven by construction; empty for degraded boards
    solution: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def active_tiles(self) -> List[TileInstance]:
        return [t for t in self.tiles if not t.is_removed]

    @property
    def tiles_remaining(self) -> int:
        return len(self.active_tiles)

    def with_tiles(self, tiles: List[TileInstance]) -> "Board":
        """
        Same board with a different tile list; the solution no longer applies.

        `solvable` is carried over unchanged: it describes how the tiles were
        last dealt, not whether the new tile list can still be cleared.
        """
        return replace(self, tiles=tiles, solution=[])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "layout_id": self.layout.id,
            "tiles": [t.to_dict() for t in self.tiles],
            "solvable": self.solvable,
            "next_tile_id": self.next_tile_id,
            "solution": [list(pair) for pair in self.solution],
        }


@dataclass
class SimulationResult:
    """Result of repeated board playthroughs."""
    clear_rate: float
    avg_moves: float
    min_moves: int
    max_moves: int
    iterations: int
    strategy: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "clear_rate": round(self.clear_rate, 3),
            "avg_moves": round(self.avg_moves, 2),
            "min_moves": self.min_moves,
            "max_moves": self.max_moves,
            "iterations": self.iterations,
            "strategy": self.strategy,
        }
