"""Pydantic schemas for API request/response validation."""
from pydantic import BaseModel, Field
from typing import List, Optional, Tuple

from .board import Board, TileInstance
from .layout import BOARD_SIZE, Layout, Position


class PositionSchema(BaseModel):
    """A board slot."""
    x: float
    y: float
    z: float

    def to_position(self) -> Position:
        return Position(self.x, self.y, self.z)


class TileSchema(BaseModel):
    """A tile instance on a board."""
    id: str = Field(..., description="Tile id, unique per board")
    type_id: str = Field(..., description="Tile type id from the catalog")
    x: float
    y: float
    z: float
    is_removed: bool = Field(default=False, description="Whether the tile has been matched")

    @classmethod
    def from_tile(cls, tile: TileInstance) -> "TileSchema":
        return cls(**tile.to_dict())

    def to_tile(self) -> TileInstance:
        return TileInstance(self.id, self.type_id, self.x, self.y, self.z, self.is_removed)


class TileTypeSchema(BaseModel):
    """A tile type from the catalog."""
    id: str
    suit: str
    name: str
    symbol: str = ""
    match_group: Optional[str] = None


class TileCatalogResponse(BaseModel):
    """Response schema for the tile catalog."""
    tile_types: List[TileTypeSchema] = Field(default=[], description="All tile types")
    full_set_size: int = Field(..., description="Tiles in a complete set")


class LayoutSummary(BaseModel):
    """Layout metadata without positions."""
    id: str
    name: str
    description: str = ""
    size: int = Field(..., description="Number of positions")
    layers: int = Field(..., description="Number of distinct layers")


class LayoutDetail(LayoutSummary):
    """Layout metadata with positions."""
    positions: List[PositionSchema] = Field(default=[], description="Board slots")


class LayoutListResponse(BaseModel):
    """Response schema for layout listing."""
    layouts: List[LayoutSummary] = Field(default=[], description="Registered layouts")


class GenerateBoardRequest(BaseModel):
    """Request schema for board generation."""
    layout_id: Optional[str] = Field(default=None, description="Registered layout id")
    positions: Optional[List[PositionSchema]] = Field(
        default=None,
        max_length=BOARD_SIZE,
        description="Explicit positions, used when no layout id is given",
    )
    seed: Optional[int] = Field(default=None, description="Seed for a reproducible board")


class BoardResponse(BaseModel):
    """Response schema for generated or shuffled boards."""
    layout_id: str = Field(..., description="Layout the board was built on")
    tiles: List[TileSchema] = Field(default=[], description="All tiles, active and removed")
    solvable: bool = Field(..., description="False when the board was dealt without the solvability guarantee")
    next_tile_id: int = Field(..., description="Number of the last tile id issued")
    solution: List[Tuple[str, str]] = Field(default=[], description="Removal order that clears the board")
    free_tile_ids: List[str] = Field(default=[], description="Currently selectable tiles")

    @classmethod
    def from_board(cls, board: Board, free_tile_ids: List[str]) -> "BoardResponse":
        return cls(
            layout_id=board.layout.id,
            tiles=[TileSchema.from_tile(t) for t in board.tiles],
            solvable=board.solvable,
            next_tile_id=board.next_tile_id,
            solution=board.solution,
            free_tile_ids=free_tile_ids,
        )


class TilesRequest(BaseModel):
    """Request schema carrying a board's tiles."""
    tiles: List[TileSchema] = Field(..., description="All tiles on the board")

    def to_tiles(self) -> List[TileInstance]:
        return [t.to_tile() for t in self.tiles]


class BoardStateResponse(BaseModel):
    """Response schema for board state queries."""
    free_tile_ids: List[str] = Field(default=[], description="Currently selectable tiles")
    matches: List[Tuple[str, str]] = Field(default=[], description="Available matching pairs")
    hint: Optional[Tuple[str, str]] = Field(default=None, description="Suggested pair")
    tiles_remaining: int = Field(..., description="Active tile count")
    is_won: bool
    is_stuck: bool


class RemovePairRequest(TilesRequest):
    """Request schema for removing a matched pair."""
    tile_ids: Tuple[str, str] = Field(..., description="Ids of the two tiles to remove")


class RemovePairResponse(BaseModel):
    """Response schema for pair removal."""
    tiles: List[TileSchema] = Field(default=[], description="Tiles after removal")
    tiles_remaining: int
    is_won: bool
    is_stuck: bool


class ShuffleRequest(TilesRequest):
    """Request schema for shuffling a board."""
    layout_id: str = Field(..., description="Layout the board was built on")
    next_tile_id: int = Field(default=0, ge=0, description="Number of the last tile id issued")
    seed: Optional[int] = Field(default=None, description="Seed for a reproducible shuffle")


class SimulateRequest(BaseModel):
    """Request schema for board simulation."""
    layout_id: str = Field(..., description="Layout to generate a board on")
    seed: Optional[int] = Field(default=None, description="Seed for board generation and play")
    iterations: int = Field(default=5, ge=1, le=100, description="Number of playthroughs")
    strategy: str = Field(default="hint", description="Simulation strategy (hint/random)")


class SimulateResponse(BaseModel):
    """Response schema for board simulation."""
    clear_rate: float = Field(..., ge=0, le=1, description="Clear rate (0-1)")
    avg_moves: float = Field(..., description="Average pairs removed")
    min_moves: int
    max_moves: int
    iterations: int
    strategy: str
    solvable: bool = Field(..., description="Whether the simulated board was built solvable")
    solution_verified: bool = Field(..., description="Whether the recorded solution clears the board")


class ErrorResponse(BaseModel):
    """Error response schema."""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(default=None, description="Detailed error information")


def layout_summary(layout: Layout) -> LayoutSummary:
    return LayoutSummary(**layout.to_dict(include_positions=False))


def layout_detail(layout: Layout) -> LayoutDetail:
    return LayoutDetail(**layout.to_dict(include_positions=True))
