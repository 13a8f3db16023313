"""Data models package.

This package contains tile, layout and board models plus the API schemas.
"""
from .tiles import (
    TileType,
    TileCatalog,
    tiles_match,
    get_catalog,
    STANDARD_TILES,
    BONUS_TILES,
)
from .layout import (
    Position,
    Layout,
    LayoutValidationError,
    make_layout,
    validate_layout,
    BOARD_SIZE,
)
from .layouts import (
    register_layout,
    get_layout,
    list_layouts,
    DEFAULT_LAYOUT_ID,
)
from .board import (
    TileInstance,
    TileIdSequence,
    Board,
    SimulationResult,
)

__all__ = [
    # Tiles
    "TileType",
    "TileCatalog",
    "tiles_match",
    "get_catalog",
    "STANDARD_TILES",
    "BONUS_TILES",
    # Layouts
    "Position",
    "Layout",
    "LayoutValidationError",
    "make_layout",
    "validate_layout",
    "BOARD_SIZE",
    "register_layout",
    "get_layout",
    "list_layouts",
    "DEFAULT_LAYOUT_ID",
    # Boards
    "TileInstance",
    "TileIdSequence",
    "Board",
    "SimulationResult",
]
