"""API dependencies."""
from ..core.generator import get_generator, BoardGenerator
from ..core.simulator import get_simulator, BoardSimulator
from ..models.tiles import get_catalog, TileCatalog


def get_board_generator() -> BoardGenerator:
    """Dependency for board generator."""
    return get_generator()


def get_board_simulator() -> BoardSimulator:
    """Dependency for board simulator."""
    return get_simulator()


def get_tile_catalog() -> TileCatalog:
    """Dependency for tile catalog."""
    return get_catalog()
