"""Built-in board layouts.

Each layout is a static list of (x, y, z) slots. Layouts are data: the engine
only reads their positions. Every layout is validated when it is registered,
so an entry with the wrong number of slots fails at import time rather than
during a game.
"""
from typing import Dict, List, Tuple

from .layout import Layout, LayoutValidationError, make_layout, validate_layout

Point = Tuple[float, float, float]


def _row(y: float, start_x: float, count: int, z: float = 0) -> List[Point]:
    return [(start_x + i, y, z) for i in range(count)]


def _rect(x0: float, y0: float, width: int, height: int, z: float) -> List[Point]:
    return [(x0 + x, y0 + y, z) for y in range(height) for x in range(width)]


def _mobile_pyramid_points() -> List[Point]:
    points: List[Point] = []
    points += _rect(0, 0, 6, 8, 0)
    points += _rect(0.5, 0.5, 5, 7, 1)
    points += _rect(1, 1, 4, 6, 2)
    points += _rect(1.5, 1.5, 3, 5, 3)
    points += _rect(2, 2, 2, 4, 4)
    points += _rect(2, 2.5, 2, 3, 5)
    points += [(2.5, y + 2, 6) for y in range(4)]

    # Cap the peak with extra stacked slots until the board is full
    while len(points) < 144:
        layer = (len(points) - 136) // 4 + 7
        cap = [(2.5, 3, layer), (2.5, 4, layer), (3, 3.5, layer), (2, 3.5, layer)]
        points += cap[:144 - len(points)]

    return points


def _tower_points() -> List[Point]:
    points: List[Point] = []
    points += _rect(6, 0, 6, 12, 0)
    points += _rect(7, 1, 4, 10, 1)
    points += _rect(7, 3, 4, 6, 2)
    points += _rect(8, 4, 2, 4, 3)
    return points


def _flat_points() -> List[Point]:
    return _rect(0, 0, 18, 8, 0)


def _simple_points() -> List[Point]:
    return _rect(0, 0, 12, 10, 0) + _rect(4, 2, 4, 6, 1)


def _turtle_points() -> List[Point]:
    points: List[Point] = [(3, 0, 0), (4, 0, 0)]
    points += _row(1, 1, 12)
    for y in range(2, 6):
        points += _row(y, 0, 14)
    points += _row(6, 1, 12)
    points += [(3, 7, 0), (4, 7, 0)]

    points += _rect(2, 1, 10, 6, 1)
    points += _rect(4, 2, 6, 4, 2)
    points += _rect(5, 3, 4, 2, 3)
    points += [(6, 3, 4), (7, 3, 4), (6, 4, 4), (7, 4, 4)]
    points.append((6.5, 3.5, 5))
    return points


def _large_points() -> List[Point]:
    points: List[Point] = []
    points += _rect(0, 0, 6, 6, 0)
    points += _rect(0.5, 0.5, 6, 6, 1)
    points += _rect(0, 0, 6, 6, 2)
    points += _rect(1.5, 1.5, 4, 4, 3)
    points += _rect(1, 1, 4, 4, 4)
    points += _rect(2.5, 2.5, 2, 2, 5)
    return points


def _pyramid_points() -> List[Point]:
    points: List[Point] = []
    for z, size in enumerate([12, 10, 8, 6, 4]):
        points += _rect(z, z, size, size, z)
    return points


def _dragon_points() -> List[Point]:
    points: List[Point] = []
    points += [(x, y, 0) for x in range(16) for y in range(3)]
    points += [(x, y, 0) for y in range(3, 6) for x in range(13, 16)]
    points += [(x, y, 0) for x in range(16) for y in range(6, 9)]

    points += [(x, 1, 1) for x in range(2, 14)]
    points += [(x, 7, 1) for x in range(2, 14)]

    for x in range(4, 12):
        points += [(x, 1, 2), (x, 7, 2)]
    return points


def _fortress_points() -> List[Point]:
    points: List[Point] = _rect(0, 0, 14, 8, 0)

    towers = [(0, 0), (0, 7), (12, 0), (12, 7)]
    for tx, ty in towers:
        points += [(tx, ty, 1), (tx + 1, ty, 1)]

    points += _rect(4, 2, 6, 4, 1)
    points += _rect(5, 3, 4, 2, 2)
    points += [(tx + 0.5, ty + 0.5, 2) for tx, ty in towers]
    return points


# Mobile-friendly layouts first
_BUILTIN_LAYOUTS = [
    make_layout("mobile-pyramid", "Mobile Pyramid", "Classic pyramid with big tiles", _mobile_pyramid_points()),
    make_layout("tower", "Imperial Tower", "A tall tower for portrait screens", _tower_points()),
    make_layout("flat", "Flat", "Single layer, everything visible", _flat_points()),
    make_layout("simple", "Simple", "Two layers, compact and easy", _simple_points()),
    make_layout("turtle", "Turtle", "The classic Mahjong Solitaire layout", _turtle_points()),
    make_layout("large", "Large", "Fewer tiles per layer, more stacking", _large_points()),
    make_layout("pyramid", "Pyramid", "A simple square pyramid", _pyramid_points()),
    make_layout("dragon", "Dragon", "A serpentine dragon shape", _dragon_points()),
    make_layout("fortress", "Fortress", "A castle with corner towers", _fortress_points()),
]

_registry: Dict[str, Layout] = {}


def register_layout(layout: Layout) -> Layout:
    """
    Validate and register a layout.

    Raises:
        LayoutValidationError: If the layout geometry is malformed or the id is taken.
    """
    is_valid, error = validate_layout(layout)
    if not is_valid:
        raise LayoutValidationError(error)
    if layout.id in _registry:
        raise LayoutValidationError(f"Layout '{layout.id}' is already registered")
    _registry[layout.id] = layout
    return layout


def unregister_layout(layout_id: str) -> None:
    _registry.pop(layout_id, None)


def get_layout(layout_id: str) -> Layout:
    """Get a registered layout by ID."""
    layout = _registry.get(layout_id)
    if layout is None:
        raise KeyError(f"Layout {layout_id} not found")
    return layout


def list_layouts() -> List[Layout]:
    """All registered layouts in registration order."""
    return list(_registry.values())


DEFAULT_LAYOUT_ID = "turtle"

for _layout in _BUILTIN_LAYOUTS:
    register_layout(_layout)
