"""Board layout geometry models."""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

# A complete board holds 144 tiles; centering artifacts may drop a few.
BOARD_SIZE = 144
MIN_LAYOUT_SIZE = 140


class LayoutValidationError(ValueError):
    """Raised when a layout cannot be registered."""


@dataclass(frozen=True)
class Position:
    """A slot on the board. x/y may be half-integers for staggered layers."""
    x: float
    y: float
    z: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass(frozen=True)
class Layout:
    """A named, ordered set of positions."""
    id: str
    name: str
    description: str = ""
    positions: Tuple[Position, ...] = field(default_factory=tuple)

    @property
    def size(self) -> int:
        return len(self.positions)

    @property
    def layer_count(self) -> int:
        return len({p.z for p in self.positions})

    def to_dict(self, include_positions: bool = True) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "size": self.size,
            "layers": self.layer_count,
        }
        if include_positions:
            data["positions"] = [p.to_dict() for p in self.positions]
        return data


def make_layout(
    layout_id: str,
    name: str,
    description: str,
    points: Iterable[Tuple[float, float, float]],
) -> Layout:
    """Build a layout from raw (x, y, z) triples, keeping at most BOARD_SIZE of them."""
    positions = tuple(Position(x, y, z) for x, y, z in points)
    return Layout(id=layout_id, name=name, description=description, positions=positions[:BOARD_SIZE])


def validate_layout(layout: Layout) -> Tuple[bool, Optional[str]]:
    """
    Validate layout geometry before registration.

    Args:
        layout: Layout to validate.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not layout.id:
        return False, "Layout id must not be empty"

    count = layout.size
    if count < MIN_LAYOUT_SIZE or count > BOARD_SIZE:
        return False, (
            f"Layout '{layout.id}' has {count} positions, "
            f"expected {MIN_LAYOUT_SIZE}-{BOARD_SIZE}"
        )

    # Tiles are removed in pairs, an odd board can never be cleared
    if count % 2 != 0:
        return False, f"Layout '{layout.id}' has an odd number of positions ({count})"

    return True, None
