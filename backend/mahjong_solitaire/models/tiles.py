"""Tile type definitions and the match catalog."""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence


@dataclass(frozen=True)
class TileType:
    """A kind of tile. Instances of grouped types match across the group."""
    id: str
    suit: str
    name: str
    symbol: str = ""
    match_group: Optional[str] = None

    @property
    def match_key(self) -> str:
        """Key shared by every type this one matches."""
        return self.match_group or self.id

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "suit": self.suit,
            "name": self.name,
            "symbol": self.symbol,
            "match_group": self.match_group,
        }


def tiles_match(type1: TileType, type2: TileType) -> bool:
    """Check whether two tile types can be removed as a pair."""
    if type1.match_group or type2.match_group:
        return type1.match_group == type2.match_group
    return type1.id == type2.id


class TileCatalog:
    """Registry of tile types used to fill a board."""

    def __init__(self, standard: Sequence[TileType], bonus: Sequence[TileType] = ()):
        self.standard: List[TileType] = list(standard)
        self.bonus: List[TileType] = list(bonus)
        self._by_id: Dict[str, TileType] = {t.id: t for t in self.all_types}

    @property
    def all_types(self) -> List[TileType]:
        return self.standard + self.bonus

    @property
    def full_set_size(self) -> int:
        """Tile count of a complete set: four of each standard type plus grouped bonus tiles."""
        return len(self.standard) * 4 + len([t for t in self.bonus if t.match_group])

    def find(self, type_id: str) -> Optional[TileType]:
        return self._by_id.get(type_id)

    def get(self, type_id: str) -> TileType:
        """Get a tile type by id. Raises KeyError for unknown ids."""
        tile_type = self._by_id.get(type_id)
        if tile_type is None:
            raise KeyError(f"Unknown tile type: {type_id}")
        return tile_type

    def match_key(self, type_id: str) -> str:
        """Match key for a type id; unknown ids only match themselves."""
        tile_type = self._by_id.get(type_id)
        return tile_type.match_key if tile_type else type_id

    def ids_match(self, type_id1: str, type_id2: str) -> bool:
        type1 = self._by_id.get(type_id1)
        type2 = self._by_id.get(type_id2)
        return type1 is not None and type2 is not None and tiles_match(type1, type2)

    def __contains__(self, type_id: str) -> bool:
        return type_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)


# Unicode Mahjong Tiles block starts at U+1F000
_MAHJONG_BASE = 0x1F000

_WINDS = ["east", "south", "west", "north"]
_DRAGONS = ["red", "green", "white"]
_FLOWERS = ["plum", "orchid", "bamboo", "chrysanthemum"]
_SEASONS = ["spring", "summer", "autumn", "winter"]


def _build_standard_tiles() -> List[TileType]:
    tiles: List[TileType] = []

    for i, wind in enumerate(_WINDS):
        tiles.append(TileType(f"wind-{wind}", "wind", f"{wind.title()} Wind", chr(_MAHJONG_BASE + i)))
    for i, dragon in enumerate(_DRAGONS):
        tiles.append(TileType(f"dragon-{dragon}", "dragon", f"{dragon.title()} Dragon", chr(_MAHJONG_BASE + 4 + i)))

    suits = [("character", 0x07), ("bamboo", 0x10), ("dot", 0x19)]
    for suit, offset in suits:
        for rank in range(1, 10):
            tiles.append(
                TileType(
                    f"{suit}-{rank}",
                    suit,
                    f"{rank} of {suit.title()}s",
                    chr(_MAHJONG_BASE + offset + rank - 1),
                )
            )

    return tiles


def _build_bonus_tiles() -> List[TileType]:
    tiles: List[TileType] = []
    for i, flower in enumerate(_FLOWERS):
        tiles.append(
            TileType(f"flower-{flower}", "flower", f"{flower.title()} Flower",
                     chr(_MAHJONG_BASE + 0x22 + i), match_group="flower")
        )
    for i, season in enumerate(_SEASONS):
        tiles.append(
            TileType(f"season-{season}", "season", season.title(),
                     chr(_MAHJONG_BASE + 0x26 + i), match_group="season")
        )
    return tiles


STANDARD_TILES: List[TileType] = _build_standard_tiles()
BONUS_TILES: List[TileType] = _build_bonus_tiles()

# 34 standard types x 4 + 8 bonus tiles = 144
DEFAULT_CATALOG = TileCatalog(STANDARD_TILES, BONUS_TILES)


def get_catalog() -> TileCatalog:
    """Get the default tile catalog."""
    return DEFAULT_CATALOG
