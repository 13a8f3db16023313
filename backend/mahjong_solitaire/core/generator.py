"""Board generator: solvable tile placement by reverse simulation.

A cleared board is the starting point. Pairs are placed one at a time, each
onto two slots that would be free given only the tiles placed before them.
Playing the placement order backwards is then a valid solution: when a pair
comes up for removal, everything placed after it has already been removed,
and everything placed before it was taken into account when the pair was
placed.
"""
import logging
import math
import random
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import Settings, get_settings
from ..models.board import Board, TileIdSequence, TileInstance
from ..models.layout import Layout, Position
from ..models.tiles import TileCatalog, TileType, get_catalog
from .occlusion import covers, in_same_row, is_left_neighbour, is_right_neighbour

logger = logging.getLogger(__name__)


@dataclass
class Placement:
    """Outcome of one successful reverse-simulation run."""
    tiles: List[TileInstance]
    solution: List[Tuple[str, str]] = field(default_factory=list)
    last_id: int = 0


class BlockerIndex:
    """
    Occlusion relations between the slots of a position list.

    Geometry never changes during generation, so which slots can cover or
    flank which is computed once. Availability checks then only look at
    occupancy flags.
    """

    def __init__(self, positions: Sequence[Position]):
        count = len(positions)
        self.above: List[List[int]] = [[] for _ in range(count)]
        self.below: List[List[int]] = [[] for _ in range(count)]
        self.left: List[List[int]] = [[] for _ in range(count)]
        self.right: List[List[int]] = [[] for _ in range(count)]
        self.row: List[List[int]] = [[] for _ in range(count)]

        for i, pos in enumerate(positions):
            for j, other in enumerate(positions):
                if i == j:
                    continue
                if covers(other, pos):
                    self.above[i].append(j)
                    self.below[j].append(i)
                if in_same_row(other, pos):
                    self.row[i].append(j)
                    if is_left_neighbour(other, pos):
                        self.left[i].append(j)
                    elif is_right_neighbour(other, pos):
                        self.right[i].append(j)

    def is_available(self, i: int, occupied: List[bool]) -> bool:
        """Slot i would be free given the occupied slots."""
        if any(occupied[j] for j in self.above[i]):
            return False
        blocked_left = any(occupied[j] for j in self.left[i])
        blocked_right = any(occupied[j] for j in self.right[i])
        return not blocked_left or not blocked_right

    def is_settled(self, i: int, occupied: List[bool]) -> bool:
        """
        Slot i can be filled without stranding a neighbour.

        Everything underneath must be filled already, and the slot must either
        start its row or extend a placed run. Filling slots in other orders
        leaves holes that can never become available.
        """
        if not all(occupied[j] for j in self.below[i]):
            return False
        if not any(occupied[j] for j in self.row[i]):
            return True
        return any(occupied[j] for j in self.left[i]) or any(occupied[j] for j in self.right[i])


def pair_up(type_ids: Sequence[str], catalog: TileCatalog) -> Tuple[List[Tuple[str, str]], List[str]]:
    """
    Split type ids into matching pairs.

    Returns:
        Tuple of (pairs, leftovers). Leftovers are types without a partner.
    """
    groups: Dict[str, List[str]] = {}
    for type_id in type_ids:
        groups.setdefault(catalog.match_key(type_id), []).append(type_id)

    pairs: List[Tuple[str, str]] = []
    leftovers: List[str] = []
    for group in groups.values():
        while len(group) >= 2:
            pairs.append((group.pop(), group.pop()))
        leftovers.extend(group)

    return pairs, leftovers


class BoardGenerator:
    """Generates boards that can always be cleared."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        catalog: Optional[TileCatalog] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or get_settings()
        self.catalog = catalog or get_catalog()
        self._rng = rng or random.Random()

    @property
    def rng(self) -> random.Random:
        return self._rng

    def generate(self, layout: Layout, seed: Optional[int] = None) -> Board:
        """
        Generate a board for a layout.

        Args:
            layout: Layout whose positions are filled.
            seed: Optional seed for a reproducible board.

        Returns:
            Board. `solvable` is False when every attempt dead-ended and the
            tiles were dealt without the solvability guarantee.

        Raises:
            ValueError: If the layout has an odd number of positions.
        """
        if seed is not None:
            self._rng.seed(seed)

        start_time = time.time()
        positions = list(layout.positions)
        type_ids = [t.id for t in self.build_tile_multiset(len(positions))]

        placement = self.place_with_retries(
            positions, type_ids, self.settings.max_generation_attempts
        )
        generation_time_ms = int((time.time() - start_time) * 1000)

        if placement is not None:
            logger.debug(f"Generated '{layout.id}' board in {generation_time_ms}ms")
            return Board(
                layout=layout,
                tiles=placement.tiles,
                solvable=True,
                next_tile_id=placement.last_id,
                solution=placement.solution,
            )

        logger.warning(
            f"Reverse simulation failed for layout '{layout.id}' after "
            f"{self.settings.max_generation_attempts} attempts, dealing tiles in input order "
            f"(board is not guaranteed solvable)"
        )
        ids = TileIdSequence()
        tiles = [
            TileInstance(ids.next_id(), type_id, pos.x, pos.y, pos.z)
            for pos, type_id in zip(positions, type_ids)
        ]
        return Board(layout=layout, tiles=tiles, solvable=False, next_tile_id=ids.last)

    def build_tile_multiset(self, position_count: int) -> List[TileType]:
        """
        Choose the tile types for a board of the given size.

        A full-size board uses the whole catalog: four of each standard type
        plus each grouped bonus tile once. Smaller boards draw types at random
        without replacement, four copies each (two when fewer than four slots
        remain), recycling the pool when it runs out.
        """
        if position_count % 2 != 0:
            raise ValueError(f"Cannot pair tiles on {position_count} positions (odd count)")

        if position_count == self.catalog.full_set_size:
            full_set = [t for t in self.catalog.standard for _ in range(4)]
            full_set += [t for t in self.catalog.bonus if t.match_group]
            return full_set

        tiles: List[TileType] = []
        available = list(self.catalog.standard)
        while len(tiles) < position_count:
            tile_type = available.pop(self._rng.randrange(len(available)))
            count = 4 if position_count - len(tiles) >= 4 else 2
            tiles.extend([tile_type] * count)

            if not available:
                available = list(self.catalog.standard)

        return tiles

    def place_with_retries(
        self,
        positions: Sequence[Position],
        type_ids: Sequence[str],
        max_attempts: int,
        id_start: int = 0,
    ) -> Optional[Placement]:
        """Run reverse simulation until it succeeds or the attempt budget is spent."""
        pairs, leftovers = pair_up(type_ids, self.catalog)
        if leftovers or len(pairs) * 2 != len(positions):
            logger.debug(
                f"Cannot place {len(type_ids)} tiles on {len(positions)} positions "
                f"({len(leftovers)} unpaired)"
            )
            return None

        index = BlockerIndex(positions)
        for attempt in range(1, max_attempts + 1):
            placement = self.assign_solvable_types(positions, pairs, index, id_start)
            if placement is not None:
                if attempt > 1:
                    logger.debug(f"Reverse simulation succeeded on attempt {attempt}")
                return placement
            logger.debug(f"Reverse simulation dead-ended on attempt {attempt}")

        return None

    def assign_solvable_types(
        self,
        positions: Sequence[Position],
        pairs: Sequence[Tuple[str, str]],
        index: Optional[BlockerIndex] = None,
        id_start: int = 0,
    ) -> Optional[Placement]:
        """
        Place every pair by reverse simulation.

        Args:
            positions: Slots to fill, exactly two per pair.
            pairs: Matching type id pairs.
            index: Precomputed blocker index for `positions`.
            id_start: Number of the last id already used on the board.

        Returns:
            Placement with tiles in position order, or None on a dead end.
        """
        index = index or BlockerIndex(positions)
        order = list(pairs)
        self._rng.shuffle(order)

        occupied = [False] * len(positions)
        remaining = list(range(len(positions)))
        assigned: Dict[int, TileInstance] = {}
        placed_pairs: List[Tuple[str, str]] = []
        ids = TileIdSequence(start=id_start)

        for type1, type2 in order:
            picked = self._pick_slots(remaining, occupied, index, positions)
            if picked is None:
                return None

            slot1, slot2 = picked
            pos1, pos2 = positions[slot1], positions[slot2]
            tile1 = TileInstance(ids.next_id(), type1, pos1.x, pos1.y, pos1.z)
            tile2 = TileInstance(ids.next_id(), type2, pos2.x, pos2.y, pos2.z)
            assigned[slot1] = tile1
            assigned[slot2] = tile2
            placed_pairs.append((tile1.id, tile2.id))

            occupied[slot1] = occupied[slot2] = True
            remaining.remove(slot1)
            remaining.remove(slot2)

        return Placement(
            tiles=[assigned[i] for i in sorted(assigned)],
            solution=list(reversed(placed_pairs)),
            last_id=ids.last,
        )

    def _pick_slots(
        self,
        remaining: List[int],
        occupied: List[bool],
        index: BlockerIndex,
        positions: Sequence[Position],
    ) -> Optional[Tuple[int, int]]:
        """Pick two slots for the next pair, preferring well separated ones."""
        candidates = [i for i in remaining if index.is_available(i, occupied)]
        if len(candidates) < 2:
            return None

        settled = [i for i in candidates if index.is_settled(i, occupied)]
        first_pool = settled or candidates

        fallback: Optional[Tuple[int, int]] = None
        for _ in range(self.settings.pair_distance_tries):
            first = self._rng.choice(first_pool)
            partners = self._partners(first, candidates, occupied, index)
            if not partners:
                continue
            second = self._rng.choice(partners)
            if self._distance(positions[first], positions[second]) >= self.settings.min_pair_distance:
                return first, second
            if fallback is None:
                fallback = (first, second)

        if fallback is not None:
            return fallback

        # No luck at random, walk every candidate before declaring a dead end
        preferred = set(first_pool)
        rest = [i for i in candidates if i not in preferred]
        ordered = list(first_pool)
        self._rng.shuffle(ordered)
        self._rng.shuffle(rest)
        for first in ordered + rest:
            partners = self._partners(first, candidates, occupied, index)
            if partners:
                return first, self._rng.choice(partners)

        return None

    def _partners(
        self,
        first: int,
        candidates: List[int],
        occupied: List[bool],
        index: BlockerIndex,
    ) -> List[int]:
        """
        Slots that can hold the other tile of a pair whose first tile is at `first`.

        The partner must be available once `first` is placed, and must not
        block `first` in turn, otherwise neither tile could be removed.
        """
        occupied[first] = True
        try:
            valid = []
            for j in candidates:
                if j == first or not index.is_available(j, occupied):
                    continue
                occupied[j] = True
                first_still_free = index.is_available(first, occupied)
                occupied[j] = False
                if first_still_free:
                    valid.append(j)

            settled = [j for j in valid if index.is_settled(j, occupied)]
        finally:
            occupied[first] = False

        return settled or valid

    def _distance(self, pos1: Position, pos2: Position) -> float:
        """Weighted distance; horizontal spread counts the most."""
        dx = (pos1.x - pos2.x) * self.settings.horizontal_distance_weight
        dy = (pos1.y - pos2.y) * self.settings.vertical_distance_weight
        dz = (pos1.z - pos2.z) * self.settings.layer_distance_weight
        return math.sqrt(dx * dx + dy * dy + dz * dz)


def generate_board(
    layout: Layout,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Board:
    """Generate a board for `layout` with a fresh generator."""
    return BoardGenerator(rng=rng).generate(layout, seed=seed)


# Singleton instance
_generator = None


def get_generator() -> BoardGenerator:
    """Get or create generator singleton instance."""
    global _generator
    if _generator is None:
        _generator = BoardGenerator()
    return _generator
