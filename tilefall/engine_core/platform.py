"""
Platform Graph - The set of tiles and everything derived from it.

The platform graph is the only authority on whether a position is
currently supported. It owns:
- Tile stability (stable -> unstable -> destroyed)
- Adjacency and legal move computation
- Connectivity-safe selection of tiles to destroy

Design: tiles are never marked if doing so would split the remaining
stable region into more than one component, except when the candidate
pool is too small to keep that guarantee.
"""

from __future__ import annotations
import logging
import random
from typing import Iterable

from .grid import GridPosition
from .state import Tile, TileStability
from .results import ErrorCode, MarkResult


logger = logging.getLogger(__name__)


class PlatformGraph:
    """
    Tiles of a W x H platform and their stability.

    Randomness comes from the injected `rng` so selections replay
    deterministically under a fixed seed.
    """

    def __init__(
        self,
        width: int = 7,
        height: int = 7,
        rng: random.Random | None = None,
        tiles: Iterable[Tile] | None = None,
    ):
        self.width = width
        self.height = height
        self.rng = rng or random.Random()

        if tiles is None:
            tiles = [
                Tile(GridPosition(x, y))
                for x in range(width)
                for y in range(height)
            ]

        self._tiles: dict[GridPosition, Tile] = {}
        self._stable: set[GridPosition] = set()
        self._unstable: set[GridPosition] = set()
        for tile in tiles:
            self._tiles[tile.position] = tile
            if tile.stability == TileStability.STABLE:
                self._stable.add(tile.position)
            elif tile.stability == TileStability.UNSTABLE:
                self._unstable.add(tile.position)

    @classmethod
    def from_tiles(cls, tiles: Iterable[Tile], rng: random.Random | None = None) -> PlatformGraph:
        """Build a platform of arbitrary shape (snapshots, tests)."""
        tiles = list(tiles)
        width = max((t.position.x for t in tiles), default=-1) + 1
        height = max((t.position.y for t in tiles), default=-1) + 1
        return cls(width=width, height=height, rng=rng, tiles=tiles)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def tiles(self) -> list[Tile]:
        """All tiles ever created, destroyed ones included."""
        return [self._tiles[p] for p in sorted(self._tiles)]

    def get_tile(self, position: GridPosition) -> Tile | None:
        return self._tiles.get(position)

    def stable_positions(self) -> set[GridPosition]:
        return set(self._stable)

    def unstable_positions(self) -> set[GridPosition]:
        return set(self._unstable)

    def supported_positions(self) -> set[GridPosition]:
        return self._stable | self._unstable

    @property
    def stable_count(self) -> int:
        return len(self._stable)

    def is_stable(self, position: GridPosition) -> bool:
        return position in self._stable

    def is_unstable(self, position: GridPosition) -> bool:
        return position in self._unstable

    def has_support(self, position: GridPosition) -> bool:
        """A missing tile and a destroyed tile are both unsupported."""
        return position in self._stable or position in self._unstable

    def spawn_positions(self) -> list[GridPosition]:
        """
        Cells formed by crossing {0, mid, max} on each axis.

        Degenerate grids collapse duplicates. Only supported cells count.
        """
        xs = sorted({0, self.width // 2, self.width - 1})
        ys = sorted({0, self.height // 2, self.height - 1})
        return [
            GridPosition(x, y)
            for x in xs
            for y in ys
            if self.has_support(GridPosition(x, y))
        ]

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def legal_moves(
        self,
        position: GridPosition,
        include_unstable: bool = False,
        include_occupied: bool = False,
        occupied: Iterable[GridPosition] = (),
    ) -> list[GridPosition]:
        """
        Single-step destinations from `position`, in N/E/S/W order.

        Args:
            position: Where the actor stands
            include_unstable: Also allow tiles marked for destruction
            include_occupied: Allow cells in `occupied`
            occupied: Positions of live actors
        """
        blocked = set() if include_occupied else set(occupied)
        moves = []
        for neighbor in position.neighbors():
            if neighbor in blocked:
                continue
            if neighbor in self._stable or (include_unstable and neighbor in self._unstable):
                moves.append(neighbor)
        return moves

    # ------------------------------------------------------------------
    # Tile lifecycle
    # ------------------------------------------------------------------

    def mark_unstable(self, count: int) -> MarkResult:
        """
        Mark up to `count` stable tiles as unstable.

        Candidates are sampled without replacement. A candidate that would
        leave an island is rejected while the candidate pool still exceeds
        what is needed; otherwise it is accepted. Never marks the last
        stable tile.
        """
        result = MarkResult(requested=count)
        checked: set[GridPosition] = set()

        while len(self._unstable) < count and len(self._stable) > 1:
            candidates = sorted(self._stable - checked)
            if not candidates:
                break

            position = candidates[self.rng.randrange(len(candidates))]
            checked.add(position)

            if len(candidates) - len(self._unstable) > count:
                if self.creates_island(position):
                    continue

            self._stable.discard(position)
            self._unstable.add(position)
            self._tiles[position].stability = TileStability.UNSTABLE
            result.marked.append(position)

        if len(self._unstable) < count:
            result.error_code = ErrorCode.INSUFFICIENT_PLATFORM
            logger.warning(
                "Only %d of %d tiles could be marked unstable (%d stable left)",
                len(self._unstable), count, len(self._stable),
            )
        else:
            logger.debug("Marked unstable: %s", ", ".join(str(p) for p in result.marked))

        return result

    def destroy_marked(self) -> list[GridPosition]:
        """Destroy every unstable tile. Returns the destroyed positions."""
        destroyed = sorted(self._unstable)
        for position in destroyed:
            self._tiles[position].stability = TileStability.DESTROYED
        self._unstable.clear()
        return destroyed

    # ------------------------------------------------------------------
    # Connectivity
    # ------------------------------------------------------------------

    def creates_island(self, position: GridPosition) -> bool:
        """
        Would removing `position` split its stable neighbours apart?

        Flood fills from the first stable neighbour over stable tiles with
        the candidate already visited; any unreached stable neighbour means
        an island.
        """
        neighbors = [n for n in position.neighbors() if n in self._stable]
        if not neighbors:
            return False

        visited = self._flood_fill(neighbors[0], self._stable, visited={position})
        return any(n not in visited for n in neighbors)

    def is_connected(self, positions: Iterable[GridPosition] | None = None) -> bool:
        """
        Whether `positions` (default: all supported tiles) form one component.
        """
        region = set(positions) if positions is not None else self.supported_positions()
        if len(region) <= 1:
            return True
        start = next(iter(region))
        return self._flood_fill(start, region) >= region

    @staticmethod
    def _flood_fill(
        start: GridPosition,
        region: set[GridPosition],
        visited: set[GridPosition] | None = None,
    ) -> set[GridPosition]:
        """Iterative 4-connected flood fill restricted to `region`."""
        visited = set(visited or ())
        visited.add(start)
        stack = [start]
        while stack:
            current = stack.pop()
            for neighbor in current.neighbors():
                if neighbor in region and neighbor not in visited:
                    visited.add(neighbor)
                    stack.append(neighbor)
        return visited
