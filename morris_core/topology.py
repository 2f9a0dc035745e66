from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Tuple

RINGS = 3
POINTS_PER_RING = 8
NUM_POSITIONS = RINGS * POINTS_PER_RING


@dataclass(frozen=True)
class Position:
    """A point on the board: ring 0 is the outer square, index runs clockwise from the top-left corner."""
    ring: int
    index: int

    def __post_init__(self) -> None:
        if not (0 <= self.ring < RINGS) or not (0 <= self.index < POINTS_PER_RING):
            raise ValueError(f"Position out of range: ({self.ring}, {self.index})")

    @property
    def flat(self) -> int:
        return self.ring * POINTS_PER_RING + self.index

    @property
    def is_corner(self) -> bool:
        return self.index % 2 == 0

    def __str__(self) -> str:
        return f"({self.ring},{self.index})"


@dataclass(frozen=True)
class Mill:
    """Three positions in a line; p1-p2 and p2-p3 are adjacent."""
    p1: Position
    p2: Position
    p3: Position

    def positions(self) -> Tuple[Position, Position, Position]:
        return (self.p1, self.p2, self.p3)

    def __contains__(self, p: object) -> bool:
        return p in (self.p1, self.p2, self.p3)


ALL_POSITIONS: Tuple[Position, ...] = tuple(
    Position(r, i) for r in range(RINGS) for i in range(POINTS_PER_RING)
)


def position_at(ring: int, index: int) -> Position:
    """Returns the canonical Position from the flat table."""
    if not (0 <= ring < RINGS) or not (0 <= index < POINTS_PER_RING):
        raise ValueError(f"Position out of range: ({ring}, {index})")
    return ALL_POSITIONS[ring * POINTS_PER_RING + index]


def _build_mills() -> Tuple[Mill, ...]:
    mills: List[Mill] = []
    # Ring mills: one per side of each square, corner-midpoint-corner.
    for r in range(RINGS):
        for j in range(0, POINTS_PER_RING, 2):
            mills.append(Mill(
                position_at(r, j),
                position_at(r, j + 1),
                position_at(r, (j + 2) % POINTS_PER_RING),
            ))
    # Spoke mills join the three squares through their midpoints.
    for j in range(1, POINTS_PER_RING, 2):
        mills.append(Mill(position_at(0, j), position_at(1, j), position_at(2, j)))
    return tuple(mills)


def _is_adjacent(a: Position, b: Position) -> bool:
    if a.ring == b.ring:
        return (a.index - b.index) % POINTS_PER_RING in (1, POINTS_PER_RING - 1)
    return a.index == b.index and a.index % 2 == 1 and abs(a.ring - b.ring) == 1


def _build_neighbours() -> Dict[Position, FrozenSet[Position]]:
    table: Dict[Position, FrozenSet[Position]] = {}
    for p in ALL_POSITIONS:
        table[p] = frozenset(q for q in ALL_POSITIONS if _is_adjacent(p, q))
    return table


ALL_MILLS: Tuple[Mill, ...] = _build_mills()

_MILLS_BY_POSITION: Dict[Position, Tuple[Mill, ...]] = {
    p: tuple(m for m in ALL_MILLS if p in m) for p in ALL_POSITIONS
}
_NEIGHBOURS: Dict[Position, FrozenSet[Position]] = _build_neighbours()


def mills_of(p: Position) -> Tuple[Mill, ...]:
    """The two mills through p: two sides of its square for a corner, one side and a spoke for a midpoint."""
    return _MILLS_BY_POSITION[p]


def neighbours_of(p: Position) -> FrozenSet[Position]:
    return _NEIGHBOURS[p]


def are_adjacent(a: Position, b: Position) -> bool:
    return b in _NEIGHBOURS[a]


def iter_positions() -> Iterable[Position]:
    """Iterates over all positions in ring/index order."""
    return iter(ALL_POSITIONS)
