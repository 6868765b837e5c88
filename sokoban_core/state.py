from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, FrozenSet, Mapping, Optional, Tuple

if TYPE_CHECKING:
    from .moves import Direction

__all__ = [
    "BoardState",
    "Point",
    "Grid",
    "PLAYER",
    "WALL",
    "BOX",
    "GOAL",
    "EMPTY",
    "CHAR_TO_FLAGS",
    "FLAGS_TO_CHAR",
]

Point = Tuple[int, int]
Grid = Tuple[Tuple[int, ...], ...]

# Cell bitflags
EMPTY = 0
PLAYER = 1 << 0
WALL = 1 << 1
BOX = 1 << 2
GOAL = 1 << 3

CHAR_TO_FLAGS: Mapping[str, int] = MappingProxyType({
    "#": WALL,
    ".": GOAL,
    "@": PLAYER,
    "+": PLAYER | GOAL,
    "$": BOX,
    "*": BOX | GOAL,
    " ": EMPTY,
})

FLAGS_TO_CHAR: Mapping[int, str] = MappingProxyType(
    {flags: ch for ch, flags in CHAR_TO_FLAGS.items()}
)


def _replace_cell(grid: Grid, point: Point, set_flags: int = 0, clear_flags: int = 0) -> Grid:
    """Returns a grid with one cell rewritten. Untouched rows are shared."""
    r, c = point
    row = grid[r]
    new_row = row[:c] + ((row[c] & ~clear_flags) | set_flags,) + row[c + 1:]
    return grid[:r] + (new_row,) + grid[r + 1:]


@dataclass(frozen=True, slots=True)
class BoardState:
    """
    Immutable snapshot of a Sokoban board.

    The grid stores per-cell bitflags (PLAYER, WALL, BOX, GOAL), indexed as
    grid[row][col]. player and boxes duplicate the grid for O(1) access.

    Identity is (player, boxes) only: grid, goals, move_taken and depth do not
    take part in equality or hashing. Walls and goals never change within a
    puzzle, so the pair fully determines the configuration. walls is kept
    alongside goals as a frozenset for cheap lookups.
    """

    grid: Grid = field(compare=False, repr=False)
    player: Point
    boxes: FrozenSet[Point]
    goals: FrozenSet[Point] = field(compare=False, repr=False)
    walls: FrozenSet[Point] = field(compare=False, repr=False)
    move_taken: Optional["Direction"] = field(default=None, compare=False)
    depth: int = field(default=0, compare=False)

    # ---- dimensions
    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    # ---- cell checks
    def in_bounds(self, point: Point) -> bool:
        r, c = point
        return 0 <= r < len(self.grid) and 0 <= c < len(self.grid[r])

    def cell_has(self, point: Point, flag: int) -> bool:
        """Outside the grid nothing is present."""
        if not self.in_bounds(point):
            return False
        r, c = point
        return (self.grid[r][c] & flag) != 0

    def is_wall(self, point: Point) -> bool:
        return self.cell_has(point, WALL)

    def has_box(self, point: Point) -> bool:
        return point in self.boxes

    def is_goal_cell(self, point: Point) -> bool:
        return point in self.goals

    # ---- state properties
    def is_solved(self) -> bool:
        """All boxes are on goals: boxes ⊆ goals."""
        return self.boxes <= self.goals

    # ---- moves
    def _step(self, direction: "Direction") -> Tuple[Point, Point]:
        dr, dc = direction.delta
        r, c = self.player
        dest = (r + dr, c + dc)
        return dest, (dest[0] + dr, dest[1] + dc)

    def is_push(self, direction: "Direction") -> bool:
        """The destination of this move holds a box."""
        dest, _ = self._step(direction)
        return self.cell_has(dest, BOX)

    def can_move(self, direction: "Direction") -> bool:
        """Blocked by a wall, by the grid edge, or by a box that cannot be pushed."""
        dest, beyond = self._step(direction)
        if not self.in_bounds(dest) or self.cell_has(dest, WALL):
            return False
        if self.cell_has(dest, BOX):
            if not self.in_bounds(beyond):
                return False
            return not (self.cell_has(beyond, WALL) or self.cell_has(beyond, BOX))
        return True

    def apply_move(self, direction: "Direction") -> "BoardState":
        """New state after moving the player. Only valid when can_move(direction)."""
        dest, beyond = self._step(direction)
        grid = _replace_cell(self.grid, self.player, clear_flags=PLAYER)
        grid = _replace_cell(grid, dest, set_flags=PLAYER)
        boxes = self.boxes
        if self.cell_has(dest, BOX):
            grid = _replace_cell(grid, dest, clear_flags=BOX)
            grid = _replace_cell(grid, beyond, set_flags=BOX)
            boxes = (boxes - {dest}) | {beyond}
        return BoardState(
            grid=grid,
            player=dest,
            boxes=boxes,
            goals=self.goals,
            walls=self.walls,
            move_taken=direction,
            depth=self.depth + 1,
        )
