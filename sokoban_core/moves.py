from __future__ import annotations
from enum import Enum
from typing import Iterable, List, Tuple

from .errors import InvalidDirection
from .state import BoardState


class Direction(Enum):
    """The four player moves, as (row, col) deltas."""

    UP = (-1, 0)
    RIGHT = (0, 1)
    DOWN = (1, 0)
    LEFT = (0, -1)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value

    @property
    def token(self) -> str:
        return _TOKENS[self]


_TOKENS = {
    Direction.UP: "u",
    Direction.RIGHT: "r",
    Direction.DOWN: "d",
    Direction.LEFT: "l",
}

# expansion order
DIRECTIONS: Tuple[Direction, ...] = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)


def direction_to_token(direction: object) -> str:
    """Maps a direction to its solution token (u, r, d, l)."""
    if not isinstance(direction, Direction):
        raise InvalidDirection(f"Non-existent direction: {direction!r}")
    return direction.token


def legal_moves(state: BoardState) -> List[Direction]:
    return [d for d in DIRECTIONS if state.can_move(d)]


def successors(state: BoardState) -> List[BoardState]:
    """Every state one player step away, in UP, RIGHT, DOWN, LEFT order."""
    return [state.apply_move(d) for d in DIRECTIONS if state.can_move(d)]


def replay(state: BoardState, moves: Iterable[Direction]) -> BoardState:
    """Applies a move sequence, raising ValueError on the first illegal move."""
    for i, d in enumerate(moves):
        if not state.can_move(d):
            raise ValueError(f"illegal move {d.token!r} at step {i}")
        state = state.apply_move(d)
    return state


def parse_solution(solution: str) -> List[Direction]:
    """Inverse of the solution string: "u, r, d" -> [UP, RIGHT, DOWN]."""
    by_token = {d.token: d for d in Direction}
    moves: List[Direction] = []
    for tok in solution.split(","):
        tok = tok.strip()
        if not tok:
            continue
        if tok not in by_token:
            raise InvalidDirection(f"Non-existent direction: {tok!r}")
        moves.append(by_token[tok])
    return moves
