from __future__ import annotations
from collections import OrderedDict
from typing import FrozenSet, Set, Tuple

from .state import BoardState, Point

# Simple LRU cache for deadlock checks keyed by (boxes, walls, goals)
_DeadlockKey = Tuple[FrozenSet[Point], FrozenSet[Point], FrozenSet[Point]]
_DEADLOCK_CACHE: "OrderedDict[_DeadlockKey, bool]" = OrderedDict()
_DEADLOCK_CACHE_MAX = 200000

# --- low-level helpers -------------------------------------------------------

def _walls_around(state: BoardState, box: Point) -> Tuple[bool, bool, bool, bool]:
    """(up, down, left, right) wall flags. Outside the grid is not a wall."""
    r, c = box
    return (
        state.is_wall((r - 1, c)),
        state.is_wall((r + 1, c)),
        state.is_wall((r, c - 1)),
        state.is_wall((r, c + 1)),
    )

# --- individual deadlock rules ----------------------------------------------

def is_corner_deadlock(state: BoardState, box: Point) -> bool:
    """Box (not on goal) with walls on two orthogonally adjacent sides."""
    if state.is_goal_cell(box):
        return False
    up, down, left, right = _walls_around(state, box)
    return (up and left) or (up and right) or (down and left) or (down and right)


def is_frozen(state: BoardState, box: Point) -> bool:
    """Box (not on goal) pinned on one axis by walls and boxed in along the other.

    Either (wall above or below) and (wall or box on the left) and (wall or
    box on the right), or the same with rows and columns swapped. A
    neighbouring box counts as fixed; whether it can itself move away is
    not examined.
    """
    if state.is_goal_cell(box):
        return False
    r, c = box
    up, down, left, right = _walls_around(state, box)
    if up or down:
        if (left or state.has_box((r, c - 1))) and (right or state.has_box((r, c + 1))):
            return True
    if left or right:
        if (up or state.has_box((r - 1, c))) and (down or state.has_box((r + 1, c))):
            return True
    return False


def frozen_boxes(state: BoardState) -> Set[Point]:
    return {b for b in state.boxes if is_frozen(state, b)}


def has_corner_deadlock(state: BoardState) -> bool:
    return any(is_corner_deadlock(state, b) for b in state.boxes)


def has_freeze_deadlock(state: BoardState) -> bool:
    return len(frozen_boxes(state)) > 0

# --- combined API ------------------------------------------------------------

def has_deadlock(state: BoardState) -> bool:
    """Corner or freeze deadlock on any box not standing on a goal."""
    key = (state.boxes, state.walls, state.goals)
    cached = _DEADLOCK_CACHE.get(key)
    if cached is not None:
        _DEADLOCK_CACHE.move_to_end(key)
        return cached

    deadlocked = has_corner_deadlock(state) or has_freeze_deadlock(state)

    _DEADLOCK_CACHE[key] = deadlocked
    if len(_DEADLOCK_CACHE) > _DEADLOCK_CACHE_MAX:
        _DEADLOCK_CACHE.popitem(last=False)
    return deadlocked


def clear_cache() -> None:
    _DEADLOCK_CACHE.clear()
