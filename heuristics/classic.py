from __future__ import annotations
from typing import List, Tuple

import numpy as np
from scipy.optimize import linear_sum_assignment
from sokoban_core.state import BoardState, Point


# ---- helpers

def manhattan(a: Point, b: Point) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _unplaced(state: BoardState) -> Tuple[List[Point], List[Point]]:
    """Boxes and goals left after dropping every box already on a goal."""
    placed = state.boxes & state.goals
    return sorted(state.boxes - placed), sorted(state.goals - placed)


def _distance_matrix(boxes: List[Point], goals: List[Point]) -> np.ndarray:
    """D[i, j] = Manhattan distance from boxes[i] to goals[j]."""
    b = np.asarray(boxes, dtype=np.int64).reshape(-1, 2)
    g = np.asarray(goals, dtype=np.int64).reshape(-1, 2)
    return np.abs(b[:, None, :] - g[None, :, :]).sum(axis=2)


# ---- classical heuristics

def h_zero(state: BoardState) -> int:
    return 0


def h_box_goal(state: BoardState) -> int:
    """Goals still waiting for a box, plus any box that can never get one."""
    placed = len(state.boxes & state.goals)
    surplus = max(0, len(state.boxes) - len(state.goals))
    return len(state.goals) - placed + surplus


def h_manhattan(state: BoardState) -> int:
    """Sum over boxes of the distance to the nearest free goal.

    Goals are not consumed, so several boxes may count the same goal.
    """
    boxes, goals = _unplaced(state)
    if not boxes:
        return 0
    if not goals:
        return len(boxes)
    return int(_distance_matrix(boxes, goals).min(axis=1).sum())


def greedy_assignment(boxes: List[Point], goals: List[Point]) -> int:
    """Boxes closest to any goal pick first; each claims its nearest unclaimed goal."""
    if not boxes or not goals:
        return 0
    D = _distance_matrix(boxes, goals)
    order = np.argsort(D.min(axis=1), kind="stable")
    claimed = np.zeros(len(goals), dtype=bool)
    total = 0
    for i in order:
        free = np.flatnonzero(~claimed)
        if free.size == 0:
            break
        j = free[np.argmin(D[i, free])]
        claimed[j] = True
        total += int(D[i, j])
    return total


def interaction_penalty(state: BoardState, boxes: List[Point]) -> int:
    """+2 per neighbouring box seen from each box, +1 per box touching a wall."""
    box_set = set(boxes)
    penalty = 0
    for r, c in boxes:
        adjacent = ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1))
        penalty += 2 * sum(1 for p in adjacent if p in box_set)
        if any(state.is_wall(p) for p in adjacent):
            penalty += 1
    return penalty


def h_improved_manhattan(state: BoardState) -> int:
    """Greedy box→goal assignment plus crowding penalties.

    Not admissible: the penalties may overestimate. Meant for greedy and A*
    runs where shortest solutions are not required.
    """
    boxes, goals = _unplaced(state)
    if not boxes:
        return 0
    if not goals:
        return len(boxes)
    return greedy_assignment(boxes, goals) + interaction_penalty(state, boxes)


def h_manhattan_hungarian(state: BoardState) -> int:
    """Cost = optimal matching of boxes → goals by Manhattan distance.
    Walls are not considered (this is a valid lower bound)."""
    boxes, goals = _unplaced(state)
    if not boxes:
        return 0
    if not goals:
        return len(boxes)
    C = _distance_matrix(boxes, goals)
    r, c = linear_sum_assignment(C)
    return int(C[r, c].sum())
