from __future__ import annotations
from typing import Callable, Dict, List

from heuristics.classic import (
    h_box_goal,
    h_improved_manhattan,
    h_manhattan,
    h_manhattan_hungarian,
    h_zero,
)
from sokoban_core.state import BoardState

Heuristic = Callable[[BoardState], int]

_HEURISTICS: Dict[str, Heuristic] = {
    "zero": h_zero,
    "boxgoal": h_box_goal,
    "manhattan": h_manhattan,
    "improved": h_improved_manhattan,
    "hungarian": h_manhattan_hungarian,
}

# single-letter codes of the classic command line (-gb, -am, -ai, ...)
_ALIASES = {
    "b": "boxgoal",
    "m": "manhattan",
    "i": "improved",
}


def heuristic_names() -> List[str]:
    return list(_HEURISTICS)


def canonical_name(name: str) -> str:
    name = name.lower()
    return _ALIASES.get(name, name)


def get_heuristic(name: str) -> Heuristic:
    name = canonical_name(name)
    if name not in _HEURISTICS:
        raise ValueError(f"unknown heuristic: {name}")
    return _HEURISTICS[name]
