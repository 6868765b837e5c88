"""Frontier disciplines and child scoring for the search driver.

Each strategy answers two calls:

  start(frontier, initial)                 seed the frontier
  insert(frontier, current, cost, children) queue the children of `current`

`current` is the Node just expanded and `cost` the priority it was popped
with. Frontier items are Nodes, so the parent of a state travels with it
until the driver commits it to the backtrack map.
"""
from __future__ import annotations
from typing import Callable, Dict, List, NamedTuple, Optional, Protocol, Tuple, Union

from heuristics.selector import Heuristic, get_heuristic
from sokoban_core.state import BoardState
from .frontier import FifoQueue, LifoStack, PriorityQueue


class Node(NamedTuple):
    state: BoardState
    parent: Optional[BoardState]


Frontier = Union[FifoQueue, LifoStack, PriorityQueue]


class SearchStrategy(Protocol):
    name: str

    def new_frontier(self) -> Frontier: ...

    def start(self, frontier: Frontier, initial: BoardState) -> None: ...

    def insert(self, frontier: Frontier, current: Node, cost: float, children: List[BoardState]) -> None: ...


class BreadthFirst:
    name = "bfs"

    def new_frontier(self) -> Frontier:
        return FifoQueue()

    def start(self, frontier: Frontier, initial: BoardState) -> None:
        frontier.push(Node(initial, None))

    def insert(self, frontier: Frontier, current: Node, cost: float, children: List[BoardState]) -> None:
        for child in children:
            frontier.push(Node(child, current.state))


class DepthFirst:
    """Children are pushed on the stack one by one, so the last direction
    tried (LEFT) is explored first."""

    name = "dfs"

    def new_frontier(self) -> Frontier:
        return LifoStack()

    def start(self, frontier: Frontier, initial: BoardState) -> None:
        frontier.push(Node(initial, None))

    def insert(self, frontier: Frontier, current: Node, cost: float, children: List[BoardState]) -> None:
        for child in children:
            frontier.push(Node(child, current.state))


class UniformCost:
    """Plain step costs 1, a push costs 2."""

    name = "ucs"

    MOVE_COST = 1
    PUSH_COST = 2

    def new_frontier(self) -> Frontier:
        return PriorityQueue()

    def start(self, frontier: Frontier, initial: BoardState) -> None:
        frontier.push(Node(initial, None), 0)

    def step_cost(self, parent: BoardState, child: BoardState) -> int:
        if parent.is_push(child.move_taken):
            return self.PUSH_COST
        return self.MOVE_COST

    def insert(self, frontier: Frontier, current: Node, cost: float, children: List[BoardState]) -> None:
        for child in children:
            frontier.push(Node(child, current.state), cost + self.step_cost(current.state, child))


class AStar:
    """Ordered by h(child) alone; the heuristic stands for the whole estimate."""

    name = "astar"

    def __init__(self, heuristic: Heuristic) -> None:
        self.heuristic = heuristic

    def new_frontier(self) -> Frontier:
        return PriorityQueue()

    def start(self, frontier: Frontier, initial: BoardState) -> None:
        frontier.push(Node(initial, None), self.heuristic(initial))

    def insert(self, frontier: Frontier, current: Node, cost: float, children: List[BoardState]) -> None:
        for child in children:
            frontier.push(Node(child, current.state), self.heuristic(child))


class GreedyBestFirst:
    """Best-first on h(child), with one twist.

    The first child that scores strictly lower than the node being expanded
    makes that node go back into the frontier (once) next to the child.
    The copy is already visited when it comes out again, so it only shows
    up in the previously-seen count.
    """

    name = "greedy"

    def __init__(self, heuristic: Heuristic) -> None:
        self.heuristic = heuristic

    def new_frontier(self) -> Frontier:
        return PriorityQueue()

    def start(self, frontier: Frontier, initial: BoardState) -> None:
        frontier.push(Node(initial, None), self.heuristic(initial))

    def insert(self, frontier: Frontier, current: Node, cost: float, children: List[BoardState]) -> None:
        requeued = False
        for child in children:
            score = self.heuristic(child)
            if score < cost and not requeued:
                frontier.push(current, cost)
                requeued = True
            frontier.push(Node(child, current.state), score)


_UNWEIGHTED: Dict[str, Callable[[], SearchStrategy]] = {
    "bfs": BreadthFirst,
    "dfs": DepthFirst,
    "ucs": UniformCost,
}
_INFORMED: Dict[str, Callable[[Heuristic], SearchStrategy]] = {
    "greedy": GreedyBestFirst,
    "astar": AStar,
}
_ALIASES = {"b": "bfs", "d": "dfs", "u": "ucs", "g": "greedy", "a": "astar"}


def strategy_names() -> List[str]:
    return list(_UNWEIGHTED) + list(_INFORMED)


def needs_heuristic(name: str) -> bool:
    name = _ALIASES.get(name.lower(), name.lower())
    return name in _INFORMED


def make_strategy(name: str, heuristic: Union[str, Heuristic, None] = None) -> SearchStrategy:
    """Builds a strategy by name; greedy and astar need a heuristic (name or callable)."""
    key = _ALIASES.get(name.lower(), name.lower())
    if key in _UNWEIGHTED:
        return _UNWEIGHTED[key]()
    if key in _INFORMED:
        if heuristic is None:
            raise ValueError(f"strategy {key!r} needs a heuristic")
        h = get_heuristic(heuristic) if isinstance(heuristic, str) else heuristic
        return _INFORMED[key](h)
    raise ValueError(f"unknown strategy: {name}")


def parse_selector(code: str) -> Tuple[str, Optional[str]]:
    """Classic one-token selectors: b, d, u, gb, gm, gi, ab, am, ai."""
    code = code.lower().lstrip("-")
    if code in ("b", "d", "u"):
        return _ALIASES[code], None
    if len(code) == 2 and code[0] in ("g", "a") and code[1] in ("b", "m", "i"):
        return _ALIASES[code[0]], code[1]
    raise ValueError(f"unknown selector: {code}")
