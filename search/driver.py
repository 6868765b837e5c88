from __future__ import annotations
import logging
import time
from enum import Enum
from typing import Callable, Dict, List, Optional, Set

from sokoban_core.deadlocks import has_deadlock
from sokoban_core.errors import NoSolution, Timeout
from sokoban_core.moves import direction_to_token, successors
from sokoban_core.state import BoardState
from .strategies import Frontier, SearchStrategy

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000


class SearchStatus(Enum):
    READY = "ready"
    RUNNING = "running"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"
    TIMED_OUT = "timed_out"


def reconstruct(parent: Dict[BoardState, Optional[BoardState]], goal: BoardState) -> List[BoardState]:
    path = [goal]
    cur = goal
    while parent[cur] is not None:
        cur = parent[cur]  # type: ignore
        path.append(cur)
    path.reverse()
    return path


class SearchDriver:
    """Runs one search over the board graph.

    The strategy decides frontier order; the driver owns the frontier, the
    visited set and the backtrack map, and enforces the timeout once per
    loop iteration. Duplicates are dropped when popped, not when pushed.

    A driver runs once: search() ends in SOLVED, EXHAUSTED or TIMED_OUT and
    refuses to start again.
    """

    def __init__(
        self,
        initial: BoardState,
        strategy: SearchStrategy,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        deadlock_fn: Callable[[BoardState], bool] = has_deadlock,
    ) -> None:
        self.initial = initial
        self.strategy = strategy
        self.timeout_ms = timeout_ms
        self.deadlock_fn = deadlock_fn
        self.status = SearchStatus.READY

        self.frontier: Frontier = strategy.new_frontier()
        self.visited: Set[BoardState] = set()
        self.backtrack: Dict[BoardState, Optional[BoardState]] = {}
        self.previously_seen = 0
        self.path: List[BoardState] = []
        self._t0: Optional[float] = None
        self._t1: Optional[float] = None

    def set_timeout(self, milliseconds: int) -> None:
        self.timeout_ms = milliseconds

    # ---- telemetry
    @property
    def nodes_explored(self) -> int:
        return len(self.visited)

    @property
    def frontier_size(self) -> int:
        return len(self.frontier)

    @property
    def visited_size(self) -> int:
        return len(self.visited)

    @property
    def elapsed_ms(self) -> int:
        if self._t0 is None:
            return 0
        end = self._t1 if self._t1 is not None else time.perf_counter()
        return int((end - self._t0) * 1000)

    def stats(self) -> Dict[str, int]:
        return {
            "nodes": self.nodes_explored,
            "previously_seen": self.previously_seen,
            "frontier": self.frontier_size,
            "visited": self.visited_size,
            "elapsed_ms": self.elapsed_ms,
        }

    # ---- search
    def _expand(self, state: BoardState) -> List[BoardState]:
        return [child for child in successors(state) if child not in self.visited]

    def _finish(self, status: SearchStatus) -> None:
        self._t1 = time.perf_counter()
        self.status = status
        logger.info("search %s: %s", status.value, self.stats())

    def search(self) -> str:
        """Returns the solution as "u, r, d, l" tokens, root to goal.

        Raises Timeout when the budget runs out and NoSolution when the
        frontier empties first.
        """
        if self.status is not SearchStatus.READY:
            raise RuntimeError(f"search already finished ({self.status.value})")
        self.status = SearchStatus.RUNNING
        self._t0 = time.perf_counter()
        logger.debug("search start: strategy=%s timeout_ms=%d", self.strategy.name, self.timeout_ms)

        self.strategy.start(self.frontier, self.initial)
        limit_s = self.timeout_ms / 1000.0

        while len(self.frontier) > 0:
            if time.perf_counter() - self._t0 > limit_s:
                self._finish(SearchStatus.TIMED_OUT)
                raise Timeout(
                    f"Search timed out after {self.timeout_ms} milliseconds", stats=self.stats()
                )

            cost, node = self.frontier.pop()
            state = node.state
            if state in self.visited:
                self.previously_seen += 1
                continue
            self.visited.add(state)
            self.backtrack[state] = node.parent

            if state.is_solved():
                self.path = reconstruct(self.backtrack, state)
                self._finish(SearchStatus.SOLVED)
                return self.solution_string()

            if self.deadlock_fn(state):
                continue

            children = self._expand(state)
            if children:
                self.strategy.insert(self.frontier, node, cost, children)

        self._finish(SearchStatus.EXHAUSTED)
        raise NoSolution("Solution does not exist", stats=self.stats())

    def solution_string(self) -> str:
        return ", ".join(direction_to_token(s.move_taken) for s in self.path[1:])


def solve(
    initial: BoardState,
    strategy: SearchStrategy,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> str:
    return SearchDriver(initial, strategy, timeout_ms=timeout_ms).search()
