from __future__ import annotations
from typing import Dict, Optional


class SokobanError(Exception):
    """Base class for every error raised by the solver."""


class MalformedPuzzle(SokobanError, ValueError):
    """Puzzle text does not follow the header/grid format."""


class InvalidDirection(SokobanError):
    """A move could not be mapped to one of the four directions."""


class SearchFailure(SokobanError):
    """A search ended without a solution.

    stats holds the driver telemetry at the moment the search stopped.
    """

    def __init__(self, message: str = "", stats: Optional[Dict[str, int]] = None) -> None:
        super().__init__(message)
        self.stats: Dict[str, int] = dict(stats or {})


class NoSolution(SearchFailure):
    """Frontier exhausted without reaching a solved state."""


class Timeout(SearchFailure):
    """Wall-clock budget ran out while states were still waiting."""
