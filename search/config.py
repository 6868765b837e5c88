from __future__ import annotations
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

import yaml

from heuristics.selector import heuristic_names
from .driver import DEFAULT_TIMEOUT_MS
from .strategies import make_strategy, strategy_names, SearchStrategy


@dataclass(frozen=True)
class SearchConfig:
    strategy: str = "astar"
    heuristic: str = "improved"
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self) -> None:
        if self.strategy not in strategy_names():
            raise ValueError(f"unknown strategy: {self.strategy}")
        if self.heuristic not in heuristic_names():
            raise ValueError(f"unknown heuristic: {self.heuristic}")
        if not isinstance(self.timeout_ms, int) or self.timeout_ms < 0:
            raise ValueError(f"timeout_ms must be a non-negative integer, got {self.timeout_ms!r}")

    def override(self, **kwargs: Any) -> "SearchConfig":
        """Copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})

    def build_strategy(self) -> SearchStrategy:
        return make_strategy(self.strategy, self.heuristic)


def config_from_dict(raw: Optional[Dict[str, Any]]) -> SearchConfig:
    raw = dict(raw or {})
    known = {f.name for f in fields(SearchConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")
    return SearchConfig(**raw)


def load_config(path: Optional[str]) -> SearchConfig:
    """Reads a YAML config; no path means built-in defaults."""
    if path is None:
        return SearchConfig()
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    return config_from_dict(cfg)
