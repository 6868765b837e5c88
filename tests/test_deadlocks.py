from collections import deque

import pytest

from sokoban_core.parser import parse_level_str
from sokoban_core.moves import successors
from sokoban_core.deadlocks import (
    clear_cache,
    frozen_boxes,
    has_corner_deadlock,
    has_deadlock,
    has_freeze_deadlock,
    is_corner_deadlock,
    is_frozen,
)


@pytest.fixture(autouse=True)
def fresh_cache():
    clear_cache()
    yield
    clear_cache()


def test_corner_deadlock():
    lvl = """
#####
# $##
# @ #
#  .#
#####
"""
    s = parse_level_str(lvl)
    # box in the upper right corner (not goal) → deadlock
    assert is_corner_deadlock(s, (1, 2))
    assert has_corner_deadlock(s)
    assert has_deadlock(s)


def test_box_on_goal_in_corner_is_fine():
    s = parse_level_str("""
#####
#*  #
# @ #
#####
""")
    assert not has_deadlock(s)


def test_grid_edge_is_not_a_wall():
    s = parse_level_str("$  .\n  @ ")
    assert not has_corner_deadlock(s)
    assert not has_deadlock(s)


def test_freeze_wall_above_boxes_both_sides():
    lvl = """
#######
#  #  #
# $$$ #
#. .. #
#   @ #
#######
"""
    s = parse_level_str(lvl)
    assert not has_corner_deadlock(s)
    assert frozen_boxes(s) == {(2, 3)}
    assert has_freeze_deadlock(s)
    assert has_deadlock(s)


def test_freeze_wall_left_boxes_above_and_below():
    lvl = """
#####
#$  #
#$  #
#$  #
#...#
# @ #
#####
"""
    s = parse_level_str(lvl)
    assert is_frozen(s, (2, 1))


def test_box_along_wall_with_free_sides_not_frozen():
    s = parse_level_str("""
#######
#@ $ .#
#######
""")
    assert frozen_boxes(s) == set()
    assert not has_deadlock(s)


def _reachable(start):
    seen = {start}
    edges = {}
    q = deque([start])
    while q:
        cur = q.popleft()
        edges[cur] = successors(cur)
        for n in edges[cur]:
            if n not in seen:
                seen.add(n)
                q.append(n)
    return seen, edges


def _can_reach_goal(start):
    seen, edges = _reachable(start)
    preds = {s: [] for s in seen}
    for s, outs in edges.items():
        for n in outs:
            preds[n].append(s)
    good = {s for s in seen if s.is_solved()}
    q = deque(good)
    while q:
        cur = q.popleft()
        for p in preds[cur]:
            if p not in good:
                good.add(p)
                q.append(p)
    return good


SMALL_BOARDS = [
    """
#####
#.@ #
# $ #
# . #
#####
""",
    """
######
#    #
# $$ #
#.. @#
######
""",
    """
#######
#@ $ .#
#######
""",
    """
######
#.   #
# $# #
#  $ #
#.@  #
######
""",
]


def test_no_solvable_state_is_flagged():
    for lvl in SMALL_BOARDS:
        s = parse_level_str(lvl)
        solvable = _can_reach_goal(s)
        assert s in solvable
        flagged = [st for st in solvable if has_deadlock(st)]
        assert flagged == []
