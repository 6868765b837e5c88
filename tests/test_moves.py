import pytest

from sokoban_core.errors import InvalidDirection
from sokoban_core.moves import (
    DIRECTIONS,
    Direction,
    direction_to_token,
    legal_moves,
    parse_solution,
    replay,
    successors,
)
from sokoban_core.parser import parse_board_str, parse_level_str

LVL = """
#####
#.@ #
# $ #
# . #
#####
"""


def test_successors_order_and_depth():
    s = parse_level_str(LVL)
    succs = successors(s)
    # up is a wall
    assert [n.move_taken for n in succs] == [Direction.RIGHT, Direction.DOWN, Direction.LEFT]
    assert all(n.depth == s.depth + 1 for n in succs)
    goal_states = [n for n in succs if n.is_solved()]
    assert len(goal_states) == 1
    assert goal_states[0].move_taken is Direction.DOWN


def test_cannot_walk_into_wall():
    s = parse_level_str("###\n#@#\n###")
    assert legal_moves(s) == []


def test_cannot_push_box_into_wall():
    s = parse_level_str("#####\n#@$##\n#####")
    assert not s.can_move(Direction.RIGHT)


def test_cannot_push_box_into_box():
    s = parse_level_str("######\n#@$$ #\n######")
    assert not s.can_move(Direction.RIGHT)


def test_push_onto_goal_allowed():
    s = parse_level_str("#####\n#@$.#\n#####")
    assert s.can_move(Direction.RIGHT)
    assert s.is_push(Direction.RIGHT)
    assert s.apply_move(Direction.RIGHT).is_solved()


def test_grid_edge_blocks():
    s = parse_board_str("3\n1\n@$ ")
    assert not s.can_move(Direction.LEFT)
    assert not s.can_move(Direction.UP)
    assert s.can_move(Direction.RIGHT)
    pushed = s.apply_move(Direction.RIGHT)
    # box now on the last column, nothing beyond it
    assert not pushed.can_move(Direction.RIGHT)


def test_box_count_conserved():
    s = parse_level_str("""
#######
#     #
# $$  #
# ..@ #
#######
""")
    frontier = [s]
    seen = {s}
    while frontier:
        cur = frontier.pop()
        assert len(cur.boxes) == 2
        for n in successors(cur):
            assert n.depth == cur.depth + 1
            if n not in seen:
                seen.add(n)
                frontier.append(n)
    assert len(seen) > 10


def test_tokens():
    assert [d.token for d in DIRECTIONS] == ["u", "r", "d", "l"]
    assert direction_to_token(Direction.LEFT) == "l"
    with pytest.raises(InvalidDirection):
        direction_to_token(None)
    with pytest.raises(InvalidDirection):
        direction_to_token((1, 1))


def test_parse_solution_and_replay():
    s = parse_level_str(LVL)
    moves = parse_solution("d")
    assert moves == [Direction.DOWN]
    assert replay(s, moves).is_solved()
    assert parse_solution("u, r, d, l") == list(DIRECTIONS)
    assert parse_solution("") == []
    with pytest.raises(InvalidDirection):
        parse_solution("u, x")
    with pytest.raises(ValueError):
        replay(s, [Direction.UP])
