from sokoban_core.parser import parse_level_str
from sokoban_core.moves import Direction
from sokoban_core.render import render_ascii
from sokoban_core.state import BOX, GOAL, PLAYER, WALL, BoardState

LVL = """
#####
#.@ #
# $ #
# . #
#####
"""

CORRIDOR = """
#######
#@ $ .#
#######
"""


def test_parse_and_render_basic():
    s = parse_level_str(LVL)
    txt = render_ascii(s)
    assert txt.splitlines()[0] == "#####"
    assert s.width == 5 and s.height == 5
    assert s.player == (1, 2)
    assert s.boxes == frozenset({(2, 2)})
    assert s.goals == frozenset({(1, 1), (3, 2)})
    assert s.move_taken is None and s.depth == 0


def test_equality_ignores_depth_and_move():
    s = parse_level_str(CORRIDOR)
    back = s.apply_move(Direction.RIGHT).apply_move(Direction.LEFT)
    assert back.depth == 2
    assert back.move_taken is Direction.LEFT
    assert back == s
    assert hash(back) == hash(s)
    assert len({s, back}) == 1


def test_equality_ignores_grid():
    s = parse_level_str(CORRIDOR)
    other = BoardState(grid=((0,),), player=s.player, boxes=s.boxes,
                       goals=frozenset(), walls=frozenset())
    assert other == s
    assert hash(other) == hash(s)


def test_different_boxes_not_equal():
    s = parse_level_str(CORRIDOR)
    moved = BoardState(grid=s.grid, player=s.player, boxes=frozenset({(1, 4)}),
                       goals=s.goals, walls=s.walls)
    assert moved != s


def test_cell_has_flags_and_out_of_bounds():
    s = parse_level_str(LVL)
    assert s.cell_has((0, 0), WALL)
    assert s.cell_has((1, 2), PLAYER)
    assert s.cell_has((2, 2), BOX)
    assert s.cell_has((3, 2), GOAL)
    assert not s.cell_has((2, 1), WALL | BOX | GOAL | PLAYER)
    for p in [(-1, 0), (0, -1), (5, 0), (0, 5), (-2, -2), (99, 99)]:
        assert s.cell_has(p, WALL) is False


def test_is_solved():
    s = parse_level_str(LVL)
    assert not s.is_solved()
    solved = s.apply_move(Direction.DOWN)
    assert solved.is_solved()
    assert parse_level_str("#####\n#@*.#\n#####").is_solved()


def test_apply_move_keeps_parent_untouched():
    s = parse_level_str(CORRIDOR)
    before = render_ascii(s)
    child = s.apply_move(Direction.RIGHT).apply_move(Direction.RIGHT)
    assert render_ascii(s) == before
    assert child.boxes == frozenset({(1, 4)})
    assert child.cell_has((1, 4), BOX) and not child.cell_has((1, 3), BOX)
    assert child.cell_has((1, 3), PLAYER) and not child.cell_has((1, 1), PLAYER)
    assert child.goals is s.goals
