"""Tests for the render module."""

from sokoban_core.parser import parse_board_str, parse_level_str
from sokoban_core.render import render_ascii
from sokoban_core.moves import Direction


def test_render_basic_level():
    """Every symbol survives a parse/render pass."""
    lvl = "#####\n#+$ #\n# * #\n# . #\n#####"
    s = parse_level_str(lvl)
    assert render_ascii(s) == lvl


def test_render_pads_short_rows():
    s = parse_board_str("4\n2\n@$\n#")
    assert render_ascii(s) == "@$  \n#   "


def test_render_after_push():
    s = parse_level_str("#####\n#@$.#\n#####")
    assert render_ascii(s.apply_move(Direction.RIGHT)) == "#####\n# @*#\n#####"
