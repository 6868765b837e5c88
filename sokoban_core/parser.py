from typing import List, Optional, Set, Tuple

from .errors import MalformedPuzzle
from .state import BOX, CHAR_TO_FLAGS, GOAL, PLAYER, WALL, BoardState, Point

TOK_EMPTY = " "


def _parse_dimension(line: Optional[str], what: str) -> int:
    if line is None:
        raise MalformedPuzzle(f"Missing {what} header line")
    try:
        value = int(line.strip())
    except ValueError:
        raise MalformedPuzzle(f"Invalid {what} header: {line!r}") from None
    if value <= 0:
        raise MalformedPuzzle(f"{what.capitalize()} must be positive, got {value}")
    return value


def build_state(rows: List[str], width: int) -> BoardState:
    """Maps rows of symbols to a BoardState. Short rows are padded with empty cells."""
    grid: List[Tuple[int, ...]] = []
    boxes: Set[Point] = set()
    goals: Set[Point] = set()
    walls: Set[Point] = set()
    players: List[Point] = []

    for r, line in enumerate(rows):
        cells = []
        for c in range(width):
            ch = line[c] if c < len(line) else TOK_EMPTY
            flags = CHAR_TO_FLAGS.get(ch)
            if flags is None:
                raise MalformedPuzzle(f"Unknown symbol {ch!r} at row {r}, column {c}")
            cells.append(flags)
            if flags & PLAYER:
                players.append((r, c))
            if flags & BOX:
                boxes.add((r, c))
            if flags & GOAL:
                goals.add((r, c))
            if flags & WALL:
                walls.add((r, c))
        grid.append(tuple(cells))

    if len(players) != 1:
        raise MalformedPuzzle(f"Expected exactly one player ('@' or '+'), found {len(players)}")

    return BoardState(
        grid=tuple(grid),
        player=players[0],
        boxes=frozenset(boxes),
        goals=frozenset(goals),
        walls=frozenset(walls),
    )


def parse_board_str(text: str) -> BoardState:
    """Parses the header format: width line, height line, then height rows.

    Characters past the declared width are ignored.
    """
    lines = text.splitlines()
    it = iter(lines)
    width = _parse_dimension(next(it, None), "width")
    height = _parse_dimension(next(it, None), "height")
    rows = lines[2:2 + height]
    if len(rows) < height:
        raise MalformedPuzzle(f"Expected {height} rows, found {len(rows)}")
    return build_state(rows, width)


def parse_board_file(path: str) -> BoardState:
    with open(path, "r", encoding="utf-8") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise MalformedPuzzle(f"Puzzle file is not valid UTF-8: {e.reason}") from e
    return parse_board_str(text)


def parse_level_str(level_str: str) -> BoardState:
    """Parses a header-less ASCII level into a BoardState.

    Blank lines are dropped; width is the longest row.
    """
    lines = [line.rstrip("\n") for line in level_str.splitlines() if line.strip() != ""]
    if not lines:
        raise MalformedPuzzle("Empty level")
    width = max(len(line) for line in lines)
    return build_state(lines, width)
