from .state import FLAGS_TO_CHAR, BoardState


def render_ascii(state: BoardState) -> str:
    """ASCII visualization of the state, one line per row."""
    out_lines = []
    for row in state.grid:
        out_lines.append(''.join(FLAGS_TO_CHAR.get(flags, '?') for flags in row))
    return "\n".join(out_lines)
