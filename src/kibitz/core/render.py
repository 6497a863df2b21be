"""Terminal rendering of a board as a boxed diagram."""

from __future__ import annotations

from collections.abc import Iterable

from kibitz.core.board import Board
from kibitz.core.coord import FILES, RANKS, Coord
from kibitz.core.enums import Color

_EMPTY = "·"
_INNER_WIDTH = 25


def _file_line(files: Iterable[int]) -> str:
    letters = "".join(f" {FILES[f]}" for f in files)
    return f"║    {letters}     ║"


def render_board(
    board: Board,
    perspective: Color | None = None,
    unicode: bool = False,
    headers: Iterable[str] | None = None,
) -> str:
    """Boxed diagram of *board* seen from *perspective*.

    *perspective* defaults to the side to move. Pieces are FEN letters
    unless *unicode* is set. *headers* are printed above the diagram.
    """
    if perspective is None:
        perspective = board.side_to_move

    if perspective == Color.WHITE:
        ranks = range(7, -1, -1)
        files = range(8)
    else:
        ranks = range(8)
        files = range(7, -1, -1)

    lines: list[str] = list(headers or ())
    lines.append("╔" + "═" * _INNER_WIDTH + "╗")
    lines.append(_file_line(files))
    lines.append("║   ┌" + "─" * 17 + "┐   ║")
    for rank in ranks:
        cells = []
        for file in files:
            piece = board.position.get(Coord(file, rank))
            if piece is None:
                cells.append(_EMPTY)
            else:
                cells.append(piece.symbol if unicode else str(piece))
        label = RANKS[rank]
        lines.append(f"║ {label} │ {' '.join(cells)} │ {label} ║")
    lines.append("║   └" + "─" * 17 + "┘   ║")
    lines.append(_file_line(files))
    lines.append("╚" + "═" * _INNER_WIDTH + "╝")
    lines.append(f"{board.side_to_move.title} to move.")
    return "\n".join(lines)
