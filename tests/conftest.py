"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from kibitz.core.board import Board
from kibitz.core.coord import Coord
from kibitz.core.enums import CastlingRights, Color
from kibitz.core.piece import Piece
from kibitz.core.position import ArrayPosition, BitmaskPosition, Position

BoardFactory = Callable[..., Board]


@pytest.fixture(params=[ArrayPosition, BitmaskPosition], ids=["array", "bitmask"])
def backend(request: pytest.FixtureRequest) -> type[Position]:
    """Each position backend in turn."""
    return request.param


@pytest.fixture()
def make_board(backend: type[Position]) -> BoardFactory:
    """Build a board from FEN piece letters, e.g. ``make_board("Ke1", "ra8")``."""

    def _make(
        *placements: str,
        side: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.NONE,
    ) -> Board:
        board = Board.empty(backend, side_to_move=side, castling=castling)
        for text in placements:
            coord = Coord.from_algebraic(text[1:])
            board.place(Piece.from_char(text[0], coord))
        return board

    return _make


@pytest.fixture()
def start_board(backend: type[Position]) -> Board:
    return Board.standard(backend)
