"""Tests for the Piece value object."""

import pytest

from kibitz.core.coord import A1, B1, E1, E2, E4, E7
from kibitz.core.enums import Color, PieceKind
from kibitz.core.errors import InvalidPiece
from kibitz.core.piece import Piece


class TestInitialSquare:
    def test_standard_square(self) -> None:
        assert Piece(PieceKind.ROOK, Color.WHITE, A1).on_initial_square

    def test_wrong_color_for_square(self) -> None:
        assert not Piece(PieceKind.PAWN, Color.BLACK, E2).on_initial_square

    def test_wrong_kind_for_square(self) -> None:
        assert not Piece(PieceKind.QUEEN, Color.WHITE, E1).on_initial_square

    def test_black_pawn_rank(self) -> None:
        assert Piece(PieceKind.PAWN, Color.BLACK, E7).on_initial_square

    def test_moving_clears_flag_for_good(self) -> None:
        knight = Piece(PieceKind.KNIGHT, Color.WHITE, B1)
        back = knight.moved_to(E4).moved_to(B1)
        assert back.coord == B1
        assert not back.on_initial_square

    def test_moving_in_place_keeps_flag(self) -> None:
        knight = Piece(PieceKind.KNIGHT, Color.WHITE, B1)
        assert knight.moved_to(B1) is knight

    def test_promoted_piece_is_not_initial(self) -> None:
        pawn = Piece(PieceKind.PAWN, Color.WHITE, E2)
        queen = pawn.promoted_to(PieceKind.QUEEN)
        assert queen.kind == PieceKind.QUEEN
        assert queen.color == Color.WHITE
        assert not queen.on_initial_square


class TestText:
    @pytest.mark.parametrize(
        ("char", "kind", "color"),
        [
            ("N", PieceKind.KNIGHT, Color.WHITE),
            ("q", PieceKind.QUEEN, Color.BLACK),
            ("p", PieceKind.PAWN, Color.BLACK),
        ],
    )
    def test_from_char(self, char: str, kind: PieceKind, color: Color) -> None:
        piece = Piece.from_char(char, E4)
        assert (piece.kind, piece.color, piece.coord) == (kind, color, E4)
        assert str(piece) == char

    def test_from_char_rejects_unknown_letter(self) -> None:
        with pytest.raises(InvalidPiece):
            Piece.from_char("x", E4)

    def test_symbol_and_text(self) -> None:
        knight = Piece(PieceKind.KNIGHT, Color.BLACK, E4)
        assert knight.symbol == "♞"
        assert knight.text == "Black Knight"

    def test_value_equality(self) -> None:
        assert Piece.from_char("K", E1) == Piece(PieceKind.KING, Color.WHITE, E1)
