"""Notations that name both the origin and the target square."""

from __future__ import annotations

import re

from kibitz.core.board import Board
from kibitz.core.coord import Coord
from kibitz.core.enums import CastlingSide, Color, MoveType, PieceKind
from kibitz.core.errors import InvalidMove
from kibitz.core.move import Move
from kibitz.parser.base import Parser, play_on_copy

_COORDINATE_RE = re.compile(r"([a-h][1-8])([-x])([a-h][1-8])=?([QRBN])?")
_LONG_ALGEBRAIC_RE = re.compile(
    r"([NBRQK])?([a-h][1-8])([-x])?([a-h][1-8])=?([QRBN])?(\+\+|\+|#)?"
)
_LONG_CASTLE_RE = re.compile(r"(O-O-O|O-O|0-0-0|0-0)(\+\+|\+|#)?")
_ICCF_RE = re.compile(r"([1-8])([1-8])([1-8])([1-8])([1-4])?")

# ICCF promotion digit → piece kind.
_ICCF_PROMOTIONS: dict[str, PieceKind] = {
    "1": PieceKind.QUEEN,
    "2": PieceKind.ROOK,
    "3": PieceKind.BISHOP,
    "4": PieceKind.KNIGHT,
}
_ICCF_DIGITS: dict[PieceKind, str] = {v: k for k, v in _ICCF_PROMOTIONS.items()}


def _squares_move(
    text: str,
    side: Color,
    from_name: str,
    to_name: str,
    promotion: str | None,
) -> Move:
    """A move whose piece kind is read off the board when it is applied."""
    move = Move(side=side, kind=None, input_text=text)
    move.from_coord = Coord.from_algebraic(from_name)
    move.to_coord = Coord.from_algebraic(to_name)
    if promotion:
        move.set_promotion(PieceKind.from_letter(promotion))
    return move


class CoordinateParser(Parser):
    """Coordinate notation: ``e2-e4``, ``g1xf3``, ``e7-e8Q``."""

    name = "Coordinate Parser"
    example = "E2-E4, e7-e5, G1-F3, B8-c6, f1-b5"

    def parse(self, text: str, side: Color) -> Move:
        text = self.trim_and_check_whitespace(text)
        # Squares are case-insensitive, the promotion letter is not.
        normalized = text[:5].lower() + text[5:].upper()
        match = _COORDINATE_RE.fullmatch(normalized)
        if match is None:
            raise InvalidMove(f"{text!r} is not in coordinate notation")
        from_name, separator, to_name, promotion = match.groups()
        move = _squares_move(text, side, from_name, to_name, promotion)
        if separator == "x":
            move.move_type = MoveType.PIECE_CAPTURE
        return move

    def generate_from_squares(
        self,
        board: Board,
        from_coord: Coord,
        to_coord: Coord,
    ) -> str:
        move = play_on_copy(board, from_coord, to_coord)
        separator = "x" if move.is_capture else "-"
        text = f"{from_coord}{separator}{to_coord}"
        if move.promotion and move.promotion_kind is not None:
            text += move.promotion_kind.letter
        return text


class LongAlgebraicParser(Parser):
    """Long algebraic notation: ``e2e4``, ``Ng1f3``, ``Bb5xc6+``, ``e7e8Q``."""

    name = "Long Algebraic Parser"
    example = "e2e4, e7e5, d2d3, Bf8b4+, Bb5xc6"

    def parse(self, text: str, side: Color) -> Move:
        text = self.trim_and_check_whitespace(text)

        castle = _LONG_CASTLE_RE.fullmatch(text)
        if castle is not None:
            move = Move(side=side, input_text=text)
            queenside = castle.group(1).count("-") == 2
            move.set_castling(
                CastlingSide.QUEENSIDE if queenside else CastlingSide.KINGSIDE
            )
            self._set_suffix(move, castle.group(2))
            return move

        match = _LONG_ALGEBRAIC_RE.fullmatch(text)
        if match is None:
            raise InvalidMove(f"{text!r} is not in long algebraic notation")
        letter, from_name, separator, to_name, promotion, suffix = match.groups()

        move = _squares_move(text, side, from_name, to_name, promotion)
        from_coord = move.from_coord
        to_coord = move.to_coord
        assert from_coord is not None and to_coord is not None
        if letter:
            if promotion:
                raise InvalidMove(f"only pawns promote, not {text!r}")
            move.kind = PieceKind.from_letter(letter)
            move.move_type = (
                MoveType.PIECE_CAPTURE if separator == "x" else MoveType.PIECE_MOVE
            )
        else:
            move.kind = PieceKind.PAWN
            diagonal = from_coord.file != to_coord.file
            if separator == "x" and not diagonal:
                raise InvalidMove(f"a pawn cannot capture straight ahead in {text!r}")
            move.move_type = MoveType.PAWN_CAPTURE if diagonal else MoveType.PAWN_MOVE
        self._set_suffix(move, suffix)
        return move

    @staticmethod
    def _set_suffix(move: Move, suffix: str | None) -> None:
        if suffix == "+":
            move.set_check()
        elif suffix in ("++", "#"):
            move.set_mate()

    def generate_from_squares(
        self,
        board: Board,
        from_coord: Coord,
        to_coord: Coord,
    ) -> str:
        move = play_on_copy(board, from_coord, to_coord)
        suffix = "+" if move.check else ""
        if move.castling:
            castle = "O-O" if move.castling_side == CastlingSide.KINGSIDE else "O-O-O"
            return castle + suffix
        kind = move.kind
        assert kind is not None
        text = "" if kind == PieceKind.PAWN else kind.letter
        text += from_coord.name
        if move.is_capture:
            text += "x"
        text += to_coord.name
        if move.promotion and move.promotion_kind is not None:
            text += move.promotion_kind.letter
        return text + suffix


class ICCFParser(Parser):
    """ICCF numeric notation: ``5254`` is e2-e4, ``57581`` promotes to a queen."""

    name = "ICCF Parser"
    example = "5254, 5755, 7163, 2836, 6125"

    def parse(self, text: str, side: Color) -> Move:
        text = self.trim_and_check_whitespace(text)
        match = _ICCF_RE.fullmatch(text)
        if match is None:
            raise InvalidMove(f"{text!r} is not in ICCF notation")
        from_file, from_rank, to_file, to_rank, promotion = match.groups()

        move = Move(side=side, kind=None, input_text=text)
        move.from_coord = Coord(int(from_file) - 1, int(from_rank) - 1)
        move.to_coord = Coord(int(to_file) - 1, int(to_rank) - 1)
        if promotion:
            move.set_promotion(_ICCF_PROMOTIONS[promotion])
        return move

    def generate_from_squares(
        self,
        board: Board,
        from_coord: Coord,
        to_coord: Coord,
    ) -> str:
        move = play_on_copy(board, from_coord, to_coord)
        text = (
            f"{from_coord.file + 1}{from_coord.rank + 1}"
            f"{to_coord.file + 1}{to_coord.rank + 1}"
        )
        if move.promotion and move.promotion_kind is not None:
            text += _ICCF_DIGITS[move.promotion_kind]
        return text
