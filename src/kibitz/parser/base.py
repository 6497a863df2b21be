"""Notation-agnostic parser interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from kibitz.core.applier import MoveApplier
from kibitz.core.board import Board
from kibitz.core.coord import Coord
from kibitz.core.enums import Color, PieceKind
from kibitz.core.errors import InvalidInput, InvalidMove, NotImplementedParser
from kibitz.core.move import Move
from kibitz.core.move_generator import MoveGenerator


class Parser(ABC):
    """Turns move text in one notation into a :class:`Move` and back."""

    #: Human readable parser name.
    name: str = "Parser"
    #: A few sample moves in this notation.
    example: str = ""

    @abstractmethod
    def parse(self, text: str, side: Color) -> Move:
        """Parse *text* as a move by *side*.

        Raises :class:`InvalidInput` for empty input or input containing
        whitespace, and :class:`InvalidMove` for malformed moves.
        """

    @abstractmethod
    def generate_from_squares(
        self,
        board: Board,
        from_coord: Coord,
        to_coord: Coord,
    ) -> str:
        """Write the move *from_coord* → *to_coord* on *board* in this notation."""

    @staticmethod
    def trim_and_check_whitespace(text: str) -> str:
        """Strip *text*; reject it if empty or still containing whitespace."""
        trimmed = text.strip()
        if not trimmed:
            raise InvalidInput("no move was given")
        if any(ch.isspace() for ch in trimmed):
            raise InvalidInput(f"{trimmed!r} contains whitespace")
        return trimmed

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class UnimplementedParser(Parser):
    """A notation whose parser has not been written yet."""

    def parse(self, text: str, side: Color) -> Move:
        raise NotImplementedParser(f"{self.name} is not implemented")

    def generate_from_squares(
        self,
        board: Board,
        from_coord: Coord,
        to_coord: Coord,
    ) -> str:
        raise NotImplementedParser(f"{self.name} is not implemented")


def play_on_copy(
    board: Board,
    from_coord: Coord,
    to_coord: Coord,
    promotion: PieceKind = PieceKind.QUEEN,
) -> Move:
    """Play *from_coord* → *to_coord* on a copy of *board*.

    Returns the completed move, with ``check`` set when the move attacks
    the enemy king. Pawns reaching the last rank promote to *promotion*.
    *board* itself is left untouched.
    """
    piece = board.position.get(from_coord)
    if piece is None:
        raise InvalidMove(f"there is no piece on {from_coord}")

    move = Move(side=piece.color, kind=None, to_coord=to_coord)
    move.from_coord = from_coord
    if piece.kind == PieceKind.PAWN and to_coord.rank == piece.color.promotion_rank:
        move.set_promotion(promotion)

    scratch = board.copy()
    MoveApplier(scratch).apply(move)
    if MoveGenerator(scratch).is_in_check(piece.color.opposite):
        move.check = True
    return move
