"""Standard algebraic notation (SAN).

Parsing is a positional state machine: the character at index ``i`` of
the trimmed input is offered to the classifiers registered for position
``i`` in :data:`_HANDLERS`, in order. A classifier either consumes the
character, updating the move under construction, or raises
:class:`TokenNotSatisfied` to let the next classifier try. A character no
classifier accepts makes the whole move invalid.

Accepted shapes::

    e4  e8Q  e8=Q  exf4  exf8Q  exf8=Q  Bf4  Bxf4  Nbd2  R1a3  Qh4xe1
    0-0  0-0-0  O-O  O-O-O

each optionally followed by ``+`` (check), ``++`` or ``#`` (mate).
"""

from __future__ import annotations

from collections.abc import Callable

from kibitz.core.board import Board
from kibitz.core.coord import FILES, RANKS, Coord
from kibitz.core.enums import CastlingSide, Color, MoveType, PieceKind
from kibitz.core.errors import InvalidMove, TokenNotSatisfied
from kibitz.core.move import Move
from kibitz.core.move_generator import MoveGenerator
from kibitz.parser.base import Parser, play_on_copy

MIN_LENGTH = 2
MAX_LENGTH = 8

_PIECE_LETTERS = "NBRQK"
_PROMOTION_LETTERS = "QRBN"
_CASTLE_ZEROS = "0O"


class _AlgebraicState:
    """Everything known about one move while its characters are read."""

    __slots__ = (
        "move",
        "pending_file",
        "squares",
        "awaiting_square",
        "promotion_indicator",
        "suffix",
        "castle_char",
        "castle_zeros",
        "castle_dashes",
        "previous",
    )

    def __init__(self, text: str, side: Color) -> None:
        self.move = Move(side=side, input_text=text)
        self.pending_file: int | None = None
        self.squares = 0
        self.awaiting_square = False
        self.promotion_indicator = False
        self.suffix = False
        self.castle_char: str | None = None
        self.castle_zeros = 0
        self.castle_dashes = 0
        self.previous = ""

    @property
    def castling(self) -> bool:
        return self.castle_char is not None

    @property
    def square_open(self) -> bool:
        """A square may still be started or completed."""
        return not (
            self.castling
            or self.suffix
            or self.promotion_indicator
            or self.move.promotion
        )

    # ── Classifiers ──────────────────────────────────────────────────────

    def piece_letter(self, ch: str, index: int) -> None:
        if ch not in _PIECE_LETTERS or index != 0:
            raise TokenNotSatisfied(ch)
        self.move.kind = PieceKind.from_letter(ch)
        self.move.move_type = MoveType.PIECE_MOVE

    def file(self, ch: str, index: int) -> None:
        if ch not in FILES or not self.square_open or self.squares > 1:
            raise TokenNotSatisfied(ch)
        move = self.move
        if self.pending_file is not None:
            # Two files in a row: the first one is an origin hint (Nbd2).
            if (
                self.squares
                or move.kind == PieceKind.PAWN
                or move.is_capture
                or move.from_file is not None
                or move.from_rank is not None
            ):
                raise TokenNotSatisfied(ch)
            move.from_file = self.pending_file
        if index == 0:
            move.kind = PieceKind.PAWN
            move.move_type = MoveType.PAWN_MOVE
        self.pending_file = FILES.index(ch)

    def rank(self, ch: str, index: int) -> None:
        if ch not in RANKS or not self.square_open:
            raise TokenNotSatisfied(ch)
        move = self.move
        if self.pending_file is not None:
            move.set_target(Coord(self.pending_file, RANKS.index(ch)))
            self.pending_file = None
            self.squares += 1
            self.awaiting_square = False
            return
        # A lone rank right after the piece letter is an origin hint (R1a3).
        if (
            index != 1
            or move.kind == PieceKind.PAWN
            or move.from_rank is not None
        ):
            raise TokenNotSatisfied(ch)
        move.from_rank = RANKS.index(ch)

    def capture(self, ch: str, index: int) -> None:
        if ch != "x" or not self.square_open:
            raise TokenNotSatisfied(ch)
        move = self.move
        if self.pending_file is not None:
            if move.from_file is not None or self.squares:
                raise TokenNotSatisfied(ch)
            move.from_file = self.pending_file
            self.pending_file = None
        move.set_capture()
        self.awaiting_square = True

    def promotion_indicator_token(self, ch: str, index: int) -> None:
        if ch != "=" or not self._can_promote():
            raise TokenNotSatisfied(ch)
        self.promotion_indicator = True

    def promotion_piece(self, ch: str, index: int) -> None:
        if ch not in _PROMOTION_LETTERS:
            raise TokenNotSatisfied(ch)
        if not (self.promotion_indicator or self._can_promote()):
            raise TokenNotSatisfied(ch)
        self.promotion_indicator = False
        self.move.set_promotion(PieceKind.from_letter(ch))

    def check(self, ch: str, index: int) -> None:
        if ch != "+" or not self._can_end():
            raise TokenNotSatisfied(ch)
        self.suffix = True
        self.move.set_check()

    def mate(self, ch: str, index: int) -> None:
        if ch != "#" or not self._can_end():
            raise TokenNotSatisfied(ch)
        self.suffix = True
        self.move.set_mate()

    def castle_zero(self, ch: str, index: int) -> None:
        if ch not in _CASTLE_ZEROS or self.suffix:
            raise TokenNotSatisfied(ch)
        if index == 0:
            self.castle_char = ch
        elif self.castle_char != ch or self.previous != "-":
            raise TokenNotSatisfied(ch)
        elif self.castle_zeros >= 3:
            raise TokenNotSatisfied(ch)
        self.castle_zeros += 1

    def castle_dash(self, ch: str, index: int) -> None:
        if ch != "-" or not self.castling or self.suffix:
            raise TokenNotSatisfied(ch)
        if self.previous != self.castle_char or self.castle_dashes >= 2:
            raise TokenNotSatisfied(ch)
        self.castle_dashes += 1

    # ── Helpers ──────────────────────────────────────────────────────────

    def _can_promote(self) -> bool:
        move = self.move
        return (
            move.kind == PieceKind.PAWN
            and self.squares > 0
            and self.pending_file is None
            and not self.awaiting_square
            and not move.promotion
            and not self.promotion_indicator
            and not self.suffix
        )

    def _can_end(self) -> bool:
        """A check or mate mark may follow."""
        if self.castling:
            return self.castle_zeros >= 2 and self.previous != "-"
        return (
            self.squares > 0
            and self.pending_file is None
            and not self.promotion_indicator
            and not self.awaiting_square
        )

    def finish(self) -> Move:
        move = self.move
        if self.castling:
            zeros = self.castle_zeros
            if zeros not in (2, 3) or self.castle_dashes != zeros - 1:
                raise InvalidMove(f"{move.input_text!r} is not a castling move")
            side = CastlingSide.KINGSIDE if zeros == 2 else CastlingSide.QUEENSIDE
            move.set_castling(side)
            return move
        if (
            self.pending_file is not None
            or self.awaiting_square
            or move.to_coord is None
        ):
            raise InvalidMove(f"{move.input_text!r} has no complete target square")
        if self.promotion_indicator:
            raise InvalidMove(f"{move.input_text!r} names no promotion piece")
        if move.move_type == MoveType.PAWN_CAPTURE and move.from_file is None:
            raise InvalidMove(f"{move.input_text!r} does not say which pawn captures")
        return move


Classifier = Callable[[_AlgebraicState, str, int], None]

_ALL: tuple[Classifier, ...] = (
    _AlgebraicState.file,
    _AlgebraicState.rank,
    _AlgebraicState.capture,
    _AlgebraicState.castle_zero,
    _AlgebraicState.castle_dash,
    _AlgebraicState.promotion_indicator_token,
    _AlgebraicState.promotion_piece,
    _AlgebraicState.check,
    _AlgebraicState.mate,
)

# Position → classifiers tried, in order, for the character at that position.
_HANDLERS: dict[int, tuple[Classifier, ...]] = {
    0: (
        _AlgebraicState.piece_letter,
        _AlgebraicState.file,
        _AlgebraicState.castle_zero,
    ),
    1: (
        _AlgebraicState.file,
        _AlgebraicState.rank,
        _AlgebraicState.capture,
        _AlgebraicState.castle_dash,
    ),
    2: _ALL,
    3: _ALL,
    4: _ALL,
    5: _ALL,
    6: _ALL,
    7: _ALL,
}


class AlgebraicParser(Parser):
    """Parser for standard algebraic notation."""

    name = "Algebraic Parser"
    example = "e4, Bxc6+, Kd6, e8Q#, a1=N, O-O-O"

    def parse(self, text: str, side: Color) -> Move:
        text = self.trim_and_check_whitespace(text)
        if not MIN_LENGTH <= len(text) <= MAX_LENGTH:
            raise InvalidMove(
                f"{text!r} must be {MIN_LENGTH} to {MAX_LENGTH} characters long"
            )

        state = _AlgebraicState(text, side)
        for index, ch in enumerate(text):
            for classifier in _HANDLERS[index]:
                try:
                    classifier(state, ch, index)
                except TokenNotSatisfied:
                    continue
                break
            else:
                raise InvalidMove(f"unexpected {ch!r} at position {index} of {text!r}")
            state.previous = ch
        return state.finish()

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
        text = ""
        if kind == PieceKind.PAWN:
            if move.is_capture:
                text += FILES[from_coord.file]
        else:
            text += kind.letter
            text += self._disambiguation(board, kind, from_coord, to_coord)
        if move.is_capture:
            text += "x"
        text += to_coord.name
        if move.promotion and move.promotion_kind is not None:
            text += "=" + move.promotion_kind.letter
        return text + suffix

    @staticmethod
    def _disambiguation(
        board: Board,
        kind: PieceKind,
        from_coord: Coord,
        to_coord: Coord,
    ) -> str:
        piece = board.position.get(from_coord)
        assert piece is not None
        rivals = [
            p.coord
            for p in MoveGenerator(board).candidates(kind, piece.color, to_coord)
            if p.coord != from_coord
        ]
        if not rivals:
            return ""
        if all(c.file != from_coord.file for c in rivals):
            return FILES[from_coord.file]
        if all(c.rank != from_coord.rank for c in rivals):
            return RANKS[from_coord.rank]
        return from_coord.name
