"""Board — a position plus the game metadata needed to move on it."""

from __future__ import annotations

from kibitz.core.coord import Coord
from kibitz.core.enums import CastlingRights, CastlingSide, Color
from kibitz.core.piece import Piece
from kibitz.core.position import ArrayPosition, Position


class Board:
    """Position + castling rights + en passant + side to move + clocks.

    A board exclusively owns its position; copies never share it.
    """

    __slots__ = (
        "position",
        "castling",
        "en_passant_target",
        "en_passant_victim",
        "side_to_move",
        "halfmove_clock",
        "fullmove_number",
    )

    def __init__(
        self,
        position: Position | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant_target: Coord | None = None,
        en_passant_victim: Piece | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.position = position if position is not None else ArrayPosition.standard()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant_target = en_passant_target
        self.en_passant_victim = en_passant_victim
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number

    # ── Factories ────────────────────────────────────────────────────────

    @classmethod
    def standard(cls, backend: type[Position] = ArrayPosition) -> Board:
        """Standard starting position on the chosen storage backend."""
        return cls(backend.standard())

    @classmethod
    def empty(
        cls,
        backend: type[Position] = ArrayPosition,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.NONE,
    ) -> Board:
        return cls(backend(), side_to_move=side_to_move, castling=castling)

    def copy(self) -> Board:
        return Board(
            self.position.copy(),
            self.side_to_move,
            self.castling,
            self.en_passant_target,
            self.en_passant_victim,
            self.halfmove_clock,
            self.fullmove_number,
        )

    # ── Element access ───────────────────────────────────────────────────

    def __getitem__(self, coord: Coord) -> Piece | None:
        return self.position.get(coord)

    def place(self, piece: Piece) -> None:
        """Put *piece* on its own coordinate."""
        self.position.put(piece.coord, piece)

    # ── Castling rights ──────────────────────────────────────────────────

    def can_castle(self, color: Color, side: CastlingSide) -> bool:
        return bool(self.castling & CastlingRights.for_side(color, side))

    def revoke_castling(self, rights: CastlingRights) -> None:
        self.castling &= ~rights

    # ── En passant ───────────────────────────────────────────────────────

    def clear_en_passant(self) -> None:
        self.en_passant_target = None
        self.en_passant_victim = None

    def set_en_passant(self, target: Coord, victim: Piece) -> None:
        self.en_passant_target = target
        self.en_passant_victim = victim

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.position == other.position
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant_target == other.en_passant_target
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{self.position!r}\n{self.side_to_move.title} to move"
