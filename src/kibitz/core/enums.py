"""Core enumerations and flags for the chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color. The value doubles as the color-mask offset (6 + value)."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Rank direction pawns of this color advance in."""
        return 1 if self == Color.WHITE else -1

    @property
    def home_rank(self) -> int:
        return 0 if self == Color.WHITE else 7

    @property
    def pawn_rank(self) -> int:
        return 1 if self == Color.WHITE else 6

    @property
    def promotion_rank(self) -> int:
        return 7 if self == Color.WHITE else 0

    @property
    def title(self) -> str:
        return self.name.capitalize()

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """Piece kinds; the value is the index of the kind's bitmask."""

    PAWN = 0
    KNIGHT = 1
    BISHOP = 2
    ROOK = 3
    QUEEN = 4
    KING = 5

    @property
    def max_steps(self) -> int:
        """Longest ray walk the kind may make in one direction."""
        return _MAX_STEPS[self]

    @property
    def letter(self) -> str:
        """Upper-case notation letter, e.g. ``N`` for a knight."""
        return _LETTERS[self]

    @property
    def title(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_letter(cls, letter: str) -> PieceKind:
        try:
            return _KINDS_BY_LETTER[letter.upper()]
        except KeyError:
            raise ValueError(f"Invalid piece letter: {letter!r}") from None


_MAX_STEPS: dict[PieceKind, int] = {
    PieceKind.PAWN: 2,
    PieceKind.KNIGHT: 1,
    PieceKind.BISHOP: 7,
    PieceKind.ROOK: 7,
    PieceKind.QUEEN: 7,
    PieceKind.KING: 1,
}

_LETTERS: dict[PieceKind, str] = {
    PieceKind.PAWN: "P",
    PieceKind.KNIGHT: "N",
    PieceKind.BISHOP: "B",
    PieceKind.ROOK: "R",
    PieceKind.QUEEN: "Q",
    PieceKind.KING: "K",
}
_KINDS_BY_LETTER: dict[str, PieceKind] = {v: k for k, v in _LETTERS.items()}


class MoveType(IntEnum):
    """What a parsed move claims to do."""

    PAWN_MOVE = 0
    PAWN_CAPTURE = 1
    PIECE_MOVE = 2
    PIECE_CAPTURE = 3
    CASTLE = 4


class CastlingSide(IntEnum):
    KINGSIDE = 0
    QUEENSIDE = 1


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def for_side(cls, color: Color, side: CastlingSide) -> CastlingRights:
        """The single right for *color* castling on *side*."""
        kingside = side == CastlingSide.KINGSIDE
        if color == Color.WHITE:
            return cls.WHITE_KINGSIDE if kingside else cls.WHITE_QUEENSIDE
        return cls.BLACK_KINGSIDE if kingside else cls.BLACK_QUEENSIDE

    @classmethod
    def for_color(cls, color: Color) -> CastlingRights:
        return cls.WHITE_BOTH if color == Color.WHITE else cls.BLACK_BOTH


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
