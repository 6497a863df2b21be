"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from kibitz.core.coord import Coord
from kibitz.core.enums import Color, PieceKind
from kibitz.core.errors import InvalidPiece

# FEN character ↔ (Color, PieceKind)
_CHAR_MAP: dict[str, tuple[Color, PieceKind]] = {
    "P": (Color.WHITE, PieceKind.PAWN),
    "N": (Color.WHITE, PieceKind.KNIGHT),
    "B": (Color.WHITE, PieceKind.BISHOP),
    "R": (Color.WHITE, PieceKind.ROOK),
    "Q": (Color.WHITE, PieceKind.QUEEN),
    "K": (Color.WHITE, PieceKind.KING),
    "p": (Color.BLACK, PieceKind.PAWN),
    "n": (Color.BLACK, PieceKind.KNIGHT),
    "b": (Color.BLACK, PieceKind.BISHOP),
    "r": (Color.BLACK, PieceKind.ROOK),
    "q": (Color.BLACK, PieceKind.QUEEN),
    "k": (Color.BLACK, PieceKind.KING),
}

_UNICODE: dict[tuple[Color, PieceKind], str] = {
    (Color.WHITE, PieceKind.PAWN): "♙",
    (Color.WHITE, PieceKind.KNIGHT): "♘",
    (Color.WHITE, PieceKind.BISHOP): "♗",
    (Color.WHITE, PieceKind.ROOK): "♖",
    (Color.WHITE, PieceKind.QUEEN): "♕",
    (Color.WHITE, PieceKind.KING): "♔",
    (Color.BLACK, PieceKind.PAWN): "♟",
    (Color.BLACK, PieceKind.KNIGHT): "♞",
    (Color.BLACK, PieceKind.BISHOP): "♝",
    (Color.BLACK, PieceKind.ROOK): "♜",
    (Color.BLACK, PieceKind.QUEEN): "♛",
    (Color.BLACK, PieceKind.KING): "♚",
}

_FEN_CHARS: dict[tuple[Color, PieceKind], str] = {v: k for k, v in _CHAR_MAP.items()}

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


def _starting_squares() -> dict[tuple[PieceKind, Color], frozenset[Coord]]:
    squares: dict[tuple[PieceKind, Color], set[Coord]] = {}
    for color in Color:
        for file, kind in enumerate(_BACK_RANK):
            squares.setdefault((kind, color), set()).add(Coord(file, color.home_rank))
        for file in range(8):
            squares.setdefault((PieceKind.PAWN, color), set()).add(
                Coord(file, color.pawn_rank)
            )
    return {key: frozenset(value) for key, value in squares.items()}


STARTING_SQUARES = _starting_squares()


def is_starting_square(kind: PieceKind, color: Color, coord: Coord) -> bool:
    """Whether *coord* is one of the standard starting squares for the piece."""
    return coord in STARTING_SQUARES[(kind, color)]


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object: a piece of some kind and color standing on *coord*.

    ``on_initial_square`` defaults to whether *coord* is a standard starting
    square for the piece and is cleared for good once the piece moves.
    """

    kind: PieceKind
    color: Color
    coord: Coord
    on_initial_square: bool | None = None

    def __post_init__(self) -> None:
        if self.on_initial_square is None:
            object.__setattr__(
                self,
                "on_initial_square",
                is_starting_square(self.kind, self.color, self.coord),
            )

    # ── Derived pieces ───────────────────────────────────────────────────

    def moved_to(self, coord: Coord) -> Piece:
        """The same piece after being placed on *coord*."""
        if coord == self.coord:
            return self
        return replace(self, coord=coord, on_initial_square=False)

    def with_color(self, color: Color) -> Piece:
        return replace(self, color=color)

    def promoted_to(self, kind: PieceKind) -> Piece:
        return Piece(kind, self.color, self.coord, on_initial_square=False)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.kind)]

    @classmethod
    def from_char(cls, char: str, coord: Coord) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, kind = _CHAR_MAP[char]
        except KeyError:
            raise InvalidPiece(f"{char!r} is not one of PNBRQKpnbrqk") from None
        return cls(kind, color, coord)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.kind)]

    @property
    def text(self) -> str:
        """Human readable name, e.g. ``White Knight``."""
        return f"{self.color.title} {self.kind.title}"
