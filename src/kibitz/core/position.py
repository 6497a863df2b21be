"""Position — which piece, if any, stands on each square.

Two interchangeable backends implement the :class:`Position` interface:

* :class:`ArrayPosition` keeps an 8x8 grid of ``Piece | None`` indexed by
  ``[rank][file]``.
* :class:`BitmaskPosition` keeps eight 64-bit words, one per piece kind
  (indices 0-5) and one per color (indices 6-7).

Both report identical pieces for identical placements.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

from kibitz.core.coord import ALL_COORDS, Coord
from kibitz.core.enums import Color, PieceKind
from kibitz.core.piece import _BACK_RANK, Piece
from kibitz.core.rays import RayWalker

_PIECE_KIND_COUNT = 6
_COLOR_MASK_OFFSET = 6
_MASK_COUNT = 8


class Position(ABC):
    """Storage of the piece occupying each of the 64 squares."""

    __slots__ = ()

    # -- Element access -----------------------------------------------------

    @abstractmethod
    def get(self, coord: Coord) -> Piece | None:
        """The piece on *coord*, or None."""

    @abstractmethod
    def put(self, coord: Coord, piece: Piece | None) -> Piece | None:
        """Place *piece* (or nothing) on *coord*; return the prior occupant.

        A piece placed away from its own coordinate is re-stamped with
        *coord*, so a piece always knows where the position holds it.
        """

    def take(self, coord: Coord) -> Piece | None:
        """Empty *coord*; return what stood there."""
        return self.put(coord, None)

    def replace(self, piece: Piece, to_coord: Coord) -> Piece | None:
        """Move *piece* from its coordinate to *to_coord*.

        Returns whatever occupied *to_coord* before the move.
        """
        self.take(piece.coord)
        return self.put(to_coord, piece.moved_to(to_coord))

    def __getitem__(self, coord: Coord) -> Piece | None:
        return self.get(coord)

    def __setitem__(self, coord: Coord, piece: Piece | None) -> None:
        self.put(coord, piece)

    def is_empty(self, coord: Coord) -> bool:
        return self.get(coord) is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self) -> Iterator[Piece]:
        """Every piece on the board, a1 first."""
        for coord in ALL_COORDS:
            piece = self.get(coord)
            if piece is not None:
                yield piece

    def pieces_matching(self, kind: PieceKind, color: Color) -> list[Piece]:
        """Pieces of *kind* and *color*."""
        return [p for p in self.pieces() if p.kind == kind and p.color == color]

    def pieces_of(self, color: Color) -> list[Piece]:
        return [p for p in self.pieces() if p.color == color]

    def king(self, color: Color) -> Piece | None:
        kings = self.pieces_matching(PieceKind.KING, color)
        return kings[0] if kings else None

    def pieces_attacking(
        self,
        target: Coord,
        attacker_color: Color,
        ignore: Coord | None = None,
    ) -> list[Piece]:
        """Pieces of *attacker_color* attacking *target*.

        A piece on *ignore* does not block rays; it is how a king's own
        square is left out when testing where the king may step.
        """
        walker = RayWalker(self)
        return [
            p
            for p in self.pieces_of(attacker_color)
            if p.coord != ignore and target in walker.attacks(p, ignore)
        ]

    def is_attacked(
        self,
        target: Coord,
        attacker_color: Color,
        ignore: Coord | None = None,
    ) -> bool:
        return bool(self.pieces_attacking(target, attacker_color, ignore))

    # -- Mutation / copying -------------------------------------------------

    def clear(self) -> None:
        for coord in ALL_COORDS:
            self.take(coord)

    def copy(self) -> Position:
        clone = type(self)()
        for piece in self.pieces():
            clone.put(piece.coord, piece)
        return clone

    # -- Factory ------------------------------------------------------------

    @classmethod
    def from_pieces(cls, pieces: Iterable[Piece]) -> Position:
        position = cls()
        for piece in pieces:
            position.put(piece.coord, piece)
        return position

    @classmethod
    def standard(cls) -> Position:
        """Standard starting position."""
        position = cls()
        for color in Color:
            for file, kind in enumerate(_BACK_RANK):
                coord = Coord(file, color.home_rank)
                position.put(coord, Piece(kind, color, coord))
            for file in range(8):
                coord = Coord(file, color.pawn_rank)
                position.put(coord, Piece(PieceKind.PAWN, color, coord))
        return position

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return all(self.get(c) == other.get(c) for c in ALL_COORDS)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self.get(ALL_COORDS[rank * 8 + file])
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)


class ArrayPosition(Position):
    """Grid of ``Piece | None`` indexed by ``[rank][file]``."""

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]

    def get(self, coord: Coord) -> Piece | None:
        return self._grid[coord.rank][coord.file]

    def put(self, coord: Coord, piece: Piece | None) -> Piece | None:
        if piece is not None and piece.coord != coord:
            piece = piece.moved_to(coord)
        row = self._grid[coord.rank]
        previous = row[coord.file]
        row[coord.file] = piece
        return previous

    def copy(self) -> ArrayPosition:
        clone = ArrayPosition()
        clone._grid = [row.copy() for row in self._grid]
        return clone


class BitmaskPosition(Position):
    """Eight 64-bit words: six kind masks then two color masks.

    For every square at most one kind mask and at most one color mask
    have its bit set, and a kind bit is set iff exactly one color bit is.
    A ninth word records which occupants are still on their initial
    square, so pieces read back exactly as they were put.
    """

    __slots__ = ("_masks", "_initial")

    def __init__(self) -> None:
        self._masks: list[int] = [0] * _MASK_COUNT
        self._initial = 0

    @property
    def masks(self) -> tuple[int, ...]:
        """Read-only view: ``masks[kind]`` and ``masks[6 + color]``."""
        return tuple(self._masks)

    def kind_mask(self, kind: PieceKind) -> int:
        return self._masks[int(kind)]

    def color_mask(self, color: Color) -> int:
        return self._masks[_COLOR_MASK_OFFSET + int(color)]

    @property
    def occupied(self) -> int:
        return self._masks[6] | self._masks[7]

    def get(self, coord: Coord) -> Piece | None:
        bit = coord.mask
        masks = self._masks
        for kind_idx in range(_PIECE_KIND_COUNT):
            if masks[kind_idx] & bit:
                color = Color.WHITE if masks[_COLOR_MASK_OFFSET] & bit else Color.BLACK
                return Piece(
                    PieceKind(kind_idx),
                    color,
                    coord,
                    on_initial_square=bool(self._initial & bit),
                )
        return None

    def put(self, coord: Coord, piece: Piece | None) -> Piece | None:
        previous = self.get(coord)
        bit = coord.mask
        masks = self._masks

        if piece is None:
            for idx in range(_MASK_COUNT):
                masks[idx] &= ~bit
            self._initial &= ~bit
            return previous

        if piece.coord != coord:
            piece = piece.moved_to(coord)

        kind_idx = int(piece.kind)
        color_idx = _COLOR_MASK_OFFSET + int(piece.color)
        for idx in range(_MASK_COUNT):
            if idx == kind_idx or idx == color_idx:
                masks[idx] |= bit
            else:
                masks[idx] &= ~bit
        if piece.on_initial_square:
            self._initial |= bit
        else:
            self._initial &= ~bit
        return previous

    def pieces(self) -> Iterator[Piece]:
        occupied = self.occupied
        while occupied:
            lsb = occupied & -occupied
            piece = self.get(Coord.from_mask(lsb))
            assert piece is not None
            yield piece
            occupied ^= lsb

    def pieces_matching(self, kind: PieceKind, color: Color) -> list[Piece]:
        bitboard = self.kind_mask(kind) & self.color_mask(color)
        found: list[Piece] = []
        while bitboard:
            lsb = bitboard & -bitboard
            coord = Coord.from_mask(lsb)
            found.append(
                Piece(kind, color, coord, on_initial_square=bool(self._initial & lsb))
            )
            bitboard ^= lsb
        return found

    def copy(self) -> BitmaskPosition:
        clone = BitmaskPosition()
        clone._masks = self._masks.copy()
        clone._initial = self._initial
        return clone

    def clear(self) -> None:
        self._masks = [0] * _MASK_COUNT
        self._initial = 0
