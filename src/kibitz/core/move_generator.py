"""Pseudo-legal destination squares for a single piece.

Destinations depend only on the piece, the board's position, its castling
rights and its en passant target. Whose turn it is and whether the mover
leaves its own king in check are left to the caller; only king steps and
castling are filtered against enemy attacks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kibitz.core.coord import Coord
from kibitz.core.enums import CastlingRights, CastlingSide, Color, PieceKind
from kibitz.core.rays import (
    BISHOP_DIRECTIONS,
    KING_DIRECTIONS,
    QUEEN_DIRECTIONS,
    ROOK_DIRECTIONS,
    RayWalker,
    knight_targets,
)

if TYPE_CHECKING:
    from kibitz.core.board import Board
    from kibitz.core.piece import Piece


class CastlingPath:
    """Fixed squares involved in one castling move."""

    __slots__ = (
        "color",
        "side",
        "king_from",
        "king_to",
        "rook_from",
        "rook_to",
        "safe",
        "empty",
    )

    def __init__(self, color: Color, side: CastlingSide) -> None:
        rank = color.home_rank
        self.color = color
        self.side = side
        self.king_from = Coord(4, rank)
        if side == CastlingSide.KINGSIDE:
            self.king_to = Coord(6, rank)
            self.rook_from = Coord(7, rank)
            self.rook_to = Coord(5, rank)
            # Squares the king crosses or lands on.
            self.safe: tuple[Coord, ...] = (Coord(5, rank), Coord(6, rank))
            self.empty: tuple[Coord, ...] = self.safe
        else:
            self.king_to = Coord(2, rank)
            self.rook_from = Coord(0, rank)
            self.rook_to = Coord(3, rank)
            self.safe = (Coord(3, rank), Coord(2, rank))
            self.empty = self.safe + (Coord(1, rank),)

    @property
    def right(self) -> CastlingRights:
        return CastlingRights.for_side(self.color, self.side)

    def __repr__(self) -> str:
        return f"CastlingPath({self.color}, {self.side.name.lower()})"


CASTLING_PATHS: dict[tuple[Color, CastlingSide], CastlingPath] = {
    (color, side): CastlingPath(color, side) for color in Color for side in CastlingSide
}


class MoveGenerator:
    """Computes destination sets for pieces standing on *board*."""

    __slots__ = ("_board", "_walker")

    def __init__(self, board: Board) -> None:
        self._board = board
        self._walker = RayWalker(board.position)

    # -- Public API ---------------------------------------------------------

    def destinations(self, piece: Piece) -> set[Coord]:
        """Every square *piece* may move to."""
        kind = piece.kind
        if kind == PieceKind.PAWN:
            return self._pawn_destinations(piece)
        if kind == PieceKind.KNIGHT:
            return self._knight_destinations(piece)
        if kind == PieceKind.BISHOP:
            return self._walker.walk_all(piece, BISHOP_DIRECTIONS)
        if kind == PieceKind.ROOK:
            return self._walker.walk_all(piece, ROOK_DIRECTIONS)
        if kind == PieceKind.QUEEN:
            return self._walker.walk_all(piece, QUEEN_DIRECTIONS)
        return self._king_destinations(piece)

    def destinations_from(self, coord: Coord) -> set[Coord]:
        """Destinations of whatever stands on *coord* (empty set if nothing)."""
        piece = self._board.position.get(coord)
        if piece is None:
            return set()
        return self.destinations(piece)

    def all_destinations(self, color: Color) -> dict[Coord, set[Coord]]:
        """Origin → destinations for every piece of *color* that can move."""
        found: dict[Coord, set[Coord]] = {}
        for piece in self._board.position.pieces_of(color):
            targets = self.destinations(piece)
            if targets:
                found[piece.coord] = targets
        return found

    def candidates(self, kind: PieceKind, color: Color, to_coord: Coord) -> list[Piece]:
        """Pieces of *kind* and *color* that can reach *to_coord*."""
        return [
            p
            for p in self._board.position.pieces_matching(kind, color)
            if to_coord in self.destinations(p)
        ]

    # -- Attack detection ---------------------------------------------------

    def is_attacked(
        self,
        coord: Coord,
        by_color: Color,
        ignore: Coord | None = None,
    ) -> bool:
        """Is *coord* attacked by any piece of *by_color*?"""
        return self._board.position.is_attacked(coord, by_color, ignore)

    def is_in_check(self, color: Color) -> bool:
        king = self._board.position.king(color)
        if king is None:
            return False
        return self.is_attacked(king.coord, color.opposite)

    def can_castle(self, color: Color, side: CastlingSide) -> bool:
        """Whether *color* may castle on *side* right now."""
        board = self._board
        path = CASTLING_PATHS[(color, side)]
        if not board.can_castle(color, side):
            return False

        position = board.position
        king = position.get(path.king_from)
        if king is None or king.kind != PieceKind.KING or king.color != color:
            return False
        if any(position.get(c) is not None for c in path.empty):
            return False

        enemy = color.opposite
        if self.is_attacked(path.king_from, enemy):
            return False
        return not any(
            self.is_attacked(c, enemy, ignore=path.king_from) for c in path.safe
        )

    # -- Piece-specific generators (private) -------------------------------

    def _pawn_destinations(self, pawn: Piece) -> set[Coord]:
        board = self._board
        position = board.position
        color = pawn.color
        step = color.forward
        found: set[Coord] = set()

        one_step = pawn.coord.offset(0, step)
        if one_step is not None and position.get(one_step) is None:
            found.add(one_step)
            if pawn.coord.rank == color.pawn_rank:
                two_step = one_step.offset(0, step)
                if two_step is not None and position.get(two_step) is None:
                    found.add(two_step)

        for df in (-1, 1):
            target = pawn.coord.offset(df, step)
            if target is None:
                continue
            occupant = position.get(target)
            if occupant is not None:
                if occupant.color != color:
                    found.add(target)
            elif target == board.en_passant_target and self._en_passant_victim_is_enemy(
                color
            ):
                found.add(target)
        return found

    def _en_passant_victim_is_enemy(self, color: Color) -> bool:
        victim = self._board.en_passant_victim
        if victim is None:
            return False
        standing = self._board.position.get(victim.coord)
        return (
            standing is not None
            and standing.kind == PieceKind.PAWN
            and standing.color != color
        )

    def _knight_destinations(self, knight: Piece) -> set[Coord]:
        position = self._board.position
        found: set[Coord] = set()
        for to_coord in knight_targets(knight.coord):
            target = position.get(to_coord)
            if target is None or target.color != knight.color:
                found.add(to_coord)
        return found

    def _king_destinations(self, king: Piece) -> set[Coord]:
        enemy = king.color.opposite
        steps = self._walker.walk_all(king, KING_DIRECTIONS)
        found = {c for c in steps if not self.is_attacked(c, enemy, ignore=king.coord)}
        found.update(self._castling_destinations(king))
        return found

    def _castling_destinations(self, king: Piece) -> set[Coord]:
        found: set[Coord] = set()
        for side in CastlingSide:
            path = CASTLING_PATHS[(king.color, side)]
            if king.coord == path.king_from and self.can_castle(king.color, side):
                found.add(path.king_to)
        return found
