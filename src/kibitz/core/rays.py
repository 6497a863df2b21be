"""Ray walks shared by every piece kind.

A ray is the sequence of squares reached by repeating one (df, dr) step
from a square until the board edge. Rays are precomputed per square and
direction; a walk truncates the ray at the kind's ``max_steps`` and at the
first occupied square.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kibitz.core.coord import ALL_COORDS, Coord
from kibitz.core.enums import PieceKind

if TYPE_CHECKING:
    from kibitz.core.piece import Piece
    from kibitz.core.position import Position

Direction = tuple[int, int]

ROOK_DIRECTIONS: tuple[Direction, ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))
BISHOP_DIRECTIONS: tuple[Direction, ...] = ((-1, 1), (1, 1), (1, -1), (-1, -1))
QUEEN_DIRECTIONS: tuple[Direction, ...] = ROOK_DIRECTIONS + BISHOP_DIRECTIONS
KING_DIRECTIONS = QUEEN_DIRECTIONS

KNIGHT_OFFSETS: tuple[Direction, ...] = (
    (1, 2),
    (2, 1),
    (2, -1),
    (1, -2),
    (-1, -2),
    (-2, -1),
    (-2, 1),
    (-1, 2),
)


# -- Precomputed lookup tables ---------------------------------------------


def _build_rays() -> dict[Direction, tuple[tuple[Coord, ...], ...]]:
    rays: dict[Direction, tuple[tuple[Coord, ...], ...]] = {}
    for df, dr in QUEEN_DIRECTIONS:
        per_square: list[tuple[Coord, ...]] = []
        for coord in ALL_COORDS:
            ray: list[Coord] = []
            file_idx = coord.file + df
            rank_idx = coord.rank + dr
            while 0 <= file_idx < 8 and 0 <= rank_idx < 8:
                ray.append(ALL_COORDS[rank_idx * 8 + file_idx])
                file_idx += df
                rank_idx += dr
            per_square.append(tuple(ray))
        rays[(df, dr)] = tuple(per_square)
    return rays


def _build_targets(offsets: tuple[Direction, ...]) -> tuple[tuple[Coord, ...], ...]:
    targets: list[tuple[Coord, ...]] = []
    for coord in ALL_COORDS:
        moves = [coord.offset(df, dr) for df, dr in offsets]
        targets.append(tuple(c for c in moves if c is not None))
    return tuple(targets)


_RAYS = _build_rays()
_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)


def ray(coord: Coord, direction: Direction) -> tuple[Coord, ...]:
    """All squares from *coord* (exclusive) to the edge along *direction*."""
    return _RAYS[direction][coord.index]


def knight_targets(coord: Coord) -> tuple[Coord, ...]:
    return _KNIGHT_TARGETS[coord.index]


class RayWalker:
    """Walks rays over a :class:`Position` on behalf of a moving piece."""

    __slots__ = ("_position",)

    def __init__(self, position: Position) -> None:
        self._position = position

    def walk(
        self,
        piece: Piece,
        direction: Direction,
        max_steps: int | None = None,
    ) -> list[Coord]:
        """Destinations for *piece* along one direction.

        Empty squares are included and the walk continues; an enemy piece
        is included and ends the walk; a friendly piece ends it excluded.
        """
        limit = piece.kind.max_steps if max_steps is None else max_steps
        position = self._position
        found: list[Coord] = []
        for to_coord in ray(piece.coord, direction)[:limit]:
            target = position.get(to_coord)
            if target is None:
                found.append(to_coord)
                continue
            if target.color != piece.color:
                found.append(to_coord)
            break
        return found

    def walk_all(
        self,
        piece: Piece,
        directions: tuple[Direction, ...],
        max_steps: int | None = None,
    ) -> set[Coord]:
        found: set[Coord] = set()
        for direction in directions:
            found.update(self.walk(piece, direction, max_steps))
        return found

    def controlled(
        self,
        piece: Piece,
        direction: Direction,
        ignore: Coord | None = None,
    ) -> list[Coord]:
        """Squares *piece* attacks along one direction.

        Unlike :meth:`walk` the first blocker is included whatever its
        color. A piece standing on *ignore* is treated as absent.
        """
        position = self._position
        found: list[Coord] = []
        for to_coord in ray(piece.coord, direction)[: piece.kind.max_steps]:
            found.append(to_coord)
            if to_coord != ignore and position.get(to_coord) is not None:
                break
        return found

    def attacks(self, piece: Piece, ignore: Coord | None = None) -> set[Coord]:
        """Every square *piece* attacks, regardless of what stands there."""
        kind = piece.kind
        if kind == PieceKind.PAWN:
            rank_step = piece.color.forward
            return {
                c
                for c in (
                    piece.coord.offset(-1, rank_step),
                    piece.coord.offset(1, rank_step),
                )
                if c is not None
            }
        if kind == PieceKind.KNIGHT:
            return set(knight_targets(piece.coord))

        if kind == PieceKind.ROOK:
            directions = ROOK_DIRECTIONS
        elif kind == PieceKind.BISHOP:
            directions = BISHOP_DIRECTIONS
        else:
            directions = QUEEN_DIRECTIONS

        found: set[Coord] = set()
        for direction in directions:
            found.update(self.controlled(piece, direction, ignore))
        return found
