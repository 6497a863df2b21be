"""Tests for the Position interface on both backends."""

from __future__ import annotations

import pytest

from kibitz.core.coord import A1, ALL_COORDS, D4, E1, E2, E4, E8, H8, Coord
from kibitz.core.enums import Color, PieceKind
from kibitz.core.piece import Piece
from kibitz.core.position import ArrayPosition, BitmaskPosition, Position


def _assert_mask_invariants(position: BitmaskPosition) -> None:
    masks = position.masks
    kinds = masks[:6]
    white, black = masks[6], masks[7]
    assert white & black == 0
    for i, a in enumerate(kinds):
        for b in kinds[i + 1 :]:
            assert a & b == 0
    occupied_by_kind = 0
    for mask in kinds:
        occupied_by_kind |= mask
    assert occupied_by_kind == white | black


# ── Element access ───────────────────────────────────────────────────────────


class TestGetPut:
    def test_empty_on_creation(self, backend: type[Position]) -> None:
        position = backend()
        assert all(position.get(c) is None for c in ALL_COORDS)

    def test_put_returns_prior_occupant(self, backend: type[Position]) -> None:
        position = backend()
        rook = Piece(PieceKind.ROOK, Color.WHITE, A1)
        assert position.put(A1, rook) is None
        knight = Piece(PieceKind.KNIGHT, Color.BLACK, A1)
        assert position.put(A1, knight) == rook
        assert position.get(A1) == knight

    def test_put_restamps_coord(self, backend: type[Position]) -> None:
        position = backend()
        position.put(D4, Piece(PieceKind.QUEEN, Color.WHITE, A1))
        queen = position.get(D4)
        assert queen is not None
        assert queen.coord == D4

    def test_take(self, backend: type[Position]) -> None:
        position = backend.standard()
        king = position.take(E1)
        assert king is not None and king.kind == PieceKind.KING
        assert position.get(E1) is None
        assert position.take(E1) is None

    def test_put_take_inverse(self, backend: type[Position]) -> None:
        position = backend.standard()
        before = position.copy()
        for coord in (A1, E2, E4, H8):
            position.put(coord, position.take(coord))
            assert position == before

    def test_replace_moves_piece(self, backend: type[Position]) -> None:
        position = backend.standard()
        pawn = position.get(E2)
        assert pawn is not None
        assert position.replace(pawn, E4) is None
        assert position.get(E2) is None
        moved = position.get(E4)
        assert moved is not None
        assert moved.coord == E4
        assert not moved.on_initial_square

    def test_replace_returns_captured(self, backend: type[Position]) -> None:
        position = backend()
        rook = Piece(PieceKind.ROOK, Color.WHITE, A1)
        victim = Piece(PieceKind.KNIGHT, Color.BLACK, Coord(0, 6))
        position.put(A1, rook)
        position.put(victim.coord, victim)
        assert position.replace(rook, victim.coord) == victim

    def test_item_access(self, backend: type[Position]) -> None:
        position = backend()
        position[E4] = Piece(PieceKind.BISHOP, Color.BLACK, E4)
        assert position[E4] is not None
        assert not position.is_empty(E4)


# ── Queries ──────────────────────────────────────────────────────────────────


class TestQueries:
    def test_standard_piece_count(self, backend: type[Position]) -> None:
        position = backend.standard()
        assert len(list(position.pieces())) == 32
        assert len(position.pieces_of(Color.BLACK)) == 16

    def test_pieces_matching(self, backend: type[Position]) -> None:
        position = backend.standard()
        rooks = position.pieces_matching(PieceKind.ROOK, Color.BLACK)
        assert sorted(p.coord.name for p in rooks) == ["a8", "h8"]
        assert all(p.on_initial_square for p in rooks)

    def test_king(self, backend: type[Position]) -> None:
        king = backend.standard().king(Color.BLACK)
        assert king is not None and king.coord == E8
        assert backend().king(Color.WHITE) is None

    def test_pieces_attacking(self, backend: type[Position]) -> None:
        position = backend()
        position.put(A1, Piece(PieceKind.ROOK, Color.BLACK, A1))
        position.put(H8, Piece(PieceKind.BISHOP, Color.BLACK, H8))
        position.put(E4, Piece(PieceKind.KNIGHT, Color.BLACK, E4))
        attackers = position.pieces_attacking(D4.offset(0, -3), Color.BLACK)
        assert [p.kind for p in attackers] == [PieceKind.ROOK]
        assert position.is_attacked(Coord(0, 7), Color.BLACK)
        assert position.is_attacked(A1, Color.BLACK)  # bishop's long diagonal
        assert not position.is_attacked(E4, Color.WHITE)

    def test_pawns_attack_diagonals_only(self, backend: type[Position]) -> None:
        position = backend()
        position.put(E4, Piece(PieceKind.PAWN, Color.WHITE, E4))
        assert position.is_attacked(Coord(3, 4), Color.WHITE)
        assert position.is_attacked(Coord(5, 4), Color.WHITE)
        assert not position.is_attacked(Coord(4, 4), Color.WHITE)


# ── Copies and equality ──────────────────────────────────────────────────────


class TestCopyAndEquality:
    def test_copy_is_independent(self, backend: type[Position]) -> None:
        position = backend.standard()
        clone = position.copy()
        clone.take(E1)
        assert position.get(E1) is not None
        assert position != clone

    def test_clear(self, backend: type[Position]) -> None:
        position = backend.standard()
        position.clear()
        assert list(position.pieces()) == []

    def test_backends_compare_equal(self) -> None:
        assert ArrayPosition.standard() == BitmaskPosition.standard()

    def test_backends_agree_after_edits(self) -> None:
        positions: list[Position] = [
            ArrayPosition.standard(),
            BitmaskPosition.standard(),
        ]
        for position in positions:
            pawn = position.get(E2)
            assert pawn is not None
            position.replace(pawn, E4)
            position.take(H8)
        array, bitmask = positions
        assert array == bitmask
        assert list(array.pieces()) == list(bitmask.pieces())

    def test_from_pieces(self, backend: type[Position]) -> None:
        pieces = [Piece.from_char("K", E1), Piece.from_char("k", E8)]
        position = backend.from_pieces(pieces)
        assert list(position.pieces()) == pieces


# ── Bitmask layout ───────────────────────────────────────────────────────────


class TestBitmaskInvariants:
    def test_standard_masks(self) -> None:
        position = BitmaskPosition.standard()
        _assert_mask_invariants(position)
        assert position.kind_mask(PieceKind.PAWN) == 0x00FF_0000_0000_FF00
        assert position.color_mask(Color.WHITE) == 0xFFFF
        assert position.occupied == 0xFFFF_0000_0000_FFFF

    def test_overwrite_clears_other_masks(self) -> None:
        position = BitmaskPosition.standard()
        position.put(E2, Piece(PieceKind.QUEEN, Color.BLACK, E2))
        _assert_mask_invariants(position)
        assert not position.kind_mask(PieceKind.PAWN) & E2.mask
        assert not position.color_mask(Color.WHITE) & E2.mask

    def test_take_clears_every_mask(self) -> None:
        position = BitmaskPosition.standard()
        position.take(E1)
        assert all(not mask & E1.mask for mask in position.masks)

    @pytest.mark.parametrize("kind", list(PieceKind))
    def test_round_trip_every_kind(self, kind: PieceKind) -> None:
        position = BitmaskPosition()
        piece = Piece(kind, Color.BLACK, D4)
        position.put(D4, piece)
        assert position.get(D4) == piece
        _assert_mask_invariants(position)

    def test_initial_flag_survives_storage(self) -> None:
        position = BitmaskPosition()
        moved = Piece(PieceKind.ROOK, Color.WHITE, A1, on_initial_square=False)
        position.put(A1, moved)
        stored = position.get(A1)
        assert stored is not None
        assert not stored.on_initial_square
