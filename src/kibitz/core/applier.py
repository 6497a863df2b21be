"""MoveApplier — resolves the moving piece and mutates the board.

Everything is validated before the board is touched: a move that fails
leaves the board exactly as it was.
"""

from __future__ import annotations

import logging

from kibitz.core.board import Board
from kibitz.core.coord import Coord
from kibitz.core.enums import CastlingRights, CastlingSide, Color, MoveType, PieceKind
from kibitz.core.errors import InvalidMove
from kibitz.core.move import Move
from kibitz.core.move_generator import CASTLING_PATHS, MoveGenerator
from kibitz.core.piece import Piece

_LOGGER = logging.getLogger(__name__)

# Rook corner → castling right lost when that rook first leaves it.
_ROOK_CORNERS: dict[tuple[Color, int], CastlingRights] = {
    (Color.WHITE, 0): CastlingRights.WHITE_QUEENSIDE,
    (Color.WHITE, 7): CastlingRights.WHITE_KINGSIDE,
    (Color.BLACK, 0): CastlingRights.BLACK_QUEENSIDE,
    (Color.BLACK, 7): CastlingRights.BLACK_KINGSIDE,
}


class MoveApplier:
    """Plays parsed moves on a :class:`Board`."""

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    @property
    def board(self) -> Board:
        return self._board

    # -- Public API ---------------------------------------------------------

    def apply(self, move: Move) -> Piece | None:
        """Play *move*; return the captured piece, if any.

        On success the move's origin, capture flag and captured piece are
        filled in. Raises :class:`InvalidMove` when no piece, or more than
        one piece, of the move's kind and side can reach the target.
        """
        if move.to_coord is None:
            raise InvalidMove("the move has no target square")
        if move.kind is None:
            self._read_mover(move)
        if move.castling:
            return self._apply_castling(move)

        mover = self.resolve(move)
        return self._apply_regular(move, mover)

    def resolve(self, move: Move) -> Piece:
        """The unique piece that *move* refers to."""
        to_coord = move.to_coord
        kind = move.kind
        if to_coord is None:
            raise InvalidMove("the move has no target square")
        if kind is None:
            raise InvalidMove("the move names no piece")

        generator = MoveGenerator(self._board)
        found = [
            p
            for p in generator.candidates(kind, move.side, to_coord)
            if self._matches_hints(move, p, to_coord)
        ]
        if not found:
            raise InvalidMove(f"no piece can reach target {to_coord}")
        if len(found) > 1:
            origins = ", ".join(sorted(p.coord.name for p in found))
            raise InvalidMove(f"ambiguous move, {origins} can all reach {to_coord}")
        return found[0]

    # -- Private helpers ----------------------------------------------------

    def _read_mover(self, move: Move) -> None:
        """Complete a move given only by its squares from the board."""
        from_coord = move.from_coord
        to_coord = move.to_coord
        assert to_coord is not None
        if from_coord is None:
            raise InvalidMove("the move names no origin square")
        piece = self._board.position.get(from_coord)
        if piece is None:
            raise InvalidMove(f"there is no piece on {from_coord}")
        if piece.color != move.side:
            raise InvalidMove(f"the {piece.text} on {from_coord} is not {move.side}")

        claimed_capture = move.is_capture
        move.kind = piece.kind
        file_step = to_coord.file - from_coord.file
        if (
            piece.kind == PieceKind.KING
            and from_coord == Coord(4, move.side.home_rank)
            and to_coord.rank == from_coord.rank
            and abs(file_step) == 2
        ):
            side = CastlingSide.KINGSIDE if file_step > 0 else CastlingSide.QUEENSIDE
            move.set_castling(side)
            return

        if piece.kind == PieceKind.PAWN:
            capture = file_step != 0 or claimed_capture
            move.move_type = MoveType.PAWN_CAPTURE if capture else MoveType.PAWN_MOVE
        elif claimed_capture or self._board.position.get(to_coord) is not None:
            move.move_type = MoveType.PIECE_CAPTURE
        else:
            move.move_type = MoveType.PIECE_MOVE

    @staticmethod
    def _matches_hints(move: Move, piece: Piece, to_coord: Coord) -> bool:
        if move.from_file is not None and piece.coord.file != move.from_file:
            return False
        if move.from_rank is not None and piece.coord.rank != move.from_rank:
            return False
        if piece.kind == PieceKind.PAWN:
            # Pushes stay on their file; captures change it.
            if move.move_type == MoveType.PAWN_MOVE:
                return piece.coord.file == to_coord.file
            if move.move_type == MoveType.PAWN_CAPTURE:
                return piece.coord.file != to_coord.file
        if piece.kind == PieceKind.KING:
            # Two-file king steps are only reachable as castling.
            return abs(piece.coord.file - to_coord.file) < 2
        return True

    def _apply_regular(self, move: Move, mover: Piece) -> Piece | None:
        board = self._board
        position = board.position
        to_coord = move.to_coord
        assert to_coord is not None

        occupant = position.get(to_coord)
        victim = board.en_passant_victim
        en_passant = (
            mover.kind == PieceKind.PAWN
            and occupant is None
            and to_coord == board.en_passant_target
            and mover.coord.file != to_coord.file
            and victim is not None
        )
        if move.is_capture and occupant is None and not en_passant:
            raise InvalidMove(f"there is nothing to capture on {to_coord}")

        last_rank = (
            mover.kind == PieceKind.PAWN
            and to_coord.rank == mover.color.promotion_rank
        )
        if last_rank and not move.promotion:
            raise InvalidMove(f"a pawn reaching {to_coord} must promote")
        if move.promotion and not last_rank:
            raise InvalidMove("only a pawn reaching the last rank can promote")

        # Validation done; mutate.
        board.clear_en_passant()
        captured: Piece | None = None
        if en_passant:
            assert victim is not None
            captured = position.take(victim.coord)
        placed = position.replace(mover, to_coord)
        if placed is not None:
            captured = placed
        moved = position.get(to_coord)
        assert moved is not None

        if mover.kind == PieceKind.PAWN and abs(to_coord.rank - mover.coord.rank) == 2:
            passed = Coord(to_coord.file, (to_coord.rank + mover.coord.rank) // 2)
            board.set_en_passant(passed, moved)

        if move.promotion:
            promoted = move.promotion_piece
            assert promoted is not None
            position.put(to_coord, promoted)

        self._update_castling(mover)
        resets_clock = mover.kind == PieceKind.PAWN or captured is not None
        self._advance_clocks(move.side, resets_clock)

        move.from_coord = mover.coord
        move.captured = captured
        move.en_passant = en_passant
        if captured is not None and not move.is_capture:
            move.move_type = (
                MoveType.PAWN_CAPTURE
                if mover.kind == PieceKind.PAWN
                else MoveType.PIECE_CAPTURE
            )
        _LOGGER.debug("Applied %s (%s)", move.input_text or move, move.describe())
        if captured is not None:
            _LOGGER.debug("Captured %s on %s", captured.text, captured.coord)
        return captured

    def _apply_castling(self, move: Move) -> Piece | None:
        board = self._board
        position = board.position
        side = move.castling_side
        if side is None:
            side = CastlingSide.KINGSIDE
        path = CASTLING_PATHS[(move.side, side)]

        rook = position.get(path.rook_from)
        if rook is None or rook.kind != PieceKind.ROOK or rook.color != move.side:
            raise InvalidMove(f"there is no rook on {path.rook_from} to castle with")
        if not MoveGenerator(board).can_castle(move.side, side):
            raise InvalidMove(f"{move.side.title} cannot castle {side.name.lower()}")
        king = position.get(path.king_from)
        assert king is not None

        board.clear_en_passant()
        position.replace(king, path.king_to)
        position.replace(rook, path.rook_to)
        board.revoke_castling(CastlingRights.for_color(move.side))
        self._advance_clocks(move.side, False)

        move.from_coord = path.king_from
        move.to_coord = path.king_to
        _LOGGER.debug("Applied %s (%s)", move.input_text or move, move.describe())
        return None

    def _update_castling(self, mover: Piece) -> None:
        board = self._board
        if mover.kind == PieceKind.KING:
            board.revoke_castling(CastlingRights.for_color(mover.color))
        elif mover.kind == PieceKind.ROOK:
            right = _ROOK_CORNERS.get((mover.color, mover.coord.file))
            if right is not None and mover.coord.rank == mover.color.home_rank:
                board.revoke_castling(right)

    def _advance_clocks(self, side: Color, reset_halfmove: bool) -> None:
        board = self._board
        board.halfmove_clock = 0 if reset_halfmove else board.halfmove_clock + 1
        if side == Color.BLACK:
            board.fullmove_number += 1
        board.side_to_move = side.opposite
