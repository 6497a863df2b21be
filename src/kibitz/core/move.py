"""Move — a chess move as entered by a player.

A move leaves the parser partially filled: the target square is always
known, the origin may be known completely, by file or rank only, or not
at all. :class:`~kibitz.core.applier.MoveApplier` completes it.
"""

from __future__ import annotations

from dataclasses import dataclass

from kibitz.core.coord import FILES, RANKS, Coord
from kibitz.core.enums import CastlingSide, Color, MoveType, PieceKind
from kibitz.core.errors import InvalidMove
from kibitz.core.piece import Piece

PROMOTION_KINDS: tuple[PieceKind, ...] = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
)


@dataclass(slots=True)
class Move:
    """Fully annotated move; setters are used while parsing."""

    side: Color = Color.WHITE
    # None when only the squares are known; the applier reads it off the board.
    kind: PieceKind | None = PieceKind.PAWN
    to_coord: Coord | None = None
    from_file: int | None = None
    from_rank: int | None = None
    move_type: MoveType = MoveType.PAWN_MOVE
    promotion_kind: PieceKind | None = None
    check: bool = False
    mate: bool = False
    promotion: bool = False
    castling: bool = False
    castling_side: CastlingSide | None = None
    input_text: str = ""
    # Filled in by the applier.
    captured: Piece | None = None
    en_passant: bool = False

    # ── Derived attributes ───────────────────────────────────────────────

    @property
    def from_coord(self) -> Coord | None:
        """The origin once both its file and rank are known."""
        if self.from_file is None or self.from_rank is None:
            return None
        return Coord(self.from_file, self.from_rank)

    @from_coord.setter
    def from_coord(self, coord: Coord | None) -> None:
        if coord is None:
            self.from_file = None
            self.from_rank = None
        else:
            self.from_file = coord.file
            self.from_rank = coord.rank

    @property
    def is_capture(self) -> bool:
        return self.move_type in (MoveType.PAWN_CAPTURE, MoveType.PIECE_CAPTURE)

    @property
    def is_pawn_move(self) -> bool:
        return self.move_type in (MoveType.PAWN_MOVE, MoveType.PAWN_CAPTURE)

    @property
    def promotion_piece(self) -> Piece | None:
        """The piece a pawn turns into, stamped with the moving side."""
        if not self.promotion or self.promotion_kind is None or self.to_coord is None:
            return None
        return Piece(
            self.promotion_kind, self.side, self.to_coord, on_initial_square=False
        )

    # ── Parsing setters ──────────────────────────────────────────────────

    def set_target(self, coord: Coord) -> None:
        """Record a complete target; an earlier one becomes the origin."""
        if self.to_coord is not None:
            if self.from_file is not None or self.from_rank is not None:
                raise InvalidMove(f"too many squares in {self.input_text!r}")
            self.from_file = self.to_coord.file
            self.from_rank = self.to_coord.rank
        self.to_coord = coord

    def set_capture(self) -> None:
        if self.move_type == MoveType.PAWN_MOVE:
            self.move_type = MoveType.PAWN_CAPTURE
        elif self.move_type == MoveType.PIECE_MOVE:
            self.move_type = MoveType.PIECE_CAPTURE
        else:
            raise InvalidMove(f"a capture is not possible in {self.input_text!r}")

    def set_check(self) -> None:
        """A second check mark turns check into mate."""
        if self.check:
            self.check = False
            self.mate = True
        elif not self.mate:
            self.check = True
        else:
            raise InvalidMove(f"too many check marks in {self.input_text!r}")

    def set_mate(self) -> None:
        if self.mate or self.check:
            raise InvalidMove(f"conflicting check marks in {self.input_text!r}")
        self.mate = True

    def set_promotion(self, kind: PieceKind) -> None:
        if kind not in PROMOTION_KINDS:
            raise InvalidMove(f"a pawn cannot promote to a {kind.title}")
        self.promotion = True
        self.promotion_kind = kind

    def set_castling(self, side: CastlingSide) -> None:
        rank = self.side.home_rank
        self.castling = True
        self.castling_side = side
        self.kind = PieceKind.KING
        self.move_type = MoveType.CASTLE
        self.from_file = 4
        self.from_rank = rank
        self.to_coord = Coord(6 if side == CastlingSide.KINGSIDE else 2, rank)

    # ── Text ─────────────────────────────────────────────────────────────

    def describe(self) -> str:
        """Verbose description, e.g. ``White Knight moves to f3``."""
        kind = self.kind.title if self.kind is not None else "Piece"
        mover = f"{self.side.title} {kind}"
        if self.castling:
            side = "King" if self.castling_side == CastlingSide.KINGSIDE else "Queen"
            text = f"{mover} castles {side} side"
        elif self.is_capture:
            text = f"{mover} captures {self.to_coord}"
            if self.en_passant:
                text += " en passant"
        else:
            text = f"{mover} moves to {self.to_coord}"
        if self.promotion and self.promotion_kind is not None:
            text += f" and promotes to {self.promotion_kind.title}"
        if self.mate:
            text += ", checkmate"
        elif self.check:
            text += ", check"
        return text

    def origin_hint(self) -> str:
        """Known part of the origin, e.g. ``'b'``, ``'1'`` or ``'b1'``."""
        hint = ""
        if self.from_file is not None:
            hint += FILES[self.from_file]
        if self.from_rank is not None:
            hint += RANKS[self.from_rank]
        return hint

    def __str__(self) -> str:
        return self.input_text or self.describe()
