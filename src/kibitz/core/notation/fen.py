"""FEN parsing and serialization.

Three emitters share the placement/side/clock fields and differ only in
how they write castling rights and the en passant square:

* :func:`board_to_fen` writes ``KQkq`` and whatever target is recorded.
* :func:`board_to_xfen` writes the en passant square only when a pawn of
  the side to move could actually capture onto it.
* :func:`board_to_shredder_fen` writes castling rights as rook files
  (``HAha``).
"""

from __future__ import annotations

from kibitz.core.board import Board
from kibitz.core.coord import Coord
from kibitz.core.enums import CastlingRights, Color, PieceKind
from kibitz.core.errors import InvalidCoords, InvalidInput, InvalidPiece
from kibitz.core.piece import Piece
from kibitz.core.position import ArrayPosition, Position

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# Digits allowed in a placement rank, counting empty squares.
_EMPTY_RUNS = "12345678"

_CASTLING_LETTERS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)
_SHREDDER_LETTERS: tuple[tuple[str, CastlingRights], ...] = (
    ("H", CastlingRights.WHITE_KINGSIDE),
    ("A", CastlingRights.WHITE_QUEENSIDE),
    ("h", CastlingRights.BLACK_KINGSIDE),
    ("a", CastlingRights.BLACK_QUEENSIDE),
)


def board_from_fen(fen: str, backend: type[Position] = ArrayPosition) -> Board:
    """Parse a FEN string into a :class:`Board`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise InvalidInput(f"FEN needs 4-6 fields: {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise InvalidInput(f"FEN board must contain 8 ranks: {fen!r}")
    position = backend()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch in _EMPTY_RUNS:
                file += int(ch)
            else:
                if file >= 8:
                    raise InvalidInput(f"FEN rank is too wide: {fen!r}")
                coord = Coord(file, rank)
                try:
                    position.put(coord, Piece.from_char(ch, coord))
                except InvalidPiece:
                    raise InvalidInput(f"invalid FEN piece {ch!r}: {fen!r}") from None
                file += 1
            if file > 8:
                raise InvalidInput(f"FEN rank is too wide: {fen!r}")
        if file != 8:
            raise InvalidInput(f"FEN rank is too narrow: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise InvalidInput(f"invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling (KQkq or Shredder HAha)
    castling = CastlingRights.NONE
    if castling_part != "-":
        rights = dict(_CASTLING_LETTERS + _SHREDDER_LETTERS)
        seen: set[CastlingRights] = set()
        for ch in castling_part:
            right = rights.get(ch)
            if right is None or right in seen:
                raise InvalidInput(f"invalid FEN castling field: {castling_part!r}")
            seen.add(right)
            castling |= right

    # 4. En passant
    ep_target: Coord | None = None
    ep_victim: Piece | None = None
    if ep_part != "-":
        try:
            ep_target = Coord.from_algebraic(ep_part)
        except InvalidCoords:
            raise InvalidInput(f"invalid FEN en-passant square: {ep_part!r}") from None
        expected_rank = 5 if side == Color.WHITE else 2
        if ep_target.rank != expected_rank:
            raise InvalidInput(
                f"invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        victim_coord = ep_target.offset(0, -side.forward)
        assert victim_coord is not None
        ep_victim = position.get(victim_coord)
        if (
            ep_victim is None
            or ep_victim.kind != PieceKind.PAWN
            or ep_victim.color == side
        ):
            raise InvalidInput(f"no pawn to capture en passant on {ep_part!r}")

    # 5–6. Clocks (optional)
    halfmove = _parse_counter(parts, 4, default=0, minimum=0)
    fullmove = _parse_counter(parts, 5, default=1, minimum=1)

    return Board(
        position,
        side_to_move=side,
        castling=castling,
        en_passant_target=ep_target,
        en_passant_victim=ep_victim,
        halfmove_clock=halfmove,
        fullmove_number=fullmove,
    )


def _parse_counter(parts: list[str], index: int, default: int, minimum: int) -> int:
    if len(parts) <= index:
        return default
    text = parts[index]
    if not (text.isascii() and text.isdecimal()) or int(text) < minimum:
        raise InvalidInput(f"invalid FEN counter: {text!r}")
    return int(text)


# ── Emission ────────────────────────────────────────────────────────────────


def placement_to_fen(position: Position) -> str:
    """The piece placement field, rank 8 first."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = position.get(Coord(file, rank))
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def _castling_field(
    castling: CastlingRights,
    letters: tuple[tuple[str, CastlingRights], ...],
) -> str:
    text = "".join(ch for ch, right in letters if castling & right)
    return text or "-"


def _fen(board: Board, castling: str, ep: Coord | None) -> str:
    side = "w" if board.side_to_move == Color.WHITE else "b"
    ep_str = ep.name if ep is not None else "-"
    return (
        f"{placement_to_fen(board.position)} {side} {castling} {ep_str} "
        f"{board.halfmove_clock} {board.fullmove_number}"
    )


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN."""
    castling = _castling_field(board.castling, _CASTLING_LETTERS)
    return _fen(board, castling, board.en_passant_target)


def capturable_en_passant(board: Board) -> Coord | None:
    """The en passant target if a pawn of the side to move can take on it."""
    target = board.en_passant_target
    if target is None:
        return None
    side = board.side_to_move
    for df in (-1, 1):
        origin = target.offset(df, -side.forward)
        if origin is None:
            continue
        piece = board.position.get(origin)
        if piece is not None and piece.kind == PieceKind.PAWN and piece.color == side:
            return target
    return None


def board_to_xfen(board: Board) -> str:
    """Serialise to X-FEN: en passant only when actually capturable."""
    castling = _castling_field(board.castling, _CASTLING_LETTERS)
    return _fen(board, castling, capturable_en_passant(board))


def board_to_shredder_fen(board: Board) -> str:
    """Serialise to Shredder-FEN: castling rights as rook files."""
    castling = _castling_field(board.castling, _SHREDDER_LETTERS)
    return _fen(board, castling, capturable_en_passant(board))

