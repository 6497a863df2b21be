"""Core domain layer — board geometry, positions, move generation and moves.

Quick start::

    from kibitz.core import Board, MoveGenerator, E2

    board = Board.standard()
    gen = MoveGenerator(board)
    print(sorted(c.name for c in gen.destinations_from(E2)))
"""

from kibitz.core.applier import MoveApplier
from kibitz.core.board import Board
from kibitz.core.coord import (
    ALL_COORDS,
    FILES,
    RANKS,
    A1,
    A8,
    E1,
    E2,
    E4,
    E8,
    H1,
    H8,
    Coord,
)
from kibitz.core.enums import (
    CastlingRights,
    CastlingSide,
    Color,
    GameResult,
    MoveType,
    PieceKind,
)
from kibitz.core.errors import (
    ChessError,
    IncompatibleSides,
    IndexOutOfRange,
    InvalidCoords,
    InvalidFile,
    InvalidInput,
    InvalidMove,
    InvalidPiece,
    InvalidRank,
    NotImplementedParser,
    TokenNotSatisfied,
)
from kibitz.core.move import PROMOTION_KINDS, Move
from kibitz.core.move_generator import CASTLING_PATHS, CastlingPath, MoveGenerator
from kibitz.core.notation import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    board_to_shredder_fen,
    board_to_xfen,
)
from kibitz.core.piece import Piece
from kibitz.core.position import ArrayPosition, BitmaskPosition, Position
from kibitz.core.rays import RayWalker
from kibitz.core.render import render_board

__all__ = [
    # Enums / flags
    "CastlingRights",
    "CastlingSide",
    "Color",
    "GameResult",
    "MoveType",
    "PieceKind",
    # Errors
    "ChessError",
    "IncompatibleSides",
    "IndexOutOfRange",
    "InvalidCoords",
    "InvalidFile",
    "InvalidInput",
    "InvalidMove",
    "InvalidPiece",
    "InvalidRank",
    "NotImplementedParser",
    "TokenNotSatisfied",
    # Geometry
    "ALL_COORDS",
    "FILES",
    "RANKS",
    "A1",
    "A8",
    "E1",
    "E2",
    "E4",
    "E8",
    "H1",
    "H8",
    "Coord",
    "RayWalker",
    # Domain objects
    "ArrayPosition",
    "BitmaskPosition",
    "Board",
    "CASTLING_PATHS",
    "CastlingPath",
    "Move",
    "MoveApplier",
    "MoveGenerator",
    "PROMOTION_KINDS",
    "Piece",
    "Position",
    # Notation / output
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "board_to_shredder_fen",
    "board_to_xfen",
    "render_board",
]
