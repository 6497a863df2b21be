"""Notation package: FEN / X-FEN / Shredder-FEN parsing and serialization."""

from kibitz.core.notation.fen import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    board_to_shredder_fen,
    board_to_xfen,
    capturable_en_passant,
    placement_to_fen,
)

__all__ = [
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "board_to_shredder_fen",
    "board_to_xfen",
    "capturable_en_passant",
    "placement_to_fen",
]
