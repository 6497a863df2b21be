"""User-configurable console settings."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass

from kibitz.core.enums import Color
from kibitz.core.errors import InvalidInput
from kibitz.parser import ParserEngine

PERSPECTIVES = ("white", "black", "to-move")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class ConsoleSettings:
    """All user-configurable settings of a console session."""

    # Notation
    engine: ParserEngine = ParserEngine.ALGEBRAIC

    # Board
    perspective: str = "to-move"
    unicode: bool = False
    fen: str | None = None

    # Players
    white_name: str | None = None
    black_name: str | None = None

    # Diagnostics
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.perspective not in PERSPECTIVES:
            raise InvalidInput(f"{self.perspective!r} is not a board perspective")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise InvalidInput(f"{self.log_level!r} is not a log level")

    @property
    def perspective_color(self) -> Color | None:
        """Color the board is drawn for, or None to follow the side to move."""
        if self.perspective == "white":
            return Color.WHITE
        if self.perspective == "black":
            return Color.BLACK
        return None

    @property
    def logging_level(self) -> int:
        return int(getattr(logging, self.log_level))

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> ConsoleSettings:
        return cls(
            engine=ParserEngine.from_text(args.parser),
            perspective=args.perspective,
            unicode=args.unicode,
            fen=args.fen,
            white_name=args.white,
            black_name=args.black,
            log_level=args.log_level,
        )
