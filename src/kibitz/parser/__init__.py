"""Move parsers, one per notation, selected through :class:`ParserEngine`."""

from __future__ import annotations

from enum import Enum

from kibitz.core.errors import InvalidInput
from kibitz.parser.algebraic import AlgebraicParser
from kibitz.parser.base import Parser, UnimplementedParser, play_on_copy
from kibitz.parser.squares import CoordinateParser, ICCFParser, LongAlgebraicParser
from kibitz.parser.unimplemented import (
    ConciseReversibleParser,
    DescriptiveParser,
    ReversibleAlgebraicParser,
    SmithParser,
)


class ParserEngine(Enum):
    """Tag selecting a notation. Values are the menu numbers."""

    ALGEBRAIC = 1
    CONCISE_REVERSIBLE = 2
    COORDINATE = 3
    DESCRIPTIVE = 4
    ICCF = 5
    LONG_ALGEBRAIC = 6
    REVERSIBLE_ALGEBRAIC = 7
    SMITH = 8

    @property
    def label(self) -> str:
        """Lower-case name as typed at the console, e.g. ``long algebraic``."""
        return self.name.lower().replace("_", " ")

    @property
    def implemented(self) -> bool:
        return not issubclass(_PARSERS[self], UnimplementedParser)

    @classmethod
    def from_text(cls, text: str) -> ParserEngine:
        """Engine for a menu number, a label or an enum name."""
        key = text.strip().lower().replace("-", " ").replace("_", " ")
        for engine in cls:
            if key in (str(engine.value), engine.label):
                return engine
        raise InvalidInput(f"{text!r} is not a parser engine")

    def create(self) -> Parser:
        return _PARSERS[self]()


_PARSERS: dict[ParserEngine, type[Parser]] = {
    ParserEngine.ALGEBRAIC: AlgebraicParser,
    ParserEngine.CONCISE_REVERSIBLE: ConciseReversibleParser,
    ParserEngine.COORDINATE: CoordinateParser,
    ParserEngine.DESCRIPTIVE: DescriptiveParser,
    ParserEngine.ICCF: ICCFParser,
    ParserEngine.LONG_ALGEBRAIC: LongAlgebraicParser,
    ParserEngine.REVERSIBLE_ALGEBRAIC: ReversibleAlgebraicParser,
    ParserEngine.SMITH: SmithParser,
}


def create_parser(engine: ParserEngine) -> Parser:
    """A fresh parser for *engine*."""
    return engine.create()


__all__ = [
    "AlgebraicParser",
    "ConciseReversibleParser",
    "CoordinateParser",
    "DescriptiveParser",
    "ICCFParser",
    "LongAlgebraicParser",
    "Parser",
    "ParserEngine",
    "ReversibleAlgebraicParser",
    "SmithParser",
    "UnimplementedParser",
    "create_parser",
    "play_on_copy",
]
