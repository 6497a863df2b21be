"""Error taxonomy for the chess core.

Every error derives from :class:`ChessError`, which is a ``ValueError`` so
callers may keep catching the builtin when they do not care about the kind.
"""

from __future__ import annotations


class ChessError(ValueError):
    """Base class for all domain errors. Carries a human-readable reason."""

    label = "Chess Error"

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return f"Error ({self.label}): {self.reason}."


class InvalidInput(ChessError):
    """Empty input, interior whitespace or unsupported characters."""

    label = "Invalid Input"


class InvalidMove(ChessError):
    """A malformed move, or one that cannot be played on the board."""

    label = "Invalid Move"


class InvalidPiece(ChessError):
    label = "Invalid Piece"


class InvalidRank(ChessError):
    label = "Invalid Rank"


class InvalidFile(ChessError):
    label = "Invalid File"


class InvalidCoords(ChessError):
    label = "Invalid Coords"


class IndexOutOfRange(ChessError):
    label = "Index Out Of Range"


class TokenNotSatisfied(ChessError):
    """Raised between parser classifiers. Reaching a caller is a bug."""

    label = "Token Not Satisfied"


class NotImplementedParser(ChessError):
    """The selected notation has no parser implementation."""

    label = "Not Implemented"


class IncompatibleSides(ChessError):
    """Both players of a game were given the same color."""

    label = "Incompatible Sides"
