"""Board coordinates.

Board layout (Little-Endian Rank-File mapping)::

    a1=0, b1=1, ..., h1=7
    a2=8, b2=9, ..., h2=15
    ...
    a8=56, b8=57, ..., h8=63

A coordinate converts totally to its index, its algebraic name and its
single-bit mask (bit ``index`` of a 64-bit word).
"""

from __future__ import annotations

from dataclasses import dataclass

from kibitz.core.errors import (
    IndexOutOfRange,
    InvalidCoords,
    InvalidFile,
    InvalidRank,
)

FILES = "abcdefgh"
RANKS = "12345678"


@dataclass(frozen=True, slots=True, eq=False)
class Coord:
    """Immutable (file, rank) pair, both in ``0..7``."""

    file: int
    rank: int

    def __post_init__(self) -> None:
        if not 0 <= self.file <= 7:
            raise InvalidFile(f"file index {self.file} is out of range 0-7")
        if not 0 <= self.rank <= 7:
            raise InvalidRank(f"rank index {self.rank} is out of range 0-7")

    # ── Constructors ─────────────────────────────────────────────────────

    @classmethod
    def from_index(cls, index: int) -> Coord:
        """Coordinate for square *index*, e.g. ``28`` → e4."""
        if not 0 <= index < 64:
            raise IndexOutOfRange(f"square index {index} is out of range 0-63")
        return cls(index & 7, index >> 3)

    @classmethod
    def from_algebraic(cls, name: str) -> Coord:
        """Parse a square name, e.g. ``'e4'``."""
        if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
            raise InvalidCoords(f"{name!r} is not a square name")
        return cls(FILES.index(name[0]), RANKS.index(name[1]))

    @classmethod
    def from_tuple(cls, value: tuple[str, int]) -> Coord:
        """Build from a ``(file_char, rank)`` pair where rank is 1-based."""
        file_char, rank = value
        if len(file_char) != 1 or file_char not in FILES:
            raise InvalidFile(f"{file_char!r} is not a file")
        if not 1 <= rank <= 8:
            raise InvalidRank(f"{rank} is not a rank")
        return cls(FILES.index(file_char), rank - 1)

    @classmethod
    def from_mask(cls, mask: int) -> Coord:
        """Coordinate of the single bit set in *mask*."""
        if mask <= 0 or mask & (mask - 1) or mask.bit_length() > 64:
            raise IndexOutOfRange(f"mask {mask:#x} does not select exactly one square")
        return cls.from_index(mask.bit_length() - 1)

    # ── Conversions ──────────────────────────────────────────────────────

    @property
    def index(self) -> int:
        return self.rank * 8 + self.file

    @property
    def mask(self) -> int:
        return 1 << self.index

    @property
    def name(self) -> str:
        return FILES[self.file] + RANKS[self.rank]

    def to_tuple(self) -> tuple[str, int]:
        """``(file_char, rank)`` with a 1-based rank, e.g. ``('e', 4)``."""
        return FILES[self.file], self.rank + 1

    def offset(self, df: int, dr: int) -> Coord | None:
        """The coordinate *df* files and *dr* ranks away, or None off-board."""
        file = self.file + df
        rank = self.rank + dr
        if 0 <= file < 8 and 0 <= rank < 8:
            return _BY_INDEX[rank * 8 + file]
        return None

    def mirrored(self) -> Coord:
        """Reflection across the line between ranks 4 and 5."""
        return _BY_INDEX[(7 - self.rank) * 8 + self.file]

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Coord):
            return self.file == other.file and self.rank == other.rank
        if isinstance(other, str):
            return self.name == other
        return NotImplemented

    def __hash__(self) -> int:
        # Same hash as the square name so ``coord == "e4"`` stays consistent.
        return hash(self.name)

    def __lt__(self, other: Coord) -> bool:
        return self.index < other.index

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Coord({self.name})"


_BY_INDEX: tuple[Coord, ...] = tuple(Coord(i & 7, i >> 3) for i in range(64))
ALL_COORDS = _BY_INDEX


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = _BY_INDEX[0:8]
A2, B2, C2, D2, E2, F2, G2, H2 = _BY_INDEX[8:16]
A3, B3, C3, D3, E3, F3, G3, H3 = _BY_INDEX[16:24]
A4, B4, C4, D4, E4, F4, G4, H4 = _BY_INDEX[24:32]
A5, B5, C5, D5, E5, F5, G5, H5 = _BY_INDEX[32:40]
A6, B6, C6, D6, E6, F6, G6, H6 = _BY_INDEX[40:48]
A7, B7, C7, D7, E7, F7, G7, H7 = _BY_INDEX[48:56]
A8, B8, C8, D8, E8, F8, G8, H8 = _BY_INDEX[56:64]
