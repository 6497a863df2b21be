"""Notations that are recognised but not parsed yet."""

from __future__ import annotations

from kibitz.parser.base import UnimplementedParser


class ReversibleAlgebraicParser(UnimplementedParser):
    name = "Reversible Algebraic Parser"
    example = "e2-e4, e7-e5, Bb5xNc6, Bf8-b4#"


class ConciseReversibleParser(UnimplementedParser):
    name = "Concise Reversible Parser"
    example = "e24, e75, Ng1f3, Nb8c6, Bb5:Nc6"


class DescriptiveParser(UnimplementedParser):
    name = "Descriptive Parser"
    example = "P-K4, NxN, QxRch, Q-KR4 mate, O-O"


class SmithParser(UnimplementedParser):
    name = "Smith Parser"
    example = "e1g1c, b4c3n, b5c6n, d7c6b, e2e4"
