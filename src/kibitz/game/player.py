"""Players taking part in a game."""

from __future__ import annotations

from dataclasses import dataclass

from kibitz.core.enums import Color


@dataclass(frozen=True, slots=True)
class Player:
    """A participant: its color plus optional metadata for display."""

    color: Color
    name: str | None = None
    age: int | None = None
    elo: int | None = None

    @property
    def display_name(self) -> str:
        return self.name or f"Player ({self.color})"

    def header(self) -> str:
        """One-line description, e.g. ``White: Camina Drummer (37), 1500``."""
        text = f"{self.color.title}: {self.display_name}"
        if self.age is not None:
            text += f" ({self.age})"
        if self.elo is not None:
            text += f", {self.elo}"
        return text
