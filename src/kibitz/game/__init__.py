"""Game layer — players, the game session and console commands.

Quick start::

    from kibitz.core import Color
    from kibitz.game import Game, Player

    game = Game(Player(Color.WHITE, "Alice"), Player(Color.BLACK, "Bob"))
    game.play_all("e4 e5 Nf3")
    print(game.render())
"""

from kibitz.game.commands import (
    Command,
    CommandContext,
    CommandKind,
    CommandRegistry,
)
from kibitz.game.game import RESULT_TOKENS, Game, MoveRecord
from kibitz.game.player import Player

__all__ = [
    "Command",
    "CommandContext",
    "CommandKind",
    "CommandRegistry",
    "Game",
    "MoveRecord",
    "Player",
    "RESULT_TOKENS",
]
