"""Console commands: what the user may type besides a move."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from kibitz.parser import ParserEngine


class CommandContext(Enum):
    """Which prompt the command is typed at."""

    MAIN = auto()
    SWITCH_PARSER = auto()


class CommandKind(Enum):
    HELP = auto()
    QUIT = auto()
    BACK = auto()
    SWITCH_PARSER = auto()
    SWITCH_TO = auto()
    DISPLAY_TO_MOVE = auto()
    DISPLAY_FOR_WHITE = auto()
    DISPLAY_FOR_BLACK = auto()
    DISPLAY_FOR_WHITE_EACH_MOVE = auto()
    DISPLAY_FOR_BLACK_EACH_MOVE = auto()
    DISPLAY_FEN = auto()
    DISPLAY_MOVE_LIST = auto()
    DISPLAY_CAPTURES = auto()
    WHITE_RESIGNS = auto()
    BLACK_RESIGNS = auto()


@dataclass(frozen=True, slots=True)
class Command:
    """One command: the spellings that trigger it and a help line."""

    kind: CommandKind
    aliases: tuple[str, ...]
    description: str
    engine: ParserEngine | None = None


def _main_commands() -> tuple[Command, ...]:
    return (
        Command(CommandKind.HELP, ("h", "help"), "Display this help message"),
        Command(CommandKind.QUIT, ("q", "quit"), "Quit the application"),
        Command(
            CommandKind.SWITCH_PARSER,
            ("sw", "switch parser"),
            "Switch the current parser engine",
        ),
        Command(
            CommandKind.DISPLAY_TO_MOVE,
            ("d", "display"),
            "Display board for the color that is to move",
        ),
        Command(
            CommandKind.DISPLAY_FOR_WHITE,
            ("dw", "display white"),
            "Display board for White",
        ),
        Command(
            CommandKind.DISPLAY_FOR_BLACK,
            ("db", "display black"),
            "Display board for Black",
        ),
        Command(
            CommandKind.DISPLAY_FOR_WHITE_EACH_MOVE,
            ("dfw", "display for white"),
            "Display board for White after each move",
        ),
        Command(
            CommandKind.DISPLAY_FOR_BLACK_EACH_MOVE,
            ("dfb", "display for black"),
            "Display board for Black after each move",
        ),
        Command(
            CommandKind.DISPLAY_MOVE_LIST,
            ("ml", "move list"),
            "Display the move list notation",
        ),
        Command(
            CommandKind.DISPLAY_CAPTURES,
            ("c", "captures"),
            "Display captures for both players",
        ),
        Command(
            CommandKind.DISPLAY_FEN,
            ("fen",),
            "Display the FEN layout of the board",
        ),
        Command(CommandKind.WHITE_RESIGNS, ("wr",), "White resigns"),
        Command(CommandKind.BLACK_RESIGNS, ("br",), "Black resigns"),
    )


def _switch_commands() -> tuple[Command, ...]:
    commands = [
        Command(
            CommandKind.SWITCH_TO,
            (str(engine.value), engine.label),
            engine.create().name
            + ("" if engine.implemented else " (Not Implemented)"),
            engine,
        )
        for engine in ParserEngine
    ]
    commands.append(Command(CommandKind.BACK, ("b", "back"), "Go back"))
    commands.append(
        Command(CommandKind.HELP, ("h", "help"), "Display this help message")
    )
    return tuple(commands)


class CommandRegistry:
    """Looks commands up by alias, per context."""

    __slots__ = ("_commands", "example")

    def __init__(self, example: str = "") -> None:
        self._commands: dict[CommandContext, tuple[Command, ...]] = {
            CommandContext.MAIN: _main_commands(),
            CommandContext.SWITCH_PARSER: _switch_commands(),
        }
        self.example = example

    def commands(self, context: CommandContext) -> tuple[Command, ...]:
        return self._commands[context]

    def lookup(self, context: CommandContext, text: str) -> Command | None:
        """The command *text* spells in *context*, or None for a move."""
        key = text.strip().lower()
        for command in self._commands[context]:
            if key in command.aliases:
                return command
        return None

    def help_text(self, context: CommandContext) -> str:
        """Aligned ``alias, alias   description`` lines."""
        rows = [
            (", ".join(c.aliases), c.description) for c in self._commands[context]
        ]
        if context == CommandContext.MAIN:
            rows.insert(0, ("<move>", f"E.g., {self.example}"))
        width = max(len(alias) for alias, _ in rows)
        return "\n".join(f"{alias.ljust(width)}  {desc}" for alias, desc in rows)
