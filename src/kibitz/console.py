"""Line-oriented console for playing a game by typed moves and commands."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable, Iterator
from typing import TextIO

from kibitz.core.enums import Color
from kibitz.core.errors import ChessError
from kibitz.game.commands import Command, CommandContext, CommandKind, CommandRegistry
from kibitz.game.game import RESULT_TOKENS, Game
from kibitz.game.player import Player
from kibitz.parser import ParserEngine
from kibitz.settings import LOG_LEVELS, PERSPECTIVES, ConsoleSettings

_LOGGER = logging.getLogger(__name__)

MAIN_PROMPT = "Please input move(s) or command. (q to quit, h for help)"
SWITCH_PROMPT = "Select option. (1-8, b to go back, h for help)"


def strip_move_number(token: str) -> str:
    """``1.e4`` → ``e4``; ``12...Nf6`` → ``Nf6``; ``1.`` → ``""``.

    Other tokens are returned unchanged.
    """
    number, dot, rest = token.partition(".")
    if dot and number.isdigit():
        return rest.lstrip(".")
    return token


class Console:
    """Reads lines, runs commands and plays moves on one :class:`Game`."""

    __slots__ = (
        "game",
        "settings",
        "_out",
        "_registry",
        "_context",
        "_display_for",
        "_show_board",
        "_running",
    )

    def __init__(self, settings: ConsoleSettings, out: TextIO | None = None) -> None:
        self.settings = settings
        self.game = Game(
            Player(Color.WHITE, settings.white_name),
            Player(Color.BLACK, settings.black_name),
            engine=settings.engine,
            fen=settings.fen,
        )
        self._out = out if out is not None else sys.stdout
        self._registry = CommandRegistry(self.game.parser.example)
        self._context = CommandContext.MAIN
        self._display_for: Color | None = settings.perspective_color
        self._show_board = True
        self._running = True

    @property
    def context(self) -> CommandContext:
        return self._context

    @property
    def running(self) -> bool:
        return self._running

    # ── Loop ─────────────────────────────────────────────────────────────

    def run(self, lines: Iterable[str]) -> int:
        """Process *lines* until ``q`` or the input runs out."""
        source: Iterator[str] = iter(lines)
        while self._running:
            self._prompt()
            line = next(source, None)
            if line is None:
                break
            self.handle_line(line)
        return 0

    def handle_line(self, line: str) -> None:
        """Process one input line: a parser selection or commands and moves."""
        line = line.strip()
        if not line:
            return
        if self._context == CommandContext.SWITCH_PARSER:
            self._select_parser(line)
            return

        # Multi-word commands such as ``move list`` are matched whole.
        command = self._registry.lookup(CommandContext.MAIN, line)
        if command is not None and " " in line:
            self._run_command(command)
            return
        for token in line.split():
            command = self._registry.lookup(CommandContext.MAIN, token)
            if command is None:
                if not self._play(token):
                    break
                continue
            self._run_command(command)
            if not self._running or self._context != CommandContext.MAIN:
                break

    # ── Output ───────────────────────────────────────────────────────────

    def _print(self, text: str = "") -> None:
        print(text, file=self._out)

    def _prompt(self) -> None:
        if self._context == CommandContext.SWITCH_PARSER:
            self._print()
            self._print(f"Current parser: {self.game.parser.name}")
            self._print(self._registry.help_text(CommandContext.SWITCH_PARSER))
            self._print()
            self._print(SWITCH_PROMPT)
            return
        if self._show_board:
            self._print(self._render(self._display_for))
        self._show_board = True
        self._print()
        self._print(MAIN_PROMPT)

    def _render(self, perspective: Color | None) -> str:
        return self.game.render(perspective, self.settings.unicode)

    def _show(self, text: str) -> None:
        """Print *text* in place of the board on the next prompt."""
        self._print()
        self._print(text)
        self._show_board = False

    # ── Commands ─────────────────────────────────────────────────────────

    def _run_command(self, command: Command) -> None:
        kind = command.kind
        game = self.game
        if kind == CommandKind.QUIT:
            self._running = False
        elif kind == CommandKind.HELP:
            self._show(self._registry.help_text(CommandContext.MAIN))
        elif kind == CommandKind.SWITCH_PARSER:
            self._context = CommandContext.SWITCH_PARSER
        elif kind == CommandKind.DISPLAY_TO_MOVE:
            self._show(self._render(None))
        elif kind == CommandKind.DISPLAY_FOR_WHITE:
            self._show(self._render(Color.WHITE))
        elif kind == CommandKind.DISPLAY_FOR_BLACK:
            self._show(self._render(Color.BLACK))
        elif kind == CommandKind.DISPLAY_FOR_WHITE_EACH_MOVE:
            self._display_for = Color.WHITE
            self._print()
            self._print("Display for White after each move.")
        elif kind == CommandKind.DISPLAY_FOR_BLACK_EACH_MOVE:
            self._display_for = Color.BLACK
            self._print()
            self._print("Display for Black after each move.")
        elif kind == CommandKind.DISPLAY_FEN:
            self._show(game.fen())
        elif kind == CommandKind.DISPLAY_MOVE_LIST:
            self._show(f"Move List Notation:\n{game.move_list()}")
        elif kind == CommandKind.DISPLAY_CAPTURES:
            self._show(self._captures_text())
        elif kind == CommandKind.WHITE_RESIGNS:
            game.resign(Color.WHITE)
            self._print()
            self._print("White resigns.")
        elif kind == CommandKind.BLACK_RESIGNS:
            game.resign(Color.BLACK)
            self._print()
            self._print("Black resigns.")

    def _captures_text(self) -> str:
        lines = ["Captures:"]
        for color in (Color.WHITE, Color.BLACK):
            taken = " ".join(str(p) for p in self.game.captures_by(color))
            lines.append(f"{color.title}: {taken}".rstrip())
        return "\n".join(lines)

    def _select_parser(self, line: str) -> None:
        command = self._registry.lookup(CommandContext.SWITCH_PARSER, line)
        if command is None:
            self._print(f"Unknown option: {line}")
            return
        if command.kind == CommandKind.HELP:
            return
        if command.kind == CommandKind.SWITCH_TO:
            engine = command.engine
            assert isinstance(engine, ParserEngine)
            self.game.switch_parser(engine)
            self._print(f"Switching parser to {self.game.parser.name}.")
            self._registry.example = self.game.parser.example
        self._context = CommandContext.MAIN

    # ── Moves ────────────────────────────────────────────────────────────

    def _play(self, token: str) -> bool:
        """Play one move token; False stops the rest of the line."""
        text = strip_move_number(token)
        if not text:
            # A bare move number, as in ``1. e4 e5``.
            return True
        if text in RESULT_TOKENS:
            self.game.finish_with_token(text)
            self._print()
            self._print(f"Game over: {text}")
            return False
        try:
            record = self.game.play(text)
        except ChessError as exc:
            self._print(str(exc))
            self._print("Move not applied.")
            return False
        _LOGGER.debug("Played %s", record.move.describe())
        return True


# -- Entry point ------------------------------------------------------------


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="kibitz",
        description="Play chess at the terminal by typing moves.",
    )
    ap.add_argument(
        "--parser",
        default=ParserEngine.ALGEBRAIC.label,
        help="notation to read moves in: a menu number 1-8 or a name",
    )
    ap.add_argument(
        "--perspective",
        choices=PERSPECTIVES,
        default="to-move",
        help="side the board is drawn for",
    )
    ap.add_argument("--unicode", action="store_true", help="draw pieces as glyphs")
    ap.add_argument("--fen", type=str, default=None, help="starting position")
    ap.add_argument("--white", type=str, default=None, help="White player's name")
    ap.add_argument("--black", type=str, default=None, help="Black player's name")
    ap.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        type=str.upper,
    )
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    try:
        settings = ConsoleSettings.from_args(args)
    except ChessError as exc:
        print(exc, file=sys.stderr)
        return 2
    logging.basicConfig(
        level=settings.logging_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        console = Console(settings)
    except ChessError as exc:
        print(exc, file=sys.stderr)
        return 2
    return console.run(sys.stdin)


if __name__ == "__main__":
    raise SystemExit(main())
