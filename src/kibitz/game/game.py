"""Game — a board shared by two players, parsed moves and a result."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from kibitz.core.applier import MoveApplier
from kibitz.core.board import Board
from kibitz.core.enums import Color, GameResult
from kibitz.core.errors import IncompatibleSides, InvalidInput, InvalidMove
from kibitz.core.move import Move
from kibitz.core.notation import board_from_fen, board_to_fen, board_to_xfen
from kibitz.core.piece import Piece
from kibitz.core.position import ArrayPosition, Position
from kibitz.core.render import render_board
from kibitz.game.player import Player
from kibitz.parser import Parser, ParserEngine

_LOGGER = logging.getLogger(__name__)

# Result tokens accepted in place of a move.
RESULT_TOKENS: dict[str, GameResult] = {
    "1-0": GameResult.WHITE_WINS,
    "0-1": GameResult.BLACK_WINS,
    "1/2-1/2": GameResult.DRAW,
    "½-½": GameResult.DRAW,
}


@dataclass(slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    fullmove_number: int
    fen_after: str
    captured: Piece | None = None

    @property
    def side(self) -> Color:
        return self.move.side


class Game:
    """Two players, one board and the parser used to read their moves.

    Raises :class:`IncompatibleSides` when both players have the same color.
    """

    __slots__ = (
        "white",
        "black",
        "board",
        "engine",
        "parser",
        "history",
        "result",
        "start_fen",
    )

    def __init__(
        self,
        player_1: Player,
        player_2: Player,
        engine: ParserEngine = ParserEngine.ALGEBRAIC,
        fen: str | None = None,
        backend: type[Position] = ArrayPosition,
    ) -> None:
        if player_1.color == player_2.color:
            raise IncompatibleSides(f"both players are {player_1.color}")
        if player_1.color == Color.WHITE:
            self.white, self.black = player_1, player_2
        else:
            self.white, self.black = player_2, player_1

        self.board = board_from_fen(fen, backend) if fen else Board.standard(backend)
        self.start_fen = board_to_fen(self.board)
        self.engine = engine
        self.parser: Parser = engine.create()
        self.history: list[MoveRecord] = []
        self.result = GameResult.IN_PROGRESS

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def to_move(self) -> Color:
        return self.board.side_to_move

    @property
    def is_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    def player(self, color: Color) -> Player:
        return self.white if color == Color.WHITE else self.black

    def captures_by(self, color: Color) -> list[Piece]:
        """Pieces *color* has taken from the opponent, in capture order."""
        return [
            r.captured
            for r in self.history
            if r.captured is not None and r.side == color
        ]

    # ── Moves ────────────────────────────────────────────────────────────

    def parse(self, text: str) -> Move:
        """Parse *text* with the current parser for the side to move."""
        return self.parser.parse(text, self.to_move)

    def play(self, text: str) -> MoveRecord:
        """Parse and apply a move for the side to move.

        The board is left unchanged when parsing or applying fails.
        """
        if self.is_over:
            raise InvalidMove("the game is over")
        move = self.parse(text)
        fullmove = self.board.fullmove_number
        try:
            captured = MoveApplier(self.board).apply(move)
        except InvalidMove:
            _LOGGER.debug("Rejected %r for %s", text, self.to_move)
            raise
        record = MoveRecord(move, fullmove, board_to_fen(self.board), captured)
        self.history.append(record)
        return record

    def play_all(self, moves: str) -> list[MoveRecord]:
        """Play whitespace-separated moves, stopping at the first failure."""
        return [self.play(token) for token in moves.split()]

    # ── Session control ──────────────────────────────────────────────────

    def switch_parser(self, engine: ParserEngine) -> None:
        self.engine = engine
        self.parser = engine.create()
        _LOGGER.info("Switched parser to %s", self.parser.name)

    def resign(self, color: Color) -> None:
        self.finish(
            GameResult.BLACK_WINS if color == Color.WHITE else GameResult.WHITE_WINS
        )

    def finish(self, result: GameResult) -> None:
        self.result = result
        _LOGGER.info("Game over: %s", result.name.lower())

    def finish_with_token(self, token: str) -> None:
        """End the game with a PGN-style result token such as ``1-0``."""
        try:
            result = RESULT_TOKENS[token]
        except KeyError:
            raise InvalidInput(f"{token!r} is not a game result") from None
        self.finish(result)

    # ── Text output ──────────────────────────────────────────────────────

    def fen(self) -> str:
        return board_to_fen(self.board)

    def xfen(self) -> str:
        return board_to_xfen(self.board)

    def headers(self) -> list[str]:
        return [self.white.header(), self.black.header()]

    def render(self, perspective: Color | None = None, unicode: bool = False) -> str:
        return render_board(self.board, perspective, unicode, self.headers())

    def move_list(self) -> str:
        """Numbered move list, one full move per line."""
        if not self.history:
            return "No moves have been made."
        lines: list[str] = []
        for record in self.history:
            text = str(record.move)
            if record.side == Color.WHITE:
                lines.append(f"{record.fullmove_number}. {text}")
            elif not lines:
                lines.append(f"{record.fullmove_number}... {text}")
            else:
                lines[-1] += f" {text}"
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Game({self.white.display_name} vs {self.black.display_name}, "
            f"{self.parser.name}, {self.result.name.lower()})"
        )
