# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""In-memory game session.

A GameSession drives one game between the human and the AI:
- Validates human moves against the engine's legal moves
- Asks the engine for the AI's reply, including Morris removals
- Tracks whose turn it is, passes (Reversi) and the final result

Sessions hold no engine state of their own; the board value is replaced
after every move and the engine instance can be shared between sessions.

Usage:
    session = GameSession.start(GameType.CONNECT4, GameDifficulty.HARD)
    session.play("4")
    ai_moves = session.play_ai()
"""

import random
import uuid
from dataclasses import dataclass
from typing import Any

from src.core.config.settings import get_settings
from src.domains.gaming.engines.base import GameEngine, InvalidMoveError
from src.domains.gaming.engines.registry import EngineRegistry, get_engine_registry
from src.domains.gaming.models import (
    AIMove,
    GameDifficulty,
    GameOutcome,
    GameType,
    Move,
    MoveOutcome,
    MoveSet,
    Side,
)
from src.utils.logging import get_logger

logger = get_logger(__name__)


class GameSessionError(Exception):
    """Base exception for game session errors."""

    pass


class GameNotActiveError(GameSessionError):
    """Raised when trying to move in a finished game."""

    pass


class NotYourTurnError(GameSessionError):
    """Raised when a side tries to move out of turn."""

    pass


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """One entry of the move history.

    Attributes:
        side: Side that moved.
        move: The move, None for a pass.
        notation: Readable notation ("pass" for a pass).
    """

    side: Side
    move: Move | None
    notation: str


class GameSession:
    """One game between the human and the AI.

    The human always moves first. After a move that continues the turn
    (closing a mill in Nine Men's Morris) the same side moves again.

    Attributes:
        session_id: Unique session identifier.
        engine: Rules of the game being played.
        difficulty: AI difficulty level.
        board: Current board value.
        to_move: Side to move.
        history: Moves played so far, passes included.
    """

    def __init__(
        self,
        engine: GameEngine,
        difficulty: GameDifficulty | None = None,
        rng: random.Random | None = None,
        **board_options: Any,
    ) -> None:
        """Initialize a session on the engine's starting board.

        Args:
            engine: Rules of the game.
            difficulty: AI difficulty, settings default when None.
            rng: Random source for the AI; seeded from settings when None.
            **board_options: Passed to engine.initial_board (e.g., size).
        """
        settings = get_settings()

        self.session_id = str(uuid.uuid4())
        self.engine = engine
        self.difficulty = difficulty or GameDifficulty(settings.search.default_difficulty)
        self.board = engine.initial_board(**board_options)
        self.to_move = Side.HUMAN
        self.history: list[MoveRecord] = []
        self._rng = rng or random.Random(settings.search.seed)
        self._outcome = engine.is_game_over(self.board, self.to_move)

        logger.info(
            "game_session_started",
            session_id=self.session_id,
            game_type=engine.game_type.value,
            difficulty=self.difficulty.value,
        )

    @classmethod
    def start(
        cls,
        game_type: GameType | str,
        difficulty: GameDifficulty | None = None,
        registry: EngineRegistry | None = None,
        rng: random.Random | None = None,
        **board_options: Any,
    ) -> "GameSession":
        """Start a session for a registered game type.

        Raises:
            EngineNotRegisteredError: If no engine handles the game type.
        """
        if registry is None:
            registry = get_engine_registry()
        engine = registry.get(game_type)
        return cls(engine, difficulty=difficulty, rng=rng, **board_options)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def outcome(self) -> GameOutcome:
        """Current terminal status."""
        return self._outcome

    @property
    def is_over(self) -> bool:
        """Check if the game has ended."""
        return self._outcome.is_over

    @property
    def winner(self) -> Side | None:
        """Winning side, None while running or after a draw."""
        return self._outcome.winner

    def legal_moves(self) -> MoveSet:
        """Legal moves of the side to move."""
        return self.engine.legal_moves(self.board, self.to_move)

    def find_move(self, notation: str) -> Move:
        """Look up a legal move of the side to move by its notation.

        Raises:
            InvalidMoveError: If no legal move has this notation.
        """
        wanted = notation.strip().lower()
        for move in self.legal_moves().moves:
            if self.engine.format_move(move).lower() == wanted:
                return move
        raise InvalidMoveError(
            message=f"Illegal move {notation!r} for {self.to_move.value}",
            game_type=self.engine.game_type,
            details={"move": notation, "side": self.to_move.value},
        )

    # =========================================================================
    # Moves
    # =========================================================================

    def play(self, move: Move | str) -> MoveOutcome:
        """Play a human move.

        Args:
            move: Move from legal_moves(), or its notation.

        Returns:
            Outcome of the move.

        Raises:
            GameNotActiveError: If the game is over.
            NotYourTurnError: If it is the AI's turn.
            InvalidMoveError: If the move is not legal.
        """
        self._ensure_turn(Side.HUMAN)
        if isinstance(move, str):
            move = self.find_move(move)

        outcome = self.engine.apply(self.board, move, Side.HUMAN)
        self._advance(Side.HUMAN, move, outcome)

        logger.info(
            "move_played",
            session_id=self.session_id,
            game_type=self.engine.game_type.value,
            side=Side.HUMAN.value,
            move=self.history[-1].notation,
        )
        return outcome

    def play_ai(self) -> list[AIMove]:
        """Let the AI play its turn.

        Follow-up moves of the same turn (a removal after closing a mill)
        are played as well.

        Returns:
            The AI moves played this turn, in order.

        Raises:
            GameNotActiveError: If the game is over.
            NotYourTurnError: If it is the human's turn.
        """
        self._ensure_turn(Side.AI)

        played: list[AIMove] = []
        while not self.is_over and self.to_move is Side.AI:
            ai_move = self.engine.get_ai_move(
                self.board, Side.AI, self.difficulty, rng=self._rng
            )
            if ai_move.move is None:
                break

            outcome = self.engine.apply(self.board, ai_move.move, Side.AI, validate=False)
            self._advance(Side.AI, ai_move.move, outcome)
            played.append(ai_move)

            logger.info(
                "ai_move_played",
                session_id=self.session_id,
                game_type=self.engine.game_type.value,
                move=ai_move.notation,
                score=ai_move.evaluation,
                depth=ai_move.depth,
                nodes=ai_move.nodes,
                thinking_time_ms=ai_move.thinking_time_ms,
                quality=ai_move.move_quality,
            )

        return played

    # =========================================================================
    # Private Helper Methods
    # =========================================================================

    def _ensure_turn(self, side: Side) -> None:
        if self.is_over:
            raise GameNotActiveError(f"Game is over: {self.session_id}")
        if self.to_move is not side:
            raise NotYourTurnError(f"It is the {self.to_move.value} side's turn")

    def _advance(self, side: Side, move: Move, outcome: MoveOutcome) -> None:
        """Record a move and hand the turn to the next side."""
        self.history.append(MoveRecord(side, move, self.engine.format_move(move)))
        self.board = outcome.board
        self.to_move = side if outcome.continues_turn else side.opponent
        self._outcome = self.engine.is_game_over(self.board, self.to_move)

        # A blocked side passes while the game goes on
        while (
            not self._outcome.is_over
            and self.engine.allows_pass
            and not self.legal_moves()
        ):
            self.history.append(MoveRecord(self.to_move, None, "pass"))
            logger.info(
                "turn_passed",
                session_id=self.session_id,
                side=self.to_move.value,
            )
            self.to_move = self.to_move.opponent
            self._outcome = self.engine.is_game_over(self.board, self.to_move)

        if self._outcome.is_over:
            logger.info(
                "game_over",
                session_id=self.session_id,
                game_type=self.engine.game_type.value,
                winner=self._outcome.winner.value if self._outcome.winner else None,
                moves=len(self.history),
            )
