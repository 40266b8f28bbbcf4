# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Abstract base class for game engines.

This module defines the GameEngine ABC that all game engines must implement.
The interface is the rules capability the generic search works against:
- Board initialization
- Legal move generation (with mandatory capture where the game has it)
- Pure move application on board values
- Static evaluation and terminal detection

Each game engine implementation (Reversi, Checkers, etc.) inherits from this
base and provides game-specific rules. Search, difficulty handling and the AI
move response are shared and implemented here once.
"""

import logging
import random
import time
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

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

if TYPE_CHECKING:
    from src.domains.gaming.engines.search import SearchLimits, SearchResult

logger = logging.getLogger(__name__)

# Saturating score for decided games. Larger than any heuristic total so
# forced wins and losses always dominate material noise.
WIN_SCORE = 100_000


class EngineError(Exception):
    """Base exception for game engine errors.

    Attributes:
        message: Error description.
        game_type: Type of game that raised the error.
        details: Additional error details.
    """

    def __init__(
        self,
        message: str,
        game_type: GameType | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.game_type = game_type
        self.details = details or {}
        super().__init__(self.message)


class InvalidPositionError(EngineError):
    """Raised when a board or board option is invalid."""

    pass


class InvalidMoveError(EngineError):
    """Raised when a move is not legal for the given board and side."""

    pass


class SearchTimeoutError(EngineError):
    """Raised when a search exceeds its time or node budget."""

    pass


class GameEngine(ABC):
    """Abstract base class for all game engines.

    Game engines provide the rules of one game. Boards are values: no method
    mutates the board it receives, so an engine instance is stateless and can
    be shared across sessions and search branches.

    Class attributes:
        DIFFICULTY_DEPTHS: Search depth per difficulty level.
        RANDOM_MOVE_RATE: Chance per difficulty of playing a random legal move.
        allows_pass: Whether a side without moves passes instead of losing.

    Example:
        class TicTacToeEngine(GameEngine):
            @property
            def game_type(self) -> GameType:
                return GameType.TICTACTOE

            def legal_moves(self, board, side) -> MoveSet:
                ...

            # ... implement other abstract methods
    """

    DIFFICULTY_DEPTHS: dict[GameDifficulty, int] = {
        GameDifficulty.EASY: 2,
        GameDifficulty.MEDIUM: 4,
        GameDifficulty.HARD: 6,
    }
    RANDOM_MOVE_RATE: dict[GameDifficulty, float] = {}
    allows_pass: bool = False

    @property
    @abstractmethod
    def game_type(self) -> GameType:
        """Get the game type this engine handles.

        Returns:
            GameType enum value.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the human-readable engine name.

        Returns:
            Engine name (e.g., "Minimax Checkers Engine").
        """
        pass

    @abstractmethod
    def initial_board(self) -> Any:
        """Get the starting board for a new game.

        Returns:
            Board value in the engine's representation.
        """
        pass

    @abstractmethod
    def legal_moves(self, board: Any, side: Side) -> MoveSet:
        """Get all legal moves for a side.

        For games with mandatory capture, simple moves are suppressed
        whenever a capture exists.

        Args:
            board: Current board.
            side: Side to move.

        Returns:
            MoveSet, empty when the side cannot move.
        """
        pass

    @abstractmethod
    def evaluate(self, board: Any, side: Side) -> int:
        """Statically score a board.

        Args:
            board: Board to score.
            side: Perspective side; higher is better for this side.

        Returns:
            Heuristic score.
        """
        pass

    @abstractmethod
    def is_game_over(
        self,
        board: Any,
        side: Side,
        moves: MoveSet | None = None,
    ) -> GameOutcome:
        """Check if the game is over with ``side`` to move.

        Args:
            board: Current board.
            side: Side to move.
            moves: Legal moves of ``side`` if already generated.

        Returns:
            GameOutcome with the winner, None winner for a draw.
        """
        pass

    @abstractmethod
    def format_move(self, move: Move) -> str:
        """Convert a move to readable notation.

        Args:
            move: Move to format.

        Returns:
            Notation string (e.g., "c3xe5", "d3", "4").
        """
        pass

    @abstractmethod
    def _make_move(self, board: Any, move: Move, side: Side) -> MoveOutcome:
        """Apply a move known to be legal and return the outcome."""
        pass

    def apply(
        self,
        board: Any,
        move: Move,
        side: Side,
        validate: bool = True,
    ) -> MoveOutcome:
        """Apply a move to a copy of the board.

        Args:
            board: Current board. Never mutated.
            move: Move to apply.
            side: Side making the move.
            validate: Check the move against the legal move set first.

        Returns:
            MoveOutcome with the new board and capture/promotion metadata.

        Raises:
            InvalidMoveError: If ``validate`` is set and the move is illegal.
        """
        if validate and move not in self.legal_moves(board, side):
            raise InvalidMoveError(
                message=f"Illegal move {self.format_move(move)} for {side.value}",
                game_type=self.game_type,
                details={"move": self.format_move(move), "side": side.value},
            )
        return self._make_move(board, move, side)

    def order_moves(
        self,
        board: Any,
        moves: Sequence[Move],
        side: Side,
    ) -> Sequence[Move]:
        """Order moves so the likely best are searched first.

        The default keeps generator order, which already lists captures first.
        """
        return moves

    def terminal_score(self, outcome: GameOutcome, side: Side, depth: int) -> int:
        """Score a decided game from ``side``'s perspective.

        Args:
            outcome: Terminal outcome.
            side: Perspective side.
            depth: Remaining search depth; faster wins keep more of it.

        Returns:
            Saturating win/loss score, 0 for a draw.
        """
        if outcome.winner is None:
            return 0
        if outcome.winner is side:
            return WIN_SCORE + depth
        return -(WIN_SCORE + depth)

    def depth_for(self, board: Any, difficulty: GameDifficulty) -> int:
        """Get the search depth for a difficulty level.

        Args:
            board: Current board (engines may deepen near the end).
            difficulty: AI difficulty level.

        Returns:
            Search depth in plies.
        """
        return self.DIFFICULTY_DEPTHS[difficulty]

    def search(
        self,
        board: Any,
        side: Side,
        depth: int,
        rng: random.Random | None = None,
        limits: "SearchLimits | None" = None,
        prune: bool = True,
    ) -> "SearchResult":
        """Run a fixed-depth minimax search.

        Args:
            board: Current board.
            side: Side to move; scores are from this side's perspective.
            depth: Search depth in plies.
            rng: Random source for tie-breaking; first tied move when None.
            limits: Optional time/node budget.
            prune: Use alpha-beta cut-offs (False = exhaustive minimax).

        Returns:
            SearchResult with the chosen move, score and statistics.
        """
        from src.domains.gaming.engines.search import AlphaBetaSearch

        return AlphaBetaSearch(self, rng=rng, limits=limits, prune=prune).search(
            board, side, depth
        )

    def best_move(
        self,
        board: Any,
        side: Side,
        depth: int,
        rng: random.Random | None = None,
    ) -> Move | None:
        """Get the best move for a side.

        Args:
            board: Current board.
            side: Side to move.
            depth: Search depth in plies.
            rng: Random source for tie-breaking.

        Returns:
            The chosen move, or None when the side has no legal move.
        """
        return self.search(board, side, depth, rng=rng).best_move

    def get_ai_move(
        self,
        board: Any,
        side: Side,
        difficulty: GameDifficulty,
        rng: random.Random | None = None,
        limits: "SearchLimits | None" = None,
    ) -> AIMove:
        """Get the AI's move for the current board.

        Uses iterative deepening up to the difficulty depth and keeps the
        deepest fully completed iteration if the budget runs out.

        Args:
            board: Current board.
            side: Side to move.
            difficulty: AI difficulty level.
            rng: Random source; seeded from settings when None.
            limits: Time/node budget; taken from settings when None.

        Returns:
            AIMove with the chosen move and search metadata.
        """
        from src.core.config.settings import get_settings
        from src.domains.gaming.engines.search import AlphaBetaSearch, SearchLimits

        started = time.perf_counter()
        settings = get_settings()

        if rng is None:
            rng = random.Random(settings.search.seed)

        legal = self.legal_moves(board, side)
        if not legal:
            return AIMove(move=None, move_quality="no_moves")

        # Weaker levels sometimes play a random legal move
        if rng.random() < self.RANDOM_MOVE_RATE.get(difficulty, 0.0):
            chosen = rng.choice(legal.moves)
            return AIMove(
                move=chosen,
                notation=self.format_move(chosen),
                thinking_time_ms=int((time.perf_counter() - started) * 1000),
                tied_moves=len(legal),
                move_quality="random",
            )

        if limits is None:
            limits = SearchLimits(
                time_limit_ms=settings.search.time_limit_ms or None,
                max_nodes=settings.search.max_nodes,
            )

        depth = self.depth_for(board, difficulty)
        result = AlphaBetaSearch(self, rng=rng, limits=limits).iterative_search(
            board, side, depth
        )

        move_quality = "normal"
        if abs(result.score) >= WIN_SCORE:
            move_quality = "winning" if result.score > 0 else "losing"
        elif result.best_move is not None and result.best_move.is_capture:
            move_quality = "capture"

        return AIMove(
            move=result.best_move,
            notation=self.format_move(result.best_move) if result.best_move else "",
            evaluation=result.score,
            depth=result.depth,
            nodes=result.nodes,
            thinking_time_ms=int((time.perf_counter() - started) * 1000),
            tied_moves=len(result.tied_moves),
            move_quality=move_quality,
        )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"{self.__class__.__name__}(game_type={self.game_type.value})"
