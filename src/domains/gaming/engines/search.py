# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Generic minimax search with alpha-beta pruning.

The search works against any GameEngine: it only needs legal move
generation, pure move application, static evaluation and terminal
detection. Scores are always taken from the perspective of the side that
is to move at the root.

Features:
- Fixed-depth alpha-beta (or exhaustive minimax with prune=False)
- Pass handling for games where a blocked side passes (Reversi)
- Same-ply follow-up moves for games where a move continues the turn
  (Nine Men's Morris removal)
- Exact root tie detection with injectable random tie-breaking
- Time and node budgets with iterative deepening
"""

import logging
import math
import random
import time
from dataclasses import dataclass
from typing import Any

from src.domains.gaming.engines.base import GameEngine, SearchTimeoutError
from src.domains.gaming.models import Move, Side

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SearchLimits:
    """Budget for one search.

    Attributes:
        depth: Maximum depth for iterative deepening, None to use the
            depth passed by the caller.
        time_limit_ms: Wall-clock budget in milliseconds, None for no limit.
        max_nodes: Maximum visited nodes, None for no limit.
    """

    depth: int | None = None
    time_limit_ms: int | None = None
    max_nodes: int | None = None


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Outcome of a search.

    Attributes:
        best_move: Chosen root move, None when the side has no legal move.
        score: Score of the chosen move from the root side's perspective.
        depth: Depth of the search that produced the move.
        nodes: Number of nodes visited.
        tied_moves: All root moves sharing the best score, in move order.
    """

    best_move: Move | None
    score: int
    depth: int
    nodes: int
    tied_moves: tuple[Move, ...] = ()


class AlphaBetaSearch:
    """Minimax search over a game engine.

    One instance runs searches for one engine. Instances hold per-search
    counters, so use a fresh instance per concurrent search.

    Example:
        search = AlphaBetaSearch(engine, rng=random.Random(7))
        result = search.search(board, Side.AI, depth=4)
    """

    def __init__(
        self,
        engine: GameEngine,
        rng: random.Random | None = None,
        limits: SearchLimits | None = None,
        prune: bool = True,
    ) -> None:
        """Initialize the search.

        Args:
            engine: Rules of the game being searched.
            rng: Random source for root tie-breaking. When None, the first
                tied move in move order is chosen.
            limits: Optional time/node budget.
            prune: Whether to cut off branches once beta <= alpha.
        """
        self._engine = engine
        self._rng = rng
        self._limits = limits or SearchLimits()
        self._prune = prune
        self._perspective = Side.AI
        self._deadline: float | None = None
        self._enforce_limits = True
        self.nodes = 0

    # =========================================================================
    # Public API
    # =========================================================================

    def search(self, board: Any, side: Side, depth: int) -> SearchResult:
        """Search the board to a fixed depth.

        Args:
            board: Root board.
            side: Side to move at the root.
            depth: Search depth in plies (at least 1).

        Returns:
            SearchResult for the root side.

        Raises:
            SearchTimeoutError: If the time or node budget is exceeded.
        """
        self.nodes = 0
        self._start_clock()
        return self._search_root(board, side, max(1, depth))

    def iterative_search(
        self,
        board: Any,
        side: Side,
        depth: int | None = None,
    ) -> SearchResult:
        """Search with iterative deepening up to ``depth``.

        Depth 1 always completes. Deeper iterations run until the budget
        is exhausted; the result of the deepest completed iteration wins.

        Args:
            board: Root board.
            side: Side to move at the root.
            depth: Maximum depth; falls back to ``limits.depth``.

        Returns:
            SearchResult of the deepest completed iteration, with the node
            count summed over all iterations.
        """
        max_depth = max(1, depth or self._limits.depth or 1)
        self.nodes = 0
        self._start_clock()

        self._enforce_limits = False
        result = self._search_root(board, side, 1)
        self._enforce_limits = True

        for current in range(2, max_depth + 1):
            try:
                result = self._search_root(board, side, current)
            except SearchTimeoutError:
                logger.debug(
                    "Search budget exhausted at depth %s, keeping depth %s",
                    current,
                    result.depth,
                )
                break

        return SearchResult(
            best_move=result.best_move,
            score=result.score,
            depth=result.depth,
            nodes=self.nodes,
            tied_moves=result.tied_moves,
        )

    # =========================================================================
    # Search internals
    # =========================================================================

    def _start_clock(self) -> None:
        if self._limits.time_limit_ms:
            self._deadline = time.monotonic() + self._limits.time_limit_ms / 1000
        else:
            self._deadline = None

    def _enter_node(self) -> None:
        """Count a node and enforce the budget."""
        self.nodes += 1
        if not self._enforce_limits:
            return
        max_nodes = self._limits.max_nodes
        if max_nodes is not None and self.nodes > max_nodes:
            raise SearchTimeoutError(
                message=f"Node budget of {max_nodes} exceeded",
                game_type=self._engine.game_type,
                details={"nodes": self.nodes},
            )
        if self._deadline is not None and time.monotonic() > self._deadline:
            raise SearchTimeoutError(
                message=f"Time budget of {self._limits.time_limit_ms}ms exceeded",
                game_type=self._engine.game_type,
                details={"nodes": self.nodes},
            )

    def _search_root(self, board: Any, side: Side, depth: int) -> SearchResult:
        engine = self._engine
        self._perspective = side
        self._enter_node()

        moves = engine.legal_moves(board, side)
        if not moves:
            outcome = engine.is_game_over(board, side, moves)
            if outcome.is_over:
                score = engine.terminal_score(outcome, side, depth)
            else:
                score = engine.evaluate(board, side)
            return SearchResult(best_move=None, score=score, depth=depth, nodes=self.nodes)

        best_score = -math.inf
        tied: list[Move] = []

        for move in engine.order_moves(board, moves.moves, side):
            # Window (best - 1, +inf) keeps scores equal to the best exact
            # while anything below is still cut off.
            alpha = best_score - 1 if self._prune else -math.inf
            score = self._child_score(board, move, side, depth, alpha, math.inf)

            if score > best_score:
                best_score = score
                tied = [move]
            elif score == best_score:
                tied.append(move)

        chosen = self._rng.choice(tied) if self._rng is not None else tied[0]

        logger.debug(
            "%s search depth=%s score=%s nodes=%s tied=%s",
            engine.game_type.value,
            depth,
            best_score,
            self.nodes,
            len(tied),
        )

        return SearchResult(
            best_move=chosen,
            score=int(best_score),
            depth=depth,
            nodes=self.nodes,
            tied_moves=tuple(tied),
        )

    def _child_score(
        self,
        board: Any,
        move: Move,
        side: Side,
        depth: int,
        alpha: float,
        beta: float,
    ) -> float:
        """Apply a move and score the resulting node."""
        outcome = self._engine.apply(board, move, side, validate=False)
        if outcome.continues_turn:
            # Follow-up sub-move of the same side within the same ply
            return self._minimax(outcome.board, side, depth, alpha, beta)
        return self._minimax(outcome.board, side.opponent, depth - 1, alpha, beta)

    def _minimax(
        self,
        board: Any,
        side: Side,
        depth: int,
        alpha: float,
        beta: float,
    ) -> float:
        """Alpha-beta minimax.

        Args:
            board: Board at this node.
            side: Side to move at this node.
            depth: Remaining depth.
            alpha: Best score the root side is assured of.
            beta: Best score the opponent is assured of.

        Returns:
            Node score from the root side's perspective.
        """
        engine = self._engine
        self._enter_node()

        moves = engine.legal_moves(board, side)
        outcome = engine.is_game_over(board, side, moves)
        if outcome.is_over:
            return engine.terminal_score(outcome, self._perspective, depth)

        if depth <= 0:
            return engine.evaluate(board, self._perspective)

        if not moves:
            # Blocked side passes; the pass still consumes a ply
            return self._minimax(board, side.opponent, depth - 1, alpha, beta)

        maximizing = side is self._perspective
        best = -math.inf if maximizing else math.inf

        for move in engine.order_moves(board, moves.moves, side):
            score = self._child_score(board, move, side, depth, alpha, beta)
            if maximizing:
                best = max(best, score)
                alpha = max(alpha, score)
            else:
                best = min(best, score)
                beta = min(beta, score)
            if self._prune and beta <= alpha:
                break

        return best
