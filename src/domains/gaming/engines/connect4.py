# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Connect Four engine implementation.

This module provides a Connect Four engine that:
- Implements standard rules (7 columns x 6 rows, gravity drop)
- Detects four in a row horizontally, vertically and diagonally
- Searches centre columns first

The engine is stateless - boards are immutable tuples of row tuples.
Row 0 is the bottom row.
"""

import logging
from collections.abc import Sequence

from src.domains.gaming.engines.base import GameEngine
from src.domains.gaming.models import (
    GameOutcome,
    GameType,
    Move,
    MoveKind,
    MoveOutcome,
    MoveSet,
    NOT_OVER,
    Side,
)

logger = logging.getLogger(__name__)

Board = tuple[tuple[str, ...], ...]

# Board dimensions
ROWS = 6
COLS = 7
CONNECT = 4
CENTER_COL = COLS // 2

# Player symbols
EMPTY = "."
PLAYER1 = "X"  # Human, plays first
PLAYER2 = "O"  # AI

PIECES = {Side.HUMAN: PLAYER1, Side.AI: PLAYER2}

# Window weights
FOUR_VALUE = 100
THREE_VALUE = 10
TWO_VALUE = 2
CENTER_VALUE = 3


def _build_windows() -> tuple[tuple[tuple[int, int], ...], ...]:
    """All lines of four cells on the board."""
    windows = []
    for row in range(ROWS):
        for col in range(COLS):
            # Horizontal, vertical, diagonal up-right, diagonal up-left
            for dr, dc in ((0, 1), (1, 0), (1, 1), (1, -1)):
                end_row = row + dr * (CONNECT - 1)
                end_col = col + dc * (CONNECT - 1)
                if 0 <= end_row < ROWS and 0 <= end_col < COLS:
                    windows.append(
                        tuple((row + dr * i, col + dc * i) for i in range(CONNECT))
                    )
    return tuple(windows)


WINDOWS = _build_windows()


class Connect4Engine(GameEngine):
    """Connect Four engine using minimax search.

    Notation: column number 1-7 (e.g., "4" for the centre column).

    Example:
        engine = Connect4Engine()
        board = engine.initial_board()
        move = engine.best_move(board, Side.AI, depth=4)
    """

    @property
    def game_type(self) -> GameType:
        """Get the game type."""
        return GameType.CONNECT4

    @property
    def name(self) -> str:
        """Get the engine name."""
        return "Minimax Connect Four Engine"

    def initial_board(self) -> Board:
        """Get the empty Connect Four board."""
        return tuple((EMPTY,) * COLS for _ in range(ROWS))

    def legal_moves(self, board: Board, side: Side) -> MoveSet:
        """One drop per non-full column, landing on the lowest empty row."""
        if self.winner(board) is not None:
            return MoveSet()

        moves = []
        for col in range(COLS):
            row = self._find_landing_row(board, col)
            if row >= 0:
                moves.append(Move(kind=MoveKind.DROP, to=(row, col)))
        return MoveSet(simple_moves=tuple(moves))

    def evaluate(self, board: Board, side: Side) -> int:
        """Score every window of four plus centre control for a side."""
        player = PIECES[side]
        opponent = PIECES[side.opponent]
        score = 0

        for window in WINDOWS:
            cells = [board[row][col] for row, col in window]
            empty = cells.count(EMPTY)
            score += self._evaluate_window(cells.count(player), empty)
            score -= self._evaluate_window(cells.count(opponent), empty)

        for row in range(ROWS):
            if board[row][CENTER_COL] == player:
                score += CENTER_VALUE
            elif board[row][CENTER_COL] == opponent:
                score -= CENTER_VALUE

        return score

    def is_game_over(
        self,
        board: Board,
        side: Side,
        moves: MoveSet | None = None,
    ) -> GameOutcome:
        """Game ends on four in a row or a full board."""
        winner = self.winner(board)
        if winner is not None:
            return GameOutcome(is_over=True, winner=winner)
        if all(board[ROWS - 1][col] != EMPTY for col in range(COLS)):
            return GameOutcome(is_over=True)
        return NOT_OVER

    def order_moves(
        self,
        board: Board,
        moves: Sequence[Move],
        side: Side,
    ) -> Sequence[Move]:
        """Centre columns first."""
        return sorted(moves, key=lambda move: abs(move.to[1] - CENTER_COL))

    def format_move(self, move: Move) -> str:
        """Convert a drop to its 1-based column number."""
        return str(move.to[1] + 1)

    def winner(self, board: Board) -> Side | None:
        """Get the side with four in a row, if any."""
        for window in WINDOWS:
            first_row, first_col = window[0]
            piece = board[first_row][first_col]
            if piece == EMPTY:
                continue
            if all(board[row][col] == piece for row, col in window[1:]):
                return Side.HUMAN if piece == PLAYER1 else Side.AI
        return None

    # =========================================================================
    # Private Helper Methods
    # =========================================================================

    def _make_move(self, board: Board, move: Move, side: Side) -> MoveOutcome:
        row, col = move.to
        grid = [list(r) for r in board]
        grid[row][col] = PIECES[side]
        return MoveOutcome(board=tuple(tuple(r) for r in grid))

    def _find_landing_row(self, board: Board, col: int) -> int:
        """Find the row where a piece will land in the given column."""
        for row in range(ROWS):
            if board[row][col] == EMPTY:
                return row
        return -1  # Column is full

    @staticmethod
    def _evaluate_window(own: int, empty: int) -> int:
        """Evaluate one side's share of a window of 4 cells."""
        if own == 4:
            return FOUR_VALUE
        if own == 3 and empty == 1:
            return THREE_VALUE
        if own == 2 and empty == 2:
            return TWO_VALUE
        return 0
