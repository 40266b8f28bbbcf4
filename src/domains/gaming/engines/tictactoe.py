# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tic-tac-toe engine implementation.

The board is small enough to search to the end on every level; the
difficulty only controls how often the AI plays a random square instead.
"""

import logging

from src.domains.gaming.engines.base import GameEngine
from src.domains.gaming.models import (
    GameDifficulty,
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

SIZE = 3

# Player symbols
EMPTY = "."
CROSS = "X"  # Human, plays first
NOUGHT = "O"  # AI

PIECES = {Side.HUMAN: CROSS, Side.AI: NOUGHT}

LINES = (
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)

TWO_IN_LINE_VALUE = 10
ONE_IN_LINE_VALUE = 1


class TicTacToeEngine(GameEngine):
    """Tic-tac-toe engine with full-depth minimax.

    Notation: "b2" for the centre square (column letter, row number).
    """

    DIFFICULTY_DEPTHS = {
        GameDifficulty.EASY: SIZE * SIZE,
        GameDifficulty.MEDIUM: SIZE * SIZE,
        GameDifficulty.HARD: SIZE * SIZE,
    }
    RANDOM_MOVE_RATE = {
        GameDifficulty.EASY: 1.0,
        GameDifficulty.MEDIUM: 0.4,
        GameDifficulty.HARD: 0.0,
    }

    @property
    def game_type(self) -> GameType:
        """Get the game type."""
        return GameType.TICTACTOE

    @property
    def name(self) -> str:
        """Get the engine name."""
        return "Minimax Tic-tac-toe Engine"

    def initial_board(self) -> Board:
        return tuple((EMPTY,) * SIZE for _ in range(SIZE))

    def legal_moves(self, board: Board, side: Side) -> MoveSet:
        if self.winner(board) is not None:
            return MoveSet()
        return MoveSet(
            simple_moves=tuple(
                Move(kind=MoveKind.PLACE, to=(row, col))
                for row in range(SIZE)
                for col in range(SIZE)
                if board[row][col] == EMPTY
            )
        )

    def evaluate(self, board: Board, side: Side) -> int:
        """Count lines still open for each side."""
        player = PIECES[side]
        opponent = PIECES[side.opponent]
        score = 0
        for line in LINES:
            cells = [board[row][col] for row, col in line]
            if opponent not in cells:
                score += self._line_value(cells.count(player))
            if player not in cells:
                score -= self._line_value(cells.count(opponent))
        return score

    def is_game_over(
        self,
        board: Board,
        side: Side,
        moves: MoveSet | None = None,
    ) -> GameOutcome:
        winner = self.winner(board)
        if winner is not None:
            return GameOutcome(is_over=True, winner=winner)
        if all(cell != EMPTY for row in board for cell in row):
            return GameOutcome(is_over=True)
        return NOT_OVER

    def format_move(self, move: Move) -> str:
        row, col = move.to
        return f"{chr(ord('a') + col)}{row + 1}"

    def winner(self, board: Board) -> Side | None:
        """Get the side with three in a row, if any."""
        for line in LINES:
            cells = {board[row][col] for row, col in line}
            if len(cells) == 1:
                piece = cells.pop()
                if piece == CROSS:
                    return Side.HUMAN
                if piece == NOUGHT:
                    return Side.AI
        return None

    def _make_move(self, board: Board, move: Move, side: Side) -> MoveOutcome:
        row, col = move.to
        grid = [list(r) for r in board]
        grid[row][col] = PIECES[side]
        return MoveOutcome(board=tuple(tuple(r) for r in grid))

    @staticmethod
    def _line_value(own: int) -> int:
        if own == 2:
            return TWO_IN_LINE_VALUE
        if own == 1:
            return ONE_IN_LINE_VALUE
        return 0
