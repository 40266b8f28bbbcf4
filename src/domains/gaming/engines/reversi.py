# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Reversi (Othello) engine implementation.

This module provides a Reversi engine that:
- Implements standard Reversi rules (flipping mechanic, passing)
- Supports even board sizes from 4x4 to 10x10 (6 and 8 are the usual ones)
- Scores boards with discs, scaled position weights, mobility and corners

The engine is stateless - boards are immutable tuples of row tuples.
The human plays black and moves first, the AI plays white.
"""

import logging
from collections.abc import Sequence
from functools import lru_cache

from src.domains.gaming.engines.base import GameEngine, InvalidPositionError
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

# Player symbols
EMPTY = "."
BLACK = "B"  # Human, plays first
WHITE = "W"  # AI

PIECES = {Side.HUMAN: BLACK, Side.AI: WHITE}

DEFAULT_SIZE = 8
MIN_SIZE = 4
MAX_SIZE = 10

# Position weights for the 8x8 board (corners are very valuable)
POSITION_WEIGHTS_8 = (
    (100, -20, 10, 5, 5, 10, -20, 100),
    (-20, -50, -2, -2, -2, -2, -50, -20),
    (10, -2, 5, 1, 1, 5, -2, 10),
    (5, -2, 1, 0, 0, 1, -2, 5),
    (5, -2, 1, 0, 0, 1, -2, 5),
    (10, -2, 5, 1, 1, 5, -2, 10),
    (-20, -50, -2, -2, -2, -2, -50, -20),
    (100, -20, 10, 5, 5, 10, -20, 100),
)

# All eight directions
DIRECTIONS = ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1))

# Evaluation term weights
DISC_WEIGHT = 1
POSITION_WEIGHT = 2
MOBILITY_WEIGHT = 5
CORNER_WEIGHT = 10
CORNER_VALUE = 25

# Extra plies once few empty squares are left
ENDGAME_DEPTH_BONUS = 2


@lru_cache(maxsize=None)
def position_weights(size: int) -> tuple[tuple[int, ...], ...]:
    """Scale the 8x8 position weights to a board size.

    Each square maps onto the 8x8 table proportionally; the four corners
    always keep the full corner weight.
    """
    weights = [
        [POSITION_WEIGHTS_8[row * 8 // size][col * 8 // size] for col in range(size)]
        for row in range(size)
    ]
    last = size - 1
    for row, col in ((0, 0), (0, last), (last, 0), (last, last)):
        weights[row][col] = 100
    return tuple(tuple(row) for row in weights)


class ReversiEngine(GameEngine):
    """Reversi engine using minimax search.

    Board cells hold "B" (black/human), "W" (white/AI) or "." (empty).
    Notation: "d3" means column d, row 3 counted from the top.

    Example:
        engine = ReversiEngine()
        board = engine.initial_board(size=6)
        moves = engine.legal_moves(board, Side.HUMAN)
    """

    allows_pass = True

    @property
    def game_type(self) -> GameType:
        """Get the game type."""
        return GameType.REVERSI

    @property
    def name(self) -> str:
        """Get the engine name."""
        return "Minimax Reversi Engine"

    def initial_board(self, size: int = DEFAULT_SIZE) -> Board:
        """Get the starting board with the four centre discs.

        Args:
            size: Board edge length, even and between 4 and 10.

        Raises:
            InvalidPositionError: If the size is unsupported.
        """
        if size % 2 or not MIN_SIZE <= size <= MAX_SIZE:
            raise InvalidPositionError(
                message=f"Unsupported board size {size}",
                game_type=GameType.REVERSI,
                details={"size": size},
            )

        mid = size // 2
        grid = [[EMPTY] * size for _ in range(size)]
        grid[mid - 1][mid - 1] = WHITE
        grid[mid - 1][mid] = BLACK
        grid[mid][mid - 1] = BLACK
        grid[mid][mid] = WHITE
        return tuple(tuple(row) for row in grid)

    def legal_moves(self, board: Board, side: Side) -> MoveSet:
        """Get all placements that flip at least one disc."""
        piece = PIECES[side]
        moves = []
        size = len(board)
        for row in range(size):
            for col in range(size):
                if board[row][col] != EMPTY:
                    continue
                flips = self._get_flips(board, row, col, piece)
                if flips:
                    moves.append(Move(kind=MoveKind.PLACE, to=(row, col), flips=flips))
        return MoveSet(simple_moves=tuple(moves))

    def evaluate(self, board: Board, side: Side) -> int:
        """Score discs, position, mobility and corners for a side."""
        player = PIECES[side]
        opponent = PIECES[side.opponent]
        weights = position_weights(len(board))

        discs = 0
        position = 0
        for row, cells in enumerate(board):
            for col, cell in enumerate(cells):
                if cell == player:
                    discs += 1
                    position += weights[row][col]
                elif cell == opponent:
                    discs -= 1
                    position -= weights[row][col]

        mobility = len(self.legal_moves(board, side)) - len(
            self.legal_moves(board, side.opponent)
        )

        corners = 0
        for row, col in self._corners(len(board)):
            if board[row][col] == player:
                corners += CORNER_VALUE
            elif board[row][col] == opponent:
                corners -= CORNER_VALUE

        return (
            discs * DISC_WEIGHT
            + position * POSITION_WEIGHT
            + mobility * MOBILITY_WEIGHT
            + corners * CORNER_WEIGHT
        )

    def is_game_over(
        self,
        board: Board,
        side: Side,
        moves: MoveSet | None = None,
    ) -> GameOutcome:
        """The game ends when neither side can place a disc."""
        if moves is None:
            moves = self.legal_moves(board, side)
        if moves or self.legal_moves(board, side.opponent):
            return NOT_OVER

        counts = self.count_discs(board)
        if counts[Side.HUMAN] > counts[Side.AI]:
            return GameOutcome(is_over=True, winner=Side.HUMAN)
        if counts[Side.AI] > counts[Side.HUMAN]:
            return GameOutcome(is_over=True, winner=Side.AI)
        return GameOutcome(is_over=True)

    def order_moves(
        self,
        board: Board,
        moves: Sequence[Move],
        side: Side,
    ) -> Sequence[Move]:
        """Corners first, then edges, then the rest."""
        last = len(board) - 1

        def move_priority(move: Move) -> int:
            row, col = move.to
            if row in (0, last) and col in (0, last):
                return 0
            if row in (0, last) or col in (0, last):
                return 1
            return 2

        return sorted(moves, key=move_priority)

    def depth_for(self, board: Board, difficulty: GameDifficulty) -> int:
        """Search deeper once the board is nearly full."""
        depth = self.DIFFICULTY_DEPTHS[difficulty]
        empties = sum(row.count(EMPTY) for row in board)
        if empties < len(board) + 4:
            depth += ENDGAME_DEPTH_BONUS
        return depth

    def format_move(self, move: Move) -> str:
        """Convert a placement to notation (e.g., 'd3')."""
        row, col = move.to
        return f"{chr(ord('a') + col)}{row + 1}"

    def count_discs(self, board: Board) -> dict[Side, int]:
        """Count discs per side."""
        return {side: sum(row.count(piece) for row in board) for side, piece in PIECES.items()}

    # =========================================================================
    # Private Helper Methods
    # =========================================================================

    def _make_move(self, board: Board, move: Move, side: Side) -> MoveOutcome:
        piece = PIECES[side]
        grid = [list(row) for row in board]
        row, col = move.to
        grid[row][col] = piece
        for flip_row, flip_col in move.flips:
            grid[flip_row][flip_col] = piece
        return MoveOutcome(board=tuple(tuple(r) for r in grid))

    def _get_flips(
        self,
        board: Board,
        row: int,
        col: int,
        player: str,
    ) -> tuple[tuple[int, int], ...]:
        """Get all discs that would be flipped by playing at (row, col)."""
        opponent = WHITE if player == BLACK else BLACK
        size = len(board)
        all_flips: list[tuple[int, int]] = []

        for dr, dc in DIRECTIONS:
            flips = []
            r, c = row + dr, col + dc

            while 0 <= r < size and 0 <= c < size and board[r][c] == opponent:
                flips.append((r, c))
                r += dr
                c += dc

            # The run only counts when it ends on our own disc
            if flips and 0 <= r < size and 0 <= c < size and board[r][c] == player:
                all_flips.extend(flips)

        return tuple(all_flips)

    @staticmethod
    def _corners(size: int) -> tuple[tuple[int, int], ...]:
        last = size - 1
        return ((0, 0), (0, last), (last, 0), (last, last))
