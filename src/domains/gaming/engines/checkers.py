# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Checkers (Draughts) engine implementation.

This module provides a Checkers engine that:
- Plays on the dark squares of an 8x8 board
- Enforces mandatory captures, including multi-jump chains
- Crowns men reaching the far row as kings

Men step and capture diagonally forward only; kings step and capture one
square in all four diagonal directions. A capture chain is one move: the
generator lists every maximal chain separately. A man that is crowned
during a chain stops there.

The engine is stateless - boards are immutable tuples of row tuples.
"""

import logging

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
Square = tuple[int, int]

# Board dimensions
BOARD_SIZE = 8
START_ROWS = 3

# Player symbols
EMPTY = "."
BLACK = "b"  # AI pieces (start at top, move down)
BLACK_KING = "B"
WHITE = "w"  # Human pieces (start at bottom, move up)
WHITE_KING = "W"

MEN = {Side.HUMAN: WHITE, Side.AI: BLACK}
KINGS = {Side.HUMAN: WHITE_KING, Side.AI: BLACK_KING}

# Forward row direction per side
FORWARD = {Side.HUMAN: -1, Side.AI: 1}
PROMOTION_ROW = {Side.HUMAN: 0, Side.AI: BOARD_SIZE - 1}

KING_DIRECTIONS = ((-1, -1), (-1, 1), (1, -1), (1, 1))

# Evaluation weights
MAN_VALUE = 100
KING_VALUE = 250
ADVANCEMENT_VALUE = 10
MOBILITY_WEIGHT = 5

# Position weights for evaluation (edges are safe from capture)
POSITION_WEIGHTS = (
    (0, 4, 0, 4, 0, 4, 0, 4),
    (4, 0, 3, 0, 3, 0, 3, 0),
    (0, 3, 0, 2, 0, 2, 0, 4),
    (4, 0, 2, 0, 1, 0, 3, 0),
    (0, 3, 0, 1, 0, 2, 0, 4),
    (4, 0, 2, 0, 2, 0, 3, 0),
    (0, 3, 0, 3, 0, 3, 0, 4),
    (4, 0, 4, 0, 4, 0, 4, 0),
)


def side_of(piece: str) -> Side | None:
    """Get the side owning a piece, None for an empty square."""
    if piece in (WHITE, WHITE_KING):
        return Side.HUMAN
    if piece in (BLACK, BLACK_KING):
        return Side.AI
    return None


class CheckersEngine(GameEngine):
    """Checkers engine using minimax search.

    - Only dark squares are used (where row + col is odd)
    - Black (AI) starts at the top, White (human) at the bottom
    - Notation: "c6-d5" for a step, "c6xe4xg2" for a capture chain

    Example:
        engine = CheckersEngine()
        board = engine.initial_board()
        moves = engine.legal_moves(board, Side.HUMAN)
    """

    @property
    def game_type(self) -> GameType:
        """Get the game type."""
        return GameType.CHECKERS

    @property
    def name(self) -> str:
        """Get the engine name."""
        return "Minimax Checkers Engine"

    def initial_board(self) -> Board:
        """Get the starting Checkers board."""
        grid = [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                if (row + col) % 2 == 0:
                    continue
                if row < START_ROWS:
                    grid[row][col] = BLACK
                elif row >= BOARD_SIZE - START_ROWS:
                    grid[row][col] = WHITE
        return tuple(tuple(row) for row in grid)

    def legal_moves(self, board: Board, side: Side) -> MoveSet:
        """Get legal moves; simple moves only when no capture exists."""
        captures = []
        for row, col in self._pieces(board, side):
            captures.extend(self._get_capture_chains(board, (row, col), side))
        if captures:
            return MoveSet(capture_moves=tuple(captures))

        steps = []
        for row, col in self._pieces(board, side):
            for dr, dc in self._get_move_directions(board[row][col], side):
                target = (row + dr, col + dc)
                if self._in_bounds(*target) and board[target[0]][target[1]] == EMPTY:
                    steps.append(Move(kind=MoveKind.STEP, origin=(row, col), to=target))
        return MoveSet(simple_moves=tuple(steps))

    def evaluate(self, board: Board, side: Side) -> int:
        """Score material, advancement, position and mobility for a side."""
        score = self._side_score(board, side) - self._side_score(board, side.opponent)
        mobility = len(self.legal_moves(board, side)) - len(
            self.legal_moves(board, side.opponent)
        )
        return score + mobility * MOBILITY_WEIGHT

    def is_game_over(
        self,
        board: Board,
        side: Side,
        moves: MoveSet | None = None,
    ) -> GameOutcome:
        """A side that cannot move (or has no pieces) loses."""
        if moves is None:
            moves = self.legal_moves(board, side)
        if moves:
            return NOT_OVER
        return GameOutcome(is_over=True, winner=side.opponent)

    def format_move(self, move: Move) -> str:
        """Convert a move to notation (e.g., 'c6-d5' or 'c6xe4xg2')."""
        if move.kind is MoveKind.JUMP:
            squares = (move.origin, *move.path, move.to)
            return "x".join(self._to_notation(*square) for square in squares)
        return f"{self._to_notation(*move.origin)}-{self._to_notation(*move.to)}"

    def count_pieces(self, board: Board, side: Side) -> tuple[int, int]:
        """Count men and kings for a side."""
        men = sum(row.count(MEN[side]) for row in board)
        kings = sum(row.count(KINGS[side]) for row in board)
        return men, kings

    # =========================================================================
    # Private Helper Methods
    # =========================================================================

    def _make_move(self, board: Board, move: Move, side: Side) -> MoveOutcome:
        grid = [list(row) for row in board]
        origin_row, origin_col = move.origin
        piece = grid[origin_row][origin_col]
        grid[origin_row][origin_col] = EMPTY
        for row, col in move.captures:
            grid[row][col] = EMPTY

        row, col = move.to
        promoted = piece == MEN[side] and row == PROMOTION_ROW[side]
        grid[row][col] = KINGS[side] if promoted else piece

        return MoveOutcome(
            board=tuple(tuple(r) for r in grid),
            captured=move.captures,
            promoted=promoted,
        )

    def _get_capture_chains(
        self,
        board: Board,
        origin: Square,
        side: Side,
    ) -> list[Move]:
        """Enumerate every maximal capture chain of the piece on ``origin``."""
        chains: list[Move] = []
        piece = board[origin[0]][origin[1]]
        self._extend_chain(board, origin, origin, piece, side, (), (), chains)
        return chains

    def _extend_chain(
        self,
        board: Board,
        origin: Square,
        current: Square,
        piece: str,
        side: Side,
        landings: tuple[Square, ...],
        captured: tuple[Square, ...],
        chains: list[Move],
    ) -> None:
        """Depth-first search over capture continuations on cloned boards."""
        row, col = current
        extended = False

        for dr, dc in self._get_move_directions(piece, side):
            mid_row, mid_col = row + dr, col + dc
            end_row, end_col = row + 2 * dr, col + 2 * dc
            if not self._in_bounds(end_row, end_col):
                continue
            if side_of(board[mid_row][mid_col]) is not side.opponent:
                continue
            if board[end_row][end_col] != EMPTY:
                continue

            extended = True
            grid = [list(r) for r in board]
            grid[row][col] = EMPTY
            grid[mid_row][mid_col] = EMPTY

            crowned = piece == MEN[side] and end_row == PROMOTION_ROW[side]
            new_piece = KINGS[side] if crowned else piece
            grid[end_row][end_col] = new_piece

            chain_landings = landings + ((end_row, end_col),)
            chain_captured = captured + ((mid_row, mid_col),)

            if crowned:
                # Crowning ends the chain
                chains.append(self._jump(origin, chain_landings, chain_captured))
                continue

            self._extend_chain(
                tuple(tuple(r) for r in grid),
                origin,
                (end_row, end_col),
                new_piece,
                side,
                chain_landings,
                chain_captured,
                chains,
            )

        if not extended and captured:
            chains.append(self._jump(origin, landings, captured))

    @staticmethod
    def _jump(
        origin: Square,
        landings: tuple[Square, ...],
        captured: tuple[Square, ...],
    ) -> Move:
        return Move(
            kind=MoveKind.JUMP,
            origin=origin,
            to=landings[-1],
            captures=captured,
            path=landings[:-1],
        )

    def _side_score(self, board: Board, side: Side) -> int:
        man = MEN[side]
        king = KINGS[side]
        score = 0
        for row, cells in enumerate(board):
            for col, cell in enumerate(cells):
                if cell == man:
                    # Rows travelled from the side's home row
                    advanced = row if side is Side.AI else BOARD_SIZE - 1 - row
                    score += MAN_VALUE + advanced * ADVANCEMENT_VALUE
                elif cell == king:
                    score += KING_VALUE
                else:
                    continue
                score += POSITION_WEIGHTS[row][col]
        return score

    def _pieces(self, board: Board, side: Side) -> list[Square]:
        return [
            (row, col)
            for row, cells in enumerate(board)
            for col, cell in enumerate(cells)
            if side_of(cell) is side
        ]

    def _get_move_directions(self, piece: str, side: Side) -> tuple[tuple[int, int], ...]:
        """Get step/capture directions for a piece."""
        if piece == KINGS[side]:
            return KING_DIRECTIONS
        forward = FORWARD[side]
        return ((forward, -1), (forward, 1))

    def _in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def _to_notation(self, row: int, col: int) -> str:
        """Convert (row, col) to notation (e.g., 'c3')."""
        return f"{chr(ord('a') + col)}{row + 1}"
