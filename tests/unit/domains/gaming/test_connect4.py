# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the Connect Four engine."""

import pytest

from src.domains.gaming.engines.base import WIN_SCORE, InvalidMoveError
from src.domains.gaming.engines.connect4 import COLS, ROWS, WINDOWS, Connect4Engine
from src.domains.gaming.models import Move, MoveKind, Side


def board_with(
    human: tuple[tuple[int, int], ...] = (),
    ai: tuple[tuple[int, int], ...] = (),
) -> tuple[tuple[str, ...], ...]:
    """Build a board from (row, col) cells, row 0 at the bottom."""
    grid = [["."] * COLS for _ in range(ROWS)]
    for row, col in human:
        grid[row][col] = "X"
    for row, col in ai:
        grid[row][col] = "O"
    return tuple(tuple(row) for row in grid)


def drop(row: int, col: int) -> Move:
    return Move(kind=MoveKind.DROP, to=(row, col))


class TestMoveGeneration:
    """Tests for drops."""

    def test_seven_drops_on_empty_board(self, connect4: Connect4Engine) -> None:
        """Test every column accepts a piece on the bottom row."""
        moves = connect4.legal_moves(connect4.initial_board(), Side.HUMAN).moves

        assert moves == tuple(drop(0, col) for col in range(COLS))

    def test_piece_lands_on_top_of_column(self, connect4: Connect4Engine) -> None:
        """Test a drop lands on the lowest empty row."""
        board = board_with(human=((0, 3),), ai=((1, 3),))

        moves = connect4.legal_moves(board, Side.HUMAN).moves

        assert drop(2, 3) in moves
        assert drop(0, 3) not in moves

    def test_full_column_is_skipped(self, connect4: Connect4Engine) -> None:
        """Test a full column offers no drop."""
        column = tuple((row, 0) for row in range(ROWS))
        board = board_with(
            human=column[0::2],
            ai=column[1::2],
        )

        moves = connect4.legal_moves(board, Side.HUMAN).moves

        assert len(moves) == COLS - 1
        assert all(move.to[1] != 0 for move in moves)

    def test_no_moves_after_a_win(self, connect4: Connect4Engine) -> None:
        """Test a decided board has no legal moves."""
        board = board_with(human=((0, 0), (0, 1), (0, 2), (0, 3)), ai=((1, 0), (1, 1), (1, 2)))

        assert not connect4.legal_moves(board, Side.AI)

    def test_floating_drop_rejected(self, connect4: Connect4Engine) -> None:
        """Test a piece cannot be placed above an empty cell."""
        with pytest.raises(InvalidMoveError):
            connect4.apply(connect4.initial_board(), drop(2, 3), Side.HUMAN)


class TestWinDetection:
    """Tests for four in a row."""

    def test_window_count(self) -> None:
        """Test the board has 69 lines of four."""
        assert len(WINDOWS) == 69

    @pytest.mark.parametrize(
        "cells",
        [
            ((0, 0), (0, 1), (0, 2), (0, 3)),
            ((0, 6), (1, 6), (2, 6), (3, 6)),
            ((0, 0), (1, 1), (2, 2), (3, 3)),
            ((5, 0), (4, 1), (3, 2), (2, 3)),
        ],
    )
    def test_four_in_a_row(self, connect4: Connect4Engine, cells: tuple) -> None:
        """Test horizontal, vertical and both diagonal lines win."""
        board = board_with(ai=cells)

        assert connect4.winner(board) is Side.AI
        outcome = connect4.is_game_over(board, Side.HUMAN)
        assert outcome.is_over
        assert outcome.winner is Side.AI

    def test_three_is_not_a_win(self, connect4: Connect4Engine) -> None:
        """Test three in a row does not end the game."""
        board = board_with(human=((0, 0), (0, 1), (0, 2)))

        assert connect4.winner(board) is None
        assert not connect4.is_game_over(board, Side.AI).is_over

    def test_full_board_is_draw(self, connect4: Connect4Engine) -> None:
        """Test a full board without four in a row is a draw."""
        # Columns alternate in pairs of rows so no line of four forms
        human = []
        ai = []
        for row in range(ROWS):
            for col in range(COLS):
                if ((row // 2) + col) % 2 == 0:
                    human.append((row, col))
                else:
                    ai.append((row, col))
        board = board_with(human=tuple(human), ai=tuple(ai))

        assert connect4.winner(board) is None
        outcome = connect4.is_game_over(board, Side.HUMAN)
        assert outcome.is_over
        assert outcome.winner is None


class TestEvaluation:
    """Tests for the static evaluation."""

    def test_empty_board_is_balanced(self, connect4: Connect4Engine) -> None:
        """Test the empty board scores zero."""
        assert connect4.evaluate(connect4.initial_board(), Side.AI) == 0

    def test_centre_is_preferred(self, connect4: Connect4Engine) -> None:
        """Test a centre piece scores higher than an edge piece."""
        centre = board_with(ai=((0, 3),))
        edge = board_with(ai=((0, 0),))

        assert connect4.evaluate(centre, Side.AI) > connect4.evaluate(edge, Side.AI)

    def test_evaluation_is_zero_sum(self, connect4: Connect4Engine) -> None:
        """Test the two perspectives are negatives of each other."""
        board = board_with(human=((0, 3), (1, 3), (0, 4)), ai=((0, 2), (2, 3)))

        assert connect4.evaluate(board, Side.HUMAN) == -connect4.evaluate(board, Side.AI)


class TestSearch:
    """Tests for Connect Four search."""

    def test_centre_first(self, connect4: Connect4Engine) -> None:
        """Test moves are ordered outwards from the centre column."""
        moves = connect4.legal_moves(connect4.initial_board(), Side.AI).moves

        ordered = connect4.order_moves(connect4.initial_board(), moves, Side.AI)

        assert [move.to[1] for move in ordered[:3]] == [3, 2, 4]

    def test_takes_immediate_win(self, connect4: Connect4Engine) -> None:
        """Test the AI completes four in a row when it can."""
        board = board_with(human=((0, 0), (0, 1), (0, 5)), ai=((0, 3), (1, 3), (2, 3)))

        result = connect4.search(board, Side.AI, depth=2)

        assert result.best_move == drop(3, 3)
        assert result.tied_moves == (drop(3, 3),)
        assert result.score == WIN_SCORE + 1

    def test_blocks_immediate_loss(self, connect4: Connect4Engine) -> None:
        """Test the AI blocks the human's open three."""
        board = board_with(human=((0, 0), (0, 1), (0, 2)), ai=((1, 0), (1, 1)))

        assert connect4.best_move(board, Side.AI, depth=2) == drop(0, 3)

    def test_finds_forced_win(self, connect4: Connect4Engine) -> None:
        """Test both moves creating a double threat are found and tied."""
        board = board_with(human=((0, 6), (1, 6)), ai=((0, 2), (0, 3)))

        result = connect4.search(board, Side.AI, depth=4)

        assert result.score == WIN_SCORE + 1
        assert {move.to for move in result.tied_moves} == {(0, 1), (0, 4)}

    def test_opening_includes_centre(self, connect4: Connect4Engine) -> None:
        """Test the centre column is among the best opening moves."""
        result = connect4.search(connect4.initial_board(), Side.AI, depth=4)

        assert drop(0, 3) in result.tied_moves
