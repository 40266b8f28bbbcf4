# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the Tic-tac-toe engine."""

import random

from src.domains.gaming.engines.base import WIN_SCORE
from src.domains.gaming.engines.tictactoe import TicTacToeEngine
from src.domains.gaming.models import GameDifficulty, Move, MoveKind, Side


def board_from(*rows: str) -> tuple[tuple[str, ...], ...]:
    """Build a board from row strings."""
    return tuple(tuple(row) for row in rows)


def mark(row: int, col: int) -> Move:
    return Move(kind=MoveKind.PLACE, to=(row, col))


class TestRules:
    """Tests for moves and results."""

    def test_nine_moves_on_empty_board(self, tictactoe: TicTacToeEngine) -> None:
        """Test every square is playable at the start."""
        assert len(tictactoe.legal_moves(tictactoe.initial_board(), Side.HUMAN)) == 9

    def test_apply_marks_square(self, tictactoe: TicTacToeEngine) -> None:
        """Test a placement fills one square with the side's mark."""
        outcome = tictactoe.apply(tictactoe.initial_board(), mark(1, 1), Side.HUMAN)

        assert outcome.board == board_from("...", ".X.", "...")

    def test_three_in_a_row_wins(self, tictactoe: TicTacToeEngine) -> None:
        """Test a diagonal line wins and ends the game."""
        board = board_from("O.X", ".X.", "XO.")

        outcome = tictactoe.is_game_over(board, Side.AI)

        assert outcome.is_over
        assert outcome.winner is Side.HUMAN
        assert not tictactoe.legal_moves(board, Side.AI)

    def test_full_board_draw(self, tictactoe: TicTacToeEngine) -> None:
        """Test a full board without a line is a draw."""
        board = board_from("XOX", "XOO", "OXX")

        outcome = tictactoe.is_game_over(board, Side.AI)

        assert outcome.is_over
        assert outcome.winner is None

    def test_notation(self, tictactoe: TicTacToeEngine) -> None:
        """Test squares are named by column letter and row number."""
        assert tictactoe.format_move(mark(1, 1)) == "b2"
        assert tictactoe.format_move(mark(0, 2)) == "c1"


class TestSearch:
    """Tests for Tic-tac-toe search."""

    def test_corners_tie_after_centre(self, tictactoe: TicTacToeEngine) -> None:
        """Test the four corners share the best one-ply score."""
        board = board_from("...", ".X.", "...")

        result = tictactoe.search(board, Side.AI, depth=1)

        assert result.score == -1
        assert result.tied_moves == (mark(0, 0), mark(0, 2), mark(2, 0), mark(2, 2))
        assert result.best_move == mark(0, 0)

    def test_random_tie_break_picks_a_tied_move(
        self, tictactoe: TicTacToeEngine, rng: random.Random
    ) -> None:
        """Test an injected random source picks among the tied moves."""
        board = board_from("...", ".X.", "...")

        result = tictactoe.search(board, Side.AI, depth=1, rng=rng)

        assert result.best_move in result.tied_moves

    def test_seeded_tie_break_is_reproducible(self, tictactoe: TicTacToeEngine) -> None:
        """Test equal seeds choose the same tied move."""
        board = board_from("...", ".X.", "...")

        first = tictactoe.best_move(board, Side.AI, depth=1, rng=random.Random(3))
        second = tictactoe.best_move(board, Side.AI, depth=1, rng=random.Random(3))

        assert first == second

    def test_blocks_two_in_a_row(self, tictactoe: TicTacToeEngine) -> None:
        """Test the AI blocks the human's open line."""
        board = board_from("XX.", ".O.", "...")

        assert tictactoe.best_move(board, Side.AI, depth=2) == mark(0, 2)

    def test_prefers_faster_win(self, tictactoe: TicTacToeEngine) -> None:
        """Test an immediate win outscores a slower one."""
        board = board_from("OO.", "XX.", "X..")

        result = tictactoe.search(board, Side.AI, depth=5)

        assert result.best_move == mark(0, 2)
        assert result.score == WIN_SCORE + 4

    def test_perfect_play_draws(self, tictactoe: TicTacToeEngine) -> None:
        """Test the empty board is a draw under full-depth search."""
        result = tictactoe.search(tictactoe.initial_board(), Side.HUMAN, depth=9)

        assert result.score == 0
        assert len(result.tied_moves) == 9


class TestDifficulty:
    """Tests for difficulty levels."""

    def test_easy_plays_random_moves(
        self, tictactoe: TicTacToeEngine, rng: random.Random
    ) -> None:
        """Test the easiest level always picks a random legal move."""
        board = board_from("XX.", ".O.", "...")

        ai_move = tictactoe.get_ai_move(board, Side.AI, GameDifficulty.EASY, rng=rng)

        assert ai_move.move_quality == "random"
        assert ai_move.move in tictactoe.legal_moves(board, Side.AI)
        assert ai_move.tied_moves == 6

    def test_hard_searches_to_the_end(self, tictactoe: TicTacToeEngine) -> None:
        """Test the hardest level blocks and reports a full-depth search."""
        board = board_from("XX.", ".O.", "...")

        ai_move = tictactoe.get_ai_move(board, Side.AI, GameDifficulty.HARD)

        assert ai_move.move == mark(0, 2)
        assert ai_move.notation == "c1"
        assert ai_move.depth == 9
        assert ai_move.move_quality == "normal"
