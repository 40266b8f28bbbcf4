# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for gaming domain models."""

from src.domains.gaming.models import AIMove, Move, MoveKind, MoveSet, Side


class TestSide:
    def test_opponent(self) -> None:
        assert Side.HUMAN.opponent is Side.AI
        assert Side.AI.opponent is Side.HUMAN


class TestMoveSet:
    """Tests for MoveSet."""

    def test_captures_listed_first(self) -> None:
        """Test moves lists capture moves before simple moves."""
        step = Move(kind=MoveKind.STEP, origin=(5, 0), to=(4, 1))
        jump = Move(kind=MoveKind.JUMP, origin=(5, 2), to=(3, 4), captures=((4, 3),))

        moves = MoveSet(simple_moves=(step,), capture_moves=(jump,))

        assert moves.moves == (jump, step)
        assert len(moves) == 2
        assert step in moves
        assert jump.is_capture
        assert not step.is_capture

    def test_empty_is_falsy(self) -> None:
        """Test an empty move set is falsy."""
        assert not MoveSet()
        assert len(MoveSet()) == 0


class TestAIMove:
    """Tests for the AIMove response model."""

    def test_defaults(self) -> None:
        """Test an AI move without a move reports nothing searched."""
        ai_move = AIMove(move_quality="no_moves")

        assert ai_move.move is None
        assert ai_move.notation == ""
        assert ai_move.nodes == 0

    def test_carries_move(self) -> None:
        """Test the chosen move is kept on the model."""
        move = Move(kind=MoveKind.DROP, to=(0, 3))

        ai_move = AIMove(move=move, notation="4", depth=4, tied_moves=2)

        assert ai_move.move == move
        assert ai_move.model_dump()["depth"] == 4
