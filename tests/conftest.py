# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across the unit tests:
- Settings isolation
- Seeded random sources
- Engine instances
"""

import random
from collections.abc import Generator

import pytest

from src.core.config.settings import clear_settings_cache
from src.domains.gaming.engines import (
    CheckersEngine,
    Connect4Engine,
    MorrisEngine,
    ReversiEngine,
    TicTacToeEngine,
    reset_engine_registry,
)


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Give every test fresh settings with an unlimited, unseeded search.

    Wall-clock budgets make search depth depend on machine speed, so tests
    that need a budget pass explicit SearchLimits instead.
    """
    monkeypatch.setenv("SEARCH_TIME_LIMIT_MS", "0")
    monkeypatch.delenv("SEARCH_MAX_NODES", raising=False)
    monkeypatch.delenv("SEARCH_SEED", raising=False)
    clear_settings_cache()
    reset_engine_registry()
    yield
    clear_settings_cache()
    reset_engine_registry()


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def rng() -> random.Random:
    """Provide a seeded random source for reproducible tie-breaks."""
    return random.Random(20250101)


@pytest.fixture
def reversi() -> ReversiEngine:
    """Provide a Reversi engine."""
    return ReversiEngine()


@pytest.fixture
def checkers() -> CheckersEngine:
    """Provide a Checkers engine."""
    return CheckersEngine()


@pytest.fixture
def morris() -> MorrisEngine:
    """Provide a Nine Men's Morris engine."""
    return MorrisEngine()


@pytest.fixture
def connect4() -> Connect4Engine:
    """Provide a Connect Four engine."""
    return Connect4Engine()


@pytest.fixture
def tictactoe() -> TicTacToeEngine:
    """Provide a Tic-tac-toe engine."""
    return TicTacToeEngine()
