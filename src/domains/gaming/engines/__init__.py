# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Game engines module.

This module provides game engine implementations:
- GameEngine: Abstract base class for all engines (the rules interface)
- AlphaBetaSearch: Generic minimax search over any engine
- ReversiEngine: Reversi / Othello on 4x4 to 10x10 boards
- CheckersEngine: Checkers with mandatory chain captures
- MorrisEngine: Nine Men's Morris with mills and flying
- Connect4Engine: Connect Four
- TicTacToeEngine: Tic-tac-toe
- EngineRegistry: Registry for engine instances

Usage:
    from src.domains.gaming.engines import get_engine_registry

    registry = get_engine_registry()
    engine = registry.get("connect4")
    ai_move = engine.get_ai_move(board, Side.AI, GameDifficulty.MEDIUM)
"""

from src.domains.gaming.engines.base import (
    WIN_SCORE,
    GameEngine,
    EngineError,
    InvalidPositionError,
    InvalidMoveError,
    SearchTimeoutError,
)
from src.domains.gaming.engines.search import (
    AlphaBetaSearch,
    SearchLimits,
    SearchResult,
)
from src.domains.gaming.engines.registry import (
    EngineRegistry,
    EngineNotRegisteredError,
    get_engine_registry,
    reset_engine_registry,
)
from src.domains.gaming.engines.reversi import ReversiEngine
from src.domains.gaming.engines.checkers import CheckersEngine
from src.domains.gaming.engines.morris import MorrisBoard, MorrisEngine
from src.domains.gaming.engines.connect4 import Connect4Engine
from src.domains.gaming.engines.tictactoe import TicTacToeEngine

__all__ = [
    # Base
    "WIN_SCORE",
    "GameEngine",
    "EngineError",
    "InvalidPositionError",
    "InvalidMoveError",
    "SearchTimeoutError",
    # Search
    "AlphaBetaSearch",
    "SearchLimits",
    "SearchResult",
    # Registry
    "EngineRegistry",
    "EngineNotRegisteredError",
    "get_engine_registry",
    "reset_engine_registry",
    # Implementations
    "ReversiEngine",
    "CheckersEngine",
    "MorrisBoard",
    "MorrisEngine",
    "Connect4Engine",
    "TicTacToeEngine",
]
