# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gaming domain for two-player board games against an AI opponent.

This domain provides:
- Game engine abstractions and implementations (Reversi, Checkers, ...)
- Generic minimax search with alpha-beta pruning
- In-memory game sessions driving human and AI turns

Usage:
    from src.domains.gaming import GameSession, GameType
    from src.domains.gaming.engines import get_engine_registry

    # Get engine for a game type
    registry = get_engine_registry()
    engine = registry.get("reversi")

    # Use a session to play a game
    session = GameSession.start(GameType.REVERSI, size=6)
    session.play(session.legal_moves().moves[0])
    session.play_ai()
"""

from src.domains.gaming.models import (
    AIMove,
    GameDifficulty,
    GameOutcome,
    GameType,
    Move,
    MoveKind,
    MoveOutcome,
    MoveSet,
    Side,
)
from src.domains.gaming.session import (
    GameNotActiveError,
    GameSession,
    GameSessionError,
    MoveRecord,
    NotYourTurnError,
)

__all__ = [
    # Enums
    "GameType",
    "GameDifficulty",
    "Side",
    "MoveKind",
    # Models
    "Move",
    "MoveSet",
    "MoveOutcome",
    "GameOutcome",
    "AIMove",
    # Sessions
    "GameSession",
    "MoveRecord",
    "GameSessionError",
    "GameNotActiveError",
    "NotYourTurnError",
]
