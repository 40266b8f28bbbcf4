# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Game engine registry for managing engine instances.

This module provides:
- EngineRegistry: Central registry for game engines
- get_engine_registry: Factory function for default registry

The registry maps each game type to one stateless engine instance.

Usage:
    from src.domains.gaming.engines import get_engine_registry

    registry = get_engine_registry()
    engine = registry.get(GameType.REVERSI)
    move = engine.best_move(engine.initial_board(), Side.HUMAN, depth=4)
"""

import logging
from typing import Iterator

from src.domains.gaming.engines.base import EngineError, GameEngine
from src.domains.gaming.models import GameType

logger = logging.getLogger(__name__)


class EngineNotRegisteredError(EngineError):
    """Raised when attempting to get an unregistered engine.

    Attributes:
        available: Game types that do have an engine.
    """

    def __init__(self, game_type: GameType | str, available: list[GameType]) -> None:
        self.available = available
        name = game_type.value if isinstance(game_type, GameType) else game_type
        available_str = ", ".join(t.value for t in available)
        super().__init__(
            message=(
                f"Engine for '{name}' not registered. "
                f"Available: {available_str or 'none'}"
            ),
            game_type=game_type if isinstance(game_type, GameType) else None,
            details={"available": [t.value for t in available]},
        )


class EngineRegistry:
    """Registry for managing game engine instances.

    Engines are stateless, so one registry and its engines can be shared
    by every game session of the application. Lookups accept either a
    GameType or its string value.

    Example:
        registry = EngineRegistry()
        registry.register(CheckersEngine())
        registry.register(Connect4Engine())

        checkers = registry.get("checkers")
        moves = checkers.legal_moves(checkers.initial_board(), Side.HUMAN)
    """

    def __init__(self) -> None:
        """Initialize an empty engine registry."""
        self._engines: dict[GameType, GameEngine] = {}

    def register(self, engine: GameEngine) -> None:
        """Register an engine in the registry.

        Args:
            engine: Engine instance to register.

        Raises:
            ValueError: If an engine for this game type already exists.
        """
        game_type = engine.game_type

        if game_type in self._engines:
            raise ValueError(
                f"Engine for '{game_type.value}' is already registered. "
                f"Use replace() to override."
            )

        self._engines[game_type] = engine
        logger.info("Registered game engine: %s (%s)", engine.name, game_type.value)

    def replace(self, engine: GameEngine) -> None:
        """Register an engine, overwriting any engine of the same game type.

        Args:
            engine: Engine instance to register or replace.
        """
        previous = self._engines.get(engine.game_type)
        self._engines[engine.game_type] = engine
        logger.info(
            "%s game engine for %s: %s",
            "Replaced" if previous else "Registered",
            engine.game_type.value,
            engine.name,
        )

    def unregister(self, game_type: GameType | str) -> None:
        """Remove an engine from the registry.

        Args:
            game_type: Type of game to unregister.

        Raises:
            KeyError: If no engine is registered for this game type.
        """
        key = self._coerce(game_type)
        if key is None or key not in self._engines:
            raise KeyError(f"No engine registered for '{key.value if key else game_type}'")

        del self._engines[key]
        logger.info("Unregistered game engine for: %s", key.value)

    def get(self, game_type: GameType | str) -> GameEngine:
        """Get an engine by game type.

        Args:
            game_type: Type of game, as enum or string value.

        Returns:
            The registered engine instance.

        Raises:
            EngineNotRegisteredError: If no engine is registered.
        """
        engine = self.get_optional(game_type)
        if engine is None:
            raise EngineNotRegisteredError(
                game_type=game_type,
                available=self.list_types(),
            )
        return engine

    def get_optional(self, game_type: GameType | str) -> GameEngine | None:
        """Get an engine by game type, returning None if not found."""
        key = self._coerce(game_type)
        return self._engines.get(key) if key is not None else None

    def has(self, game_type: GameType | str) -> bool:
        """Check if an engine is registered for a game type."""
        return self.get_optional(game_type) is not None

    def list_types(self) -> list[GameType]:
        """List all registered game types."""
        return list(self._engines.keys())

    def list_all(self) -> list[GameEngine]:
        """List all registered engine instances."""
        return list(self._engines.values())

    def get_info(self) -> list[dict[str, object]]:
        """Get information about all registered engines.

        Returns:
            List of dicts with type, name, pass rule and search depths.
        """
        return [
            {
                "type": engine.game_type.value,
                "name": engine.name,
                "allows_pass": engine.allows_pass,
                "depths": {
                    difficulty.value: depth
                    for difficulty, depth in engine.DIFFICULTY_DEPTHS.items()
                },
            }
            for engine in self._engines.values()
        ]

    def clear(self) -> None:
        """Remove all engines from the registry."""
        self._engines.clear()
        logger.info("Engine registry cleared")

    @staticmethod
    def _coerce(game_type: GameType | str) -> GameType | None:
        if isinstance(game_type, GameType):
            return game_type
        try:
            return GameType(game_type)
        except ValueError:
            return None

    def __len__(self) -> int:
        """Get number of registered engines."""
        return len(self._engines)

    def __contains__(self, game_type: object) -> bool:
        """Check if a game type is registered."""
        return isinstance(game_type, (GameType, str)) and self.has(game_type)

    def __iter__(self) -> Iterator[GameType]:
        """Iterate over registered game types."""
        return iter(self._engines)

    def __repr__(self) -> str:
        """Return string representation."""
        types = ", ".join(t.value for t in self._engines.keys())
        return f"EngineRegistry([{types}])"


# Global default registry instance (lazy-loaded)
_default_registry: EngineRegistry | None = None


def get_engine_registry() -> EngineRegistry:
    """Get or create the global default engine registry.

    Creates a registry with all available game engines registered.

    Returns:
        The default engine registry.
    """
    global _default_registry

    if _default_registry is None:
        _default_registry = _create_default_registry()

    return _default_registry


def _create_default_registry() -> EngineRegistry:
    """Create the default registry with one engine per game type.

    Returns:
        Configured engine registry.
    """
    from src.domains.gaming.engines.checkers import CheckersEngine
    from src.domains.gaming.engines.connect4 import Connect4Engine
    from src.domains.gaming.engines.morris import MorrisEngine
    from src.domains.gaming.engines.reversi import ReversiEngine
    from src.domains.gaming.engines.tictactoe import TicTacToeEngine

    registry = EngineRegistry()
    for engine_class in (
        ReversiEngine,
        CheckersEngine,
        MorrisEngine,
        Connect4Engine,
        TicTacToeEngine,
    ):
        registry.register(engine_class())

    logger.info(
        "Created default EngineRegistry with %d engines: %s",
        len(registry),
        [e.name for e in registry.list_all()],
    )

    return registry


def reset_engine_registry() -> None:
    """Reset the global default engine registry.

    Useful for testing or reconfiguration.
    """
    global _default_registry
    _default_registry = None
    logger.info("Engine registry reset")
