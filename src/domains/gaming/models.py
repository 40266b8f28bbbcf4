# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Data models for the gaming domain.

This module defines the enums and value types shared by every engine:
- Game types, difficulty levels and the two sides of a game
- Moves, move sets and move outcomes used inside the search
- The AI move response returned at the engine boundary

Search-internal values (Move, MoveSet, MoveOutcome, GameOutcome) are frozen
dataclasses so they are cheap to create millions of times and safe to share
between search branches. The boundary model (AIMove) is a Pydantic model
like the rest of the domain's data transfer objects.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# A square is a (row, col) pair on grid boards or a point index on the
# Nine Men's Morris board.
Square = tuple[int, int] | int


class GameType(str, Enum):
    """Supported game types."""

    REVERSI = "reversi"
    CHECKERS = "checkers"
    MORRIS = "morris"
    CONNECT4 = "connect4"
    TICTACTOE = "tictactoe"


class GameDifficulty(str, Enum):
    """AI opponent difficulty levels.

    Maps to engine-specific search depths:
    - EASY: Shallow search, may play random moves in simple games
    - MEDIUM: Balanced play, appropriate for learning
    - HARD: Deepest search the engine offers
    """

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Side(str, Enum):
    """The two sides of a game.

    Each engine maps a side to fixed piece identities. The human side
    always moves first.
    """

    HUMAN = "human"
    AI = "ai"

    @property
    def opponent(self) -> "Side":
        """Get the other side."""
        return Side.AI if self is Side.HUMAN else Side.HUMAN


class MoveKind(str, Enum):
    """Shape of a move.

    - PLACE: Put a new piece on an empty square (Reversi, Morris, Tic-tac-toe)
    - STEP: Relocate a piece without capturing (Checkers, Morris)
    - JUMP: Capture sequence of one piece (Checkers)
    - DROP: Drop a disc into a column (Connect Four)
    - REMOVE: Take an opponent piece after closing a mill (Morris)
    """

    PLACE = "place"
    STEP = "step"
    JUMP = "jump"
    DROP = "drop"
    REMOVE = "remove"


@dataclass(frozen=True, slots=True)
class Move:
    """A single complete move.

    Attributes:
        kind: Shape of the move.
        to: Destination square (for REMOVE, the square emptied).
        origin: Source square for relocations, None for placements.
        captures: Opponent squares emptied by this move, in capture order.
        flips: Opponent discs turned over (Reversi).
        path: Intermediate landing squares of a chain capture.
    """

    kind: MoveKind
    to: Square
    origin: Square | None = None
    captures: tuple[Square, ...] = ()
    flips: tuple[Square, ...] = ()
    path: tuple[Square, ...] = ()

    @property
    def is_capture(self) -> bool:
        """Check if the move removes opponent pieces."""
        return bool(self.captures)


@dataclass(frozen=True, slots=True)
class MoveSet:
    """Legal moves of one side, split by kind.

    For capture-mandatory games the generator leaves ``simple_moves`` empty
    whenever ``capture_moves`` is not.
    """

    simple_moves: tuple[Move, ...] = ()
    capture_moves: tuple[Move, ...] = ()

    @property
    def moves(self) -> tuple[Move, ...]:
        """All legal moves, captures first."""
        return self.capture_moves + self.simple_moves

    def __len__(self) -> int:
        return len(self.simple_moves) + len(self.capture_moves)

    def __bool__(self) -> bool:
        return bool(self.simple_moves or self.capture_moves)

    def __contains__(self, move: object) -> bool:
        return move in self.capture_moves or move in self.simple_moves


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of applying a move.

    Attributes:
        board: The new board value.
        captured: Squares emptied by the move.
        promoted: Whether the moving piece was crowned.
        continues_turn: Whether the same side must move again (Morris removal).
    """

    board: Any
    captured: tuple[Square, ...] = ()
    promoted: bool = False
    continues_turn: bool = False


@dataclass(frozen=True, slots=True)
class GameOutcome:
    """Terminal status of a board.

    Attributes:
        is_over: Whether the game has ended.
        winner: Winning side, or None for a draw or an unfinished game.
    """

    is_over: bool
    winner: Side | None = None


NOT_OVER = GameOutcome(is_over=False)


class AIMove(BaseModel):
    """AI opponent's move response.

    Returned by game engines for the AI's turn.

    Attributes:
        move: The chosen move, None when the side has no legal move.
        notation: Human-readable notation of the move.
        evaluation: Search score of the move from the mover's perspective.
        depth: Deepest fully completed search depth.
        nodes: Number of search nodes visited.
        thinking_time_ms: Time spent calculating.
        tied_moves: How many root moves shared the best score.
        move_quality: Quality category of the move.
    """

    move: Move | None = Field(default=None, description="Chosen move")
    notation: str = Field(default="", description="Move in readable notation")
    evaluation: int = Field(default=0, description="Search score of the move")
    depth: int = Field(default=0, description="Completed search depth")
    nodes: int = Field(default=0, description="Search nodes visited")
    thinking_time_ms: int = Field(
        default=0,
        description="Time spent calculating in milliseconds",
    )
    tied_moves: int = Field(
        default=0,
        description="Number of root moves sharing the best score",
    )
    move_quality: str = Field(
        default="normal",
        description="Quality category of the move",
    )
