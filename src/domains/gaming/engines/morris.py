# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Nine Men's Morris engine implementation.

This module provides a Nine Men's Morris engine that:
- Plays the placement phase (nine pieces in hand per side)
- Plays the movement phase along the board's adjacency graph
- Lets a side reduced to three pieces fly to any empty point
- Handles mills: closing one owes the removal of an opponent piece

Closing a mill does not end the turn. The applied board records the side
owing a removal and the only legal moves of that side are REMOVE moves
until it has been played. The search treats this follow-up as part of the
same ply.

Points are numbered 0-23, outer ring first:

    0 ----------- 1 ----------- 2
    |             |             |
    |    3 ------ 4 ------ 5    |
    |    |        |        |    |
    |    |    6 - 7 - 8    |    |
    9 - 10 - 11       12 - 13 - 14
    |    |   15 - 16 - 17  |    |
    |    |        |        |    |
    |   18 ----- 19 ----- 20    |
    |                           |
    21 --------- 22 ---------- 23
"""

import logging
from dataclasses import dataclass, replace

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

POINT_COUNT = 24
PIECES_PER_SIDE = 9

# Player symbols
EMPTY = "."
WHITE = "W"  # Human, plays first
BLACK = "B"  # AI

PIECES = {Side.HUMAN: WHITE, Side.AI: BLACK}

# A side with fewer pieces than this (on board and in hand) has lost
MIN_PIECES = 3
FLYING_PIECES = 3

ADJACENCY: dict[int, tuple[int, ...]] = {
    0: (1, 9),
    1: (0, 2, 4),
    2: (1, 14),
    3: (4, 10),
    4: (1, 3, 5, 7),
    5: (4, 13),
    6: (7, 11),
    7: (4, 6, 8),
    8: (7, 12),
    9: (0, 10, 21),
    10: (3, 9, 11, 18),
    11: (6, 10, 15),
    12: (8, 13, 17),
    13: (5, 12, 14, 20),
    14: (2, 13, 23),
    15: (11, 16),
    16: (15, 17, 19),
    17: (12, 16),
    18: (10, 19),
    19: (16, 18, 20, 22),
    20: (13, 19),
    21: (9, 22),
    22: (19, 21, 23),
    23: (14, 22),
}

MILLS: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (15, 16, 17), (18, 19, 20), (21, 22, 23),
    (0, 9, 21), (3, 10, 18), (6, 11, 15),
    (8, 12, 17), (5, 13, 20), (2, 14, 23),
    (1, 4, 7), (16, 19, 22),
    (9, 10, 11), (12, 13, 14),
)

# Mills through each point
POINT_MILLS: dict[int, tuple[tuple[int, int, int], ...]] = {
    point: tuple(mill for mill in MILLS if point in mill) for point in range(POINT_COUNT)
}

# Evaluation weights
MATERIAL_WEIGHT = 10
CLOSED_MILL_VALUE = 50
OPEN_TWO_VALUE = 10
OPEN_ONE_VALUE = 2


@dataclass(frozen=True, slots=True)
class MorrisBoard:
    """Nine Men's Morris board value.

    Attributes:
        points: Contents of the 24 points.
        human_hand: Human pieces not yet placed.
        ai_hand: AI pieces not yet placed.
        pending_removal: Side owing a removal after closing a mill.
    """

    points: tuple[str, ...] = (EMPTY,) * POINT_COUNT
    human_hand: int = PIECES_PER_SIDE
    ai_hand: int = PIECES_PER_SIDE
    pending_removal: Side | None = None

    def __post_init__(self) -> None:
        if len(self.points) != POINT_COUNT:
            raise InvalidPositionError(
                message=f"Morris board needs {POINT_COUNT} points, got {len(self.points)}",
                game_type=GameType.MORRIS,
            )

    def hand(self, side: Side) -> int:
        """Pieces a side still has to place."""
        return self.human_hand if side is Side.HUMAN else self.ai_hand

    def on_board(self, side: Side) -> int:
        """Pieces a side has on the board."""
        return self.points.count(PIECES[side])


def in_mill(points: tuple[str, ...], point: int) -> bool:
    """Check if the piece on ``point`` is part of a closed mill."""
    piece = points[point]
    if piece == EMPTY:
        return False
    return any(all(points[p] == piece for p in mill) for mill in POINT_MILLS[point])


class MorrisEngine(GameEngine):
    """Nine Men's Morris engine using minimax search.

    Notation: "5" places on point 5, "4-5" moves from 4 to 5, "x5"
    removes the opponent piece on point 5.

    Example:
        engine = MorrisEngine()
        board = engine.initial_board()
        outcome = engine.apply(board, Move(kind=MoveKind.PLACE, to=4), Side.HUMAN)
    """

    DIFFICULTY_DEPTHS = {
        GameDifficulty.EASY: 2,
        GameDifficulty.MEDIUM: 3,
        GameDifficulty.HARD: 4,
    }

    @property
    def game_type(self) -> GameType:
        """Get the game type."""
        return GameType.MORRIS

    @property
    def name(self) -> str:
        """Get the engine name."""
        return "Minimax Nine Men's Morris Engine"

    def initial_board(self) -> MorrisBoard:
        """Get the empty board with nine pieces in each hand."""
        return MorrisBoard()

    def legal_moves(self, board: MorrisBoard, side: Side) -> MoveSet:
        """Get legal moves; an owed removal is the only legal move kind."""
        if board.pending_removal is not None:
            if board.pending_removal is not side:
                return MoveSet()
            return MoveSet(capture_moves=self._removal_moves(board, side))

        piece = PIECES[side]
        empties = [p for p in range(POINT_COUNT) if board.points[p] == EMPTY]

        if board.hand(side) > 0:
            return MoveSet(
                simple_moves=tuple(Move(kind=MoveKind.PLACE, to=p) for p in empties)
            )

        flying = board.on_board(side) == FLYING_PIECES
        moves = []
        for origin in range(POINT_COUNT):
            if board.points[origin] != piece:
                continue
            targets = empties if flying else [
                p for p in ADJACENCY[origin] if board.points[p] == EMPTY
            ]
            moves.extend(Move(kind=MoveKind.STEP, origin=origin, to=p) for p in targets)
        return MoveSet(simple_moves=tuple(moves))

    def evaluate(self, board: MorrisBoard, side: Side) -> int:
        """Score material, mill structure and mobility for a side."""
        player = PIECES[side]
        opponent = PIECES[side.opponent]

        material = (board.on_board(side) + board.hand(side)) - (
            board.on_board(side.opponent) + board.hand(side.opponent)
        )
        score = material * MATERIAL_WEIGHT

        for mill in MILLS:
            cells = [board.points[p] for p in mill]
            empty = cells.count(EMPTY)
            score += self._mill_value(cells.count(player), empty)
            score -= self._mill_value(cells.count(opponent), empty)

        # Mobility ignores a pending removal
        unblocked = replace(board, pending_removal=None)
        score += len(self.legal_moves(unblocked, side)) - len(
            self.legal_moves(unblocked, side.opponent)
        )
        return score

    def is_game_over(
        self,
        board: MorrisBoard,
        side: Side,
        moves: MoveSet | None = None,
    ) -> GameOutcome:
        """A side loses with fewer than three pieces left or no move."""
        if board.pending_removal is side:
            return NOT_OVER

        for player in (side, side.opponent):
            if board.on_board(player) + board.hand(player) < MIN_PIECES:
                return GameOutcome(is_over=True, winner=player.opponent)

        if moves is None:
            moves = self.legal_moves(board, side)
        if not moves:
            return GameOutcome(is_over=True, winner=side.opponent)
        return NOT_OVER

    def format_move(self, move: Move) -> str:
        """Convert a move to notation (e.g., '5', '4-5', 'x5')."""
        if move.kind is MoveKind.REMOVE:
            return f"x{move.to}"
        if move.kind is MoveKind.STEP:
            return f"{move.origin}-{move.to}"
        return str(move.to)

    def is_flying(self, board: MorrisBoard, side: Side) -> bool:
        """Check if a side may fly to any empty point."""
        return board.hand(side) == 0 and board.on_board(side) == FLYING_PIECES

    # =========================================================================
    # Private Helper Methods
    # =========================================================================

    def _make_move(self, board: MorrisBoard, move: Move, side: Side) -> MoveOutcome:
        points = list(board.points)

        if move.kind is MoveKind.REMOVE:
            points[move.to] = EMPTY
            return MoveOutcome(
                board=replace(board, points=tuple(points), pending_removal=None),
                captured=(move.to,),
            )

        points[move.to] = PIECES[side]
        human_hand, ai_hand = board.human_hand, board.ai_hand
        if move.kind is MoveKind.PLACE:
            if side is Side.HUMAN:
                human_hand -= 1
            else:
                ai_hand -= 1
        else:
            points[move.origin] = EMPTY

        new_points = tuple(points)
        owes_removal = in_mill(new_points, move.to) and PIECES[side.opponent] in new_points

        return MoveOutcome(
            board=MorrisBoard(
                points=new_points,
                human_hand=human_hand,
                ai_hand=ai_hand,
                pending_removal=side if owes_removal else None,
            ),
            continues_turn=owes_removal,
        )

    def _removal_moves(self, board: MorrisBoard, side: Side) -> tuple[Move, ...]:
        """Opponent pieces outside mills, or all of them if every one is in a mill."""
        opponent = PIECES[side.opponent]
        pieces = [p for p in range(POINT_COUNT) if board.points[p] == opponent]
        free = [p for p in pieces if not in_mill(board.points, p)]
        return tuple(
            Move(kind=MoveKind.REMOVE, to=p, captures=(p,)) for p in (free or pieces)
        )

    @staticmethod
    def _mill_value(own: int, empty: int) -> int:
        if own == 3:
            return CLOSED_MILL_VALUE
        if own == 2 and empty == 1:
            return OPEN_TWO_VALUE
        if own == 1 and empty == 2:
            return OPEN_ONE_VALUE
        return 0
