"""Hjernespil board-game engines.

Adversarial AI opponents for classic two-player board games: Reversi,
Checkers, Nine Men's Morris, Connect Four and Tic-tac-toe, built on one
generic minimax search with alpha-beta pruning.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
