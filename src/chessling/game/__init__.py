"""Game management layer: a headless session over the rules engine.

Quick start::

    from chessling.game import GameSession
    from chessling.core.types import E2, E4

    game = GameSession()
    game.play(E2, E4)
"""

from chessling.game.state import GameOverError, GameSession

__all__ = [
    "GameOverError",
    "GameSession",
]
