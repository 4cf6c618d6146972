"""
Game configuration for Tic-Tac-Toe Pro.
Timing and default settings for the turn controller.
"""

from .game_state import Difficulty, Mark


class GameConfig:
    """
    Configuration for a game session.
    Change these values to tune how the game feels.
    """

    # ==================== PLAYERS ====================
    HUMAN_MARK = Mark.X       # Human always moves first
    OPPONENT_MARK = Mark.O

    # ==================== OPPONENT ====================
    # Tier used when the session starts
    DEFAULT_DIFFICULTY = Difficulty.REMOTE_AI

    # Pause before the opponent's mark appears (seconds),
    # so the reply does not feel instant
    OPPONENT_DELAY_S = 0.6
