"""
Logic module for Tic-Tac-Toe Pro.
Handles game state, rules, the local AI and the turn cycle.
"""

from .game_state import GameState, Mark, Difficulty, Outcome, OutcomeStatus, Score
from .move_validator import MoveValidator
from .win_checker import WinChecker, WINNING_LINES
from .ai_player import AIPlayer
from .config import GameConfig
from .turn_controller import TurnController, Phase, GameEvent, ControllerSnapshot
