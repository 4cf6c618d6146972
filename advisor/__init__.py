"""
Advisor module for Tic-Tac-Toe Pro.
Handles the remote (Gemini) opponent.
"""

from .config import AdvisorConfig
from .gemini_advisor import GeminiMoveAdvisor
