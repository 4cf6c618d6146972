"""
Remote advisor configuration for Tic-Tac-Toe Pro.
Model and connection settings for the Gemini opponent.

Setup:
    pip install google-genai
    export GEMINI_API_KEY=...
"""

import os
from typing import Optional


class AdvisorConfig:
    """
    Configuration for the Gemini move advisor.
    Change these values based on your setup!
    """

    # ==================== MODEL ====================
    MODEL_NAME = "gemini-3-flash-preview"

    # ==================== AUTH ====================
    # Checked in order, first non-empty one is used
    API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")

    # ==================== REQUEST ====================
    # Give up and fall back after this many seconds
    REQUEST_TIMEOUT_S = 15.0

    def get_api_key(self) -> Optional[str]:
        """Read the API key from the environment, None if unset."""
        for name in self.API_KEY_ENV_VARS:
            value = os.environ.get(name)
            if value:
                return value
        return None
