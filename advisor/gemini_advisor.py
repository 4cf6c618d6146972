"""
Gemini move advisor for Tic-Tac-Toe Pro.
Asks a Gemini model for the opponent's move and checks the answer.
"""

import asyncio
import json
import logging
from typing import Any, Optional, Sequence

from google import genai
from google.genai import types

from logic.game_state import Mark
from logic.move_validator import MoveValidator
from .config import AdvisorConfig


logger = logging.getLogger(__name__)


# Constrains the reply to {"move": <int>}
MOVE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "move": types.Schema(
            type=types.Type.INTEGER,
            description="The index of the board (0-8) for the next move.",
        ),
    },
    required=["move"],
)


class GeminiMoveAdvisor:
    """
    Remote opponent backed by a Gemini model.

    request_move() always returns a playable cell. If the request
    fails or the model suggests an illegal move, the lowest empty
    cell is played instead and the problem is logged.
    """

    def __init__(
        self,
        config: Optional[AdvisorConfig] = None,
        client: Optional[Any] = None,
        player: Mark = Mark.O
    ):
        """
        Initialize the advisor.

        Args:
            config: Advisor configuration.
            client: A ready genai.Client. Created on first use if None.
            player: Which mark the model plays.
        """
        self.config = config or AdvisorConfig()
        self.player = player
        self.validator = MoveValidator()
        self._client = client

    def _get_client(self):
        if self._client is None:
            # Raises if no key can be found; caught by request_move
            self._client = genai.Client(api_key=self.config.get_api_key())
        return self._client

    def build_prompt(self, board: Sequence[Optional[Mark]]) -> str:
        """Describe the board with indices for empty cells and marks for filled ones."""
        board_str = ", ".join(
            str(i) if cell is None else cell.value
            for i, cell in enumerate(board)
        )
        me = self.player.value
        them = self.player.opposite().value

        return (
            f"You are playing Tic-Tac-Toe as '{me}'. "
            f"The current board is represented by indices 0-8: [{board_str}].\n"
            f"'{them}' is the opponent. Choose the best index for your next move "
            f"to win or block '{them}' from winning.\n"
            "Think carefully but respond only with the JSON object containing the chosen index."
        )

    async def request_move(self, board: Sequence[Optional[Mark]]) -> int:
        """
        Get the model's move for the current board.

        Args:
            board: 9 cells, each a Mark or None. Must have an empty cell.

        Returns:
            A legal cell index.
        """
        fallback = self.validator.first_empty_cell(board)
        assert fallback is not None, "request_move called on a full board"

        try:
            client = self._get_client()
            response = await asyncio.wait_for(
                client.aio.models.generate_content(
                    model=self.config.MODEL_NAME,
                    contents=self.build_prompt(board),
                    config=types.GenerateContentConfig(
                        response_mime_type="application/json",
                        response_schema=MOVE_SCHEMA,
                    ),
                ),
                timeout=self.config.REQUEST_TIMEOUT_S,
            )
            move = self._parse_move(response.text)
        except asyncio.TimeoutError:
            logger.error("Gemini move request timed out after %ss", self.config.REQUEST_TIMEOUT_S)
            return fallback
        except Exception:
            logger.exception("Gemini move error")
            return fallback

        if not self.validator.is_legal_suggestion(board, move):
            logger.warning("Gemini suggested illegal move %r, playing %d instead", move, fallback)
            return fallback

        logger.debug("Gemini plays %d", move)
        return move

    @staticmethod
    def _parse_move(text: Optional[str]) -> Any:
        """Pull the "move" value out of the JSON reply."""
        if not text:
            raise ValueError("empty response from model")

        result = json.loads(text)
        if not isinstance(result, dict) or "move" not in result:
            raise ValueError(f"response has no 'move' field: {text!r}")

        return result["move"]
