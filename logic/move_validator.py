"""
Move validator for Tic-Tac-Toe Pro.
Validates that moves follow the rules.
"""

from typing import Any, Optional, List, Sequence
from dataclasses import dataclass
from .game_state import BOARD_CELLS, GameState, Mark


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates Tic-Tac-Toe moves.

    Rules:
    1. Game must not be over
    2. Index must be a board cell (0-8)
    3. Can only place on empty cells
    """

    def validate_move(self, game_state: GameState, index: Any) -> ValidationResult:
        """
        Validate a move for the player whose turn it is.

        Args:
            game_state: Current game state.
            index: Cell to place the mark on.

        Returns:
            ValidationResult with is_valid and error_message.
        """
        if game_state.is_game_over:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        return self._validate_cell(game_state.board, index)

    def is_legal_suggestion(self, board: Sequence[Optional[Mark]], move: Any) -> bool:
        """Check a move that came from outside the game (e.g. a model reply)."""
        return self._validate_cell(board, move).is_valid

    def _validate_cell(self, board: Sequence[Optional[Mark]], index: Any) -> ValidationResult:
        # bool is an int subclass, but True is not a cell
        if not isinstance(index, int) or isinstance(index, bool):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index!r}. Must be an integer."
            )

        if not 0 <= index < BOARD_CELLS:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index}. Must be 0-{BOARD_CELLS - 1}."
            )

        if board[index] is not None:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {board[index].value}"
            )

        return ValidationResult(is_valid=True)

    def get_valid_moves(self, game_state: GameState) -> List[int]:
        """
        Get all valid moves for the current player.

        Returns:
            List of empty cell indices, empty if the game is over.
        """
        if game_state.is_game_over:
            return []

        return game_state.get_empty_cells()

    @staticmethod
    def first_empty_cell(board: Sequence[Optional[Mark]]) -> Optional[int]:
        """Lowest empty index, or None on a full board."""
        for index, cell in enumerate(board):
            if cell is None:
                return index
        return None
