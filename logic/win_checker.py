"""
Win checker for Tic-Tac-Toe Pro.
Checks if a player has won or if the game is a draw.
"""

from typing import Optional, Sequence, Tuple
from .game_state import GameState, Mark, Outcome


# All possible winning lines, in the order they are checked.
# When two lines are complete at once the first one here wins.
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


class WinChecker:
    """
    Checks for win conditions in Tic-Tac-Toe.

    Win condition: 3 of the same mark in a row
    (horizontally, vertically, or diagonally)
    """

    WINNING_LINES = WINNING_LINES

    def evaluate(self, board: Sequence[Optional[Mark]]) -> Outcome:
        """
        Evaluate a board.

        Args:
            board: 9 cells, each a Mark or None.

        Returns:
            WIN with the first completed line, DRAW if the board is full,
            IN_PROGRESS otherwise.
        """
        for line in self.WINNING_LINES:
            winner = self._check_line(board, line)
            if winner is not None:
                return Outcome.win(winner, line)

        if all(cell is not None for cell in board):
            return Outcome.draw()

        return Outcome.in_progress()

    def _check_line(
        self,
        board: Sequence[Optional[Mark]],
        line: Tuple[int, int, int]
    ) -> Optional[Mark]:
        """
        Check if a single line has a winner.

        Returns:
            The Mark if all 3 cells hold it, None otherwise.
        """
        a, b, c = line
        if board[a] is not None and board[a] == board[b] == board[c]:
            return board[a]
        return None

    def update_game_state(self, game_state: GameState) -> GameState:
        """
        Store the evaluated outcome on the game state.

        Args:
            game_state: The game state to update.

        Returns:
            Updated game state.
        """
        game_state.outcome = self.evaluate(game_state.board)
        return game_state
