"""
AI player for Tic-Tac-Toe Pro.
Picks the opponent's move locally, without any remote call.
"""

import random
from typing import Optional, Sequence

import numpy as np

from .game_state import CENTER_CELL, Difficulty, Mark
from .win_checker import WINNING_LINES


_LINES = np.array(WINNING_LINES)


class AIPlayer:
    """
    A local Tic-Tac-Toe opponent.

    EASY plays a random empty cell. HARD looks one move ahead:
    it takes a win if it has one, blocks the human's win, takes the
    centre, and otherwise plays randomly. It does not see forks.
    """

    def __init__(self, player: Mark = Mark.O, rng: Optional[random.Random] = None):
        """
        Initialize the AI player.

        Args:
            player: Which mark the AI plays (default: O)
            rng: Source of randomness, unseeded if not given.
        """
        self.player = player
        self.rng = rng or random.Random()

    def select_move(self, board: Sequence[Optional[Mark]], difficulty: Difficulty) -> int:
        """
        Get the AI's move for the current board.

        Args:
            board: 9 cells, each a Mark or None. Must have an empty cell.
            difficulty: EASY or HARD.

        Returns:
            Index of the chosen cell.
        """
        empty = [i for i, cell in enumerate(board) if cell is None]
        assert empty, "select_move called on a full board"

        if difficulty == Difficulty.EASY:
            return self.rng.choice(empty)

        # Win, then block
        for mark in (self.player, self.player.opposite()):
            move = self.find_completing_cell(board, mark)
            if move is not None:
                return move

        if board[CENTER_CELL] is None:
            return CENTER_CELL

        return self.rng.choice(empty)

    def find_completing_cell(self, board: Sequence[Optional[Mark]], mark: Mark) -> Optional[int]:
        """
        Find the empty cell that would complete a line for `mark`.

        Lines are scanned in WINNING_LINES order and the first
        line with two of `mark` and one empty cell is used.

        Returns:
            The cell index, or None if `mark` has no immediate win.
        """
        cells = np.array([cell.value if cell is not None else "" for cell in board])
        lines = cells[_LINES]

        owned = np.count_nonzero(lines == mark.value, axis=1)
        open_ = np.count_nonzero(lines == "", axis=1)
        candidates = np.flatnonzero((owned == 2) & (open_ == 1))

        if candidates.size == 0:
            return None

        line = candidates[0]
        return int(_LINES[line][lines[line] == ""][0])
