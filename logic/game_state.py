"""
Game state management for Tic-Tac-Toe Pro.
Tracks the board, current player, outcome and score.
"""

from enum import Enum
from typing import Optional, List, Tuple
from dataclasses import dataclass, field


BOARD_CELLS = 9
CENTER_CELL = 4


class Mark(Enum):
    """The two marks on the board."""
    X = "X"     # Human
    O = "O"     # Opponent

    def opposite(self) -> "Mark":
        """Get the opposite mark."""
        return Mark.O if self == Mark.X else Mark.X


class Difficulty(Enum):
    """Opponent tiers."""
    EASY = "Easy"            # Random moves
    HARD = "Hard"            # Win / block / centre heuristic
    REMOTE_AI = "Gemini AI"  # Remote model suggestion


class OutcomeStatus(Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


Board = List[Optional[Mark]]


def empty_board() -> Board:
    return [None] * BOARD_CELLS


@dataclass(frozen=True)
class Outcome:
    """
    Result of evaluating a board.

    winner and line are only set when status is WIN.
    """
    status: OutcomeStatus = OutcomeStatus.IN_PROGRESS
    winner: Optional[Mark] = None
    line: Optional[Tuple[int, int, int]] = None

    @classmethod
    def in_progress(cls) -> "Outcome":
        return cls()

    @classmethod
    def win(cls, mark: Mark, line: Tuple[int, int, int]) -> "Outcome":
        return cls(OutcomeStatus.WIN, mark, tuple(line))

    @classmethod
    def draw(cls) -> "Outcome":
        return cls(OutcomeStatus.DRAW)

    @property
    def is_terminal(self) -> bool:
        return self.status != OutcomeStatus.IN_PROGRESS

    @property
    def is_draw(self) -> bool:
        return self.status == OutcomeStatus.DRAW


@dataclass
class Move:
    """
    A move in the game.
    """
    player: Mark            # Who made the move
    index: int              # Cell (0-8)
    move_number: int        # Which move this is in the game (0-8)


@dataclass
class GameState:
    """
    The complete state of one Tic-Tac-Toe game.

    Tracks:
    - The 9 cells of the board, row-major
    - Whose turn it is
    - Move history for this game
    - Game outcome (in progress, won, draw)
    """

    # None means empty, otherwise the Mark in that cell
    board: Board = field(default_factory=empty_board)

    # X always starts
    current_player: Mark = Mark.X

    moves: List[Move] = field(default_factory=list)

    outcome: Outcome = field(default_factory=Outcome.in_progress)

    @property
    def is_game_over(self) -> bool:
        return self.outcome.is_terminal

    @property
    def winner(self) -> Optional[Mark]:
        return self.outcome.winner

    @property
    def winning_line(self) -> Optional[Tuple[int, int, int]]:
        return self.outcome.line

    def make_move(self, index: int) -> bool:
        """
        Place the current player's mark at the given cell.

        Outcome is not evaluated here (done by WinChecker), only the
        turn is switched.

        Args:
            index: Cell index (0-8).

        Returns:
            True if the mark was placed, False otherwise.
        """
        if self.is_game_over:
            return False

        if not 0 <= index < BOARD_CELLS or self.board[index] is not None:
            return False

        self.board[index] = self.current_player
        self.moves.append(Move(
            player=self.current_player,
            index=index,
            move_number=len(self.moves)
        ))
        self.current_player = self.current_player.opposite()

        return True

    def get_empty_cells(self) -> List[int]:
        """Get the indices of all empty cells, lowest first."""
        return [i for i, cell in enumerate(self.board) if cell is None]

    def copy(self) -> "GameState":
        """Create a copy that shares nothing mutable with this state."""
        return GameState(
            board=list(self.board),
            current_player=self.current_player,
            moves=list(self.moves),
            outcome=self.outcome
        )

    def render(self) -> str:
        """Text drawing of the board; empty cells show their index."""
        rows = []
        for row in range(3):
            cells = []
            for col in range(3):
                index = row * 3 + col
                cell = self.board[index]
                cells.append(cell.value if cell else str(index))
            rows.append(" " + " | ".join(cells))
        return "\n---+---+---\n".join(rows)

    def print_board(self):
        """Print the board to console."""
        print()
        print(self.render())

        if self.is_game_over:
            if self.winner:
                print(f"\n{self.winner.value} WINS!")
            else:
                print("\nIt's a DRAW!")
        else:
            print(f"\nCurrent turn: {self.current_player.value}")


@dataclass
class Score:
    """Running totals for the session."""
    human_wins: int = 0
    opponent_wins: int = 0
    draws: int = 0

    def record(self, outcome: Outcome, human: Mark = Mark.X):
        """Count a terminal outcome. In-progress outcomes are ignored."""
        if outcome.status == OutcomeStatus.DRAW:
            self.draws += 1
        elif outcome.status == OutcomeStatus.WIN:
            if outcome.winner == human:
                self.human_wins += 1
            else:
                self.opponent_wins += 1

    def copy(self) -> "Score":
        return Score(self.human_wins, self.opponent_wins, self.draws)
