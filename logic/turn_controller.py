"""
Turn controller for Tic-Tac-Toe Pro.
Owns the game state and runs the human / opponent turn cycle.
"""

import asyncio
import logging
from enum import Enum
from typing import Callable, List, Optional
from dataclasses import dataclass

from .config import GameConfig
from .game_state import Difficulty, GameState, Score
from .move_validator import MoveValidator
from .win_checker import WinChecker
from .ai_player import AIPlayer


logger = logging.getLogger(__name__)


class Phase(Enum):
    """Where the game is in its turn cycle."""
    HUMAN_TURN = "human_turn"
    OPPONENT_THINKING = "opponent_thinking"
    TERMINAL = "terminal"


class GameEvent(Enum):
    """What just happened, for sound cues and the like."""
    MOVE = "move"
    WIN = "win"
    DRAW = "draw"
    RESET = "reset"


@dataclass(frozen=True)
class ControllerSnapshot:
    """Read-only view of the controller after a transition."""
    state: GameState
    score: Score
    phase: Phase
    difficulty: Difficulty
    event: Optional[GameEvent] = None

    @property
    def is_thinking(self) -> bool:
        return self.phase == Phase.OPPONENT_THINKING


Listener = Callable[[ControllerSnapshot], None]


class TurnController:
    """
    The single writer of GameState and Score.

    Game flow:
    1. Human (X) clicks an empty cell -> apply_human_move()
    2. If the game is not over, the opponent's move is resolved in an
       asyncio task (heuristic, or remote for REMOTE_AI)
    3. After a short delay the opponent's mark is placed
    4. Repeat until someone wins or it's a draw, then reset()

    apply_human_move() and reset() must be called from the thread
    running the event loop.
    """

    def __init__(
        self,
        difficulty: Optional[Difficulty] = None,
        ai: Optional[AIPlayer] = None,
        advisor=None,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize the controller.

        Args:
            difficulty: Starting tier (default from config).
            ai: Local opponent for EASY / HARD.
            advisor: Remote opponent for REMOTE_AI, anything with an
                async request_move(board). Created on first use if None.
            config: Game configuration.
        """
        self.config = config or GameConfig()
        self.win_checker = WinChecker()
        self.validator = MoveValidator()
        self.ai = ai or AIPlayer(self.config.OPPONENT_MARK)
        self.advisor = advisor

        self._difficulty = difficulty or self.config.DEFAULT_DIFFICULTY
        self._state = GameState(current_player=self.config.HUMAN_MARK)
        self._score = Score()
        self._phase = Phase.HUMAN_TURN

        # Bumped on every reset so late opponent moves can tell they are stale
        self._generation = 0
        self._pending: Optional[asyncio.Task] = None

        self._listeners: List[Listener] = []

    # ==================== QUERIES ====================

    @property
    def state(self) -> GameState:
        return self._state.copy()

    @property
    def score(self) -> Score:
        return self._score.copy()

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def is_thinking(self) -> bool:
        return self._phase == Phase.OPPONENT_THINKING

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    def snapshot(self, event: Optional[GameEvent] = None) -> ControllerSnapshot:
        return ControllerSnapshot(
            state=self._state.copy(),
            score=self._score.copy(),
            phase=self._phase,
            difficulty=self._difficulty,
            event=event
        )

    def add_listener(self, listener: Listener):
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ==================== COMMANDS ====================

    def apply_human_move(self, index: int) -> bool:
        """
        Place the human's mark and start the opponent's turn.

        Args:
            index: Cell index (0-8).

        Returns:
            True if the move was applied. Moves out of turn, on an
            occupied cell or after the game ended are ignored.
        """
        if self._phase != Phase.HUMAN_TURN:
            logger.debug("Ignoring click on %r during %s", index, self._phase.value)
            return False

        result = self.validator.validate_move(self._state, index)
        if not result.is_valid:
            logger.debug("Ignoring click: %s", result.error_message)
            return False

        self._state.make_move(index)
        self.win_checker.update_game_state(self._state)

        if self._state.is_game_over:
            self._finish()
            return True

        self._phase = Phase.OPPONENT_THINKING

        # Scheduled before listeners run, so a reset from a listener
        # sees the task and drops it
        loop = asyncio.get_running_loop()
        self._pending = loop.create_task(
            self._opponent_turn(self._generation, list(self._state.board))
        )
        self._pending.add_done_callback(self._on_opponent_done)

        self._emit(GameEvent.MOVE)
        return True

    def reset(self):
        """Start a fresh game. Any opponent move still in flight is dropped."""
        self._generation += 1

        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

        self._state = GameState(current_player=self.config.HUMAN_MARK)
        self._phase = Phase.HUMAN_TURN
        logger.info("New game (%s)", self._difficulty.value)
        self._emit(GameEvent.RESET)

    def set_difficulty(self, difficulty: Difficulty):
        """Switch opponent tier; always starts a new game."""
        self._difficulty = difficulty
        self.reset()

    async def wait_for_opponent(self):
        """Wait until the pending opponent turn (if any) has finished."""
        task = self._pending
        if task is None:
            return

        await asyncio.wait({task})
        if not task.cancelled():
            task.result()

    # ==================== OPPONENT TURN ====================

    async def _opponent_turn(self, generation: int, board):
        move = await self._resolve_opponent_move(board)
        await asyncio.sleep(self.config.OPPONENT_DELAY_S)

        if generation != self._generation:
            logger.info("Dropping opponent move %d from an earlier game", move)
            return

        self._commit_opponent_move(move)

    def _on_opponent_done(self, task: asyncio.Task):
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Opponent turn failed", exc_info=error)

    async def _resolve_opponent_move(self, board) -> int:
        if self._difficulty == Difficulty.REMOTE_AI:
            return await self._get_advisor().request_move(board)
        return self.ai.select_move(board, self._difficulty)

    def _get_advisor(self):
        if self.advisor is None:
            from advisor.gemini_advisor import GeminiMoveAdvisor
            self.advisor = GeminiMoveAdvisor(player=self.config.OPPONENT_MARK)
        return self.advisor

    def _commit_opponent_move(self, move: int):
        self._pending = None

        placed = self._state.make_move(move)
        assert placed, f"opponent chose unplayable cell {move}"
        self.win_checker.update_game_state(self._state)

        if self._state.is_game_over:
            self._finish()
        else:
            self._phase = Phase.HUMAN_TURN
            self._emit(GameEvent.MOVE)

    def _finish(self):
        outcome = self._state.outcome
        self._phase = Phase.TERMINAL
        self._score.record(outcome, self.config.HUMAN_MARK)

        if outcome.is_draw:
            logger.info("Game over: draw")
            self._emit(GameEvent.DRAW)
        else:
            logger.info("Game over: %s wins on %s", outcome.winner.value, outcome.line)
            self._emit(GameEvent.WIN)

    def _emit(self, event: GameEvent):
        snapshot = self.snapshot(event)
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Listener failed on %s", event.value)
