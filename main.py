"""
Main entry point for Tic-Tac-Toe Pro.

This script ties together:
- Logic (game state, rules, local AI, turn controller)
- Advisor (Gemini opponent)
- UI (Tkinter window), or a console game with --no-ui

Run this script to play Tic-Tac-Toe against the AI!
"""

import asyncio
import logging

from logic.config import GameConfig
from logic.game_state import Difficulty
from logic.move_validator import MoveValidator
from logic.turn_controller import ControllerSnapshot, GameEvent, TurnController
from advisor.config import AdvisorConfig
from advisor.gemini_advisor import GeminiMoveAdvisor


DIFFICULTY_CHOICES = {
    "easy": Difficulty.EASY,
    "hard": Difficulty.HARD,
    "gemini": Difficulty.REMOTE_AI,
}


class ConsoleGame:
    """
    Plays the game in the terminal.

    Type a cell number (0-8) to move, 'r' to start over, 'q' to quit.
    """

    def __init__(self, controller: TurnController):
        self.controller = controller
        self.validator = MoveValidator()
        self.controller.add_listener(self._on_snapshot)

    def _on_snapshot(self, snapshot: ControllerSnapshot):
        state = snapshot.state

        if snapshot.event == GameEvent.RESET:
            print(f"\nNew game! Opponent: {snapshot.difficulty.value}")
            state.print_board()
        elif snapshot.is_thinking:
            print(">>> Opponent is thinking...")
        elif snapshot.event in (GameEvent.MOVE, GameEvent.WIN, GameEvent.DRAW):
            last = state.moves[-1]
            if last.player != self.controller.config.HUMAN_MARK:
                print(f"Opponent played {last.index}")
            state.print_board()

        if state.is_game_over:
            score = snapshot.score
            print(f"Score - You: {score.human_wins}  Draws: {score.draws}  Opponent: {score.opponent_wins}")
            print("Press 'r' for a new game or 'q' to quit.")

    async def play(self):
        """Read commands until the user quits."""
        loop = asyncio.get_running_loop()
        self.controller.state.print_board()

        while True:
            try:
                command = await loop.run_in_executor(None, input, "> ")
            except EOFError:
                break
            command = command.strip().lower()

            if command in ("q", "quit"):
                break
            elif command in ("r", "reset"):
                self.controller.reset()
            elif command.isdecimal():
                if self.controller.apply_human_move(int(command)):
                    await self.controller.wait_for_opponent()
                else:
                    free = self.validator.get_valid_moves(self.controller.state)
                    if free:
                        print(f"You can't play there. Free cells: {', '.join(map(str, free))}")
                    else:
                        print("You can't play there.")
            else:
                print("Enter a cell number (0-8), 'r' or 'q'.")


def build_controller(args) -> TurnController:
    """Create the controller and its opponents from command line args."""
    game_config = GameConfig()
    game_config.OPPONENT_DELAY_S = args.delay

    advisor_config = AdvisorConfig()
    if args.model:
        advisor_config.MODEL_NAME = args.model
    if args.timeout is not None:
        advisor_config.REQUEST_TIMEOUT_S = args.timeout

    return TurnController(
        difficulty=DIFFICULTY_CHOICES[args.difficulty],
        advisor=GeminiMoveAdvisor(advisor_config, player=game_config.OPPONENT_MARK),
        config=game_config
    )


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Tic-Tac-Toe Pro")
    parser.add_argument(
        "--difficulty",
        choices=sorted(DIFFICULTY_CHOICES),
        default="gemini",
        help="Opponent tier (default: gemini)"
    )
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run without UI (console mode)"
    )
    parser.add_argument(
        "--model",
        help=f"Gemini model name (default: {AdvisorConfig.MODEL_NAME})"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help=f"Gemini request timeout in seconds (default: {AdvisorConfig.REQUEST_TIMEOUT_S})"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=GameConfig.OPPONENT_DELAY_S,
        help="Pause before the opponent's move appears, in seconds"
    )
    parser.add_argument(
        "--no-sound",
        action="store_true",
        help="Disable sound effects"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    controller = build_controller(args)

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        print("\n" + "="*60)
        print("   Tic-Tac-Toe Pro")
        print("="*60 + "\n")
        ui = TicTacToeUI(controller, sound_enabled=not args.no_sound)
        ui.run()
        return

    # Console mode (--no-ui)
    print("\n" + "="*60)
    print("   Tic-Tac-Toe Pro - Console")
    print(f"   You play X. Opponent: {controller.difficulty.value}")
    print("   Enter 0-8 to move, 'r' to reset, 'q' to quit")
    print("="*60)

    try:
        asyncio.run(ConsoleGame(controller).play())
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
