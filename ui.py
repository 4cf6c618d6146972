"""
Tic-Tac-Toe Pro UI
A graphical interface for the game using Tkinter.

Shows:
- The 3x3 board (winning line highlighted)
- Game status ("Your turn", "Gemini is thinking...", result)
- Scoreboard
- Difficulty selection and sound toggle

The turn controller runs on an asyncio loop in a background thread.
Clicks are handed to that loop, state snapshots come back through
root.after so widgets are only touched from the Tk thread.
"""

import asyncio
import logging
import threading
import tkinter as tk
from tkinter import ttk
from typing import Optional

from logic.game_state import Difficulty, Mark
from logic.turn_controller import ControllerSnapshot, GameEvent, Phase, TurnController


logger = logging.getLogger(__name__)


CELL_BG = '#16213e'
WIN_BG = '#065f46'
MARK_COLORS = {Mark.X: '#22d3ee', Mark.O: '#f43f5e'}

OPPONENT_NAMES = {
    Difficulty.EASY: "AI",
    Difficulty.HARD: "AI",
    Difficulty.REMOTE_AI: "Gemini",
}


class SoundCues:
    """
    Audible feedback for game events using the Tk bell.
    Purely cosmetic: playback problems are ignored.
    """

    # Number of bell rings per event
    PATTERNS = {
        GameEvent.MOVE: 1,
        GameEvent.WIN: 3,
        GameEvent.DRAW: 2,
        GameEvent.RESET: 1,
    }
    RING_GAP_MS = 150

    def __init__(self, root: tk.Tk, enabled: bool = True):
        self.root = root
        self.enabled = enabled

    def play(self, event: Optional[GameEvent]):
        if not self.enabled or event is None:
            return

        for i in range(self.PATTERNS.get(event, 0)):
            self.root.after(i * self.RING_GAP_MS, self._ring)

    def _ring(self):
        try:
            self.root.bell()
        except tk.TclError:
            pass


class TicTacToeUI:
    """
    Main UI class for Tic-Tac-Toe Pro.
    """

    def __init__(
        self,
        controller: Optional[TurnController] = None,
        sound_enabled: bool = True
    ):
        """Initialize the UI."""
        self.controller = controller or TurnController()
        self.loop = asyncio.new_event_loop()
        self.loop_thread = threading.Thread(target=self._run_loop, daemon=True)

        self._create_ui()
        self.sounds = SoundCues(self.root, enabled=sound_enabled)
        self.sound_var.set(sound_enabled)

        self.controller.add_listener(self._on_snapshot)
        self._render(self.controller.snapshot())

    def _run_loop(self):
        asyncio.set_event_loop(self.loop)
        self.loop.run_forever()

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title("Tic-Tac-Toe Pro")
        self.root.configure(bg='#0f172a')
        self.root.minsize(640, 480)

        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background='#0f172a')
        style.configure('TLabel', background='#0f172a', foreground='white', font=('Segoe UI', 11))
        style.configure('Title.TLabel', font=('Segoe UI', 16, 'bold'), foreground='#22d3ee')
        style.configure('Status.TLabel', font=('Segoe UI', 14, 'bold'), foreground='#fbbf24')
        style.configure('Score.TLabel', font=('Segoe UI', 20, 'bold'))

        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)

        # Left panel - scoreboard and settings
        left_frame = ttk.Frame(main_frame)
        left_frame.pack(side=tk.LEFT, fill=tk.Y, padx=(0, 20))

        ttk.Label(left_frame, text="Scoreboard", style='Title.TLabel').pack(pady=(0, 10))

        score_frame = ttk.Frame(left_frame)
        score_frame.pack()
        self.score_labels = {}
        self.score_titles = {}
        for col, (key, title, color) in enumerate([
            ("player", "Player (X)", MARK_COLORS[Mark.X]),
            ("draws", "Draws", '#cbd5e1'),
            ("opponent", "Gemini (O)", MARK_COLORS[Mark.O]),
        ]):
            title_label = ttk.Label(score_frame, text=title)
            title_label.grid(row=0, column=col, padx=8)
            value = ttk.Label(score_frame, text="0", style='Score.TLabel', foreground=color)
            value.grid(row=1, column=col, padx=8)
            self.score_titles[key] = title_label
            self.score_labels[key] = value

        ttk.Separator(left_frame, orient='horizontal').pack(fill=tk.X, pady=15)
        ttk.Label(left_frame, text="Difficulty", style='Title.TLabel').pack()

        self.difficulty_buttons = {}
        for difficulty in Difficulty:
            btn = tk.Button(
                left_frame,
                text=difficulty.value,
                font=('Segoe UI', 10, 'bold'),
                width=14,
                command=lambda d=difficulty: self._set_difficulty(d)
            )
            btn.pack(pady=3)
            self.difficulty_buttons[difficulty] = btn

        ttk.Separator(left_frame, orient='horizontal').pack(fill=tk.X, pady=15)
        self.sound_var = tk.BooleanVar(value=True)
        tk.Checkbutton(
            left_frame,
            text="Sound Effects",
            variable=self.sound_var,
            command=self._toggle_sound,
            bg='#0f172a',
            fg='white',
            selectcolor='#1e293b',
            activebackground='#0f172a'
        ).pack()

        # Right panel - status and board
        right_frame = ttk.Frame(main_frame)
        right_frame.pack(side=tk.RIGHT, fill=tk.BOTH, expand=True)

        self.status_label = ttk.Label(right_frame, text="", style='Status.TLabel')
        self.status_label.pack(pady=(0, 10))

        board_frame = ttk.Frame(right_frame)
        board_frame.pack(pady=10)

        self.board_cells = []
        for index in range(9):
            cell = tk.Button(
                board_frame,
                text="",
                font=('Segoe UI', 28, 'bold'),
                width=3,
                height=1,
                bg=CELL_BG,
                relief='ridge',
                borderwidth=2,
                command=lambda i=index: self._on_cell_click(i)
            )
            cell.grid(row=index // 3, column=index % 3, padx=2, pady=2)
            self.board_cells.append(cell)

        tk.Button(
            right_frame,
            text="New Game",
            font=('Segoe UI', 11, 'bold'),
            bg='#6366f1',
            fg='white',
            width=14,
            command=self._reset_game
        ).pack(pady=15)

        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    # ==================== COMMANDS (to controller) ====================

    def _call(self, func, *args):
        """Run a controller command on the game loop."""
        self.loop.call_soon_threadsafe(func, *args)

    def _on_cell_click(self, index: int):
        self._call(self.controller.apply_human_move, index)

    def _set_difficulty(self, difficulty: Difficulty):
        logger.info("Difficulty set to: %s", difficulty.value)
        self._call(self.controller.set_difficulty, difficulty)

    def _reset_game(self):
        self._call(self.controller.reset)

    def _toggle_sound(self):
        self.sounds.enabled = self.sound_var.get()

    # ==================== RENDERING (from controller) ====================

    def _on_snapshot(self, snapshot: ControllerSnapshot):
        """Called on the game loop thread."""
        self.root.after(0, self._render, snapshot)

    def _render(self, snapshot: ControllerSnapshot):
        state = snapshot.state
        opponent = OPPONENT_NAMES[snapshot.difficulty]
        accepting = snapshot.phase == Phase.HUMAN_TURN
        line = state.winning_line or ()

        for index, cell in enumerate(self.board_cells):
            mark = state.board[index]
            cell.configure(
                text=mark.value if mark else "",
                fg=MARK_COLORS[mark] if mark else 'white',
                disabledforeground=MARK_COLORS[mark] if mark else 'white',
                bg=WIN_BG if index in line else CELL_BG,
                state='normal' if accepting and mark is None else 'disabled'
            )

        if state.is_game_over:
            if state.winner is None:
                status = "It's a Draw!"
            elif state.winner == Mark.X:
                status = "Player Wins!"
            else:
                status = f"{opponent} Wins!"
        elif snapshot.is_thinking:
            status = f"{opponent} is thinking..."
        else:
            status = "Your turn (X)"
        self.status_label.configure(text=status)

        score = snapshot.score
        self.score_labels["player"].configure(text=str(score.human_wins))
        self.score_labels["draws"].configure(text=str(score.draws))
        self.score_labels["opponent"].configure(text=str(score.opponent_wins))
        self.score_titles["opponent"].configure(text=f"{opponent} (O)")

        for difficulty, btn in self.difficulty_buttons.items():
            if difficulty == snapshot.difficulty:
                btn.configure(bg='#22d3ee', fg='black')
            else:
                btn.configure(bg='#334155', fg='white')

        self.sounds.play(snapshot.event)

    def _quit(self):
        """Quit the application."""
        logger.info("Quitting...")
        self.controller.remove_listener(self._on_snapshot)
        self.loop.call_soon_threadsafe(self.loop.stop)

        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.loop_thread.start()
        self.root.mainloop()
