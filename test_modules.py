"""
Tests for the Tic-Tac-Toe Pro game logic:
board model, win checker, move validator and local AI.
"""

import random
import unittest

from logic.ai_player import AIPlayer
from logic.game_state import Difficulty, GameState, Mark, Outcome, OutcomeStatus, Score
from logic.move_validator import MoveValidator
from logic.win_checker import WINNING_LINES, WinChecker


def make_board(layout: str):
    """'XO.' string of 9 chars -> board list."""
    assert len(layout) == 9
    return [Mark(c) if c in "XO" else None for c in layout]


def random_open_boards(count: int, seed: int = 7):
    """Boards reached by legal alternating play that are still in progress."""
    rng = random.Random(seed)
    checker = WinChecker()
    boards = []
    while len(boards) < count:
        state = GameState()
        for _ in range(rng.randint(0, 8)):
            state.make_move(rng.choice(state.get_empty_cells()))
            if checker.evaluate(state.board).is_terminal:
                break
        if not checker.evaluate(state.board).is_terminal:
            boards.append(state.board)
    return boards


class TestGameState(unittest.TestCase):

    def test_fresh_state(self):
        state = GameState()
        self.assertEqual(state.board, [None] * 9)
        self.assertEqual(state.current_player, Mark.X)
        self.assertFalse(state.is_game_over)

    def test_make_move_alternates(self):
        state = GameState()
        self.assertTrue(state.make_move(4))
        self.assertTrue(state.make_move(0))
        self.assertEqual(state.board[4], Mark.X)
        self.assertEqual(state.board[0], Mark.O)
        self.assertEqual(state.current_player, Mark.X)
        self.assertEqual([m.index for m in state.moves], [4, 0])

    def test_make_move_rejects_occupied_and_out_of_range(self):
        state = GameState()
        state.make_move(4)
        self.assertFalse(state.make_move(4))
        self.assertFalse(state.make_move(9))
        self.assertFalse(state.make_move(-1))
        self.assertEqual(state.current_player, Mark.O)

    def test_copy_is_independent(self):
        state = GameState()
        state.make_move(0)
        clone = state.copy()
        clone.make_move(1)
        self.assertIsNone(state.board[1])
        self.assertEqual(len(state.moves), 1)

    def test_render_shows_indices_for_empty_cells(self):
        state = GameState(board=make_board("X...O...."))
        self.assertEqual(state.render().splitlines()[0], " X | 1 | 2")

    def test_score_record(self):
        score = Score()
        score.record(Outcome.win(Mark.X, (0, 1, 2)))
        score.record(Outcome.win(Mark.O, (0, 4, 8)))
        score.record(Outcome.draw())
        score.record(Outcome.in_progress())
        self.assertEqual((score.human_wins, score.opponent_wins, score.draws), (1, 1, 1))


class TestWinChecker(unittest.TestCase):

    def setUp(self):
        self.checker = WinChecker()

    def test_empty_board_in_progress(self):
        outcome = self.checker.evaluate(make_board("........."))
        self.assertEqual(outcome.status, OutcomeStatus.IN_PROGRESS)
        self.assertIsNone(outcome.winner)
        self.assertIsNone(outcome.line)

    def test_open_boards_in_progress(self):
        for board in random_open_boards(50):
            with self.subTest(board=board):
                self.assertEqual(self.checker.evaluate(board), Outcome.in_progress())

    def test_every_line_wins(self):
        for mark in Mark:
            for line in WINNING_LINES:
                board = [None] * 9
                for index in line:
                    board[index] = mark
                with self.subTest(mark=mark, line=line):
                    outcome = self.checker.evaluate(board)
                    self.assertEqual(outcome.status, OutcomeStatus.WIN)
                    self.assertEqual(outcome.winner, mark)
                    self.assertEqual(outcome.line, line)

    def test_mixed_line_is_not_a_win(self):
        outcome = self.checker.evaluate(make_board("XXO......"))
        self.assertFalse(outcome.is_terminal)

    def test_first_line_in_table_order_wins(self):
        # Top row and left column both complete
        board = make_board("XXXX..X..")
        outcome = self.checker.evaluate(board)
        self.assertEqual(outcome.line, (0, 1, 2))

        # Middle column and both diagonals complete
        board = make_board("OOO.O.OOO")
        self.assertEqual(self.checker.evaluate(board).line, (0, 1, 2))
        board = make_board("O.O.O.O.O")
        self.assertEqual(self.checker.evaluate(board).line, (0, 4, 8))

    def test_full_board_without_line_is_draw(self):
        outcome = self.checker.evaluate(make_board("XOXXOOOXX"))
        self.assertEqual(outcome.status, OutcomeStatus.DRAW)
        self.assertTrue(outcome.is_draw)
        self.assertIsNone(outcome.line)

    def test_full_board_with_line_is_win(self):
        outcome = self.checker.evaluate(make_board("XXXOOXOXO"))
        self.assertEqual(outcome.winner, Mark.X)

    def test_evaluate_is_idempotent(self):
        board = make_board("XO.XO.X..")
        before = list(board)
        first = self.checker.evaluate(board)
        second = self.checker.evaluate(board)
        self.assertEqual(first, second)
        self.assertEqual(board, before)

    def test_update_game_state(self):
        state = GameState(board=make_board("OOO.XX.X."))
        self.checker.update_game_state(state)
        self.assertTrue(state.is_game_over)
        self.assertEqual(state.winner, Mark.O)
        self.assertEqual(state.winning_line, (0, 1, 2))


class TestMoveValidator(unittest.TestCase):

    def setUp(self):
        self.validator = MoveValidator()

    def test_valid_move(self):
        result = self.validator.validate_move(GameState(), 4)
        self.assertTrue(result.is_valid)
        self.assertIsNone(result.error_message)

    def test_occupied_cell(self):
        state = GameState(board=make_board("....X...."))
        result = self.validator.validate_move(state, 4)
        self.assertFalse(result.is_valid)
        self.assertIn("occupied", result.error_message)

    def test_out_of_range(self):
        for index in (-1, 9, 100):
            with self.subTest(index=index):
                self.assertFalse(self.validator.validate_move(GameState(), index).is_valid)

    def test_game_over(self):
        state = GameState(board=make_board("XXX.OO..."), outcome=Outcome.win(Mark.X, (0, 1, 2)))
        result = self.validator.validate_move(state, 3)
        self.assertFalse(result.is_valid)
        self.assertEqual(self.validator.get_valid_moves(state), [])

    def test_suggestion_types(self):
        board = make_board("X...O....")
        self.assertTrue(self.validator.is_legal_suggestion(board, 1))
        self.assertFalse(self.validator.is_legal_suggestion(board, True))
        self.assertFalse(self.validator.is_legal_suggestion(board, 2.0))
        self.assertFalse(self.validator.is_legal_suggestion(board, "3"))
        self.assertFalse(self.validator.is_legal_suggestion(board, None))
        self.assertFalse(self.validator.is_legal_suggestion(board, 0))

    def test_first_empty_cell(self):
        self.assertEqual(MoveValidator.first_empty_cell(make_board("XO.X....O")), 2)
        self.assertIsNone(MoveValidator.first_empty_cell(make_board("XOXXOOOXX")))


class TestAIPlayer(unittest.TestCase):

    def setUp(self):
        self.ai = AIPlayer(Mark.O, rng=random.Random(42))

    def test_hard_takes_own_win_over_block(self):
        board = make_board("OO.XX....")
        self.assertEqual(self.ai.select_move(board, Difficulty.HARD), 2)

    def test_hard_blocks(self):
        board = make_board("XX..O....")
        self.assertEqual(self.ai.select_move(board, Difficulty.HARD), 2)

        board = make_board("X..X.O...")
        self.assertEqual(self.ai.select_move(board, Difficulty.HARD), 6)

    def test_hard_wins_on_every_line(self):
        for line in WINNING_LINES:
            for gap in line:
                board = [None] * 9
                for index in line:
                    if index != gap:
                        board[index] = Mark.O
                with self.subTest(line=line, gap=gap):
                    self.assertEqual(self.ai.select_move(board, Difficulty.HARD), gap)

    def test_hard_takes_center(self):
        board = make_board("X........")
        self.assertEqual(self.ai.select_move(board, Difficulty.HARD), 4)

    def test_hard_random_when_center_taken(self):
        board = make_board("....X....")
        empty = [i for i, cell in enumerate(board) if cell is None]
        seen = {self.ai.select_move(board, Difficulty.HARD) for _ in range(200)}
        self.assertTrue(seen <= set(empty))
        self.assertGreater(len(seen), 1)

    def test_hard_never_plays_occupied(self):
        for board in random_open_boards(200, seed=3):
            move = self.ai.select_move(board, Difficulty.HARD)
            with self.subTest(board=board):
                self.assertIsNone(board[move])

    def test_easy_uniform_over_empty_cells(self):
        board = make_board("....X....")
        empty = {i for i, cell in enumerate(board) if cell is None}
        seen = {self.ai.select_move(board, Difficulty.EASY) for _ in range(300)}
        self.assertEqual(seen, empty)

    def test_easy_ignores_threats(self):
        board = make_board("XX..O....")
        seen = {self.ai.select_move(board, Difficulty.EASY) for _ in range(300)}
        self.assertGreater(len(seen), 1)

    def test_full_board_is_a_precondition_error(self):
        with self.assertRaises(AssertionError):
            self.ai.select_move(make_board("XOXXOOOXX"), Difficulty.HARD)

    def test_find_completing_cell(self):
        board = make_board("XX.X.....")
        # Top row comes before left column
        self.assertEqual(self.ai.find_completing_cell(board, Mark.X), 2)
        self.assertIsNone(self.ai.find_completing_cell(board, Mark.O))

    def test_hard_matches_completing_cells(self):
        checker = WinChecker()
        for board in random_open_boards(200, seed=11):
            move = self.ai.select_move(board, Difficulty.HARD)
            win = self.ai.find_completing_cell(board, Mark.O)
            block = self.ai.find_completing_cell(board, Mark.X)

            with self.subTest(board=board):
                if win is not None:
                    self.assertEqual(move, win)
                    after = list(board)
                    after[win] = Mark.O
                    self.assertEqual(checker.evaluate(after).winner, Mark.O)
                elif block is not None:
                    self.assertEqual(move, block)
                    after = list(board)
                    after[block] = Mark.X
                    self.assertEqual(checker.evaluate(after).winner, Mark.X)


if __name__ == "__main__":
    unittest.main()
