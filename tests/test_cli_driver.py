import random
import unittest
from unittest import mock

from slide2048.cli_driver import format_board, main, parse_move
from slide2048.core import Direction, get_tile_count
from slide2048.session import GameSession


class TestCliDriver(unittest.TestCase):
    def _run(self, inputs, argv=None):
        lines = iter(inputs)
        output = []

        def fake_input(prompt):
            return next(lines)

        def fake_print(*args):
            output.append(" ".join(str(a) for a in args))

        code = main(argv or ["--seed", "5", "--size", "4"], input_fn=fake_input, print_fn=fake_print)
        return code, "\n".join(output)

    def test_given_keys_when_parsed_then_directions(self):
        self.assertEqual(parse_move("w"), Direction.UP)
        self.assertEqual(parse_move(" A "), Direction.LEFT)
        self.assertEqual(parse_move("down"), Direction.DOWN)
        self.assertEqual(parse_move("d"), Direction.RIGHT)
        self.assertIsNone(parse_move("x"))

    def test_given_board_when_formatted_then_aligned(self):
        text = format_board([[0, 2], [128, 0]])
        self.assertEqual(text, "  .   2\n128   .")

    def test_given_quit_when_playing_then_exits(self):
        code, out = self._run(["q"])
        self.assertEqual(code, 0)
        self.assertIn("Quitting game.", out)
        self.assertIn("Score: 0", out)

    def test_given_invalid_then_moves_when_playing_then_feedback(self):
        code, out = self._run(["x", "a", "w", "s", "d", "n", "q"])
        self.assertEqual(code, 0)
        self.assertIn("Invalid input. Use W, A, S, D.", out)
        self.assertIn("Quitting game.", out)

    def _run_with_session(self, session, inputs):
        with mock.patch("slide2048.cli_driver.GameSession", return_value=session):
            return self._run(inputs)

    def _session_with_top_row(self, top_row):
        session = GameSession(size=4, rng=random.Random(8))
        session.board = [top_row, [0] * 4, [0] * 4, [0] * 4]
        return session

    def test_given_new_game_command_when_playing_then_score_and_board_reset(self):
        session = self._session_with_top_row([2, 2, 0, 0])
        code, out = self._run_with_session(session, ["a", "n", "q"])
        self.assertEqual(code, 0)
        self.assertIn("Score: 4", out)
        self.assertEqual(session.score, 0)
        self.assertEqual(session.best_score, 4)
        self.assertEqual(session.moves, 0)
        self.assertEqual(get_tile_count(session.board), 2)

    def test_given_size_command_when_playing_then_board_resized(self):
        session = GameSession(size=4, rng=random.Random(2))
        code, out = self._run_with_session(session, ["5", "9", "q"])
        self.assertEqual(code, 0)
        self.assertEqual(session.size, 5)
        self.assertEqual(len(session.board), 5)
        self.assertIn("Board size 9 is not supported", out)

    def test_given_win_when_player_accepts_then_new_game_starts(self):
        session = self._session_with_top_row([1024, 1024, 0, 0])
        code, out = self._run_with_session(session, ["a", "y", "q"])
        self.assertEqual(code, 0)
        self.assertIn("Congratulations! You reached the 2048 tile!", out)
        self.assertIn("Quitting game.", out)
        self.assertEqual(session.status, "playing")
        self.assertEqual(session.score, 0)
        self.assertEqual(session.best_score, 2048)

    def test_given_win_when_player_declines_then_exits(self):
        session = self._session_with_top_row([1024, 1024, 0, 0])
        code, out = self._run_with_session(session, ["a", "n"])
        self.assertEqual(code, 0)
        self.assertEqual(session.status, "won")
        self.assertNotIn("Quitting game.", out)

    def test_given_game_over_when_player_accepts_then_new_game_starts(self):
        session = GameSession(size=4, rng=random.Random(4))
        session.board = [
            [8, 16, 32, 0],
            [16, 32, 64, 128],
            [32, 64, 128, 256],
            [64, 128, 256, 512],
        ]
        code, out = self._run_with_session(session, ["d", "y", "q"])
        self.assertEqual(code, 0)
        self.assertIn("No more moves possible. Better luck next time!", out)
        self.assertEqual(session.status, "playing")
        self.assertEqual(get_tile_count(session.board), 2)

    def test_given_unknown_log_level_when_starting_then_usage_error(self):
        with mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit) as ctx:
                main(["--log-level", "loud"], input_fn=lambda p: "q", print_fn=lambda *a: None)
        self.assertEqual(ctx.exception.code, 2)

    def test_given_end_of_input_when_playing_then_quits(self):
        def eof(prompt):
            raise EOFError

        output = []
        code = main(["--size", "3"], input_fn=eof, print_fn=lambda *a: output.append(a))
        self.assertEqual(code, 0)
        self.assertIn(("Quitting game.",), output)


if __name__ == "__main__":
    unittest.main()
