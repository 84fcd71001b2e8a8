"""
Unit tests for the Gymnasium environment and command-line helpers.
"""
from typing import List, Optional, get_type_hints

import pytest
import numpy as np
from minefield import BoardConfig, MinefieldEnv, Status
from minefield.cli import main, parse_command, play, simulate


# ============================================================================
# Environment Tests
# ============================================================================

class TestMinefieldEnv:
    """Test the environment's reset/step contract."""

    def test_spaces_match_board(self, small_config: BoardConfig) -> None:
        env = MinefieldEnv(config=small_config)
        assert env.observation_space.shape == (4, 4)
        assert env.action_space.n == 32

    def test_reset_covers_everything(self, small_config: BoardConfig) -> None:
        env = MinefieldEnv(config=small_config)
        obs, info = env.reset(seed=0)
        assert np.all(obs == Status.COVERED)
        assert info["game_state"] == "PLAYING"
        assert info["mines_left"] == 2
        assert env.board.placed_mines == 0

    def test_seeded_reset_keeps_board_and_display(
        self, small_config: BoardConfig
    ) -> None:
        """Handles taken before a reset should follow the new game."""
        env = MinefieldEnv(config=small_config)
        board, display = env.board, env.display

        env.reset(seed=4)
        env.step(env.encode_action(0, 0))
        first = board.mine_mask()

        env.reset(seed=4)
        assert env.board is board
        assert env.display is display
        assert display.status(0, 0) == Status.COVERED

        env.step(env.encode_action(0, 0))
        assert np.array_equal(board.mine_mask(), first)

    def test_first_uncover_is_never_a_mine(
        self, small_config: BoardConfig
    ) -> None:
        """Mines are placed on the first uncover, avoiding that square."""
        env = MinefieldEnv(config=small_config)
        for seed in range(50):
            env.reset(seed=seed)
            _, reward, _, _, info = env.step(env.encode_action(1, 1))
            assert reward > 0
            assert info["game_state"] != "LOST"
            assert env.board.placed_mines == 2

    def test_guess_action_cycles_flag(self, small_config: BoardConfig) -> None:
        env = MinefieldEnv(config=small_config)
        env.reset(seed=0)
        obs, reward, _, _, info = env.step(env.encode_action(0, 0, flag=True))
        assert obs[0, 0] == Status.MINE_GUESS
        assert reward == 0.0
        assert info["mines_left"] == 1

    def test_uncover_guessed_square_has_no_effect(
        self, small_config: BoardConfig
    ) -> None:
        env = MinefieldEnv(config=small_config)
        env.reset(seed=0)
        env.step(env.encode_action(0, 0, flag=True))
        obs, reward, _, _, _ = env.step(env.encode_action(0, 0))
        assert reward == pytest.approx(-0.1)
        assert obs[0, 0] == Status.MINE_GUESS

    def test_decode_action_round_trip(self, small_config: BoardConfig) -> None:
        env = MinefieldEnv(config=small_config)
        assert env.decode_action(env.encode_action(2, 3)) == (False, 2, 3)
        assert env.decode_action(env.encode_action(3, 1, True)) == (True, 3, 1)

    def test_invalid_action_raises_error(
        self, small_config: BoardConfig
    ) -> None:
        env = MinefieldEnv(config=small_config)
        env.reset(seed=0)
        with pytest.raises(ValueError, match="Invalid action"):
            env.step(32)

    def test_game_ends_and_masks_clear(self, small_config: BoardConfig) -> None:
        """Random play should always end, after which nothing is valid."""
        env = MinefieldEnv(config=small_config)
        env.reset(seed=3)
        terminated = False
        info = {}
        while not terminated:
            choices = np.flatnonzero(env.get_action_mask()[:16])
            _, _, terminated, _, info = env.step(int(choices[0]))

        assert info["game_state"] in ("WON", "LOST")
        assert not env.action_masks().any()

    def test_render_ansi(self, small_config: BoardConfig) -> None:
        env = MinefieldEnv(config=small_config, render_mode="ansi")
        env.reset(seed=0)
        env.step(env.encode_action(0, 0, flag=True))
        lines = env.render().split("\n")
        assert len(lines) == 4
        assert lines[0] == "F . . ."


# ============================================================================
# CLI Tests
# ============================================================================

class TestParseCommand:
    """Test parsing of interactive commands."""

    def test_uncover_command(self) -> None:
        assert parse_command("u 2 3") == ("u", 2, 3)

    def test_flag_command_is_case_insensitive(self) -> None:
        assert parse_command("  F 0 1 ") == ("f", 0, 1)

    def test_quit_command(self) -> None:
        assert parse_command("q") == ("q", -1, -1)

    @pytest.mark.parametrize("line", ["", "x 1 2", "u 1", "u a b", "u 1 2 3"])
    def test_bad_commands(self, line: str) -> None:
        assert parse_command(line) is None


class TestCliCommands:
    """Test the play and simulate commands."""

    def test_play_until_quit(self, small_config: BoardConfig, capsys) -> None:
        lines = iter(["nonsense", "f 0 0", "u 9 9", "q"])
        state = play(small_config, seed=0, read_line=lambda _: next(lines))
        out = capsys.readouterr().out
        assert state == "PLAYING"
        assert "Commands:" in out
        assert "No square at (9, 9)" in out

    def test_play_stops_at_end_of_input(
        self, small_config: BoardConfig
    ) -> None:
        def read_line(_prompt: str) -> str:
            raise EOFError

        assert play(small_config, seed=0, read_line=read_line) == "PLAYING"

    def test_simulate_counts_games(self, small_config: BoardConfig) -> None:
        results = simulate(small_config, games=10, seed=0)
        assert results["wins"] + results["losses"] == 10
        assert 0.0 <= results["win_rate"] <= 1.0
        assert results["avg_steps"] >= 1

    def test_main_argv_is_annotated(self) -> None:
        hints = get_type_hints(main)
        assert hints["argv"] == Optional[List[str]]

    def test_main_simulate(self, capsys) -> None:
        main(["simulate", "--games", "3", "--seed", "1"])
        out = capsys.readouterr().out
        assert "Win rate:" in out
