"""
Command-line interface for Minesweeper.

Usage:
    python main.py play [--preset {beginner,intermediate,expert}] [--seed N]
    python main.py simulate [--games N] [--preset ...] [--seed N]
"""
import argparse
import logging
from typing import Callable, List, Optional, Tuple

import numpy as np

from .board import PRESETS, BoardConfig
from .environment import MinefieldEnv


logger = logging.getLogger(__name__)

PLAY_HELP = "Commands: u ROW COL (uncover), f ROW COL (cycle guess), q (quit)"


def parse_command(line: str) -> Optional[Tuple[str, int, int]]:
    """
    Parse one line of player input.

    Returns:
        ("u" | "f", row, col), ("q", -1, -1) to quit, or None if the
        line is not a valid command.
    """
    parts = line.strip().lower().split()
    if parts == ["q"]:
        return "q", -1, -1
    if len(parts) != 3 or parts[0] not in ("u", "f"):
        return None
    try:
        return parts[0], int(parts[1]), int(parts[2])
    except ValueError:
        return None


def play(
    config: BoardConfig,
    seed: Optional[int] = None,
    read_line: Callable[[str], str] = input,
) -> str:
    """
    Play one interactive game in the terminal.

    Returns:
        Final game state: "WON", "LOST" or "PLAYING" if the player quit.
    """
    env = MinefieldEnv(config=config, render_mode="ansi")
    env.reset(seed=seed)
    print(PLAY_HELP)

    while env.game_state == "PLAYING":
        print(f"\nMines left: {env.display.mines_left()}")
        print(env.render())
        try:
            line = read_line("> ")
        except EOFError:
            break

        command = parse_command(line)
        if command is None:
            print(PLAY_HELP)
            continue
        kind, row, col = command
        if kind == "q":
            break
        if not env.board.in_range(row, col):
            print(f"No square at ({row}, {col})")
            continue
        env.step(env.encode_action(row, col, flag=(kind == "f")))

    print()
    print(env.render())
    if env.game_state == "WON":
        print("\n*** WIN! ***")
    elif env.game_state == "LOST":
        print("\n*** LOST (hit mine) ***")
    return env.game_state


def simulate(
    config: BoardConfig, games: int, seed: Optional[int] = None
) -> dict:
    """
    Play games by uncovering random covered squares.

    Returns:
        Dict with wins, losses, win_rate and avg_steps.
    """
    env = MinefieldEnv(config=config)
    num_cells = config.rows * config.cols
    wins = 0
    total_steps = 0

    for game in range(games):
        env.reset(seed=None if seed is None else seed + game)
        done = False
        info = {}
        while not done:
            choices = np.flatnonzero(env.get_action_mask()[:num_cells])
            action = int(env.np_random.choice(choices))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        total_steps += info["steps"]
        if info["game_state"] == "WON":
            wins += 1
        logger.debug("Game %d: %s in %d steps", game + 1,
                     info["game_state"], info["steps"])

    return {
        "wins": wins,
        "losses": games - wins,
        "win_rate": wins / games if games else 0.0,
        "avg_steps": total_steps / games if games else 0.0,
    }


def _run_play(args: argparse.Namespace) -> None:
    play(PRESETS[args.preset], seed=args.seed)


def _run_simulate(args: argparse.Namespace) -> None:
    print(f"Simulating {args.games} random games on {args.preset}...")
    results = simulate(PRESETS[args.preset], args.games, seed=args.seed)
    print(f"Results for {args.preset}:")
    print(f"  Wins: {results['wins']}")
    print(f"  Losses: {results['losses']}")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    for name, help_text in (
        ("play", "Play a game in the terminal"),
        ("simulate", "Play random games and report results"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--preset",
            choices=sorted(PRESETS),
            default="beginner",
            help="Board difficulty",
        )
        sub.add_argument(
            "--seed", type=int, default=None, help="Random seed"
        )
        if name == "simulate":
            sub.add_argument(
                "--games", type=int, default=100, help="Number of games"
            )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.command == "play":
        _run_play(args)
    elif args.command == "simulate":
        _run_simulate(args)
    else:
        parser.print_help()
