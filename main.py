#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--size N] [--mines M] [--seed S]
    python main.py demo [--games N] [--delay SECONDS]
"""
import argparse
import logging
import os
import random
import sys
import time

import numpy as np

from sweeper import (
    BoardConfig,
    GameClock,
    InvalidConfiguration,
    GameController,
    MinesweeperEnv,
    ThreadingScheduler,
    render_board,
)

PLAY_HELP = """Commands:
  r X Y   reveal cell
  f X Y   toggle flag
  c X Y   chord around a revealed number
  n       new game
  q       quit"""


def clear_screen() -> None:
    os.system('cls' if os.name == 'nt' else 'clear')


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Build board configuration from command line flags."""
    return BoardConfig(size=args.size, num_mines=args.mines)


def print_status(controller: GameController) -> None:
    """Print board, clock and flag counter."""
    state = controller.state
    print(render_board(state.board))
    print(
        f"Time: {state.elapsed_seconds}s | "
        f"Flags left: {state.flags_remaining} | "
        f"{state.phase.name}"
    )


def play(args: argparse.Namespace) -> None:
    """Play an interactive game on the terminal."""
    config = build_config(args)
    scheduler = ThreadingScheduler()
    rng = random.Random(args.seed) if args.seed is not None else None
    controller = GameController(config, scheduler=scheduler, rng=rng)
    clock = GameClock(controller, scheduler)

    print(PLAY_HELP)
    print_status(controller)

    for line in sys.stdin:
        parts = line.split()
        if not parts:
            continue
        command = parts[0].lower()

        if command == "q":
            break
        if command == "n":
            controller.new_game()
            print_status(controller)
            continue

        if command not in ("r", "f", "c") or len(parts) != 3:
            print(PLAY_HELP)
            continue
        try:
            x, y = int(parts[1]), int(parts[2])
        except ValueError:
            print("Coordinates must be integers")
            continue

        if command == "r":
            controller.reveal_cell(x, y)
            if controller.state.first_click_done:
                clock.start()
        elif command == "f":
            controller.toggle_flag(x, y)
        else:
            controller.chord(x, y)

        if controller.state.game_over:
            scheduler.join()
            print("BOOM! You hit a mine.")
        print_status(controller)


def demo(args: argparse.Namespace) -> None:
    """Watch random moves drawn from the action mask."""
    config = build_config(args)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(args.seed)

    print(
        f"Board: {config.size}x{config.size} with {config.num_mines} mines "
        f"({100 * config.num_mines / config.total_cells:.1f}% density)"
    )

    total_revealed = 0

    for game in range(args.games):
        obs, info = env.reset(seed=None if args.seed is None else args.seed + game)
        done = False
        step = 0

        while not done:
            action = int(rng.choice(np.flatnonzero(env.get_action_mask())))
            x, y = divmod(action, config.size)

            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            if args.delay > 0:
                clear_screen()
            print(f"=== Game {game + 1}/{args.games} | Step {step} ===")
            print(f"Last move: ({x}, {y})\n")
            print(env.render())
            time.sleep(args.delay)

        total_revealed += info["revealed"]
        print(f"\n*** {info['phase']} after {info['revealed']} revealed cells ***")

    print(f"\n=== Average revealed: {total_revealed / args.games:.1f} cells ===")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - Play or watch random play"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    def add_board_args(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--size", type=int, default=10, help="Board size (NxN)")
        sub.add_argument("--mines", type=int, default=15, help="Number of mines")
        sub.add_argument("--seed", type=int, default=None, help="Random seed")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_args(play_parser)

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Watch random play")
    add_board_args(demo_parser)
    demo_parser.add_argument(
        "--games", type=int, default=5, help="Number of games"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.3, help="Delay between moves"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        if args.command == "play":
            play(args)
        elif args.command == "demo":
            demo(args)
        else:
            parser.print_help()
    except InvalidConfiguration as error:
        parser.error(str(error))


if __name__ == "__main__":
    main()
