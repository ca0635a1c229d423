"""
Command line entry point

    python -m game.minishooter play            # open the game window
    python -m game.minishooter random          # random agent in the env
"""

import argparse

from .config import GameConfig


def main(argv=None):
    parser = argparse.ArgumentParser(description="Mini shooter")
    sub = parser.add_subparsers(dest="command", required=True)

    play = sub.add_parser("play", help="Play the game in a window")
    play.add_argument("--width", type=int, default=800, help="Viewport width (default: 800)")
    play.add_argument("--height", type=int, default=600, help="Viewport height (default: 600)")
    play.add_argument("--seed", type=int, default=None, help="Random seed")
    play.add_argument("--player-image", type=str, default=None, help="Player sprite image")
    play.add_argument("--background-image", type=str, default=None, help="Background image")
    play.add_argument("--quiet", action="store_true", help="Do not print round events")

    rand = sub.add_parser("random", help="Run a random-policy episode in the environment")
    rand.add_argument("--no-render", action="store_true", help="Disable rendering")
    rand.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")

    args = parser.parse_args(argv)

    if args.command == "play":
        from .window import run_game

        cfg = GameConfig(width=args.width, height=args.height)
        run_game(
            cfg,
            seed=args.seed,
            player_image=args.player_image,
            background_image=args.background_image,
            verbose=0 if args.quiet else 1,
        )
    elif args.command == "random":
        from .shooter_env import run_random_episode

        run_random_episode(render=not args.no_render, seed=args.seed)


if __name__ == "__main__":
    main()
