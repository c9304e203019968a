"""
Command line entry point: play a hot-seat game or watch a random round
"""

import argparse

from .config import PRESETS, make_config
from .game import GorillasGame


def main(argv=None):
    parser = argparse.ArgumentParser(description="Two-player gorillas artillery game")
    parser.add_argument(
        "--preset",
        type=str,
        default="classic",
        choices=sorted(PRESETS),
        help="Screen/skyline preset (default: classic)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the skyline generator (default: random)",
    )
    parser.add_argument(
        "--gravity",
        type=float,
        default=None,
        help="Override gravity in px/s^2",
    )
    parser.add_argument(
        "--random",
        action="store_true",
        help="Watch one round played with random inputs instead of the keyboard",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print round results",
    )

    args = parser.parse_args(argv)

    overrides = {}
    if args.gravity is not None:
        overrides["gravity"] = args.gravity
    config = make_config(args.preset, **overrides)

    if args.random:
        from .gorillas_env import run_random_episode
        run_random_episode(render=True, seed=args.seed, config=config, verbose=not args.quiet)
        return

    from .render import play
    play(GorillasGame(config, seed=args.seed, verbose=not args.quiet))


if __name__ == "__main__":
    main()
