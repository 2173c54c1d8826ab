from __future__ import annotations

import argparse
import logging

from . import config


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="neonsnake", add_help=True)
    parser.add_argument(
        "--tiles",
        type=int,
        default=config.GRID_TILES,
        help="Cells per side of the starting play field.",
    )
    parser.add_argument("--cell", type=int, default=config.CELL, help="Cell size in pixels.")
    parser.add_argument("--fps", type=int, default=config.FPS, help="Frame rate limit.")
    parser.add_argument("--mute", action="store_true", help="Disable sound effects and music.")
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="WARNING",
    )
    args = parser.parse_args(argv)

    if not config.MIN_TILES <= args.tiles <= config.MAX_TILES:
        parser.error(f"--tiles must be between {config.MIN_TILES} and {config.MAX_TILES}")
    if args.cell < 4:
        parser.error("--cell must be at least 4")

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from .game import run

    score = run(tiles=args.tiles, cell=args.cell, fps=args.fps, mute=args.mute)
    print("Game Over! Score:", score)


if __name__ == "__main__":
    main()
