"""Main entry point for the fish game.

This module provides command-line options to run the game:
- Windowed mode (default): tap or click above the tank to drop food
- Headless mode: no window, fixed time steps, automatic feeding
"""

import argparse
import logging
import os
import sys

from fishgame.config.game_config import GameConfig
from fishgame.exceptions import FishGameError
from fishgame.logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Feed the fish: tap above the tank to drop food",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Play in a window
  fishgame

  # Quick headless run, dropping food every half second
  fishgame --headless --max-frames 1200 --feed-every 30 --seed 42
        """,
    )

    parser.add_argument(
        "--headless", action="store_true", help="Run without a window (fixed time steps)"
    )

    parser.add_argument(
        "--max-frames",
        type=int,
        default=600,
        help="Frames to simulate in headless mode (default: 600)",
    )

    parser.add_argument(
        "--feed-every",
        type=int,
        default=60,
        help="Drop food every N frames in headless mode, 0 to disable (default: 60)",
    )

    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )

    parser.add_argument(
        "--log-level", type=str, default=None, help="Log level (default: FISHGAME_LOG_LEVEL or INFO)"
    )

    parser.add_argument(
        "--assets",
        type=str,
        default=None,
        metavar="DIR",
        help="Directory with BG/NEMO/FOOD/HEART .png overrides",
    )
    return parser


def main(argv=None) -> int:
    """Parse command-line arguments and run the appropriate mode."""
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    config = GameConfig(headless=args.headless, seed=args.seed, log_level=args.log_level)
    if args.assets:
        config.assets_dir = args.assets

    if config.headless:
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

    # Imported late so SDL sees the video driver chosen above
    import pygame

    from fishgame.app import FishGameApp

    pygame.init()
    try:
        app = FishGameApp(config)
        if config.headless:
            logger.info(
                "Starting headless run: %d frames, food every %d frames", args.max_frames, args.feed_every
            )
            app.run_headless(args.max_frames, feed_every=args.feed_every)
        else:
            app.run()
    except FishGameError as e:
        logger.error("Error: %s", e)
        return 1
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
