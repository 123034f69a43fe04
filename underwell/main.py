#!/usr/bin/env python3
"""
Underwell Pit - Headless Entry Point

Two resonators in the middle of the pit grow everstones. Monsters climb in
from the edges and chew on whatever is worth most. Survive as long as you can.

Usage:
    python -m underwell.main [--seconds 300] [--seed 7] [--defend] [--fps 30]

Options:
    --seconds   Game seconds to simulate before giving up (default: 600)
    --seed      Seed for spawn and steering randomness
    --defend    Place a small preset defense before starting
    --fps       Simulated frame rate fed to the frame clock (default: 60)
    --realtime  Sleep between frames instead of running flat out
"""
import argparse
import logging
import random
import time

from underwell.config import get_settings
from underwell.highscore import HighScoreStore
from underwell.gameplay.clock import FrameClock
from underwell.gameplay.commands import Start, Tool, commands_for_tool
from underwell.gameplay.game import Game, GameOverEvent

logger = logging.getLogger("underwell")


def place_preset_defense(game: Game) -> None:
    """A turret over each resonator, traps at both tunnel mouths, barriers in front."""
    world = game.world
    cx, cy = world.width / 2, world.height / 2
    uses = [
        (Tool.LASER, cx - 60, cy - 120),
        (Tool.LASER, cx + 60, cy - 120),
        (Tool.SHOCK, 120, cy - 60),
        (Tool.SHOCK, world.width - 120, cy - 60),
        (Tool.BARRIER, cx - 240, cy - 80),
        (Tool.BARRIER, cx + 240, cy - 80),
    ]
    for tool, x, y in uses:
        for command in commands_for_tool(tool, x, y, dropped=True):
            game.dispatch(command)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a headless Underwell Pit session")
    parser.add_argument("--seconds", type=float, default=600.0)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--defend", action="store_true")
    parser.add_argument("--fps", type=float, default=60.0)
    parser.add_argument("--realtime", action="store_true")
    return parser.parse_args()


def main() -> None:
    """Main entry point."""
    args = parse_args()
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    seed = args.seed if args.seed is not None else settings.random_seed
    game = Game(
        settings.world_width,
        settings.world_height,
        rng=random.Random(seed),
        highscore_store=HighScoreStore(settings.highscore_path),
    )
    clock = FrameClock(
        game,
        tick_rate=settings.tick_rate,
        max_catchup_ticks=settings.max_catchup_ticks,
    )

    if args.defend:
        place_preset_defense(game)
    game.dispatch(Start())
    logger.info(f"Pit {settings.world_width}x{settings.world_height}, best so far {game.high_score:.1f}s")

    frame_seconds = 1.0 / args.fps
    while game.running and game.time < args.seconds:
        stats = clock.advance(frame_seconds)
        for event in stats.events:
            if isinstance(event, GameOverEvent):
                logger.info(
                    f"Survived {event.survival_time:.1f}s"
                    + (" - new record!" if event.new_record else "")
                )
        if args.realtime:
            time.sleep(frame_seconds)

    if game.running:
        logger.info(
            f"Still standing after {game.time:.1f}s: "
            f"{game.get_produced_total()} everstones produced, "
            f"{game.get_everstone_health()} everstone health left, "
            f"{len(game.world.monsters)} monsters in the pit"
        )


if __name__ == "__main__":
    main()
