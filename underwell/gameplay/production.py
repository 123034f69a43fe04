"""
Resonator production cycle.
NO UI DEPENDENCIES.

A resonator only counts down while it has no live everstone, so each
resonator owns at most one live stone at any time.
"""
import logging
from typing import List

from .constants import EVERSTONE_HP, EVERSTONE_OFFSET_Y, EVERSTONE_RADIUS
from .entities import Everstone, Resonator
from .world import World

logger = logging.getLogger(__name__)


def produce_everstone(world: World, resonator: Resonator) -> Everstone:
    """Spawn a stone above the resonator and restart its cooldown."""
    stone = Everstone(
        x=resonator.x,
        y=resonator.y - EVERSTONE_OFFSET_Y,
        resonator_id=resonator.id,
        radius=EVERSTONE_RADIUS,
        hp=EVERSTONE_HP,
    )
    world.everstones.append(stone)
    resonator.produced_count += 1
    resonator.produce_timer = resonator.produce_cooldown
    logger.debug(
        f"Resonator {resonator.id} produced everstone #{resonator.produced_count}"
    )
    return stone


def update_resonators(world: World, dt: float) -> List[Everstone]:
    """
    Advance every alive resonator's production timer by dt.
    Returns the everstones produced this tick.
    """
    produced: List[Everstone] = []

    for resonator in world.resonators:
        if not resonator.alive:
            continue
        if world.live_everstone_for(resonator.id) is not None:
            # Timer is frozen while the current stone survives
            continue

        resonator.produce_timer -= dt
        if resonator.produce_timer <= 0:
            stone = produce_everstone(world, resonator)
            produced.append(stone)

    return produced
