"""
Level definition - the pit layout and its two resonators.
NO UI DEPENDENCIES.
"""
from typing import List

from .constants import INDESTRUCTIBLE, INITIAL_SPAWN_DELAY, TOP_WALL_HEIGHT
from .entities import Block, Resonator
from .world import World


def create_pit_blocks(width: float, height: float) -> List[Block]:
    """
    Ground, the two side tunnels, the top wall and a central platform.
    """
    cx, cy = width / 2, height / 2 + 20
    return [
        # Boundaries
        Block(0, height - 120, width, 120, INDESTRUCTIBLE),            # ground
        Block(0, 0, 60, height - 180, INDESTRUCTIBLE),                 # left tunnel
        Block(width - 60, 0, 60, height - 180, INDESTRUCTIBLE),        # right tunnel
        Block(0, 0, width, TOP_WALL_HEIGHT, INDESTRUCTIBLE),           # top wall

        # Central platform and its two ledges
        Block(cx - 160, cy - 60, 320, 120, 200),
        Block(cx - 220, cy + 40, 60, 40, 100),
        Block(cx + 160, cy + 40, 60, 40, 100),
    ]


def create_resonators(world: World) -> List[Resonator]:
    """
    Two resonators either side of the platform center.
    The right one starts closer to its first production.
    """
    cx, cy = world.width / 2, world.height / 2 + 20
    rng = world.rng
    return [
        Resonator(id=0, x=cx - 60, y=cy - 10, produce_timer=6 + rng.random() * 4),
        Resonator(id=1, x=cx + 60, y=cy - 10, produce_timer=2 + rng.random() * 4),
    ]


def init_level(world: World) -> None:
    """
    Reset the world to the starting layout.
    The high score survives a reset.
    """
    world.blocks = create_pit_blocks(world.width, world.height)
    world.turrets = []
    world.traps = []
    world.bombs = []
    world.conveyors = []
    world.monsters = []
    world.everstones = []
    world.resonators = create_resonators(world)

    world.time = 0.0
    world.running = False
    world.production_started_at = None
    world.spawn_timer = INITIAL_SPAWN_DELAY
