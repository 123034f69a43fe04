"""
Monster spawning, targeting, steering and digging.
NO UI DEPENDENCIES.
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union

from .constants import (
    MONSTER_HP, MONSTER_MAX_VX, MONSTER_MAX_VY, MONSTER_ACCEL_X, MONSTER_ACCEL_Y,
    WANDER_ACCEL_X, WANDER_ACCEL_Y, JITTER_CHANCE, JITTER_IMPULSE,
    STONE_CONTACT_MARGIN, STONE_CONTACT_DAMAGE,
    RESONATOR_CONTACT_RANGE, RESONATOR_CONTACT_DAMAGE,
    DIG_PROBE, DIG_THRESHOLD_TICKS, DIG_DAMAGE,
    SPAWN_BASE_INTERVAL, SPAWN_RAMP_SECONDS, SPAWN_MIN_INTERVAL,
    SPAWN_JITTER_LOW, SPAWN_JITTER_SPAN, SPAWN_EDGE_INSET, SPAWN_TOP,
    TOP_WALL_HEIGHT, EDGE_MARGIN,
)
from .entities import Block, Everstone, Monster, Resonator
from .geometry import clamp, distance, sign, unit_vector
from .world import World

logger = logging.getLogger(__name__)


class TargetKind(Enum):
    EVERSTONE = auto()
    RESONATOR = auto()


@dataclass
class Target:
    kind: TargetKind
    entity: Union[Everstone, Resonator]

    @property
    def x(self) -> float:
        return self.entity.x

    @property
    def y(self) -> float:
        return self.entity.y


# =============================================================================
# SPAWNING
# =============================================================================

def next_spawn_interval(world: World) -> float:
    """
    Seconds until the next spawn.
    The base interval shrinks as the survival time grows, down to a floor,
    then gets +-30% jitter.
    """
    base = max(SPAWN_BASE_INTERVAL - math.floor(world.time / SPAWN_RAMP_SECONDS),
               SPAWN_MIN_INTERVAL)
    return base * (world.rng.random() * SPAWN_JITTER_SPAN + SPAWN_JITTER_LOW)


def spawn_monster(world: World) -> Monster:
    """Drop a fresh monster at the left or right pit edge, high up."""
    rng = world.rng
    on_left = rng.random() < 0.5
    x = SPAWN_EDGE_INSET if on_left else world.width - SPAWN_EDGE_INSET
    y = SPAWN_TOP + rng.random() * (world.height / 3)
    monster = Monster(x=x, y=y, hp=MONSTER_HP)
    world.monsters.append(monster)
    logger.debug(f"Monster spawned at ({x:.0f}, {y:.0f})")
    return monster


# =============================================================================
# TARGETING
# =============================================================================

def find_target(world: World, monster: Monster) -> Optional[Target]:
    """
    Nearest live everstone, else nearest alive resonator.
    Ties go to the first candidate in collection order.
    """
    best: Optional[Everstone] = None
    best_distance = math.inf
    for stone in world.everstones:
        if stone.hp <= 0:
            continue
        d = distance(monster.x, monster.y, stone.x, stone.y)
        if d < best_distance:
            best_distance = d
            best = stone
    if best is not None:
        return Target(TargetKind.EVERSTONE, best)

    best_resonator: Optional[Resonator] = None
    best_distance = math.inf
    for resonator in world.resonators:
        if not resonator.alive:
            continue
        d = distance(monster.x, monster.y, resonator.x, resonator.y)
        if d < best_distance:
            best_distance = d
            best_resonator = resonator
    if best_resonator is not None:
        return Target(TargetKind.RESONATOR, best_resonator)

    return None


def speed_factor(monster: Monster) -> float:
    """Wounded monsters get faster."""
    return 0.6 + (MONSTER_HP - monster.hp) / MONSTER_HP


# =============================================================================
# BEHAVIOUR
# =============================================================================

def _wander(world: World, monster: Monster) -> None:
    cx, cy = world.center
    ux, uy = unit_vector(cx - monster.x, cy - monster.y)
    monster.vx += ux * WANDER_ACCEL_X
    monster.vy += uy * WANDER_ACCEL_Y


def _steer(world: World, monster: Monster, target: Target) -> None:
    ux, uy = unit_vector(target.x - monster.x, target.y - monster.y)
    rng = world.rng
    if rng.random() < JITTER_CHANCE:
        monster.vx += (rng.random() - 0.5) * JITTER_IMPULSE

    speed = speed_factor(monster)
    monster.vx += ux * MONSTER_ACCEL_X * speed
    monster.vy += uy * MONSTER_ACCEL_Y * speed
    monster.vx = clamp(monster.vx, -MONSTER_MAX_VX, MONSTER_MAX_VX)
    monster.vy = clamp(monster.vy, -MONSTER_MAX_VY, MONSTER_MAX_VY)


def apply_contact_damage(monster: Monster, target: Target) -> None:
    """Chew on the target while touching it."""
    d = distance(monster.x, monster.y, target.x, target.y)
    if target.kind == TargetKind.EVERSTONE:
        stone = target.entity
        if d < stone.radius + STONE_CONTACT_MARGIN:
            stone.hp -= STONE_CONTACT_DAMAGE
    elif d < RESONATOR_CONTACT_RANGE:
        target.entity.take_damage(RESONATOR_CONTACT_DAMAGE)


def dig(world: World, monster: Monster) -> Optional[Block]:
    """
    Work on the destructible block just ahead of the monster.

    The monster is held in place horizontally while blocked. Every
    DIG_THRESHOLD_TICKS of contact the block loses DIG_DAMAGE health.
    Returns the block if this tick destroyed it.
    """
    probe_x = monster.x + sign(monster.vx) * DIG_PROBE
    block = world.block_at(probe_x, monster.y)
    if block is None or block.indestructible:
        return None

    destroyed = None
    monster.progress += 1
    if monster.progress > DIG_THRESHOLD_TICKS:
        monster.progress = 0
        if block.take_damage(DIG_DAMAGE):
            world.remove_block(block)
            destroyed = block
            logger.debug(f"Monster dug through block at ({block.x:.0f}, {block.y:.0f})")
    monster.vx = 0.0
    return destroyed


def update_monster(world: World, monster: Monster) -> Optional[Block]:
    """
    Run one tick of AI for a living monster (not movement).
    Returns a block destroyed by digging, if any.
    """
    if monster.stunned > 0:
        monster.stunned -= 1
        monster.vx = 0.0
        monster.vy = 0.0
        return None

    target = find_target(world, monster)
    if target is None:
        _wander(world, monster)
    else:
        _steer(world, monster, target)
        apply_contact_damage(monster, target)

    return dig(world, monster)


def integrate(world: World, monster: Monster) -> None:
    """Move by velocity and keep inside the playable area."""
    monster.x += monster.vx
    monster.y += monster.vy
    monster.x = clamp(monster.x, EDGE_MARGIN, world.width - EDGE_MARGIN)
    monster.y = clamp(monster.y, TOP_WALL_HEIGHT, world.height - EDGE_MARGIN)
