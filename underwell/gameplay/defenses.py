"""
Defensive structures: laser turrets, shock traps and bombs.
NO UI DEPENDENCIES.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from .constants import (
    TURRET_RANGE, TURRET_DAMAGE,
    TRAP_REACH_MARGIN, TRAP_STUN_TICKS, TRAP_COOLDOWN_TICKS,
    BOMB_MONSTER_RADIUS, BOMB_MONSTER_DAMAGE, BOMB_STRUCTURE_RADIUS,
    BOMB_BLOCK_DAMAGE, BOMB_RESONATOR_DAMAGE, BOMB_EVERSTONE_DAMAGE,
)
from .entities import Block, Bomb, Monster, Trap, Turret
from .geometry import distance
from .world import World

logger = logging.getLogger(__name__)


@dataclass
class BlastResult:
    """What a single bomb detonation hit."""
    x: float
    y: float
    monsters_hit: int = 0
    blocks_destroyed: List[Block] = field(default_factory=list)
    resonators_hit: int = 0
    everstones_hit: int = 0


# =============================================================================
# TURRETS
# =============================================================================

def nearest_monster(world: World, x: float, y: float, max_range: float) -> Optional[Monster]:
    best: Optional[Monster] = None
    best_distance = math.inf
    for monster in world.monsters:
        d = distance(x, y, monster.x, monster.y)
        if d < max_range and d < best_distance:
            best_distance = d
            best = monster
    return best


def update_turret(world: World, turret: Turret, dt: float) -> Optional[Monster]:
    """
    Cool down and, when ready, shoot the nearest monster in range.
    A turret with nothing to shoot stays ready. Returns the monster hit.
    """
    turret.cool -= dt
    if turret.cool > 0:
        return None

    victim = nearest_monster(world, turret.x, turret.y, TURRET_RANGE)
    if victim is None:
        return None

    victim.hp -= TURRET_DAMAGE
    turret.cool = 1 / turret.rate
    return victim


# =============================================================================
# TRAPS
# =============================================================================

def update_trap(world: World, trap: Trap) -> List[Monster]:
    """
    Tick the trap cooldown and fire if it is exactly zero.

    Every monster in reach is stunned in the tick the trap fires, then the
    trap rearms for TRAP_COOLDOWN_TICKS. Returns the stunned monsters.
    """
    if trap.cooldown > 0:
        trap.cooldown -= 1
    if trap.cooldown != 0:
        return []

    reach = trap.radius + TRAP_REACH_MARGIN
    stunned = [m for m in world.monsters if distance(trap.x, trap.y, m.x, m.y) < reach]
    for monster in stunned:
        monster.stunned = TRAP_STUN_TICKS
    if stunned:
        trap.cooldown = TRAP_COOLDOWN_TICKS
    return stunned


# =============================================================================
# BOMBS
# =============================================================================

def detonate(world: World, bomb: Bomb) -> BlastResult:
    """
    Apply a bomb blast. Monsters use a tighter radius than structures;
    indestructible blocks shrug it off.
    """
    result = BlastResult(bomb.x, bomb.y)

    for monster in world.monsters:
        if distance(bomb.x, bomb.y, monster.x, monster.y) < BOMB_MONSTER_RADIUS:
            monster.hp -= BOMB_MONSTER_DAMAGE
            result.monsters_hit += 1

    for block in list(reversed(world.blocks)):
        cx, cy = block.center
        if distance(bomb.x, bomb.y, cx, cy) < BOMB_STRUCTURE_RADIUS:
            if block.take_damage(BOMB_BLOCK_DAMAGE):
                world.remove_block(block)
                result.blocks_destroyed.append(block)

    for resonator in world.resonators:
        if distance(bomb.x, bomb.y, resonator.x, resonator.y) < BOMB_STRUCTURE_RADIUS:
            resonator.take_damage(BOMB_RESONATOR_DAMAGE)
            result.resonators_hit += 1

    for stone in world.everstones:
        if distance(bomb.x, bomb.y, stone.x, stone.y) < BOMB_STRUCTURE_RADIUS:
            stone.hp -= BOMB_EVERSTONE_DAMAGE
            result.everstones_hit += 1

    logger.debug(
        f"Bomb at ({bomb.x:.0f}, {bomb.y:.0f}) hit {result.monsters_hit} monsters, "
        f"destroyed {len(result.blocks_destroyed)} blocks"
    )
    return result


def update_bombs(world: World) -> List[BlastResult]:
    """Count down every fuse; detonated bombs leave the world."""
    blasts: List[BlastResult] = []
    for bomb in list(reversed(world.bombs)):
        bomb.armed -= 1
        if bomb.armed <= 0:
            blasts.append(detonate(world, bomb))
            world.bombs.remove(bomb)
    return blasts


def update_defenses(world: World, dt: float) -> List[BlastResult]:
    """Turrets, then traps, then bombs."""
    for turret in world.turrets:
        update_turret(world, turret, dt)
    for trap in world.traps:
        update_trap(world, trap)
    return update_bombs(world)
