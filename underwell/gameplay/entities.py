"""
World entities: blocks, defenses, monsters, resonators and everstones.
NO UI DEPENDENCIES.

Entities are plain mutable records. Behaviour lives in the component
modules (production, monsters, defenses) which operate on a World.
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict

from .constants import (
    INDESTRUCTIBLE, MONSTER_HP, RESONATOR_HP, PRODUCE_COOLDOWN,
    EVERSTONE_RADIUS, EVERSTONE_HP, TURRET_RATE, TRAP_RADIUS, BOMB_FUSE_TICKS,
)


@dataclass(eq=False)
class Block:
    """
    A rectangular terrain block.

    Health 999 marks ground and walls, which nothing can damage.
    """
    x: float
    y: float
    w: float
    h: float
    health: float = 100
    is_repair_station: bool = False

    @property
    def indestructible(self) -> bool:
        return self.health == INDESTRUCTIBLE

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)

    def contains(self, px: float, py: float) -> bool:
        """Edges count as inside."""
        return self.x <= px <= self.x + self.w and self.y <= py <= self.y + self.h

    def take_damage(self, amount: float) -> bool:
        """
        Apply damage unless indestructible.
        Returns True if the block is now destroyed.
        """
        if self.indestructible:
            return False
        self.health -= amount
        return self.health <= 0


@dataclass(eq=False)
class Turret:
    """Laser turret. rate is shots per second, cool counts down in seconds."""
    x: float
    y: float
    rate: float = TURRET_RATE
    cool: float = 0.0


@dataclass(eq=False)
class Trap:
    """Shock trap. cooldown counts down in whole ticks."""
    x: float
    y: float
    radius: float = TRAP_RADIUS
    cooldown: int = 0


@dataclass(eq=False)
class Bomb:
    x: float
    y: float
    armed: int = BOMB_FUSE_TICKS  # ticks until detonation


@dataclass(eq=False)
class Conveyor:
    """Decorative belt. Has no effect on the simulation."""
    x: float
    y: float
    w: float
    h: float
    direction: int = 1


@dataclass(eq=False)
class Monster:
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    hp: float = MONSTER_HP
    stunned: int = 0    # ticks of stun remaining
    progress: int = 0   # dig progress in ticks


@dataclass(eq=False)
class Resonator:
    """
    Stationary everstone generator.
    Dead resonators stay in the world as markers.
    """
    id: int
    x: float
    y: float
    hp: float = RESONATOR_HP
    alive: bool = True
    produce_cooldown: float = PRODUCE_COOLDOWN
    produce_timer: float = PRODUCE_COOLDOWN
    produced_count: int = 0

    def take_damage(self, amount: float) -> None:
        self.hp -= amount
        if self.hp <= 0:
            self.hp = 0
            self.alive = False


@dataclass(eq=False)
class Everstone:
    x: float
    y: float
    resonator_id: int
    radius: float = EVERSTONE_RADIUS
    hp: float = EVERSTONE_HP


def to_dict(entity: Any) -> Dict[str, Any]:
    """Plain-dict view of an entity for the UI."""
    return asdict(entity)
