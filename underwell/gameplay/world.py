"""
World state store - owns every entity collection and the scalar game state.
NO UI DEPENDENCIES.
"""
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .constants import INITIAL_SPAWN_DELAY, DEGENERATE_BLOCK_SIZE
from .entities import (
    Block, Turret, Trap, Bomb, Conveyor, Monster, Resonator, Everstone,
)


@dataclass
class World:
    """
    All mutable simulation state.

    Components receive the world explicitly and re-query it every tick;
    nothing holds on to entity references between ticks.
    """
    width: float
    height: float
    rng: random.Random = field(default_factory=random.Random)

    blocks: List[Block] = field(default_factory=list)
    turrets: List[Turret] = field(default_factory=list)
    traps: List[Trap] = field(default_factory=list)
    bombs: List[Bomb] = field(default_factory=list)
    conveyors: List[Conveyor] = field(default_factory=list)
    monsters: List[Monster] = field(default_factory=list)
    resonators: List[Resonator] = field(default_factory=list)
    everstones: List[Everstone] = field(default_factory=list)

    time: float = 0.0
    running: bool = False
    production_started_at: Optional[float] = None
    high_score: float = 0.0
    spawn_timer: float = INITIAL_SPAWN_DELAY

    @property
    def center(self) -> tuple[float, float]:
        return (self.width / 2, self.height / 2)

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def block_at(self, x: float, y: float) -> Optional[Block]:
        """Topmost block containing the point. Later blocks occlude earlier ones."""
        for block in reversed(self.blocks):
            if block.contains(x, y):
                return block
        return None

    def remove_block(self, block: Block) -> None:
        if block in self.blocks:
            self.blocks.remove(block)

    def live_everstone_index(self) -> Dict[int, Everstone]:
        """resonator id -> its live everstone."""
        index: Dict[int, Everstone] = {}
        for stone in self.everstones:
            if stone.hp > 0:
                index.setdefault(stone.resonator_id, stone)
        return index

    def live_everstone_for(self, resonator_id: int) -> Optional[Everstone]:
        return self.live_everstone_index().get(resonator_id)

    def alive_resonators(self) -> List[Resonator]:
        return [r for r in self.resonators if r.alive]

    def any_resonator_alive(self) -> bool:
        return any(r.alive for r in self.resonators)

    # =========================================================================
    # HOUSEKEEPING
    # =========================================================================

    def prune_dead_everstones(self) -> None:
        self.everstones = [s for s in self.everstones if s.hp > 0]

    def prune_degenerate_blocks(self) -> int:
        """Drop slivers too thin to matter. Returns how many were removed."""
        before = len(self.blocks)
        self.blocks = [
            b for b in self.blocks
            if b.w > DEGENERATE_BLOCK_SIZE and b.h > DEGENERATE_BLOCK_SIZE
        ]
        return before - len(self.blocks)

    def clear_structures(self) -> None:
        """
        Remove everything the player placed plus all monsters.
        Walls, resonators and everstones stay.
        """
        self.blocks = [b for b in self.blocks if b.indestructible]
        self.turrets = []
        self.traps = []
        self.bombs = []
        self.conveyors = []
        self.monsters = []
