"""
Main Game class - orchestrates all gameplay systems.
NO UI DEPENDENCIES.

This is the central gameplay module. It can be fully tested
without any UI framework.
"""
import logging
import random
import time as wallclock
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .commands import (
    Command, CommandResult, PlaceBlock, PlaceTurret, PlaceTrap, PlaceBomb,
    PlaceConveyor, PlaceRepairStation, RepairBlock, RepairResonator, MoveBlock,
    ClearStructures, Start, TogglePause, Reset,
)
from .constants import (
    TICK_DT, BLOCK_MAX_HEALTH, RESONATOR_MAX_HP,
    REPAIR_STATION_SIZE, REPAIR_STATION_HEALTH,
)
from .defenses import update_defenses
from .entities import (
    Block, Bomb, Conveyor, Resonator, Trap, Turret, to_dict,
)
from .geometry import distance
from .level import init_level
from .monsters import integrate, next_spawn_interval, spawn_monster, update_monster
from .production import update_resonators
from .world import World

if TYPE_CHECKING:
    from ..highscore import HighScoreStore

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Current phase of the game."""
    READY = auto()      # Level laid out, not started yet
    RUNNING = auto()    # Ticks advance
    PAUSED = auto()     # Started, then paused
    OVER = auto()       # Every resonator and everstone is gone


@dataclass
class GameEvent:
    """An event that occurred during gameplay (for UI to react to)."""
    pass


@dataclass
class PhaseChangedEvent(GameEvent):
    old_phase: GamePhase
    new_phase: GamePhase


@dataclass
class MonsterSpawnedEvent(GameEvent):
    x: float
    y: float


@dataclass
class EverstoneProducedEvent(GameEvent):
    resonator_id: int
    produced_count: int


@dataclass
class BlockDestroyedEvent(GameEvent):
    x: float
    y: float
    w: float
    h: float


@dataclass
class BombDetonatedEvent(GameEvent):
    x: float
    y: float
    monsters_hit: int
    resonators_hit: int = 0
    everstones_hit: int = 0


@dataclass
class GameOverEvent(GameEvent):
    """Production failed. survival_time is in seconds."""
    survival_time: float
    high_score: float
    new_record: bool


class Game:
    """
    The main game class that orchestrates all gameplay.

    This class is COMPLETELY DECOUPLED from UI.
    It exposes state as plain data and accepts commands via dispatch().

    Usage:
        game = Game(960, 640)
        game.dispatch(PlaceTurret(400, 200))
        game.dispatch(Start())
        while game.running:
            events = game.step()
            # UI reads game state and renders
    """

    def __init__(
        self,
        width: float,
        height: float,
        rng: Optional[random.Random] = None,
        highscore_store: Optional["HighScoreStore"] = None,
    ):
        self.world = World(width=width, height=height, rng=rng or random.Random())
        self.highscore_store = highscore_store
        if highscore_store is not None:
            self.world.high_score = highscore_store.load()

        self.is_over = False
        self._events: List[GameEvent] = []

        init_level(self.world)

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def running(self) -> bool:
        return self.world.running

    @property
    def time(self) -> float:
        """Survival time in seconds."""
        return self.world.time

    @property
    def high_score(self) -> float:
        return self.world.high_score

    @property
    def phase(self) -> GamePhase:
        if self.world.running:
            return GamePhase.RUNNING
        if self.is_over:
            return GamePhase.OVER
        if self.world.production_started_at is None and self.world.time == 0:
            return GamePhase.READY
        return GamePhase.PAUSED

    def _set_running(self, running: bool, over: bool = False) -> None:
        old_phase = self.phase
        self.world.running = running
        self.is_over = over
        if self.phase != old_phase:
            self._events.append(PhaseChangedEvent(old_phase, self.phase))

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def dispatch(self, command: Command) -> CommandResult:
        """
        Apply a player command immediately.
        Raises TypeError for anything that is not a command.
        """
        world = self.world

        if isinstance(command, PlaceBlock):
            block = Block(command.x, command.y, command.w, command.h, command.health)
            world.blocks.append(block)
            return CommandResult(True, target=block)

        if isinstance(command, PlaceTurret):
            turret = Turret(command.x, command.y)
            world.turrets.append(turret)
            return CommandResult(True, target=turret)

        if isinstance(command, PlaceTrap):
            trap = Trap(command.x, command.y)
            world.traps.append(trap)
            return CommandResult(True, target=trap)

        if isinstance(command, PlaceBomb):
            bomb = Bomb(command.x, command.y)
            world.bombs.append(bomb)
            return CommandResult(True, target=bomb)

        if isinstance(command, PlaceConveyor):
            conveyor = Conveyor(command.x, command.y, command.w, command.h, command.direction)
            world.conveyors.append(conveyor)
            return CommandResult(True, target=conveyor)

        if isinstance(command, PlaceRepairStation):
            half = REPAIR_STATION_SIZE / 2
            station = Block(
                command.x - half, command.y - half,
                REPAIR_STATION_SIZE, REPAIR_STATION_SIZE,
                REPAIR_STATION_HEALTH, is_repair_station=True,
            )
            world.blocks.append(station)
            return CommandResult(True, target=station)

        if isinstance(command, RepairBlock):
            return self._repair_block(command)

        if isinstance(command, RepairResonator):
            return self._repair_resonator(command)

        if isinstance(command, MoveBlock):
            block = world.block_at(command.x, command.y)
            if block is None:
                return CommandResult(False, "no block at point")
            block.x += command.to_x - command.x
            block.y += command.to_y - command.y
            return CommandResult(True, target=block)

        if isinstance(command, ClearStructures):
            world.clear_structures()
            return CommandResult(True)

        if isinstance(command, Start):
            self.start()
            return CommandResult(True)

        if isinstance(command, TogglePause):
            self.toggle_pause()
            return CommandResult(True, "running" if world.running else "paused")

        if isinstance(command, Reset):
            self.reset()
            return CommandResult(True)

        raise TypeError(f"Unknown command: {command!r}")

    def _repair_block(self, command: RepairBlock) -> CommandResult:
        block = self.find_nearest_block(command.x, command.y, command.radius)
        if block is None or block.indestructible:
            return CommandResult(False, "no repairable block in range")
        block.health = min(block.health + command.amount, BLOCK_MAX_HEALTH)
        return CommandResult(True, target=block)

    def _repair_resonator(self, command: RepairResonator) -> CommandResult:
        resonator = self.find_nearest_resonator(command.x, command.y, command.radius)
        if resonator is None:
            return CommandResult(False, "no living resonator in range")
        resonator.hp = min(resonator.hp + command.amount, RESONATOR_MAX_HP)
        return CommandResult(True, target=resonator)

    def find_nearest_block(self, x: float, y: float, radius: float) -> Optional[Block]:
        """Block whose center is closest to (x, y), within radius."""
        best: Optional[Block] = None
        best_distance = radius
        for block in self.world.blocks:
            cx, cy = block.center
            d = distance(x, y, cx, cy)
            if d < best_distance:
                best_distance = d
                best = block
        return best

    def find_nearest_resonator(self, x: float, y: float, radius: float) -> Optional[Resonator]:
        best: Optional[Resonator] = None
        best_distance = radius
        for resonator in self.world.alive_resonators():
            d = distance(x, y, resonator.x, resonator.y)
            if d < best_distance:
                best_distance = d
                best = resonator
        return best

    def start(self, now: Optional[float] = None) -> None:
        """
        Start (or resume) the simulation. The production clock starts once.
        Starting after game over lays out a fresh level first.
        """
        if self.is_over:
            self.reset()
        self._set_running(True)
        if self.world.production_started_at is None:
            self.world.production_started_at = wallclock.time() if now is None else now
        logger.info("Simulation started")

    def toggle_pause(self) -> None:
        if self.is_over:
            self.start()
            return
        self._set_running(not self.world.running)
        logger.info("Simulation resumed" if self.world.running else "Simulation paused")

    def reset(self) -> None:
        """Rebuild the level. The high score is kept."""
        old_phase = self.phase
        init_level(self.world)
        self.is_over = False
        if self.phase != old_phase:
            self._events.append(PhaseChangedEvent(old_phase, self.phase))
        logger.info("Level reset")

    # =========================================================================
    # UPDATE LOOP
    # =========================================================================

    def step(self) -> List[GameEvent]:
        """
        Advance one fixed tick. Does nothing unless running.
        Returns the events queued since the last call.
        """
        if self.world.running:
            self._tick()
        return self.drain_events()

    def drain_events(self) -> List[GameEvent]:
        events = self._events
        self._events = []
        return events

    def _tick(self) -> None:
        world = self.world
        dt = TICK_DT

        # Spawning
        world.spawn_timer -= dt
        if world.spawn_timer <= 0:
            world.spawn_timer = next_spawn_interval(world)
            monster = spawn_monster(world)
            self._events.append(MonsterSpawnedEvent(monster.x, monster.y))
        world.time += dt

        # Production
        for stone in update_resonators(world, dt):
            owner = next(r for r in world.resonators if r.id == stone.resonator_id)
            self._events.append(EverstoneProducedEvent(owner.id, owner.produced_count))

        # Defenses
        for blast in update_defenses(world, dt):
            self._events.append(BombDetonatedEvent(
                blast.x, blast.y, blast.monsters_hit,
                blast.resonators_hit, blast.everstones_hit,
            ))
            for block in blast.blocks_destroyed:
                self._events.append(BlockDestroyedEvent(block.x, block.y, block.w, block.h))

        # Monsters, newest first so removal is safe
        for i in range(len(world.monsters) - 1, -1, -1):
            monster = world.monsters[i]
            if monster.hp <= 0:
                del world.monsters[i]
                continue
            dug = update_monster(world, monster)
            if dug is not None:
                self._events.append(BlockDestroyedEvent(dug.x, dug.y, dug.w, dug.h))
            integrate(world, monster)

        # Cleanup
        world.prune_dead_everstones()
        for resonator in world.resonators:
            if resonator.alive and resonator.hp <= 0:
                resonator.alive = False

        if not world.any_resonator_alive() and not world.everstones and world.running:
            self._game_over()

    def _game_over(self) -> None:
        world = self.world
        survived = world.time
        new_record = survived > world.high_score
        if new_record:
            world.high_score = survived

        self._set_running(False, over=True)
        self._events.append(GameOverEvent(survived, world.high_score, new_record))
        logger.info(
            f"Production failed after {survived:.1f}s (best {world.high_score:.1f}s)"
        )

        # The game is over even if the store cannot be written
        if new_record and self.highscore_store is not None:
            self.highscore_store.save(survived)

    # =========================================================================
    # STATE QUERIES (for UI to read)
    # =========================================================================

    def get_snapshot(self) -> Dict[str, Any]:
        """Every collection and the scalar state as plain data."""
        world = self.world
        return {
            "width": world.width,
            "height": world.height,
            "time": world.time,
            "running": world.running,
            "high_score": world.high_score,
            "phase": self.phase.name,
            "blocks": [to_dict(b) for b in world.blocks],
            "turrets": [to_dict(t) for t in world.turrets],
            "traps": [to_dict(t) for t in world.traps],
            "bombs": [to_dict(b) for b in world.bombs],
            "conveyors": [to_dict(c) for c in world.conveyors],
            "monsters": [to_dict(m) for m in world.monsters],
            "resonators": [to_dict(r) for r in world.resonators],
            "everstones": [to_dict(s) for s in world.everstones],
        }

    def get_resonator_timers(self) -> Dict[int, float]:
        """Seconds until each resonator's next production, never negative."""
        return {r.id: max(0.0, r.produce_timer) for r in self.world.resonators}

    def get_produced_total(self) -> int:
        return sum(r.produced_count for r in self.world.resonators)

    def get_everstone_health(self) -> int:
        """Total remaining everstone health, rounded for display."""
        return round(sum(s.hp for s in self.world.everstones if s.hp > 0))

    def get_production_elapsed(self, now: Optional[float] = None) -> Optional[float]:
        """Wall-clock seconds since production started, or None before Start."""
        started = self.world.production_started_at
        if started is None:
            return None
        current = wallclock.time() if now is None else now
        return max(0.0, current - started)

    # =========================================================================
    # CONVENIENCE METHODS FOR TESTING
    # =========================================================================

    def run_ticks(self, ticks: int) -> List[GameEvent]:
        """Run up to `ticks` ticks, stopping early if the game stops running."""
        all_events: List[GameEvent] = []
        for _ in range(ticks):
            if not self.world.running:
                break
            all_events.extend(self.step())
        return all_events

    def simulate(self, seconds: float) -> List[GameEvent]:
        """Simulate the game for a number of seconds of game time."""
        return self.run_ticks(round(seconds / TICK_DT))
