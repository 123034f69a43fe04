"""
Fixed-timestep frame driver.
NO UI DEPENDENCIES.

The renderer reports how much wall-clock time each frame took; the clock
turns that into a whole number of fixed simulation ticks.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from .constants import TICK_RATE, MAX_CATCHUP_TICKS, PRUNE_INTERVAL
from .game import Game, GameEvent

logger = logging.getLogger(__name__)


@dataclass
class FrameStats:
    """What one frame advanced."""
    ticks_run: int
    ticks_dropped: int
    events: List[GameEvent] = field(default_factory=list)


class FrameClock:
    """
    Accumulates frame time and runs fixed ticks against a Game.

    At most max_catchup_ticks run per frame. Any backlog beyond that is
    discarded so a slow frame cannot snowball into ever larger bursts.
    """

    def __init__(
        self,
        game: Game,
        tick_rate: int = TICK_RATE,
        max_catchup_ticks: int = MAX_CATCHUP_TICKS,
        prune_interval: float = PRUNE_INTERVAL,
    ) -> None:
        if tick_rate <= 0:
            raise ValueError("tick_rate must be positive")
        if max_catchup_ticks < 1:
            raise ValueError("max_catchup_ticks must be at least 1")

        self.game = game
        self.tick_seconds = 1.0 / tick_rate
        self.max_catchup_ticks = max_catchup_ticks
        self.prune_interval = prune_interval

        self._accumulator = 0.0
        self._prune_timer = prune_interval
        self.total_ticks = 0
        self.total_dropped = 0

    @property
    def accumulator(self) -> float:
        return self._accumulator

    def advance(self, frame_seconds: float) -> FrameStats:
        """
        Feed one frame worth of wall-clock time.
        Returns the ticks run, the ticks dropped and every event raised.
        """
        frame_seconds = max(0.0, frame_seconds)
        self._housekeeping(frame_seconds)

        if not self.game.running:
            # Paused time does not pile up
            self._accumulator = 0.0
            return FrameStats(0, 0, self.game.drain_events())

        self._accumulator += frame_seconds
        events: List[GameEvent] = []
        ticks = 0
        while self._accumulator >= self.tick_seconds and ticks < self.max_catchup_ticks:
            events.extend(self.game.step())
            self._accumulator -= self.tick_seconds
            ticks += 1
            if not self.game.running:
                self._accumulator = 0.0
                break

        dropped = int(self._accumulator // self.tick_seconds)
        if dropped > 0:
            self._accumulator -= dropped * self.tick_seconds
            self.total_dropped += dropped
            logger.warning(
                f"Frame took {frame_seconds * 1000:.1f}ms, dropped {dropped} ticks "
                f"(cap: {self.max_catchup_ticks})"
            )

        self.total_ticks += ticks
        events.extend(self.game.drain_events())
        return FrameStats(ticks, dropped, events)

    def _housekeeping(self, frame_seconds: float) -> None:
        self._prune_timer -= frame_seconds
        if self._prune_timer <= 0:
            self._prune_timer = self.prune_interval
            removed = self.game.world.prune_degenerate_blocks()
            if removed:
                logger.debug(f"Pruned {removed} degenerate blocks")
