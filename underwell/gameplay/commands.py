"""
Player commands - one dataclass per action, plus the toolbar mapping.
NO UI DEPENDENCIES.

Commands are applied between ticks by Game.dispatch(). Placement is never
rejected: overlapping structures are allowed and the newest block wins
hit tests.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Union

from .constants import (
    BUILDER_SIZE, BUILDER_HEALTH, BARRIER_SIZE, BARRIER_HEALTH, CONVEYOR_SIZE,
    REPAIR_RADIUS, BLOCK_REPAIR_AMOUNT, RESONATOR_REPAIR_AMOUNT,
)


@dataclass(frozen=True)
class PlaceBlock:
    x: float
    y: float
    w: float
    h: float
    health: float = 100


@dataclass(frozen=True)
class PlaceTurret:
    x: float
    y: float


@dataclass(frozen=True)
class PlaceTrap:
    x: float
    y: float


@dataclass(frozen=True)
class PlaceBomb:
    x: float
    y: float


@dataclass(frozen=True)
class PlaceConveyor:
    x: float
    y: float
    w: float
    h: float
    direction: int = 1


@dataclass(frozen=True)
class PlaceRepairStation:
    """A small healable block centered on (x, y)."""
    x: float
    y: float


@dataclass(frozen=True)
class RepairBlock:
    x: float
    y: float
    radius: float = REPAIR_RADIUS
    amount: float = BLOCK_REPAIR_AMOUNT


@dataclass(frozen=True)
class RepairResonator:
    x: float
    y: float
    radius: float = REPAIR_RADIUS
    amount: float = RESONATOR_REPAIR_AMOUNT


@dataclass(frozen=True)
class MoveBlock:
    """Drag the topmost block under (x, y) so that point lands on (to_x, to_y)."""
    x: float
    y: float
    to_x: float
    to_y: float


@dataclass(frozen=True)
class ClearStructures:
    pass


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class TogglePause:
    pass


@dataclass(frozen=True)
class Reset:
    pass


Command = Union[
    PlaceBlock, PlaceTurret, PlaceTrap, PlaceBomb, PlaceConveyor,
    PlaceRepairStation, RepairBlock, RepairResonator, MoveBlock,
    ClearStructures, Start, TogglePause, Reset,
]


@dataclass
class CommandResult:
    """Outcome of a dispatched command."""
    ok: bool
    detail: str = ""
    target: Optional[object] = None


# =============================================================================
# TOOLBAR
# =============================================================================

class Tool(Enum):
    """Toolbar tools."""
    SELECT = auto()
    BUILDER = auto()
    BARRIER = auto()
    CONVEYOR = auto()
    LASER = auto()
    SHOCK = auto()
    BOMB = auto()
    WELDER = auto()


def commands_for_tool(tool: Tool, x: float, y: float, dropped: bool = False) -> List[Command]:
    """
    Translate a tool use at (x, y) into commands.

    dropped is True when the tool was dragged from the toolbar and released
    over the pit. The welder then builds a repair station; tapped, it
    repairs whatever is nearby.
    """
    if tool == Tool.BUILDER:
        w, h = BUILDER_SIZE
        return [PlaceBlock(x - w / 2, y - h / 2, w, h, BUILDER_HEALTH)]
    if tool == Tool.BARRIER:
        w, h = BARRIER_SIZE
        return [PlaceBlock(x - w / 2, y - h / 2, w, h, BARRIER_HEALTH)]
    if tool == Tool.CONVEYOR:
        w, h = CONVEYOR_SIZE
        return [PlaceConveyor(x - w / 2, y - h / 2, w, h, 1)]
    if tool == Tool.LASER:
        return [PlaceTurret(x, y)]
    if tool == Tool.SHOCK:
        return [PlaceTrap(x, y)]
    if tool == Tool.BOMB:
        return [PlaceBomb(x, y)]
    if tool == Tool.WELDER:
        if dropped:
            return [PlaceRepairStation(x, y)]
        return [RepairBlock(x, y), RepairResonator(x, y)]
    # SELECT only picks blocks up; dragging is a MoveBlock
    return []
