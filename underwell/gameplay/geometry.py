"""
Small geometry helpers shared by the simulation.
NO UI DEPENDENCIES.
"""
import math


def distance(ax: float, ay: float, bx: float, by: float) -> float:
    """Euclidean distance between two points."""
    return math.hypot(ax - bx, ay - by)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def sign(value: float) -> int:
    """Return -1, 0 or 1 (0 for a zero velocity)."""
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def unit_vector(dx: float, dy: float) -> tuple[float, float]:
    """
    Normalize (dx, dy).
    A zero vector is divided by 1, so it stays zero instead of blowing up.
    """
    length = math.hypot(dx, dy) or 1.0
    return dx / length, dy / length
