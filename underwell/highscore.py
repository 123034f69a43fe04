"""
High score persistence - the best survival time across sessions.
"""

import json
import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Reads and writes the best survival time as a small JSON file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> float:
        """
        Best survival time in seconds.
        A missing file is 0.0; an unreadable one is logged and treated as 0.0.
        """
        if not self.path.exists():
            return 0.0
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return float(data["high_score"])
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring corrupt high score file {self.path}: {e}")
            return 0.0

    def save(self, value: float) -> None:
        """Write the score, rounded to a tenth of a second."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps({"high_score": round(value, 1)}),
            encoding="utf-8",
        )
        logger.info(f"New high score saved: {value:.1f}s")
