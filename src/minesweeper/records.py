"""
Best-time records.

Keeps the fastest winning time per difficulty, optionally persisted to a
JSON file. The engine never touches this store; ``attach`` wires it to an
engine's win notifications.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from .config import ConfigurationError, Difficulty
from .engine import GameEngine, Subscription
from .state import GameResult

logger = logging.getLogger(__name__)


class BestTimes:
    """
    Minimum elapsed seconds seen per difficulty.

    Attributes:
        path: JSON file backing the records, or None to keep them in memory.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else None
        self._times: Dict[Difficulty, float] = self._load()

    def _load(self) -> Dict[Difficulty, float]:
        if self.path is None or not self.path.exists():
            return {}
        with open(self.path) as f:
            raw = json.load(f)
        times = {}
        for name, seconds in raw.items():
            if not isinstance(seconds, (int, float)):
                continue
            try:
                difficulty = Difficulty.parse(name)
            except ConfigurationError:
                logger.warning(f"Skipping unknown difficulty {name!r} in {self.path}")
                continue
            times[difficulty] = float(seconds)
        return times

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(
                {difficulty.value: seconds for difficulty, seconds in self._times.items()},
                f,
                indent=2,
            )

    def record(self, difficulty: Union[Difficulty, str], elapsed_ms: int) -> bool:
        """
        Record a winning time.

        Args:
            difficulty: Difficulty of the won game.
            elapsed_ms: Time taken, in milliseconds.

        Returns:
            True if the time is a new best for that difficulty.
        """
        difficulty = Difficulty.parse(difficulty)
        seconds = elapsed_ms / 1000
        previous = self._times.get(difficulty)
        if previous is not None and seconds >= previous:
            return False
        self._times[difficulty] = seconds
        self._save()
        logger.info(f"New best time for {difficulty.value}: {seconds:.1f}s")
        return True

    def record_result(self, result: GameResult) -> bool:
        return self.record(result.difficulty, result.elapsed_ms)

    def best_time(self, difficulty: Union[Difficulty, str]) -> Optional[float]:
        """Best time in seconds, or None if no game was won yet."""
        return self._times.get(Difficulty.parse(difficulty))

    def all_times(self) -> Dict[Difficulty, Optional[float]]:
        """Best time for every difficulty, in declaration order."""
        return {difficulty: self._times.get(difficulty) for difficulty in Difficulty}

    def reset_all(self) -> None:
        """Forget every record."""
        self._times.clear()
        if self.path is not None and self.path.exists():
            self.path.unlink()

    def attach(self, engine: GameEngine) -> Subscription:
        """Record every game ``engine`` reports as won."""
        return engine.on_win(self.record_result)
