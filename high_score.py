import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_KEY = "highScore"


def _check(value: int) -> int:
    value = int(value)
    if value < 0:
        raise ValueError(f"high score must be non-negative, got {value}")
    return value


class MemoryHighScoreStore:
    def __init__(self, initial: int = 0):
        self._value = _check(initial)

    def get(self) -> int:
        return self._value

    def set(self, value: int) -> None:
        self._value = _check(value)


class JsonHighScoreStore:
    """High score kept under one key of a small JSON file."""

    def __init__(self, path, key: str = DEFAULT_KEY):
        self.path = Path(path)
        self.key = key

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("ignoring unreadable high score file %s: %r", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("ignoring high score file %s: expected an object", self.path)
            return {}
        return data

    def get(self) -> int:
        value = self._read().get(self.key, 0)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            logger.warning("ignoring invalid high score %r in %s", value, self.path)
            return 0
        return value

    def set(self, value: int) -> None:
        value = _check(value)
        data = self._read()
        data[self.key] = value
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(data, f)
            tmp_path.replace(self.path)
        except OSError:
            logger.error("could not write high score to %s", self.path)
            raise
