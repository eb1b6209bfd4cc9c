"""
High-score persistence.

Scores live in a flat key/value store, one key per game. The key is
derived from the game id only (``core_protector`` ->
``coreProtectorHighScore``) so every code path reads and writes the same
entry.

Stores raise StorageError when the backing storage is unavailable; the
ScoreKeeper catches it and keeps playing.
"""
import json
import os
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from minigames.errors import StorageError
from minigames.logging import get_logger

log = get_logger('storage')


def high_score_key(game_id: str) -> str:
    """Canonical storage key for a game's high score.

    Examples:
        >>> high_score_key('core_protector')
        'coreProtectorHighScore'
        >>> high_score_key('gap-hop')
        'gapHopHighScore'
    """
    parts = [p for p in game_id.replace('-', '_').split('_') if p]
    if not parts:
        raise ValueError(f"Invalid game id: {game_id!r}")
    camel = parts[0].lower() + ''.join(p.capitalize() for p in parts[1:])
    return f"{camel}HighScore"


def _parse_score(raw: Optional[str]) -> Optional[int]:
    """Stored values are strings; anything non-numeric reads as absent."""
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        log.warning("Ignoring non-numeric stored score %r", raw)
        return None


class HighScoreStore(Protocol):
    """Key/value store for high scores."""

    def get(self, key: str) -> Optional[int]:
        ...

    def set(self, key: str, value: int) -> None:
        ...


class MemoryStore:
    """In-process store. Values are kept as strings like browser storage."""

    def __init__(self, initial: Optional[Dict[str, Union[int, str]]] = None):
        self._data: Dict[str, str] = {k: str(v) for k, v in (initial or {}).items()}

    def get(self, key: str) -> Optional[int]:
        return _parse_score(self._data.get(key))

    def set(self, key: str, value: int) -> None:
        self._data[key] = str(int(value))

    def raw(self, key: str) -> Optional[str]:
        return self._data.get(key)


class JsonFileStore:
    """Store backed by a single JSON object on disk.

    The file is read on every ``get`` so several sessions (or processes)
    see each other's writes. Writes go to a temporary file first and
    replace the existing file.

    Args:
        path: JSON file location; parent directories are created on write
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read high scores from {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"High score file {self.path} is not a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> Optional[int]:
        return _parse_score(self._load().get(key))

    def set(self, key: str, value: int) -> None:
        data = self._load()
        data[key] = str(int(value))
        tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w') as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Cannot write high scores to {self.path}: {e}") from e
        log.debug("Saved %s=%s to %s", key, value, self.path)
