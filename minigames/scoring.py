"""
Score and lives bookkeeping for one session.

The keeper only ever adds to the score, takes lives one at a time, and
reports the round's end exactly once through ``on_depleted``. The
persisted high score is compared and written in :meth:`finalize_round`.
"""
from typing import Callable, Optional

from minigames import config
from minigames.errors import StorageError
from minigames.logging import get_logger
from minigames.storage import HighScoreStore, high_score_key

log = get_logger('scoring')


class ScoreKeeper:
    """Tracks score, lives and the high score of one game.

    Args:
        game_id: Game whose high-score key is used
        store: Persistent high-score store
        initial_lives: Lives at round start (>= 1)
        on_depleted: Called once when the last life is lost
    """

    def __init__(
        self,
        game_id: str,
        store: HighScoreStore,
        initial_lives: int = config.DEFAULT_INITIAL_LIVES,
        on_depleted: Optional[Callable[[], None]] = None,
    ):
        if initial_lives < 1:
            raise ValueError(f"initial_lives must be at least 1, got {initial_lives}")
        self.game_id = game_id
        self.key = high_score_key(game_id)
        self.store = store
        self.initial_lives = initial_lives
        self.on_depleted = on_depleted

        self._score = 0
        self._lives = initial_lives
        self._finalized = False
        self._high_score = self._read_high_score()

    @property
    def score(self) -> int:
        return self._score

    @property
    def lives(self) -> int:
        return self._lives

    @property
    def high_score(self) -> int:
        return self._high_score

    @property
    def is_depleted(self) -> bool:
        return self._lives == 0

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def _read_high_score(self) -> int:
        try:
            stored = self.store.get(self.key)
        except StorageError as e:
            log.warning("High score unavailable for %s: %s", self.game_id, e)
            return 0
        return stored if stored is not None else 0

    def add_points(self, points: int) -> int:
        """Add points to the round score. Returns the new score."""
        if points < 0:
            raise ValueError(f"Score never decreases, got {points}")
        self._score += points
        return self._score

    def reduce_life(self) -> bool:
        """Take one life.

        Returns:
            True if this call ended the round (lives went 1 -> 0)
        """
        if self._lives == 0:
            return False
        self._lives -= 1
        log.debug("Life lost, %d remaining", self._lives)
        if self._lives > 0:
            return False
        if self.on_depleted is not None:
            self.on_depleted()
        return True

    def finalize_round(self) -> int:
        """Persist the score if it beats the stored high score.

        Runs once per round; later calls return the cached high score.
        The stored value is re-read first so another session's record
        is never overwritten by a lower score.

        Returns:
            The high score after this round
        """
        if self._finalized:
            return self._high_score
        self._finalized = True

        stored = self._read_high_score()
        self._high_score = max(self._high_score, stored)
        if self._score > stored:
            self._high_score = self._score
            try:
                self.store.set(self.key, self._score)
            except StorageError as e:
                log.warning("Could not save high score for %s: %s", self.game_id, e)
            else:
                log.info("New high score for %s: %d", self.game_id, self._score)
        return self._high_score

    def reset(self) -> None:
        """Start a new round: score 0, full lives."""
        self._score = 0
        self._lives = self.initial_lives
        self._finalized = False
        self._high_score = self._read_high_score()
