"""Exception types raised by the mini-game core."""


class MiniGameError(Exception):
    """Base class for all mini-game core errors."""


class IllegalTransitionError(MiniGameError):
    """Raised when a state change is not allowed from the current state."""

    def __init__(self, source, target):
        self.source = source
        self.target = target
        super().__init__(f"Illegal transition {source.name} -> {target.name}")


class GameInitError(MiniGameError):
    """Raised when a game cannot set up its session (player, ramp, playfield)."""


class StorageError(MiniGameError):
    """Raised by high-score stores when the backing storage is unavailable."""
