"""Base class for all mini-games.

A game is a set of hooks plugged into the GameLoopController: it builds
the player, defines the difficulty ramp, spawns entities and applies its
own player physics. The loop owns everything else (timing, state,
collisions, scoring, culling).

Game metadata (GAME_ID, NAME, ...) and CLI arguments (ARGUMENTS) are
declared as class attributes so the registry and dev_game.py can list
and configure games without instantiating them.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from minigames import config
from minigames.difficulty import DifficultyLevel, DifficultyRamp
from minigames.entities import Entity, Player, SpawnResult
from minigames.logging import get_logger
from minigames.world import World
from models import Rectangle

log = get_logger('base_game')


class BaseGame(ABC):
    """Abstract base class for all mini-games.

    Class Attributes (metadata):
        GAME_ID: Registry id, also the high-score key source
        NAME: Display name for the game
        DESCRIPTION: Short description of gameplay
        VERSION: Semantic version string
        AUTHOR: Author/team name
        ARGUMENTS: List of CLI argument definitions for argparse

    Class Attributes (session):
        INITIAL_LIVES: Lives per round
        INTRO_DELAY: Seconds in INTRO before play starts; None starts in PLAYING
        SINGLE_HIT: At most one hazard hit per tick
        CULL_MARGIN: Pixels beyond the playfield before entities are removed
        HIT_FLASH_DURATION: Seconds of hit feedback
        INVINCIBLE_DURATION: Seconds hazards are ignored after a hit
        POINTER_INPUT: MOVE commands carry pointer positions (x, y)

    Subclasses must implement:
        - create_player() -> Player
        - difficulty_ramp() -> DifficultyRamp
        - spawn(world, level) -> Entity, list of entities or None

    Optional overrides:
        - update_player(world, dt): Player physics, runs before entities move
        - on_move(world, value) / on_action(world): Gameplay input
        - has_passed(entity, player) -> bool: Pass-scoring rule
        - check_failed(world) -> bool: Extra game-over condition
        - on_round_start(world): Called when a round begins
    """

    # =========================================================================
    # Game Metadata (override in subclasses)
    # =========================================================================

    GAME_ID: str = "unnamed"
    NAME: str = "Unnamed Game"
    DESCRIPTION: str = "No description"
    VERSION: str = "1.0.0"
    AUTHOR: str = "Unknown"

    # CLI argument definitions for argparse
    # Each entry is a dict with keys: name, type, default, help, choices (optional), action (optional)
    ARGUMENTS: List[Dict[str, Any]] = []

    # =========================================================================
    # Session tuning (override in subclasses)
    # =========================================================================

    INITIAL_LIVES: int = config.DEFAULT_INITIAL_LIVES
    INTRO_DELAY: Optional[float] = config.DEFAULT_INTRO_DELAY
    SINGLE_HIT: bool = False
    CULL_MARGIN: float = config.CULL_MARGIN
    HIT_FLASH_DURATION: float = config.HIT_FLASH_DURATION
    INVINCIBLE_DURATION: float = config.INVINCIBLE_DURATION
    POINTER_INPUT: bool = False

    _BASE_ARGUMENTS: List[Dict[str, Any]] = [
        {
            'name': '--lives',
            'type': int,
            'default': None,
            'help': 'Lives per round (default: game setting)'
        },
        {
            'name': '--skip-intro',
            'action': 'store_true',
            'default': False,
            'help': 'Start playing immediately'
        },
    ]

    @classmethod
    def get_arguments(cls) -> List[Dict[str, Any]]:
        """Get all CLI arguments for this game (game-specific + base).

        Game-specific arguments come first; duplicates by name are removed
        (game-specific takes precedence).
        """
        seen_names = set()
        result = []
        for arg in list(cls.ARGUMENTS) + cls._BASE_ARGUMENTS:
            name = arg.get('name', '')
            if name and name not in seen_names:
                seen_names.add(name)
                result.append(arg)
        return result

    def __init__(
        self,
        width: int = config.SCREEN_WIDTH,
        height: int = config.SCREEN_HEIGHT,
        lives: Optional[int] = None,
        skip_intro: bool = False,
        **kwargs,
    ):
        self.width = width
        self.height = height
        if lives is not None:
            self.INITIAL_LIVES = lives
        if skip_intro:
            self.INTRO_DELAY = None
        if kwargs:
            log.debug("%s ignoring unknown options: %s", self.GAME_ID, sorted(kwargs))

    @property
    def bounds(self) -> Rectangle:
        """Playfield in screen pixels."""
        return Rectangle(x=0.0, y=0.0, width=float(self.width), height=float(self.height))

    # =========================================================================
    # Required hooks
    # =========================================================================

    @abstractmethod
    def create_player(self) -> Player:
        """Build the avatar for a new round."""

    @abstractmethod
    def difficulty_ramp(self) -> DifficultyRamp:
        """Speed and spawn interval over elapsed play time."""

    @abstractmethod
    def spawn(self, world: World, level: DifficultyLevel) -> SpawnResult:
        """Create the next entity (or entities). Use ``world.rng`` for randomness."""

    # =========================================================================
    # Optional hooks
    # =========================================================================

    def update_player(self, world: World, dt: float) -> None:
        """Advance player physics by ``dt`` seconds."""

    def on_move(self, world: World, value: Any) -> None:
        """Handle a MOVE command while playing."""

    def on_action(self, world: World) -> None:
        """Handle an ACTION command while playing."""

    def has_passed(self, entity: Entity, player: Player) -> bool:
        """True once ``entity`` has got past the player and should score."""
        return False

    def check_failed(self, world: World) -> bool:
        """Game-specific end condition besides running out of lives."""
        return False

    def on_round_start(self, world: World) -> None:
        """Set up per-round state (pre-placed entities, counters)."""
