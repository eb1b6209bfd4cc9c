"""
Game Registry - Auto-discovery of mini-games.

Games are discovered by scanning the games/ directory for subdirectories
containing a game_mode.py with a class inheriting from BaseGame. Metadata
and CLI arguments come from the game class itself.

Usage:
    from games.registry import GameRegistry

    registry = GameRegistry()
    available = registry.list_games()  # ['core_protector', 'gap_hop', ...]

    info = registry.get_game_info('core_protector')
    game = registry.create_game('core_protector', width=1920, height=1080)
"""
import importlib
import inspect
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

from minigames.base_game import BaseGame
from minigames.logging import get_logger

log = get_logger('registry')


@dataclass
class GameInfo:
    """Information about a registered game."""
    game_id: str
    name: str
    description: str
    version: str
    author: str
    module_path: str  # e.g., 'games.CoreProtector'

    # CLI arguments from the game class
    arguments: List[Dict[str, Any]] = field(default_factory=list)

    has_config: bool = False


class GameRegistry:
    """
    Registry for auto-discovering mini-games.

    Discovery works by:
    1. Looking for game_mode.py in each game directory
    2. Importing it as games.<Dir>.game_mode
    3. Finding the class that inherits from BaseGame
    4. Reading metadata from class attributes (GAME_ID, NAME, ...)
    """

    def __init__(self, games_dir: Optional[Path] = None):
        self._games_dir = games_dir or Path(__file__).parent
        self._games: Dict[str, GameInfo] = {}
        self._game_classes: Dict[str, Type[BaseGame]] = {}
        self._discover_games()

    def _discover_games(self) -> None:
        for game_dir in sorted(self._games_dir.iterdir()):
            if not game_dir.is_dir():
                continue
            if game_dir.name.startswith('_') or game_dir.name.startswith('.'):
                continue
            if (game_dir / 'game_mode.py').exists():
                self._register_game(game_dir)

    def _register_game(self, game_dir: Path) -> None:
        """Register the BaseGame subclass found in a game directory."""
        module_path = f"games.{game_dir.name}"
        try:
            game_class = self._find_game_class(module_path)
        except Exception as e:
            # Skip games that fail to load
            log.warning("Failed to load game from %s: %s", game_dir, e)
            return

        if game_class is None:
            log.warning("No BaseGame subclass in %s/game_mode.py", game_dir)
            return

        game_id = game_class.GAME_ID
        if game_id in self._games:
            log.warning("Duplicate game id '%s' in %s, skipping", game_id, game_dir)
            return

        self._game_classes[game_id] = game_class
        self._games[game_id] = GameInfo(
            game_id=game_id,
            name=game_class.NAME,
            description=game_class.DESCRIPTION,
            version=game_class.VERSION,
            author=game_class.AUTHOR,
            module_path=module_path,
            arguments=game_class.get_arguments(),
            has_config=(game_dir / 'config.py').exists(),
        )
        log.debug("Registered %s (%s)", game_id, module_path)

    @staticmethod
    def _find_game_class(module_path: str) -> Optional[Type[BaseGame]]:
        module = importlib.import_module(f"{module_path}.game_mode")
        for _, obj in inspect.getmembers(module, inspect.isclass):
            # Only classes defined in this module
            if obj.__module__ != module.__name__:
                continue
            if issubclass(obj, BaseGame) and obj is not BaseGame and not inspect.isabstract(obj):
                return obj
        return None

    def list_games(self) -> List[str]:
        """Get sorted list of available game ids."""
        return sorted(self._games)

    def get_game_info(self, game_id: str) -> Optional[GameInfo]:
        return self._games.get(game_id)

    def get_game_arguments(self, game_id: str) -> List[Dict[str, Any]]:
        info = self._games.get(game_id)
        return info.arguments if info else []

    def get_game_class(self, game_id: str) -> Optional[Type[BaseGame]]:
        return self._game_classes.get(game_id)

    def create_game(self, game_id: str, width: int, height: int, **kwargs) -> BaseGame:
        """Create a game instance.

        Raises:
            ValueError: If the game id is unknown
        """
        game_class = self._game_classes.get(game_id)
        if game_class is None:
            raise ValueError(f"Unknown game: {game_id}. Available: {', '.join(self.list_games())}")
        return game_class(width=width, height=height, **kwargs)


_registry: Optional[GameRegistry] = None


def get_registry() -> GameRegistry:
    """Shared registry instance."""
    global _registry
    if _registry is None:
        _registry = GameRegistry()
    return _registry
