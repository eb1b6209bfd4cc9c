"""
Mini-game core.

Timestep loop, entity lifecycle, collision detection, difficulty ramps,
score/lives bookkeeping and the session state machine shared by the
arcade mini-games under games/.
"""
from minigames.base_game import BaseGame
from minigames.commands import Command, CommandType
from minigames.errors import GameInitError, IllegalTransitionError, MiniGameError, StorageError
from minigames.game_state import GameState
from minigames.loop import GameLoopController
from minigames.world import World, WorldSnapshot

__all__ = [
    'BaseGame',
    'Command',
    'CommandType',
    'GameInitError',
    'GameLoopController',
    'GameState',
    'IllegalTransitionError',
    'MiniGameError',
    'StorageError',
    'World',
    'WorldSnapshot',
]
