"""
Input commands.

Devices (keyboard, mouse, touch, a detection backend) are translated into
:class:`Command` values at the edge; the loop controller never sees raw
events.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class CommandType(Enum):
    MOVE = "move"                  # value: direction (-1/+1), lane index or target position
    ACTION = "action"              # jump, flip, fire
    TOGGLE_PAUSE = "toggle_pause"
    QUIT = "quit"
    RESTART = "restart"


@dataclass(frozen=True)
class Command:
    type: CommandType
    value: Any = None
    timestamp: Optional[float] = None

    @classmethod
    def move(cls, value: Any, timestamp: Optional[float] = None) -> 'Command':
        return cls(CommandType.MOVE, value, timestamp)

    @classmethod
    def action(cls, timestamp: Optional[float] = None) -> 'Command':
        return cls(CommandType.ACTION, timestamp=timestamp)

    @classmethod
    def toggle_pause(cls, timestamp: Optional[float] = None) -> 'Command':
        return cls(CommandType.TOGGLE_PAUSE, timestamp=timestamp)

    @classmethod
    def quit(cls) -> 'Command':
        return cls(CommandType.QUIT)

    @classmethod
    def restart(cls, timestamp: Optional[float] = None) -> 'Command':
        return cls(CommandType.RESTART, timestamp=timestamp)
