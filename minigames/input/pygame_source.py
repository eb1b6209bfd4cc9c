"""
Pygame Input Source - keyboard and mouse input for development/testing.

Key bindings:
    Left / A        move -1 (previous lane, rotate counter-clockwise)
    Right / D       move +1
    Space / Up / W  action (jump, flip direction)
    Left click      action
    Mouse motion    move to pointer position (x, y)
    P / Escape      pause / resume
    R / Enter       restart after game over
    Q / window X    quit
"""
import time
from typing import Dict, List, Optional

import pygame

from minigames.commands import Command, CommandType

_KEY_COMMANDS: Dict[int, Command] = {
    pygame.K_LEFT: Command(CommandType.MOVE, -1),
    pygame.K_a: Command(CommandType.MOVE, -1),
    pygame.K_RIGHT: Command(CommandType.MOVE, 1),
    pygame.K_d: Command(CommandType.MOVE, 1),
    pygame.K_SPACE: Command(CommandType.ACTION),
    pygame.K_UP: Command(CommandType.ACTION),
    pygame.K_w: Command(CommandType.ACTION),
    pygame.K_p: Command(CommandType.TOGGLE_PAUSE),
    pygame.K_ESCAPE: Command(CommandType.TOGGLE_PAUSE),
    pygame.K_r: Command(CommandType.RESTART),
    pygame.K_RETURN: Command(CommandType.RESTART),
    pygame.K_q: Command(CommandType.QUIT),
}


def translate_event(event: pygame.event.Event, timestamp: Optional[float] = None) -> Optional[Command]:
    """Map one pygame event to a Command, or None if it is not bound."""
    if event.type == pygame.QUIT:
        return Command.quit()
    if event.type == pygame.KEYDOWN:
        bound = _KEY_COMMANDS.get(event.key)
        if bound is None:
            return None
        return Command(bound.type, bound.value, timestamp)
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        return Command.action(timestamp)
    if event.type == pygame.MOUSEMOTION:
        pos_x, pos_y = event.pos
        return Command.move((float(pos_x), float(pos_y)), timestamp)
    return None


class PygameInputSource:
    """Collects Commands from the pygame event queue.

    Args:
        pointer: Translate mouse motion into MOVE commands (pointer-aimed games)
    """

    def __init__(self, pointer: bool = False):
        self.pointer = pointer
        self._command_queue: List[Command] = []

    def poll_commands(self) -> List[Command]:
        """Get commands collected since last poll."""
        commands = self._command_queue.copy()
        self._command_queue.clear()
        return commands

    def update(self) -> None:
        """Drain pygame events into the command queue."""
        now = time.monotonic()
        for event in pygame.event.get():
            if event.type == pygame.MOUSEMOTION and not self.pointer:
                continue
            command = translate_event(event, now)
            if command is not None:
                self._command_queue.append(command)

    def clear(self) -> None:
        """Clear the command queue."""
        self._command_queue.clear()
