"""Tests for pygame event translation (no display required)."""
from unittest.mock import patch

import pygame
import pytest

from minigames.commands import CommandType
from minigames.input import PygameInputSource, translate_event


def key_event(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


class TestTranslateEvent:
    """Tests for translate_event."""

    @pytest.mark.parametrize("key,command_type,value", [
        (pygame.K_LEFT, CommandType.MOVE, -1),
        (pygame.K_a, CommandType.MOVE, -1),
        (pygame.K_RIGHT, CommandType.MOVE, 1),
        (pygame.K_SPACE, CommandType.ACTION, None),
        (pygame.K_p, CommandType.TOGGLE_PAUSE, None),
        (pygame.K_ESCAPE, CommandType.TOGGLE_PAUSE, None),
        (pygame.K_r, CommandType.RESTART, None),
        (pygame.K_q, CommandType.QUIT, None),
    ])
    def test_key_bindings(self, key, command_type, value):
        command = translate_event(key_event(key), timestamp=3.5)
        assert command.type is command_type
        assert command.value == value
        assert command.timestamp == 3.5

    def test_unbound_key(self):
        assert translate_event(key_event(pygame.K_F12)) is None

    def test_window_close_quits(self):
        command = translate_event(pygame.event.Event(pygame.QUIT))
        assert command.type is CommandType.QUIT

    def test_left_click_is_action(self):
        event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 20))
        assert translate_event(event).type is CommandType.ACTION

    def test_right_click_ignored(self):
        event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(10, 20))
        assert translate_event(event) is None

    def test_mouse_motion_is_pointer_move(self):
        event = pygame.event.Event(pygame.MOUSEMOTION, pos=(120, 80), rel=(1, 1), buttons=(0, 0, 0))
        command = translate_event(event)
        assert command.type is CommandType.MOVE
        assert command.value == (120.0, 80.0)


class TestPygameInputSource:
    """Tests for event polling."""

    @pytest.fixture
    def events(self):
        return [
            key_event(pygame.K_SPACE),
            pygame.event.Event(pygame.MOUSEMOTION, pos=(5, 5), rel=(1, 1), buttons=(0, 0, 0)),
            key_event(pygame.K_F12),
        ]

    def test_motion_dropped_without_pointer(self, events):
        source = PygameInputSource()
        with patch('pygame.event.get', return_value=events):
            source.update()
        assert [c.type for c in source.poll_commands()] == [CommandType.ACTION]

    def test_motion_kept_with_pointer(self, events):
        source = PygameInputSource(pointer=True)
        with patch('pygame.event.get', return_value=events):
            source.update()
        assert [c.type for c in source.poll_commands()] == [CommandType.ACTION, CommandType.MOVE]

    def test_poll_drains_queue(self, events):
        source = PygameInputSource()
        with patch('pygame.event.get', return_value=events):
            source.update()
        source.poll_commands()
        assert source.poll_commands() == []

    def test_clear(self, events):
        source = PygameInputSource(pointer=True)
        with patch('pygame.event.get', return_value=events):
            source.update()
        source.clear()
        assert source.poll_commands() == []
