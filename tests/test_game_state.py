"""Tests for the session state machine."""
from unittest.mock import Mock

import pytest

from minigames.errors import IllegalTransitionError
from minigames.game_state import TRANSITIONS, GameState, GameStateMachine
from minigames.timers import TimerRegistry


@pytest.fixture
def timers():
    return TimerRegistry()


@pytest.fixture
def machine(timers):
    return GameStateMachine(timers)


def _walk(machine, *states):
    for state in states:
        machine.transition(state)


class TestTransitionTable:
    """Tests for allowed and forbidden transitions."""

    def test_every_state_listed(self):
        assert set(TRANSITIONS) == set(GameState)

    def test_error_is_terminal(self):
        assert TRANSITIONS[GameState.ERROR] == frozenset()

    def test_every_state_can_fail(self):
        for state in GameState:
            if state is not GameState.ERROR:
                assert GameState.ERROR in TRANSITIONS[state]

    def test_starts_in_intro(self, machine):
        assert machine.state is GameState.INTRO
        assert not machine.is_playing

    def test_full_round(self, machine):
        _walk(machine, GameState.PLAYING, GameState.PAUSED, GameState.PLAYING,
              GameState.GAME_OVER, GameState.PLAYING)
        assert machine.is_playing

    def test_restart_through_intro(self, machine):
        _walk(machine, GameState.PLAYING, GameState.GAME_OVER, GameState.INTRO)
        assert machine.state is GameState.INTRO

    @pytest.mark.parametrize("path,target", [
        ((), GameState.PAUSED),
        ((), GameState.GAME_OVER),
        ((GameState.PLAYING,), GameState.INTRO),
        ((GameState.PLAYING, GameState.PAUSED), GameState.GAME_OVER),
        ((GameState.PLAYING, GameState.GAME_OVER), GameState.PAUSED),
    ])
    def test_illegal_transitions(self, machine, path, target):
        _walk(machine, *path)
        before = machine.state
        with pytest.raises(IllegalTransitionError) as excinfo:
            machine.transition(target)
        assert machine.state is before
        assert excinfo.value.source is before
        assert excinfo.value.target is target

    def test_no_self_transition(self, machine):
        machine.transition(GameState.PLAYING)
        with pytest.raises(IllegalTransitionError):
            machine.transition(GameState.PLAYING)


class TestTimersAndListeners:
    """Tests for timer sweeping and transition listeners."""

    def test_exit_cancels_timers(self, machine, timers):
        fired = Mock()
        handle = timers.schedule(1.0, fired, now=0.0)

        machine.transition(GameState.PLAYING)
        timers.run_due(5.0)

        assert handle.cancelled
        fired.assert_not_called()

    def test_timers_cancelled_before_listeners(self, machine, timers):
        """A listener may schedule timers for the new state."""
        fired = Mock()

        def listener(old, new):
            timers.schedule(0.5, fired, now=0.0)

        machine.on_transition(listener)
        machine.transition(GameState.PLAYING)
        timers.run_due(1.0)

        fired.assert_called_once()

    def test_listener_receives_old_and_new(self, machine):
        listener = Mock()
        machine.on_transition(listener)
        _walk(machine, GameState.PLAYING, GameState.PAUSED)
        assert [c.args for c in listener.call_args_list] == [
            (GameState.INTRO, GameState.PLAYING),
            (GameState.PLAYING, GameState.PAUSED),
        ]

    def test_rejected_transition_does_not_notify(self, machine):
        listener = Mock()
        machine.on_transition(listener)
        with pytest.raises(IllegalTransitionError):
            machine.transition(GameState.PAUSED)
        listener.assert_not_called()


class TestFail:
    """Tests for entering ERROR."""

    def test_fail_from_any_state(self, machine):
        _walk(machine, GameState.PLAYING, GameState.PAUSED)
        error = RuntimeError("boom")
        machine.fail(error)
        assert machine.is_failed
        assert machine.error is error

    def test_fail_is_idempotent(self, machine):
        listener = Mock()
        machine.on_transition(listener)
        first = RuntimeError("first")
        machine.fail(first)
        machine.fail(RuntimeError("second"))
        listener.assert_called_once_with(GameState.INTRO, GameState.ERROR)
        assert machine.error is first

    def test_nothing_leaves_error(self, machine):
        machine.fail(RuntimeError("boom"))
        for state in GameState:
            with pytest.raises(IllegalTransitionError):
                machine.transition(state)

    def test_fail_cancels_timers(self, machine, timers):
        handle = timers.schedule(1.0, Mock(), now=0.0)
        machine.fail()
        assert handle.cancelled
        assert len(timers) == 0

    def test_listener_error_is_swallowed_on_fail(self, machine):
        machine.on_transition(Mock(side_effect=ValueError("listener broke")))
        machine.fail(RuntimeError("boom"))
        assert machine.state is GameState.ERROR
