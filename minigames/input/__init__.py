"""Input sources translating device events into loop commands."""
from minigames.input.pygame_source import PygameInputSource, translate_event

__all__ = ['PygameInputSource', 'translate_event']
