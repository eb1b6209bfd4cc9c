"""Mini-games built on the minigames core. See games/registry.py."""
