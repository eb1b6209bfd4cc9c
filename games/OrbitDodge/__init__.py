"""Orbit Dodge - circle the center and dodge incoming blocks."""
