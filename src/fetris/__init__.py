"""Fetris: a falling-block puzzle game built on an esper world and a blinker event bus."""

__version__ = "1.2.0"
