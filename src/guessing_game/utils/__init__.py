# src/guessing_game/utils/__init__.py
"""Utility subpackage for the guessing game.

Small helpers that keep the game engine free of side effects such as
logging configuration, YAML handling and RNG construction.
"""

from __future__ import annotations

from .logging import configure_from_io, configure_logging, parse_level
from .random import DEFAULT_HIGH, DEFAULT_LOW, draw_secret, make_rng
from .yaml_helpers import expand_dotted_keys

__all__ = [
    "configure_from_io",
    "configure_logging",
    "parse_level",
    "DEFAULT_HIGH",
    "DEFAULT_LOW",
    "draw_secret",
    "make_rng",
    "expand_dotted_keys",
]
