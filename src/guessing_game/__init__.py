# src/guessing_game/__init__.py
"""Guessing Game - a single-round number guessing exercise.

The public surface is loaded lazily so ``python -m guessing_game --help``
does not import numpy before it is needed.
"""

from __future__ import annotations

import tomllib
from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _v
from pathlib import Path

# Path to the project's pyproject.toml for local version fallback
PYPROJECT_TOML = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

# Diagnostic message for fallback version retrieval
NO_PKG_MSG = "__package__ not detected, loading version from pyproject.toml"

__all__ = [  # loads lazily, that's why reportUnsupportedDunderAll is triggered
    "GameResult",  # pyright: ignore[reportUnsupportedDunderAll]
    "GuessingGame",  # pyright: ignore[reportUnsupportedDunderAll]
    "InputReadError",  # pyright: ignore[reportUnsupportedDunderAll]
    "Ordering",  # pyright: ignore[reportUnsupportedDunderAll]
    "compare_guess",  # pyright: ignore[reportUnsupportedDunderAll]
    "play_round",  # pyright: ignore[reportUnsupportedDunderAll]
    "AppConfig",  # pyright: ignore[reportUnsupportedDunderAll]
    "load_app_config",  # pyright: ignore[reportUnsupportedDunderAll]
]

_LAZY_IMPORTS = {
    "GameResult": "guessing_game.game.engine",
    "GuessingGame": "guessing_game.game.engine",
    "InputReadError": "guessing_game.game.engine",
    "Ordering": "guessing_game.game.engine",
    "compare_guess": "guessing_game.game.engine",
    "play_round": "guessing_game.game.engine",
    "AppConfig": "guessing_game.config",
    "load_app_config": "guessing_game.config",
}


def __getattr__(name: str):  # pragma: no cover - simple dynamic loader
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = import_module(module_name)
    attr = getattr(module, name)
    globals()[name] = attr
    return attr


def _read_version_from_toml() -> str:
    """Return the package version declared in ``pyproject.toml``.

    The file is expected to reside at the repository root three directories
    above this module. If the ``[project]`` table or the ``version`` entry is
    missing a :class:`KeyError` will be raised.
    """
    with PYPROJECT_TOML.open("rb") as fh:
        data = tomllib.load(fh)
    return data["project"]["version"]


try:
    assert __package__ is not None, NO_PKG_MSG
    __version__ = _v("guessing-game")  # importlib.metadata
except PackageNotFoundError:
    __version__ = _read_version_from_toml()
