# src/guessing_game/config.py
"""Configuration schema and helpers for the guessing game.

Defines dataclasses describing the round and I/O settings and includes
utilities for loading YAML overlays and applying ``section.key=value``
overrides from the command line.
"""
from __future__ import annotations

import dataclasses
import types
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, get_args, get_origin, get_type_hints

import yaml  # type: ignore[import-untyped]

from guessing_game.game.engine import COMPARISON_MODES
from guessing_game.game.messages import DEFAULT_LOCALE, messages_for
from guessing_game.utils.random import DEFAULT_HIGH, DEFAULT_LOW
from guessing_game.utils.yaml_helpers import expand_dotted_keys

# ─────────────────────────────────────────────────────────────────────────────
# Dataclasses (schema)
# ─────────────────────────────────────────────────────────────────────────────


@dataclass
class GameConfig:
    """Parameters of a single round."""

    low: int = DEFAULT_LOW
    high: int = DEFAULT_HIGH
    seed: int | None = None
    mode: str = "numeric"  # "numeric" | "text"
    reveal_secret: bool = True
    locale: str = DEFAULT_LOCALE


@dataclass
class IOConfig:
    """Logging destinations."""

    log_level: str = "WARNING"
    log_file: Path | None = None


@dataclass
class AppConfig:
    """Top-level configuration container."""

    game: GameConfig = field(default_factory=GameConfig)
    io: IOConfig = field(default_factory=IOConfig)
    # Per-template overrides, e.g. ``messages.win: "Correct!"``
    messages: dict[str, str] = field(default_factory=dict)

    def validate(self) -> "AppConfig":
        """Raise :class:`ValueError` on settings the engine cannot honour."""
        if self.game.low > self.game.high:
            raise ValueError(
                f"game.low ({self.game.low}) must not exceed game.high ({self.game.high})"
            )
        if self.game.mode not in COMPARISON_MODES:
            raise ValueError(
                f"game.mode must be one of {COMPARISON_MODES}, got {self.game.mode!r}"
            )
        # unknown locales and template names
        messages_for(self.game.locale, self.messages)
        return self


# ─────────────────────────────────────────────────────────────────────────────
# Loader (one or more YAML overlays; dotted keys allowed)
# ─────────────────────────────────────────────────────────────────────────────


def _deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge ``overlay`` onto ``base`` and return a new mapping."""
    result: dict[str, Any] = dict(base)
    for key, val in overlay.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(val, Mapping):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _annotation_contains(annotation: Any, target: type) -> bool:
    """Recursively inspect type annotations for the presence of ``target``."""
    if annotation is None:
        return False
    if annotation is target:
        return True
    origin = get_origin(annotation)
    if origin is None:
        return False
    return any(_annotation_contains(arg, target) for arg in get_args(annotation))


def _build(cls, section: Mapping[str, Any]) -> Any:
    """Instantiate dataclass ``cls`` from a mapping, rejecting unknown keys."""
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise AttributeError(f"Unknown option(s) {unknown} for {cls.__name__}")
    obj = cls()
    type_hints = get_type_hints(cls)
    for name, val in section.items():
        if _annotation_contains(type_hints.get(name), Path) and isinstance(val, str):
            val = Path(val)
        setattr(obj, name, val)
    return obj


def load_app_config(*overlays: Path) -> AppConfig:
    """Deterministically merge one or more YAML overlays into an :class:`AppConfig`.

    Files are read in the order provided, dotted keys are expanded, and later
    overlays always win.
    """
    data: dict[str, Any] = {}
    for path in overlays:
        with Path(path).open("r", encoding="utf-8") as fh:
            overlay = yaml.safe_load(fh) or {}
        if not isinstance(overlay, Mapping):
            raise TypeError(f"Config file {path} must contain a mapping")
        data = _deep_merge(data, expand_dotted_keys(overlay))

    # Shorthand: ``game.range: [low, high]``
    game_section = dict(data.get("game", {}))
    if "range" in game_section:
        bounds = game_section.pop("range")
        if not isinstance(bounds, (list, tuple)) or len(bounds) != 2:
            raise ValueError(f"game.range must be a [low, high] pair, got {bounds!r}")
        game_section.setdefault("low", bounds[0])
        game_section.setdefault("high", bounds[1])

    messages = data.get("messages", {})
    if not isinstance(messages, Mapping):
        raise TypeError("messages must be a mapping of template name to text")

    cfg = AppConfig(
        game=_build(GameConfig, game_section),
        io=_build(IOConfig, data.get("io", {})),
        messages={str(k): str(v) for k, v in messages.items()},
    )
    return cfg.validate()


def _coerce(value: str, current: Any, annotation: Any | None = None) -> Any:
    """Coerce ``value`` to the type of ``current``."""
    if value.lower() in {"none", "null"} and _annotation_contains(annotation, types.NoneType):
        return None
    if isinstance(current, bool) or _annotation_contains(annotation, bool):
        val_lower = value.lower()
        if val_lower in {"1", "true", "yes", "on"}:
            return True
        if val_lower in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"Cannot parse boolean value from {value!r}")
    if isinstance(current, int) or _annotation_contains(annotation, int):
        return int(value)
    if isinstance(current, Path) or _annotation_contains(annotation, Path):
        return Path(value)
    return value


def apply_dot_overrides(cfg: AppConfig, pairs: list[str]) -> AppConfig:
    """Apply ``section.option=value`` overrides to *cfg*."""
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Invalid override {pair!r}")
        key, raw = pair.split("=", 1)
        if "." not in key:
            raise ValueError(f"Invalid override {pair!r}")
        section_name, option = key.split(".", 1)
        section = getattr(cfg, section_name)
        if isinstance(section, dict):
            section[option] = raw
            continue
        if not hasattr(section, option):
            raise AttributeError(f"Unknown option {option!r} in section {section_name!r}")
        current = getattr(section, option)
        annotation = get_type_hints(type(section)).get(option)
        setattr(section, option, _coerce(raw, current, annotation))
    return cfg.validate()


__all__ = [
    "AppConfig",
    "GameConfig",
    "IOConfig",
    "apply_dot_overrides",
    "load_app_config",
]
