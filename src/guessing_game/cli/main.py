# src/guessing_game/cli/main.py
"""
Command line interface for the :mod:`guessing_game` package.

``guessing-game`` with no sub-command plays one round with the defaults.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from guessing_game.config import AppConfig, apply_dot_overrides, load_app_config
from guessing_game.game.engine import COMPARISON_MODES, InputReadError, play_round
from guessing_game.game.messages import LOCALES
from guessing_game.utils.logging import configure_from_io

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser."""
    parser = argparse.ArgumentParser(prog="guessing-game")
    parser.add_argument("--config", type=Path, action="append", help="Path to YAML configuration")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override configuration values",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Root logging level (default: io.log_level, WARNING)",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs here")

    sub = parser.add_subparsers(dest="command")

    # play
    play_parser = sub.add_parser("play", help="Play one round (the default)")
    play_parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible secret")
    play_parser.add_argument(
        "--mode",
        choices=COMPARISON_MODES,
        default=None,
        help="How the guess is compared with the secret (default: numeric)",
    )
    play_parser.add_argument(
        "--locale", choices=sorted(LOCALES), default=None, help="Message language"
    )
    play_parser.add_argument(
        "--no-reveal",
        dest="reveal",
        action="store_false",
        default=None,
        help="Do not print the secret number",
    )

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _apply_play_flags(cfg: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Fold ``play`` flags into *cfg*; flags win over YAML and ``--set``."""
    if getattr(args, "seed", None) is not None:
        cfg.game.seed = args.seed
    if getattr(args, "mode", None) is not None:
        cfg.game.mode = args.mode
    if getattr(args, "locale", None) is not None:
        cfg.game.locale = args.locale
    if getattr(args, "reveal", None) is not None:
        cfg.game.reveal_secret = args.reveal
    return cfg.validate()


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the ``guessing-game`` CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    command = args.command or "play"

    overlays: list[Path] = list(args.config or [])
    try:
        cfg = load_app_config(*overlays) if overlays else AppConfig()
        cfg = apply_dot_overrides(cfg, list(args.overrides or []))
        cfg = _apply_play_flags(cfg, args)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        parser.error(f"invalid configuration: {exc}")

    configure_from_io(cfg.io, level=args.log_level, log_file=args.log_file)

    LOGGER.info(
        "Configuration prepared",
        extra={
            "stage": "cli",
            "command": command,
            "config_paths": [str(p) for p in overlays],
            "overrides": list(args.overrides or []),
            "seed": cfg.game.seed,
            "mode": cfg.game.mode,
            "locale": cfg.game.locale,
        },
    )

    if command == "play":
        try:
            result = play_round(cfg)
        except InputReadError as exc:
            LOGGER.info("Round aborted", extra={"stage": "cli", "error": str(exc)})
            raise SystemExit(f"guessing-game: {exc}") from exc
        LOGGER.info(
            "Play command completed",
            extra={"stage": "cli", "command": "play", "ordering": result.ordering.name},
        )
    else:  # pragma: no cover - argparse enforces valid choices
        parser.error(f"Unknown command {command}")


if __name__ == "__main__":  # pragma: no cover
    main()
