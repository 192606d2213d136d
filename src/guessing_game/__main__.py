# src/guessing_game/__main__.py
"""``python -m guessing_game``: play one round from the terminal.

Arguments are the same as for the ``guessing-game`` console script; see
:func:`guessing_game.cli.main.build_parser`.
"""

from __future__ import annotations

from guessing_game.cli.main import main as cli_main


def main() -> None:
    """Run the CLI with ``sys.argv``."""

    cli_main()


if __name__ == "__main__":  # pragma: no cover - direct execution path
    main()
