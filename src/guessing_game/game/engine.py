from __future__ import annotations

import logging
import re
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, TextIO

import numpy as np

from guessing_game.game.messages import Messages, messages_for
from guessing_game.utils.random import DEFAULT_HIGH, DEFAULT_LOW, draw_secret, make_rng

if TYPE_CHECKING:
    from guessing_game.config import AppConfig

"""engine.py
============
Single-round engine for the guessing game.

High-level flow
---------------
* GuessingGame.play announces the game, draws the secret, discloses it,
  prompts, reads exactly one line, echoes it, compares and prints exactly
  one result message.
* compare_guess does the three-way comparison.  ``numeric`` parses the line
  as an integer first and falls back to ``text`` when it does not parse;
  ``text`` compares the raw line with the decimal form of the secret.

The module keeps no global state; randomness lives inside each
GuessingGame via its numpy Generator.
"""

__all__ = [
    "COMPARISON_MODES",
    "GameResult",
    "GuessingGame",
    "InputReadError",
    "Ordering",
    "compare_guess",
    "parse_guess",
    "play_round",
]

LOGGER = logging.getLogger(__name__)

COMPARISON_MODES: tuple[str, ...] = ("numeric", "text")

# Optional sign, ASCII digits only
_INTEGER_RE = re.compile(r"([+-]?)([0-9]+)")


class InputReadError(RuntimeError):
    """Raised when the guess line cannot be read from the input stream."""


class Ordering(Enum):
    """Where the guess sits relative to the secret."""

    LESS = -1
    EQUAL = 0
    GREATER = 1

    @classmethod
    def of(cls, left, right) -> "Ordering":
        if left < right:
            return cls.LESS
        if left > right:
            return cls.GREATER
        return cls.EQUAL


@dataclass(frozen=True, slots=True)
class GameResult:
    """Outcome of one round."""

    secret: int
    guess: str
    ordering: Ordering
    mode: str  # comparison mode actually applied

    @property
    def won(self) -> bool:
        return self.ordering is Ordering.EQUAL


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------


def parse_guess(guess: str) -> str | None:
    """Return *guess* as canonical decimal text, or ``None`` if it is not an integer.

    Canonical means no ``+``, no leading zeros and no ``-0``.  The value is
    kept as text so guesses of any length compare without building an
    :class:`int` (CPython caps ``int(str)`` at a few thousand digits).
    """
    match = _INTEGER_RE.fullmatch(guess.strip())
    if match is None:
        return None
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    return f"-{digits}" if sign == "-" and digits != "0" else digits


def _numeric_ordering(canonical: str, secret: int) -> Ordering:
    """Order canonical decimal text against *secret* by sign, length, then digits."""
    guess_neg = canonical.startswith("-")
    secret_neg = secret < 0
    if guess_neg != secret_neg:
        return Ordering.LESS if guess_neg else Ordering.GREATER
    guess_digits = canonical.lstrip("-")
    secret_digits = str(abs(secret))
    magnitude = Ordering.of((len(guess_digits), guess_digits), (len(secret_digits), secret_digits))
    if guess_neg and magnitude is not Ordering.EQUAL:
        return Ordering(-magnitude.value)
    return magnitude


def _compare(guess: str, secret: int, mode: str) -> tuple[Ordering, str]:
    if mode not in COMPARISON_MODES:
        raise ValueError(f"Unknown comparison mode {mode!r}; expected one of {COMPARISON_MODES}")
    if mode == "numeric":
        canonical = parse_guess(guess)
        if canonical is not None:
            return _numeric_ordering(canonical, secret), "numeric"
        LOGGER.warning(
            "Guess %r is not an integer; comparing as text",
            guess,
            extra={"stage": "game"},
        )
    return Ordering.of(guess, str(secret)), "text"


def compare_guess(guess: str, secret: int, mode: str = "numeric") -> Ordering:
    """Compare the raw guess line with *secret*.

    Inputs
    ------
    guess
        The line exactly as read, trailing newline included.
    secret
        The number drawn for this round.
    mode
        ``"numeric"`` (parse first, fall back to text) or ``"text"``
        (lexicographic comparison against ``str(secret)``).
    """
    return _compare(guess, secret, mode)[0]


# ---------------------------------------------------------------------------
# Game
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class GuessingGame:
    """One configured round of the guessing game."""

    low: int = DEFAULT_LOW
    high: int = DEFAULT_HIGH
    mode: str = "numeric"
    reveal_secret: bool = True
    messages: Messages = field(default_factory=Messages)
    rng: np.random.Generator = field(default_factory=np.random.default_rng, repr=False)

    @classmethod
    def from_config(
        cls, cfg: AppConfig, *, rng: np.random.Generator | None = None
    ) -> "GuessingGame":
        """Build a game from an :class:`~guessing_game.config.AppConfig`."""
        game_cfg = cfg.game
        return cls(
            low=game_cfg.low,
            high=game_cfg.high,
            mode=game_cfg.mode,
            reveal_secret=game_cfg.reveal_secret,
            messages=messages_for(game_cfg.locale, cfg.messages),
            rng=rng if rng is not None else make_rng(game_cfg.seed),
        )

    # ----------------------------- helpers -----------------------------
    @staticmethod
    def _say(stdout: TextIO, text: str) -> None:
        # flush so the prompt is visible before the blocking read
        print(text, file=stdout, flush=True)

    def _read_line(self, stdin: TextIO) -> str:
        """Read exactly one line; no retry on failure."""
        try:
            line = stdin.readline()
        except (OSError, UnicodeDecodeError) as exc:
            raise InputReadError(self.messages.read_error.format(reason=exc)) from exc
        if not line:
            raise InputReadError(self.messages.read_error.format(reason="input stream closed"))
        return line

    def _result_message(self, ordering: Ordering) -> str:
        if ordering is Ordering.LESS:
            return self.messages.too_small
        if ordering is Ordering.GREATER:
            return self.messages.too_large
        return self.messages.win

    # ----------------------------- round -------------------------------
    def play(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> GameResult:
        """Play a single round against *stdin*/*stdout*.

        Streams default to :data:`sys.stdin` and :data:`sys.stdout` at call
        time.  :class:`InputReadError` propagates to the caller untouched and
        no result message is printed in that case.
        """
        stdin = sys.stdin if stdin is None else stdin
        stdout = sys.stdout if stdout is None else stdout
        msgs = self.messages

        self._say(stdout, msgs.announce)
        secret = draw_secret(self.rng, self.low, self.high)
        LOGGER.debug(
            "Secret drawn",
            extra={"stage": "game", "low": self.low, "high": self.high},
        )
        if self.reveal_secret:
            self._say(stdout, msgs.reveal.format(secret=secret))
        self._say(stdout, msgs.prompt)

        guess = self._read_line(stdin)
        self._say(stdout, msgs.echo.format(guess=guess))

        ordering, used_mode = _compare(guess, secret, self.mode)
        self._say(stdout, self._result_message(ordering))

        LOGGER.info(
            "Round finished",
            extra={
                "stage": "game",
                "ordering": ordering.name,
                "mode": used_mode,
            },
        )
        return GameResult(secret=secret, guess=guess, ordering=ordering, mode=used_mode)


def play_round(
    cfg: AppConfig | None = None,
    *,
    rng: np.random.Generator | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> GameResult:
    """Play one round with *cfg* (defaults when ``None``)."""
    if cfg is None:
        game = GuessingGame(rng=rng if rng is not None else make_rng())
    else:
        game = GuessingGame.from_config(cfg, rng=rng)
    return game.play(stdin=stdin, stdout=stdout)
