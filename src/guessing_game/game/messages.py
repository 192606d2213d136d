# src/guessing_game/game/messages.py
"""Fixed message templates printed by the game.

Templates are plain :meth:`str.format` strings. ``reveal`` receives
``secret``, ``echo`` receives ``guess`` and ``read_error`` receives
``reason``; the others take no fields.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Mapping

DEFAULT_LOCALE = "en"


@dataclass(frozen=True, slots=True)
class Messages:
    """The lines a round can print, in the order they are emitted.

    ``read_error`` is not printed; it becomes the :class:`InputReadError` text.
    """

    announce: str = "Guess the number!"
    reveal: str = "The secret number is: {secret}"
    prompt: str = "Please input your guess."
    echo: str = "You guessed: {guess}"
    too_small: str = "Too small!"
    too_large: str = "Too large!"
    win: str = "You win!"
    read_error: str = "Failed to read line: {reason}"

    def with_overrides(self, overrides: Mapping[str, str]) -> "Messages":
        """Return a copy with the templates in *overrides* replaced."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown message template(s): {', '.join(unknown)}")
        return replace(self, **dict(overrides))


LOCALES: dict[str, Messages] = {
    "en": Messages(),
    "zh-Hant": Messages(
        announce="請猜測一個數字！",
        reveal="祕密數字爲：{secret}",
        prompt="請輸入你的猜測數字。",
        echo="你的猜測數字：{guess}",
        too_small="太小了！",
        too_large="太大了！",
        win="獲勝！",
        read_error="讀取行數失敗：{reason}",
    ),
}


def messages_for(locale: str = DEFAULT_LOCALE, overrides: Mapping[str, str] | None = None) -> Messages:
    """Look up the built-in templates for *locale* and apply *overrides*."""
    try:
        base = LOCALES[locale]
    except KeyError:
        choices = ", ".join(sorted(LOCALES))
        raise ValueError(f"Unknown locale {locale!r}; expected one of: {choices}") from None
    return base.with_overrides(overrides) if overrides else base


__all__ = ["DEFAULT_LOCALE", "LOCALES", "Messages", "messages_for"]
