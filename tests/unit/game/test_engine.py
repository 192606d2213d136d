from __future__ import annotations

import io

import numpy as np
import pytest

from guessing_game.game.engine import (
    GameResult,
    GuessingGame,
    InputReadError,
    Ordering,
    play_round,
)
from guessing_game.game.messages import LOCALES, Messages
from helpers.game_factory import FixedRng, make_test_app_config

_EN = Messages()
RESULT_LINES = {_EN.too_small, _EN.too_large, _EN.win}


class _BrokenStdin:
    def readline(self) -> str:
        raise OSError("device not ready")


class _CountingStdin(io.StringIO):
    reads = 0

    def readline(self, *args) -> str:  # type: ignore[override]
        self.reads += 1
        return super().readline(*args)


def _play(secret: int, line: str, **kwargs) -> tuple[GameResult, list[str]]:
    stdout = io.StringIO()
    game = GuessingGame(rng=FixedRng(secret), **kwargs)  # type: ignore[arg-type]
    result = game.play(stdin=io.StringIO(line), stdout=stdout)
    return result, stdout.getvalue().split("\n")


def test_winning_round_prints_messages_in_order():
    result, lines = _play(50, "50\n")

    assert lines == [
        "Guess the number!",
        "The secret number is: 50",
        "Please input your guess.",
        "You guessed: 50",
        "",  # echoed newline
        "You win!",
        "",
    ]
    assert result == GameResult(secret=50, guess="50\n", ordering=Ordering.EQUAL, mode="numeric")
    assert result.won


def test_echo_keeps_trailing_newline(stdout_buffer):
    game = GuessingGame(rng=FixedRng(50))  # type: ignore[arg-type]
    game.play(stdin=io.StringIO("50\n"), stdout=stdout_buffer)

    assert "You guessed: 50\n\n" in stdout_buffer.getvalue()


@pytest.mark.parametrize(
    "line, expected, message",
    [
        ("10\n", Ordering.LESS, "Too small!"),
        ("99\n", Ordering.GREATER, "Too large!"),
        (" 50 \n", Ordering.EQUAL, "You win!"),
    ],
)
def test_numeric_results(line, expected, message):
    result, lines = _play(50, line)

    assert result.ordering is expected
    assert lines[-2] == message


def test_exactly_one_result_message_and_one_read():
    stdin = _CountingStdin("10\n20\n30\n")
    stdout = io.StringIO()
    GuessingGame(rng=FixedRng(50)).play(stdin=stdin, stdout=stdout)  # type: ignore[arg-type]

    printed = stdout.getvalue().splitlines()
    assert sum(line in RESULT_LINES for line in printed) == 1
    assert stdin.reads == 1
    # the remaining lines are left unread
    assert stdin.read() == "20\n30\n"


def test_text_mode_compares_raw_line():
    result, lines = _play(50, "50\n", mode="text")

    # "50\n" sorts after "50"
    assert result.ordering is Ordering.GREATER
    assert result.mode == "text"
    assert lines[-2] in RESULT_LINES


def test_unparsable_guess_falls_back_to_text(capinfo):
    result, lines = _play(50, "abc\n")

    assert result.mode == "text"
    assert result.ordering is Ordering.GREATER
    assert lines[-2] in RESULT_LINES
    assert any("not an integer" in r.getMessage() for r in capinfo.records)


def test_reveal_uses_compared_secret():
    result, lines = _play(42, "42\n")

    assert lines[1] == f"The secret number is: {result.secret}"
    assert result.ordering is Ordering.EQUAL


def test_no_reveal_skips_disclosure():
    _, lines = _play(50, "1\n", reveal_secret=False)

    assert not any("secret number" in line for line in lines)
    assert lines[1] == "Please input your guess."


def test_closed_stdin_raises_and_prints_no_result(stdout_buffer):
    game = GuessingGame(rng=FixedRng(50))  # type: ignore[arg-type]

    with pytest.raises(InputReadError, match="input stream closed"):
        game.play(stdin=io.StringIO(""), stdout=stdout_buffer)

    printed = stdout_buffer.getvalue().splitlines()
    assert printed[-1] == "Please input your guess."
    assert not any(line in RESULT_LINES for line in printed)


def test_os_error_on_read_is_wrapped(stdout_buffer):
    game = GuessingGame(rng=FixedRng(50))  # type: ignore[arg-type]

    with pytest.raises(InputReadError) as excinfo:
        game.play(stdin=_BrokenStdin(), stdout=stdout_buffer)  # type: ignore[arg-type]

    assert isinstance(excinfo.value.__cause__, OSError)
    assert "device not ready" in str(excinfo.value)


def test_secret_drawn_once_from_inclusive_range():
    rng = FixedRng(1)
    GuessingGame(low=1, high=100, rng=rng).play(  # type: ignore[arg-type]
        stdin=io.StringIO("1\n"), stdout=io.StringIO()
    )

    assert rng.calls == [(1, 101)]


def test_seeded_games_draw_the_same_secret():
    r1 = GuessingGame(rng=np.random.default_rng(123)).play(
        stdin=io.StringIO("1\n"), stdout=io.StringIO()
    )
    r2 = GuessingGame(rng=np.random.default_rng(123)).play(
        stdin=io.StringIO("1\n"), stdout=io.StringIO()
    )

    assert r1.secret == r2.secret
    assert 1 <= r1.secret <= 100


def test_play_defaults_to_process_streams(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("50\n"))
    result = GuessingGame(rng=FixedRng(50)).play()  # type: ignore[arg-type]

    out = capsys.readouterr().out
    assert result.won
    assert out.endswith("You win!\n")


def test_play_round_uses_config_messages():
    cfg = make_test_app_config(messages={"win": "Correct!"})
    stdout = io.StringIO()

    result = play_round(cfg, rng=FixedRng(50), stdin=io.StringIO("50\n"), stdout=stdout)  # type: ignore[arg-type]

    assert result.won
    assert stdout.getvalue().splitlines()[-1] == "Correct!"


def test_play_round_zh_hant_locale():
    cfg = make_test_app_config()
    cfg.game.locale = "zh-Hant"
    stdout = io.StringIO()

    play_round(cfg, rng=FixedRng(50), stdin=io.StringIO("10\n"), stdout=stdout)  # type: ignore[arg-type]

    lines = stdout.getvalue().splitlines()
    assert lines[0] == "請猜測一個數字！"
    assert lines[1] == "祕密數字爲：50"
    assert lines[-1] == "太小了！"


def test_play_round_seed_from_config_is_reproducible():
    cfg = make_test_app_config()
    a = play_round(cfg, stdin=io.StringIO("1\n"), stdout=io.StringIO())
    b = play_round(cfg, stdin=io.StringIO("1\n"), stdout=io.StringIO())

    assert a.secret == b.secret


def test_play_round_without_config():
    result = play_round(rng=FixedRng(7), stdin=io.StringIO("7\n"), stdout=io.StringIO())  # type: ignore[arg-type]

    assert result.won


def test_very_long_guess_is_compared_as_a_number():
    result, lines = _play(50, "1" + "0" * 5000 + "\n")

    assert result.ordering is Ordering.GREATER
    assert result.mode == "numeric"
    assert lines[-2] == "Too large!"


def test_read_error_uses_locale_template(stdout_buffer):
    game = GuessingGame(rng=FixedRng(50), messages=LOCALES["zh-Hant"])  # type: ignore[arg-type]

    with pytest.raises(InputReadError, match="讀取行數失敗"):
        game.play(stdin=io.StringIO(""), stdout=stdout_buffer)
