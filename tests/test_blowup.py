"""Tests for command parsing and the handle() API."""

import matplotlib.pyplot as plt
import numpy as np
import pytest

from blowup import handle, parse_command, process_input
from blowup_functions import probability_of_success, probability_of_success_with_tokens
from die import Die, explosion_pmf
from report import report


class TestParseCommand:
    @pytest.mark.parametrize(
        "text, args",
        [
            ("d6 12", (Die.D6, 12, 0)),
            ("D6 12", (Die.D6, 12, 0)),
            ("1d6   12", (Die.D6, 12, 0)),
            ("d6 >= 12", (Die.D6, 12, 0)),
            ("d6>=12", (Die.D6, 12, 0)),
            ("d6 12 3", (Die.D6, 12, 3)),
            ("d6 12 t3", (Die.D6, 12, 3)),
            ("d6 >= 12 with 3 tokens", (Die.D6, 12, 3)),
            ("20 41", (Die.D20, 41, 0)),
        ],
    )
    def test_checks(self, text: str, args: tuple) -> None:
        assert parse_command(text) == ("check", args)

    def test_report(self) -> None:
        assert parse_command("report") == ("report", (80, 5))
        assert parse_command("report 2") == ("report", (80, 2))
        assert parse_command("report 3 40") == ("report", (40, 3))

    def test_curve_and_roll(self) -> None:
        assert parse_command("curve d8") == ("curve", (Die.D8, 0))
        assert parse_command("curve d8 2") == ("curve", (Die.D8, 2))
        assert parse_command("roll d4") == ("roll", (Die.D4, 80))
        assert parse_command("roll d4 40") == ("roll", (Die.D4, 40))

    @pytest.mark.parametrize("text", ["", "hello", "d6", "d612", "d7 5", "report x"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_command(text)


class TestProcessInput:
    def test_check(self) -> None:
        assert process_input("d4 5") == probability_of_success(Die.D4, 5)
        assert process_input("d4 10 2") == probability_of_success_with_tokens(
            Die.D4, 2, 10
        )

    def test_report(self) -> None:
        assert process_input("report 1 10") == report(10, 1)

    def test_large_report_warns(self) -> None:
        with pytest.warns(UserWarning):
            process_input("roll d20 600")

    def test_curve(self) -> None:
        curve = process_input("curve d10 1")
        assert curve.shape == (81,)
        assert curve[1] == 1.0

    def test_roll(self) -> None:
        assert np.allclose(process_input("roll d4 12"), explosion_pmf(Die.D4, 12))


class TestHandle:
    def test_check_has_no_figure(self) -> None:
        x, fig = handle("d20 20")
        assert x == 0.05
        assert fig is None

    def test_curve_figure(self) -> None:
        x, fig = handle("curve d6 1")
        assert len(x) == 81
        assert fig is not None
        plt.close(fig)

    def test_roll_figure(self) -> None:
        x, fig = handle("roll d4 30")
        assert len(x) == 31
        assert fig is not None
        plt.close(fig)
