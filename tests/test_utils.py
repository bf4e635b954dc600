"""Unit tests for console helpers (jr_scripts.utils).

Tests cover:
- Phase ordering and titles
- format_duration
- print helpers route to stdout / stderr and escape markup
"""

from __future__ import annotations

import pytest

from jr_scripts.utils import (
    Phase,
    format_duration,
    print_error,
    print_phase_header,
    print_step,
    print_warning,
)

pytestmark = pytest.mark.unit


class TestPhase:
    def test_execution_order(self):
        assert [p.value for p in Phase] == [
            "preflight",
            "primary_scaffold",
            "dependency_install",
            "external_init",
            "value_harvest",
            "template_render",
            "post_process",
            "version_control_commit",
            "editor_launch",
        ]

    def test_every_phase_has_title(self):
        for phase in Phase:
            assert phase.title

    def test_title(self):
        assert Phase.VALUE_HARVEST.title == "Value harvest"


class TestFormatDuration:
    @pytest.mark.parametrize(
        "seconds, expected",
        [(3.7, "3.7s"), (65.2, "1m 5s"), (3661.0, "1h 1m 1s"), (-1, "0.0s")],
    )
    def test_format(self, seconds: float, expected: str):
        assert format_duration(seconds) == expected


class TestPrintHelpers:
    def test_step_line(self, capsys):
        print_step("Installing Prisma CLI")
        assert "▶ Installing Prisma CLI" in capsys.readouterr().out

    def test_brackets_are_not_markup(self, capsys):
        print_step("Writing src/app/api/auth/[...all]/route.ts")
        assert "[...all]" in capsys.readouterr().out

    def test_error_goes_to_stderr(self, capsys):
        print_error("Preflight FAILED at 'Checking for npm'")
        captured = capsys.readouterr()
        assert "Preflight FAILED" in captured.err
        assert captured.out == ""

    def test_warning_goes_to_stdout(self, capsys):
        print_warning("git commit failed, continuing")
        assert "continuing" in capsys.readouterr().out

    def test_phase_header(self, capsys):
        print_phase_header(Phase.TEMPLATE_RENDER)
        assert "Template render" in capsys.readouterr().out
