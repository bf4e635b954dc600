"""Shared console helpers for jr-scripts.

Progress, warnings and the final summary go to stdout through a single Rich
``Console``; fatal diagnostics go to stderr through ``err_console``.
"""

from __future__ import annotations

from enum import Enum

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------


class Phase(str, Enum):
    """Named phases of the scaffolding pipeline, in execution order."""

    PREFLIGHT = "preflight"
    PRIMARY_SCAFFOLD = "primary_scaffold"
    DEPENDENCY_INSTALL = "dependency_install"
    EXTERNAL_INIT = "external_init"
    VALUE_HARVEST = "value_harvest"
    TEMPLATE_RENDER = "template_render"
    POST_PROCESS = "post_process"
    VERSION_CONTROL_COMMIT = "version_control_commit"
    EDITOR_LAUNCH = "editor_launch"

    @property
    def title(self) -> str:
        return PHASE_NAMES[self]


PHASE_NAMES: dict[Phase, str] = {
    Phase.PREFLIGHT: "Preflight",
    Phase.PRIMARY_SCAFFOLD: "Primary scaffold",
    Phase.DEPENDENCY_INSTALL: "Dependency install",
    Phase.EXTERNAL_INIT: "External init",
    Phase.VALUE_HARVEST: "Value harvest",
    Phase.TEMPLATE_RENDER: "Template render",
    Phase.POST_PROCESS: "Post process",
    Phase.VERSION_CONTROL_COMMIT: "Version control commit",
    Phase.EDITOR_LAUNCH: "Editor launch",
}

PHASE_COLORS: dict[Phase, str] = {
    Phase.PREFLIGHT: "bright_cyan",
    Phase.PRIMARY_SCAFFOLD: "bright_green",
    Phase.DEPENDENCY_INSTALL: "bright_yellow",
    Phase.EXTERNAL_INIT: "bright_yellow",
    Phase.VALUE_HARVEST: "bright_magenta",
    Phase.TEMPLATE_RENDER: "bright_blue",
    Phase.POST_PROCESS: "bright_yellow",
    Phase.VERSION_CONTROL_COMMIT: "bright_white",
    Phase.EDITOR_LAUNCH: "bright_white",
}


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
        format_duration(3661.0) -> "1h 1m 1s"
    """
    if seconds < 0:
        return "0.0s"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60

    parts: list[str] = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")

    if hours > 0 or minutes > 0:
        parts.append(f"{int(secs)}s")
    else:
        parts.append(f"{secs:.1f}s")

    return " ".join(parts)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_phase_header(phase: Phase) -> None:
    """Print a full-width rule announcing *phase*."""
    color = PHASE_COLORS.get(phase, "white")
    console.print()
    console.print(Rule(f"[bold {color}] {phase.title} [/bold {color}]", style=color))


def print_step(label: str) -> None:
    """Print the ``▶ label`` progress line that precedes every step."""
    console.print(f"[bold]▶ {escape(label)}[/bold]")


def print_success(message: str) -> None:
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    err_console.print(f"[bold red]{escape(message)}[/bold red]", soft_wrap=True)


def print_warning(message: str) -> None:
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]", soft_wrap=True)
