"""Error taxonomy for the scaffolding engine.

Fatal errors (everything deriving from ``JrScriptsError``) abort the pipeline
at the first required step that raises them.  ``BestEffortFailure`` is never
raised: the orchestrator builds one for every failed best-effort step and
keeps it on the outcome as a warning.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence


def format_command(command: Sequence[str]) -> str:
    """Render an argv list as a copy-pasteable shell line."""
    return " ".join(shlex.quote(part) for part in command)


class JrScriptsError(Exception):
    """Base class for fatal scaffolding errors."""


class SpawnError(JrScriptsError):
    """The external tool could not be located or started."""

    def __init__(self, command: Sequence[str], reason: str) -> None:
        self.command = list(command)
        self.reason = reason
        super().__init__(f"Could not start `{format_command(self.command)}`: {reason}")


class CommandFailed(JrScriptsError):
    """A required command exited with a non-zero status."""

    def __init__(self, command: Sequence[str], exit_code: int, stderr: str = "") -> None:
        self.command = list(command)
        self.exit_code = exit_code
        self.stderr = stderr
        message = f"`{format_command(self.command)}` exited with code {exit_code}"
        if stderr.strip():
            message = f"{message}\n{stderr.strip()}"
        super().__init__(message)


class ExtractionFailed(JrScriptsError):
    """A required value could not be found in a tool's output."""

    def __init__(self, source: str, pattern: str) -> None:
        self.source = source
        self.pattern = pattern
        super().__init__(f"Failed to obtain a value matching '{pattern}' from {source}.")


class TemplateRenderError(JrScriptsError):
    """Jinja2 rejected a template."""

    def __init__(self, template: str, message: str) -> None:
        self.template = template
        self.message = message
        super().__init__(f"Failed rendering template {template}: {message}")


class BestEffortFailure(Exception):
    """Record of a failed best-effort step.  Logged, never raised."""

    def __init__(self, phase: str, label: str, cause: BaseException) -> None:
        self.phase = phase
        self.label = label
        self.cause = cause
        super().__init__(f"{label}: {cause}")
