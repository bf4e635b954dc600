"""Scaffolding pipeline orchestrator.

Runs an ordered list of :mod:`jr_scripts.steps` one at a time:

    Preflight -> PrimaryScaffold -> DependencyInstall -> ExternalInit ->
    ValueHarvest -> TemplateRender -> PostProcess -> VersionControlCommit ->
    EditorLaunch -> Done

A failing required step ends the run in ``Failed(phase, reason)``; nothing
after it is executed and nothing before it is rolled back.  A failing
best-effort step is recorded as a warning and the run carries on.
"""

from __future__ import annotations

import time
import traceback
from collections.abc import Sequence
from dataclasses import dataclass, field

from rich.markup import escape
from rich.panel import Panel

from jr_scripts.errors import BestEffortFailure, JrScriptsError
from jr_scripts.steps import PipelineContext, Step
from jr_scripts.utils import (
    Phase,
    console,
    format_duration,
    print_error,
    print_phase_header,
    print_step,
    print_warning,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PipelineError(Exception):
    """Raised by :meth:`PipelineOutcome.raise_for_failure` for a failed run."""

    def __init__(self, phase: Phase, message: str) -> None:
        self.phase = phase
        super().__init__(f"{phase.title}: {message}")


# ---------------------------------------------------------------------------
# Outcome
# ---------------------------------------------------------------------------


@dataclass
class PipelineOutcome:
    """Terminal state of a run: ``Done`` when ``failed_phase`` is ``None``."""

    completed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    warnings: list[BestEffortFailure] = field(default_factory=list)
    failed_phase: Phase | None = None
    failed_step: str | None = None
    reason: str | None = None
    duration: float = 0.0

    @property
    def success(self) -> bool:
        return self.failed_phase is None

    @property
    def state(self) -> str:
        if self.success:
            return "Done"
        return f"Failed({self.failed_phase.value}, {self.reason})"

    def raise_for_failure(self) -> None:
        if self.failed_phase is not None:
            raise PipelineError(self.failed_phase, self.reason or "unknown error")


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """Executes steps in order, stopping at the first required failure.

    Attributes:
        steps: The ordered steps to run.
        context: State shared between steps (project root, harvested values,
            template data).
    """

    def __init__(self, steps: Sequence[Step], context: PipelineContext) -> None:
        self.steps = list(steps)
        self.context = context

    async def run(self) -> PipelineOutcome:
        """Run every step and return the terminal outcome.  Never raises for step failures."""
        outcome = PipelineOutcome()
        started = time.monotonic()
        current_phase: Phase | None = None

        for step in self.steps:
            if step.phase != current_phase:
                current_phase = step.phase
                print_phase_header(current_phase)

            if not step.enabled:
                console.print(f"[dim]▶ {escape(step.skip_message or f'Skipping {step.label}')}[/dim]")
                outcome.skipped.append(step.label)
                continue

            print_step(step.label)
            try:
                await step.execute(self.context)
            except Exception as exc:
                if not step.required:
                    self._record_warning(outcome, step, exc)
                    continue
                self._record_failure(outcome, step, exc)
                if not isinstance(exc, JrScriptsError):
                    # Unexpected: keep the traceback for the bug report.
                    console.print(f"[dim]{escape(traceback.format_exc())}[/dim]")
                break

            outcome.completed.append(step.label)

        outcome.duration = time.monotonic() - started
        self._print_final_summary(outcome)
        return outcome

    # ------------------------------------------------------------------
    # Outcome bookkeeping
    # ------------------------------------------------------------------

    @staticmethod
    def _record_warning(outcome: PipelineOutcome, step: Step, exc: Exception) -> None:
        failure = BestEffortFailure(step.phase.value, step.label, exc)
        outcome.warnings.append(failure)
        print_warning(f"  {step.label} failed, continuing: {exc}")

    @staticmethod
    def _record_failure(outcome: PipelineOutcome, step: Step, exc: Exception) -> None:
        outcome.failed_phase = step.phase
        outcome.failed_step = step.label
        outcome.reason = str(exc) or exc.__class__.__name__
        print_error(f"{step.phase.title} FAILED at '{step.label}'")

    def _print_final_summary(self, outcome: PipelineOutcome) -> None:
        """Print the final pipeline summary panel."""
        if outcome.success:
            border_style = "bold green"
            status_text = "[bold green]PIPELINE SUCCEEDED[/bold green]"
        else:
            border_style = "bold red"
            status_text = "[bold red]PIPELINE FAILED[/bold red]"

        detail_lines = [
            status_text,
            "",
            f"Duration  : {format_duration(outcome.duration)}",
            f"Completed : {len(outcome.completed)} step(s)",
        ]
        if self.context.harvested:
            detail_lines.append(f"Harvested : {escape(', '.join(sorted(self.context.harvested)))}")
        if outcome.skipped:
            detail_lines.append(f"Skipped   : {escape(', '.join(outcome.skipped))}")
        if outcome.warnings:
            detail_lines.append(
                f"Warnings  : {escape(', '.join(w.label for w in outcome.warnings))}"
            )
        if not outcome.success:
            detail_lines.append(
                f"Failed    : {outcome.failed_phase.title} ({escape(outcome.failed_step or '')})"
            )
        detail_lines.extend(["", f"Project   : {self.context.project_root}"])

        console.print()
        console.print(
            Panel(
                "\n".join(detail_lines),
                title="[bold]Pipeline Complete[/bold]",
                border_style=border_style,
            )
        )
