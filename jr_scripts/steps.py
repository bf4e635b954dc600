"""Typed pipeline steps.

A pipeline is an ordered list of ``Step`` objects.  Each step carries its
label, its phase and its failure policy (``required``); the orchestrator
only has to run them in order and stop on the first required failure.
Steps share a :class:`PipelineContext`, which is how a value harvested by
one step reaches the template render of a later one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rich.markup import escape

from jr_scripts.environment import Environment
from jr_scripts.errors import ExtractionFailed, format_command
from jr_scripts.extract import TokenPredicate, extract_first
from jr_scripts.process import run_command, run_inherit
from jr_scripts.scaffolder.templates import render_templates
from jr_scripts.utils import Phase, console


@dataclass
class PipelineContext:
    """Mutable state shared by the steps of one run."""

    project_root: Path
    cwd: Path
    environment: Environment = field(default_factory=Environment.from_os)
    data: dict[str, Any] = field(default_factory=dict)
    overrides: dict[str, dict[str, Any]] = field(default_factory=dict)
    harvested: dict[str, str] = field(default_factory=dict)
    verbose: bool = True

    def workdir(self, in_project: bool) -> Path:
        return self.project_root if in_project else self.cwd


class Step:
    """Base class for pipeline steps.

    Subclasses are dataclasses providing at least ``label``, ``phase``,
    ``required``, ``enabled`` and ``skip_message``.
    """

    label: str
    phase: Phase
    required: bool
    enabled: bool
    skip_message: str

    async def execute(self, ctx: PipelineContext) -> None:
        raise NotImplementedError


@dataclass
class CommandStep(Step):
    """Run one external command.

    With ``stream=True`` the tool talks to the terminal directly; otherwise
    its output is captured and ``stdin`` may be fed to it.
    """

    label: str
    phase: Phase
    command: str
    args: list[str] = field(default_factory=list)
    required: bool = True
    stream: bool = True
    stdin: str | None = None
    allow_nonzero_exit: bool = False
    in_project: bool = True
    env_overrides: dict[str, str] | None = None
    enabled: bool = True
    skip_message: str = ""

    @property
    def command_line(self) -> str:
        return format_command([self.command, *self.args])

    async def execute(self, ctx: PipelineContext) -> None:
        cwd = ctx.workdir(self.in_project)
        if ctx.verbose:
            console.print(f"[dim]  $ {escape(self.command_line)}[/dim]")
        if self.stream and self.stdin is None:
            await run_inherit(
                self.command,
                self.args,
                cwd=cwd,
                env_overrides=self.env_overrides,
                allow_nonzero_exit=self.allow_nonzero_exit,
                environment=ctx.environment,
            )
        else:
            await run_command(
                self.command,
                self.args,
                cwd=cwd,
                env_overrides=self.env_overrides,
                stdin=self.stdin,
                allow_nonzero_exit=self.allow_nonzero_exit,
                environment=ctx.environment,
            )


@dataclass
class HarvestStep(Step):
    """Run a provisioning command and recover a value from its stdout.

    The command's exit status is ignored; a missing value is fatal.  The
    value is stored in ``ctx.harvested[variable]`` and registered as an
    override for ``target_path`` so the template render picks it up.
    """

    label: str
    phase: Phase
    command: str
    args: list[str]
    predicate: TokenPredicate
    variable: str
    target_path: str
    pattern: str = ""
    in_project: bool = True
    required: bool = True
    enabled: bool = True
    skip_message: str = ""

    async def execute(self, ctx: PipelineContext) -> None:
        result = await run_command(
            self.command,
            self.args,
            cwd=ctx.workdir(self.in_project),
            allow_nonzero_exit=True,
            environment=ctx.environment,
        )
        value = extract_first(result.stdout, self.predicate)
        if value is None:
            raise ExtractionFailed(result.command_line, self.pattern or self.variable)
        ctx.harvested[self.variable] = value
        ctx.overrides.setdefault(self.target_path, {})[self.variable] = value


@dataclass
class RenderStep(Step):
    """Render a template tree into the project root."""

    label: str
    phase: Phase
    templates_dir: Path
    required: bool = True
    enabled: bool = True
    skip_message: str = ""

    async def execute(self, ctx: PipelineContext) -> None:
        await render_templates(
            ctx.project_root,
            self.templates_dir,
            ctx.data,
            ctx.overrides,
            verbose=ctx.verbose,
        )


@dataclass
class FileEditStep(Step):
    """Append to or overwrite a file inside the project root."""

    label: str
    phase: Phase
    path: str
    content: str
    append: bool = True
    required: bool = True
    enabled: bool = True
    skip_message: str = ""

    async def execute(self, ctx: PipelineContext) -> None:
        target = ctx.project_root / self.path
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a" if self.append else "w", encoding="utf-8") as fh:
            fh.write(self.content)


@dataclass
class SequenceStep(Step):
    """Run sub-steps in order as one unit; the first failure ends the unit."""

    label: str
    phase: Phase
    steps: list[Step]
    required: bool = True
    enabled: bool = True
    skip_message: str = ""

    async def execute(self, ctx: PipelineContext) -> None:
        for step in self.steps:
            await step.execute(ctx)
