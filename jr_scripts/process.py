"""Async external command execution.

Two flavours are provided:

* :func:`run_command` captures stdout/stderr in full and returns a
  :class:`CommandResult`.
* :func:`run_inherit` connects the child to the caller's terminal, so its
  output is shown live and only the exit status is observable.

Both raise :class:`~jr_scripts.errors.SpawnError` when the executable cannot
be started and :class:`~jr_scripts.errors.CommandFailed` on a non-zero exit
unless ``allow_nonzero_exit`` is set.  There is no timeout: a hung tool
hangs the caller.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from jr_scripts.environment import Environment
from jr_scripts.errors import CommandFailed, SpawnError, format_command


@dataclass
class CommandResult:
    """Outcome of a captured command."""

    command: list[str]
    exit_code: int | None
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @property
    def command_line(self) -> str:
        return format_command(self.command)


def _resolve_env(
    environment: Environment | None,
    env_overrides: Mapping[str, str] | None,
) -> dict[str, str]:
    base = environment if environment is not None else Environment.from_os()
    return base.merged(env_overrides)


async def _spawn(
    argv: list[str],
    cwd: str | Path | None,
    env: dict[str, str],
    *,
    capture: bool,
    feed_stdin: bool,
) -> asyncio.subprocess.Process:
    if capture:
        stdin = asyncio.subprocess.PIPE if feed_stdin else asyncio.subprocess.DEVNULL
        stdout = stderr = asyncio.subprocess.PIPE
    else:
        stdin = stdout = stderr = None
    try:
        return await asyncio.create_subprocess_exec(
            *argv,
            stdin=stdin,
            stdout=stdout,
            stderr=stderr,
            cwd=str(cwd) if cwd else None,
            env=env,
        )
    except OSError as exc:
        raise SpawnError(argv, exc.strerror or str(exc)) from exc


async def run_command(
    command: str,
    args: Sequence[str] = (),
    *,
    cwd: str | Path | None = None,
    env_overrides: Mapping[str, str] | None = None,
    stdin: str | None = None,
    allow_nonzero_exit: bool = False,
    environment: Environment | None = None,
) -> CommandResult:
    """Run *command* with *args* and capture its output.

    Args:
        command: Executable name (looked up on ``PATH``) or path.
        args: Ordered argument list.
        cwd: Working directory for the child; defaults to ours.
        env_overrides: Variables layered on top of *environment*.
        stdin: Text written to the child's stdin before it is closed.  When
            ``None`` the child sees an already-closed stdin and can never
            block waiting for input.
        allow_nonzero_exit: Report a non-zero exit in the result instead of
            raising ``CommandFailed``.
        environment: Base environment; defaults to a snapshot of ``os.environ``.

    Returns:
        A ``CommandResult`` with the full decoded stdout and stderr.
    """
    argv = [command, *args]
    process = await _spawn(
        argv,
        cwd,
        _resolve_env(environment, env_overrides),
        capture=True,
        feed_stdin=stdin is not None,
    )
    payload = stdin.encode("utf-8") if stdin is not None else None
    stdout_bytes, stderr_bytes = await process.communicate(input=payload)

    result = CommandResult(
        command=argv,
        exit_code=process.returncode,
        stdout=(stdout_bytes or b"").decode("utf-8", errors="replace"),
        stderr=(stderr_bytes or b"").decode("utf-8", errors="replace"),
    )
    if not result.ok and not allow_nonzero_exit:
        exit_code = result.exit_code if result.exit_code is not None else -1
        raise CommandFailed(argv, exit_code, result.stderr)
    return result


async def run_inherit(
    command: str,
    args: Sequence[str] = (),
    *,
    cwd: str | Path | None = None,
    env_overrides: Mapping[str, str] | None = None,
    allow_nonzero_exit: bool = False,
    environment: Environment | None = None,
) -> int:
    """Run *command* attached to the current terminal and return its exit code.

    The child inherits our stdin, stdout and stderr, so interactive prompts
    and progress bars from the tool work unchanged.
    """
    argv = [command, *args]
    process = await _spawn(
        argv,
        cwd,
        _resolve_env(environment, env_overrides),
        capture=False,
        feed_stdin=False,
    )
    exit_code = await process.wait()
    if exit_code != 0 and not allow_nonzero_exit:
        raise CommandFailed(argv, exit_code)
    return exit_code
