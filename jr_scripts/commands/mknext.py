"""The ``mknext`` recipe: Next.js + shadcn/ui + Prisma + better-auth.

:func:`build_steps` turns a :class:`~jr_scripts.config.Config` into the
ordered step list the :class:`~jr_scripts.pipeline.Pipeline` runs, and
:func:`build_context` prepares the shared template data.
"""

from __future__ import annotations

import secrets
import sys

from jr_scripts.config import Config
from jr_scripts.devmode import is_dev_environment
from jr_scripts.environment import Environment
from jr_scripts.extract import starts_with
from jr_scripts.steps import (
    CommandStep,
    FileEditStep,
    HarvestStep,
    PipelineContext,
    RenderStep,
    SequenceStep,
    Step,
)
from jr_scripts.utils import Phase


def editor_command(platform: str) -> list[str]:
    """Return the argv that opens the current directory in VS Code on *platform*."""
    if platform == "darwin":
        return ["open", "-a", "Visual Studio Code", "."]
    if platform == "win32":
        return ["cmd", "/c", "start", "code", "."]
    return ["code", "."]


def build_context(config: Config, environment: Environment) -> PipelineContext:
    """Create the shared run state with the global template data."""
    return PipelineContext(
        project_root=config.project_root,
        cwd=config.cwd,
        environment=environment,
        data={
            "app_name": config.app_name,
            "BETTER_AUTH_URL": config.auth_url,
            "BETTER_AUTH_SECRET": secrets.token_urlsafe(32),
        },
        verbose=config.verbose,
    )


def build_steps(
    config: Config,
    environment: Environment,
    platform: str | None = None,
) -> list[Step]:
    """Assemble the ordered mknext pipeline for *config*."""
    platform = platform or sys.platform
    dev_mode = is_dev_environment(environment)
    editor = editor_command(platform)

    if not config.commit:
        commit_skip = "Skipping git commit (disabled)"
    elif dev_mode:
        commit_skip = "Skipping git commit (dev mode detected)"
    else:
        commit_skip = ""

    return [
        CommandStep(
            label="Checking for npm",
            phase=Phase.PREFLIGHT,
            command="npm",
            args=["--version"],
            stream=False,
            in_project=False,
        ),
        CommandStep(
            label=f"Creating Next.js app: {config.app_name}",
            phase=Phase.PRIMARY_SCAFFOLD,
            command="npx",
            args=["create-next-app@latest", config.app_name, "--yes", "--use-npm", *config.extra_args],
            in_project=False,
        ),
        FileEditStep(
            label="Ignoring local env files",
            phase=Phase.PRIMARY_SCAFFOLD,
            path=".gitignore",
            content="\n.env.*.local",
        ),
        CommandStep(
            label="Initializing shadcn/ui (non-interactive)",
            phase=Phase.DEPENDENCY_INSTALL,
            command="npx",
            args=["--yes", "shadcn@latest", "init", "-y", "--template", "next", "--base-color", "neutral"],
        ),
        CommandStep(
            label="Adding ALL shadcn/ui components",
            phase=Phase.DEPENDENCY_INSTALL,
            command="npx",
            args=["--yes", "shadcn@latest", "add", "--all", "-y"],
        ),
        CommandStep(
            label="Installing Prisma CLI",
            phase=Phase.DEPENDENCY_INSTALL,
            command="npm",
            args=["install", "-D", "prisma"],
        ),
        CommandStep(
            label="Installing @prisma/client and better-auth",
            phase=Phase.DEPENDENCY_INSTALL,
            command="npm",
            args=["install", "@prisma/client", "better-auth"],
        ),
        CommandStep(
            label="Prisma init (PostgreSQL)",
            phase=Phase.EXTERNAL_INIT,
            command="npx",
            args=["prisma", "init", "--datasource-provider", "postgresql"],
        ),
        FileEditStep(
            label="Clearing the .env written by prisma init",
            phase=Phase.EXTERNAL_INIT,
            path=".env",
            content="",
            append=False,
        ),
        HarvestStep(
            label="Creating a temporary Prisma Postgres database (expires ~24h)",
            phase=Phase.VALUE_HARVEST,
            command="npx",
            args=["--yes", "create-db@latest"],
            predicate=starts_with(config.database_url_prefix),
            pattern=f"{config.database_url_prefix}...",
            variable="DATABASE_URL",
            target_path=config.env_file,
        ),
        RenderStep(
            label="Adding template code",
            phase=Phase.TEMPLATE_RENDER,
            templates_dir=config.templates_dir,
        ),
        CommandStep(
            label="Prisma generate",
            phase=Phase.POST_PROCESS,
            command="npx",
            args=["prisma", "generate"],
        ),
        CommandStep(
            label="Running better-auth CLI generate (auto-confirm)",
            phase=Phase.POST_PROCESS,
            command="npx",
            args=["@better-auth/cli@latest", "generate"],
            stream=False,
            stdin="y\n",
            allow_nonzero_exit=True,
        ),
        CommandStep(
            label="Pushing Prisma schema to remote database",
            phase=Phase.POST_PROCESS,
            command="npx",
            args=["env-cmd", "-f", config.env_file, "prisma", "db", "push"],
        ),
        SequenceStep(
            label="Committing changes to git",
            phase=Phase.VERSION_CONTROL_COMMIT,
            required=False,
            enabled=not commit_skip,
            skip_message=commit_skip,
            steps=[
                CommandStep(
                    label="git add",
                    phase=Phase.VERSION_CONTROL_COMMIT,
                    command="git",
                    args=["add", "."],
                    stream=False,
                ),
                CommandStep(
                    label="git commit",
                    phase=Phase.VERSION_CONTROL_COMMIT,
                    command="git",
                    args=["commit", "-m", config.commit_message],
                    stream=False,
                    allow_nonzero_exit=True,
                ),
            ],
        ),
        CommandStep(
            label="Opening VS Code",
            phase=Phase.EDITOR_LAUNCH,
            command=editor[0],
            args=editor[1:],
            required=False,
            stream=False,
            allow_nonzero_exit=True,
            enabled=config.open_editor,
            skip_message="Skipping editor launch (disabled)",
        ),
    ]
