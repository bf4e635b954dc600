"""jr-scripts configuration.

Typed settings for one ``mknext`` run.  Values come from the command line
and, for the knobs that have no flag, from ``JR_SCRIPTS_*`` environment
variables read through an explicit :class:`~jr_scripts.environment.Environment`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from jr_scripts.environment import Environment

MKNEXT_TEMPLATE_DIR = Path(__file__).parent / "scaffolder" / "templates" / "mknext"


class Config(BaseModel):
    """Settings for a single scaffolding run."""

    app_name: str = Field(..., description="Directory name of the app to create")
    cwd: Path = Field(default_factory=Path.cwd, description="Directory the app is created in")
    templates_dir: Path = Field(default=MKNEXT_TEMPLATE_DIR)
    extra_args: list[str] = Field(
        default_factory=list,
        description="Unrecognised CLI flags, passed through to the scaffolder",
    )
    database_url_prefix: str = Field(default="postgresql://")
    env_file: str = Field(default=".env.local", description="Rendered file that receives DATABASE_URL")
    auth_url: str = Field(default="http://localhost:3000")
    commit: bool = Field(default=True)
    commit_message: str = Field(default="Initial commit from mknext script")
    open_editor: bool = Field(default=True)
    verbose: bool = Field(default=True, description="Print every rendered template")

    @field_validator("app_name")
    @classmethod
    def _check_app_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("provide a project directory name. Usage: jr mknext <app-name>")
        if "/" in value or "\\" in value:
            raise ValueError(f"app name must be a single directory name, got {value!r}")
        return value

    @property
    def project_root(self) -> Path:
        """Directory the primary scaffolder creates and every later step runs in."""
        return self.cwd / self.app_name

    @classmethod
    def from_env(cls, app_name: str, environment: Environment, **overrides: Any) -> "Config":
        """Build a ``Config`` from environment variables plus explicit *overrides*.

        Recognised variables (all optional):
            JR_SCRIPTS_TEMPLATES_DIR, JR_SCRIPTS_DB_PREFIX,
            JR_SCRIPTS_NO_COMMIT, JR_SCRIPTS_NO_EDITOR, JR_SCRIPTS_QUIET.

        Keyword *overrides* win over the environment.
        """
        kwargs: dict[str, Any] = {}
        if environment.get("JR_SCRIPTS_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(environment["JR_SCRIPTS_TEMPLATES_DIR"])
        if environment.get("JR_SCRIPTS_DB_PREFIX"):
            kwargs["database_url_prefix"] = environment["JR_SCRIPTS_DB_PREFIX"]
        if environment.flag("JR_SCRIPTS_NO_COMMIT"):
            kwargs["commit"] = False
        if environment.flag("JR_SCRIPTS_NO_EDITOR"):
            kwargs["open_editor"] = False
        if environment.flag("JR_SCRIPTS_QUIET"):
            kwargs["verbose"] = False
        kwargs.update(overrides)
        return cls(app_name=app_name, **kwargs)
