"""jr-scripts command line.

Usage::

    jr mknext my-app
    jr mknext my-app --no-open --src-dir      # --src-dir goes to create-next-app
    python -m jr_scripts mknext my-app
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from jr_scripts import __version__
from jr_scripts.commands.mknext import build_context, build_steps
from jr_scripts.config import Config
from jr_scripts.environment import Environment
from jr_scripts.pipeline import Pipeline
from jr_scripts.utils import console, err_console, print_success


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jr",
        allow_abbrev=False,
        description="JR scripts CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    mknext = subparsers.add_parser(
        "mknext",
        help="Create a Next.js app with shadcn/ui and Prisma",
        allow_abbrev=False,
        description=(
            "Create a Next.js app with shadcn/ui, Prisma and better-auth.\n"
            "Unrecognised flags are passed through to create-next-app."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    mknext.add_argument("app_name", metavar="app-name", help="App directory name")
    mknext.add_argument("--no-commit", action="store_true", help="Do not create the initial git commit")
    mknext.add_argument("--no-open", action="store_true", help="Do not open the project in VS Code")
    mknext.add_argument("--quiet", "-q", action="store_true", help="Do not list rendered templates")
    return parser


def run_mknext(args: argparse.Namespace, extra_args: list[str], environment: Environment) -> int:
    """Run the mknext pipeline and return the process exit code."""
    overrides: dict[str, object] = {"extra_args": extra_args}
    if args.no_commit:
        overrides["commit"] = False
    if args.no_open:
        overrides["open_editor"] = False
    if args.quiet:
        overrides["verbose"] = False

    try:
        config = Config.from_env(args.app_name, environment, **overrides)
    except ValidationError as exc:
        message = exc.errors()[0]["msg"] if exc.errors() else str(exc)
        message = message.removeprefix("Value error, ")
        err_console.print(f"mknext failed: {message}", markup=False, soft_wrap=True)
        return 1

    pipeline = Pipeline(build_steps(config, environment), build_context(config, environment))
    outcome = asyncio.run(pipeline.run())

    if not outcome.success:
        err_console.print(f"mknext failed: {outcome.reason}", markup=False, highlight=False, soft_wrap=True)
        return 1

    console.print()
    print_success("✅ Project bootstrapped successfully. Next steps:")
    console.print(f"  cd {config.app_name}", markup=False)
    console.print("  npm run dev", markup=False)
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for ``jr``."""
    parser = build_parser()
    args, extra = parser.parse_known_args(argv)

    if args.command == "mknext":
        sys.exit(run_mknext(args, extra, Environment.from_os()))

    parser.error(f"unknown command: {args.command}")


if __name__ == "__main__":
    main()
