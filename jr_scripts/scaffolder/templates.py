"""Jinja2 template-tree rendering for project scaffolding.

A template tree is a directory whose ``*.j2`` files are rendered into a
project root at the mirrored path with the ``.j2`` suffix stripped:

1. :func:`discover_templates` reads the tree into ``TemplateEntry`` values.
2. :class:`TemplateRenderer` renders each entry against its variable scope
   and writes the result.

Variable scope for one entry is the global data shallow-merged with the
override registered under the entry's output path (``.env.local``) or,
failing that, under its template path (``.env.local.j2``).

Files under a path component that starts with ``_`` are partials: they are
never emitted, but other templates can ``{% include %}`` them.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from rich.markup import escape

from jr_scripts.errors import TemplateRenderError
from jr_scripts.utils import console, print_warning

TEMPLATE_SUFFIX = ".j2"
PARTIAL_PREFIX = "_"


# ---------------------------------------------------------------------------
# Template discovery
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateEntry:
    """One template file, keyed by its POSIX path relative to the template root."""

    template_path: str
    content: str

    @property
    def output_path(self) -> str:
        """Destination path relative to the project root."""
        return self.template_path[: -len(TEMPLATE_SUFFIX)]


def is_partial(relative: Path) -> bool:
    """Return ``True`` if any component of *relative* marks it as a partial."""
    return any(part.startswith(PARTIAL_PREFIX) for part in relative.parts)


def discover_templates(templates_root: str | Path) -> list[TemplateEntry]:
    """Return every emittable template under *templates_root*, in walk order.

    Non-``.j2`` files and partials are skipped.  A missing root yields an
    empty list.
    """
    root = Path(templates_root)
    if not root.is_dir():
        return []

    entries: list[TemplateEntry] = []
    for template_file in sorted(root.rglob(f"*{TEMPLATE_SUFFIX}")):
        if not template_file.is_file():
            continue
        rel = template_file.relative_to(root)
        if is_partial(rel):
            continue
        try:
            content = template_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise TemplateRenderError(rel.as_posix(), str(exc)) from exc
        entries.append(TemplateEntry(template_path=rel.as_posix(), content=content))
    return entries


def resolve_scope(
    entry: TemplateEntry,
    data: Mapping[str, Any],
    overrides: Mapping[str, Mapping[str, Any]] | None = None,
) -> dict[str, Any]:
    """Compute the variable scope for *entry*.

    The output-path override wins over the template-path override; only one
    of them is applied.  Both win over *data*.
    """
    overrides = overrides or {}
    file_vars = overrides.get(entry.output_path)
    if file_vars is None:
        file_vars = overrides.get(entry.template_path, {})
    return {**data, **file_vars}


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders a template tree into a project directory.

    Undefined variables raise ``TemplateRenderError``.
    """

    def __init__(self, templates_root: str | Path, *, verbose: bool = True) -> None:
        self.templates_root = Path(templates_root)
        self.verbose = verbose
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_root)),
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_entry(self, entry: TemplateEntry, scope: Mapping[str, Any]) -> str:
        """Render a single entry.

        Any failure, whether Jinja2 rejects the template or an expression
        raises while evaluating, is wrapped in ``TemplateRenderError``.
        """
        try:
            return self.env.from_string(entry.content).render(**scope)
        except Exception as exc:
            raise TemplateRenderError(entry.template_path, str(exc)) from exc

    async def render_tree(
        self,
        project_root: str | Path,
        data: Mapping[str, Any] | None = None,
        overrides: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> list[Path]:
        """Render every template into *project_root*.

        Existing files are overwritten.  The first failing template aborts the
        pass; files already written stay on disk.  When the template root does
        not exist a warning is printed and nothing is touched.

        Returns:
            Written file paths, in render order.
        """
        if not self.templates_root.is_dir():
            print_warning(f"Templates directory does not exist: {self.templates_root}")
            return []

        data = data or {}
        out_base = Path(project_root)
        written: list[Path] = []

        entries = await asyncio.to_thread(discover_templates, self.templates_root)
        for entry in entries:
            content = self.render_entry(entry, resolve_scope(entry, data, overrides))
            output_file = out_base / entry.output_path
            await asyncio.to_thread(_write_file, output_file, content)
            written.append(output_file)
            if self.verbose:
                console.print(f"  • {escape(entry.output_path)}")

        return written


async def render_templates(
    project_root: str | Path,
    templates_root: str | Path,
    data: Mapping[str, Any] | None = None,
    overrides: Mapping[str, Mapping[str, Any]] | None = None,
    *,
    verbose: bool = True,
) -> list[Path]:
    """Render the tree at *templates_root* into *project_root*.

    Convenience wrapper around :meth:`TemplateRenderer.render_tree`.
    """
    renderer = TemplateRenderer(templates_root, verbose=verbose)
    return await renderer.render_tree(project_root, data, overrides)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
