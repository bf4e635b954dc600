"""Template-tree rendering for project scaffolding.

Quick usage::

    from jr_scripts.scaffolder import render_templates

    await render_templates(
        "/tmp/my-app",
        "/path/to/templates",
        {"app_name": "my-app"},
        {".env.local": {"DATABASE_URL": "postgresql://..."}},
    )
"""

from jr_scripts.scaffolder.templates import (
    TemplateEntry,
    TemplateRenderer,
    discover_templates,
    render_templates,
    resolve_scope,
)

__all__ = [
    "TemplateEntry",
    "TemplateRenderer",
    "discover_templates",
    "render_templates",
    "resolve_scope",
]
