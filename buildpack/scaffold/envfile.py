"""Writes the ``.env`` file of a newly created project.

The file holds one section per variable namespace.  Variables set in the
merged ``EnvironmentConfig`` are written as ``KEY=value``; the rest are left
as commented-out placeholders so the developer can see what is available.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined

from buildpack.scaffold.environment import SETTINGS, EnvironmentConfig

ENV_FILE_NAME = ".env"

_ENV_TEMPLATE = """\
########    PWA Studio Environment Variables    ###############################
#
#   This file contains environment variables for a PWA Studio project.
#   Generated on {{ generated_at }}.
#
{% for section in sections %}

#### {{ section.title }} {{ "#" * (72 - section.title | length) }}
{% for var in section.variables %}
{% if var.value is not none %}
{{ var.name }}={{ var.value }}
{% else %}
# {{ var.name }}=
{% endif %}
{% endfor %}
{% endfor %}
"""

_env = Environment(
    autoescape=False,
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)


def _sections(env: EnvironmentConfig) -> list[dict[str, Any]]:
    grouped: dict[str, list[dict[str, str | None]]] = {}
    for setting in SETTINGS:
        grouped.setdefault(setting.namespace, []).append(
            {"name": setting.env_name, "value": env.get(setting.env_name) or None}
        )
    return [
        {"title": f"{namespace.capitalize()} settings", "variables": variables}
        for namespace, variables in grouped.items()
    ]


def render_env_file(env: EnvironmentConfig, generated_at: datetime | None = None) -> str:
    """Render the ``.env`` contents for *env*."""
    template = _env.from_string(_ENV_TEMPLATE)
    stamp = (generated_at or datetime.now(timezone.utc)).isoformat(timespec="seconds")
    return template.render(generated_at=stamp, sections=_sections(env))


def write_env_file(directory: str | Path, env: EnvironmentConfig) -> Path:
    """Write ``<directory>/.env``, replacing any existing file.

    Returns:
        Path to the written file.
    """
    target = Path(directory) / ENV_FILE_NAME
    target.write_text(render_env_file(env), encoding="utf-8")
    return target
