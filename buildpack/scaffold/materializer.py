"""Project materialization.

Copies a resolved template package into the target directory and customizes
its ``package.json`` for the new project.
"""

from __future__ import annotations

import asyncio
import json
import shutil
from pathlib import Path
from typing import Any

from buildpack.config import ProjectParams
from buildpack.errors import ProjectMaterializeError
from buildpack.scaffold.registry import PACKAGE_DESCRIPTOR

# Never copied from a template.
IGNORED_NAMES = frozenset(
    {"node_modules", ".git", "_buildpack", "CHANGELOG.md", "package-lock.json", "yarn.lock"}
)

# npm drops .gitignore from published tarballs, so templates ship it under
# one of these names.
GITIGNORE_ALIASES = ("gitignore", ".npmignore")

# Fields that describe the template's own publication, not the new project.
DROPPED_PACKAGE_FIELDS = ("publishConfig", "repository", "bugs", "homepage")

INITIAL_VERSION = "0.0.1"


def customize_package(package: dict[str, Any], params: ProjectParams) -> dict[str, Any]:
    """Return a copy of the template's ``package.json`` data for the new project."""
    result = {k: v for k, v in package.items() if k not in DROPPED_PACKAGE_FIELDS}
    result["name"] = params.name
    result["version"] = INITIAL_VERSION
    result["private"] = True
    if params.author:
        result["author"] = params.author
    return result


def _ignore(directory: str, names: list[str]) -> set[str]:
    return {name for name in names if name in IGNORED_NAMES}


def _copy_template(template_dir: Path, target: Path, params: ProjectParams) -> Path:
    descriptor = template_dir / PACKAGE_DESCRIPTOR
    if not descriptor.is_file():
        raise ProjectMaterializeError(
            f"Template at {template_dir} has no {PACKAGE_DESCRIPTOR}"
        )
    if (target / PACKAGE_DESCRIPTOR).exists():
        raise ProjectMaterializeError(
            f"{target} already contains a {PACKAGE_DESCRIPTOR}; refusing to overwrite it"
        )

    try:
        package = json.loads(descriptor.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ProjectMaterializeError(f"Template {descriptor} is not valid JSON: {exc}") from exc

    shutil.copytree(template_dir, target, ignore=_ignore, dirs_exist_ok=True)

    gitignore = target / ".gitignore"
    for alias in GITIGNORE_ALIASES:
        candidate = target / alias
        if candidate.is_file() and not gitignore.exists():
            candidate.rename(gitignore)

    (target / PACKAGE_DESCRIPTOR).write_text(
        json.dumps(customize_package(package, params), indent=2) + "\n",
        encoding="utf-8",
    )
    return target


async def materialize_project(template_dir: str | Path, params: ProjectParams) -> Path:
    """Write the new project's files into ``params.directory``.

    Args:
        template_dir: Resolved template package root.
        params: Invocation parameters; ``name`` and ``author`` end up in the
            generated ``package.json``.

    Returns:
        Path to the project root.

    Raises:
        ProjectMaterializeError: If the template has no package descriptor,
            the target already holds a project, or copying fails.
    """
    try:
        return await asyncio.to_thread(
            _copy_template, Path(template_dir), Path(params.directory), params
        )
    except OSError as exc:
        raise ProjectMaterializeError(f"Could not copy template into {params.directory}: {exc}") from exc
