"""Dependency installation for a newly created project."""

from __future__ import annotations

from pathlib import Path

from buildpack.config import NpmClient
from buildpack.errors import InstallFailureError
from buildpack.scaffold.environment import EnvironmentConfig
from buildpack.utils import run_command


def install_command(npm_client: NpmClient) -> list[str]:
    """Return the install command line for *npm_client*."""
    return [NpmClient(npm_client).value, "install"]


async def install_dependencies(
    directory: str | Path,
    npm_client: NpmClient,
    env: EnvironmentConfig | None = None,
) -> None:
    """Run ``<client> install`` in *directory* and wait for it to finish.

    The child inherits the terminal so the package manager's own progress
    output is visible.  There is no timeout.

    Raises:
        InstallFailureError: If the package manager exits non-zero or cannot
            be started.
    """
    cmd = install_command(npm_client)
    try:
        returncode, _, _ = await run_command(
            cmd,
            cwd=directory,
            capture=False,
            env=env.as_dict() if env is not None else None,
        )
    except FileNotFoundError as exc:
        raise InstallFailureError(" ".join(cmd), 127) from exc
    if returncode != 0:
        raise InstallFailureError(" ".join(cmd), returncode)
