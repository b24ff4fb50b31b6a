"""The "next steps" block printed after a project is created."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from rich.markup import escape

from buildpack.config import NpmClient, ProjectParams
from buildpack.utils import print_panel


@dataclass
class NextSteps:
    """Commands a developer should run in the new project."""

    client: str
    prerequisites: list[str] = field(default_factory=list)
    commands: list[tuple[str, str]] = field(default_factory=list)

    @property
    def prerequisite_command(self) -> str:
        return " && ".join(self.prerequisites)


def next_steps(params: ProjectParams, cwd: str | Path | None = None) -> NextSteps:
    """Build the guidance for a finished ``create-project`` run."""
    client = NpmClient(params.npm_client).value
    steps = NextSteps(client=client)

    here = Path(cwd or os.getcwd()).resolve()
    if here != Path(params.directory).resolve():
        steps.prerequisites.append(f"cd {params.directory}")
    if not params.install:
        steps.prerequisites.append(f"{client} install")

    # npm needs "--" to forward arguments to the script; yarn does not.
    separator = " --" if params.npm_client == NpmClient.NPM else ""
    steps.commands = [
        (
            f"run buildpack{separator} create-custom-origin .",
            "to generate a unique, secure custom domain for your new project. "
            "[bold green]Highly recommended.[/bold green]",
        ),
        ("run watch", "to start the dev server and do real-time development."),
        (
            "run storybook",
            "to start Storybook dev server and view available components in your app.",
        ),
        ("run build", "to build the project into optimized assets in the '/dist' directory."),
        ("start", "after build to preview the app on a local staging server."),
    ]
    return steps


def render_next_steps(steps: NextSteps) -> str:
    """Render *steps* as Rich markup."""
    lines: list[str] = []
    if steps.prerequisites:
        lines.append(
            f"- [bold white]{escape(steps.prerequisite_command)}[/bold white] "
            "before running the below commands."
        )
    for command, description in steps.commands:
        lines.append(f" - [bold white]{steps.client} {escape(command)}[/bold white] {description}")
    return "\n".join(lines)


def print_next_steps(params: ProjectParams, cwd: str | Path | None = None) -> NextSteps:
    """Print the guidance panel and return the steps that were shown."""
    steps = next_steps(params, cwd)
    print_panel(
        render_next_steps(steps),
        title=f"Created new PWA project {escape(params.name)}. Next steps",
    )
    return steps
