"""``create-project`` orchestration.

Runs the steps of one project creation in order:

1. RESOLVE     -- find the template package (directory, debug, cache, registry).
2. MATERIALIZE -- copy the template into the target and customize it.
3. CONFIGURE   -- merge command-line settings into the environment.
4. ENV FILE    -- write the project's ``.env``.
5. INSTALL     -- optionally install dependencies.
6. GUIDE       -- print next steps.

Every step completes before the next one starts.  Errors propagate to the
caller; filesystem failures while preparing the target or writing ``.env``
surface as ``ProjectMaterializeError``.  Nothing is retried or rolled back.
"""

from __future__ import annotations

from pathlib import Path

from buildpack.config import BuildpackConfig, NpmClient, ProjectParams
from buildpack.errors import ProjectMaterializeError
from buildpack.scaffold.envfile import write_env_file
from buildpack.scaffold.environment import EnvironmentConfig, configure_environment
from buildpack.scaffold.guidance import NextSteps, print_next_steps
from buildpack.scaffold.installer import install_dependencies
from buildpack.scaffold.materializer import materialize_project
from buildpack.scaffold.resolver import TemplateResolver
from buildpack.utils import ensure_dir, print_info, print_success, print_warning


class ProjectCreator:
    """Creates one project from a template.

    Attributes:
        params: Invocation parameters for this run.
        config: Tool-level configuration.
        env: Environment snapshot; replaced by the merged configuration once
            ``run`` reaches the configure step.
    """

    def __init__(
        self,
        params: ProjectParams,
        config: BuildpackConfig | None = None,
        env: EnvironmentConfig | None = None,
        resolver: TemplateResolver | None = None,
    ) -> None:
        self.params = params
        self.config = config or BuildpackConfig.from_env()
        self.env = env if env is not None else EnvironmentConfig.from_os()
        self.resolver = resolver or TemplateResolver(self.config)

    async def run(self) -> NextSteps:
        """Create the project and return the guidance that was printed."""
        params = self.params

        template_dir = await self.resolver.resolve(params.template, use_cache=params.cache)

        try:
            directory = ensure_dir(params.directory)
        except OSError as exc:
            raise ProjectMaterializeError(
                f"Could not create project directory {params.directory}: {exc}"
            ) from exc
        print_info(f"Creating a new PWA project '{params.name}' in {params.directory}")
        await materialize_project(template_dir, params)

        self.env, warnings = configure_environment(self.env, params)
        for warning in warnings:
            print_warning(warning)

        try:
            write_env_file(directory, self.env)
        except OSError as exc:
            raise ProjectMaterializeError(f"Could not write .env in {directory}: {exc}") from exc

        if params.install:
            await install_dependencies(directory, NpmClient(params.npm_client), self.env)
            print_success(f"Installed dependencies for '{params.name}' project")

        return print_next_steps(params, Path.cwd())
