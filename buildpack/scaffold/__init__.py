"""Project scaffolding -- resolves a template and turns it into a new project.

Quick usage::

    from buildpack.scaffold import ProjectCreator, TemplateResolver

    template_dir = await TemplateResolver(config).resolve("@magento/venia-concept")
"""

from buildpack.scaffold.creator import ProjectCreator
from buildpack.scaffold.environment import EnvironmentConfig, configure_environment, merge
from buildpack.scaffold.resolver import TemplateResolver

__all__ = [
    "EnvironmentConfig",
    "ProjectCreator",
    "TemplateResolver",
    "configure_environment",
    "merge",
]
