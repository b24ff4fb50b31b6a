"""Buildpack configuration.

Typed configuration for a ``create-project`` run.  ``ProjectParams`` holds the
invocation parameters parsed from the command line; ``BuildpackConfig`` holds
tool-level settings (registry, cache location, debug mode) that are read from
environment variables.  Both are Pydantic v2 models so bad input is rejected
at construction time.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_TEMPLATE = "@magento/venia-concept"
DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"


class NpmClient(str, Enum):
    """Package manager used to install the new project's dependencies."""

    NPM = "npm"
    YARN = "yarn"


class ProjectParams(BaseModel):
    """Invocation parameters for one ``create-project`` run.

    Immutable once parsed.  ``name`` falls back to the final component of
    ``directory`` when it is not supplied.
    """

    model_config = ConfigDict(frozen=True)

    directory: Path
    template: str = Field(default=DEFAULT_TEMPLATE)
    name: str = Field(default="")
    author: str | None = Field(default=None)
    backend_url: str | None = Field(default=None)
    backend_edition: str | None = Field(default=None)
    braintree_token: str | None = Field(default=None)
    install: bool = Field(default=True)
    npm_client: NpmClient = Field(default=NpmClient.NPM)
    cache: bool = Field(default=True)

    @model_validator(mode="before")
    @classmethod
    def _default_name(cls, data: object) -> object:
        if isinstance(data, dict) and not data.get("name") and data.get("directory"):
            data = {**data, "name": Path(data["directory"]).resolve().name}
        return data


def _default_cache_dir() -> Path:
    base = os.environ.get("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return Path(base) / "pwa-buildpack" / "scaffold-templates"


def _default_debug_template_dir() -> Path:
    # Assumes a monorepo checkout with venia-concept next to this package.
    return Path(__file__).resolve().parent.parent.parent / "venia-concept"


class BuildpackConfig(BaseModel):
    """Tool-level settings shared by every step of a run."""

    registry_url: str = Field(default=DEFAULT_REGISTRY_URL)
    cache_dir: Path = Field(default_factory=_default_cache_dir)
    debug: bool = Field(default=False, description="Resolve templates from a sibling checkout")
    debug_template: str = Field(default=DEFAULT_TEMPLATE)
    debug_template_dir: Path = Field(default_factory=_default_debug_template_dir)
    registry_timeout: float = Field(
        default=30.0, gt=0, description="Seconds to wait for registry metadata responses"
    )

    def use_cache(self, requested: bool) -> bool:
        """Caching is always off in debug mode."""
        return requested and not self.debug

    @classmethod
    def from_env(cls) -> "BuildpackConfig":
        """Build a ``BuildpackConfig`` from environment variables.

        Recognised variables (all optional):
            DEBUG_PROJECT_CREATION, BUILDPACK_REGISTRY_URL,
            BUILDPACK_CACHE_DIR, BUILDPACK_DEBUG_TEMPLATE_DIR.
        """
        kwargs: dict[str, object] = {
            "debug": bool(os.environ.get("DEBUG_PROJECT_CREATION")),
        }
        if os.environ.get("BUILDPACK_REGISTRY_URL"):
            kwargs["registry_url"] = os.environ["BUILDPACK_REGISTRY_URL"].rstrip("/")
        if os.environ.get("BUILDPACK_CACHE_DIR"):
            kwargs["cache_dir"] = Path(os.environ["BUILDPACK_CACHE_DIR"])
        if os.environ.get("BUILDPACK_DEBUG_TEMPLATE_DIR"):
            kwargs["debug_template_dir"] = Path(os.environ["BUILDPACK_DEBUG_TEMPLATE_DIR"])
        return cls(**kwargs)
