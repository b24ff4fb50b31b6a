"""Template resolution.

Turns a template identifier into a local directory holding a template
package.  Resolution is an ordered list of strategies; each one either
returns a path, returns ``None`` to let the next strategy try, or raises.
``InvalidTemplateError`` raised by a strategy is recorded and resolution
moves on; any other ``BuildpackError`` (notably
``UnsupportedDebugTemplateError``) aborts immediately.
"""

from __future__ import annotations

import asyncio
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from buildpack.config import BuildpackConfig
from buildpack.errors import InvalidTemplateError, UnsupportedDebugTemplateError
from buildpack.scaffold.registry import (
    PACKAGE_DESCRIPTOR,
    TARBALL_ROOT,
    RegistryClient,
    package_path,
)
from buildpack.utils import display_path, is_readable_dir, print_info, print_warning


class ResolutionStrategy(ABC):
    """One way of finding a template package on disk."""

    name: str = "strategy"

    @abstractmethod
    async def resolve(self, identifier: str) -> Path | None:
        """Return the template directory, or ``None`` if this strategy misses."""


class LocalDirectoryStrategy(ResolutionStrategy):
    """The identifier is itself a readable directory."""

    name = "directory"

    async def resolve(self, identifier: str) -> Path | None:
        if not await asyncio.to_thread(is_readable_dir, identifier):
            return None
        print_info(f"Found {identifier} directory")
        return Path(identifier)


class DebugSiblingStrategy(ResolutionStrategy):
    """Serve the supported template from a sibling checkout, bypassing cache and registry."""

    name = "debug"

    def __init__(self, supported: str, sibling_dir: Path) -> None:
        self.supported = supported
        self.sibling_dir = sibling_dir

    async def resolve(self, identifier: str) -> Path | None:
        print_warning("Env var DEBUG_PROJECT_CREATION=1. Bypassing cache and NPM registry.")
        if identifier != self.supported:
            raise UnsupportedDebugTemplateError(identifier, self.supported)
        print_warning(
            f'Attempting to resolve "{identifier}" as a sibling package from '
            f"{display_path(self.sibling_dir)}."
        )
        return self.sibling_dir


class CacheStrategy(ResolutionStrategy):
    """A previously extracted package in the scaffold template cache."""

    name = "cache"

    def __init__(self, cache_dir: Path) -> None:
        self.cache_dir = cache_dir

    def package_root(self, identifier: str) -> Path:
        return package_path(self.cache_dir, identifier) / TARBALL_ROOT

    async def resolve(self, identifier: str) -> Path | None:
        package_root = self.package_root(identifier)
        if not package_root.exists():
            return None
        try:
            entries = await asyncio.to_thread(lambda: {p.name for p in package_root.iterdir()})
        except OSError as exc:
            raise InvalidTemplateError(f"unreadable cache entry {package_root}: {exc}") from exc
        if PACKAGE_DESCRIPTOR not in entries:
            return None
        print_info(f"Found {identifier} template in cache")
        return package_root


class RegistryStrategy(ResolutionStrategy):
    """Download and unpack the package from the registry."""

    name = "registry"

    def __init__(self, client: RegistryClient, base_dir: Path, cached: bool = True) -> None:
        self.client = client
        self.base_dir = base_dir
        self.cached = cached

    async def resolve(self, identifier: str) -> Path | None:
        if not self.cached:
            print_warning(f'Bypassing cache to get "{identifier}"')
        return await self.client.fetch_package(identifier, self.base_dir)


class TemplateResolver:
    """Resolves template identifiers to directories.

    The strategy chain is built per call from the configuration:

    1. literal directory path
    2. debug sibling checkout (debug mode only; success or fatal error)
    3. template cache (caching enabled only)
    4. package registry
    """

    def __init__(self, config: BuildpackConfig, client: RegistryClient | None = None) -> None:
        self.config = config
        self.client = client or RegistryClient(config.registry_url, config.registry_timeout)

    def strategies(self, use_cache: bool) -> list[ResolutionStrategy]:
        """Return the ordered strategy chain for one resolution."""
        chain: list[ResolutionStrategy] = [LocalDirectoryStrategy()]
        if self.config.debug:
            chain.append(
                DebugSiblingStrategy(self.config.debug_template, self.config.debug_template_dir)
            )
            return chain

        cache = self.config.use_cache(use_cache)
        if cache:
            chain.append(CacheStrategy(self.config.cache_dir))
        base_dir = self.config.cache_dir if cache else Path(tempfile.gettempdir())
        chain.append(RegistryStrategy(self.client, base_dir, cached=cache))
        return chain

    async def resolve(self, identifier: str, use_cache: bool = True) -> Path:
        """Resolve *identifier* to a template directory.

        Raises:
            UnsupportedDebugTemplateError: Debug mode with an unsupported template.
            InvalidTemplateError: Every strategy missed or failed; ``attempts``
                lists the failures.
        """
        attempts: list[tuple[str, Exception]] = []
        for strategy in self.strategies(use_cache):
            try:
                path = await strategy.resolve(identifier)
            except InvalidTemplateError as exc:
                attempts.append((strategy.name, exc))
                continue
            if path is not None:
                return path

        raise InvalidTemplateError(f'Could not resolve template "{identifier}"', attempts)
