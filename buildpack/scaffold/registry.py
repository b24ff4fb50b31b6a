"""Async client for the npm package registry.

Looks up the tarball URL for a package identifier, streams the tarball to
disk and unpacks it the way npm does: every file lands under a top-level
``package/`` directory inside the destination.

Typical usage::

    client = RegistryClient("https://registry.npmjs.org")
    root = await client.fetch_package("@magento/venia-concept@8.0.0", cache_dir)
"""

from __future__ import annotations

import asyncio
import shutil
import tarfile
from pathlib import Path, PurePosixPath
from urllib.parse import quote

import httpx

from buildpack.errors import InvalidTemplateError
from buildpack.utils import ensure_dir, print_info

# npm tarballs always unpack into this directory.
TARBALL_ROOT = "package"
PACKAGE_DESCRIPTOR = "package.json"


def parse_package_spec(identifier: str) -> tuple[str, str]:
    """Split ``name[@version]`` into ``(name, version)``.

    Scoped names keep their leading ``@``.  A missing version means the
    ``latest`` dist-tag.

    Examples::

        parse_package_spec("left-pad")                        -> ("left-pad", "latest")
        parse_package_spec("@magento/venia-concept@8.0.0")    -> ("@magento/venia-concept", "8.0.0")
    """
    spec = identifier.strip()
    if not spec:
        raise ValueError("Package identifier is empty")
    at = spec.rfind("@")
    if at > 0:
        name, version = spec[:at], spec[at + 1:]
    else:
        name, version = spec, ""
    if name.startswith("@") and "/" not in name:
        raise ValueError(f"Scoped package name is missing its package part: {identifier!r}")
    return name, version or "latest"


def package_path(base_dir: Path, identifier: str) -> Path:
    """Return ``<base_dir>/<identifier>``.

    Raises:
        InvalidTemplateError: if *identifier* is absolute or has a ``..``
            segment, so the path would leave *base_dir*.
    """
    relative = PurePosixPath(identifier.replace("\\", "/"))
    if not identifier.strip() or relative.is_absolute() or ".." in relative.parts:
        raise InvalidTemplateError(
            f"Invalid template: {identifier!r} is not a package identifier"
        )
    return base_dir / identifier


def extract_tarball(archive: Path, destination: Path) -> Path:
    """Unpack a gzipped npm tarball into *destination*.

    Returns:
        The extracted package root (``<destination>/package``).

    Raises:
        InvalidTemplateError: If the archive is unreadable or does not hold a
            package descriptor at its root.
    """
    package_root = destination / TARBALL_ROOT
    try:
        # Never mix files from a stale or half-finished extraction.
        if package_root.is_dir():
            shutil.rmtree(package_root)
        elif package_root.exists():
            package_root.unlink()
        with tarfile.open(archive, "r:gz") as tar:
            tar.extractall(destination, filter="data")
    except (tarfile.TarError, OSError) as exc:
        raise InvalidTemplateError(
            f"Invalid template: could not extract tarball: {exc}"
        ) from exc

    if not (package_root / PACKAGE_DESCRIPTOR).is_file():
        raise InvalidTemplateError(
            f"Invalid template: tarball has no {TARBALL_ROOT}/{PACKAGE_DESCRIPTOR}"
        )
    return package_root


class RegistryClient:
    """Fetches template packages from an npm-compatible registry.

    Metadata requests use a bounded timeout; tarball downloads only bound the
    connect phase.
    """

    def __init__(
        self,
        registry_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.registry_url = registry_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self, timeout: httpx.Timeout) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=timeout, follow_redirects=True, transport=self.transport
        )

    def metadata_url(self, name: str, version: str) -> str:
        """Return the per-version metadata URL for ``name@version``."""
        return f"{self.registry_url}/{quote(name, safe='@')}/{quote(version, safe='')}"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_tarball_url(self, identifier: str) -> str:
        """Ask the registry where the tarball for *identifier* lives.

        Raises:
            InvalidTemplateError: If the identifier is malformed, the registry
                is unreachable or answers with an error, or the metadata has
                no ``dist.tarball`` field.
        """
        try:
            name, version = parse_package_spec(identifier)
            async with self._client(httpx.Timeout(self.timeout, connect=10.0)) as client:
                response = await client.get(self.metadata_url(name, version))
                response.raise_for_status()
                data = response.json()
            return data["dist"]["tarball"]
        except (ValueError, KeyError, TypeError, httpx.HTTPError) as exc:
            raise InvalidTemplateError(
                f"Invalid template: could not get tarball url from npm: {exc}"
            ) from exc

    async def download_tarball(self, url: str, destination: Path) -> Path:
        """Stream the tarball at *url* into the file *destination*.

        Raises:
            InvalidTemplateError: If the download fails.
        """
        try:
            async with self._client(httpx.Timeout(None, connect=10.0)) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()
                    with destination.open("wb") as fh:
                        async for chunk in response.aiter_bytes():
                            fh.write(chunk)
        except (httpx.HTTPError, OSError) as exc:
            raise InvalidTemplateError(
                f"Invalid template: could not download tarball from NPM: {exc}"
            ) from exc
        return destination

    async def fetch_package(self, identifier: str, base_dir: Path) -> Path:
        """Download and unpack *identifier* under ``<base_dir>/<identifier>``.

        Returns:
            The extracted package root.
        """
        target = package_path(base_dir, identifier)

        print_info(f"Finding {identifier} tarball on NPM")
        tarball_url = await self.get_tarball_url(identifier)

        try:
            package_dir = ensure_dir(target)
        except OSError as exc:
            raise InvalidTemplateError(
                f"Invalid template: could not create {target}: {exc}"
            ) from exc

        print_info(f"Downloading and unpacking {tarball_url}")
        archive = package_dir / "package.tgz"
        try:
            await self.download_tarball(tarball_url, archive)
            package_root = await asyncio.to_thread(extract_tarball, archive, package_dir)
        finally:
            archive.unlink(missing_ok=True)

        print_info(f"Unpacked {identifier}")
        return package_root
