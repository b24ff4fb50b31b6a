"""Shared pytest fixtures for the buildpack test suite.

Provides reusable fixtures for:
- On-disk template packages
- In-memory npm tarballs
- A mock npm registry (``httpx.MockTransport``)
- Isolated ``BuildpackConfig`` and ``EnvironmentConfig`` instances
"""

from __future__ import annotations

import io
import json
import tarfile
from pathlib import Path
from typing import Any

import httpx
import pytest

from buildpack.config import BuildpackConfig, ProjectParams
from buildpack.scaffold.environment import EnvironmentConfig
from buildpack.scaffold.registry import RegistryClient

REGISTRY_URL = "https://registry.test"
TARBALL_URL = "https://registry.test/@magento/venia-concept/-/venia-concept-8.0.0.tgz"

TEMPLATE_PACKAGE: dict[str, Any] = {
    "name": "@magento/venia-concept",
    "version": "8.0.0",
    "author": "Magento Commerce",
    "repository": "github:magento/pwa-studio",
    "homepage": "https://github.com/magento/pwa-studio",
    "publishConfig": {"access": "public"},
    "scripts": {"watch": "webpack --watch", "build": "webpack"},
    "dependencies": {"react": "^17.0.0"},
}


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


def write_template(root: Path, package: dict[str, Any] | None = None) -> Path:
    """Lay out a small template package under *root*."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "package.json").write_text(json.dumps(package or TEMPLATE_PACKAGE), encoding="utf-8")
    (root / "src").mkdir(exist_ok=True)
    (root / "src" / "index.js").write_text("export default {};\n", encoding="utf-8")
    (root / "gitignore").write_text("node_modules\ndist\n", encoding="utf-8")
    (root / "node_modules" / "react").mkdir(parents=True, exist_ok=True)
    (root / "node_modules" / "react" / "index.js").write_text("", encoding="utf-8")
    (root / "_buildpack").mkdir(exist_ok=True)
    (root / "_buildpack" / "create.js").write_text("", encoding="utf-8")
    return root


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A template package directory with a package.json at its root."""
    return write_template(tmp_path / "venia-concept")


def make_tarball(files: dict[str, str]) -> bytes:
    """Build a gzipped tarball from ``{archive_path: text}``."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        for name, text in files.items():
            data = text.encode("utf-8")
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


@pytest.fixture
def tarball_factory():
    """Return ``make_tarball`` for tests that need custom archives."""
    return make_tarball


@pytest.fixture
def npm_tarball() -> bytes:
    """A tarball laid out the way npm publishes packages."""
    return make_tarball(
        {
            "package/package.json": json.dumps(TEMPLATE_PACKAGE),
            "package/src/index.js": "export default {};\n",
            "package/.npmignore": "node_modules\n",
        }
    )


# ---------------------------------------------------------------------------
# Mock registry
# ---------------------------------------------------------------------------


class FakeRegistry:
    """Records requests and serves package metadata plus one tarball."""

    def __init__(self, tarball: bytes, tarball_url: str = TARBALL_URL) -> None:
        self.tarball = tarball
        self.tarball_url = tarball_url
        self.requests: list[httpx.Request] = []
        self.metadata_status = 200
        self.tarball_status = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith(".tgz"):
            return httpx.Response(self.tarball_status, content=self.tarball)
        if self.metadata_status != 200:
            return httpx.Response(self.metadata_status, json={"error": "Not found"})
        return httpx.Response(
            200,
            json={"name": "@magento/venia-concept", "dist": {"tarball": self.tarball_url}},
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> RegistryClient:
        return RegistryClient(REGISTRY_URL, transport=self.transport)


@pytest.fixture
def fake_registry(npm_tarball: bytes) -> FakeRegistry:
    return FakeRegistry(npm_tarball)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def config(tmp_path: Path) -> BuildpackConfig:
    """Non-debug configuration with an isolated cache directory."""
    return BuildpackConfig(
        registry_url=REGISTRY_URL,
        cache_dir=tmp_path / "cache",
        debug_template_dir=tmp_path / "venia-concept",
    )


@pytest.fixture
def debug_config(config: BuildpackConfig) -> BuildpackConfig:
    return config.model_copy(update={"debug": True})


@pytest.fixture
def empty_env() -> EnvironmentConfig:
    return EnvironmentConfig({})


@pytest.fixture
def params(tmp_path: Path) -> ProjectParams:
    """Parameters for a project in ``<tmp>/my-venia`` without installing."""
    return ProjectParams(
        directory=tmp_path / "my-venia",
        author="Jane Doe <jane@example.com>",
        install=False,
    )
