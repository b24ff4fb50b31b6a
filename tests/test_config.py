"""Unit tests for configuration models (buildpack.config).

Tests cover:
- ProjectParams defaults, name defaulting, immutability, npm client choices
- BuildpackConfig defaults, use_cache, from_env
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from buildpack.config import (
    DEFAULT_REGISTRY_URL,
    DEFAULT_TEMPLATE,
    BuildpackConfig,
    NpmClient,
    ProjectParams,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# ProjectParams
# ---------------------------------------------------------------------------


class TestProjectParams:
    def test_defaults(self, tmp_path: Path):
        params = ProjectParams(directory=tmp_path / "shop")
        assert params.template == DEFAULT_TEMPLATE
        assert params.install is True
        assert params.cache is True
        assert params.npm_client == NpmClient.NPM
        assert params.author is None
        assert params.backend_url is None

    def test_name_defaults_to_directory(self, tmp_path: Path):
        params = ProjectParams(directory=tmp_path / "shop")
        assert params.name == "shop"

    def test_relative_directory_name(self):
        params = ProjectParams(directory="my-venia")
        assert params.name == "my-venia"

    def test_nested_directory_uses_last_component(self):
        params = ProjectParams(directory="projects/shop")
        assert params.name == "shop"
        assert params.directory == Path("projects/shop")

    def test_current_directory_uses_its_name(self, tmp_path: Path, monkeypatch):
        store = tmp_path / "store"
        store.mkdir()
        monkeypatch.chdir(store)
        assert ProjectParams(directory=".").name == "store"

    def test_explicit_name_kept(self, tmp_path: Path):
        params = ProjectParams(directory=tmp_path / "shop", name="@acme/storefront")
        assert params.name == "@acme/storefront"

    def test_empty_name_falls_back(self, tmp_path: Path):
        params = ProjectParams(directory=tmp_path / "shop", name="")
        assert params.name == "shop"

    def test_frozen(self, tmp_path: Path):
        params = ProjectParams(directory=tmp_path / "shop")
        with pytest.raises(ValidationError):
            params.install = False

    def test_yarn_accepted(self, tmp_path: Path):
        params = ProjectParams(directory=tmp_path, npm_client="yarn")
        assert params.npm_client == NpmClient.YARN

    def test_unknown_client_rejected(self, tmp_path: Path):
        with pytest.raises(ValidationError):
            ProjectParams(directory=tmp_path, npm_client="pnpm")

    def test_directory_required(self):
        with pytest.raises(ValidationError):
            ProjectParams()


# ---------------------------------------------------------------------------
# BuildpackConfig
# ---------------------------------------------------------------------------


class TestBuildpackConfig:
    def test_defaults(self):
        with patch.dict(os.environ, {"XDG_CACHE_HOME": "/var/cache/test"}):
            config = BuildpackConfig()
        assert config.registry_url == DEFAULT_REGISTRY_URL
        assert config.debug is False
        assert config.debug_template == DEFAULT_TEMPLATE
        assert config.cache_dir == Path("/var/cache/test/pwa-buildpack/scaffold-templates")
        assert config.debug_template_dir.name == "venia-concept"

    def test_use_cache(self):
        config = BuildpackConfig()
        assert config.use_cache(True) is True
        assert config.use_cache(False) is False

    def test_debug_disables_cache(self):
        config = BuildpackConfig(debug=True)
        assert config.use_cache(True) is False

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            BuildpackConfig(registry_timeout=0)


class TestFromEnv:
    def test_empty_env(self):
        with patch.dict(os.environ, {}, clear=True):
            config = BuildpackConfig.from_env()
        assert config.debug is False
        assert config.registry_url == DEFAULT_REGISTRY_URL

    def test_all_variables(self, tmp_path: Path):
        env = {
            "DEBUG_PROJECT_CREATION": "1",
            "BUILDPACK_REGISTRY_URL": "https://npm.example.com/",
            "BUILDPACK_CACHE_DIR": str(tmp_path / "cache"),
            "BUILDPACK_DEBUG_TEMPLATE_DIR": str(tmp_path / "venia"),
        }
        with patch.dict(os.environ, env, clear=True):
            config = BuildpackConfig.from_env()
        assert config.debug is True
        assert config.registry_url == "https://npm.example.com"
        assert config.cache_dir == tmp_path / "cache"
        assert config.debug_template_dir == tmp_path / "venia"

    def test_empty_debug_flag_is_off(self):
        with patch.dict(os.environ, {"DEBUG_PROJECT_CREATION": ""}, clear=True):
            assert BuildpackConfig.from_env().debug is False
