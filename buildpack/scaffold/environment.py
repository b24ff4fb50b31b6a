"""Environment configuration for a new project.

Backend and payment settings given on the command line are merged into an
explicit ``EnvironmentConfig`` snapshot of the process environment.  Values
that are already present in the environment are authoritative: a differing
command-line value is discarded with a warning.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from buildpack.config import ProjectParams


def to_env_name(namespace: str, field: str) -> str:
    """Build a namespaced variable name from a camelCase field.

    Examples::

        to_env_name("magento", "backendUrl")      -> "MAGENTO_BACKEND_URL"
        to_env_name("checkout", "braintreeToken") -> "CHECKOUT_BRAINTREE_TOKEN"
    """
    snake = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", field)
    return f"{namespace}_{snake}".upper()


@dataclass(frozen=True)
class EnvSetting:
    """A command-line option that maps onto a namespaced variable."""

    namespace: str
    field: str
    param: str
    option: str

    @property
    def env_name(self) -> str:
        return to_env_name(self.namespace, self.field)


SETTINGS: tuple[EnvSetting, ...] = (
    EnvSetting("magento", "backendUrl", "backend_url", "--backend-url"),
    EnvSetting("magento", "backendEdition", "backend_edition", "--backend-edition"),
    EnvSetting("checkout", "braintreeToken", "braintree_token", "--braintree-token"),
)


@dataclass(frozen=True)
class MergeResult:
    """Outcome of merging one supplied value into the environment."""

    value: str | None
    conflict: bool = False


def merge(existing: str | None, supplied: str | None) -> MergeResult:
    """Decide the final value of a variable.

    The existing value wins whenever it is set and differs from the supplied
    one; an empty supplied value never replaces anything.
    """
    if not supplied:
        return MergeResult(existing)
    if existing and existing != supplied:
        return MergeResult(existing, conflict=True)
    return MergeResult(supplied)


class EnvironmentConfig(Mapping[str, str]):
    """Immutable snapshot of environment variables for one run."""

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values = dict(values or {})

    @classmethod
    def from_os(cls) -> "EnvironmentConfig":
        return cls(os.environ)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"EnvironmentConfig({len(self._values)} variables)"

    def with_values(self, **updates: str) -> "EnvironmentConfig":
        """Return a copy with *updates* applied."""
        return EnvironmentConfig({**self._values, **updates})

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)


def configure_environment(
    env: EnvironmentConfig, params: ProjectParams
) -> tuple[EnvironmentConfig, list[str]]:
    """Merge the command-line settings in *params* into *env*.

    Returns:
        The merged configuration and one warning per conflicting setting.
    """
    updates: dict[str, str] = {}
    warnings: list[str] = []
    for setting in SETTINGS:
        supplied = getattr(params, setting.param)
        existing = env.get(setting.env_name)
        result = merge(existing, supplied)
        if result.conflict:
            warnings.append(
                f"Command line option {setting.option} was set to '{supplied}', but "
                f'environment variable {{"{setting.env_name}":"{existing}"}} conflicts '
                f"with it. Environment variable overrides!"
            )
        elif result.value is not None and result.value != existing:
            updates[setting.env_name] = result.value
    return env.with_values(**updates), warnings
