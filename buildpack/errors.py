"""Error taxonomy for the buildpack CLI and form validators.

Everything on the ``create-project`` path derives from ``BuildpackError`` and
bubbles up to the CLI entry point, which prints the message and exits with a
non-zero status.  ``ValidationError`` is the odd one out: validators report
failures through their return value, and this exception only exists for
callers that want to turn collected failures into a hard stop.
"""

from __future__ import annotations

from typing import Any


class BuildpackError(Exception):
    """Base class for fatal errors raised while creating a project."""


class InvalidTemplateError(BuildpackError):
    """Raised when a template cannot be resolved, downloaded, or extracted.

    Attributes:
        attempts: One ``(strategy_name, error)`` pair per resolution strategy
            that was tried and failed before giving up.
    """

    def __init__(self, message: str, attempts: list[tuple[str, Exception]] | None = None) -> None:
        self.attempts = list(attempts or [])
        if self.attempts:
            details = "; ".join(f"{name}: {exc}" for name, exc in self.attempts)
            message = f"{message} ({details})"
        super().__init__(message)


class UnsupportedDebugTemplateError(BuildpackError):
    """Raised when debug mode is asked for a template it cannot serve."""

    def __init__(self, template: str, supported: str) -> None:
        self.template = template
        self.supported = supported
        super().__init__(
            f"DEBUG_PROJECT_CREATION=1 is set, but scaffolding debug mode currently "
            f'only works using "{supported}" as the template. Supplied template '
            f'name "{template}" is unsupported.'
        )


class ProjectMaterializeError(BuildpackError):
    """Raised when the template cannot be copied into the target directory."""


class InstallFailureError(BuildpackError):
    """Raised when the package manager exits with a non-zero status."""

    def __init__(self, command: str, returncode: int) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(f"`{command}` failed with exit code {returncode}")


class ValidationError(Exception):
    """Raised by ``ensure_valid`` when one or more form fields are invalid.

    Attributes:
        errors: Mapping of field name to the list of ``Invalid`` results
            collected for it.
    """

    def __init__(self, errors: dict[str, list[Any]]) -> None:
        self.errors = errors
        fields = ", ".join(sorted(errors))
        super().__init__(f"Invalid form fields: {fields}")
