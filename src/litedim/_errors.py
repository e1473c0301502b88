from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Hashable


class ContainerError(RuntimeError):
    """Base class for errors raised by a container.

    `name` is the service name the error is about.
    """

    def __init__(self, name: Hashable, msg: str) -> None:
        super().__init__(msg)
        self.name = name


class MissingServiceError(ContainerError):
    """No container in the parent chain has a factory for the name."""

    def __init__(self, name: Hashable) -> None:
        super().__init__(name, f"Unknown service '{name}'")


class DuplicateServiceError(ContainerError):
    """The name is already registered in the same container."""

    def __init__(self, name: Hashable) -> None:
        super().__init__(name, f"Duplicate service name '{name}'")


class EnvironmentVariableNotFound(ContainerError):  # noqa: N818
    def __init__(self, name: Hashable, variable: str) -> None:
        msg = (
            f"Could not find an environment variable named {variable} "
            f"nor a service named '{name}' in the parent container"
        )
        super().__init__(name, msg)
        self.variable = variable


class MissingServiceAttributeError(MissingServiceError, AttributeError):
    """Raised by `container.name` access, so `hasattr` and `getattr` defaults work."""
