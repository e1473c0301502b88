"""Minimal dependency injection library.

This package provides a small dependency injection container for Python:
services are registered by name with a factory, built lazily on first lookup,
memoized per container, and resolved through a chain of parent containers.

Exports:
- `Container`: registry, cache and parent-delegating resolver for services.
- `RootContainer` / `ROOT`: terminal link of every parent chain; every lookup fails.
- `ParentContainer`: protocol for objects a container can fall back to.
- `ContainerError`: base of the errors below.
- `MissingServiceError`: no container in the chain defines the name.
- `MissingServiceAttributeError`: the same, raised by `container.name` access; also an `AttributeError`.
- `DuplicateServiceError`: the name is already registered in the same container.
- `EnvironmentVariableNotFound`: `register_env` found neither the variable nor a parent service.
"""

from ._container import ROOT, Container, ParentContainer, RootContainer
from ._errors import (
    ContainerError,
    DuplicateServiceError,
    EnvironmentVariableNotFound,
    MissingServiceAttributeError,
    MissingServiceError,
)


__all__ = [
    "ROOT",
    "Container",
    "ContainerError",
    "DuplicateServiceError",
    "EnvironmentVariableNotFound",
    "MissingServiceAttributeError",
    "MissingServiceError",
    "ParentContainer",
    "RootContainer",
]
