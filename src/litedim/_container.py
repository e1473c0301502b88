from __future__ import annotations

import inspect
import logging
import os
from typing import TYPE_CHECKING, Any, Protocol

from ._errors import (
    DuplicateServiceError,
    EnvironmentVariableNotFound,
    MissingServiceAttributeError,
    MissingServiceError,
)


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Mapping

    # Factories receive the container the lookup started from
    Factory = Callable[["Container"], object]


class ParentContainer(Protocol):
    """Anything a container can fall back to for factories it does not define."""

    def find_factory(self, name: Hashable) -> Factory: ...


class RootContainer:
    """Terminal link of every parent chain.

    It has no registrations, so every lookup fails with `MissingServiceError`.
    It holds no state and a single shared instance (`ROOT`) is used as the
    default parent.
    """

    def find_factory(self, name: Hashable) -> Factory:
        raise MissingServiceError(name)

    def lookup(self, name: Hashable) -> object:
        raise MissingServiceError(name)

    __getitem__ = lookup

    def __contains__(self, name: Hashable) -> bool:
        return False

    def verify_dependencies(self, *names: Hashable) -> bool:
        return not names

    def __repr__(self) -> str:
        return "ROOT"


ROOT = RootContainer()


class Container:
    """Minimal DI container.

    - register factories by name, resolve them lazily
    - one instance per name per container, memoized on first lookup
    - names not registered locally fall back to the parent chain
    - `container.name` is shorthand for `container.lookup("name")`.

    A factory found in an ancestor is called with the container the lookup
    started from, so its own dependencies are resolved against the child first.
    The instance is cached in that child, never in the ancestor.

    `override` replaces a factory but keeps an instance that is already cached;
    call `clear_cache()` to have the new factory take effect.

    Not thread-safe: two threads resolving the same uncached name may both
    call the factory, and the last one to finish wins the cache slot.

    Example:
      container = Container()
      container.register("log_file", lambda: "logfile.log")
      container.register("logger", lambda c: FileLogger(c.log_file))
      container.logger.info("ready")

    """

    def __init__(self, parent: ParentContainer | None = None) -> None:
        self._services: dict[Hashable, Factory] = {}
        self._cache: dict[Hashable, object] = {}
        self._parent: ParentContainer = parent if parent is not None else ROOT

    @property
    def parent(self) -> ParentContainer:
        return self._parent

    def register(self, name: Hashable, factory: Callable[..., object]) -> None:
        """Register `factory` to build the service `name` on demand.

        Only this container's own registrations are checked for duplicates, so
        a child may register a name its parent already defines.
        """
        if name in self._services:
            raise DuplicateServiceError(name)
        self._services[name] = _adapt_factory(name, factory)
        logger.debug("Registered service %r", name)

    def override(self, name: Hashable, factory: Callable[..., object]) -> None:
        """Replace (or add) the local factory for `name`.

        A previously cached instance is kept until `clear_cache()`.
        """
        self._services[name] = _adapt_factory(name, factory)
        logger.debug("Overrode service %r", name)

    def register_env(
        self,
        name: Hashable,
        default: object | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Register `name` with the value of the upper-cased environment variable.

        The environment is read once, now. Without the variable, `default` is
        used; without a default, the name must be provided by the parent chain.
        """
        variable = str(name).upper()
        env = os.environ if environ is None else environ
        value = env.get(variable)

        if value is not None:
            self.register(name, lambda _: value)
        elif default is not None:
            self.register(name, lambda _: default)
        else:
            try:
                self._parent.find_factory(name)
            except MissingServiceError as e:
                raise EnvironmentVariableNotFound(name, variable) from e
            logger.debug("Environment variable %s not set, %r falls back to parent", variable, name)

    def lookup(self, name: Hashable) -> Any:
        """Return the service `name`, building and caching it on first use."""
        if name in self._cache:
            return self._cache[name]

        factory = self.find_factory(name)
        logger.debug("Constructing service %r", name)
        instance = factory(self)
        self._cache[name] = instance
        return instance

    def __getitem__(self, name: Hashable) -> Any:
        return self.lookup(name)

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not real attributes
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        try:
            return self.lookup(name)
        except MissingServiceError as e:
            if e.name != name:
                raise
            raise MissingServiceAttributeError(name) from None

    def find_factory(self, name: Hashable) -> Factory:
        """Return the factory for `name` from this container or its ancestors."""
        factory = self._services.get(name)
        if factory is not None:
            return factory
        return self._parent.find_factory(name)

    def clear_cache(self) -> None:
        """Forget every instance built by this container (ancestors are untouched)."""
        self._cache.clear()
        logger.debug("Cleared service cache")

    def verify_dependencies(self, *names: Hashable) -> bool:
        """Check that every name can be resolved, without building anything."""
        return all(name in self for name in names)

    def __contains__(self, name: Hashable) -> bool:
        try:
            self.find_factory(name)
        except MissingServiceError:
            return False
        return True

    def __repr__(self) -> str:
        return f"Container(services={list(self._services)!r}, parent={self._parent!r})"


def _adapt_factory(name: Hashable, factory: Callable[..., object]) -> Factory:
    if not callable(factory):
        msg = f"Factory for service {name!r} must be callable, got {type(factory).__name__}"
        raise TypeError(msg)

    if _accepts_container(factory):
        return factory

    def call_without_container(_: Container) -> object:
        return factory()

    return call_without_container


def _accepts_container(factory: Callable[..., object]) -> bool:
    try:
        sig = inspect.signature(factory)
    except (TypeError, ValueError):
        logger.debug("Cannot inspect signature of %r, calling it without the container", factory)
        return False

    # Optional parameters keep their defaults: `list`, `dict`, `Settings(debug=False)`
    return any(
        p.kind is p.VAR_POSITIONAL
        or (p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty)
        for p in sig.parameters.values()
    )
