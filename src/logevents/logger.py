"""Dispatch facade: the ``Logger`` object callers compose chains on.

Registered loggers, modifiers and modes become attributes of the facade.
Reading one starts a traversal and returns a handle; reading further
names from the handle extends the traversal; calling a handle emits::

    logger = Logger()
    logger.add_logger("info")
    logger.add_logger("red", {"kind": "modifier"}, colors.red)
    logger.add_mode("verbose")
    logger.add_mode("not_", {"kind": "toggle"})

    logger.on("info", print)
    logger.not_.verbose.red.info("shown when verbose is off")

Every emission publishes ``("*", name, descriptor)`` and then
``(name, descriptor)`` on the facade's transport.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator

from logevents.chain import ChainEngine, EmissionDescriptor
from logevents.definitions import Transform
from logevents.errors import InvalidKindError, NotFoundError, ReservedNameError
from logevents.registry import DefinitionRegistry
from logevents.transport import WILDCARD, Emitter, Listener, Transport

log = logging.getLogger(__name__)

DEFAULT_LOGGER = "log"

_ENDPOINT = "endpoint"
_MODE = "mode"


# ---------------------------------------------------------------------------
# Chain handles
# ---------------------------------------------------------------------------


class _ChainLink:
    """A step in a traversal; reading a registered name extends the chain."""

    __slots__ = ("_logger", "_name")

    def __init__(self, logger: Logger, name: str) -> None:
        self._logger = logger
        self._name = name

    def __getattr__(self, attr: str) -> _ChainLink:
        if attr.startswith("_"):
            raise AttributeError(attr)
        return self._logger._step(attr)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._name!r}>"


class ToggleHandle(_ChainLink):
    """Handle returned by a toggle mode.  It cannot emit on its own."""

    __slots__ = ()


class ChainHandle(_ChainLink):
    """Handle returned by a logger, modifier or plain mode.  Callable."""

    __slots__ = ()

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._logger._dispatch(self._name, args, kwargs)


# ---------------------------------------------------------------------------
# Facade
# ---------------------------------------------------------------------------


class Logger:
    """Composable event logger.

    Each instance owns its registry, its chain engine and (unless one is
    passed in) its transport.  Nothing is shared between instances.

    Args:
        transport: Object implementing ``subscribe``/``unsubscribe``/
            ``publish``.  Defaults to a fresh ``Emitter``.
        default_logger: Name of the logger registered on construction and
            used when a plain mode is called directly.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        *,
        default_logger: str = DEFAULT_LOGGER,
    ) -> None:
        self._transport: Transport = transport if transport is not None else Emitter()
        self._registry = DefinitionRegistry(self._transport)
        self._engine = ChainEngine()
        self._bindings: dict[str, str] = {}
        self._overrides: dict[str, Callable[..., Any]] = {}
        self._default_logger = default_logger
        self.add_logger(default_logger)

    @classmethod
    def from_config(cls, path: str | Path, transport: Transport | None = None) -> Logger:
        """Build a logger from a YAML schema file (see ``logevents.config``)."""
        from logevents.config import apply_config, load_config

        config = load_config(Path(path))
        logger = cls(transport, default_logger=config["default_logger"])
        apply_config(logger, config)
        return logger

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_logger(
        self,
        name: str,
        options: dict[str, Any] | Transform | None = None,
        transform: Transform | None = None,
    ) -> Logger:
        """Add a logger or modifier endpoint reachable as ``self.<name>``.

        Args:
            name: Event name emitted when the endpoint is called.
            options: Optional dict.  ``kind`` is ``logger`` (default),
                ``modifier``, or a list of both.  A callable here is
                taken as *transform*.
            transform: Optional ``message -> message`` function.

        Returns:
            This logger, for chaining.

        Raises:
            InvalidKindError: If ``kind`` is not allowed.
            ReservedNameError: If *name* would shadow a facade attribute.
        """
        self._check_reserved(name)
        with self._binding(name, _ENDPOINT):
            self._registry.register_endpoint(name, options, transform)
        return self

    def add_mode(
        self,
        name: str,
        options: dict[str, Any] | Transform | None = None,
        transform: Transform | None = None,
    ) -> Logger:
        """Add a mode (namespace flag) reachable as ``self.<name>``.

        A ``toggle`` mode flips the mode that immediately follows it in a
        chain (``logger.not_.verbose``) and cannot be called by itself.

        Args:
            name: Mode name.
            options: Optional dict.  ``kind`` is ``mode`` (default) or
                ``toggle``.  A callable here is taken as *transform*.
            transform: Optional ``message -> message`` function.

        Returns:
            This logger, for chaining.

        Raises:
            InvalidKindError: If ``kind`` is not allowed.
            ReservedNameError: If *name* would shadow a facade attribute.
        """
        self._check_reserved(name)
        with self._binding(name, _MODE):
            self._registry.register_mode(name, options, transform)
        return self

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def emit(self, name: str, *args: Any, **kwargs: Any) -> Logger:
        """Emit the event of a registered endpoint.

        Entries recorded on the current traversal, if any, are resolved
        together with this call.

        Raises:
            NotFoundError: If *name* is not a registered endpoint.  Nothing
                is published in that case.
        """
        try:
            definition = self._registry.get_endpoint(name)
        except NotFoundError:
            self._engine.reset()
            raise
        self._engine.set_invoked(definition)
        self._publish(self._engine.resolve(*args, **kwargs))
        return self

    def _publish(self, descriptor: EmissionDescriptor) -> None:
        name = descriptor.event_name
        self._transport.publish(WILDCARD, name, descriptor)
        self._transport.publish(name, descriptor)

    # ------------------------------------------------------------------
    # Transport delegation
    # ------------------------------------------------------------------

    def on(self, topic: str, callback: Listener) -> Logger:
        self._transport.subscribe(topic, callback)
        return self

    def once(self, topic: str, callback: Listener) -> Logger:
        self._transport.once(topic, callback)
        return self

    def off(self, topic: str | None = None, callback: Listener | None = None) -> Logger:
        self._transport.unsubscribe(topic, callback)
        return self

    def listeners(self, topic: str) -> list[Listener]:
        return self._transport.listeners(topic)

    def has_listeners(self, topic: str) -> bool:
        return self._transport.has_listeners(topic)

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def registry(self) -> DefinitionRegistry:
        return self._registry

    @property
    def engine(self) -> ChainEngine:
        return self._engine

    # ------------------------------------------------------------------
    # Attribute protocol
    # ------------------------------------------------------------------

    def __getattr__(self, name: str) -> _ChainLink:
        # Only reached for names that are not real attributes
        if name.startswith("_") or name not in self.__dict__.get("_bindings", {}):
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {name!r}"
            )
        # Reading from the facade starts a new traversal
        if not self._engine.is_empty:
            log.debug("discarding %d abandoned chain entries", len(self._engine.entries))
        self._engine.reset()
        return self._step(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.__dict__.get("_bindings", {}):
            if not callable(value):
                raise TypeError(f"Override for {name!r} must be callable, got {value!r}")
            log.debug("overriding dispatcher for %r", name)
            self._overrides[name] = value
            return
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        if name in self.__dict__.get("_overrides", {}):
            del self._overrides[name]
            return
        object.__delattr__(self, name)

    @contextmanager
    def _binding(self, name: str, binding: str) -> Iterator[None]:
        """Bind *name* before registration signals go out; undo on a bad kind."""
        previous = self._bindings.get(name)
        self._bindings[name] = binding
        try:
            yield
        except InvalidKindError:
            if previous is None:
                del self._bindings[name]
            else:
                self._bindings[name] = previous
            raise

    def _check_reserved(self, name: str) -> None:
        if not isinstance(name, str) or not name or name.startswith("_"):
            raise ReservedNameError(str(name))
        if hasattr(type(self), name):
            raise ReservedNameError(name)

    # ------------------------------------------------------------------
    # Traversal internals (used by handles)
    # ------------------------------------------------------------------

    def _step(self, name: str) -> _ChainLink:
        """Record *name* on the current chain and return its handle."""
        binding = self._bindings.get(name)
        if binding is None:
            raise AttributeError(f"No logger or mode named {name!r}")

        if binding == _ENDPOINT:
            endpoint = self._registry.get_endpoint(name)
            if endpoint.is_modifier:
                self._engine.record_modifier(endpoint)
            else:
                self._engine.record_logger(endpoint)
            return ChainHandle(self, name)

        mode = self._registry.get_mode(name)
        self._engine.record_mode(mode)
        if mode.is_toggle:
            return ToggleHandle(self, name)
        return ChainHandle(self, name)

    def _dispatch(self, name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        """Terminal call of the handle bound to *name*."""
        override = self._overrides.get(name)
        if override is not None:
            log.debug("dispatching %r to override %r", name, override)
            try:
                return override(*args, **kwargs)
            finally:
                self._engine.reset()

        if self._bindings[name] == _ENDPOINT:
            return self.emit(name, *args, **kwargs)

        # Plain mode called directly: emit under the default logger
        return self.emit(self._default_logger, *args, **kwargs)

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} loggers={sorted(self._registry.endpoints())} "
            f"modes={sorted(self._registry.modes())}>"
        )

