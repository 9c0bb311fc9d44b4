"""Registry of mode and endpoint definitions for one facade instance."""

from __future__ import annotations

import logging
from typing import Any

from logevents.definitions import (
    EndpointDefinition,
    ModeDefinition,
    Signal,
    Transform,
    parse_endpoint_kinds,
    parse_mode_kind,
    split_options,
)
from logevents.errors import NotFoundError, ReservedNameError
from logevents.transport import Transport

log = logging.getLogger(__name__)


class DefinitionRegistry:
    """Stores definitions by name and announces new ones on the transport.

    Re-registering a name overwrites the previous definition.  Modes and
    endpoints live in separate tables, so one name may exist in both; the
    facade decides which one an attribute resolves to.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._modes: dict[str, ModeDefinition] = {}
        self._endpoints: dict[str, EndpointDefinition] = {}

    def register_mode(
        self,
        name: str,
        options: dict[str, Any] | Transform | None = None,
        transform: Transform | None = None,
    ) -> ModeDefinition:
        """Create and store a mode definition.

        Args:
            name: Mode name, e.g. ``verbose``.
            options: Optional dict; ``kind`` may be ``mode`` or ``toggle``.
                A callable here is taken as *transform*.
            transform: Optional ``message -> message`` function.

        Returns:
            The stored definition.

        Raises:
            InvalidKindError: If ``kind`` is not ``mode`` or ``toggle``.
        """
        _check_name(name)
        opts, transform = split_options(options, transform)
        defn = ModeDefinition(
            name=name,
            kind=parse_mode_kind(name, opts.get("kind")),
            transform=transform,
        )
        self._modes[name] = defn
        log.debug("registered mode %r (kind=%s)", name, defn.kind.value)
        self._transport.publish(Signal.mode_registered.value, name, defn)
        return defn

    def register_endpoint(
        self,
        name: str,
        options: dict[str, Any] | Transform | None = None,
        transform: Transform | None = None,
    ) -> EndpointDefinition:
        """Create and store a logger/modifier endpoint definition.

        Args:
            name: Endpoint name, e.g. ``info`` or ``red``.
            options: Optional dict; ``kind`` may be ``logger``,
                ``modifier`` or a list of both.  A callable here is
                taken as *transform*.
            transform: Optional ``message -> message`` function.

        Returns:
            The stored definition.

        Raises:
            InvalidKindError: If any ``kind`` value is not allowed.
        """
        _check_name(name)
        opts, transform = split_options(options, transform)
        defn = EndpointDefinition(
            name=name,
            kinds=parse_endpoint_kinds(name, opts.get("kind")),
            transform=transform,
        )
        self._endpoints[name] = defn
        log.debug(
            "registered endpoint %r (kinds=%s)",
            name, sorted(k.value for k in defn.kinds),
        )
        self._transport.publish(Signal.endpoint_registered.value, name, defn)
        return defn

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_mode(self, name: str) -> ModeDefinition:
        if name not in self._modes:
            raise NotFoundError(name, sorted(self._modes), kind="mode")
        return self._modes[name]

    def get_endpoint(self, name: str) -> EndpointDefinition:
        if name not in self._endpoints:
            raise NotFoundError(name, sorted(self._endpoints))
        return self._endpoints[name]

    def has_mode(self, name: str) -> bool:
        return name in self._modes

    def has_endpoint(self, name: str) -> bool:
        return name in self._endpoints

    def modes(self) -> dict[str, ModeDefinition]:
        return dict(self._modes)

    def endpoints(self) -> dict[str, EndpointDefinition]:
        return dict(self._endpoints)


def _check_name(name: str) -> None:
    if not isinstance(name, str) or not name:
        raise ReservedNameError(str(name))
