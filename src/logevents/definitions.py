"""Definition models for modes and endpoints (loggers and modifiers).

Definitions are created once at registration time and are immutable
afterwards.  Kind values are validated here so that the registry and the
chain engine can rely on well-formed enums.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Iterable

from pydantic import BaseModel, ConfigDict

from logevents.errors import InvalidKindError

Transform = Callable[[Any], Any]


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ModeKind(str, Enum):
    mode = "mode"
    toggle = "toggle"


class EndpointKind(str, Enum):
    logger = "logger"
    modifier = "modifier"


class Signal(str, Enum):
    """Registration signals published through the transport."""

    endpoint_registered = "endpoint_registered"
    mode_registered = "mode_registered"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class ModeDefinition(BaseModel):
    """A named flag/namespace that can be touched during a chain."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: ModeKind = ModeKind.mode
    transform: Transform | None = None

    @property
    def is_toggle(self) -> bool:
        return self.kind is ModeKind.toggle


class EndpointDefinition(BaseModel):
    """A logger and/or modifier endpoint.

    An endpoint may carry both kinds: it then names the event when called
    and transforms the message when it is only passed through.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kinds: frozenset[EndpointKind] = frozenset({EndpointKind.logger})
    transform: Transform | None = None

    @property
    def is_logger(self) -> bool:
        return EndpointKind.logger in self.kinds

    @property
    def is_modifier(self) -> bool:
        return EndpointKind.modifier in self.kinds


# ---------------------------------------------------------------------------
# Option parsing
# ---------------------------------------------------------------------------


def split_options(
    options: dict[str, Any] | Transform | None,
    transform: Transform | None,
) -> tuple[dict[str, Any], Transform | None]:
    """Allow ``add_logger(name, fn)`` as shorthand for ``add_logger(name, None, fn)``."""
    if callable(options):
        return {}, options
    return dict(options or {}), transform


def _coerce_kinds(raw: Any) -> list[Any]:
    if raw is None:
        return []
    if isinstance(raw, (str, Enum)):
        return [raw]
    if isinstance(raw, Iterable):
        return list(raw)
    return [raw]


def _to_enum(name: str, value: Any, enum_cls: type[Enum]) -> Enum:
    allowed = [member.value for member in enum_cls]
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str) and value.lower() in allowed:
        return enum_cls(value.lower())
    raise InvalidKindError(name, value, allowed)


def parse_mode_kind(name: str, raw: Any) -> ModeKind:
    """Validate a mode ``kind`` option; defaults to ``mode``."""
    values = _coerce_kinds(raw)
    if not values:
        return ModeKind.mode
    if len(values) != 1:
        raise InvalidKindError(name, raw, [k.value for k in ModeKind])
    return _to_enum(name, values[0], ModeKind)  # type: ignore[return-value]


def parse_endpoint_kinds(name: str, raw: Any) -> frozenset[EndpointKind]:
    """Validate an endpoint ``kind`` option; defaults to ``{logger}``."""
    values = _coerce_kinds(raw)
    if not values:
        return frozenset({EndpointKind.logger})
    return frozenset(_to_enum(name, v, EndpointKind) for v in values)  # type: ignore[misc]
