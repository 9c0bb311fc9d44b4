"""Chain engine: records a fluent traversal and resolves it to a descriptor.

A chain is the ordered list of entries touched while walking e.g.
``logger.verbose.red.write``.  Calling the terminal handle resolves the
chain into one ``EmissionDescriptor`` and resets it, so entries never
leak into the next traversal on the same facade.

Resolution rules:

- ``event_name`` is the invoked endpoint's name, or ``"log"`` when only
  modes were touched.
- A toggle entry immediately followed by a mode entry makes that mode
  assert ``False``.  Any other toggle is inert.  Every other mode entry
  asserts ``True``.  A mode asserted twice is ``True`` only if both
  assertions are.
- The message is the first positional argument run through the
  transforms of mode and modifier entries in recorded order, then
  through the invoked endpoint's own transform unless that endpoint was
  just recorded as the final modifier entry.
"""

from __future__ import annotations

import logging
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from logevents.definitions import EndpointDefinition, ModeDefinition
from logevents.errors import NoEndpointError

log = logging.getLogger(__name__)

DEFAULT_EVENT_NAME = "log"


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------


class ModeEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    definition: ModeDefinition


class ToggleEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    definition: ModeDefinition


class ModifierEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    definition: EndpointDefinition


class LoggerEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    definition: EndpointDefinition


ChainEntry = Union[ModeEntry, ToggleEntry, ModifierEntry, LoggerEntry]


# ---------------------------------------------------------------------------
# Descriptor
# ---------------------------------------------------------------------------


class EmissionDescriptor(BaseModel):
    """The resolved payload handed to the transport."""

    event_name: str
    message: Any = None
    mode_flags: dict[str, bool] = Field(default_factory=dict)
    raw_args: list[Any] = Field(default_factory=list)
    raw_kwargs: dict[str, Any] = Field(default_factory=dict)
    transforms: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class ChainEngine:
    """Mutable state for the current unresolved traversal of one facade.

    Each facade owns exactly one engine; engines are never shared.
    """

    def __init__(self) -> None:
        self._entries: list[ChainEntry] = []
        self._invoked: EndpointDefinition | None = None

    @property
    def entries(self) -> tuple[ChainEntry, ...]:
        return tuple(self._entries)

    @property
    def invoked(self) -> EndpointDefinition | None:
        return self._invoked

    @property
    def is_empty(self) -> bool:
        return not self._entries and self._invoked is None

    def record_mode(self, definition: ModeDefinition) -> None:
        """Record a mode, or a toggle when the definition is toggle-kind."""
        if definition.is_toggle:
            self.record_toggle(definition)
        else:
            self._entries.append(ModeEntry(definition=definition))

    def record_toggle(self, definition: ModeDefinition) -> None:
        self._entries.append(ToggleEntry(definition=definition))

    def record_modifier(self, definition: EndpointDefinition) -> None:
        self._entries.append(ModifierEntry(definition=definition))

    def record_logger(self, definition: EndpointDefinition) -> None:
        self._entries.append(LoggerEntry(definition=definition))

    def set_invoked(self, definition: EndpointDefinition) -> None:
        """Mark the endpoint whose handle was actually called."""
        self._invoked = definition

    def reset(self) -> None:
        self._entries = []
        self._invoked = None

    def resolve(self, *args: Any, **kwargs: Any) -> EmissionDescriptor:
        """Resolve the recorded chain into an ``EmissionDescriptor``.

        The chain is reset whether or not resolution succeeds.

        Raises:
            NoEndpointError: If no endpoint was invoked and no mode was
                recorded.
        """
        entries, invoked = self._entries, self._invoked
        self.reset()

        has_mode = any(isinstance(e, ModeEntry) for e in entries)
        if invoked is None and not has_mode:
            raise NoEndpointError()
        event_name = invoked.name if invoked is not None else DEFAULT_EVENT_NAME

        message, applied = _apply_transforms(
            entries, invoked, args[0] if args else None
        )
        descriptor = EmissionDescriptor(
            event_name=event_name,
            message=message,
            mode_flags=_mode_flags(entries),
            raw_args=list(args),
            raw_kwargs=dict(kwargs),
            transforms=applied,
        )
        log.debug(
            "resolved chain of %d entries to %r (modes=%s)",
            len(entries), event_name, descriptor.mode_flags,
        )
        return descriptor


def _mode_flags(entries: list[ChainEntry]) -> dict[str, bool]:
    flags: dict[str, bool] = {}
    for i, entry in enumerate(entries):
        if not isinstance(entry, ModeEntry):
            continue
        toggled = i > 0 and isinstance(entries[i - 1], ToggleEntry)
        name = entry.definition.name
        flags[name] = flags.get(name, True) and not toggled
    return flags


def _apply_transforms(
    entries: list[ChainEntry],
    invoked: EndpointDefinition | None,
    message: Any,
) -> tuple[Any, list[str]]:
    applied: list[str] = []
    for entry in entries:
        if isinstance(entry, (ModeEntry, ModifierEntry)):
            fn = entry.definition.transform
            if fn is not None:
                message = fn(message)
                applied.append(entry.definition.name)
        elif isinstance(entry, (ToggleEntry, LoggerEntry)):
            # Toggles carry no transform; a logger transforms only when invoked
            continue
        else:
            raise TypeError(f"Unknown chain entry: {entry!r}")

    if (
        invoked is not None
        and invoked.transform is not None
        and not _ends_with(entries, invoked)
    ):
        message = invoked.transform(message)
        applied.append(invoked.name)
    return message, applied


def _ends_with(entries: list[ChainEntry], endpoint: EndpointDefinition) -> bool:
    """True when *endpoint* already ran as the last recorded modifier."""
    return (
        bool(entries)
        and isinstance(entries[-1], ModifierEntry)
        and entries[-1].definition.name == endpoint.name
    )
