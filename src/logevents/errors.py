"""Error types for definition registration and chain emission."""

from __future__ import annotations


class LogEventsError(Exception):
    """Base class for all log-events errors."""


class InvalidKindError(LogEventsError):
    """A definition declared a kind outside the allowed set.

    Attributes:
        name: The definition being registered.
        kind: The rejected kind value.
        allowed: Kinds accepted for this definition type.
    """

    def __init__(self, name: str, kind: object, allowed: list[str]) -> None:
        self.name = name
        self.kind = kind
        self.allowed = allowed
        super().__init__(
            f"Invalid kind for {name!r}: 'kind' must be one of "
            f"{allowed} but got {kind!r}"
        )


class NotFoundError(LogEventsError, KeyError):
    """Lookup or emit against a name that was never registered.

    Attributes:
        name: The unresolved name.
        kind: What was looked up, ``logger`` or ``mode``.
        available: Names that are currently registered.
    """

    def __init__(
        self,
        name: str,
        available: list[str] | None = None,
        kind: str = "logger",
    ) -> None:
        self.name = name
        self.kind = kind
        self.available = available or []
        msg = f"Unable to find {kind} {name!r}"
        if self.available:
            msg += f". Available: {self.available}"
        super().__init__(msg)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class NoEndpointError(LogEventsError):
    """A chain was resolved with no invoked endpoint and no mode entry."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message or "Cannot resolve chain: no endpoint was invoked and no mode was recorded"
        )


class ReservedNameError(LogEventsError, ValueError):
    """A definition name is empty or would shadow a facade attribute.

    Attributes:
        name: The rejected name.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Name {name!r} is reserved and cannot be registered")


class ConfigError(LogEventsError):
    """Malformed logger/mode schema configuration.

    Attributes:
        path: Source file of the configuration, when known.
    """

    def __init__(self, message: str, path: object | None = None) -> None:
        self.path = path
        full = f"Invalid log-events config: {message}"
        if path is not None:
            full += f" ({path})"
        super().__init__(full)
