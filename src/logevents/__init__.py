"""Composable log events.

Define loggers, modifiers and modes on a ``Logger`` and emit structured
events through fluent chains such as ``logger.verbose.red.write("msg")``.
"""

from logevents.chain import ChainEngine, EmissionDescriptor
from logevents.definitions import (
    EndpointDefinition,
    EndpointKind,
    ModeDefinition,
    ModeKind,
    Signal,
)
from logevents.errors import (
    ConfigError,
    InvalidKindError,
    LogEventsError,
    NoEndpointError,
    NotFoundError,
    ReservedNameError,
)
from logevents.logger import ChainHandle, Logger, ToggleHandle
from logevents.registry import DefinitionRegistry
from logevents.transport import WILDCARD, Emitter, Transport

__version__ = "0.1.0"

__all__ = [
    "ChainEngine",
    "ChainHandle",
    "ConfigError",
    "DefinitionRegistry",
    "EmissionDescriptor",
    "Emitter",
    "EndpointDefinition",
    "EndpointKind",
    "InvalidKindError",
    "LogEventsError",
    "Logger",
    "ModeDefinition",
    "ModeKind",
    "NoEndpointError",
    "NotFoundError",
    "ReservedNameError",
    "Signal",
    "ToggleHandle",
    "Transport",
    "WILDCARD",
    "__version__",
]
