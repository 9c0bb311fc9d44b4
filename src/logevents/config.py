"""YAML schema configuration for loggers and modes.

A schema file declares the loggers and modes a facade should expose::

    default_logger: log
    loggers:
      info: {}
      warn: {transform: "mypkg.format:warning"}
      red: {kind: modifier, transform: "mypkg.colors:red"}
    modes:
      verbose: {}
      not_: {kind: toggle}

``transform`` values are ``module:attribute`` import references.
Entries are registered in file order.
"""

from __future__ import annotations

import copy
import importlib
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

import yaml

from logevents.errors import ConfigError

if TYPE_CHECKING:
    from logevents.logger import Logger


DEFAULT_CONFIG: dict[str, Any] = {
    "default_logger": "log",
    "loggers": {},
    "modes": {},
}

_ENTRY_KEYS = {"kind", "transform"}


def load_config(path: Path) -> dict[str, Any]:
    """Load a schema file, merged over ``DEFAULT_CONFIG``.

    Args:
        path: YAML file to read.

    Returns:
        Merged configuration dict.

    Raises:
        ConfigError: If the file is missing, unparseable, or malformed.
    """
    if not path.exists():
        raise ConfigError("file not found", path)
    try:
        user_config = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"YAML parse error: {exc}", path) from exc
    if not isinstance(user_config, dict):
        raise ConfigError("top level must be a mapping", path)

    config = copy.deepcopy(DEFAULT_CONFIG)
    config.update(user_config)
    _validate(config, path)
    return config


def _validate(config: dict[str, Any], path: Path | None = None) -> None:
    if not isinstance(config.get("default_logger"), str) or not config["default_logger"]:
        raise ConfigError("'default_logger' must be a non-empty string", path)
    for section in ("loggers", "modes"):
        block = config.get(section)
        if block is None:
            config[section] = {}
            continue
        if not isinstance(block, dict):
            raise ConfigError(f"'{section}' must be a mapping of name -> options", path)
        for name, entry in block.items():
            if entry is None:
                block[name] = {}
                continue
            if not isinstance(entry, dict):
                raise ConfigError(f"{section}.{name} must be a mapping", path)
            unknown = set(entry) - _ENTRY_KEYS
            if unknown:
                raise ConfigError(f"{section}.{name} has unknown keys {sorted(unknown)}", path)


def resolve_transform(ref: str | Callable[..., Any] | None) -> Callable[..., Any] | None:
    """Import a ``module:attribute`` transform reference.

    Callables are returned unchanged so configs built in code can skip
    the import step.
    """
    if ref is None or callable(ref):
        return ref
    if not isinstance(ref, str) or ":" not in ref:
        raise ConfigError(f"transform must be 'module:attribute', got {ref!r}")
    module_name, _, attr = ref.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"cannot import transform module {module_name!r}: {exc}") from exc
    fn = module
    for part in attr.split("."):
        fn = getattr(fn, part, None)
        if fn is None:
            raise ConfigError(f"{module_name!r} has no attribute {attr!r}")
    if not callable(fn):
        raise ConfigError(f"transform {ref!r} is not callable")
    return fn


def apply_config(logger: Logger, config: dict[str, Any]) -> Logger:
    """Register every logger and mode declared in *config* on *logger*.

    Loggers are registered before modes.  The default logger is already
    registered by the ``Logger`` constructor; declaring it again only
    replaces its options.
    """
    _validate(config)
    for name, entry in config["loggers"].items():
        logger.add_logger(
            name,
            {"kind": entry.get("kind")},
            resolve_transform(entry.get("transform")),
        )
    for name, entry in config["modes"].items():
        logger.add_mode(
            name,
            {"kind": entry.get("kind")},
            resolve_transform(entry.get("transform")),
        )
    return logger
