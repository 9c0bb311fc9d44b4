"""Tests for definition registration, kind validation and signals."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from logevents.definitions import EndpointKind, ModeKind
from logevents.errors import InvalidKindError, NotFoundError, ReservedNameError
from logevents.registry import DefinitionRegistry
from logevents.transport import Emitter


@pytest.fixture
def emitter() -> Emitter:
    return Emitter()


@pytest.fixture
def registry(emitter: Emitter) -> DefinitionRegistry:
    return DefinitionRegistry(emitter)


class TestRegisterMode:
    def test_default_kind_is_mode(self, registry):
        defn = registry.register_mode("verbose")
        assert defn.kind == ModeKind.mode
        assert defn.transform is None
        assert not defn.is_toggle

    def test_toggle_kind(self, registry):
        defn = registry.register_mode("not_", {"kind": "toggle"})
        assert defn.is_toggle

    def test_kind_is_case_insensitive(self, registry):
        assert registry.register_mode("not_", {"kind": "TOGGLE"}).is_toggle

    def test_callable_options_is_transform(self, registry):
        fn = str.upper
        defn = registry.register_mode("debug", fn)
        assert defn.transform is fn
        assert defn.kind == ModeKind.mode

    def test_invalid_kind(self, registry):
        with pytest.raises(InvalidKindError) as exc_info:
            registry.register_mode("verbose", {"kind": "logger"})
        assert exc_info.value.name == "verbose"
        assert exc_info.value.allowed == ["mode", "toggle"]

    def test_multiple_kinds_rejected(self, registry):
        with pytest.raises(InvalidKindError):
            registry.register_mode("verbose", {"kind": ["mode", "toggle"]})

    def test_reregistration_overwrites(self, registry):
        registry.register_mode("verbose")
        registry.register_mode("verbose", {"kind": "toggle"})
        assert registry.get_mode("verbose").is_toggle

    def test_definition_is_frozen(self, registry):
        defn = registry.register_mode("verbose")
        with pytest.raises(ValidationError):
            defn.name = "other"


class TestRegisterEndpoint:
    def test_default_kind_is_logger(self, registry):
        defn = registry.register_endpoint("info")
        assert defn.kinds == frozenset({EndpointKind.logger})
        assert defn.is_logger and not defn.is_modifier

    def test_modifier_kind(self, registry):
        defn = registry.register_endpoint("red", {"kind": "modifier"})
        assert defn.is_modifier and not defn.is_logger

    def test_both_kinds(self, registry):
        defn = registry.register_endpoint("red", {"kind": ["logger", "modifier"]})
        assert defn.is_modifier and defn.is_logger

    def test_enum_kind_accepted(self, registry):
        defn = registry.register_endpoint("red", {"kind": EndpointKind.modifier})
        assert defn.is_modifier

    def test_invalid_kind(self, registry):
        with pytest.raises(InvalidKindError) as exc_info:
            registry.register_endpoint("info", {"kind": ["logger", "toggle"]})
        assert exc_info.value.kind == "toggle"
        assert "must be one of" in str(exc_info.value)

    def test_invalid_kind_is_not_stored(self, registry):
        with pytest.raises(InvalidKindError):
            registry.register_endpoint("info", {"kind": "bogus"})
        assert not registry.has_endpoint("info")

    def test_empty_name_rejected(self, registry):
        with pytest.raises(ReservedNameError):
            registry.register_endpoint("")


class TestLookup:
    def test_get_unknown_endpoint(self, registry):
        registry.register_endpoint("info")
        with pytest.raises(NotFoundError) as exc_info:
            registry.get_endpoint("warn")
        assert exc_info.value.name == "warn"
        assert exc_info.value.available == ["info"]
        assert "Unable to find logger 'warn'" in str(exc_info.value)

    def test_get_unknown_mode(self, registry):
        registry.register_mode("debug")
        with pytest.raises(NotFoundError) as exc_info:
            registry.get_mode("verbose")
        assert exc_info.value.kind == "mode"
        assert exc_info.value.available == ["debug"]
        assert "Unable to find mode 'verbose'" in str(exc_info.value)

    def test_unknown_endpoint_kind_is_logger(self, registry):
        with pytest.raises(NotFoundError) as exc_info:
            registry.get_endpoint("warn")
        assert exc_info.value.kind == "logger"

    def test_views_are_copies(self, registry):
        registry.register_endpoint("info")
        registry.endpoints().clear()
        assert registry.has_endpoint("info")


class TestSignals:
    def test_endpoint_registered_signal(self, registry, emitter):
        seen = []
        emitter.subscribe("endpoint_registered", lambda name, defn: seen.append((name, defn)))
        defn = registry.register_endpoint("info")
        assert seen == [("info", defn)]

    def test_mode_registered_signal(self, registry, emitter):
        seen = []
        emitter.subscribe("mode_registered", lambda name, defn: seen.append((name, defn)))
        defn = registry.register_mode("verbose")
        assert seen == [("verbose", defn)]

    def test_no_signal_on_invalid_kind(self, registry, emitter):
        seen = []
        emitter.subscribe("mode_registered", lambda *a: seen.append(a))
        with pytest.raises(InvalidKindError):
            registry.register_mode("verbose", {"kind": "nope"})
        assert seen == []
