from __future__ import annotations

import pytest

from pytoggles.exceptions import ToggleBuilderError, ToggleDefinitionError
from pytoggles.models import ToggleMetadata
from pytoggles.registry import ToggleRegistry


def test_declare_builds_keys_from_feature_name() -> None:
    registry = ToggleRegistry("checkout")
    self_meta = registry.declare("self", default_enabled=True)
    sub_meta = registry.declare("newFlow", default_enabled=False, experiment=True)

    assert self_meta == ToggleMetadata(key="checkout", default_enabled=True)
    assert sub_meta == ToggleMetadata(key="checkout_newFlow", default_enabled=False, is_experiment=True)
    assert registry.has_self() is True
    assert registry.names() == ["self", "newFlow"]
    assert len(registry) == 2
    assert "newFlow" in registry


def test_from_mapping() -> None:
    registry = ToggleRegistry.from_mapping(
        "checkout",
        {
            "self": {"defaultValue": True},
            "debugPanel": {"defaultValue": False, "internalAlwaysEnabled": True},
        },
    )
    assert registry.metadata("debugPanel").is_internal_always_enabled is True
    assert [m.key for m in registry] == ["checkout", "checkout_debugPanel"]


def test_missing_default_value_fails_fast() -> None:
    with pytest.raises(ToggleDefinitionError) as exc_info:
        ToggleRegistry.from_mapping("checkout", {"noDefaultValue": {"experiment": True}})
    assert exc_info.value.key == "checkout_noDefaultValue"


def test_none_default_fails_fast() -> None:
    with pytest.raises(ToggleDefinitionError):
        ToggleRegistry("checkout").declare("x", default_enabled=None)


def test_non_boolean_default_fails_fast() -> None:
    with pytest.raises(ToggleDefinitionError):
        ToggleRegistry.from_mapping("checkout", {"x": {"defaultValue": "true"}})


def test_malformed_entry_fails_fast() -> None:
    with pytest.raises(ToggleDefinitionError, match="must map to an object"):
        ToggleRegistry.from_mapping("checkout", {"x": True})


def test_unknown_attribute_fails_fast() -> None:
    with pytest.raises(ToggleDefinitionError, match="unknown attributes"):
        ToggleRegistry.from_mapping("checkout", {"x": {"defaultValue": True, "deafultValue": False}})


def test_duplicate_declaration_fails() -> None:
    registry = ToggleRegistry("checkout")
    registry.declare("x", default_enabled=True)
    with pytest.raises(ToggleDefinitionError, match="declared twice"):
        registry.declare("x", default_enabled=False)


def test_unknown_toggle_lookup_fails() -> None:
    with pytest.raises(ToggleDefinitionError):
        ToggleRegistry("checkout").metadata("missing")


@pytest.mark.parametrize("name", ["", "   "])
def test_blank_feature_name_is_a_builder_error(name: str) -> None:
    with pytest.raises(ToggleBuilderError):
        ToggleRegistry(name)


@pytest.mark.parametrize(
    "entry",
    [
        {"defaultValue": True, "experiment": "no"},
        {"defaultValue": True, "experiment": 1},
        {"defaultValue": False, "internalAlwaysEnabled": "false"},
        {"defaultValue": False, "internalAlwaysEnabled": None},
    ],
)
def test_non_boolean_flags_fail_fast(entry: dict) -> None:
    with pytest.raises(ToggleDefinitionError, match="non-boolean") as exc_info:
        ToggleRegistry.from_mapping("checkout", {"x": entry})
    assert exc_info.value.key == "checkout_x"
