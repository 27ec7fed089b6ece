"""Static toggle registration.

A :class:`ToggleRegistry` is the table that maps toggle names within one
feature to their :class:`ToggleMetadata`.  It is built once at startup,
either by hand with :meth:`ToggleRegistry.declare` or from a generated
mapping with :meth:`ToggleRegistry.from_mapping`::

    registry = ToggleRegistry.from_mapping(
        "checkout",
        {
            "self": {"defaultValue": True},
            "newFlow": {"defaultValue": False, "experiment": True},
            "debugPanel": {"defaultValue": False, "internalAlwaysEnabled": True},
        },
    )
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from pytoggles._constants import SELF_TOGGLE_NAME, toggle_key
from pytoggles.exceptions import ToggleBuilderError, ToggleDefinitionError
from pytoggles.models.metadata import ToggleMetadata

_MAPPING_KEYS = frozenset({"defaultValue", "experiment", "internalAlwaysEnabled"})


class ToggleRegistry:
    """Declared toggles of a single feature."""

    def __init__(self, feature_name: str) -> None:
        name = feature_name.strip() if isinstance(feature_name, str) else ""
        if not name:
            raise ToggleBuilderError("feature_name must be a non-empty string")
        self._feature_name = name
        self._toggles: dict[str, ToggleMetadata] = {}

    @property
    def feature_name(self) -> str:
        return self._feature_name

    def declare(
        self,
        name: str,
        *,
        default_enabled: bool | None,
        experiment: bool = False,
        internal_always_enabled: bool = False,
    ) -> ToggleMetadata:
        """Register one toggle and return its metadata.

        ``default_enabled`` is keyword-required; passing ``None`` is the
        generated-code equivalent of a missing default and fails fast.
        """
        key = toggle_key(self._feature_name, name)
        if not name:
            raise ToggleDefinitionError("toggle name must be non-empty", key=key)
        if name in self._toggles:
            raise ToggleDefinitionError(f"toggle {name!r} declared twice", key=key)
        if not isinstance(default_enabled, bool):
            raise ToggleDefinitionError(f"toggle {name!r} has no boolean default value", key=key)
        for flag, value in (("experiment", experiment), ("internalAlwaysEnabled", internal_always_enabled)):
            if not isinstance(value, bool):
                raise ToggleDefinitionError(f"toggle {name!r} has a non-boolean {flag}: {value!r}", key=key)
        metadata = ToggleMetadata(
            key=key,
            default_enabled=default_enabled,
            is_experiment=experiment,
            is_internal_always_enabled=internal_always_enabled,
        )
        self._toggles[name] = metadata
        return metadata

    @classmethod
    def from_mapping(cls, feature_name: str, table: Mapping[str, Any]) -> ToggleRegistry:
        """Build a registry from a ``{name: {"defaultValue": bool, ...}}`` table."""
        registry = cls(feature_name)
        for name, entry in table.items():
            if not isinstance(entry, Mapping):
                raise ToggleDefinitionError(
                    f"toggle {name!r} must map to an object, got {type(entry).__name__}",
                    key=toggle_key(registry.feature_name, name),
                )
            unknown = set(entry) - _MAPPING_KEYS
            if unknown:
                raise ToggleDefinitionError(
                    f"toggle {name!r} has unknown attributes: {', '.join(sorted(unknown))}",
                    key=toggle_key(registry.feature_name, name),
                )
            registry.declare(
                name,
                default_enabled=entry.get("defaultValue"),
                experiment=entry.get("experiment", False),
                internal_always_enabled=entry.get("internalAlwaysEnabled", False),
            )
        return registry

    def metadata(self, name: str) -> ToggleMetadata:
        try:
            return self._toggles[name]
        except KeyError:
            raise ToggleDefinitionError(
                f"toggle {name!r} is not declared for feature {self._feature_name!r}",
                key=toggle_key(self._feature_name, name),
            ) from None

    def has_self(self) -> bool:
        return SELF_TOGGLE_NAME in self._toggles

    def names(self) -> list[str]:
        return list(self._toggles)

    def __contains__(self, name: object) -> bool:
        return name in self._toggles

    def __iter__(self) -> Iterator[ToggleMetadata]:
        return iter(self._toggles.values())

    def __len__(self) -> int:
        return len(self._toggles)
