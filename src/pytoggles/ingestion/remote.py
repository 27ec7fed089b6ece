"""Typed remote feature payloads.

A remote configuration payload describes one feature and its
sub-features::

    {
        "state": "enabled",
        "minSupportedVersion": 52000,
        "features": {
            "newFlow": {
                "state": "enabled",
                "rollout": {"steps": [{"percent": 1.0}, {"percent": 10.0}]},
                "targets": [{"variantKey": "ma"}]
            }
        }
    }
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import Field, field_validator

from pytoggles.models._base import BuildFlavor, ToggleBaseModel
from pytoggles.models.record import ToggleRecord, ToggleState, target_to_variant_key


class RemoteState(enum.StrEnum):
    ENABLED = "enabled"
    DISABLED = "disabled"
    INTERNAL = "internal"

    @classmethod
    def _missing_(cls, value: object) -> RemoteState:
        # Unknown states never enable anything.
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return cls.DISABLED

    def is_enabled_for(self, flavor: BuildFlavor) -> bool:
        if self is RemoteState.ENABLED:
            return True
        return self is RemoteState.INTERNAL and flavor is BuildFlavor.INTERNAL


class RolloutStep(ToggleBaseModel):
    percent: float


class Rollout(ToggleBaseModel):
    steps: list[RolloutStep] = Field(default_factory=list)

    def percentages(self) -> list[float]:
        return [step.percent for step in self.steps]


class RemoteToggle(ToggleBaseModel):
    """Remote decision for a single toggle."""

    state: RemoteState = RemoteState.DISABLED
    min_supported_version: int | None = None
    rollout: Rollout | None = None
    targets: list[str] | None = None

    @field_validator("targets", mode="before")
    @classmethod
    def _normalize_targets(cls, value: Any) -> Any:
        if value is None or isinstance(value, (str, bytes)):
            return value
        return [target_to_variant_key(item) for item in value]

    def to_state(self, flavor: BuildFlavor, previous: ToggleRecord | None) -> ToggleState:
        """Translate into an explicit remote :class:`ToggleState`.

        With an active rollout the previously stored decision is carried as
        ``enable`` so an install admitted by an earlier wave stays enabled.
        """
        remote_enabled = self.state.is_enabled_for(flavor)
        rollout = self.rollout.percentages() if self.rollout is not None else None
        if rollout:
            enable = (
                remote_enabled
                and previous is not None
                and previous.remote_enable_state is True
                and previous.enabled
            )
        else:
            enable = remote_enabled
        return ToggleState.model_validate(
            {
                "enable": enable,
                "remoteEnableState": remote_enabled,
                "rollout": rollout or None,
                "minSupportedVersion": self.min_supported_version,
                "targets": self.targets,
            }
        )


class RemoteFeature(RemoteToggle):
    """Top-level feature payload; its own state drives the ``self`` toggle."""

    features: dict[str, RemoteToggle] = Field(default_factory=dict)
