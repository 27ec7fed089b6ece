"""Toggle state models.

:class:`ToggleState` is what callers (or the remote ingestion layer) hand
to ``Toggle.set_enabled``.  :class:`ToggleRecord` is what the reconciler
persists.  Both share the same optional fields; they differ in how the
decision is named (``enable`` is a request, ``enabled`` a resolved value).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, field_validator

from pytoggles.models._base import ToggleBaseModel


def target_to_variant_key(value: Any) -> str:
    """Accept ``"ma"`` or ``{"variantKey": "ma"}`` and return ``"ma"``."""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        key = value.get("variantKey", value.get("variant_key"))
        if isinstance(key, str):
            return key
    raise ValueError(f"target must be a variant key or an object with 'variantKey', got {value!r}")


class _ToggleFields(ToggleBaseModel):
    remote_enable_state: bool | None = Field(
        default=None,
        description="Explicit remote decision; None when no remote signal was received.",
    )
    rollout: list[float] | None = Field(default=None, description="Ascending rollout wave percentages.")
    rollout_threshold: float | None = Field(default=None, description="Sticky per-install bucket in [0, 100).")
    min_supported_version: int | None = None
    targets: list[str] | None = Field(default=None, description="Variant keys allowed to see the toggle.")

    @field_validator("targets", mode="before")
    @classmethod
    def _normalize_targets(cls, value: Any) -> Any:
        if value is None or isinstance(value, (str, bytes)):
            return value
        return [target_to_variant_key(item) for item in value]


class ToggleState(_ToggleFields):
    """Incoming toggle configuration."""

    enable: bool = False


class ToggleRecord(_ToggleFields):
    """Persisted per-toggle state."""

    enabled: bool = False
