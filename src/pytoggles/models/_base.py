"""Base model and enum for toggle data.

Every persisted or transported toggle model inherits from
:class:`ToggleBaseModel` which provides:

* ``alias_generator=to_camel`` so the camelCase keys used by remote
  payloads and the JSON store map to snake_case fields.
* Immutability, so a record handed out by a store can never be mutated
  behind the reconciler's back.

:class:`BuildFlavor` resolves any unrecognised flavor name to
``UNKNOWN`` instead of raising ``ValueError``.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BuildFlavor(enum.StrEnum):
    """Distribution flavor of the running build."""

    PLAY = "PLAY"
    FDROID = "FDROID"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value: object) -> BuildFlavor:
        if isinstance(value, str):
            normalized = value.strip().upper()
            for member in cls:
                if member.value == normalized:
                    return member
        return cls.UNKNOWN


class ToggleBaseModel(BaseModel):
    """Base for toggle models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_json_dict(self) -> dict[str, object]:
        """Dump using camelCase keys, suitable for ``json.dumps``."""
        return self.model_dump(mode="json", by_alias=True)
