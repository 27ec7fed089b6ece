"""Apply remote feature payloads to declared toggles.

The networking layer that fetches the payload lives in the host; this
module only parses the JSON for one feature and turns every decision into
an explicit remote :class:`~pytoggles.models.record.ToggleState`.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from pytoggles._constants import SELF_TOGGLE_NAME
from pytoggles.exceptions import RemoteConfigError
from pytoggles.ingestion.remote import RemoteFeature, RemoteToggle
from pytoggles.toggles import FeatureToggles, Toggle

_logger = logging.getLogger(__name__)


def parse_remote_feature(feature_name: str, payload: str | bytes | dict[str, Any]) -> RemoteFeature:
    """Parse a feature payload given as JSON text or an already decoded dict."""
    try:
        data: Any = json.loads(payload) if isinstance(payload, (str, bytes)) else payload
    except json.JSONDecodeError as exc:
        raise RemoteConfigError(f"Invalid JSON for feature {feature_name!r}: {exc}", feature_name=feature_name) from exc
    if not isinstance(data, dict):
        raise RemoteConfigError(f"Feature {feature_name!r} payload must be a JSON object", feature_name=feature_name)
    try:
        return RemoteFeature.model_validate(data)
    except ValidationError as exc:
        raise RemoteConfigError(f"Malformed payload for feature {feature_name!r}: {exc}", feature_name=feature_name) from exc


class FeatureTogglesPlugin:
    """Routes remote payloads for one feature into its toggles."""

    def __init__(self, feature_toggles: FeatureToggles) -> None:
        self._toggles = feature_toggles

    @property
    def feature_name(self) -> str:
        return self._toggles.feature_name

    def _apply(self, toggle: Toggle, remote: RemoteToggle) -> None:
        flavor = self._toggles.providers.context().build_flavor
        toggle.set_enabled(remote.to_state(flavor, toggle.get_raw_stored_state()))

    def store(self, feature_name: str, payload: str | bytes | dict[str, Any]) -> bool:
        """Apply *payload* when it belongs to this feature.

        Returns ``False`` without touching any state for other features.
        """
        if feature_name != self.feature_name:
            return False

        feature = parse_remote_feature(feature_name, payload)
        registry = self._toggles.registry

        if registry.has_self():
            self._apply(self._toggles.self_toggle(), feature)

        for name, remote in feature.features.items():
            if name == SELF_TOGGLE_NAME or name not in registry:
                _logger.warning("Ignoring undeclared sub-feature %r of %r", name, feature_name)
                continue
            self._apply(self._toggles.toggle(name), remote)

        _logger.debug("Applied remote config for %s (%d sub-features)", feature_name, len(feature.features))
        return True
