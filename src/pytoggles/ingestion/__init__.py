"""Ingestion layer.

Adapters that turn remote feature payloads into explicit toggle states.
"""

from pytoggles.ingestion.apply import FeatureTogglesPlugin, parse_remote_feature
from pytoggles.ingestion.remote import RemoteFeature, RemoteState, RemoteToggle, Rollout, RolloutStep

__all__ = [
    "FeatureTogglesPlugin",
    "RemoteFeature",
    "RemoteState",
    "RemoteToggle",
    "Rollout",
    "RolloutStep",
    "parse_remote_feature",
]
