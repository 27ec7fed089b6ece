"""Data models for toggle declarations, state and evaluation."""

from pytoggles.models._base import BuildFlavor, ToggleBaseModel
from pytoggles.models.metadata import Evaluation, EvaluationContext, ToggleMetadata
from pytoggles.models.record import ToggleRecord, ToggleState

__all__ = [
    "BuildFlavor",
    "Evaluation",
    "EvaluationContext",
    "ToggleBaseModel",
    "ToggleMetadata",
    "ToggleRecord",
    "ToggleState",
]
