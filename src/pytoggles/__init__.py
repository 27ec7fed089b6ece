"""pytoggles - Deterministic, persistent feature toggle evaluation."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pytoggles")
except PackageNotFoundError:
    __version__ = "0+local"
from pytoggles.config import TogglesConfig
from pytoggles.evaluator import evaluate
from pytoggles.exceptions import (
    RemoteConfigError,
    ToggleBuilderError,
    ToggleDefinitionError,
    ToggleError,
    ToggleStoreError,
)
from pytoggles.ingestion import FeatureTogglesPlugin
from pytoggles.models import (
    BuildFlavor,
    Evaluation,
    EvaluationContext,
    ToggleMetadata,
    ToggleRecord,
    ToggleState,
)
from pytoggles.reconciler import ToggleReconciler
from pytoggles.registry import ToggleRegistry
from pytoggles.rollout import RolloutBucketAssigner
from pytoggles.state.store import InMemoryToggleStore, JsonFileToggleStore, ToggleStore
from pytoggles.toggles import ContextProviders, FeatureToggles, Toggle

__all__ = [
    "__version__",
    "BuildFlavor",
    "ContextProviders",
    "Evaluation",
    "EvaluationContext",
    "FeatureToggles",
    "FeatureTogglesPlugin",
    "InMemoryToggleStore",
    "JsonFileToggleStore",
    "RemoteConfigError",
    "RolloutBucketAssigner",
    "Toggle",
    "ToggleBuilderError",
    "ToggleDefinitionError",
    "ToggleError",
    "ToggleMetadata",
    "ToggleReconciler",
    "ToggleRecord",
    "ToggleRegistry",
    "ToggleState",
    "ToggleStore",
    "ToggleStoreError",
    "TogglesConfig",
    "evaluate",
]
