"""Toggle facade.

Binds the registry, the store, the reconciler and the evaluator into
per-toggle handles::

    toggles = FeatureToggles(store=store, registry=registry, providers=providers)
    if toggles.toggle("newFlow").is_enabled():
        ...
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from pytoggles._constants import SELF_TOGGLE_NAME, UNBOUNDED_APP_VERSION
from pytoggles.config import TogglesConfig
from pytoggles.evaluator import evaluate
from pytoggles.exceptions import ToggleBuilderError
from pytoggles.models._base import BuildFlavor
from pytoggles.models.metadata import Evaluation, EvaluationContext, ToggleMetadata
from pytoggles.models.record import ToggleRecord, ToggleState
from pytoggles.reconciler import ToggleReconciler
from pytoggles.registry import ToggleRegistry
from pytoggles.rollout import RolloutBucketAssigner
from pytoggles.state.store import InMemoryToggleStore, JsonFileToggleStore, ToggleStore

_logger = logging.getLogger(__name__)


def _noop() -> None:
    return None


@dataclass(frozen=True)
class ContextProviders:
    """Host callbacks read on every evaluation.

    ``force_default_variant`` is invoked when an experiment toggle is
    evaluated before a variant was assigned.  It may run on every such
    evaluation, so it must be idempotent.
    """

    app_version: Callable[[], int] = lambda: UNBOUNDED_APP_VERSION
    build_flavor: Callable[[], str] = lambda: ""
    variant_key: Callable[[], str | None] = lambda: None
    force_default_variant: Callable[[], None] = _noop

    def context(self) -> EvaluationContext:
        return EvaluationContext(
            app_version=self.app_version(),
            build_flavor=BuildFlavor(self.build_flavor()),
            variant_key=self.variant_key(),
        )


class Toggle:
    """Handle to one declared toggle."""

    def __init__(
        self,
        metadata: ToggleMetadata,
        *,
        store: ToggleStore,
        reconciler: ToggleReconciler,
        providers: ContextProviders,
    ) -> None:
        self._metadata = metadata
        self._store = store
        self._reconciler = reconciler
        self._providers = providers

    @property
    def key(self) -> str:
        return self._metadata.key

    @property
    def metadata(self) -> ToggleMetadata:
        return self._metadata

    def evaluate(self) -> Evaluation:
        """Evaluate without performing the default-variant side effect."""
        return evaluate(self._metadata, self._store.get(self.key), self._providers.context())

    def is_enabled(self) -> bool:
        result = self.evaluate()
        if result.assign_default_variant:
            _logger.debug("No variant assigned while evaluating %s, forcing default", self.key)
            self._providers.force_default_variant()
        return result.enabled

    def set_enabled(self, state: ToggleState) -> None:
        self._reconciler.apply(self._metadata, state, self._providers.context())

    def get_raw_stored_state(self) -> ToggleRecord | None:
        return self._store.get(self.key)

    def __repr__(self) -> str:
        return f"Toggle(key={self.key!r})"


class FeatureToggles:
    """All toggles declared for one feature."""

    def __init__(
        self,
        *,
        store: ToggleStore | None,
        registry: ToggleRegistry | None,
        providers: ContextProviders | None = None,
        assigner: RolloutBucketAssigner | None = None,
    ) -> None:
        if store is None:
            raise ToggleBuilderError("a toggle store is required")
        if registry is None:
            raise ToggleBuilderError("a toggle registry (feature name) is required")
        self._store = store
        self._registry = registry
        self._providers = providers or ContextProviders()
        self._reconciler = ToggleReconciler(store, assigner)
        self._toggles: dict[str, Toggle] = {}

    @classmethod
    def from_config(
        cls,
        config: TogglesConfig,
        registry: ToggleRegistry,
        *,
        store: ToggleStore | None = None,
    ) -> FeatureToggles:
        """Wire a bundled store and static providers from *config*."""
        if registry.feature_name != config.feature_name:
            raise ToggleBuilderError(
                f"registry is for {registry.feature_name!r}, config names {config.feature_name!r}"
            )
        if store is None:
            store = JsonFileToggleStore(config.store_path) if config.store_path else InMemoryToggleStore()
        providers = ContextProviders(
            app_version=lambda: config.app_version,
            build_flavor=lambda: config.build_flavor,
            variant_key=lambda: config.variant_key,
        )
        rng = random.Random(config.rollout_seed) if config.rollout_seed is not None else None
        return cls(store=store, registry=registry, providers=providers, assigner=RolloutBucketAssigner(rng))

    @property
    def feature_name(self) -> str:
        return self._registry.feature_name

    @property
    def registry(self) -> ToggleRegistry:
        return self._registry

    @property
    def providers(self) -> ContextProviders:
        return self._providers

    def toggle(self, name: str) -> Toggle:
        handle = self._toggles.get(name)
        if handle is None:
            handle = Toggle(
                self._registry.metadata(name),
                store=self._store,
                reconciler=self._reconciler,
                providers=self._providers,
            )
            self._toggles[name] = handle
        return handle

    def self_toggle(self) -> Toggle:
        return self.toggle(SELF_TOGGLE_NAME)

    def toggles(self) -> Iterator[Toggle]:
        for name in self._registry.names():
            yield self.toggle(name)

    def __getitem__(self, name: str) -> Toggle:
        return self.toggle(name)
