"""Pure toggle evaluation.

:func:`evaluate` turns a stored record, the toggle's static metadata and a
fresh :class:`EvaluationContext` into an :class:`Evaluation`.  It never
touches a store or calls back into the host: when an experiment is
evaluated without an assigned variant the result carries
``assign_default_variant=True`` and the caller performs the assignment.

Evaluation order:

1. Remote kill switch (``remote_enable_state is False``) disables.
2. Variant targeting.  Experiments without a variant are disabled and
   request the default variant; otherwise a non-empty target list must
   contain the current variant.
3. Without a record the declared default applies.
4. With an explicit remote enable, an active rollout is recomputed live
   from the sticky bucket; without rollout the stored decision applies.
5. Without a remote signal the stored decision is trusted verbatim, so a
   restart before the next fetch does not flip the toggle.
6. The internal floor enables ``is_internal_always_enabled`` toggles on
   INTERNAL builds, even under a kill switch.
7. The minimum-version gate overrides everything, the floor included.
"""

from __future__ import annotations

from pytoggles.models._base import BuildFlavor
from pytoggles.models.metadata import Evaluation, EvaluationContext, ToggleMetadata
from pytoggles.models.record import ToggleRecord
from pytoggles.state.policy import matches_targets, meets_min_version, rollout_admits


def _base_decision(
    metadata: ToggleMetadata,
    record: ToggleRecord | None,
    context: EvaluationContext,
) -> Evaluation:
    if record is not None and record.remote_enable_state is False:
        return Evaluation(enabled=False)

    targets = record.targets if record is not None else None
    if metadata.is_experiment:
        if context.variant_key is None:
            return Evaluation(enabled=False, assign_default_variant=True)
        if not matches_targets(context.variant_key, targets):
            return Evaluation(enabled=False)
    elif not matches_targets(context.variant_key, targets):
        return Evaluation(enabled=False)

    if record is None:
        return Evaluation(enabled=metadata.default_enabled)

    if record.remote_enable_state is True and record.rollout:
        return Evaluation(enabled=record.enabled or rollout_admits(record.rollout_threshold, record.rollout))
    return Evaluation(enabled=record.enabled)


def internal_floor(metadata: ToggleMetadata, context: EvaluationContext) -> bool:
    """Internal-only override; never applies to other build flavors."""
    return metadata.is_internal_always_enabled and context.build_flavor is BuildFlavor.INTERNAL


def evaluate(
    metadata: ToggleMetadata,
    record: ToggleRecord | None,
    context: EvaluationContext,
) -> Evaluation:
    """Evaluate a toggle without side effects."""
    base = _base_decision(metadata, record, context)
    enabled = base.enabled or internal_floor(metadata, context)
    if record is not None and not meets_min_version(context.app_version, record.min_supported_version):
        enabled = False
    return Evaluation(enabled=enabled, assign_default_variant=base.assign_default_variant)
