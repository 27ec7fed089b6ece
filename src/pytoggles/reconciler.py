"""Merge incoming toggle configuration into the persisted record.

This is the only component allowed to write toggle records.  Given the
same existing record and the same incoming state it always produces the
same result, which makes repeated application of an unchanged remote
configuration a no-op once the rollout bucket exists.

Transitions::

    Unset -> LocalDefault -> RemoteDisabled <-> RemoteEnabled

``Unset`` and ``LocalDefault`` persist until the first explicit remote
signal.  Both remote states are reachable from each other by later
explicit pushes.
"""

from __future__ import annotations

import logging

from pytoggles.models.metadata import EvaluationContext, ToggleMetadata
from pytoggles.models.record import ToggleRecord, ToggleState
from pytoggles.rollout import RolloutBucketAssigner
from pytoggles.state.policy import normalize_rollout, rollout_admits
from pytoggles.state.store import ToggleStore

_logger = logging.getLogger(__name__)


def _from_incoming(incoming: ToggleState, *, enabled: bool, bucket: float, rollout: list[float] | None) -> ToggleRecord:
    return ToggleRecord(
        enabled=enabled,
        remote_enable_state=incoming.remote_enable_state,
        rollout=rollout,
        rollout_threshold=bucket,
        min_supported_version=incoming.min_supported_version,
        targets=incoming.targets,
    )


class ToggleReconciler:
    """Reconcile and persist toggle records."""

    def __init__(self, store: ToggleStore, assigner: RolloutBucketAssigner | None = None) -> None:
        self._store = store
        self._assigner = assigner or RolloutBucketAssigner()

    @property
    def store(self) -> ToggleStore:
        return self._store

    def reconcile(
        self,
        existing: ToggleRecord | None,
        incoming: ToggleState,
        metadata: ToggleMetadata,
        context: EvaluationContext | None = None,
    ) -> ToggleRecord:
        """Compute the record that results from applying *incoming*.

        *context* is accepted for symmetry with evaluation; reconciliation
        never depends on the host's version, flavor or variant so that the
        stored record stays valid after an app update.
        """
        bucket = self._assigner.assign(existing, incoming.rollout_threshold)
        rollout = normalize_rollout(incoming.rollout, key=metadata.key)
        rollout_rejected = rollout is None and bool(incoming.rollout)
        if rollout_rejected:
            _logger.warning("Every rollout step for %s was invalid; admitting no new installs", metadata.key)

        if incoming.remote_enable_state is False:
            if existing is None or existing.remote_enable_state is not False:
                _logger.info("Remote kill switch engaged for %s", metadata.key)
            return _from_incoming(incoming, enabled=incoming.enable, bucket=bucket, rollout=rollout)

        if incoming.remote_enable_state is True:
            if rollout_rejected:
                # Keeps installs admitted earlier, widens to nobody new.
                enabled = incoming.enable
            elif rollout is None:
                enabled = True
            else:
                enabled = incoming.enable or rollout_admits(bucket, rollout)
            if existing is not None and existing.remote_enable_state is False:
                _logger.info("Remote kill switch released for %s", metadata.key)
            return _from_incoming(incoming, enabled=enabled, bucket=bucket, rollout=rollout)

        if existing is None:
            enabled = incoming.enable or rollout_admits(bucket, rollout)
            return _from_incoming(incoming, enabled=enabled, bucket=bucket, rollout=rollout)

        # No fresh remote signal: keep the previous decision so a restart
        # before the next fetch cannot flip the toggle.
        return ToggleRecord(
            enabled=existing.enabled,
            remote_enable_state=existing.remote_enable_state,
            rollout=rollout if rollout is not None else existing.rollout,
            rollout_threshold=bucket,
            min_supported_version=(
                incoming.min_supported_version
                if incoming.min_supported_version is not None
                else existing.min_supported_version
            ),
            targets=incoming.targets if incoming.targets is not None else existing.targets,
        )

    def apply(
        self,
        metadata: ToggleMetadata,
        incoming: ToggleState,
        context: EvaluationContext | None = None,
    ) -> ToggleRecord:
        """Reconcile *incoming* with the stored record and persist the result.

        Store errors propagate unchanged; nothing is written unless the new
        record was computed successfully.
        """
        existing = self._store.get(metadata.key)
        record = self.reconcile(existing, incoming, metadata, context)
        self._store.set(metadata.key, record)
        _logger.debug(
            "Reconciled %s: enabled=%s remote=%s rollout=%s threshold=%.4f",
            metadata.key,
            record.enabled,
            record.remote_enable_state,
            record.rollout,
            record.rollout_threshold,
        )
        return record
