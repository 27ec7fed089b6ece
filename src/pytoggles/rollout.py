"""Sticky per-install rollout buckets."""

from __future__ import annotations

import logging
import random

from pytoggles._constants import ROLLOUT_MAX
from pytoggles.models.record import ToggleRecord
from pytoggles.state.policy import is_valid_threshold

_logger = logging.getLogger(__name__)


class RolloutBucketAssigner:
    """Assign the rollout bucket of a toggle exactly once.

    A bucket already stored on the record always wins, even over a
    threshold proposed by a new configuration.  Only when neither exists
    is a fresh value drawn uniformly from ``[0, 100)``.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def assign(self, existing: ToggleRecord | None, proposed: float | None = None) -> float:
        if existing is not None and existing.rollout_threshold is not None:
            return existing.rollout_threshold
        if proposed is not None and is_valid_threshold(proposed):
            return proposed
        # random() is in [0, 1), so the bucket can never reach 100.
        bucket = self._rng.random() * ROLLOUT_MAX
        _logger.debug("Drew rollout bucket %.4f", bucket)
        return bucket
