"""Deterministic rollout and gating policy.

Pure helpers shared by the reconciler (write path) and the evaluator
(read path).  Nothing here touches a store.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pytoggles._constants import ROLLOUT_MAX, ROLLOUT_MIN

_logger = logging.getLogger(__name__)


def normalize_rollout(steps: Iterable[float] | None, *, key: str = "") -> list[float] | None:
    """Drop out-of-range steps and sort the rest.

    Returns ``None`` when nothing usable remains, so an empty list and an
    absent list mean the same thing downstream.
    """
    if steps is None:
        return None
    kept: list[float] = []
    for step in steps:
        if ROLLOUT_MIN <= step <= ROLLOUT_MAX:
            kept.append(float(step))
        else:
            _logger.warning("Dropping rollout step %s for %s: outside [0, 100]", step, key or "<unknown>")
    if not kept:
        return None
    return sorted(kept)


def is_valid_threshold(value: float | None) -> bool:
    return value is not None and ROLLOUT_MIN <= value < ROLLOUT_MAX


def rollout_admits(threshold: float | None, rollout: list[float] | None) -> bool:
    """Return ``True`` when the bucket falls inside the widest rollout wave.

    Widening a rollout only ever raises ``max(rollout)``, so a bucket that
    was admitted once stays admitted.
    """
    if threshold is None or not rollout:
        return False
    return threshold <= max(rollout)


def meets_min_version(app_version: int, min_supported_version: int | None) -> bool:
    if min_supported_version is None:
        return True
    return app_version >= min_supported_version


def matches_targets(variant_key: str | None, targets: list[str] | None) -> bool:
    """An empty or absent target list allows every variant."""
    if not targets:
        return True
    return variant_key is not None and variant_key in targets
