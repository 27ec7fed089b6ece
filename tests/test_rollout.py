from __future__ import annotations

import random

import pytest

from pytoggles.models import ToggleRecord
from pytoggles.rollout import RolloutBucketAssigner
from pytoggles.state.policy import (
    is_valid_threshold,
    matches_targets,
    meets_min_version,
    normalize_rollout,
    rollout_admits,
)


class CountingRandom(random.Random):
    def __init__(self, seed: int) -> None:
        super().__init__(seed)
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return super().random()


def test_existing_threshold_is_returned_without_draw() -> None:
    rng = CountingRandom(1)
    assigner = RolloutBucketAssigner(rng)
    assert assigner.assign(ToggleRecord(rollout_threshold=12.5), proposed=80.0) == 12.5
    assert rng.calls == 0


def test_valid_proposal_used_without_draw() -> None:
    rng = CountingRandom(1)
    assert RolloutBucketAssigner(rng).assign(None, proposed=0.0) == 0.0
    assert rng.calls == 0


@pytest.mark.parametrize("proposed", [None, -0.1, 100.0, 250.0])
def test_invalid_proposal_draws_once(proposed: float | None) -> None:
    rng = CountingRandom(1)
    bucket = RolloutBucketAssigner(rng).assign(ToggleRecord(), proposed=proposed)
    assert 0.0 <= bucket < 100.0
    assert rng.calls == 1


def test_draws_stay_in_range() -> None:
    assigner = RolloutBucketAssigner(random.Random(7))
    buckets = [assigner.assign(None) for _ in range(2000)]
    assert all(0.0 <= b < 100.0 for b in buckets)
    # Roughly uniform: both halves are populated.
    assert sum(1 for b in buckets if b < 50.0) > 800
    assert sum(1 for b in buckets if b >= 50.0) > 800


def test_normalize_rollout() -> None:
    assert normalize_rollout(None) is None
    assert normalize_rollout([]) is None
    assert normalize_rollout([101.0]) is None
    assert normalize_rollout([50.0, 0.0, 10.0]) == [0.0, 10.0, 50.0]


def test_rollout_admits_uses_widest_wave() -> None:
    assert rollout_admits(15.0, [1.0, 10.0, 20.0]) is True
    assert rollout_admits(20.0, [1.0, 10.0, 20.0]) is True
    assert rollout_admits(20.5, [1.0, 10.0, 20.0]) is False
    assert rollout_admits(None, [100.0]) is False
    assert rollout_admits(1.0, None) is False


def test_widening_never_removes_admitted_bucket() -> None:
    waves = [[1.0], [1.0, 5.0], [1.0, 5.0, 25.0], [1.0, 5.0, 25.0, 100.0]]
    for bucket in (0.0, 0.5, 3.0, 17.0, 99.9):
        admitted = False
        for wave in waves:
            now = rollout_admits(bucket, wave)
            assert now or not admitted
            admitted = now


def test_threshold_validity() -> None:
    assert is_valid_threshold(0.0) is True
    assert is_valid_threshold(99.999) is True
    assert is_valid_threshold(100.0) is False
    assert is_valid_threshold(None) is False


def test_min_version_and_targets_helpers() -> None:
    assert meets_min_version(10, None) is True
    assert meets_min_version(10, 10) is True
    assert meets_min_version(9, 10) is False
    assert matches_targets(None, None) is True
    assert matches_targets(None, ["ma"]) is False
    assert matches_targets("ma", ["ma"]) is True
