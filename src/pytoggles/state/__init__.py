"""State/store layer.

Persistence of per-toggle records and the deterministic rollout and
gating policy shared by the reconciler and the evaluator.
"""
