"""Static toggle metadata and per-call evaluation inputs."""

from __future__ import annotations

from dataclasses import dataclass

from pytoggles.models._base import BuildFlavor


@dataclass(frozen=True, slots=True)
class ToggleMetadata:
    """Declaration of a toggle, fixed for the lifetime of the process."""

    key: str
    default_enabled: bool
    is_experiment: bool = False
    is_internal_always_enabled: bool = False


@dataclass(frozen=True, slots=True)
class EvaluationContext:
    """Host facts read fresh for every evaluation."""

    app_version: int
    build_flavor: BuildFlavor = BuildFlavor.UNKNOWN
    variant_key: str | None = None


@dataclass(frozen=True, slots=True)
class Evaluation:
    """Result of evaluating a toggle.

    ``assign_default_variant`` asks the caller to assign the default
    variant; the evaluator itself never performs side effects.
    """

    enabled: bool
    assign_default_variant: bool = False

    def __bool__(self) -> bool:
        return self.enabled
