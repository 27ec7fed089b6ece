"""Host configuration for pytoggles."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pytoggles._constants import UNBOUNDED_APP_VERSION


@dataclasses.dataclass(frozen=True)
class TogglesConfig:
    """Static host configuration.

    Parameters
    ----------
    feature_name : str
        Name of the feature whose toggles are managed.
    store_path : str or None
        Path of the JSON toggle store.  ``None`` keeps records in memory.
    app_version : int
        Numeric app version compared against ``minSupportedVersion``.
    build_flavor : str
        Build flavor name (``PLAY``, ``FDROID``, ``INTERNAL``).
    variant_key : str or None
        Experiment variant assigned to this install, if any.
    rollout_seed : int or None
        Seed for rollout bucket draws.  Only useful for reproducible
        tooling and tests; production installs leave it unset.
    """

    feature_name: str
    store_path: str | None = None
    app_version: int = UNBOUNDED_APP_VERSION
    build_flavor: str = ""
    variant_key: str | None = None
    rollout_seed: int | None = None

    @classmethod
    def from_env(cls, **overrides: Any) -> TogglesConfig:
        """Create configuration from ``TOGGLES_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "TOGGLES_FEATURE_NAME": "feature_name",
            "TOGGLES_STORE_PATH": "store_path",
            "TOGGLES_BUILD_FLAVOR": "build_flavor",
            "TOGGLES_VARIANT_KEY": "variant_key",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # numeric values, handle separately
        version_env = env.get("TOGGLES_APP_VERSION")
        if version_env is not None and "app_version" not in overrides:
            config_kwargs["app_version"] = int(version_env)

        seed_env = env.get("TOGGLES_ROLLOUT_SEED")
        if seed_env is not None and "rollout_seed" not in overrides:
            config_kwargs["rollout_seed"] = int(seed_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
