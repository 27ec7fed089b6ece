"""Internal constants shared across the library."""

ROLLOUT_MIN = 0.0
ROLLOUT_MAX = 100.0

SELF_TOGGLE_NAME = "self"
KEY_SEPARATOR = "_"

# Mirrors an unbounded version when the host does not provide one.
UNBOUNDED_APP_VERSION = 2**31 - 1


def toggle_key(feature_name: str, toggle_name: str) -> str:
    """Return the store key for *toggle_name* within *feature_name*.

    The top-level ``self`` toggle is keyed by the feature name alone, every
    other toggle by ``<feature>_<toggle>``.
    """
    if toggle_name == SELF_TOGGLE_NAME:
        return feature_name
    return f"{feature_name}{KEY_SEPARATOR}{toggle_name}"
