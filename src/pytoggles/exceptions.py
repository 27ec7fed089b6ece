"""Custom exception hierarchy for pytoggles."""

from __future__ import annotations


class ToggleError(Exception):
    """Base exception for all pytoggles errors."""


class ToggleDefinitionError(ToggleError):
    """A toggle declaration is missing or malformed.

    Raised when a declared toggle has no default value, when a generated
    registry mapping has the wrong shape, or when an undeclared toggle
    name is requested.  These are programmer errors and are never
    recovered.
    """

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class ToggleBuilderError(ToggleError):
    """Required collaborators (store, feature name) are missing."""


class ToggleStoreError(ToggleError):
    """Persisted toggle data could not be read or written."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)


class RemoteConfigError(ToggleError):
    """A remote feature payload could not be parsed."""

    def __init__(self, message: str, *, feature_name: str = "") -> None:
        self.feature_name = feature_name
        super().__init__(message)
