"""Toggle record persistence.

The engine only consumes the :class:`ToggleStore` protocol.  Two
implementations are bundled: an in-memory store and a JSON file store.
Both guard their state with a lock so each key has read-after-write
consistency across threads.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from pytoggles.exceptions import ToggleStoreError
from pytoggles.models.record import ToggleRecord

_logger = logging.getLogger(__name__)


def _detached(record: ToggleRecord | None) -> ToggleRecord | None:
    # Records are frozen but their lists are not; never share them with callers.
    return record.model_copy(deep=True) if record is not None else None


@runtime_checkable
class ToggleStore(Protocol):
    """Key-value persistence of :class:`ToggleRecord`."""

    def get(self, key: str) -> ToggleRecord | None: ...

    def set(self, key: str, record: ToggleRecord) -> None: ...


class InMemoryToggleStore:
    """Process-local store.

    Records are copied on the way in and out, so a caller holding a record
    can never change what is stored.
    """

    def __init__(self, records: dict[str, ToggleRecord] | None = None) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, ToggleRecord] = {
            key: record.model_copy(deep=True) for key, record in (records or {}).items()
        }

    def get(self, key: str) -> ToggleRecord | None:
        with self._lock:
            return _detached(self._records.get(key))

    def set(self, key: str, record: ToggleRecord) -> None:
        with self._lock:
            self._records[key] = record.model_copy(deep=True)

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._records)


class JsonFileToggleStore:
    """Store records in a single JSON object keyed by toggle key.

    The file is loaded lazily on first access and rewritten atomically on
    every :meth:`set`, so a crash mid-write leaves the previous contents
    intact.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        self._records: dict[str, ToggleRecord] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, ToggleRecord]:
        if self._records is not None:
            return self._records
        if not self._path.exists():
            self._records = {}
            return self._records
        try:
            raw: Any = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ToggleStoreError(f"Cannot read toggle store: {exc}", path=str(self._path)) from exc
        if not isinstance(raw, dict):
            raise ToggleStoreError("Toggle store must contain a JSON object", path=str(self._path))
        records: dict[str, ToggleRecord] = {}
        for key, value in raw.items():
            try:
                records[key] = ToggleRecord.model_validate(value)
            except ValidationError as exc:
                raise ToggleStoreError(f"Corrupt record for {key!r}: {exc}", path=str(self._path)) from exc
        _logger.debug("Loaded %d toggle records from %s", len(records), self._path)
        self._records = records
        return records

    def _flush(self, records: dict[str, ToggleRecord]) -> None:
        payload = {key: record.to_json_dict() for key, record in sorted(records.items())}
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise ToggleStoreError(f"Cannot write toggle store: {exc}", path=str(self._path)) from exc

    def get(self, key: str) -> ToggleRecord | None:
        with self._lock:
            return _detached(self._load().get(key))

    def set(self, key: str, record: ToggleRecord) -> None:
        with self._lock:
            records = dict(self._load())
            records[key] = record.model_copy(deep=True)
            self._flush(records)
            self._records = records

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._load())

