from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from pytoggles.exceptions import ToggleStoreError
from pytoggles.models import ToggleRecord
from pytoggles.state.store import InMemoryToggleStore, JsonFileToggleStore, ToggleStore


def _record() -> ToggleRecord:
    return ToggleRecord(
        enabled=True,
        remote_enable_state=True,
        rollout=[1.0, 10.0],
        rollout_threshold=4.25,
        min_supported_version=52000,
        targets=["ma", "mb"],
    )


def test_bundled_stores_satisfy_protocol(tmp_path: Path) -> None:
    assert isinstance(InMemoryToggleStore(), ToggleStore)
    assert isinstance(JsonFileToggleStore(tmp_path / "toggles.json"), ToggleStore)


def test_in_memory_read_after_write() -> None:
    store = InMemoryToggleStore()
    assert store.get("feature") is None

    store.set("feature", _record())
    assert store.get("feature") == _record()
    assert store.keys() == ["feature"]


def test_in_memory_concurrent_writes_keep_every_key() -> None:
    store = InMemoryToggleStore()

    def _write(index: int) -> None:
        store.set(f"feature_{index}", ToggleRecord(enabled=index % 2 == 0))

    threads = [threading.Thread(target=_write, args=(i,)) for i in range(32)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(store.keys()) == 32
    assert store.get("feature_4") == ToggleRecord(enabled=True)


def test_json_store_round_trips_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "toggles.json"
    JsonFileToggleStore(path).set("feature_sub", _record())

    reopened = JsonFileToggleStore(path)
    assert reopened.get("feature_sub") == _record()
    assert reopened.keys() == ["feature_sub"]


def test_json_store_uses_camel_case_keys(tmp_path: Path) -> None:
    path = tmp_path / "toggles.json"
    JsonFileToggleStore(path).set("feature", _record())

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["feature"]["remoteEnableState"] is True
    assert raw["feature"]["rolloutThreshold"] == 4.25
    assert raw["feature"]["minSupportedVersion"] == 52000
    assert raw["feature"]["targets"] == ["ma", "mb"]


def test_json_store_leaves_no_temp_files(tmp_path: Path) -> None:
    store = JsonFileToggleStore(tmp_path / "toggles.json")
    store.set("a", ToggleRecord(enabled=True))
    store.set("b", ToggleRecord(enabled=False))

    assert sorted(p.name for p in tmp_path.iterdir()) == ["toggles.json"]


def test_json_store_missing_file_is_empty(tmp_path: Path) -> None:
    store = JsonFileToggleStore(tmp_path / "nested" / "toggles.json")
    assert store.get("anything") is None
    store.set("anything", ToggleRecord())
    assert (tmp_path / "nested" / "toggles.json").exists()


def test_json_store_corrupt_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "toggles.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ToggleStoreError) as exc_info:
        JsonFileToggleStore(path).get("feature")
    assert exc_info.value.path == str(path)


def test_json_store_non_object_raises(tmp_path: Path) -> None:
    path = tmp_path / "toggles.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(ToggleStoreError):
        JsonFileToggleStore(path).keys()


def test_json_store_corrupt_record_raises(tmp_path: Path) -> None:
    path = tmp_path / "toggles.json"
    path.write_text(json.dumps({"feature": {"enabled": "maybe"}}), encoding="utf-8")

    with pytest.raises(ToggleStoreError, match="feature"):
        JsonFileToggleStore(path).get("feature")


def test_json_store_non_utf8_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "toggles.json"
    path.write_bytes(b'{"a": "\xff\xfe"}')

    with pytest.raises(ToggleStoreError) as exc_info:
        JsonFileToggleStore(path).get("a")
    assert exc_info.value.path == str(path)


@pytest.mark.parametrize("store_factory", ["memory", "json"])
def test_returned_record_cannot_change_stored_state(store_factory: str, tmp_path: Path) -> None:
    store: ToggleStore
    if store_factory == "memory":
        store = InMemoryToggleStore()
    else:
        store = JsonFileToggleStore(tmp_path / "toggles.json")
    store.set("feature", _record())

    leaked = store.get("feature")
    leaked.targets.append("zz")
    leaked.rollout.insert(0, 99.0)

    assert store.get("feature") == _record()


def test_written_record_is_detached_from_caller() -> None:
    store = InMemoryToggleStore()
    record = _record()
    store.set("feature", record)
    record.targets.clear()

    assert store.get("feature").targets == ["ma", "mb"]
