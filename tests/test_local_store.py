"""Tests for the client-side key-value store."""

from qr_cafe.services.local_store import LocalStore


def test_in_memory():
    store = LocalStore()
    store.set("a", [1, 2])
    assert store.get("a") == [1, 2]
    assert "a" in store
    store.delete("a")
    assert store.get("a", "default") == "default"


def test_file_roundtrip(tmp_path):
    path = tmp_path / "nested" / "store.json"
    LocalStore(path).set("orders", ["o1"])
    assert LocalStore(path).get("orders") == ["o1"]


def test_delete_missing_key_is_noop(tmp_path):
    path = tmp_path / "store.json"
    LocalStore(path).delete("nothing")
    assert not path.exists()
