import time

import pytest

from snake.cache.driver import CacheError, PlaceholderError
from snake.cache.encoding import JSONEncoding, MsgPackEncoding
from snake.cache.memory import MemoryCache


@pytest.fixture
def store():
    return MemoryCache("memory-unit-test", JSONEncoding())


def test_new_memory_cache_keeps_settings(store):
    assert store.key_prefix == "memory-unit-test"
    assert isinstance(store.encoding, JSONEncoding)


def test_set_with_negative_expiration_stores_nothing(store):
    store.set("test-key", "test-val", -1)
    assert store.get("test-key") is None


def test_set_and_get(store):
    set_val = "test-val"
    store.set("test-get-key", set_val, 3600)
    assert store.get("test-get-key") == set_val


def test_zero_expiration_keeps_entry(store):
    store.set("forever", [1, 2], 0)
    assert store.get("forever") == [1, 2]


def test_entry_expires(store):
    store.set("short", "v", 0.05)
    time.sleep(0.1)
    assert store.get("short") is None


def test_missing_is_none(store):
    assert store.get("absent") is None


def test_placeholder(store):
    store.set_cache_with_not_found("ghost")
    with pytest.raises(PlaceholderError):
        store.get("ghost")


def test_delete_all_given_keys(store):
    store.set("a", 1)
    store.set("b", 2)
    store.delete("a", "b")
    assert store.get("a") is None
    assert store.get("b") is None


def test_multi_set_and_get_use_cache_keys(store):
    store.multi_set({"a": 1, "b": {"x": 2}}, 60)
    assert store.multi_get(["a", "b", "c"]) == {
        "memory-unit-test:a": 1,
        "memory-unit-test:b": {"x": 2},
    }


def test_multi_set_skips_unencodable(store):
    store.multi_set({"good": 1, "bad": object()})
    assert store.get("good") == 1
    assert store.get("bad") is None


def test_incr_and_decr(store):
    assert store.incr("counter") == 1
    assert store.incr("counter", 4) == 5
    assert store.decr("counter", 2) == 3


def test_incr_non_integer_raises(store):
    store.set("text", "abc")
    with pytest.raises(CacheError):
        store.incr("text")


def test_empty_key_raises(store):
    with pytest.raises(CacheError):
        store.set("", 1)
    with pytest.raises(CacheError):
        store.get("")


def test_unencodable_value_raises(store):
    with pytest.raises(CacheError):
        store.set("k", object())


def test_msgpack_encoding():
    cache = MemoryCache("", MsgPackEncoding())
    cache.set("k", {"a": [1, 2, 3]})
    assert cache.get("k") == {"a": [1, 2, 3]}