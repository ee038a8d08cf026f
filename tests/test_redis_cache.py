import pytest

from snake.cache.driver import CacheError, PlaceholderError
from snake.cache.encoding import JSONEncoding
from snake.cache.redis_cache import RedisCache


class FakeRedis:
    def __init__(self):
        self.data = {}
        self.ttl = {}

    def set(self, name, value, ex=None, px=None):
        self.data[name] = value if isinstance(value, bytes) else str(value).encode()
        self.ttl[name] = px
        return True

    def get(self, name):
        return self.data.get(name)

    def mset(self, mapping):
        self.data.update(mapping)
        return True

    def pexpire(self, name, time):
        self.ttl[name] = time
        return True

    def mget(self, keys, *args):
        return [self.data.get(k) for k in list(keys) + list(args)]

    def delete(self, *names):
        return sum(1 for n in names if self.data.pop(n, None) is not None)

    def incrby(self, name, amount=1):
        value = int(self.data.get(name, b"0")) + amount
        self.data[name] = str(value).encode()
        return value

    def decrby(self, name, amount=1):
        return self.incrby(name, -amount)


class BrokenRedis(FakeRedis):
    def get(self, name):
        raise ConnectionError("down")


@pytest.fixture
def fake():
    return FakeRedis()


@pytest.fixture
def cache(fake):
    return RedisCache(fake, "unit-test", JSONEncoding(), int)


def test_set_get(fake):
    cache = RedisCache(fake, "unit-test", JSONEncoding())
    cache.set("key-001", "val-001", 60)
    assert cache.get("key-001") == "val-001"
    assert fake.data["unit-test:key-001"] == b'"val-001"'
    assert fake.ttl["unit-test:key-001"] == 60000


def test_default_expiration(fake):
    cache = RedisCache(fake, "", JSONEncoding())
    cache.set("k", 1)
    assert fake.ttl["k"] == 24 * 60 * 60 * 1000


def test_get_missing_is_none(cache):
    assert cache.get("absent") is None


def test_get_applies_new_object(cache):
    cache.set("n", 7)
    assert cache.get("n") == 7


def test_placeholder(cache, fake):
    cache.set_cache_with_not_found("ghost")
    assert fake.ttl["unit-test:ghost"] == 60000
    with pytest.raises(PlaceholderError):
        cache.get("ghost")


def test_multi_set_and_get(cache, fake):
    cache.multi_set({"a": 1, "b": 2}, 30)
    assert fake.ttl["unit-test:a"] == 30000
    assert cache.multi_get(["a", "b", "c"]) == {"unit-test:a": 1, "unit-test:b": 2}


def test_multi_get_skips_broken_and_placeholder(cache, fake):
    fake.data["unit-test:bad"] = b"{not json"
    cache.set_cache_with_not_found("ghost")
    cache.set("ok", 3)
    assert cache.multi_get(["bad", "ghost", "ok"]) == {"unit-test:ok": 3}


def test_multi_get_empty(cache):
    assert cache.multi_get([]) == {}


def test_delete(cache, fake):
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.get("a") == 1
    cache.delete("a", "b", "")
    assert cache.get("a") is None
    assert cache.get("b") is None
    assert cache.multi_get(["a", "b"]) == {}
    assert fake.data == {}


def test_incr_decr(cache):
    assert cache.incr("count", 3) == 3
    assert cache.decr("count", 1) == 2


def test_empty_key_raises(cache):
    with pytest.raises(CacheError):
        cache.set("", 1)


def test_client_error_is_wrapped():
    cache = RedisCache(BrokenRedis(), "", JSONEncoding())
    with pytest.raises(CacheError):
        cache.get("k")


def test_unmarshal_error_raises(cache, fake):
    fake.data["unit-test:bad"] = b"{not json"
    with pytest.raises(CacheError):
        cache.get("bad")