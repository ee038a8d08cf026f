import pytest

from snake.cache import driver
from snake.cache.driver import CacheError, Driver, PlaceholderError
from snake.cache.encoding import JSONEncoding
from snake.cache.memory import MemoryCache


@pytest.fixture
def client():
    cache = MemoryCache("", JSONEncoding())
    driver.configure(cache)
    yield cache
    driver.configure(None)


def test_driver_is_abstract():
    with pytest.raises(TypeError):
        Driver()


def test_unconfigured_client_raises():
    driver.configure(None)
    with pytest.raises(CacheError):
        driver.get_value("key")


def test_set_and_get_round_trip(client):
    driver.set_value("name", {"a": [1, 2]}, 60)
    assert driver.get_value("name") == {"a": [1, 2]}
    assert client.get("name") == {"a": [1, 2]}


def test_missing_value_is_none(client):
    assert driver.get_value("absent") is None


def test_multi_set_and_get(client):
    driver.multi_set({"a": 1, "b": "two"}, 60)
    assert driver.multi_get(["a", "b", "c"]) == {"a": 1, "b": "two"}


def test_delete(client):
    driver.set_value("a", 1)
    driver.set_value("b", 2)
    driver.delete("a", "b")
    assert driver.multi_get(["a", "b"]) == {}


def test_incr_and_decr(client):
    assert driver.incr("counter", 5) == 5
    assert driver.decr("counter", 2) == 3
    assert driver.get_value("counter") == 3


def test_not_found_placeholder(client):
    driver.set_cache_with_not_found("ghost")
    with pytest.raises(PlaceholderError, match="cache: placeholder"):
        driver.get_value("ghost")


def test_placeholder_error_caught_as_cache_error(client):
    driver.set_cache_with_not_found("phantom")
    with pytest.raises(CacheError, match="cache: placeholder"):
        driver.get_value("phantom")