import pytest

from snake.cache.lru import LRU


def test_lru_sequence(capsys):
    lru = LRU(3)
    lru.set(1, 1)
    lru.set(2, 2)
    lru.set(3, 3)

    lru.show_queue()
    assert capsys.readouterr().out == "Least 1 -> 2 -> 3 Most\n"

    assert lru.get(2) == 2
    assert lru.show_queue() == "Least 1 -> 3 -> 2 Most"

    lru.set(1, 100)
    assert lru.queue() == [3, 2, 1]
    assert lru.get(1) == 100

    lru.set(4, 4)
    assert lru.queue() == [2, 1, 4]
    assert len(lru) == 3


def test_missing_key_returns_minus_one():
    lru = LRU(2)
    assert lru.get("nope") == -1


def test_eviction_drops_least_recent():
    lru = LRU(2)
    lru.set("a", 1)
    lru.set("b", 2)
    lru.get("a")
    lru.set("c", 3)
    assert lru.get("b") == -1
    assert lru.queue() == ["a", "c"]


def test_overwrite_does_not_evict():
    lru = LRU(2)
    lru.set("a", 1)
    lru.set("b", 2)
    lru.set("a", 3)
    assert len(lru) == 2
    assert lru.get("b") == 2


def test_size_never_exceeds_capacity():
    lru = LRU(5)
    for i in range(50):
        lru.set(i, i)
        assert len(lru) <= 5
    assert lru.queue() == [45, 46, 47, 48, 49]


def test_invalid_capacity():
    with pytest.raises(ValueError):
        LRU(0)