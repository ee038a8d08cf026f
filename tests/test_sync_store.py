from concurrent.futures import ThreadPoolExecutor

from snake.cache.sync_store import SyncStore


def get_remote_data():
    return {1: "test1", 2: "test2", 3: "test3", 4: "test4", 5: "test5"}


def test_sync_cache_concurrent_reads():
    store = SyncStore()
    store.sync(get_remote_data)
    with ThreadPoolExecutor(max_workers=5) as pool:
        results = list(pool.map(store.get, range(1, 6)))
    assert results == ["test1", "test2", "test3", "test4", "test5"]


def test_missing_is_none():
    store = SyncStore()
    assert store.get(1) is None


def test_resync_replaces_data():
    store = SyncStore()
    store.sync(get_remote_data)
    store.sync(lambda: {9: "nine"})
    assert store.get(1) is None
    assert store.get(9) == "nine"


def test_snapshot_is_independent_of_source():
    source = {1: "a"}
    store = SyncStore()
    store.sync(lambda: source)
    source[1] = "changed"
    assert store.get(1) == "a"