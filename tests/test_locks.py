"""
Tests for the per-entity lock registry.
"""
import threading
import time

from app.core.locks import EntityLockRegistry


def test_locks_are_dropped_after_release():
    registry = EntityLockRegistry()
    with registry.hold_many([("room", "b"), ("room", "a"), ("room", "a")]):
        assert registry.active_count() == 2
    assert registry.active_count() == 0


def test_released_on_error():
    registry = EntityLockRegistry()
    try:
        with registry.hold("bill", "1"):
            raise ValueError("boom")
    except ValueError:
        pass
    assert registry.active_count() == 0
    with registry.hold("bill", "1"):
        pass


def test_same_entity_is_serialised():
    registry = EntityLockRegistry()
    state = {"inside": 0, "peak": 0}
    guard = threading.Lock()

    def worker():
        with registry.hold("room", "r1"):
            with guard:
                state["inside"] += 1
                state["peak"] = max(state["peak"], state["inside"])
            time.sleep(0.01)
            with guard:
                state["inside"] -= 1

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert state["peak"] == 1
    assert registry.active_count() == 0


def test_overlapping_sets_do_not_deadlock():
    registry = EntityLockRegistry()
    done = []

    def worker(keys):
        for _ in range(50):
            with registry.hold_many(keys):
                pass
        done.append(True)

    a = threading.Thread(target=worker, args=([("room", "1"), ("room", "2")],))
    b = threading.Thread(target=worker, args=([("room", "2"), ("room", "1")],))
    a.start()
    b.start()
    a.join(timeout=5)
    b.join(timeout=5)

    assert len(done) == 2
