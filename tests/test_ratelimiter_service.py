import threading

import pytest

from linkbio.ratelimiter.contracts import Policy
from linkbio.ratelimiter.service import RateLimiterService
from linkbio.ratelimiter.store import InMemoryStore


def make_clock(start=0.0):
    t = {"now": start}
    def now():
        return t["now"]
    def advance(dt):
        t["now"] += dt
    return now, advance


def test_fixed_window_allows_limit_then_denies():
    now, advance = make_clock()
    svc = RateLimiterService(store=InMemoryStore(), now=now)
    policy = Policy(name="per_ip", limit=3, window_seconds=900, scope="ip")

    results = [svc.consume("ip:1.2.3.4", policy) for _ in range(4)]
    assert [r.allowed for r in results] == [True, True, True, False]
    assert [r.remaining for r in results] == [2, 1, 0, 0]
    assert results[0].reset_after == 900

    advance(100)
    denied = svc.consume("ip:1.2.3.4", policy)
    assert not denied.allowed
    assert denied.reset_after == 800


def test_window_resets_after_period():
    now, advance = make_clock()
    svc = RateLimiterService(now=now)
    policy = Policy(name="p", limit=1, window_seconds=60)

    assert svc.consume("k", policy).allowed
    assert not svc.consume("k", policy).allowed
    advance(59)
    assert not svc.consume("k", policy).allowed
    advance(1)
    fresh = svc.consume("k", policy)
    assert fresh.allowed
    assert fresh.remaining == 0
    assert fresh.reset_after == 60


def test_keys_are_counted_independently():
    now, _ = make_clock()
    svc = RateLimiterService(now=now)
    policy = Policy(name="p", limit=1, window_seconds=60)
    assert svc.consume("ip:a", policy).allowed
    assert svc.consume("ip:b", policy).allowed
    assert not svc.consume("ip:a", policy).allowed


def test_concurrent_consumers_never_exceed_limit():
    now, _ = make_clock()
    svc = RateLimiterService(now=now)
    policy = Policy(name="p", limit=10, window_seconds=60)
    allowed = []
    lock = threading.Lock()

    def worker():
        for _ in range(10):
            res = svc.consume("ip:x", policy)
            with lock:
                allowed.append(res.allowed)

    threads = [threading.Thread(target=worker) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert allowed.count(True) == 10
    assert len(allowed) == 50


def test_policy_matching():
    p = Policy(name="auth", limit=5, window_seconds=60, path_pattern=r"^/api/auth/", methods=["post"])
    assert p.methods == ["POST"]
    assert p.matches("POST", "/api/auth/login")
    assert not p.matches("GET", "/api/auth/login")
    assert not p.matches("POST", "/api/links")


def test_policy_rejects_non_positive_limits():
    with pytest.raises(ValueError):
        Policy(name="bad", limit=0, window_seconds=60)


def test_store_sweeps_ended_windows_when_full():
    store = InMemoryStore(sweep_after=2)
    store.hit("a", now=0, window_seconds=10)
    store.hit("b", now=5, window_seconds=10)
    # "a" has ended, "b" has not
    c = store.hit("c", now=12, window_seconds=10)
    assert c.hits == 1
    assert set(store._windows) == {"b", "c"}
    assert store.hit("b", now=13, window_seconds=10).hits == 2
