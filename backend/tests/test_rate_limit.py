"""
Unit tests for liftlog.rate_limit (fixed-window auth limiter).
Run: cd backend && python -m pytest tests/test_rate_limit.py -v
"""
import threading
import unittest

from liftlog.rate_limit import (
    UNKNOWN_CLIENT,
    InMemoryRateLimitStore,
    RateLimitEntry,
    RateLimitExceeded,
    RateLimiter,
    is_exempt,
    resolve_client_ip,
)

IP = "203.0.113.7"


class FakeClock:
    def __init__(self, now=1_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_limiter(max_attempts=5, window_seconds=900, **kw):
    clock = FakeClock()
    store = InMemoryRateLimitStore()
    limiter = RateLimiter(store, max_attempts=max_attempts, window_seconds=window_seconds, clock=clock, **kw)
    return limiter, store, clock


# --- client address resolution ---
class TestResolveClientIp(unittest.TestCase):
    def test_first_forwarded_entry(self):
        self.assertEqual(resolve_client_ip({"x-forwarded-for": " 198.51.100.4 , 10.0.0.1"}), "198.51.100.4")

    def test_real_ip_fallback(self):
        self.assertEqual(resolve_client_ip({"x-real-ip": "198.51.100.5"}), "198.51.100.5")

    def test_cloudflare_fallback(self):
        self.assertEqual(resolve_client_ip({"cf-connecting-ip": "198.51.100.6"}), "198.51.100.6")

    def test_forwarded_beats_real_ip(self):
        headers = {"x-forwarded-for": "198.51.100.4", "x-real-ip": "198.51.100.5"}
        self.assertEqual(resolve_client_ip(headers), "198.51.100.4")

    def test_empty_forwarded_falls_through(self):
        self.assertEqual(resolve_client_ip({"x-forwarded-for": " , 10.0.0.1", "x-real-ip": "198.51.100.5"}), "198.51.100.5")

    def test_no_headers(self):
        self.assertEqual(resolve_client_ip({}), UNKNOWN_CLIENT)


class TestIsExempt(unittest.TestCase):
    def test_local_and_unknown(self):
        for ip in ("unknown", "localhost", "127.0.0.1", "127.8.9.10", "::1"):
            self.assertTrue(is_exempt(ip), ip)

    def test_public_and_garbage(self):
        for ip in (IP, "10.0.0.1", "not-an-ip", ""):
            self.assertFalse(is_exempt(ip), ip)


# --- limiter ---
class TestRateLimiter(unittest.TestCase):
    def test_allows_exactly_max_attempts(self):
        limiter, store, _ = make_limiter(max_attempts=5)
        for _ in range(5):
            limiter.check(IP)
        with self.assertRaises(RateLimitExceeded):
            limiter.check(IP)
        self.assertEqual(store.get("auth:" + IP).count, 5)

    def test_rejected_attempts_do_not_extend_window(self):
        limiter, store, clock = make_limiter(max_attempts=1, window_seconds=60)
        limiter.check(IP)
        reset_at = store.get("auth:" + IP).reset_at
        for _ in range(3):
            clock.advance(10)
            with self.assertRaises(RateLimitExceeded):
                limiter.check(IP)
        self.assertEqual(store.get("auth:" + IP).reset_at, reset_at)

    def test_retry_after(self):
        limiter, _, clock = make_limiter(max_attempts=1, window_seconds=60)
        limiter.check(IP)
        clock.advance(45.5)
        with self.assertRaises(RateLimitExceeded) as ctx:
            limiter.check(IP)
        self.assertAlmostEqual(ctx.exception.retry_after, 14.5)
        self.assertEqual(ctx.exception.retry_after_seconds, 15)
        self.assertEqual(str(ctx.exception), "Too many requests. Try again later.")

    def test_window_resets_after_expiry(self):
        limiter, store, clock = make_limiter(max_attempts=2, window_seconds=60)
        limiter.check(IP)
        limiter.check(IP)
        # still inside the window at exactly reset_at
        clock.advance(60)
        with self.assertRaises(RateLimitExceeded):
            limiter.check(IP)
        clock.advance(0.001)
        limiter.check(IP)
        entry = store.get("auth:" + IP)
        self.assertEqual(entry.count, 1)
        self.assertAlmostEqual(entry.reset_at, clock.now + 60)

    def test_keys_are_independent(self):
        limiter, _, _ = make_limiter(max_attempts=1)
        limiter.check(IP)
        limiter.check("198.51.100.9")
        with self.assertRaises(RateLimitExceeded):
            limiter.check(IP)

    def test_exempt_clients_never_counted(self):
        limiter, store, _ = make_limiter(max_attempts=1)
        for _ in range(10):
            limiter.check("127.0.0.1")
            limiter.check(UNKNOWN_CLIENT)
        self.assertEqual(len(store), 0)

    def test_per_call_overrides(self):
        limiter, store, clock = make_limiter(max_attempts=5, window_seconds=900)
        limiter.check(IP, max_attempts=2, window_seconds=10)
        limiter.check(IP, max_attempts=2, window_seconds=10)
        with self.assertRaises(RateLimitExceeded):
            limiter.check(IP, max_attempts=2, window_seconds=10)
        self.assertAlmostEqual(store.get("auth:" + IP).reset_at, clock.now + 10)

    def test_isolated_stores(self):
        a, _, _ = make_limiter(max_attempts=1)
        b, _, _ = make_limiter(max_attempts=1)
        a.check(IP)
        b.check(IP)
        with self.assertRaises(RateLimitExceeded):
            a.check(IP)

    def test_sweep_prunes_expired_only(self):
        limiter, store, clock = make_limiter(window_seconds=60)
        limiter.check(IP)
        clock.advance(30)
        limiter.check("198.51.100.9")
        clock.advance(31)
        self.assertEqual(limiter.sweep(), 1)
        self.assertIsNone(store.get("auth:" + IP))
        self.assertIsNotNone(store.get("auth:198.51.100.9"))

    def test_sweep_on_check(self):
        limiter, store, clock = make_limiter(window_seconds=60, sweep_on_check=True)
        limiter.check(IP)
        clock.advance(61)
        with self.assertLogs("liftlog.rate_limit", level="INFO") as logs:
            limiter.check("198.51.100.9")
        self.assertEqual(len(store), 1)
        self.assertIn("pruned 1 expired", logs.output[0])

    def test_concurrent_first_attempts_are_all_counted(self):
        limiter, store, _ = make_limiter(max_attempts=100)
        barrier = threading.Barrier(16)

        def attempt():
            barrier.wait()
            limiter.check(IP)

        threads = [threading.Thread(target=attempt) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(store.get("auth:" + IP).count, 16)

    def test_concurrent_attempts_never_exceed_limit(self):
        limiter, store, _ = make_limiter(max_attempts=5)
        barrier = threading.Barrier(16)
        rejected = []

        def attempt():
            barrier.wait()
            try:
                limiter.check(IP)
            except RateLimitExceeded:
                rejected.append(1)

        threads = [threading.Thread(target=attempt) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(len(rejected), 11)
        self.assertEqual(store.get("auth:" + IP).count, 5)

    def test_default_store(self):
        limiter = RateLimiter(max_attempts=1)
        limiter.check(IP)
        self.assertIsInstance(limiter.store, InMemoryRateLimitStore)


class TestInMemoryStore(unittest.TestCase):
    def test_get_returns_copy(self):
        store = InMemoryRateLimitStore()
        store.set("k", RateLimitEntry(count=1, reset_at=10))
        store.get("k").count = 99
        self.assertEqual(store.get("k").count, 1)

    def test_increment(self):
        store = InMemoryRateLimitStore()
        self.assertEqual(store.increment("missing"), 0)
        store.set("k", RateLimitEntry(count=1, reset_at=10))
        self.assertEqual(store.increment("k"), 2)

    def test_hit_opens_counts_and_refuses(self):
        store = InMemoryRateLimitStore()
        self.assertEqual(store.hit("k", 0, 60, 2), (True, RateLimitEntry(count=1, reset_at=60)))
        self.assertEqual(store.hit("k", 10, 60, 2), (True, RateLimitEntry(count=2, reset_at=60)))
        self.assertEqual(store.hit("k", 20, 60, 2), (False, RateLimitEntry(count=2, reset_at=60)))
        # expired window starts over
        self.assertEqual(store.hit("k", 61, 60, 2), (True, RateLimitEntry(count=1, reset_at=121)))

    def test_delete(self):
        store = InMemoryRateLimitStore()
        store.set("k", RateLimitEntry(count=1, reset_at=10))
        store.delete("k")
        store.delete("k")
        self.assertIsNone(store.get("k"))


if __name__ == "__main__":
    unittest.main()
