"""
Tests for SeededDigest and the process-wide digest.

Tests cover:
- Truncation and base64 encoding
- Stability within one digest, independence across seeds
- Seeded state is not consumed by hashing
- Thread-safe one-time initialisation of the default digest
"""

import base64
import hashlib
import threading

import pytest

import logmessage.digest as digest_module
from logmessage import SeededDigest, get_default_digest


class TestSeededDigest:
    """Test suite for SeededDigest."""

    def test_digest_is_first_half_of_seeded_sha256(self):
        """Should keep the first 16 bytes of sha256(seed + value)."""
        digest = SeededDigest(seed=b"seed")
        expected = hashlib.sha256(b"seed" + "world".encode("utf-8")).digest()[:16]

        assert digest.digest("world") == expected

    def test_encode_is_padded_base64(self):
        """Should encode 16 bytes as 24 characters of standard base64."""
        encoded = SeededDigest(seed=b"seed").encode("world")

        assert len(encoded) == 24
        assert encoded.endswith("==")
        assert len(base64.b64decode(encoded, validate=True)) == 16

    def test_mask_format(self):
        """Should wrap the encoding in the mask marker."""
        digest = SeededDigest(seed=b"seed")
        assert digest.mask("world") == f"<mask.hash: '{digest.encode('world')}'>"

    def test_stable_across_calls(self):
        """Should not consume the seeded state between calls."""
        digest = SeededDigest()
        first = digest.digest("world")

        digest.digest("something else")
        assert digest.digest("world") == first

    def test_random_seeds_differ(self):
        """Should seed each instance with a fresh random value."""
        assert SeededDigest().digest("world") != SeededDigest().digest("world")

    def test_empty_and_unicode_values(self):
        """Should hash empty and non-ASCII strings."""
        digest = SeededDigest(seed=b"seed")

        assert len(digest.digest("")) == 16
        assert digest.digest("café") == hashlib.sha256(b"seed" + "café".encode("utf-8")).digest()[:16]


class TestDefaultDigest:
    """Test suite for the process-wide digest."""

    @pytest.fixture(autouse=True)
    def reset_default_digest(self, monkeypatch):
        monkeypatch.setattr(digest_module, "_default_digest", None)

    def test_singleton(self):
        """Should return the same digest on every call."""
        assert get_default_digest() is get_default_digest()

    def test_one_seed_across_threads(self):
        """Should create exactly one digest when first used from many threads."""
        barrier = threading.Barrier(8)
        results = []
        results_lock = threading.Lock()

        def worker():
            barrier.wait()
            digest = get_default_digest()
            with results_lock:
                results.append((digest, digest.encode("world")))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert len({id(d) for d, _ in results}) == 1
        assert len({encoded for _, encoded in results}) == 1

    def test_concurrent_hashing_is_consistent(self):
        """Should give every thread the same digest for the same value."""
        digest = get_default_digest()
        expected = {f"user-{i}": digest.encode(f"user-{i}") for i in range(20)}
        mismatches = []

        def worker():
            for _ in range(50):
                for text, encoded in expected.items():
                    if digest.encode(text) != encoded:
                        mismatches.append(text)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert mismatches == []
