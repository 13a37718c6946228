"""
SeededDigest - Truncated, per-process salted SHA-256 for masked values.

The SHA-256 state is seeded once with a random 128-bit value when the digest
is created. Every value is hashed on a copy of that seeded state, so:
    - the same value hashes identically for the lifetime of the process
    - hashes from different runs cannot be correlated with each other

Only the first 16 bytes of the 32-byte digest are kept, then base64-encoded.

Thread-safe: the seeded state is never updated after construction.
"""

import base64
import hashlib
import logging
import threading
import uuid
from typing import Optional

logger = logging.getLogger(__name__)

DIGEST_SIZE = 16
MASK_FORMAT = "<mask.hash: '{}'>"


class SeededDigest:
    """
    SHA-256 keyed by a seed chosen at construction.

    Example:
        digest = SeededDigest()
        digest.mask("john@example.com")
        # "<mask.hash: 'q0pQ3n...=='>"
    """

    def __init__(self, seed: Optional[bytes] = None):
        """
        Initialize the digest.

        Args:
            seed: Bytes to seed the hash with. Defaults to a fresh random
                  UUID; pass a fixed value only in tests.
        """
        self._seeded = hashlib.sha256()
        self._seeded.update(seed if seed is not None else uuid.uuid4().bytes)

    def digest(self, text: str) -> bytes:
        """Return the first 16 bytes of the seeded SHA-256 of `text`."""
        sha256 = self._seeded.copy()
        sha256.update(text.encode("utf-8", errors="surrogatepass"))
        return sha256.digest()[:DIGEST_SIZE]

    def encode(self, text: str) -> str:
        """Return the standard, padded base64 encoding of digest(text)."""
        return base64.b64encode(self.digest(text)).decode("ascii")

    def mask(self, text: str) -> str:
        """Return the `<mask.hash: '...'>` replacement for `text`."""
        return MASK_FORMAT.format(self.encode(text))


# Process-wide instance, seeded on first use
_default_digest: Optional[SeededDigest] = None
_default_digest_lock = threading.Lock()


def get_default_digest() -> SeededDigest:
    """
    Get the process-wide SeededDigest.

    Created on first use; every thread sees the same seed afterwards.
    """
    global _default_digest
    if _default_digest is None:
        with _default_digest_lock:
            if _default_digest is None:
                _default_digest = SeededDigest()
                logger.debug("Seeded process-wide log digest")
    return _default_digest
