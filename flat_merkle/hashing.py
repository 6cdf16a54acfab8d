"""Domain-separated hashing for the flat Merkle tree.

Specification (for third-party verifiers)
==========================================

**Hash algorithm:** supplied by the caller. Any deterministic function from
bytes to a fixed-size digest works; ``HashEngine.from_name`` wraps the
``hashlib`` algorithms. The output may be truncated to a narrower digest
size. Producer and verifier of a proof must agree on both.

**Domain-separated hashing** (prevents second-preimage attacks where
an internal node could be reinterpreted as a leaf):

- Leaf nodes:     H(0x00 || data)
- Internal nodes: H(0x01 || left || right)

Both children of an internal node are exactly ``digest_size`` bytes, so the
input of an internal node hash always has length ``1 + 2 * digest_size``.
"""

from __future__ import annotations

import hashlib
from typing import Callable

from flat_merkle.config import settings
from flat_merkle.errors import DigestSizeError, HashAlgorithmError

Digest = bytes
HashFunction = Callable[[bytes], bytes]

LEAF_PREFIX = b"\x00"
NODE_PREFIX = b"\x01"

_BYTES_LIKE = (bytes, bytearray, memoryview)


class HashEngine:
    """Wraps a hash function with the leaf and internal-node combinators.

    Holds no mutable state; one engine can be shared by any number of
    trees and threads.
    """

    __slots__ = ("_hash_function", "_digest_size", "_name")

    def __init__(
        self,
        hash_function: HashFunction,
        digest_size: int | None = None,
        name: str | None = None,
    ) -> None:
        output_size = len(hash_function(b""))
        if digest_size is None:
            digest_size = output_size
        if isinstance(digest_size, bool) or not isinstance(digest_size, int):
            raise DigestSizeError(f"digest size must be an int, got {digest_size!r}")
        if digest_size < 1 or digest_size > output_size:
            raise DigestSizeError(
                f"digest size {digest_size} outside [1, {output_size}] "
                f"for hash function {name or hash_function!r}"
            )

        self._hash_function = hash_function
        self._digest_size = digest_size
        self._name = name or getattr(hash_function, "__name__", "custom")

    @classmethod
    def from_name(cls, algorithm: str, digest_size: int | None = None) -> HashEngine:
        """Build an engine over a ``hashlib`` algorithm such as ``"sha256"``."""
        try:
            probe = hashlib.new(algorithm)
        except (ValueError, TypeError) as exc:
            raise HashAlgorithmError(f"unknown hash algorithm {algorithm!r}") from exc
        if probe.digest_size == 0:
            # shake_128 / shake_256 need an explicit output length
            raise HashAlgorithmError(f"hash algorithm {algorithm!r} has no fixed output size")

        def _hash(data: bytes) -> bytes:
            return hashlib.new(algorithm, data).digest()

        return cls(_hash, digest_size=digest_size, name=algorithm)

    @classmethod
    def default(cls) -> HashEngine:
        """Engine configured by ``MERKLE_HASH_ALGORITHM`` / ``MERKLE_DIGEST_SIZE``."""
        return cls.from_name(settings.hash_algorithm, settings.digest_size or None)

    @property
    def digest_size(self) -> int:
        return self._digest_size

    @property
    def name(self) -> str:
        return self._name

    def leaf_digest(self, data: bytes) -> Digest:
        """Return ``H(0x00 || data)``."""
        if not isinstance(data, _BYTES_LIKE):
            raise TypeError(f"leaf data must be bytes-like, got {type(data).__name__}")
        return self._digest(LEAF_PREFIX + bytes(data))

    def node_digest(self, left: Digest, right: Digest) -> Digest:
        """Return ``H(0x01 || left || right)``."""
        if len(left) != self._digest_size or len(right) != self._digest_size:
            raise DigestSizeError(
                f"node operands must be {self._digest_size} bytes, "
                f"got {len(left)} and {len(right)}"
            )
        return self._digest(NODE_PREFIX + bytes(left) + bytes(right))

    def _digest(self, data: bytes) -> Digest:
        out = self._hash_function(data)
        if len(out) < self._digest_size:
            raise DigestSizeError(
                f"hash function {self._name} returned {len(out)} bytes, "
                f"expected at least {self._digest_size}"
            )
        return bytes(out[: self._digest_size])

    def __repr__(self) -> str:
        return f"HashEngine(name={self._name!r}, digest_size={self._digest_size})"
