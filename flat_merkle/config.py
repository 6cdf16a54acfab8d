"""Configuration for the flat Merkle tree engine.

All settings are driven by environment variables with sensible defaults.
Values are read once at import time; construct trees and engines with
explicit arguments to override them per instance.
"""

from __future__ import annotations

import os


def _get_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    return int(val)


def _get_bool(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    return val.strip().lower() in {"1", "true", "yes", "y", "on"}


class MerkleSettings:
    # --- Hashing ---
    # Any hashlib algorithm with a fixed output size (sha256, sha512, blake2b, ...).
    hash_algorithm: str = os.getenv("MERKLE_HASH_ALGORITHM", "sha256")
    # Bytes per digest. 0 keeps the full output width of the hash function.
    digest_size: int = _get_int("MERKLE_DIGEST_SIZE", 0)

    # --- Tree sizing ---
    # Flat positions allocated when a tree is built without an explicit capacity.
    default_capacity: int = _get_int("MERKLE_DEFAULT_CAPACITY", 1024)
    # Hard upper bound on capacity; storage is allocated eagerly.
    max_capacity: int = _get_int("MERKLE_MAX_CAPACITY", 1 << 24)

    # --- Logging ---
    # If True, log every append and proof at DEBUG level.
    log_appends: bool = _get_bool("MERKLE_LOG_APPENDS", False)


settings = MerkleSettings()
