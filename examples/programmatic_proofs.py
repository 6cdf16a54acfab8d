"""Example: append records, publish the root, and verify an inclusion proof.

This example shows the producer side (a live tree) and the verifier side
(only data, proof and root) of the engine. Useful for checking a hash
configuration end to end before wiring the tree into a larger system.

Prerequisites (optional, defaults shown):
    export MERKLE_HASH_ALGORITHM=sha256
    export MERKLE_DIGEST_SIZE=0          # 0 = full hash width
    export MERKLE_LOG_APPENDS=true       # log every append at DEBUG

Usage:
    python examples/programmatic_proofs.py <record> [<record> ...]
"""

from __future__ import annotations

import logging
import sys

from flat_merkle import HashEngine, MerkleTree, verify_proof


def main() -> None:
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if len(sys.argv) < 2:
        print("Usage: python examples/programmatic_proofs.py <record> [<record> ...]")
        sys.exit(1)

    records = [arg.encode("utf-8") for arg in sys.argv[1:]]
    engine = HashEngine.default()

    # Step 1: Build the tree
    print("=" * 60)
    print(f"Appending {len(records)} record(s) with {engine.name} ({engine.digest_size} bytes)")
    print("=" * 60)
    tree = MerkleTree(capacity=2 * len(records), engine=engine)
    for record in records:
        idx, leaf_hash = tree.append(record)
        print(f"  [{idx}] {leaf_hash.hex()}  {record.decode()}")

    root = tree.root()
    print(f"\nRoot: {root.hex()}")

    # Step 2: Prove and verify every record (a verifier needs no tree)
    print()
    print("=" * 60)
    print("Inclusion proofs")
    print("=" * 60)
    ok = True
    for idx, record in enumerate(records):
        proof = tree.create_proof(idx)
        valid = verify_proof(record, proof, root, engine)
        ok = ok and valid
        path = " ".join(f"{d[0].upper()}:{s.hex()[:8]}" for s, d in zip(proof.siblings, proof.directions))
        print(f"  [{idx}] depth={proof.depth} valid={valid}  {path}")

    # Step 3: A tampered record must not verify
    tampered = records[0] + b"!"
    rejected = not verify_proof(tampered, tree.create_proof(0), root, engine)
    print(f"\nTampered record rejected: {rejected}")

    sys.exit(0 if ok and rejected else 1)


if __name__ == "__main__":
    main()
