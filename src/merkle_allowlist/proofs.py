"""
Proof generation

Builds the Merkle tree for one environment and writes the root together
with an inclusion proof per entry:

    {
      "root": "0x...",
      "proofs": [
        {"proof": ["0x...", ...], "gravatarHash": "...", "address": "0x..."}
      ]
    }
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Sequence, Union

from .allowlist import AllowlistEntry, load_allowlist, read_json
from .config import Settings
from .exceptions import AllowlistError, AllowlistFileError
from .hashing import generate_hash, keccak256
from .tree import MerkleTree, verify_proof

logger = logging.getLogger(__name__)


@dataclass
class ProofRun:
    """Result of one generator pass"""
    environment: str
    output_path: Path
    root: str
    entry_count: int


def build_tree(entries: Sequence[AllowlistEntry]) -> MerkleTree:
    leaves = [entry.leaf for entry in entries]
    return MerkleTree(leaves, keccak256, sort_pairs=True)


def build_proof_document(entries: Sequence[AllowlistEntry]) -> Dict:
    """Assemble the tree and a proof record for every entry, in input order."""
    tree = build_tree(entries)

    proofs = []
    for index, entry in enumerate(entries):
        leaf = tree.leaves[index]
        proofs.append({
            "proof": tree.get_hex_proof(leaf),
            "gravatarHash": entry.gravatar_hash,
            "address": entry.address,
        })
        logger.debug(f"{entry.gravatar_hash} -> {len(proofs[-1]['proof'])} siblings")

    if not entries:
        logger.warning("Allowlist is empty; root will be '0x'")

    return {
        "root": tree.get_hex_root(),
        "proofs": proofs,
    }


def write_proof_document(document: Dict, path: Union[str, Path]) -> Path:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document, indent=2), encoding='utf-8')
    except OSError as e:
        raise AllowlistFileError(f"Cannot write {path}: {e}") from e
    return path


def load_proof_document(path: Union[str, Path]) -> Dict:
    document = read_json(path)
    if not isinstance(document, dict) or "root" not in document or "proofs" not in document:
        raise AllowlistFileError(f"{path} is not a proof file (needs 'root' and 'proofs')")
    if not isinstance(document["root"], str):
        raise AllowlistFileError(f"{path}: 'root' must be a hex string")
    proofs = document["proofs"]
    if not isinstance(proofs, list) or not all(isinstance(record, dict) for record in proofs):
        raise AllowlistFileError(f"{path}: 'proofs' must be a list of objects")
    return document


def generate(settings: Settings, environment: str) -> ProofRun:
    """
    Run a full generator pass for one environment.

    Loads settings.allowlist_path, builds the tree and writes
    settings.output_path(environment).
    """
    entries = load_allowlist(settings.allowlist_path, environment)
    document = build_proof_document(entries)
    output_path = write_proof_document(document, settings.output_path(environment))

    logger.info(f"Wrote {len(entries)} proofs to {output_path}")
    logger.info(f"Merkle root ({environment}): {document['root']}")

    return ProofRun(
        environment=environment,
        output_path=output_path,
        root=document["root"],
        entry_count=len(entries),
    )


def verify_proof_document(document: Dict) -> List[str]:
    """
    Re-derive every leaf and check its proof against the document root.

    Returns:
        Gravatar hashes whose proofs do not verify (empty when all pass)
    """
    root = document["root"]
    failed = []
    for record in document["proofs"]:
        gravatar_hash = record.get("gravatarHash")
        try:
            leaf = generate_hash(gravatar_hash, record.get("address"))
            valid = verify_proof(record.get("proof", []), leaf, root)
        except (AllowlistError, ValueError, TypeError) as e:
            logger.debug(f"Proof record for {gravatar_hash!r} is malformed: {e}")
            valid = False
        if not valid:
            failed.append(gravatar_hash)
    return failed


def find_proofs(document: Dict, address: str) -> List[Dict]:
    """All proof records for an address, ignoring case."""
    target = address.lower()
    return [
        record for record in document["proofs"]
        if str(record.get("address", "")).lower() == target
    ]
