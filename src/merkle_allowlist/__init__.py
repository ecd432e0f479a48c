"""
merkle-allowlist: Merkle allowlist generator for on-chain claims

Hashes (Gravatar hash, address) pairs into leaves, builds a sorted-pair
keccak256 Merkle tree and emits the root plus a proof per entry.
"""

__version__ = "0.1.0"

from .allowlist import AllowlistEntry, load_allowlist, parse_entries
from .hashing import generate_hash, keccak256, normalize_address
from .proofs import build_proof_document, generate, verify_proof_document
from .tree import MerkleTree, verify_proof

__all__ = [
    "AllowlistEntry", "load_allowlist", "parse_entries",
    "generate_hash", "keccak256", "normalize_address",
    "build_proof_document", "generate", "verify_proof_document",
    "MerkleTree", "verify_proof",
]
