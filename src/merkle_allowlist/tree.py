"""
Merkle tree over pre-hashed leaves.

Pairs are sorted before hashing by default, which is what OpenZeppelin's
MerkleProof.verify expects: a proof is just the list of siblings, with no
left/right bits.

Usage:
    from merkle_allowlist.tree import MerkleTree
    tree = MerkleTree(leaves)
    root = tree.get_hex_root()
    proof = tree.get_hex_proof(leaves[0])
"""

from typing import Callable, List, Optional, Sequence, Union

from .hashing import keccak256

HashLike = Union[bytes, str]


def to_bytes(value: HashLike) -> bytes:
    """Accept raw bytes or a hex string (with or without 0x)."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        hex_str = value[2:] if value.startswith(("0x", "0X")) else value
        return bytes.fromhex(hex_str)
    raise TypeError(f"Expected bytes or hex string, got {type(value).__name__}")


def to_hex(value: bytes) -> str:
    return "0x" + value.hex()


class MerkleTree:
    """
    Binary Merkle tree.

    Leaves are taken as given: they are neither re-hashed nor reordered.
    A trailing odd node on any layer is carried up to the next layer
    unchanged.
    """

    def __init__(
        self,
        leaves: Sequence[HashLike],
        hash_fn: Callable[[bytes], bytes] = keccak256,
        sort_pairs: bool = True,
    ):
        self.hash_fn = hash_fn
        self.sort_pairs = sort_pairs
        self.leaves: List[bytes] = [to_bytes(leaf) for leaf in leaves]
        self.layers: List[List[bytes]] = [self.leaves]
        self._build()

    def _hash_pair(self, left: bytes, right: bytes) -> bytes:
        if self.sort_pairs and right < left:
            left, right = right, left
        return self.hash_fn(left + right)

    def _build(self):
        current_layer = self.leaves
        while len(current_layer) > 1:
            next_layer = []
            for i in range(0, len(current_layer), 2):
                if i + 1 < len(current_layer):
                    next_layer.append(self._hash_pair(current_layer[i], current_layer[i + 1]))
                else:
                    # Odd node - carry up
                    next_layer.append(current_layer[i])
            self.layers.append(next_layer)
            current_layer = next_layer

    def get_leaves(self) -> List[bytes]:
        return list(self.leaves)

    def get_layers(self) -> List[List[bytes]]:
        return [list(layer) for layer in self.layers]

    def get_depth(self) -> int:
        """Number of layers above the leaves."""
        return len(self.layers) - 1

    def get_root(self) -> bytes:
        """Merkle root; empty bytes for a tree without leaves."""
        if not self.leaves:
            return b""
        return self.layers[-1][0]

    def get_hex_root(self) -> str:
        return to_hex(self.get_root())

    def get_leaf_index(self, leaf: HashLike) -> int:
        """Index of the first occurrence of a leaf, or -1."""
        target = to_bytes(leaf)
        try:
            return self.leaves.index(target)
        except ValueError:
            return -1

    def get_proof(self, leaf: HashLike, index: Optional[int] = None) -> List[bytes]:
        """
        Sibling hashes from the leaf layer up to the root.

        Args:
            leaf: Leaf hash to prove
            index: Position of the leaf, for trees holding duplicate leaves

        Returns:
            List of sibling hashes, empty when the leaf is not in the tree
        """
        target = to_bytes(leaf)
        if index is None:
            index = self.get_leaf_index(target)
        elif not 0 <= index < len(self.leaves) or self.leaves[index] != target:
            return []
        if index < 0:
            return []

        proof = []
        for layer in self.layers[:-1]:  # Don't include root
            is_right_node = index % 2 == 1
            sibling_index = index - 1 if is_right_node else index + 1

            if sibling_index < len(layer):
                proof.append(layer[sibling_index])

            index //= 2

        return proof

    def get_hex_proof(self, leaf: HashLike, index: Optional[int] = None) -> List[str]:
        return [to_hex(node) for node in self.get_proof(leaf, index)]

    def verify(self, proof: Sequence[HashLike], leaf: HashLike, root: HashLike) -> bool:
        """
        Check a proof against a root using this tree's hash function.

        Raises:
            ValueError: for trees built with sort_pairs=False, whose proofs
                need left/right position bits this proof format lacks
        """
        if not self.sort_pairs:
            raise ValueError("Unsorted trees need position bits to verify")
        return verify_proof(proof, leaf, root, self.hash_fn)


def verify_proof(
    proof: Sequence[HashLike],
    leaf: HashLike,
    root: HashLike,
    hash_fn: Callable[[bytes], bytes] = keccak256,
) -> bool:
    """Fold a sorted-pair proof over a leaf and compare with the root."""
    current_hash = to_bytes(leaf)
    for sibling in proof:
        sibling = to_bytes(sibling)
        if sibling < current_hash:
            current_hash = hash_fn(sibling + current_hash)
        else:
            current_hash = hash_fn(current_hash + sibling)
    return current_hash == to_bytes(root)
