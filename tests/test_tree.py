# merkle-allowlist - test_tree.py

import hashlib

import pytest

from merkle_allowlist.hashing import keccak256
from merkle_allowlist.tree import MerkleTree, verify_proof


def make_leaves(count: int) -> list:
    return [keccak256(bytes([i])) for i in range(count)]


def sorted_pair(a: bytes, b: bytes) -> bytes:
    return keccak256(min(a, b) + max(a, b))


def test_empty_tree() -> None:
    tree = MerkleTree([])
    assert tree.get_root() == b""
    assert tree.get_hex_root() == "0x"
    assert tree.get_proof(keccak256(b"x")) == []
    assert tree.get_depth() == 0


def test_single_leaf_is_root() -> None:
    (leaf,) = make_leaves(1)
    tree = MerkleTree([leaf])
    assert tree.get_root() == leaf
    assert tree.get_proof(leaf) == []
    assert tree.verify([], leaf, leaf)


def test_two_leaves_hash_sorted_pair() -> None:
    a, b = make_leaves(2)
    assert MerkleTree([a, b]).get_root() == sorted_pair(a, b)
    assert MerkleTree([b, a]).get_root() == sorted_pair(a, b)


def test_odd_node_is_carried_up() -> None:
    l0, l1, l2 = make_leaves(3)
    tree = MerkleTree([l0, l1, l2])
    h01 = sorted_pair(l0, l1)

    assert tree.get_layers()[1] == [h01, l2]
    assert tree.get_root() == sorted_pair(h01, l2)
    assert tree.get_proof(l0) == [l1, l2]
    assert tree.get_proof(l2) == [h01]


def test_five_leaves_layer_shape() -> None:
    leaves = make_leaves(5)
    tree = MerkleTree(leaves)
    assert [len(layer) for layer in tree.get_layers()] == [5, 3, 2, 1]
    assert tree.get_depth() == 3
    # Last leaf has no sibling on the first two layers
    assert len(tree.get_proof(leaves[4])) == 1


@pytest.mark.parametrize("count", [2, 3, 4, 5, 7, 8, 13])
def test_every_proof_verifies(count) -> None:
    leaves = make_leaves(count)
    tree = MerkleTree(leaves)
    root = tree.get_root()
    for leaf in leaves:
        assert tree.verify(tree.get_proof(leaf), leaf, root)
        assert verify_proof(tree.get_hex_proof(leaf), leaf, tree.get_hex_root())


def test_wrong_leaf_or_root_fails() -> None:
    leaves = make_leaves(4)
    tree = MerkleTree(leaves)
    proof = tree.get_proof(leaves[1])
    assert not tree.verify(proof, leaves[2], tree.get_root())
    assert not tree.verify(proof, leaves[1], keccak256(b"other root"))


def test_leaves_are_not_reordered() -> None:
    leaves = make_leaves(4)
    assert MerkleTree(leaves).get_leaves() == leaves
    assert MerkleTree(leaves[::-1]).get_leaves()[0] == leaves[-1]


def test_unknown_leaf_has_empty_proof() -> None:
    tree = MerkleTree(make_leaves(4))
    assert tree.get_proof(keccak256(b"missing")) == []
    assert tree.get_leaf_index(keccak256(b"missing")) == -1


def test_hex_input_and_output() -> None:
    leaves = make_leaves(3)
    hex_leaves = ["0x" + leaf.hex() for leaf in leaves]
    tree = MerkleTree(hex_leaves)
    assert tree.get_root() == MerkleTree(leaves).get_root()
    proof = tree.get_hex_proof(hex_leaves[0])
    assert all(p.startswith("0x") and len(p) == 66 for p in proof)
    assert tree.get_hex_root() == "0x" + tree.get_root().hex()


def test_duplicate_leaves_use_first_occurrence_unless_indexed() -> None:
    a, b, c = make_leaves(3)
    tree = MerkleTree([a, b, c, a])
    assert tree.get_leaf_index(a) == 0
    assert tree.get_proof(a) == tree.get_proof(a, index=0)
    assert tree.get_proof(a, index=3) == [c, sorted_pair(a, b)]
    assert tree.get_proof(a, index=1) == []


def test_unsorted_tree_keeps_pair_order() -> None:
    a, b = make_leaves(2)
    tree = MerkleTree([a, b], sort_pairs=False)
    assert tree.get_root() == keccak256(a + b)
    with pytest.raises(ValueError):
        tree.verify([b], a, tree.get_root())


def test_rejects_non_hash_input() -> None:
    with pytest.raises(TypeError):
        MerkleTree([123])


def test_verify_proof_uses_given_hash_fn() -> None:
    def sha256(data: bytes) -> bytes:
        return hashlib.sha256(data).digest()

    leaves = make_leaves(5)
    tree = MerkleTree(leaves, hash_fn=sha256)
    for leaf in leaves:
        proof = tree.get_proof(leaf)
        assert verify_proof(proof, leaf, tree.get_root(), hash_fn=sha256)
        assert tree.verify(proof, leaf, tree.get_root())
        assert not verify_proof(proof, leaf, tree.get_root())
