"""
Leaf hashing for the allowlist.

A leaf commits to a Gravatar hash and the account allowed to claim with it:

    keccak256(abi.encodePacked(string gravatarHash, address account))

which is what a Solidity verifier recomputes from ``msg.sender`` before
checking the Merkle proof.
"""

from eth_abi.packed import encode_packed
from web3 import Web3

from .exceptions import InvalidEntryError


def keccak256(data: bytes) -> bytes:
    """32-byte Keccak-256 digest of raw bytes."""
    return bytes(Web3.keccak(primitive=data))


def is_valid_address(account) -> bool:
    """
    True for a 20-byte hex address.

    All-lowercase and all-uppercase hex are accepted as-is. Mixed case must
    carry a valid EIP-55 checksum.
    """
    if not isinstance(account, str) or not Web3.is_address(account):
        return False
    body = account[2:] if account.startswith(("0x", "0X")) else account
    if body == body.lower() or body == body.upper():
        return True
    return Web3.is_checksum_address(account)


def normalize_address(account: str) -> str:
    """Validate an EVM address and return it checksummed."""
    if not is_valid_address(account):
        raise InvalidEntryError(f"Invalid EVM address: {account!r}")
    return Web3.to_checksum_address(account)


def generate_hash(gravatar_hash: str, account: str) -> bytes:
    """
    Generate the leaf hash for a Gravatar hash and address pair.

    Args:
        gravatar_hash: Gravatar hash identifying the user
        account: EVM address allowed to claim

    Returns:
        bytes: 32-byte keccak256 of the packed (string, address) pair
    """
    if not isinstance(gravatar_hash, str) or not gravatar_hash.strip():
        raise InvalidEntryError(f"Invalid Gravatar hash: {gravatar_hash!r}")
    address = normalize_address(account)
    packed = encode_packed(['string', 'address'], [gravatar_hash, address])
    return keccak256(packed)
