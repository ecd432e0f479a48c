"""
On-chain root check.

Reads the Merkle root a deployed contract was configured with and compares
it to a generated one. The contract only needs a bytes32 view function,
by default ``merkleRoot()``.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from web3 import Web3

from .exceptions import ChainError, ConfigError, InvalidEntryError
from .hashing import is_valid_address

logger = logging.getLogger(__name__)


def root_getter_abi(function_name: str) -> list:
    return [
        {"inputs": [], "name": function_name, "outputs": [{"name": "", "type": "bytes32"}], "stateMutability": "view", "type": "function"},
    ]


@dataclass
class RootComparison:
    contract: str
    onchain: str
    expected: str

    @property
    def matches(self) -> bool:
        return self.onchain.lower() == self.expected.lower()


class RootReader:
    """Reads Merkle roots from contracts over JSON-RPC."""

    def __init__(self, rpc_url: Optional[str] = None, w3: Optional[Web3] = None):
        if w3 is None:
            if not rpc_url:
                raise ConfigError("No RPC endpoint configured (set RPC_URL or INFURA_API_KEY)")
            w3 = Web3(Web3.HTTPProvider(rpc_url))
        self.w3 = w3

    def read_root(self, contract_address: str, function_name: str = "merkleRoot") -> str:
        """
        Call the contract's root getter.

        Returns:
            str: 0x-prefixed 32-byte root
        """
        if not is_valid_address(contract_address):
            raise InvalidEntryError(f"Invalid contract address: {contract_address!r}")

        contract = self.w3.eth.contract(
            address=Web3.to_checksum_address(contract_address),
            abi=root_getter_abi(function_name)
        )
        try:
            raw_root = contract.functions[function_name]().call()
        except Exception as e:
            raise ChainError(f"{function_name}() call on {contract_address} failed: {e}") from e

        root = "0x" + bytes(raw_root).hex()
        logger.info(f"On-chain root at {contract_address}: {root}")
        return root

    def compare_root(self, contract_address: str, expected_root: str,
                     function_name: str = "merkleRoot") -> RootComparison:
        onchain = self.read_root(contract_address, function_name)
        comparison = RootComparison(contract_address, onchain, expected_root)
        if not comparison.matches:
            logger.warning(f"Root mismatch: on-chain {onchain}, expected {expected_root}")
        return comparison
