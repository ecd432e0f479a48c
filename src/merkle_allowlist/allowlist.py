"""
Allowlist loading.

The allowlist file holds one object per environment, each mapping a
Gravatar hash to the address allowed to claim with it:

    {
      "dev":  {"<gravatarHash>": "0x...", ...},
      "prod": {"<gravatarHash>": "0x...", ...}
    }

Entry order follows the JSON object and decides leaf order.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Union

from .exceptions import AllowlistFileError, EnvironmentNotFoundError, InvalidEntryError
from .hashing import generate_hash, normalize_address

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AllowlistEntry:
    """One allowed (Gravatar hash, address) pair"""
    gravatar_hash: str
    address: str  # as written in the allowlist file

    @property
    def leaf(self) -> bytes:
        return generate_hash(self.gravatar_hash, self.address)


def read_json(path: Union[str, Path]):
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        raise AllowlistFileError(f"File not found: {path}") from None
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise AllowlistFileError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise AllowlistFileError(f"Cannot read {path}: {e}") from e


def parse_entries(mapping: Dict[str, str]) -> List[AllowlistEntry]:
    """Validate a {gravatarHash: address} mapping and return its entries in order."""
    entries = []
    for gravatar_hash, address in mapping.items():
        if not isinstance(gravatar_hash, str) or not gravatar_hash.strip():
            raise InvalidEntryError(f"Blank Gravatar hash for address {address!r}")
        try:
            normalize_address(address)
        except InvalidEntryError:
            raise InvalidEntryError(
                f"Invalid address {address!r} for Gravatar hash '{gravatar_hash}'"
            ) from None
        entries.append(AllowlistEntry(gravatar_hash, address))
    return entries


def load_allowlist(path: Union[str, Path], environment: str) -> List[AllowlistEntry]:
    """
    Load the entries of one environment from an allowlist file.

    Args:
        path: Allowlist JSON file
        environment: "dev" or "prod"

    Returns:
        list of AllowlistEntry in file order

    Raises:
        AllowlistFileError: file missing or not valid JSON
        EnvironmentNotFoundError: environment missing or not an object
        InvalidEntryError: blank identifier or bad address
    """
    data = read_json(path)
    if not isinstance(data, dict):
        raise AllowlistFileError(f"Expected a JSON object at the top of {path}")

    section = data.get(environment)
    if not isinstance(section, dict):
        raise EnvironmentNotFoundError(environment, path)

    entries = parse_entries(section)
    logger.info(f"Loaded {len(entries)} {environment} entries from {path}")
    return entries
