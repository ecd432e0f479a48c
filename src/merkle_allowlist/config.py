"""
Configuration from the environment.

Values come from process environment variables, optionally seeded from a
.env file by load_dotenv(). CLI flags override them.
"""

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_ALLOWLIST_PATH = "config/allowlist.json"
DEFAULT_PROOFS_DIR = "proofs"
ENVIRONMENTS = ("dev", "prod")
INFURA_MAINNET_URL = "https://mainnet.infura.io/v3/{key}"


def resolve_environment(value: Optional[str]) -> str:
    """'prod' selects prod; anything else falls back to dev."""
    return "prod" if value == "prod" else "dev"


@dataclass(frozen=True)
class Settings:
    allowlist_path: Path = Path(DEFAULT_ALLOWLIST_PATH)
    proofs_dir: Path = Path(DEFAULT_PROOFS_DIR)
    environment: str = "dev"
    rpc_url_override: Optional[str] = None
    infura_api_key: Optional[str] = field(default=None, repr=False)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, environ=None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            dotenv_path: .env file to load first (default: search from cwd)
            environ: Mapping to read instead of os.environ (skips .env)
        """
        if environ is None:
            load_dotenv(dotenv_path or find_dotenv(usecwd=True))
            environ = os.environ

        return cls(
            allowlist_path=Path(environ.get("ALLOWLIST_PATH") or DEFAULT_ALLOWLIST_PATH),
            proofs_dir=Path(environ.get("PROOFS_DIR") or DEFAULT_PROOFS_DIR),
            environment=resolve_environment(environ.get("MERKLE_ENV")),
            rpc_url_override=environ.get("RPC_URL") or None,
            infura_api_key=environ.get("INFURA_API_KEY") or None,
            log_level=(environ.get("LOG_LEVEL") or "INFO").upper(),
        )

    def with_overrides(self, **changes) -> "Settings":
        """Copy with every non-None keyword applied."""
        changes = {k: v for k, v in changes.items() if v is not None}
        for key in ("allowlist_path", "proofs_dir"):
            if key in changes:
                changes[key] = Path(changes[key])
        return replace(self, **changes)

    @property
    def rpc_url(self) -> Optional[str]:
        if self.rpc_url_override:
            return self.rpc_url_override
        if self.infura_api_key:
            return INFURA_MAINNET_URL.format(key=self.infura_api_key)
        return None

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.INFO

    def output_path(self, environment: str) -> Path:
        return self.proofs_dir / f"{environment}.json"
