import json

import pytest

# Hardhat's default accounts
ALICE = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
BOB = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
CAROL = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"
DAVE = "0x90F79bf6EB2c4f870365E785982E1f101E93b906"
ERIN = "0x15d34AAf54267DB7D7c367839AAf71A00a2C6A65"

DEV_ALLOWLIST = {
    "205e460b479e2e5b48aec07710c08d50": ALICE,
    "a4d5b1cbd2a18a2c0f1c8f4c3e3b3f3d": BOB,
    "5658ffccee7f0ebfda2b226238b1eb6e": CAROL,
    "e4d909c290d0fb1ca068ffaddf22cbd0": DAVE,
    "0b0b2d5e1c7d9a1f4c5e6d7a8b9c0d1e": ERIN,
}

PROD_ALLOWLIST = {
    "d41d8cd98f00b204e9800998ecf8427e": ALICE,
    "9e107d9d372bb6826bd81d3542a419d6": BOB,
}


@pytest.fixture
def allowlist_file(tmp_path):
    """Write an allowlist with dev and prod sections and return its path."""
    path = tmp_path / "config" / "allowlist.json"
    path.parent.mkdir()
    path.write_text(json.dumps({"dev": DEV_ALLOWLIST, "prod": PROD_ALLOWLIST}, indent=2))
    return path


@pytest.fixture
def clean_env(monkeypatch):
    """Drop configuration variables so tests see defaults."""
    for name in ("ALLOWLIST_PATH", "PROOFS_DIR", "MERKLE_ENV", "RPC_URL",
                 "INFURA_API_KEY", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
