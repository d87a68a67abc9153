"""
ModredIP contract addresses and ABI
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

from web3 import Web3

from modred_ip.errors import ConfigError

# Latest testnet deployment
CONTRACT_ADDRESSES: Dict[str, str] = {
    "MODRED_IP": "0xe3Cf8C99E10C1a7138520391bef6dddC61Aa0b91",
    "ERC6551_REGISTRY": "0x067fda4FcaaDAa37552e5B146d8bC441ae4B1351",
    "ERC6551_ACCOUNT": "0x62F2DbCb28639e6172aDbbFa93f02f77F7696825",
}

MODRED_IP_CONTRACT_ADDRESS = CONTRACT_ADDRESSES["MODRED_IP"]

# Keys written by the Hardhat Ignition module into deployed_addresses.json
IGNITION_KEYS: Dict[str, str] = {
    "MODRED_IP": "ModredIPModule#ModredIP",
    "ERC6551_REGISTRY": "ModredIPModule#MockERC6551Registry",
    "ERC6551_ACCOUNT": "ModredIPModule#MockERC6551Account",
}

BASE_DIR = Path(__file__).parent
ABI_FILE = BASE_DIR / "abi" / "ModredIP.json"


def load_abi(path: Path = ABI_FILE) -> List[Dict]:
    """Load the ModredIP ABI (bare list or a Hardhat artifact with an "abi" key)"""
    if not path.exists():
        raise ConfigError(f"ABI not found at {path}. Run modred-ip-setup-abi after compiling.")
    abi_data = json.loads(path.read_text(encoding="utf-8"))
    abi = abi_data["abi"] if isinstance(abi_data, dict) else abi_data
    if not abi:
        raise ConfigError(f"ABI missing in {path}")
    return abi


MODRED_IP_ABI = load_abi()


def load_deployed_addresses(path: str) -> Dict[str, str]:
    """Read contract addresses from an Ignition deployed_addresses.json"""
    p = Path(path)
    if not p.is_file():
        raise ConfigError(f"Deployment file not found at {p}")
    deployed = json.loads(p.read_text(encoding="utf-8"))

    addresses = dict(CONTRACT_ADDRESSES)
    for name, key in IGNITION_KEYS.items():
        if deployed.get(key):
            addresses[name] = Web3.to_checksum_address(deployed[key].lower())
    return addresses


def resolve_modred_ip_address(
    override: Optional[str] = None,
    deployed_addresses_path: Optional[str] = None,
) -> str:
    """Pick the ModredIP address: explicit override, then Ignition output, then the default"""
    if override:
        address = override
    elif deployed_addresses_path:
        address = load_deployed_addresses(deployed_addresses_path)["MODRED_IP"]
    else:
        address = MODRED_IP_CONTRACT_ADDRESS

    # Lowercase first: deployment tooling does not always emit EIP-55 checksums
    if not isinstance(address, str) or not Web3.is_address(address.lower()):
        raise ConfigError(f"Invalid ModredIP contract address: {address!r}")
    return Web3.to_checksum_address(address.lower())
