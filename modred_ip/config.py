"""
Network and account configuration for the ModredIP client

Settings are read once from the environment (and a .env file, if present)
and cached for the lifetime of the process.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from dotenv import load_dotenv
from eth_account import Account
from eth_account.signers.local import LocalAccount

from modred_ip.errors import ConfigError

load_dotenv()

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class ChainInfo:
    """Static description of a Hedera EVM network"""

    id: int
    name: str
    rpc_url: str
    explorer_name: str
    explorer_url: str
    currency_name: str = "HBAR"
    currency_symbol: str = "HBAR"
    currency_decimals: int = 18


HEDERA_TESTNET = ChainInfo(
    id=296,
    name="Hedera Testnet",
    rpc_url="https://testnet.hashio.io/api",
    explorer_name="Hedera Testnet Explorer",
    explorer_url="https://testnet.hashscan.io",
)

HEDERA_MAINNET = ChainInfo(
    id=295,
    name="Hedera Mainnet",
    rpc_url="https://mainnet.hashio.io/api",
    explorer_name="Hedera Mainnet Explorer",
    explorer_url="https://hashscan.io/mainnet",
)

HEDERA_LOCAL = ChainInfo(
    id=298,
    name="Hedera Local Node",
    rpc_url="http://127.0.0.1:7546",
    explorer_name="Hedera Local Explorer",
    explorer_url="http://localhost:8080/devnet",
)

NETWORKS: Dict[str, ChainInfo] = {
    "testnet": HEDERA_TESTNET,
    "mainnet": HEDERA_MAINNET,
    "local": HEDERA_LOCAL,
}


@dataclass(frozen=True)
class Settings:
    network: str
    chain: ChainInfo
    rpc_provider_url: str
    private_key: str = field(repr=False)
    modred_ip_address: Optional[str] = None
    deployed_addresses_path: Optional[str] = None
    gas_limit: int = 3_000_000
    receipt_timeout: float = 120.0
    native_token_address: str = ZERO_ADDRESS

    @property
    def block_explorer_url(self) -> str:
        return self.chain.explorer_url

    @property
    def account(self) -> LocalAccount:
        return Account.from_key(self.private_key)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def load_settings() -> Settings:
    """Build settings from the environment, failing if the signer key is missing"""
    private_key = (os.getenv("WALLET_PRIVATE_KEY") or "").strip()
    if not private_key:
        raise ConfigError("WALLET_PRIVATE_KEY is required in .env file")

    network = (os.getenv("HEDERA_NETWORK") or "testnet").strip().lower()
    if network not in NETWORKS:
        raise ConfigError(
            f"Unknown HEDERA_NETWORK {network!r}, expected one of: {', '.join(NETWORKS)}"
        )
    chain = NETWORKS[network]

    settings = Settings(
        network=network,
        chain=chain,
        rpc_provider_url=os.getenv("RPC_PROVIDER_URL") or chain.rpc_url,
        private_key=private_key,
        modred_ip_address=os.getenv("MODRED_IP_CONTRACT_ADDRESS") or None,
        deployed_addresses_path=os.getenv("DEPLOYED_ADDRESSES_PATH") or None,
        gas_limit=_int_env("GAS_LIMIT", 3_000_000),
        receipt_timeout=float(_int_env("TX_RECEIPT_TIMEOUT", 120)),
    )

    # Derive the signer now so a malformed key fails at startup
    try:
        Account.from_key(private_key)
    except (ValueError, TypeError) as e:
        raise ConfigError(f"WALLET_PRIVATE_KEY is not a valid private key: {e}")

    return settings


_settings: Optional[Settings] = None
_account: Optional[LocalAccount] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def get_account() -> LocalAccount:
    """Signing account, derived once from WALLET_PRIVATE_KEY"""
    global _account
    if _account is None:
        _account = get_settings().account
    return _account


def reset_settings() -> None:
    """Drop cached settings and account (used by tests)"""
    global _settings, _account
    _settings = None
    _account = None
