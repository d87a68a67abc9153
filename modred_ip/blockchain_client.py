"""
Web3 connection to the Hedera JSON-RPC relay and the shared write path
for ModredIP contract transactions
"""

import logging
from typing import Any, Dict, Optional, Tuple

from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.contract import Contract
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception

from modred_ip.config import get_settings
from modred_ip.contracts import MODRED_IP_ABI, resolve_modred_ip_address
from modred_ip.errors import ContractCallError

logger = logging.getLogger(__name__)

_w3: Optional[Web3] = None
_contract: Optional[Contract] = None


def get_w3() -> Web3:
    global _w3
    if _w3 is None:
        settings = get_settings()
        _w3 = Web3(Web3.HTTPProvider(settings.rpc_provider_url, request_kwargs={"timeout": 30}))
        logger.info(f"🔗 Web3 provider: {settings.rpc_provider_url} ({settings.chain.name})")
    return _w3


def get_contract(address: Optional[str] = None, w3: Optional[Web3] = None) -> Contract:
    """ModredIP contract handle; the default address is resolved once and cached"""
    global _contract
    w3 = w3 or get_w3()
    if address is not None:
        return w3.eth.contract(address=resolve_modred_ip_address(address), abi=MODRED_IP_ABI)

    if _contract is None:
        settings = get_settings()
        resolved = resolve_modred_ip_address(
            settings.modred_ip_address, settings.deployed_addresses_path
        )
        _contract = w3.eth.contract(address=resolved, abi=MODRED_IP_ABI)
        logger.info(f"📜 ModredIP contract: {resolved}")
    return _contract


def reset_clients() -> None:
    """Forget the cached connection and contract (used by tests)"""
    global _w3, _contract
    _w3 = None
    _contract = None


def check_connection(w3: Optional[Web3] = None) -> bool:
    w3 = w3 or get_w3()
    try:
        return bool(w3.is_connected())
    except Exception as e:
        logger.warning(f"⚠️  Connection check failed: {e}")
        return False


def send_contract_transaction(
    w3: Web3,
    contract_function: Any,
    account: LocalAccount,
    value: int = 0,
    gas: int = 3_000_000,
    timeout: float = 120.0,
) -> Tuple[str, Dict, Dict]:
    """
    Simulate, sign, send and confirm a contract call

    Args:
        w3: Connected Web3 instance
        contract_function: Bound contract function, e.g. contract.functions.claimRoyalties(1)
        account: Local signing account
        value: Wei attached to the call (payable functions only)
        gas: Gas limit for the transaction
        timeout: Seconds to wait for the receipt

    Returns:
        (transaction hash as 0x-hex, receipt, built unsigned transaction dict)
    """
    name = getattr(contract_function, "fn_name", "contract call")
    call_params: Dict[str, Any] = {"from": account.address}
    if value:
        call_params["value"] = value

    # Dry run first so reverts surface with their reason before paying gas
    try:
        contract_function.call(call_params)
    except ContractLogicError as e:
        raise ContractCallError(name, f"simulation reverted: {e}")
    except Web3Exception as e:
        raise ContractCallError(name, f"simulation failed: {e}")

    try:
        tx = contract_function.build_transaction({
            **call_params,
            "nonce": w3.eth.get_transaction_count(account.address, "pending"),
            "gas": gas,
            "gasPrice": w3.eth.gas_price,
            "chainId": w3.eth.chain_id,
        })
        signed_tx = account.sign_transaction(tx)
        tx_hash = Web3.to_hex(w3.eth.send_raw_transaction(signed_tx.raw_transaction))
    except Web3Exception as e:
        raise ContractCallError(name, f"send failed: {e}")

    logger.info(f"📝 {name} sent: {tx_hash}")

    try:
        receipt = w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
    except TimeExhausted:
        raise ContractCallError(name, f"no receipt after {timeout:.0f}s", tx_hash=tx_hash)

    if receipt.get("status") == 0:
        raise ContractCallError(name, "transaction reverted", tx_hash=tx_hash)

    logger.info(f"✅ {name} confirmed in block {receipt.get('blockNumber')}")
    return tx_hash, dict(receipt), tx
