"""
Backend write helpers: register IP and mint licenses on Hedera
"""

import logging
from typing import Any, Dict, Iterable, Optional

from web3 import Web3

from modred_ip.config import get_settings
from modred_ip.contract_service import ContractService

logger = logging.getLogger(__name__)

# keccak256("Transfer(address,address,uint256)")
TRANSFER_EVENT_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


def _service_for(address: Optional[str]) -> ContractService:
    # None selects the configured default contract
    return ContractService(contract_address=address)


def explorer_tx_url(tx_hash: str) -> str:
    return f"{get_settings().block_explorer_url}/tx/{tx_hash}"


def _topic_hex(topic: Any) -> str:
    return topic if isinstance(topic, str) else Web3.to_hex(topic)


def extract_token_id(logs: Iterable[Dict[str, Any]]) -> Optional[int]:
    """Token id from the first ERC-721 Transfer log in a receipt, if any"""
    for log in logs or []:
        topics = log.get("topics") or []
        if not topics or _topic_hex(topics[0]).lower() != TRANSFER_EVENT_TOPIC:
            continue
        if len(topics) > 3 and topics[3]:
            return int(_topic_hex(topics[3]), 16)
    return None


def register_ip_with_hedera(
    ip_hash: str,
    metadata: str,
    token_uri_string: str = "",
    modred_ip_contract_address: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Register an IP asset on the ModredIP contract

    Returns:
        Dict with tx_hash, ip_asset_id (None if no Transfer log was found),
        block_number and explorer_url
    """
    logger.info(f"📦 Registering IP: ipHash={ip_hash} tokenUri={token_uri_string!r}")
    logger.debug(f"   metadata: {metadata}")
    try:
        result = _service_for(modred_ip_contract_address).register_ip(
            ip_hash, metadata, token_uri_string
        )
    except Exception as e:
        logger.error(f"❌ Error registering IP with Hedera: {e}")
        raise

    tx_hash = result.transaction_hash
    return {
        "tx_hash": tx_hash,
        "ip_asset_id": extract_token_id(result.receipt.get("logs")),
        "block_number": result.block_number,
        "explorer_url": explorer_tx_url(tx_hash),
    }


def mint_license_on_hedera(
    ip_token_id: int,
    commercial_use: bool,
    derivative_works: bool,
    exclusive: bool,
    revenue_share: int,
    duration: int,
    terms: str,
    modred_ip_contract_address: Optional[str] = None,
) -> Dict[str, Any]:
    """Mint a license for an IP asset and wait for confirmation"""
    try:
        result = _service_for(modred_ip_contract_address).mint_license(
            ip_token_id,
            commercial_use,
            derivative_works,
            exclusive,
            revenue_share,
            duration,
            terms,
        )
    except Exception as e:
        logger.error(f"❌ Error minting license on Hedera: {e}")
        raise

    tx_hash = result.transaction_hash
    return {
        "tx_hash": tx_hash,
        "block_number": result.block_number,
        "explorer_url": explorer_tx_url(tx_hash),
    }
