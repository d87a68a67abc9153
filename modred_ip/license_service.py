"""License minting service used by the HTTP controller"""

import logging
from typing import Any, Dict

from modred_ip.models import LicenseRequest
from modred_ip.story_service import mint_license_on_hedera

logger = logging.getLogger(__name__)


def mint_license(license_request: LicenseRequest) -> Dict[str, Any]:
    """Mint a license, reporting failure as {"success": False, "message": ...} instead of raising"""
    try:
        result = mint_license_on_hedera(
            license_request.ip_token_id,
            license_request.commercial_use,
            license_request.derivative_works,
            license_request.exclusive,
            license_request.revenue_share,
            license_request.duration,
            license_request.terms,
            license_request.modred_ip_contract_address,
        )
    except Exception as e:
        logger.error(f"❌ License minting failed: {e}")
        return {
            "success": False,
            "message": "Failed to mint license on Hedera",
        }

    return {
        "success": True,
        "tx_hash": result["tx_hash"],
        "block_number": result["block_number"],
        "explorer_url": result["explorer_url"],
        "message": "License minted successfully on Hedera",
    }
