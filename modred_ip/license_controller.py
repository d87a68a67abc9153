"""
HTTP handler for license minting requests
"""

import logging
from typing import Any, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from modred_ip.license_service import mint_license
from modred_ip.models import LicenseRequest
from modred_ip.utils.bigint_serializer import convert_bigints_to_strings

logger = logging.getLogger(__name__)

REQUIRED_PARAMETERS = [
    "ipTokenId",
    "commercialUse",
    "derivativeWorks",
    "exclusive",
    "revenueShare",
    "duration",
    "terms",
    "modredIpContractAddress",
]

MISSING_PARAMETERS_ERROR = "Missing required parameters: " + ", ".join(REQUIRED_PARAMETERS)


class LicenseMintBody(BaseModel):
    """Request body; every field is optional here so presence is checked by the handler"""

    ipTokenId: Optional[int] = None
    commercialUse: Optional[bool] = None
    derivativeWorks: Optional[bool] = None
    exclusive: Optional[bool] = None
    revenueShare: Optional[int] = None
    duration: Optional[int] = None
    terms: Optional[str] = None
    modredIpContractAddress: Optional[str] = None


def missing_parameters(body: LicenseMintBody) -> bool:
    # Numbers and strings must be truthy (0 and "" are rejected); flags only need to be present
    return (
        not body.ipTokenId
        or body.commercialUse is None
        or body.derivativeWorks is None
        or body.exclusive is None
        or not body.revenueShare
        or not body.duration
        or not body.terms
        or not body.modredIpContractAddress
    )


def parse_body(payload: Any) -> Optional[LicenseMintBody]:
    """Validate a decoded JSON body; None when it is absent, not an object or mistyped"""
    if not isinstance(payload, dict):
        return None
    try:
        return LicenseMintBody.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"⚠️  Invalid license request: {e.error_count()} field error(s)")
        return None


def handle_license_minting(payload: Any) -> JSONResponse:
    logger.info("🔥 Entered handle_license_minting")
    try:
        logger.info(f"📦 Received license request: {payload}")

        body = parse_body(payload)
        if body is None or missing_parameters(body):
            return JSONResponse(status_code=400, content={"error": MISSING_PARAMETERS_ERROR})

        license_request = LicenseRequest(
            ip_token_id=body.ipTokenId,
            commercial_use=body.commercialUse,
            derivative_works=body.derivativeWorks,
            exclusive=body.exclusive,
            revenue_share=body.revenueShare,
            duration=body.duration,
            terms=body.terms,
            modred_ip_contract_address=body.modredIpContractAddress,
        )

        result = mint_license(license_request)

        if result["success"]:
            response_data = {
                "message": result["message"],
                "data": {
                    "txHash": result["tx_hash"],
                    "blockNumber": result["block_number"],
                    "explorerUrl": result["explorer_url"],
                },
            }
            return JSONResponse(status_code=200, content=convert_bigints_to_strings(response_data))

        return JSONResponse(
            status_code=500,
            content={
                "error": result["message"],
                "details": "License minting failed on Hedera",
            },
        )
    except Exception as e:
        logger.exception(f"❌ License minting error: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "License minting failed",
                "details": str(e),
            },
        )
