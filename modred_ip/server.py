"""
HTTP API for the ModredIP registry
Forwards license minting and IP registration to Hedera and exposes read-only views
"""

import json
import logging
import os
import threading
from typing import Any, Dict, Optional, Union

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from modred_ip.config import get_settings
from modred_ip.contract_service import ContractService
from modred_ip.contracts import resolve_modred_ip_address
from modred_ip.errors import ConfigError
from modred_ip.license_controller import handle_license_minting
from modred_ip.story_service import register_ip_with_hedera
from modred_ip.utils.bigint_serializer import convert_bigints_to_strings
from modred_ip.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


class RegisterIPBody(BaseModel):
    ipHash: Optional[str] = None
    metadata: Optional[Union[str, Dict[str, Any]]] = None
    tokenUri: Optional[str] = ""
    modredIpContractAddress: Optional[str] = None


def get_contract_service() -> ContractService:
    return ContractService()


def _json(content: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=convert_bigints_to_strings(content))


def create_app() -> FastAPI:
    app = FastAPI(title="ModredIP API")

    origins = os.getenv("CORS_ORIGINS")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in origins.split(",")] if origins else DEFAULT_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/api/license/mint")
    async def mint_license_route(request: Request):
        """Mint a license for an IP asset"""
        try:
            payload = await request.json()
        except ValueError:
            payload = None
        return await run_in_threadpool(handle_license_minting, payload)

    @app.post("/api/ip/register")
    def register_ip_route(body: RegisterIPBody):
        """Register an IP asset"""
        if not body.ipHash or not body.metadata:
            return _json({"error": "Missing required parameters: ipHash, metadata"}, 400)

        metadata = body.metadata if isinstance(body.metadata, str) else json.dumps(body.metadata)
        try:
            result = register_ip_with_hedera(
                body.ipHash,
                metadata,
                body.tokenUri or "",
                body.modredIpContractAddress,
            )
        except Exception as e:
            return _json({"error": "IP registration failed", "details": str(e)}, 500)

        return _json({
            "message": "IP registered successfully on Hedera",
            "data": {
                "txHash": result["tx_hash"],
                "ipAssetId": result["ip_asset_id"],
                "blockNumber": result["block_number"],
                "explorerUrl": result["explorer_url"],
            },
        })

    @app.get("/api/ip/{token_id}")
    def get_ip_asset_route(token_id: int, service: ContractService = Depends(get_contract_service)):
        try:
            asset = service.get_ip_asset(token_id)
        except Exception as e:
            logger.error(f"❌ getIPAsset({token_id}) failed: {e}")
            raise HTTPException(status_code=502, detail=f"Failed to read IP asset {token_id}")
        return _json(asset.to_dict())

    @app.get("/api/ip/{token_id}/licenses")
    def get_ip_licenses_route(token_id: int, service: ContractService = Depends(get_contract_service)):
        return _json(service.get_licenses_by_token(token_id))

    @app.get("/api/license/{license_id}")
    def get_license_route(license_id: int, service: ContractService = Depends(get_contract_service)):
        try:
            license_ = service.get_license(license_id)
        except Exception as e:
            logger.error(f"❌ getLicense({license_id}) failed: {e}")
            raise HTTPException(status_code=502, detail=f"Failed to read license {license_id}")
        return _json(license_.to_dict())

    @app.get("/api/owner/{address}/assets")
    def get_owned_assets_route(address: str, service: ContractService = Depends(get_contract_service)):
        return _json(service.get_owned_assets(address))

    @app.get("/api/stats")
    def get_stats_route(service: ContractService = Depends(get_contract_service)):
        return _json({
            "totalIPs": service.get_next_token_id(),
            "totalLicenses": service.get_next_license_id(),
        })

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        try:
            settings = get_settings()
            contract = resolve_modred_ip_address(
                settings.modred_ip_address, settings.deployed_addresses_path
            )
        except ConfigError as e:
            logger.error(f"❌ Health check failed: {e}")
            return JSONResponse(status_code=503, content={"status": "unhealthy", "error": str(e)})
        return {
            "status": "healthy",
            "network": settings.network,
            "chainId": settings.chain.id,
            "contract": contract,
        }

    return app


def run_server(host: str = "0.0.0.0", port: int = 5000):
    """Run the API server"""
    configure_logging()
    settings = get_settings()

    logger.info("=" * 70)
    logger.info("🚀 Starting ModredIP API Server")
    logger.info("=" * 70)
    logger.info(f"   Network: {settings.chain.name} (chain {settings.chain.id})")
    logger.info(f"   RPC: {settings.rpc_provider_url}")
    logger.info(f"   License endpoint: http://{host}:{port}/api/license/mint")
    logger.info(f"   Health Check: http://{host}:{port}/health")
    logger.info("=" * 70)

    uvicorn.run(create_app(), host=host, port=port, log_level="info")


def run_server_in_background(host: str = "0.0.0.0", port: int = 5000):
    """Run server in background thread"""
    thread = threading.Thread(target=run_server, args=(host, port), daemon=True)
    thread.start()
    return thread


def main():
    run_server(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
    )


if __name__ == "__main__":
    main()
