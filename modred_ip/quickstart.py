"""
Quick Start: check the ModredIP deployment

Connects to the configured Hedera network, verifies the contract is
deployed and prints registry totals plus the signer's IP assets.
"""

import argparse
import logging
from typing import Optional

from modred_ip import blockchain_client
from modred_ip.config import get_account, get_settings
from modred_ip.contract_service import ContractService
from modred_ip.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def main(owner: Optional[str] = None, limit: int = 5) -> int:
    settings = get_settings()

    logger.info("=" * 70)
    logger.info("QUICK START: MODREDIP ON HEDERA")
    logger.info("=" * 70)

    logger.info("📋 Step 1: Connect...")
    w3 = blockchain_client.get_w3()
    if not blockchain_client.check_connection(w3):
        logger.error(f"❌ Cannot reach {settings.rpc_provider_url}")
        return 1
    logger.info(f"   ✅ Connected to {settings.chain.name} (chain {w3.eth.chain_id})")

    service = ContractService(w3=w3)
    code = w3.eth.get_code(service.address)
    if len(code) == 0:
        logger.error(f"❌ No contract deployed at {service.address}")
        return 1
    logger.info(f"   ✅ Contract {service.address} ({len(code)} bytes)")

    logger.info("📋 Step 2: Registry totals...")
    logger.info(f"   IP assets: {service.get_next_token_id()}")
    logger.info(f"   Licenses:  {service.get_next_license_id()}")

    owner = owner or get_account().address
    logger.info(f"📋 Step 3: IP assets owned by {owner}...")
    assets = service.get_owned_assets(owner, max_tokens=limit)
    if not assets:
        logger.info("   (none)")
    for asset in assets:
        status = "🚩 DISPUTED" if asset["isDisputed"] else "✅ OK"
        logger.info(f"   IP #{asset['tokenId']} {status}")
        logger.info(f"      Hash: {asset['ipHash'][:24]}...")
        logger.info(f"      Revenue: {asset['totalRevenue']} wei")
        for license_ in service.get_licenses_by_token(asset["tokenId"], max_licenses=limit):
            logger.info(
                f"      License #{license_['licenseId']} -> {license_['licensee']} "
                f"({license_['royaltyPercentage']}% royalty)"
            )

    logger.info("=" * 70)
    logger.info("COMPLETE!")
    logger.info("=" * 70)
    return 0


def cli():
    configure_logging()
    parser = argparse.ArgumentParser(description="Check the ModredIP deployment")
    parser.add_argument("--owner", help="Owner address to list (default: signer)")
    parser.add_argument("--limit", type=int, default=5)
    args = parser.parse_args()
    try:
        raise SystemExit(main(args.owner, args.limit))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        raise SystemExit(130)


if __name__ == "__main__":
    cli()
