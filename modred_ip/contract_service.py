"""
Contract Service for ModredIP interactions

Wraps the ModredIP registry contract:
1. Write calls (register IP, mint license, pay revenue, claim royalties)
   are simulated, signed locally and confirmed on-chain
2. View calls are decoded into IPAsset / License records
3. Aggregated reads for the frontend fall back to empty results instead of raising
"""

import logging
from typing import Any, Dict, List, Optional, Union

from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.contract import Contract

from modred_ip import blockchain_client
from modred_ip.config import get_account, get_settings
from modred_ip.models import IPAsset, License, TransactionResult

logger = logging.getLogger(__name__)


class ContractService:
    """
    Typed access to the ModredIP contract

    Anything not passed in comes from the process-wide connection,
    contract handle and signing account.
    """

    def __init__(
        self,
        w3: Optional[Web3] = None,
        contract: Optional[Contract] = None,
        account: Optional[LocalAccount] = None,
        contract_address: Optional[str] = None,
        gas_limit: Optional[int] = None,
        receipt_timeout: Optional[float] = None,
    ):
        self.w3 = w3 or blockchain_client.get_w3()
        if contract is None:
            contract = blockchain_client.get_contract(contract_address, w3=self.w3)
        self.contract = contract
        self._account = account

        if gas_limit is None or receipt_timeout is None:
            settings = get_settings()
            gas_limit = settings.gas_limit if gas_limit is None else gas_limit
            receipt_timeout = settings.receipt_timeout if receipt_timeout is None else receipt_timeout
        self.gas_limit = gas_limit
        self.receipt_timeout = receipt_timeout

    @property
    def account(self) -> LocalAccount:
        if self._account is None:
            self._account = get_account()
        return self._account

    @property
    def address(self) -> str:
        return self.contract.address

    def _transact(self, contract_function: Any, value: int = 0) -> TransactionResult:
        tx_hash, receipt, tx = blockchain_client.send_contract_transaction(
            self.w3,
            contract_function,
            self.account,
            value=value,
            gas=self.gas_limit,
            timeout=self.receipt_timeout,
        )
        return TransactionResult(transaction_hash=tx_hash, receipt=receipt, transaction=tx)

    # ------------------------------------------------------------------ writes

    def register_ip(self, ip_hash: str, metadata: str, token_uri_string: str = "") -> TransactionResult:
        """
        Register new IP asset

        Args:
            ip_hash: Content hash (usually an IPFS CID)
            metadata: JSON metadata string
            token_uri_string: Optional token URI for the minted NFT
        """
        return self._transact(
            self.contract.functions.registerIP(ip_hash, metadata, token_uri_string)
        )

    def mint_license(
        self,
        ip_token_id: int,
        commercial_use: bool,
        derivative_works: bool,
        exclusive: bool,
        revenue_share: int,
        duration: int,
        terms: str,
    ) -> TransactionResult:
        """Mint license for IP asset"""
        return self._transact(
            self.contract.functions.mintLicense(
                int(ip_token_id),
                bool(commercial_use),
                bool(derivative_works),
                bool(exclusive),
                int(revenue_share),
                int(duration),
                terms,
            )
        )

    def pay_revenue(
        self, ip_token_id: int, description: str, payment_amount: Union[int, str]
    ) -> TransactionResult:
        """
        Pay revenue to IP asset

        Args:
            ip_token_id: IP token receiving the payment
            description: Free-form payment description
            payment_amount: Amount in wei (int or decimal string)
        """
        value = int(payment_amount)
        if value <= 0:
            raise ValueError("payment_amount must be a positive amount of wei")
        return self._transact(
            self.contract.functions.payRevenue(int(ip_token_id), description),
            value=value,
        )

    def claim_royalties(self, ip_token_id: int) -> TransactionResult:
        """Claim royalties for IP asset"""
        return self._transact(self.contract.functions.claimRoyalties(int(ip_token_id)))

    # ------------------------------------------------------------------- reads

    def get_ip_asset(self, token_id: int) -> IPAsset:
        return IPAsset.from_tuple(self.contract.functions.getIPAsset(int(token_id)).call())

    def get_license(self, license_id: int) -> License:
        return License.from_tuple(self.contract.functions.getLicense(int(license_id)).call())

    def get_total_ips(self) -> int:
        return self.contract.functions.totalIPs().call()

    def get_total_licenses(self) -> int:
        return self.contract.functions.totalLicenses().call()

    def get_owner_ips(self, owner_address: str) -> List[int]:
        owner = Web3.to_checksum_address(owner_address.lower())
        return list(self.contract.functions.getOwnerIPs(owner).call())

    def get_ip_licenses(self, ip_token_id: int) -> List[int]:
        return list(self.contract.functions.getIPLicenses(int(ip_token_id)).call())

    # ------------------------------------------------------ best-effort reads

    def get_next_token_id(self) -> int:
        try:
            return self.get_total_ips()
        except Exception as e:
            logger.warning(f"⚠️  Error getting total IPs, returning 0: {e}")
            return 0

    def get_next_license_id(self) -> int:
        try:
            return self.get_total_licenses()
        except Exception as e:
            logger.warning(f"⚠️  Error getting total licenses, returning 0: {e}")
            return 0

    def get_owned_assets(self, owner_address: str, max_tokens: int = 100) -> List[Dict]:
        """
        Get IP assets owned by address

        Args:
            owner_address: Owner wallet address
            max_tokens: Maximum number of assets to fetch

        Returns:
            List of asset dicts (contract field names plus isEncrypted),
            empty if the owner index cannot be read
        """
        try:
            owner_ips = self.get_owner_ips(owner_address)
        except Exception as e:
            logger.error(f"❌ Error fetching owned assets: {e}")
            return []

        assets = []
        for token_id in owner_ips[:max(max_tokens, 0)]:
            try:
                asset = self.get_ip_asset(token_id)
            except Exception as e:
                logger.warning(f"⚠️  Error fetching IP asset {token_id}: {e}")
                continue
            entry = asset.to_dict()
            # The contract does not track encryption
            entry["isEncrypted"] = False
            assets.append(entry)

        return assets

    def get_licenses_by_token(self, token_id: int, max_licenses: int = 50) -> List[Dict]:
        """
        Get license data by token ID

        Returns:
            Licenses in the frontend shape (see License.to_ui_dict),
            empty if the license index cannot be read
        """
        try:
            ip_licenses = self.get_ip_licenses(token_id)
        except Exception as e:
            logger.error(f"❌ Error fetching licenses by token: {e}")
            return []

        licenses = []
        for license_id in ip_licenses[:max(max_licenses, 0)]:
            try:
                licenses.append(self.get_license(license_id).to_ui_dict())
            except Exception as e:
                logger.warning(f"⚠️  Error fetching license {license_id}: {e}")

        return licenses


def create_contract_service(**kwargs) -> ContractService:
    return ContractService(**kwargs)
