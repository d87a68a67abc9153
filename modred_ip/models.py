"""
Read-only projections of ModredIP contract structs
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Sequence


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class IPAsset:
    token_id: int
    owner: str
    ip_hash: str
    metadata: str
    is_active: bool
    is_disputed: bool
    registration_date: int
    total_revenue: int
    royalty_tokens: int
    token_bound_account: str

    @classmethod
    def from_tuple(cls, values: Sequence[Any]) -> "IPAsset":
        """Decode the IPAssetStruct tuple returned by getIPAsset"""
        return cls(*values)

    def to_dict(self) -> Dict[str, Any]:
        return {_camel(f.name): getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class License:
    license_id: int
    ip_token_id: int
    licensee: str
    commercial_use: bool
    derivative_works: bool
    exclusive: bool
    revenue_share: int
    duration: int
    issue_date: int
    is_active: bool
    terms: str

    @classmethod
    def from_tuple(cls, values: Sequence[Any]) -> "License":
        """Decode the LicenseStruct tuple returned by getLicense"""
        return cls(*values)

    def to_dict(self) -> Dict[str, Any]:
        return {_camel(f.name): getattr(self, f.name) for f in fields(self)}

    def to_ui_dict(self) -> Dict[str, Any]:
        """Frontend shape: revenueShare becomes royaltyPercentage, issueDate becomes startDate"""
        return {
            "licenseId": self.license_id,
            "tokenId": self.ip_token_id,
            "licensee": self.licensee,
            "royaltyPercentage": self.revenue_share,
            "duration": self.duration,
            "startDate": self.issue_date,
            "isActive": self.is_active,
            "commercialUse": self.commercial_use,
            "terms": self.terms,
        }


@dataclass
class LicenseRequest:
    ip_token_id: int
    commercial_use: bool
    derivative_works: bool
    exclusive: bool
    revenue_share: int
    duration: int
    terms: str
    modred_ip_contract_address: Optional[str] = None


@dataclass
class TransactionResult:
    transaction_hash: str
    receipt: Dict[str, Any]
    transaction: Dict[str, Any]

    @property
    def block_number(self) -> Optional[int]:
        return self.receipt.get("blockNumber")
