from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .helpers import metadata_description, msat_to_sat_ceil, msat_to_sat_floor
from .models import PayerData, SuccessAction


class ResolutionState(Enum):
    UNRESOLVED = "unresolved"
    DISCOVERING = "discovering"
    RESOLVED = "resolved"
    REQUESTING_INVOICE = "requesting_invoice"
    INVOICE_READY = "invoice_ready"
    FAILED = "failed"

    def __str__(self):
        return self.name


class Address(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    domain: str

    @property
    def lnurlp_url(self) -> str:
        # LUD-16: onion services are reached over plain http
        scheme = "http" if self.domain.endswith(".onion") else "https"
        return f"{scheme}://{self.domain}/.well-known/lnurlp/{self.username}"

    def __str__(self) -> str:
        return f"{self.username}@{self.domain}"


class ServiceDescriptor(BaseModel):
    """LNURL-pay service of a resolved Lightning Address.

    Only created from a validated discovery response: the callback url carries no
    trailing slash and 0 <= min_sendable_msat <= max_sendable_msat.
    """

    model_config = ConfigDict(frozen=True)

    address: Address
    callback_url: str
    min_sendable_msat: int
    max_sendable_msat: int
    metadata: str
    comment_allowed: int = 0
    allows_comments: bool = False
    nostr_pubkey: Optional[str] = None
    allows_nostr: bool = False
    payer_data: Optional[PayerData] = None
    status: Optional[str] = None

    @property
    def description(self) -> Optional[str]:
        return metadata_description(self.metadata)

    @property
    def min_sendable_sat(self) -> int:
        return msat_to_sat_ceil(self.min_sendable_msat)

    @property
    def max_sendable_sat(self) -> int:
        return msat_to_sat_floor(self.max_sendable_msat)

    def accepts(self, amount_msat: int) -> bool:
        return self.min_sendable_msat <= amount_msat <= self.max_sendable_msat


class Invoice(BaseModel):
    model_config = ConfigDict(frozen=True)

    bolt11: str
    amount_msat: Optional[int] = None
    payment_hash: str
    description: Optional[str] = None
    description_hash: Optional[str] = None
    payee: Optional[str] = None
    date: int
    expiry: Optional[int] = None
    success_action: Optional[SuccessAction] = None
    verify_url: Optional[str] = None

    def __str__(self) -> str:
        return self.bolt11
