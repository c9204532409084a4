"""
chargekit Data Models
"""

import os
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ClientConfig(BaseModel):
    """Client configuration"""

    api_key: Optional[str] = Field(None, description="Secret API key, sent as a bearer token")
    base_url: str = Field("https://api.stripe.com/v1", description="API base URL")
    timeout_connect: float = Field(1.0, description="Connection timeout in seconds")
    timeout_read: float = Field(30.0, description="Read timeout in seconds")
    verify_ssl: bool = Field(True, description="Verify SSL certificates")
    cb_fail_max: int = Field(5, description="Consecutive failures before the circuit opens")
    cb_reset_timeout: int = Field(60, description="Seconds before a half-open retry")
    debug: bool = Field(False, description="Enable debug logging")

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v):
        if v is not None and not v.strip():
            raise ValueError("API key must not be blank")
        return v

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """
        Build configuration from environment variables

        Reads:
        - CHARGEKIT_API_KEY: API key
        - CHARGEKIT_API_BASE: API base URL
        - CHARGEKIT_DEBUG: "1"/"true" enables debug logging

        Keyword arguments override the environment.
        """
        values: Dict[str, Any] = {}
        if os.getenv("CHARGEKIT_API_KEY"):
            values["api_key"] = os.environ["CHARGEKIT_API_KEY"]
        if os.getenv("CHARGEKIT_API_BASE"):
            values["base_url"] = os.environ["CHARGEKIT_API_BASE"]
        if os.getenv("CHARGEKIT_DEBUG"):
            values["debug"] = os.environ["CHARGEKIT_DEBUG"].lower() in ("1", "true", "yes")
        values.update(overrides)
        return cls(**values)


class _APIObject(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Transaction(_APIObject):
    """Balance transaction, possibly unexpanded"""

    id: str
    amount: Optional[int] = None
    currency: Optional[str] = None
    fee: Optional[int] = None
    net: Optional[int] = None
    status: Optional[str] = None
    type: Optional[str] = None
    created: Optional[int] = None


def _expand(v):
    # unexpanded references arrive as bare ids
    if isinstance(v, str):
        return {"id": v}
    return v


class Card(_APIObject):
    """Card attached to a charge"""

    id: Optional[str] = None
    brand: Optional[str] = None
    last4: Optional[str] = None
    exp_month: Optional[int] = None
    exp_year: Optional[int] = None
    fingerprint: Optional[str] = None
    funding: Optional[str] = None
    country: Optional[str] = None
    name: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    address_city: Optional[str] = None
    address_state: Optional[str] = None
    address_zip: Optional[str] = None
    address_country: Optional[str] = None
    cvc_check: Optional[str] = None
    customer: Optional[str] = None


class ListMeta(_APIObject):
    """Metadata for one fetched page of a list"""

    has_more: bool = False
    total_count: Optional[int] = None
    url: Optional[str] = None


class Refund(_APIObject):
    """Refund response"""

    id: str
    amount: int
    currency: str
    created: Optional[int] = None
    charge: str
    balance_transaction: Optional[Transaction] = None
    metadata: Dict[str, str] = Field(default_factory=dict)

    @field_validator("balance_transaction", mode="before")
    @classmethod
    def expand_transaction(cls, v):
        return _expand(v)


class RefundList(ListMeta):
    """Page of refunds"""

    data: List[Refund] = Field(default_factory=list)


class Charge(_APIObject):
    """Charge response"""

    id: str
    livemode: bool = False
    amount: int
    currency: str
    created: Optional[int] = None
    paid: bool = False
    captured: bool = False
    refunded: bool = False
    amount_refunded: int = 0
    refunds: Optional[RefundList] = None
    card: Optional[Card] = None
    customer: Optional[str] = None
    description: Optional[str] = None
    statement_description: Optional[str] = None
    receipt_email: Optional[str] = None
    failure_message: Optional[str] = None
    failure_code: Optional[str] = None
    invoice: Optional[str] = None
    balance_transaction: Optional[Transaction] = None
    metadata: Dict[str, str] = Field(default_factory=dict)

    @field_validator("balance_transaction", mode="before")
    @classmethod
    def expand_transaction(cls, v):
        return _expand(v)


class ChargeList(ListMeta):
    """Page of charges"""

    data: List[Charge] = Field(default_factory=list)
