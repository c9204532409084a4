"""
chargekit - typed Python client for the charges and refunds payment API
"""

from chargekit.client import Client
from chargekit.backend import Backend
from chargekit.charge import ChargeClient
from chargekit.refund import RefundClient
from chargekit.iter import ListIterator
from chargekit.models import (
    ClientConfig,
    Card,
    Charge,
    ChargeList,
    ListMeta,
    Refund,
    RefundList,
    Transaction,
)
from chargekit.params import (
    Filter,
    Filters,
    ListParams,
    ChargeListParams,
    RefundListParams,
    CardParams,
    ChargeParams,
    CaptureParams,
    RefundParams,
)
from chargekit.exceptions import (
    ChargekitError,
    APIError,
    ConfigurationError,
    NetworkError,
)
from chargekit.__version__ import __version__

__all__ = [
    "Client",
    "Backend",
    "ChargeClient",
    "RefundClient",
    "ListIterator",
    "ClientConfig",
    "Card",
    "Charge",
    "ChargeList",
    "ListMeta",
    "Refund",
    "RefundList",
    "Transaction",
    "Filter",
    "Filters",
    "ListParams",
    "ChargeListParams",
    "RefundListParams",
    "CardParams",
    "ChargeParams",
    "CaptureParams",
    "RefundParams",
    "ChargekitError",
    "APIError",
    "ConfigurationError",
    "NetworkError",
    "__version__",
]
