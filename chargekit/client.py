"""
chargekit main client
"""

import logging
from typing import Optional

import requests

from chargekit.backend import Backend
from chargekit.charge import ChargeClient
from chargekit.models import ClientConfig
from chargekit.refund import RefundClient
from chargekit.__version__ import __version__

logger = logging.getLogger("chargekit.client")


class Client:
    """
    Entry point bundling the charges and refunds resources

    Example:
        >>> from chargekit import Client, ClientConfig, ChargeParams
        >>> client = Client(ClientConfig(api_key=os.getenv("CHARGEKIT_API_KEY")))
        >>> charge = client.charges.create(
        ...     ChargeParams(amount=1000, currency="usd", token="tok_visa")
        ... )
        >>> for refund in client.refunds.list(RefundListParams(charge=charge.id)):
        ...     print(refund.id, refund.amount)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            config: Client configuration, read from the environment if omitted
            session: Optional requests session to reuse

        Raises:
            ConfigurationError: If configuration is invalid
        """
        self.config = config or ClientConfig.from_env()
        self.backend = Backend(self.config, session=session)

        self.charges = ChargeClient(self.backend)
        self.refunds = RefundClient(self.backend)

        logger.info(f"chargekit client initialized (version {__version__})")
