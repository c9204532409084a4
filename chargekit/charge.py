"""
Charges resource
"""

import logging
from typing import Optional, Tuple, List

from chargekit.backend import Backend
from chargekit.iter import ListIterator
from chargekit.metrics import metrics_page
from chargekit.models import Charge, ChargeList, ListMeta, Refund
from chargekit.params import (
    CaptureParams,
    ChargeListParams,
    ChargeParams,
    QueryBody,
    RefundParams,
)

logger = logging.getLogger("chargekit.charge")


class ChargeClient:
    """
    Charges API

    Example:
        >>> charges = ChargeClient(backend)
        >>> charge = charges.create(ChargeParams(amount=1000, currency="usd", token="tok_visa"))
        >>> charges.capture(charge.id, CaptureParams(amount=500))
    """

    def __init__(self, backend: Backend, api_key: Optional[str] = None):
        self.backend = backend
        self.api_key = api_key

    def create(self, params: ChargeParams) -> Charge:
        """
        Create a charge

        Args:
            params: Charge data

        Returns:
            Created charge
        """
        body: QueryBody = []
        params.append_to(body)

        data = self.backend.call("POST", "/charges", self.api_key, body, endpoint="charges.create")
        charge = Charge(**data)
        logger.info(f"Charge {charge.id} created")
        return charge

    def get(self, charge_id: str, params: Optional[ChargeParams] = None) -> Charge:
        """
        Retrieve a charge

        Args:
            charge_id: Charge ID
            params: Optional extra parameters

        Returns:
            Charge
        """
        body: QueryBody = []
        if params is not None:
            params.append_to(body)

        data = self.backend.call(
            "GET", f"/charges/{charge_id}", self.api_key, body, endpoint="charges.get"
        )
        return Charge(**data)

    def update(self, charge_id: str, params: ChargeParams) -> Charge:
        """
        Update a charge's description or metadata

        Args:
            charge_id: Charge ID
            params: Fields to update

        Returns:
            Updated charge
        """
        body: QueryBody = []
        params.append_to(body)

        data = self.backend.call(
            "POST", f"/charges/{charge_id}", self.api_key, body, endpoint="charges.update"
        )
        return Charge(**data)

    def capture(self, charge_id: str, params: Optional[CaptureParams] = None) -> Charge:
        """
        Capture an uncaptured charge

        A partial capture releases the remainder, which then shows up as
        ``amount_refunded``.

        Args:
            charge_id: Charge ID
            params: Optional partial amount, fee and receipt email

        Returns:
            Captured charge
        """
        body: QueryBody = []
        if params is not None:
            params.append_to(body)

        data = self.backend.call(
            "POST", f"/charges/{charge_id}/capture", self.api_key, body, endpoint="charges.capture"
        )
        return Charge(**data)

    def refund(self, params: RefundParams) -> Refund:
        """
        Refund a charge, fully or partially

        Args:
            params: Refund data; ``params.charge`` selects the charge

        Returns:
            Created refund
        """
        body: QueryBody = []
        params.append_to(body)

        data = self.backend.call(
            "POST", f"/charges/{params.charge}/refunds", self.api_key, body, endpoint="refunds.create"
        )
        refund = Refund(**data)
        logger.info(f"Refund {refund.id} created for charge {params.charge}")
        return refund

    def list(self, params: Optional[ChargeListParams] = None) -> ListIterator[Charge]:
        """
        List charges

        Args:
            params: Optional filters and paging mode

        Returns:
            Iterator over charges, fetching pages lazily
        """
        params = params or ChargeListParams()
        body: QueryBody = []
        params.append_to(body)

        def fetch(query: QueryBody) -> Tuple[List[Charge], ListMeta]:
            data = self.backend.call("GET", "/charges", self.api_key, query, endpoint="charges.list")
            page = ChargeList(**data)
            metrics_page("charges.list")
            return page.data, ListMeta(
                has_more=page.has_more, total_count=page.total_count, url=page.url
            )

        return ListIterator(params, body, fetch)
