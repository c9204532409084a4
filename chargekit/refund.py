"""
Refunds resource

Refunds live under their charge, so every call needs ``params.charge``.
"""

from typing import Optional, Tuple, List

from chargekit.backend import Backend
from chargekit.charge import ChargeClient
from chargekit.iter import ListIterator
from chargekit.metrics import metrics_page
from chargekit.models import ListMeta, Refund, RefundList
from chargekit.params import QueryBody, RefundListParams, RefundParams


class RefundClient:
    """Refunds API"""

    def __init__(self, backend: Backend, api_key: Optional[str] = None):
        self.backend = backend
        self.api_key = api_key

    def create(self, params: RefundParams) -> Refund:
        """Refund a charge; same as ChargeClient.refund"""
        return ChargeClient(self.backend, self.api_key).refund(params)

    def get(self, refund_id: str, params: RefundParams) -> Refund:
        """
        Retrieve a refund

        Args:
            refund_id: Refund ID
            params: Refund parameters naming the charge

        Returns:
            Refund
        """
        body: QueryBody = []
        params.append_to(body)

        data = self.backend.call(
            "GET",
            f"/charges/{params.charge}/refunds/{refund_id}",
            self.api_key,
            body,
            endpoint="refunds.get",
        )
        return Refund(**data)

    def update(self, refund_id: str, params: RefundParams) -> Refund:
        """
        Update a refund's metadata

        Args:
            refund_id: Refund ID
            params: Refund parameters naming the charge

        Returns:
            Updated refund
        """
        body: QueryBody = []
        params.append_to(body)

        data = self.backend.call(
            "POST",
            f"/charges/{params.charge}/refunds/{refund_id}",
            self.api_key,
            body,
            endpoint="refunds.update",
        )
        return Refund(**data)

    def list(self, params: RefundListParams) -> ListIterator[Refund]:
        """
        List the refunds of a charge

        Args:
            params: Charge ID, filters and paging mode

        Returns:
            Iterator over refunds, fetching pages lazily
        """
        body: QueryBody = []
        params.append_to(body)
        path = f"/charges/{params.charge}/refunds"

        def fetch(query: QueryBody) -> Tuple[List[Refund], ListMeta]:
            data = self.backend.call("GET", path, self.api_key, query, endpoint="refunds.list")
            page = RefundList(**data)
            metrics_page("refunds.list")
            return page.data, ListMeta(
                has_more=page.has_more, total_count=page.total_count, url=page.url
            )

        return ListIterator(params, body, fetch)
