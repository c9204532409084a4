"""
List charges, first a single page, then everything
"""

import logging
import sys

from pybreaker import CircuitBreakerError

from chargekit import Client, ChargeListParams
from chargekit.exceptions import ChargekitError
from chargekit.logging_setup import setup_structured_logger


def main() -> int:
    setup_structured_logger(logging.INFO)
    client = Client()

    params = ChargeListParams(single=True)
    params.filters.add_filter("include[]", "", "total_count")
    params.filters.add_filter("limit", "", 5)

    it = client.charges.list(params)
    try:
        while it.has_more():
            charge = it.advance()
            print(f"{charge.id}  {charge.amount} {charge.currency}")
    except (ChargekitError, CircuitBreakerError) as e:
        print(f"Listing failed: {e}", file=sys.stderr)
        return 1

    meta = it.current_metadata()
    if meta is not None:
        print(f"total_count={meta.total_count} has_more={meta.has_more}")

    total = sum(charge.amount for charge in client.charges.list())
    print(f"Sum of all charges: {total}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
