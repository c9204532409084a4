"""
Create, capture and refund a charge
"""

import os
from chargekit import Client, ClientConfig, CardParams, ChargeParams, CaptureParams, RefundParams


def main():
    config = ClientConfig(
        api_key=os.getenv("CHARGEKIT_API_KEY"),
        base_url=os.getenv("CHARGEKIT_API_BASE", "https://api.stripe.com/v1"),
    )
    client = Client(config)

    print("Authorizing charge...")
    charge = client.charges.create(
        ChargeParams(
            amount=1004,
            currency="usd",
            card=CardParams(number="378282246310005", month="06", year="30"),
            description="example order",
            no_capture=True,
        )
    )
    print(f"  ID: {charge.id} captured={charge.captured}")

    print("\nCapturing 554...")
    charge = client.charges.capture(charge.id, CaptureParams(amount=554))
    print(f"  captured={charge.captured} amount_refunded={charge.amount_refunded}")

    print("\nRefunding 253...")
    refund = client.charges.refund(RefundParams(charge=charge.id, amount=253))
    print(f"  Refund {refund.id}: {refund.amount} {refund.currency}")


if __name__ == "__main__":
    main()
