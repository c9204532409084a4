"""
Pytest configuration and fixtures
"""

import pytest
from chargekit import Client, ClientConfig

BASE_URL = "https://api.example.test/v1"


@pytest.fixture
def test_config():
    """Create test configuration fixture"""
    return ClientConfig(
        api_key="sk_test_123",
        base_url=BASE_URL,
        timeout_connect=1.0,
        timeout_read=5.0,
    )


@pytest.fixture
def client(test_config):
    """Create test client fixture"""
    return Client(test_config)


def charge_json(charge_id="ch_123", **overrides):
    body = {
        "id": charge_id,
        "object": "charge",
        "livemode": False,
        "amount": 1000,
        "currency": "usd",
        "paid": True,
        "captured": True,
        "refunded": False,
        "amount_refunded": 0,
        "created": 1400000000,
        "card": {"id": "card_1", "brand": "American Express", "last4": "0005", "name": "Tester"},
        "refunds": {"object": "list", "data": [], "has_more": False, "url": f"/v1/charges/{charge_id}/refunds"},
        "balance_transaction": "txn_1",
        "metadata": {},
    }
    body.update(overrides)
    return body


def refund_json(refund_id="re_123", charge_id="ch_123", **overrides):
    body = {
        "id": refund_id,
        "object": "refund",
        "amount": 1000,
        "currency": "usd",
        "created": 1400000100,
        "charge": charge_id,
        "balance_transaction": {"id": "txn_2", "amount": -1000, "currency": "usd"},
        "metadata": {},
    }
    body.update(overrides)
    return body
