import pytest
from decimal import Decimal
from rest_framework.test import APIClient

from apps.bills.services.allocation import allocate
from apps.bills.services.bill import Bill
from apps.currencies.services.conversion_session import ConversionState, ConversionStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture(autouse=True)
def clear_throttle_cache():
    """Reset the anonymous throttle counters between tests."""
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def bill_data():
    """A scanned bill in the stored shape."""
    return {
        'restaurant': "Luigi's",
        'subtotal': 100.0,
        'tax': 8.0,
        'tip': 15.0,
        'total': 123.0,
        'items': [
            {'name': 'Burger', 'price': 60.0},
            {'name': 'Salad', 'price': 40.0},
        ],
        'currency_symbol': '$',
    }


@pytest.fixture
def bill(bill_data):
    return Bill.from_dict(bill_data)


@pytest.fixture
def guests(bill):
    """Alice had the burger, Bob the salad."""
    return allocate(bill, {0: 'Alice', 1: 'Bob'}, guest_names=['Alice', 'Bob'])


@pytest.fixture
def usd_to_eur():
    """An active USD -> EUR conversion at 0.92."""
    return ConversionState(
        original_currency='USD',
        target_currency='EUR',
        rate=Decimal('0.92'),
        rate_pair=('USD', 'EUR'),
        status=ConversionStatus.RATE_READY,
    )


@pytest.fixture
def split_payload(bill_data):
    """Request body for POST /api/v1/bills/split/."""
    return {
        'bill': bill_data,
        'guests': [
            {'name': 'Alice', 'items': [0]},
            {'name': 'Bob', 'items': [1]},
        ],
    }
