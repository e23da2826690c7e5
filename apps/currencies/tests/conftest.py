import pytest
from decimal import Decimal
from unittest import mock
from rest_framework.test import APIClient

from apps.currencies.exceptions import NetworkUnavailable
from apps.currencies.services.conversion_session import ConversionSession
from apps.currencies.services.exchange_rate import ExchangeRateGateway


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


def _make_response(status_code=200, payload=None, json_error=False):
    response = mock.Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    if json_error:
        response.json.side_effect = ValueError('No JSON object could be decoded')
    else:
        response.json.return_value = payload
    return response


def _rate_payload(code, value):
    return {'result': {'data': {code: {'value': value}}}}


@pytest.fixture
def make_response():
    """Factory for stand-ins of ``requests.Response``."""
    return _make_response


@pytest.fixture
def rate_payload():
    """Factory for the body of a successful callable-function response."""
    return _rate_payload


@pytest.fixture
def gateway():
    """Gateway pointed at a fake endpoint."""
    return ExchangeRateGateway(url='https://rates.example.com/exchange_rate', timeout=5)


@pytest.fixture
def fake_gateway():
    """A gateway double returning 0.92 for every pair."""
    fake = mock.Mock()
    fake.get_rate.return_value = Decimal('0.92')
    return fake


@pytest.fixture
def offline_gateway():
    fake = mock.Mock()
    fake.get_rate.side_effect = NetworkUnavailable()
    return fake


@pytest.fixture
def session(fake_gateway):
    return ConversionSession(fake_gateway)
