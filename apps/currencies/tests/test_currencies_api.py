import pytest
from decimal import Decimal
from unittest import mock
from django.urls import reverse
from rest_framework import status

from apps.currencies.exceptions import NetworkUnavailable, RateNotFound

GATEWAY = 'apps.currencies.services.conversion_session.ExchangeRateGateway'


# =============================================================================
# Currency listing
# =============================================================================

class TestCurrencyList:
    """Tests for GET /api/v1/currencies/"""

    def test_lists_all_currencies(self, api_client):
        response = api_client.get(reverse('currencies:currency-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['data'][0] == {
            'code': 'USD',
            'symbol': '$',
            'name': 'US Dollar',
            'label': 'USD ($)',
            'fullLabel': 'USD ($) US Dollar',
        }

    def test_search_filters(self, api_client):
        response = api_client.get(reverse('currencies:currency-list'), {'search': 'swiss'})

        assert response.status_code == status.HTTP_200_OK
        assert [row['code'] for row in response.data['data']] == ['CHF']

    def test_search_with_no_match(self, api_client):
        response = api_client.get(reverse('currencies:currency-list'), {'search': 'qqqq'})
        assert response.data['data'] == []


class TestCurrencyDetail:
    """Tests for GET /api/v1/currencies/<code>/"""

    def test_known_code(self, api_client):
        url = reverse('currencies:currency-detail', kwargs={'code': 'eur'})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['symbol'] == '€'

    def test_unknown_code(self, api_client):
        url = reverse('currencies:currency-detail', kwargs={'code': 'XYZ'})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['success'] is False
        assert response.data['error']['code'] == 'not_found'


# =============================================================================
# Conversion
# =============================================================================

class TestConvert:
    """Tests for POST /api/v1/currencies/convert/"""

    def test_convert_success(self, api_client):
        url = reverse('currencies:currency-convert')
        with mock.patch(GATEWAY) as gateway_class:
            gateway_class.return_value.get_rate.return_value = Decimal('0.92')
            response = api_client.post(
                url, {'originalCurrency': 'usd', 'targetCurrency': 'EUR'}, format='json',
            )

        assert response.status_code == status.HTTP_200_OK
        data = response.data['data']
        assert data['originalCurrency'] == 'USD'
        assert data['targetCurrency'] == 'EUR'
        assert Decimal(data['rate']) == Decimal('0.92')
        assert data['status'] == 'rate_ready'
        assert data['active'] is True
        assert data['alert'] is None
        gateway_class.return_value.get_rate.assert_called_once_with('USD', 'EUR')

    def test_missing_currency(self, api_client):
        url = reverse('currencies:currency-convert')
        with mock.patch(GATEWAY) as gateway_class:
            response = api_client.post(url, {'originalCurrency': 'USD'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['code'] == 'validation_error'
        assert response.data['error']['message'] == 'Please select both currencies'
        gateway_class.return_value.get_rate.assert_not_called()

    def test_identical_currencies(self, api_client):
        url = reverse('currencies:currency-convert')
        with mock.patch(GATEWAY):
            response = api_client.post(
                url, {'originalCurrency': 'USD', 'targetCurrency': 'USD'}, format='json',
            )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['message'] == (
            'Please select different currencies for conversion'
        )

    def test_unknown_currency(self, api_client):
        url = reverse('currencies:currency-convert')
        response = api_client.post(
            url, {'originalCurrency': 'XYZ', 'targetCurrency': 'USD'}, format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['code'] == 'validation_error'
        assert 'originalCurrency' in response.data['error']['details']

    def test_offline(self, api_client):
        url = reverse('currencies:currency-convert')
        with mock.patch(GATEWAY) as gateway_class:
            gateway_class.return_value.get_rate.side_effect = NetworkUnavailable()
            response = api_client.post(
                url, {'originalCurrency': 'USD', 'targetCurrency': 'EUR'}, format='json',
            )

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data['success'] is False
        assert response.data['error']['code'] == 'network_unavailable'
        assert response.data['error']['title'] == 'No Internet'
        assert Decimal(response.data['data']['rate']) == Decimal('1')
        assert response.data['data']['failure'] == 'offline'

    @pytest.mark.parametrize('rate, expected', [
        (Decimal('0.0000393'), '0.0000393'),
        (Decimal('0.0000004'), '0.0000004'),
    ])
    def test_small_rates_keep_full_precision(self, api_client, rate, expected):
        url = reverse('currencies:currency-convert')
        with mock.patch(GATEWAY) as gateway_class:
            gateway_class.return_value.get_rate.return_value = rate
            response = api_client.post(
                url, {'originalCurrency': 'VND', 'targetCurrency': 'USD'}, format='json',
            )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['rate'] == expected

    def test_rate_not_found(self, api_client):
        url = reverse('currencies:currency-convert')
        with mock.patch(GATEWAY) as gateway_class:
            gateway_class.return_value.get_rate.side_effect = RateNotFound()
            response = api_client.post(
                url, {'originalCurrency': 'USD', 'targetCurrency': 'EUR'}, format='json',
            )

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['error']['code'] == 'rate_not_found'
        assert response.data['data']['failure'] == 'generic'


def test_health_check(api_client):
    response = api_client.get(reverse('health-check'))
    assert response.status_code == status.HTTP_200_OK
    assert response.data['status'] == 'ok'
