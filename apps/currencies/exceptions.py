"""Domain exceptions for the currencies app."""
from rest_framework import status

from common.exceptions import ServiceError, ValidationError


class CurrencySelectionError(ValidationError):
    """Conversion requested with a missing or identical currency pair."""
    default_message = 'Please select both currencies'


class UnknownCurrency(ValidationError):
    """Currency code is not in the directory and cannot be selected."""
    code = 'unknown_currency'
    default_message = 'This currency is not supported.'


class ExchangeRateError(ServiceError):
    """The exchange rate service could not produce a usable rate."""
    code = 'exchange_rate_error'
    status_code = status.HTTP_502_BAD_GATEWAY
    title = 'Conversion Error'
    default_message = 'Unable to get exchange rate. Please try again.'


class NetworkUnavailable(ExchangeRateError):
    """The rate service could not be reached (offline, timeout, unavailable)."""
    code = 'network_unavailable'
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    title = 'No Internet'
    default_message = (
        'Currency conversion requires an internet connection. '
        'Please check your connection and try again.'
    )


class RateNotFound(ExchangeRateError):
    """The response carried no usable rate for the requested pair."""
    code = 'rate_not_found'
    default_message = 'Conversion is unavailable for this currency pair.'
