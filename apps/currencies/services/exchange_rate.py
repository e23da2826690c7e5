"""
Exchange rate gateway backed by the ``exchange_rate`` Firebase callable function.

Every call goes to the remote service; rates are deliberately not cached
so a confirmed conversion always reflects the current rate.
"""
import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import requests
from django.conf import settings

from apps.currencies.exceptions import (
    ExchangeRateError,
    NetworkUnavailable,
    RateNotFound,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10

# Substrings of transport error text that mean "no connectivity".
NETWORK_ERROR_MARKERS = (
    'network',
    'fetch',
    'timeout',
    'timed out',
    'connection',
    'unavailable',
)

# Callable-function error statuses that mean the service is unreachable.
UNAVAILABLE_STATUSES = ('UNAVAILABLE', 'DEADLINE_EXCEEDED')


def is_network_error(exc):
    """
    Return ``True`` if *exc* describes a connectivity problem.

    Connection and timeout errors from ``requests`` always qualify; any
    other error qualifies when its text mentions one of
    :data:`NETWORK_ERROR_MARKERS`.
    """
    if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        return True
    text = str(exc).lower()
    return any(marker in text for marker in NETWORK_ERROR_MARKERS)


class ExchangeRateGateway:
    """
    Turns a ``(from, to)`` currency pair into a numeric multiplier.

    Parameters
    ----------
    url : str | None
        Endpoint of the callable function. Defaults to
        ``settings.EXCHANGE_RATE_FUNCTION_URL``.
    timeout : float | None
        Request timeout in seconds. Defaults to
        ``settings.EXCHANGE_RATE_TIMEOUT``.
    session : requests.Session | None
        Transport to use; a module-level ``requests`` call is made when
        omitted.
    """

    def __init__(self, url=None, timeout=None, session=None):
        self.url = url or settings.EXCHANGE_RATE_FUNCTION_URL
        self.timeout = timeout or getattr(settings, 'EXCHANGE_RATE_TIMEOUT', DEFAULT_TIMEOUT)
        self.session = session

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_rate(self, from_currency, to_currency):
        """
        Return the exchange rate from *from_currency* to *to_currency*.

        Identity pairs return ``Decimal('1')`` without any network call.

        Parameters
        ----------
        from_currency : str
            Source currency code (e.g. ``"USD"``).
        to_currency : str
            Target currency code.

        Returns
        -------
        Decimal
            A strictly positive rate.

        Raises
        ------
        NetworkUnavailable
            If the service cannot be reached.
        RateNotFound
            If the response has no usable rate for *to_currency*.
        ExchangeRateError
            For any other service failure.
        """
        if from_currency == to_currency:
            return Decimal('1')

        payload = self._call(from_currency, to_currency)
        return self._extract_rate(payload, from_currency, to_currency)

    def convert(self, amount, from_currency, to_currency):
        """
        Convert *amount* from *from_currency* to *to_currency*.

        Returns
        -------
        Decimal
            The converted amount, rounded to 2 decimal places.
        """
        amount = Decimal(str(amount))
        rate = self.get_rate(from_currency, to_currency)
        return (amount * rate).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _post(self, **kwargs):
        if self.session is not None:
            return self.session.post(self.url, **kwargs)
        return requests.post(self.url, **kwargs)

    def _call(self, from_currency, to_currency):
        """
        Invoke the callable function and return the decoded ``result``.
        """
        body = {
            'data': {
                'from_currency': from_currency,
                'to_currency': to_currency,
            }
        }

        try:
            response = self._post(json=body, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error(
                'Exchange rate request failed for %s -> %s: %s',
                from_currency,
                to_currency,
                exc,
            )
            if is_network_error(exc):
                raise NetworkUnavailable() from exc
            raise ExchangeRateError() from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            self._raise_for_error(response.status_code, data, from_currency, to_currency)

        if not isinstance(data, dict):
            logger.error(
                'Exchange rate response for %s -> %s is not a JSON object.',
                from_currency,
                to_currency,
            )
            raise RateNotFound()

        return data.get('result')

    def _raise_for_error(self, status_code, data, from_currency, to_currency):
        error = data.get('error') if isinstance(data, dict) else None
        error = error if isinstance(error, dict) else {}
        error_status = str(error.get('status', '')).upper()
        error_message = str(error.get('message', ''))

        logger.error(
            'Exchange rate service returned %s for %s -> %s: %s %s',
            status_code,
            from_currency,
            to_currency,
            error_status or '-',
            error_message,
        )

        if (
            status_code == 503
            or error_status in UNAVAILABLE_STATUSES
            or is_network_error(error_message)
        ):
            raise NetworkUnavailable()
        raise ExchangeRateError()

    def _extract_rate(self, result, from_currency, to_currency):
        """
        Pull ``result.data[TO].value`` out of the callable's result.
        """
        key = to_currency.upper()
        try:
            value = result['data'][key]['value']
        except (KeyError, TypeError):
            logger.warning(
                'No exchange rate for %s -> %s in service response.',
                from_currency,
                to_currency,
            )
            raise RateNotFound() from None

        if isinstance(value, bool) or not value:
            raise RateNotFound()

        try:
            rate = Decimal(str(value))
        except InvalidOperation:
            raise RateNotFound() from None

        if not rate.is_finite() or rate <= 0:
            raise RateNotFound()
        return rate
