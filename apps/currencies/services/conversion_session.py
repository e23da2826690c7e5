"""
Currency conversion session: pair selection, pickers and rate fetching.

A :class:`ConversionSession` owns one :class:`ConversionState` for the
lifetime of a bill-viewing session. All transitions go through the
session so the state's invariants hold after every call:

- ``rate == 1`` whenever either currency is unset or both are equal;
- ``loading`` is ``True`` only while a fetch is in flight;
- at most one picker is open.

Rate fetches are keyed by a monotonically increasing request token. A
result that arrives for a token other than the current one (the pair
changed, or the session was closed) is discarded.
"""
import enum
import logging
from dataclasses import dataclass, field
from decimal import Decimal

from apps.currencies.exceptions import (
    CurrencySelectionError,
    ExchangeRateError,
    NetworkUnavailable,
    UnknownCurrency,
)
from apps.currencies.services import currency_directory
from apps.currencies.services.exchange_rate import ExchangeRateGateway

logger = logging.getLogger(__name__)


class ConversionStatus(enum.Enum):
    IDLE = 'idle'
    PAIR_SELECTED = 'pair_selected'
    FETCHING = 'fetching'
    RATE_READY = 'rate_ready'
    FETCH_FAILED = 'fetch_failed'


class Picker(enum.Enum):
    NONE = 'none'
    ORIGINAL = 'original'
    TARGET = 'target'


class FailureKind(enum.Enum):
    OFFLINE = 'offline'
    GENERIC = 'generic'


MISSING_SELECTION = 'Please select both currencies'
IDENTICAL_SELECTION = 'Please select different currencies for conversion'


@dataclass
class ConversionState:
    original_currency: str = None
    target_currency: str = None
    rate: Decimal = Decimal('1')
    # Pair the current rate was fetched for; None until a fetch succeeds.
    rate_pair: tuple = None
    loading: bool = False
    picker: Picker = Picker.NONE
    search_queries: dict = field(
        default_factory=lambda: {Picker.ORIGINAL: '', Picker.TARGET: ''}
    )
    status: ConversionStatus = ConversionStatus.IDLE
    failure: FailureKind = None
    error_code: str = None
    alert: dict = None
    request_token: int = 0
    closed: bool = False

    @property
    def pair(self):
        return (self.original_currency, self.target_currency)

    @property
    def is_active(self):
        """
        ``True`` when converted figures should be shown: a rate has been
        fetched for exactly the currently selected, distinct pair.
        """
        return (
            self.status == ConversionStatus.RATE_READY
            and self.original_currency is not None
            and self.target_currency is not None
            and self.original_currency != self.target_currency
            and self.rate_pair == self.pair
        )

    @property
    def is_stale(self):
        """A rate is held, but for a different direction or pair."""
        return self.rate_pair is not None and self.rate_pair != self.pair

    def search_query(self, picker):
        return self.search_queries.get(picker, '')


class ConversionSession:
    """
    Drives a :class:`ConversionState` through its transitions.

    Parameters
    ----------
    gateway : ExchangeRateGateway
        Anything with a ``get_rate(from_currency, to_currency)`` method.
    state : ConversionState | None
        Initial state; a fresh ``Idle`` state when omitted.
    """

    def __init__(self, gateway, state=None):
        self.gateway = gateway
        self.state = state or ConversionState()

    # ------------------------------------------------------------------
    # Pickers
    # ------------------------------------------------------------------

    def open_picker(self, picker):
        """Open *picker*, closing the other one."""
        picker = Picker(picker)
        if picker == Picker.NONE:
            self.close_picker()
            return
        if self.state.picker not in (Picker.NONE, picker):
            self.state.search_queries[self.state.picker] = ''
        self.state.picker = picker

    def close_picker(self):
        """Close the open picker (if any) and clear its search text."""
        if self.state.picker != Picker.NONE:
            self.state.search_queries[self.state.picker] = ''
        self.state.picker = Picker.NONE

    def set_search_query(self, text):
        if self.state.picker == Picker.NONE:
            return
        self.state.search_queries[self.state.picker] = text or ''

    def picker_results(self):
        """Currencies listed by the open picker for its current search text."""
        if self.state.picker == Picker.NONE:
            return []
        return currency_directory.search(self.state.search_query(self.state.picker))

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_currency(self, picker, code):
        """
        Set the original or target currency.

        Raises
        ------
        UnknownCurrency
            If *code* is not in the currency directory.
        """
        picker = Picker(picker)
        if picker == Picker.NONE:
            raise ValueError('A currency must be selected for the original or target side.')
        if code not in currency_directory.directory:
            raise UnknownCurrency(f'{code} is not a supported currency.')

        if picker == Picker.ORIGINAL:
            changed = code != self.state.original_currency
            self.state.original_currency = code
        else:
            changed = code != self.state.target_currency
            self.state.target_currency = code

        if self.state.picker == picker:
            self.close_picker()

        if changed:
            self._invalidate_rate()
        logger.debug('Conversion pair is now %s -> %s', *self.state.pair)

    def swap(self):
        """
        Exchange the original and target currencies without refetching.

        The stored rate is kept, but it no longer matches the selected
        pair, so the conversion is inactive until it is confirmed again
        (or swapped back).
        """
        state = self.state
        state.original_currency, state.target_currency = (
            state.target_currency,
            state.original_currency,
        )
        # Anything in flight was requested for the old direction.
        if state.loading:
            state.request_token += 1
            state.loading = False
        state.status = self._resting_status()
        logger.debug('Swapped conversion pair to %s -> %s', *state.pair)

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def validate_pair(self):
        """
        Raise :class:`CurrencySelectionError` unless both currencies are
        set and distinct.
        """
        original, target = self.state.pair
        if not original or not target:
            raise CurrencySelectionError(MISSING_SELECTION)
        if original == target:
            raise CurrencySelectionError(IDENTICAL_SELECTION)

    def confirm(self):
        """
        Validate the pair and fetch its rate.

        Returns the resulting state. A confirmation while a fetch is
        already in flight is a no-op. Fetch failures never escape: they
        leave the state in ``FETCH_FAILED`` with ``rate == 1`` and an
        alert describing the failure.

        Raises
        ------
        CurrencySelectionError
            If either currency is missing or both are the same. The state
            is left untouched.
        """
        if self.state.loading:
            logger.info('Ignoring conversion confirm while a fetch is in flight.')
            return self.state

        self.validate_pair()
        token = self.begin_fetch()
        original, target = self.state.pair
        try:
            rate = self.gateway.get_rate(original, target)
        except ExchangeRateError as exc:
            self.apply_failure(token, exc)
        except Exception as exc:
            logger.exception('Unexpected error fetching rate for %s -> %s', original, target)
            self.apply_failure(token, exc)
        else:
            self.apply_rate(token, rate)
        return self.state

    def begin_fetch(self):
        """Enter ``FETCHING`` and return the token identifying this request."""
        if self.state.closed:
            raise RuntimeError('Conversion session is closed.')
        state = self.state
        state.request_token += 1
        state.loading = True
        state.status = ConversionStatus.FETCHING
        state.failure = None
        state.error_code = None
        state.alert = None
        return state.request_token

    def apply_rate(self, token, rate):
        """
        Store a fetched *rate* if *token* is still the current request.

        Returns ``True`` if the rate was applied.
        """
        if not self._is_current(token):
            return False
        state = self.state
        state.rate = Decimal(str(rate))
        state.rate_pair = state.pair
        state.loading = False
        state.status = ConversionStatus.RATE_READY
        logger.debug('Rate %s -> %s = %s', state.pair[0], state.pair[1], state.rate)
        return True

    def apply_failure(self, token, exc):
        """
        Record a failed fetch if *token* is still the current request.

        The rate falls back to 1 and the error is classified as offline
        or generic. Returns ``True`` if the failure was applied.
        """
        if not self._is_current(token):
            return False
        state = self.state
        state.rate = Decimal('1')
        state.rate_pair = None
        state.loading = False
        state.status = ConversionStatus.FETCH_FAILED
        if isinstance(exc, NetworkUnavailable):
            state.failure = FailureKind.OFFLINE
        else:
            state.failure = FailureKind.GENERIC
        reported = exc if isinstance(exc, ExchangeRateError) else ExchangeRateError()
        state.error_code = reported.code
        state.alert = reported.alert
        logger.warning(
            'Exchange rate fetch for %s -> %s failed (%s): %s',
            state.pair[0],
            state.pair[1],
            state.failure.value,
            exc,
        )
        return True

    def close(self):
        """Tear the session down; any in-flight result will be ignored."""
        self.state.closed = True
        self.state.request_token += 1
        self.state.loading = False
        self.state.picker = Picker.NONE

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _is_current(self, token):
        if self.state.closed or token != self.state.request_token:
            logger.info('Discarding exchange rate result for stale request %s.', token)
            return False
        return True

    def _resting_status(self):
        original, target = self.state.pair
        if original is None or target is None:
            return ConversionStatus.IDLE
        if self.state.rate_pair == self.state.pair:
            return ConversionStatus.RATE_READY
        return ConversionStatus.PAIR_SELECTED

    def _invalidate_rate(self):
        state = self.state
        state.rate = Decimal('1')
        state.rate_pair = None
        state.failure = None
        state.error_code = None
        state.alert = None
        if state.loading:
            state.request_token += 1
            state.loading = False
        state.status = self._resting_status()


def run_conversion(original_currency, target_currency, gateway=None):
    """
    Select *original_currency* -> *target_currency* in a fresh session and
    confirm it.

    Returns
    -------
    ConversionSession
        The session, in ``RATE_READY`` or ``FETCH_FAILED``.

    Raises
    ------
    CurrencySelectionError, UnknownCurrency
        If the pair cannot be converted.
    """
    session = ConversionSession(gateway or ExchangeRateGateway())
    if original_currency:
        session.select_currency(Picker.ORIGINAL, original_currency)
    if target_currency:
        session.select_currency(Picker.TARGET, target_currency)
    session.confirm()
    return session
