"""
Value objects for a scanned bill and the guests splitting it.

Amounts are held as ``Decimal``. Upstream payloads (JSON floats, strings)
are converted with ``Decimal(str(value))`` so no binary float error leaks
into the split.
"""
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from apps.bills.exceptions import InvalidBill

CENT = Decimal('0.01')
ZERO = Decimal('0')


def to_decimal(value, field_name='amount'):
    """
    Convert *value* to a finite ``Decimal``; ``None`` becomes zero.

    Raises
    ------
    InvalidBill
        If *value* is not a finite number.
    """
    if value is None:
        return ZERO
    if isinstance(value, bool):
        raise InvalidBill(f'{field_name} must be a number.')
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidBill(f'{field_name} must be a number.') from None
    if not amount.is_finite():
        raise InvalidBill(f'{field_name} must be a finite number.')
    return amount


def round_money(amount):
    """Round *amount* to cents, half up. Only used for display."""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class BillItem:
    name: str
    price: Decimal

    @classmethod
    def from_dict(cls, data):
        return cls(
            name=str(data.get('name') or ''),
            price=to_decimal(data.get('price'), 'Item price'),
        )


@dataclass(frozen=True)
class Bill:
    """
    A restaurant bill as produced by the receipt scanner.

    ``total`` is informational: it is expected to be close to
    ``subtotal + tax + tip`` but the split never relies on it.
    """
    restaurant: str = ''
    subtotal: Decimal = ZERO
    tax: Decimal = ZERO
    tip: Decimal = ZERO
    total: Decimal = ZERO
    items: tuple = ()
    currency_symbol: str = ''

    @classmethod
    def from_dict(cls, data):
        """
        Build a bill from the stored scan shape::

            {"restaurant", "subtotal", "tax", "tip", "total",
             "items": [{"name", "price"}], "currency_symbol"}

        ``currencySymbol`` is accepted as an alias. Missing amounts are
        zero; a missing total is ``subtotal + tax + tip``.
        """
        subtotal = to_decimal(data.get('subtotal'), 'Subtotal')
        tax = to_decimal(data.get('tax'), 'Tax')
        tip = to_decimal(data.get('tip'), 'Tip')
        total = data.get('total')
        return cls(
            restaurant=str(data.get('restaurant') or ''),
            subtotal=subtotal,
            tax=tax,
            tip=tip,
            total=subtotal + tax + tip if total is None else to_decimal(total, 'Total'),
            items=tuple(BillItem.from_dict(item) for item in data.get('items') or ()),
            currency_symbol=str(data.get('currency_symbol') or data.get('currencySymbol') or ''),
        )

    def validate(self):
        """
        Raise :class:`InvalidBill` if the bill cannot be split.
        """
        for name, value in (('Subtotal', self.subtotal), ('Tax', self.tax), ('Tip', self.tip)):
            if not isinstance(value, Decimal):
                raise InvalidBill(f'{name} must be a number.')
            if not value.is_finite():
                raise InvalidBill(f'{name} must be a finite number.')
            if value < 0:
                raise InvalidBill(f'{name} cannot be negative.')
        for item in self.items:
            if not isinstance(item.price, Decimal) or not item.price.is_finite():
                raise InvalidBill(f'Price of "{item.name}" must be a finite number.')


@dataclass
class Guest:
    """
    One person's share of a bill.

    ``total`` is always derived from the components, never stored.
    """
    name: str
    items: list = field(default_factory=list)
    subtotal: Decimal = ZERO
    tax: Decimal = ZERO
    tip: Decimal = ZERO

    @property
    def total(self):
        return self.subtotal + self.tax + self.tip

    def converted_total(self, rate):
        return self.total * Decimal(str(rate))
