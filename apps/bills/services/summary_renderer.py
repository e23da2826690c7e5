"""
Plain-text bill split summary for sharing (SMS, chat apps, email).

Rendering is pure: the same guests, bill, conversion and Venmo username
always produce the same text.
"""
from decimal import ROUND_HALF_UP, Decimal

from apps.bills.services.bill import ZERO, round_money
from apps.currencies.services.currency_directory import DEFAULT_SYMBOL, lookup

NO_GUESTS_MESSAGE = 'No guests have been added yet.'
SIGNATURE = 'Sent via Flick2Split'
VENMO_URL = 'https://venmo.com/u/{username}'
RULE = '-' * 30


def format_money(amount, symbol):
    """``format_money(Decimal('4.8'), '$') -> '$4.80'``"""
    return f'{symbol}{round_money(amount)}'


def format_rate(rate):
    return str(Decimal(str(rate)).quantize(Decimal('0.0001'), rounding=ROUND_HALF_UP))


def _symbol_for(code, bill):
    entry = lookup(code)
    if entry is not None:
        return entry.symbol
    return bill.currency_symbol or DEFAULT_SYMBOL


def render_summary(guests, bill, conversion=None, venmo_username=None):
    """
    Render the shareable summary of a split.

    Parameters
    ----------
    guests : list[Guest]
        Allocated guests, in display order.
    bill : Bill
        The bill being split.
    conversion : ConversionState | None
        Converted amounts are shown only when the conversion is active.
    venmo_username : str | None
        Adds a Venmo payment link when set.

    Returns
    -------
    str
        The summary text, or :data:`NO_GUESTS_MESSAGE` when there are no
        guests.
    """
    if not guests:
        return NO_GUESTS_MESSAGE

    converted = conversion is not None and conversion.is_active
    if converted:
        rate = Decimal(str(conversion.rate))
        native = _symbol_for(conversion.original_currency, bill)
        target = _symbol_for(conversion.target_currency, bill)
    else:
        rate = Decimal('1')
        native = bill.currency_symbol or DEFAULT_SYMBOL
        target = native

    def requested(amount):
        # Amount in the currency guests are asked to pay in.
        return format_money(amount * rate, target)

    split_total = sum((guest.total for guest in guests), ZERO)

    out = ['BILL SPLIT SUMMARY\n\n']

    out.append('PAYMENT REQUESTS\n')
    out.append(f'{RULE}\n\n')
    for guest in guests:
        out.append(f'{guest.name} owes {requested(guest.total)}\n')

    out.append('\nBILL DETAILS\n')
    out.append(f'{RULE}\n')
    for label, amount in (
        ('Subtotal', bill.subtotal),
        ('Tax', bill.tax),
        ('Tip', bill.tip),
        ('Total', split_total),
    ):
        if converted:
            out.append(f'{label}: {format_money(amount, native)} ({requested(amount)})\n')
        else:
            out.append(f'{label}: {format_money(amount, native)}\n')
    out.append(f'Split between {len(guests)} people\n\n')

    if converted:
        out.append('CURRENCY CONVERSION\n')
        out.append(f'{RULE}\n')
        out.append(
            f'{conversion.original_currency} to {conversion.target_currency} '
            f'@ {format_rate(rate)}\n\n'
        )

    out.append('DETAILED BREAKDOWN\n')
    out.append(f'{RULE}\n\n')
    for guest in guests:
        out.append(f"{guest.name}'s TOTAL: {requested(guest.total)}\n")
        out.append('   Items:\n')
        for item in guest.items:
            out.append(f'   - {item.name}: {format_money(item.price, native)}\n')
        out.append(f'   Subtotal: {format_money(guest.subtotal, native)}\n')
        out.append(f'   Tax: {format_money(guest.tax, native)}\n')
        out.append(f'   Tip: {format_money(guest.tip, native)}\n')
        if converted:
            out.append(f'   Original Total: {format_money(guest.total, native)}\n')
            out.append(f'   Converted Total: {requested(guest.total)}\n\n')
        else:
            out.append(f'   Total: {format_money(guest.total, native)}\n\n')

    out.append(f'{RULE}\n')
    if venmo_username:
        out.append(f'Pay me on Venmo: {VENMO_URL.format(username=venmo_username)}\n')
    else:
        out.append('Please Venmo or pay in cash!\n')
    out.append(SIGNATURE)

    return ''.join(out)
