"""
Allocation of a bill's items, tax and tip across guests.

Each item belongs to exactly one guest. A guest's subtotal is the sum of
their items; tax and tip are apportioned in proportion to that subtotal's
share of the bill subtotal (evenly when the bill subtotal is zero).
Nothing is rounded here; rounding happens only when figures are displayed.
"""
import logging
from decimal import Decimal

from apps.bills.services.bill import ZERO, Guest

logger = logging.getLogger(__name__)


def allocate(bill, assignment, guest_names=None):
    """
    Split *bill* between guests according to *assignment*.

    Parameters
    ----------
    bill : Bill
        The bill to split.
    assignment : dict
        ``{item_index: guest_name}`` mapping positions in ``bill.items``
        to the guest who ordered them.
    guest_names : list[str] | None
        Guests in display order. Guests listed here with no items get
        all-zero figures. Guests only named in *assignment* are appended
        in order of their first item.

    Returns
    -------
    list[Guest]
        One guest per unique name, in display order.

    Raises
    ------
    InvalidBill
        If the bill's numbers are invalid (e.g. a negative subtotal).
    """
    bill.validate()

    order = []
    for name in guest_names or ():
        if name not in order:
            order.append(name)

    for index, name in assignment.items():
        if not isinstance(index, int) or not 0 <= index < len(bill.items):
            logger.warning('Ignoring assignment of unknown item %r to %s.', index, name)

    items_by_guest = {}
    for index, item in enumerate(bill.items):
        if index not in assignment:
            continue
        name = assignment[index]
        if name not in order:
            order.append(name)
        items_by_guest.setdefault(name, []).append(item)

    guests = []
    for name in order:
        items = items_by_guest.get(name, [])
        guests.append(Guest(
            name=name,
            items=items,
            subtotal=sum((item.price for item in items), ZERO),
        ))

    _apportion(guests, bill)

    unassigned = find_unassigned_items(bill, assignment)
    if unassigned:
        logger.warning(
            '%d item(s) of %s are not assigned to any guest.',
            len(unassigned),
            bill.restaurant or 'bill',
        )
    return guests


def _apportion(guests, bill):
    if not guests:
        return
    if bill.subtotal == ZERO:
        count = Decimal(len(guests))
        for guest in guests:
            guest.tax = bill.tax / count
            guest.tip = bill.tip / count
        return
    for guest in guests:
        share = guest.subtotal / bill.subtotal
        guest.tax = bill.tax * share
        guest.tip = bill.tip * share


def find_unassigned_items(bill, assignment):
    """Return ``(index, item)`` pairs for items no guest is assigned."""
    return [
        (index, item)
        for index, item in enumerate(bill.items)
        if index not in assignment
    ]


def allocation_totals(guests):
    """Sum the unrounded figures of *guests* into a dict."""
    totals = {'subtotal': ZERO, 'tax': ZERO, 'tip': ZERO, 'total': ZERO}
    for guest in guests:
        totals['subtotal'] += guest.subtotal
        totals['tax'] += guest.tax
        totals['tip'] += guest.tip
        totals['total'] += guest.total
    return totals
