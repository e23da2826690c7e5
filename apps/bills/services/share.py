"""
Hands a rendered summary to the platform share sheet.

The dispatcher is any callable ``dispatcher(message=..., title=...)``.
It signals a dismissed sheet by raising :class:`UserCancelled`; any other
exception (or a :class:`ShareFailed`) is a failed share. Neither escapes
:func:`share_summary`: the outcome carries the alert to show, if any.
"""
import enum
import logging
from dataclasses import dataclass

from apps.bills.exceptions import ShareFailed, UserCancelled
from apps.bills.services.summary_renderer import render_summary

logger = logging.getLogger(__name__)

SHARE_TITLE = 'Bill Split Details'
NO_GUESTS_ALERT = {
    'title': 'No Data',
    'message': 'There are no guests to share information about.',
}
SHARE_FAILED_ALERT = {'title': 'Error', 'message': ShareFailed.default_message}


class ShareStatus(enum.Enum):
    SHARED = 'shared'
    CANCELLED = 'cancelled'
    FAILED = 'failed'
    NOTHING_TO_SHARE = 'nothing_to_share'


@dataclass(frozen=True)
class ShareOutcome:
    status: ShareStatus
    alert: dict = None


def share_summary(dispatcher, guests, bill, conversion=None, venmo_username=None):
    if not guests:
        return ShareOutcome(ShareStatus.NOTHING_TO_SHARE, NO_GUESTS_ALERT)

    message = render_summary(guests, bill, conversion, venmo_username)
    try:
        dispatcher(message=message, title=SHARE_TITLE)
    except UserCancelled:
        logger.debug('Share sheet dismissed by the user.')
        return ShareOutcome(ShareStatus.CANCELLED)
    except Exception as exc:
        logger.error('Share failed: %s', exc)
        return ShareOutcome(ShareStatus.FAILED, SHARE_FAILED_ALERT)

    return ShareOutcome(ShareStatus.SHARED)
