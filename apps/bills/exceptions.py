"""Domain exceptions for the bills app."""
from common.exceptions import ServiceError, ValidationError


class InvalidBill(ValidationError):
    """Bill carries numbers that cannot be split (negative, non-numeric)."""
    code = 'invalid_bill'
    default_message = 'The bill contains invalid amounts.'


class ShareError(ServiceError):
    """The OS-level share action did not complete."""
    code = 'share_error'
    default_message = 'Failed to share bill details'


class UserCancelled(ShareError):
    """The user dismissed the share sheet. Not reported as an error."""
    code = 'share_cancelled'


class ShareFailed(ShareError):
    """The share call was rejected or raised."""
    code = 'share_failed'
