"""Service-layer error taxonomy.

Services raise these instead of ``HTTPException`` so that callers other than
the HTTP layer (scripts, tests) see the same outcomes. ``status_code`` is the
HTTP status the API renders for each error.
"""


class ServiceError(Exception):
    """Base class for every caller-visible service failure."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Malformed or missing input."""
    status_code = 400
    default_message = "Invalid request"


class NotFound(ServiceError):
    """Referenced entity does not exist."""
    status_code = 404
    default_message = "Not found"


class ProductNotFound(NotFound):
    default_message = "Product not found"


class UserNotFound(NotFound):
    default_message = "User not found"


class OwnerNotRegistered(ServiceError):
    """Product owner has no user record."""
    status_code = 404
    default_message = "Owner is not a registered user"


class PermissionDenied(ServiceError):
    status_code = 403
    default_message = "You are not allowed to perform this action"


class SelfInteractionForbidden(ServiceError):
    """Owners may not vote on or report their own product."""
    status_code = 403
    default_message = "You cannot interact with your own product"


class AlreadyActed(ServiceError):
    """Principal is already present in the ledger."""
    status_code = 400
    default_message = "You have already performed this action"


class QuotaExceeded(ServiceError):
    """Unsubscribed owner reached the free submission quota."""
    status_code = 403
    default_message = "Free submission limit reached. Subscribe to add more products."


class CouponInvalid(ServiceError):
    """Coupon cannot be redeemed. The API does not say why."""
    status_code = 400
    default_message = "Invalid or expired coupon code"


class CouponNotFound(CouponInvalid):
    pass


class CouponExpired(CouponInvalid):
    pass


class PaymentProcessingError(ServiceError):
    """Payment processor rejected the request or could not be reached."""
    status_code = 502
    default_message = "Payment processing failed"


class StoreUnavailable(ServiceError):
    status_code = 500
    default_message = "Store unavailable"


class PaymentRequired(ServiceError):
    """Subscription requested without a completed payment."""
    status_code = 403
    default_message = "Payment required to subscribe"
