"""Error taxonomy for the Ordering domain.

Business-rule failures extend Protean's ``ValidationError`` so they abort the
unit of work before anything is persisted and surface to callers as 400s.
Each error carries a stable ``category`` the HTTP layer exposes verbatim.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class OrderingValidationError(ValidationError):
    """Base for business-rule violations raised by the ordering core."""

    category = "validation_error"
    # Set by placement when a coverage gap was found before the rejection.
    uncovered_postal_code = None

    def __init__(self, field: str, message: str):
        self.message = message
        super().__init__({field: [message]})


class EmptyCartError(OrderingValidationError):
    category = "empty_cart"

    def __init__(self, customer_id: str):
        self.customer_id = customer_id
        super().__init__("cart", "Cart is empty")


class ProductUnavailableError(OrderingValidationError):
    category = "product_unavailable"

    def __init__(self, product_name: str):
        self.product_name = product_name
        super().__init__("items", f"Product {product_name} is not available")


class InsufficientStockError(OrderingValidationError):
    category = "insufficient_stock"

    def __init__(self, product_name: str, available: int, requested: int):
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__("items", f"Insufficient stock for {product_name}")


class InvalidStatusTransitionError(OrderingValidationError):
    category = "invalid_status_transition"

    def __init__(self, from_status: str, to_status: str):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__("status", f"Cannot transition from {from_status} to {to_status}")


class NotFoundError(ObjectNotFoundError):
    """An order, product or cart line that does not exist (or is hidden from the requester)."""

    category = "not_found"

    def __init__(self, kind: str, identifier: str):
        self.kind = kind
        self.identifier = identifier
        self.message = f"{kind} not found"
        super().__init__({"_entity": [f"{kind} with id {identifier} does not exist"]})


class AuthorizationError(Exception):
    """The requester's role or ownership does not permit the operation."""

    category = "forbidden"

    def __init__(self, message: str = "Access denied"):
        self.message = message
        super().__init__(message)


class RenderingFailure(Exception):
    """The PDF engine could not produce a document. Recovered with an HTML fallback."""

    category = "rendering_failure"

    def __init__(self, engine: str, reason: str):
        self.engine = engine
        self.reason = reason
        super().__init__(f"PDF engine '{engine}' failed: {reason}")


class NotificationFailure(Exception):
    """The confirmation message could not be dispatched. Logged, never surfaced."""

    category = "notification_failure"

    def __init__(self, recipient: str, reason: str):
        self.recipient = recipient
        self.reason = reason
        super().__init__(f"Notification to {recipient} failed: {reason}")
