"""Human-readable order and invoice numbers.

Order numbers:   ORD-<epoch millis>-<6-digit sequence>
Invoice numbers: INV-<epoch millis>-<3 random digits>

Timestamp plus count is not unique on its own under concurrency, so every
candidate is checked against the store and the next candidate tried on a
clash. The unique constraints on ``Order.order_number`` and
``Order.invoice_number`` catch whatever slips past the check.
"""

import random
import time

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.order.order import Order

MAX_ATTEMPTS = 10


def _epoch_millis() -> int:
    return int(time.time() * 1000)


def _order_repo():
    return current_domain.repository_for(Order)


def format_order_number(millis: int, sequence: int) -> str:
    return f"ORD-{millis}-{sequence:06d}"


def format_invoice_number(millis: int, suffix: int) -> str:
    return f"INV-{millis}-{suffix:03d}"


def next_order_number() -> str:
    repo = _order_repo()
    count = repo._dao.query.all().total
    for attempt in range(MAX_ATTEMPTS):
        candidate = format_order_number(_epoch_millis(), count + 1 + attempt)
        if not repo._dao.query.filter(order_number=candidate).all().items:
            return candidate
    raise ValidationError({"order_number": ["Could not allocate a unique order number"]})


def next_invoice_number() -> str:
    repo = _order_repo()
    for _ in range(MAX_ATTEMPTS):
        candidate = format_invoice_number(_epoch_millis(), random.randint(0, 999))
        if not repo._dao.query.filter(invoice_number=candidate).all().items:
            return candidate
    raise ValidationError({"invoice_number": ["Could not allocate a unique invoice number"]})
