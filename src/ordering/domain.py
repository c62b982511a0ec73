"""Ordering bounded context — carts, orders, stock, shipping and invoices.

Handles the order lifecycle (CQRS aggregate with an append-only activity
ledger), per-customer shopping carts, shipping charge resolution by postal
code, stock withdrawal at placement time and on-demand invoice rendering.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ordering = Domain(name="ordering")
