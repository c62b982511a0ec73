"""Shipping charge resolution by destination postal code.

Lookup rules, in order:

1. An explicit charge supplied by the caller is used verbatim.
2. A malformed or missing postal code resolves to 0 without touching the
   rate table.
3. An active rate for the code supplies the charge.
4. Otherwise the charge is 0 and a pending coverage gap is upserted for the
   code.

Must be called inside a domain context; the gap write joins whatever unit of
work is active.
"""

from dataclasses import dataclass

import structlog
from protean.utils.globals import current_domain

from ordering.config import get_settings
from ordering.shipping.rate import CoverageGap, ShippingRate

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ShippingQuote:
    charge: float
    covered: bool
    postal_code: str | None = None
    gap_recorded: bool = False


def find_active_rate(postal_code: str | None) -> ShippingRate | None:
    """Return the active rate for a postal code, or None."""
    if not get_settings().is_valid_postal_code(postal_code):
        return None
    rate = current_domain.repository_for(ShippingRate).find_by_postal_code(postal_code.strip())
    if rate is None or not rate.is_active:
        return None
    return rate


def record_coverage_gap(postal_code: str, customer_id=None, customer_email=None) -> CoverageGap:
    """Upsert the pending gap for a postal code."""
    repo = current_domain.repository_for(CoverageGap)
    gap = repo.pending_for(postal_code)
    if gap is None:
        gap = CoverageGap.open(postal_code, customer_id=customer_id, customer_email=customer_email)
    else:
        gap.record_request(customer_id=customer_id, customer_email=customer_email)
    repo.add(gap)

    logger.info(
        "Coverage gap recorded",
        postal_code=postal_code,
        request_count=gap.request_count,
    )
    return gap


def resolve_shipping_charge(
    postal_code: str | None,
    explicit_charge: float | None = None,
    customer_id=None,
    customer_email=None,
) -> ShippingQuote:
    if explicit_charge is not None:
        return ShippingQuote(charge=float(explicit_charge), covered=True, postal_code=postal_code)

    if not get_settings().is_valid_postal_code(postal_code):
        return ShippingQuote(charge=0.0, covered=False, postal_code=postal_code)

    postal_code = postal_code.strip()
    rate = find_active_rate(postal_code)
    if rate is not None:
        return ShippingQuote(charge=rate.charge, covered=True, postal_code=postal_code)

    record_coverage_gap(postal_code, customer_id=customer_id, customer_email=customer_email)
    return ShippingQuote(charge=0.0, covered=False, postal_code=postal_code, gap_recorded=True)
