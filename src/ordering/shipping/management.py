"""Shipping rate management — commands and handler.

Adding a rate (or re-activating one) resolves every pending coverage gap for
that postal code.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from ordering.config import get_settings
from ordering.domain import ordering
from ordering.shipping.rate import CoverageGap, RateStatus, ShippingRate
from ordering.shipping.resolver import find_active_rate, record_coverage_gap

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShippingRate")
class AddShippingRate:
    postal_code = String(required=True, max_length=20)
    charge = Float(required=True, min_value=0.0)
    status = String(choices=RateStatus, default=RateStatus.ACTIVE.value)
    description = String(max_length=255)


@ordering.command(part_of="ShippingRate")
class UpdateShippingRate:
    rate_id = Identifier(required=True)
    charge = Float(min_value=0.0)
    status = String(choices=RateStatus)
    description = String(max_length=255)


@ordering.command(part_of="ShippingRate")
class CheckCoverage:
    postal_code = String(required=True, max_length=20)
    customer_id = Identifier()
    customer_email = String(max_length=255)


def _resolve_pending_gaps(postal_code: str) -> int:
    repo = current_domain.repository_for(CoverageGap)
    gaps = repo.all_pending_for(postal_code)
    for gap in gaps:
        gap.resolve()
        repo.add(gap)
    return len(gaps)


@ordering.command_handler(part_of=ShippingRate)
class ShippingRateHandler:
    @handle(AddShippingRate)
    def add_shipping_rate(self, command):
        repo = current_domain.repository_for(ShippingRate)
        if repo.find_by_postal_code(command.postal_code.strip()) is not None:
            raise ValidationError({"postal_code": ["Shipping rate already exists for this postal code"]})

        rate = ShippingRate.define(
            postal_code=command.postal_code,
            charge=command.charge,
            description=command.description,
            status=command.status or RateStatus.ACTIVE.value,
        )
        repo.add(rate)

        resolved = _resolve_pending_gaps(rate.postal_code) if rate.is_active else 0
        logger.info(
            "Shipping rate added",
            postal_code=rate.postal_code,
            charge=rate.charge,
            resolved_gaps=resolved,
        )
        return str(rate.id)

    @handle(UpdateShippingRate)
    def update_shipping_rate(self, command):
        repo = current_domain.repository_for(ShippingRate)
        rate = repo.get(command.rate_id)
        rate.revise(
            charge=command.charge,
            status=command.status,
            description=command.description,
        )
        repo.add(rate)

        resolved = _resolve_pending_gaps(rate.postal_code) if rate.is_active else 0
        logger.info(
            "Shipping rate updated",
            postal_code=rate.postal_code,
            charge=rate.charge,
            status=rate.status,
            resolved_gaps=resolved,
        )

    @handle(CheckCoverage)
    def check_coverage(self, command):
        """Return the active rate for a code, recording a gap when there is none."""
        postal_code = command.postal_code.strip()
        if not get_settings().is_valid_postal_code(postal_code):
            raise ValidationError({"postal_code": ["Postal code must be 6 digits"]})

        rate = find_active_rate(postal_code)
        if rate is not None:
            return {"available": True, "postal_code": postal_code, "charge": rate.charge}

        record_coverage_gap(
            postal_code,
            customer_id=command.customer_id,
            customer_email=command.customer_email,
        )
        return {"available": False, "postal_code": postal_code, "charge": 0.0}
