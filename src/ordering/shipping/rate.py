"""Shipping rate table and coverage gaps.

A ``ShippingRate`` maps a postal code to a flat shipping charge. When a
customer ships to a code with no active rate, a ``CoverageGap`` is recorded
so operators can see where coverage is missing. There is at most one pending
gap per postal code; repeat requests bump its counter instead of duplicating.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.config import get_settings
from ordering.domain import ordering
from ordering.shipping.events import (
    CoverageGapRecorded,
    CoverageGapResolved,
    ShippingRateAdded,
    ShippingRateUpdated,
)


class RateStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class GapStatus(Enum):
    PENDING = "pending"
    RESOLVED = "resolved"


def _validate_postal_code(postal_code):
    if not get_settings().is_valid_postal_code(postal_code):
        raise ValidationError({"postal_code": ["Postal code must be 6 digits"]})


@ordering.aggregate
class ShippingRate:
    postal_code = String(required=True, max_length=20, unique=True)
    charge = Float(required=True, min_value=0.0)
    status = String(choices=RateStatus, default=RateStatus.ACTIVE.value)
    description = String(max_length=255)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def define(cls, postal_code, charge, description=None, status=RateStatus.ACTIVE.value):
        _validate_postal_code(postal_code)
        now = datetime.now(UTC)
        rate = cls(
            postal_code=postal_code.strip(),
            charge=charge,
            description=description,
            status=status,
            created_at=now,
            updated_at=now,
        )
        rate.raise_(
            ShippingRateAdded(
                rate_id=str(rate.id),
                postal_code=rate.postal_code,
                charge=rate.charge,
                status=rate.status,
            )
        )
        return rate

    @property
    def is_active(self) -> bool:
        return self.status == RateStatus.ACTIVE.value

    def revise(self, charge=None, status=None, description=None):
        if charge is not None:
            if charge < 0:
                raise ValidationError({"charge": ["Shipping charge cannot be negative"]})
            self.charge = charge
        if status is not None:
            self.status = RateStatus(status).value
        if description is not None:
            self.description = description
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ShippingRateUpdated(
                rate_id=str(self.id),
                postal_code=self.postal_code,
                charge=self.charge,
                status=self.status,
            )
        )


@ordering.aggregate
class CoverageGap:
    postal_code = String(required=True, max_length=20)
    customer_id = Identifier()
    customer_email = String(max_length=255)
    status = String(choices=GapStatus, default=GapStatus.PENDING.value)
    request_count = Integer(default=1, min_value=1)
    first_requested_at = DateTime()
    last_requested_at = DateTime()
    resolved_at = DateTime()

    @classmethod
    def open(cls, postal_code, customer_id=None, customer_email=None):
        now = datetime.now(UTC)
        gap = cls(
            postal_code=postal_code,
            customer_id=customer_id,
            customer_email=customer_email,
            status=GapStatus.PENDING.value,
            request_count=1,
            first_requested_at=now,
            last_requested_at=now,
        )
        gap.raise_(
            CoverageGapRecorded(
                gap_id=str(gap.id),
                postal_code=postal_code,
                customer_id=customer_id,
                request_count=1,
            )
        )
        return gap

    def record_request(self, customer_id=None, customer_email=None):
        if self.status != GapStatus.PENDING.value:
            raise ValidationError({"status": ["Only pending coverage gaps can record requests"]})
        self.request_count += 1
        self.last_requested_at = datetime.now(UTC)
        if customer_id:
            self.customer_id = customer_id
        if customer_email:
            self.customer_email = customer_email

        self.raise_(
            CoverageGapRecorded(
                gap_id=str(self.id),
                postal_code=self.postal_code,
                customer_id=customer_id,
                request_count=self.request_count,
            )
        )

    def resolve(self):
        if self.status == GapStatus.RESOLVED.value:
            return
        self.status = GapStatus.RESOLVED.value
        self.resolved_at = datetime.now(UTC)

        self.raise_(
            CoverageGapResolved(
                gap_id=str(self.id),
                postal_code=self.postal_code,
                resolved_at=self.resolved_at,
            )
        )
