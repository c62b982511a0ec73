"""Domain events for shipping rates and coverage gaps."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="ShippingRate")
class ShippingRateAdded:
    __version__ = 1

    rate_id = Identifier(required=True)
    postal_code = String(required=True)
    charge = Float(required=True)
    status = String(required=True)


@ordering.event(part_of="ShippingRate")
class ShippingRateUpdated:
    __version__ = 1

    rate_id = Identifier(required=True)
    postal_code = String(required=True)
    charge = Float(required=True)
    status = String(required=True)


@ordering.event(part_of="CoverageGap")
class CoverageGapRecorded:
    """A customer asked to ship to a postal code with no active rate."""

    __version__ = 1

    gap_id = Identifier(required=True)
    postal_code = String(required=True)
    customer_id = Identifier()
    request_count = Integer(required=True)


@ordering.event(part_of="CoverageGap")
class CoverageGapResolved:
    """Coverage was added for a previously uncovered postal code."""

    __version__ = 1

    gap_id = Identifier(required=True)
    postal_code = String(required=True)
    resolved_at = DateTime(required=True)
