"""Tests for ShippingRate and CoverageGap aggregates."""

import pytest
from ordering.shipping.events import CoverageGapRecorded, CoverageGapResolved
from ordering.shipping.rate import CoverageGap, GapStatus, RateStatus, ShippingRate
from protean.exceptions import ValidationError


class TestShippingRate:
    def test_define(self):
        rate = ShippingRate.define(postal_code="560001", charge=5.0)
        assert rate.is_active
        assert rate.charge == 5.0

    @pytest.mark.parametrize("postal_code", ["5600", "56000A", "5600011", ""])
    def test_postal_code_must_be_six_digits(self, postal_code):
        with pytest.raises(ValidationError) as exc:
            ShippingRate.define(postal_code=postal_code, charge=5.0)
        assert "postal_code" in exc.value.messages

    def test_charge_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            ShippingRate.define(postal_code="560001", charge=-1.0)

    def test_revise(self):
        rate = ShippingRate.define(postal_code="560001", charge=5.0)
        rate.revise(charge=7.5, status=RateStatus.INACTIVE.value)
        assert rate.charge == 7.5
        assert not rate.is_active

    def test_revise_rejects_negative_charge(self):
        rate = ShippingRate.define(postal_code="560001", charge=5.0)
        with pytest.raises(ValidationError):
            rate.revise(charge=-2.0)


class TestCoverageGap:
    def test_open(self):
        gap = CoverageGap.open("999999", customer_id="cust-001", customer_email="a@example.com")
        assert gap.status == GapStatus.PENDING.value
        assert gap.request_count == 1
        assert isinstance(gap._events[-1], CoverageGapRecorded)

    def test_record_request_bumps_counter(self):
        gap = CoverageGap.open("999999")
        gap.record_request(customer_id="cust-002")
        assert gap.request_count == 2
        assert gap.customer_id == "cust-002"
        assert gap.last_requested_at >= gap.first_requested_at

    def test_resolve(self):
        gap = CoverageGap.open("999999")
        gap.resolve()
        assert gap.status == GapStatus.RESOLVED.value
        assert gap.resolved_at is not None
        assert isinstance(gap._events[-1], CoverageGapResolved)

    def test_resolve_twice_is_a_no_op(self):
        gap = CoverageGap.open("999999")
        gap.resolve()
        resolved_at = gap.resolved_at
        gap._events.clear()
        gap.resolve()
        assert gap.resolved_at == resolved_at
        assert gap._events == []

    def test_resolved_gap_does_not_record_requests(self):
        gap = CoverageGap.open("999999")
        gap.resolve()
        with pytest.raises(ValidationError):
            gap.record_request()
