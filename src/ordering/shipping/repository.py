"""Repositories for shipping rates and coverage gaps."""

from ordering.domain import ordering
from ordering.shipping.rate import CoverageGap, GapStatus, ShippingRate
from ordering.utils.query import fetch_all


@ordering.repository(part_of=ShippingRate)
class ShippingRateRepository:
    def find_by_postal_code(self, postal_code: str) -> ShippingRate | None:
        results = self._dao.query.filter(postal_code=postal_code).all().items
        return results[0] if results else None


@ordering.repository(part_of=CoverageGap)
class CoverageGapRepository:
    def pending_for(self, postal_code: str) -> CoverageGap | None:
        results = self._dao.query.filter(postal_code=postal_code, status=GapStatus.PENDING.value).all().items
        return results[0] if results else None

    def all_pending_for(self, postal_code: str) -> list[CoverageGap]:
        query = self._dao.query.filter(postal_code=postal_code, status=GapStatus.PENDING.value)
        return fetch_all(query.order_by("last_requested_at"))

    def all_pending(self) -> list[CoverageGap]:
        return fetch_all(self._pending().order_by("-last_requested_at"))

    def page_pending(self, page: int = 1, limit: int = 10) -> tuple[list[CoverageGap], int]:
        """Return one page of pending gaps, most recently requested first, and the total."""
        query = self._pending()
        total = query.all().total
        items = query.order_by("-last_requested_at").offset((page - 1) * limit).limit(limit).all().items
        return items, total

    def _pending(self):
        return self._dao.query.filter(status=GapStatus.PENDING.value)
