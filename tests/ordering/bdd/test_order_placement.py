"""BDD tests for order placement."""

from ordering.errors import OrderingValidationError
from ordering.shipping.rate import CoverageGap
from protean.utils.globals import current_domain
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/order_placement.feature")

ADDRESS = {"full_name": "Asha Rao", "line1": "12 MG Road", "city": "Bengaluru"}


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('customer "{customer_id}" places an order to postal code "{postal_code}"'))
def place_order_to(context, error, place_order, customer_id, postal_code):
    try:
        context["order_id"] = place_order(customer_id, shipping_address={**ADDRESS, "postal_code": postal_code}).id
    except OrderingValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('a pending coverage gap exists for "{postal_code}"'))
def pending_gap_exists(postal_code):
    assert current_domain.repository_for(CoverageGap).pending_for(postal_code) is not None
