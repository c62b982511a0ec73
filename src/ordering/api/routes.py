"""FastAPI routes for the Ordering domain — orders, invoices, carts and shipping."""

import json
import math

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, Response
from protean.utils.globals import current_domain

from ordering.access import Requester, require_privileged, require_superadmin
from ordering.activity.ledger import activities_for
from ordering.api.dependencies import get_requester
from ordering.api.schemas import (
    ActivityEntryResponse,
    AddShippingRateRequest,
    AddToCartRequest,
    CartResponse,
    CoverageCheckResponse,
    CoverageGapResponse,
    InvoiceResponse,
    OrderListResponse,
    OrderResponse,
    PlaceOrderRequest,
    ReorderResponse,
    SetOrderStatusRequest,
    ShippingRateResponse,
    StatusResponse,
    UpdateCartItemRequest,
    UpdateShippingRateRequest,
)
from ordering.cart.cart import ShoppingCart
from ordering.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem
from ordering.cart.reorder import Reorder
from ordering.config import get_settings
from ordering.errors import NotFoundError
from ordering.invoice.renderer import render_invoice
from ordering.order.deletion import DeleteOrder
from ordering.order.order import Order, parse_status
from ordering.order.placement import PlaceOrder, submit_order
from ordering.order.status import SetOrderStatus
from ordering.shipping.management import AddShippingRate, CheckCoverage, UpdateShippingRate
from ordering.shipping.rate import CoverageGap, ShippingRate


def _visible_order(order_id: str, requester: Requester) -> Order:
    """Load an order; other customers' orders look like they do not exist."""
    order = current_domain.repository_for(Order).fetch(order_id)
    if not requester.can_access(order.customer_id):
        raise NotFoundError("Order", order_id)
    return order


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, requester: Requester = Depends(get_requester)) -> OrderResponse:
    command = PlaceOrder(
        customer_id=requester.user_id,
        customer_name=requester.name,
        customer_email=requester.email,
        shipping_address=json.dumps(body.shipping_address.model_dump(exclude_none=True)),
        billing_address=(json.dumps(body.billing_address.model_dump(exclude_none=True)) if body.billing_address else None),
        tax_identifier=body.tax_identifier,
        payment_method=body.payment_method or "cash",
        shipping_charge=body.shipping_charge,
        tax=body.tax,
        notes=body.notes,
    )
    order_id = submit_order(command)
    order = current_domain.repository_for(Order).fetch(order_id)
    return OrderResponse.from_order(order)


@order_router.get("", response_model=OrderListResponse)
async def list_orders(
    status: str | None = None,
    customer_id: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    requester: Requester = Depends(get_requester),
) -> OrderListResponse:
    """Newest first. Only privileged callers may look at other customers' orders."""
    if status:
        status = parse_status(status).value
    if not requester.is_privileged:
        customer_id = requester.user_id
    limit = min(limit, get_settings().orders_page_size_max)

    orders, total = current_domain.repository_for(Order).page(
        customer_id=customer_id,
        status=status,
        page=page,
        limit=limit,
    )
    return OrderListResponse(
        orders=[OrderResponse.from_order(order) for order in orders],
        total=total,
        page=page,
        pages=math.ceil(total / limit) if total else 0,
    )


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, requester: Requester = Depends(get_requester)) -> OrderResponse:
    return OrderResponse.from_order(_visible_order(order_id, requester))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def set_order_status(
    order_id: str,
    body: SetOrderStatusRequest,
    requester: Requester = Depends(get_requester),
) -> OrderResponse:
    require_privileged(requester)
    command = SetOrderStatus(
        order_id=order_id,
        status=body.status,
        changed_by=requester.user_id,
        changed_by_name=requester.display_name,
        note=body.note,
    )
    current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(current_domain.repository_for(Order).fetch(order_id))


@order_router.get("/{order_id}/activity-logs", response_model=list[ActivityEntryResponse])
async def get_activity_logs(order_id: str, requester: Requester = Depends(get_requester)) -> list[ActivityEntryResponse]:
    order = current_domain.repository_for(Order).fetch(order_id)
    return [ActivityEntryResponse.from_activity(entry) for entry in activities_for(order, requester)]


@order_router.delete("/{order_id}", response_model=StatusResponse)
async def delete_order(order_id: str, requester: Requester = Depends(get_requester)) -> StatusResponse:
    require_superadmin(requester)
    current_domain.process(DeleteOrder(order_id=order_id, deleted_by=requester.user_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Invoice Router
# ---------------------------------------------------------------------------
invoice_router = APIRouter(prefix="/invoices", tags=["invoices"])


@invoice_router.get("/{order_id}", response_model=InvoiceResponse)
async def get_invoice(order_id: str, requester: Requester = Depends(get_requester)) -> InvoiceResponse:
    document = render_invoice(order_id, requester)
    return InvoiceResponse(
        invoice_number=document.invoice_number,
        order=OrderResponse.from_order(document.order),
        html=document.html,
    )


@invoice_router.get("/{order_id}/html", response_class=HTMLResponse)
async def get_invoice_html(order_id: str, requester: Requester = Depends(get_requester)) -> HTMLResponse:
    document = render_invoice(order_id, requester, printable=True)
    return HTMLResponse(content=document.html)


@invoice_router.get("/{order_id}/download")
async def download_invoice(order_id: str, requester: Requester = Depends(get_requester)) -> Response:
    """PDF attachment, or the HTML document as an attachment when the engine fails."""
    document = render_invoice(order_id, requester, include_pdf=True)
    if document.pdf_bytes is not None:
        return Response(
            content=document.pdf_bytes,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{document.filename_stem}.pdf"'},
        )
    return Response(
        content=document.html,
        media_type="text/html",
        headers={"Content-Disposition": f'attachment; filename="{document.filename_stem}.html"'},
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _cart_of(requester: Requester) -> ShoppingCart:
    return current_domain.repository_for(ShoppingCart).for_customer(requester.user_id)


@cart_router.get("", response_model=CartResponse)
async def get_cart(requester: Requester = Depends(get_requester)) -> CartResponse:
    return CartResponse.from_cart(_cart_of(requester))


@cart_router.post("/items", status_code=201, response_model=CartResponse)
async def add_cart_item(body: AddToCartRequest, requester: Requester = Depends(get_requester)) -> CartResponse:
    command = AddToCart(
        customer_id=requester.user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(_cart_of(requester))


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str,
    body: UpdateCartItemRequest,
    requester: Requester = Depends(get_requester),
) -> CartResponse:
    command = UpdateCartItem(
        customer_id=requester.user_id,
        product_id=product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(_cart_of(requester))


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(product_id: str, requester: Requester = Depends(get_requester)) -> CartResponse:
    current_domain.process(
        RemoveFromCart(customer_id=requester.user_id, product_id=product_id),
        asynchronous=False,
    )
    return CartResponse.from_cart(_cart_of(requester))


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(requester: Requester = Depends(get_requester)) -> CartResponse:
    current_domain.process(ClearCart(customer_id=requester.user_id), asynchronous=False)
    return CartResponse.from_cart(_cart_of(requester))


@cart_router.post("/reorder/{order_id}", response_model=ReorderResponse)
async def reorder(order_id: str, requester: Requester = Depends(get_requester)) -> ReorderResponse:
    result = current_domain.process(
        Reorder(customer_id=requester.user_id, order_id=order_id),
        asynchronous=False,
    )
    return ReorderResponse(
        added=result["added"],
        skipped=result["skipped"],
        cart=CartResponse.from_cart(_cart_of(requester)),
    )


# ---------------------------------------------------------------------------
# Shipping Router
# ---------------------------------------------------------------------------
shipping_router = APIRouter(prefix="/shipping", tags=["shipping"])


@shipping_router.post("/rates", status_code=201, response_model=ShippingRateResponse)
async def add_shipping_rate(
    body: AddShippingRateRequest,
    requester: Requester = Depends(get_requester),
) -> ShippingRateResponse:
    require_privileged(requester)
    command = AddShippingRate(
        postal_code=body.postal_code,
        charge=body.charge,
        status=body.status or "active",
        description=body.description,
    )
    rate_id = current_domain.process(command, asynchronous=False)
    return ShippingRateResponse.from_rate(current_domain.repository_for(ShippingRate).get(rate_id))


@shipping_router.put("/rates/{rate_id}", response_model=ShippingRateResponse)
async def update_shipping_rate(
    rate_id: str,
    body: UpdateShippingRateRequest,
    requester: Requester = Depends(get_requester),
) -> ShippingRateResponse:
    require_privileged(requester)
    command = UpdateShippingRate(
        rate_id=rate_id,
        charge=body.charge,
        status=body.status,
        description=body.description,
    )
    current_domain.process(command, asynchronous=False)
    return ShippingRateResponse.from_rate(current_domain.repository_for(ShippingRate).get(rate_id))


@shipping_router.get("/rates/{postal_code}", response_model=ShippingRateResponse)
async def get_shipping_rate(postal_code: str) -> ShippingRateResponse:
    rate = current_domain.repository_for(ShippingRate).find_by_postal_code(postal_code)
    if rate is None or not rate.is_active:
        raise NotFoundError("Shipping rate", postal_code)
    return ShippingRateResponse.from_rate(rate)


@shipping_router.get("/coverage/{postal_code}", response_model=CoverageCheckResponse)
async def check_coverage(postal_code: str, requester: Requester = Depends(get_requester)) -> CoverageCheckResponse:
    """Look up a code; an uncovered code is recorded as a coverage gap."""
    result = current_domain.process(
        CheckCoverage(
            postal_code=postal_code,
            customer_id=requester.user_id,
            customer_email=requester.email,
        ),
        asynchronous=False,
    )
    return CoverageCheckResponse(**result)


@shipping_router.get("/coverage-gaps", response_model=list[CoverageGapResponse])
async def list_coverage_gaps(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1),
    requester: Requester = Depends(get_requester),
) -> list[CoverageGapResponse]:
    """Pending gaps, most recently requested first. Paged like the order list."""
    require_privileged(requester)
    limit = min(limit, get_settings().orders_page_size_max)
    gaps, _total = current_domain.repository_for(CoverageGap).page_pending(page=page, limit=limit)
    return [CoverageGapResponse.from_gap(gap) for gap in gaps]
