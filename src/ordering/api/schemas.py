"""Pydantic request/response schemas for the Ordering API.

These are external contracts, separate from the internal Protean commands.
Responses are built from aggregates through ``from_*`` constructors.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    full_name: str | None = None
    line1: str | None = None
    line2: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    phone: str | None = None

    @classmethod
    def from_address(cls, address):
        if address is None:
            return None
        return cls(
            full_name=address.full_name,
            line1=address.line1,
            line2=address.line2,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
            phone=address.phone,
        )


class StatusResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: dict | None = None


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": {
                        "full_name": "Asha Rao",
                        "line1": "12 MG Road",
                        "city": "Bengaluru",
                        "state": "KA",
                        "postal_code": "560001",
                        "country": "IN",
                    },
                    "payment_method": "cash",
                    "tax": 0.0,
                    "notes": "Leave at the front desk",
                }
            ]
        }
    }

    shipping_address: AddressSchema
    billing_address: AddressSchema | None = None
    tax_identifier: str | None = Field(None, max_length=50)
    payment_method: str | None = None
    shipping_charge: float | None = Field(None, ge=0)
    tax: float = Field(0.0, ge=0)
    notes: str | None = None


class SetOrderStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "approved", "note": "Stock verified"}]}}

    status: str
    note: str | None = None


class OrderItemResponse(BaseModel):
    product_id: str
    name: str
    quantity: int
    unit_price: float
    line_total: float


class OrderResponse(BaseModel):
    order_id: str
    order_number: str
    customer_id: str
    customer_name: str | None = None
    customer_email: str | None = None
    items: list[OrderItemResponse]
    subtotal: float
    tax: float
    shipping: float
    total: float
    status: str
    shipping_address: AddressSchema | None = None
    billing_address: AddressSchema | None = None
    tax_identifier: str | None = None
    payment_method: str
    payment_status: str
    notes: str | None = None
    invoice_number: str | None = None
    approved_by: str | None = None
    approved_by_name: str | None = None
    approved_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order):
        return cls(
            order_id=str(order.id),
            order_number=order.order_number,
            customer_id=str(order.customer_id),
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    name=item.name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    line_total=item.line_total,
                )
                for item in order.items
            ],
            subtotal=order.subtotal,
            tax=order.tax or 0.0,
            shipping=order.shipping or 0.0,
            total=order.total,
            status=order.status,
            shipping_address=AddressSchema.from_address(order.shipping_address),
            billing_address=AddressSchema.from_address(order.billing_address),
            tax_identifier=order.tax_identifier,
            payment_method=order.payment_method,
            payment_status=order.payment_status,
            notes=order.notes,
            invoice_number=order.invoice_number,
            approved_by=str(order.approved_by) if order.approved_by else None,
            approved_by_name=order.approved_by_name,
            approved_at=order.approved_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    total: int
    page: int
    pages: int


class ActivityEntryResponse(BaseModel):
    activity_id: str
    order_id: str
    action: str
    from_status: str | None = None
    to_status: str | None = None
    performed_by: str | None = None
    performed_by_name: str | None = None
    note: str | None = None
    occurred_at: datetime

    @classmethod
    def from_activity(cls, entry):
        return cls(
            activity_id=str(entry.id),
            order_id=str(entry.order_id),
            action=entry.action,
            from_status=entry.from_status,
            to_status=entry.to_status,
            performed_by=str(entry.performed_by) if entry.performed_by else None,
            performed_by_name=entry.performed_by_name,
            note=entry.note,
            occurred_at=entry.occurred_at,
        )


class InvoiceResponse(BaseModel):
    invoice_number: str
    order: OrderResponse
    html: str


# ---------------------------------------------------------------------------
# Cart Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(..., ge=1)


class CartItemResponse(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    line_total: float


class CartResponse(BaseModel):
    customer_id: str
    items: list[CartItemResponse]
    item_count: int
    subtotal: float

    @classmethod
    def from_cart(cls, cart):
        return cls(
            customer_id=str(cart.customer_id),
            items=[
                CartItemResponse(
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    line_total=item.line_total,
                )
                for item in cart.items
            ],
            item_count=sum(item.quantity for item in cart.items),
            subtotal=cart.subtotal,
        )


class ReorderResponse(BaseModel):
    added: int
    skipped: list[str]
    cart: CartResponse


# ---------------------------------------------------------------------------
# Shipping Schemas
# ---------------------------------------------------------------------------
class AddShippingRateRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"postal_code": "560001", "charge": 5.0, "description": "Bengaluru central"}]}
    }

    postal_code: str = Field(..., max_length=20)
    charge: float = Field(..., ge=0)
    status: str | None = None
    description: str | None = Field(None, max_length=255)


class UpdateShippingRateRequest(BaseModel):
    charge: float | None = Field(None, ge=0)
    status: str | None = None
    description: str | None = Field(None, max_length=255)


class ShippingRateResponse(BaseModel):
    rate_id: str
    postal_code: str
    charge: float
    status: str
    description: str | None = None

    @classmethod
    def from_rate(cls, rate):
        return cls(
            rate_id=str(rate.id),
            postal_code=rate.postal_code,
            charge=rate.charge,
            status=rate.status,
            description=rate.description,
        )


class CoverageCheckResponse(BaseModel):
    available: bool
    postal_code: str
    charge: float


class CoverageGapResponse(BaseModel):
    gap_id: str
    postal_code: str
    customer_id: str | None = None
    customer_email: str | None = None
    status: str
    request_count: int
    first_requested_at: datetime | None = None
    last_requested_at: datetime | None = None

    @classmethod
    def from_gap(cls, gap):
        return cls(
            gap_id=str(gap.id),
            postal_code=gap.postal_code,
            customer_id=str(gap.customer_id) if gap.customer_id else None,
            customer_email=gap.customer_email,
            status=gap.status,
            request_count=gap.request_count,
            first_requested_at=gap.first_requested_at,
            last_requested_at=gap.last_requested_at,
        )
