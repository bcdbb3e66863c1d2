from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from invoicely.schemas.common import CamelModel, round_money, round_rate


class InvoiceStatus(str, Enum):
    """Allowed invoice states."""
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class InvoiceTemplate(str, Enum):
    MODERN = "modern"
    PROFESSIONAL = "professional"
    CREATIVE = "creative"


class LineItemCreate(CamelModel):
    """One billable row. `amount` is accepted for compatibility and recomputed.

    Quantity and unit price are rounded to cents first, so a value that rounds
    to 0 is rejected.
    """
    description: Optional[str] = ""
    quantity: Decimal
    unit_price: Decimal
    amount: Optional[Decimal] = None

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, v: Optional[str]) -> str:
        return (v or "").strip()

    @field_validator("quantity")
    @classmethod
    def quantity_positive(cls, v: Decimal) -> Decimal:
        v = round_money(v)
        if v <= 0:
            raise ValueError("Quantity must be greater than 0")
        return v

    @field_validator("unit_price")
    @classmethod
    def unit_price_positive(cls, v: Decimal) -> Decimal:
        v = round_money(v)
        if v <= 0:
            raise ValueError("Unit price must be greater than 0")
        return v


class InvoiceCreate(CamelModel):
    user_id: int
    client_name: str
    invoice_number: Optional[str] = None  # generated when missing
    description: Optional[str] = None
    status: InvoiceStatus = InvoiceStatus.PENDING
    due_date: date
    template: InvoiceTemplate = InvoiceTemplate.MODERN
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=1)
    line_items: List[LineItemCreate] = Field(min_length=1)

    @field_validator("tax_rate")
    @classmethod
    def tax_rate_scale(cls, v: Decimal) -> Decimal:
        return round_rate(v)

    @field_validator("client_name")
    @classmethod
    def client_name_required(cls, v: str) -> str:
        v = " ".join(v.split())
        if not v:
            raise ValueError("Client name is required")
        return v

    @field_validator("invoice_number")
    @classmethod
    def blank_number_is_missing(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class InvoiceUpdate(CamelModel):
    """Partial update. When `line_items` is given it replaces the whole set."""
    client_name: Optional[str] = None
    invoice_number: Optional[str] = None
    description: Optional[str] = None
    status: Optional[InvoiceStatus] = None
    due_date: Optional[date] = None
    template: Optional[InvoiceTemplate] = None
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=1)
    line_items: Optional[List[LineItemCreate]] = Field(default=None, min_length=1)

    @field_validator("tax_rate")
    @classmethod
    def tax_rate_scale(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return None if v is None else round_rate(v)

    @field_validator("client_name", "invoice_number")
    @classmethod
    def not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = " ".join(v.split())
        if not v:
            raise ValueError("Field cannot be empty")
        return v


class InvoiceStatusUpdate(CamelModel):
    status: InvoiceStatus


class LineItemResponse(CamelModel):
    id: int
    description: str
    quantity: Decimal
    unit_price: Decimal
    amount: Decimal


class InvoiceResponse(CamelModel):
    id: int
    user_id: int
    client_name: str
    invoice_number: str
    description: Optional[str] = None
    status: str
    due_date: date
    template: str
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    amount: Decimal
    created_at: Optional[datetime] = None
    line_items: List[LineItemResponse] = []


class DescriptionRequest(CamelModel):
    client_name: str
    amount: Decimal = Decimal("0")
    services: List[str] = []


class DescriptionResponse(CamelModel):
    description: str


class TemplateInfo(CamelModel):
    id: str
    name: str
    description: str
