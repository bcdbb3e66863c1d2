import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from invoicely.schemas.common import CamelModel, round_money


class ExpenseCategory(str, Enum):
    """Fixed expense categories, shared by the form and the AI categorizer."""
    OFFICE_SUPPLIES = "Office Supplies"
    TRAVEL = "Travel"
    SOFTWARE = "Software"
    HARDWARE = "Hardware"
    MARKETING = "Marketing"
    PROFESSIONAL_SERVICES = "Professional Services"
    UTILITIES = "Utilities"
    OTHER = "Other"


EXPENSE_CATEGORIES = [c.value for c in ExpenseCategory]


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class ExpenseCreate(CamelModel):
    user_id: int
    description: str
    amount: Decimal
    category: Optional[ExpenseCategory] = None  # AI assigned when missing
    sub_category: Optional[str] = None
    date: datetime.date

    @field_validator("description")
    @classmethod
    def description_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Description is required")
        return v

    @field_validator("amount")
    @classmethod
    def amount_positive(cls, v: Decimal) -> Decimal:
        v = round_money(v)
        if v <= 0:
            raise ValueError("Amount must be greater than 0")
        return v

    @field_validator("category", "sub_category", mode="before")
    @classmethod
    def blank_is_missing(cls, v):
        return _blank_to_none(v)


class ExpenseUpdate(CamelModel):
    description: Optional[str] = None
    amount: Optional[Decimal] = None
    category: Optional[ExpenseCategory] = None
    sub_category: Optional[str] = None
    date: Optional[datetime.date] = None

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("Description cannot be empty")
        return v

    @field_validator("amount")
    @classmethod
    def amount_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is None:
            return None
        v = round_money(v)
        if v <= 0:
            raise ValueError("Amount must be greater than 0")
        return v

    @field_validator("category", mode="before")
    @classmethod
    def blank_is_missing(cls, v):
        return _blank_to_none(v)


class ExpenseResponse(CamelModel):
    id: int
    user_id: int
    description: str
    amount: Decimal
    category: str
    sub_category: Optional[str] = None
    date: datetime.date


class CategorizeRequest(CamelModel):
    description: str

    @field_validator("description")
    @classmethod
    def description_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Description is required")
        return v


class ExpenseCategorization(CamelModel):
    """Result of the AI categorizer (or its fallback)."""
    main_category: str = ExpenseCategory.OTHER.value
    sub_category: str = "General"
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    explanation: str = ""
