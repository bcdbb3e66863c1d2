from decimal import Decimal, ROUND_HALF_UP

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

# Scales of the Numeric columns the values end up in
CENTS = Decimal("0.01")
RATE_STEP = Decimal("0.0001")


def round_money(value: Decimal) -> Decimal:
    """Round to cents, half up, matching Numeric(12, 2) storage."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def round_rate(value: Decimal) -> Decimal:
    """Round a tax rate to four places, matching Numeric(5, 4) storage."""
    return value.quantize(RATE_STEP, rounding=ROUND_HALF_UP)


class CamelModel(BaseModel):
    """Base for API payloads: camelCase on the wire, snake_case in Python."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class MessageResponse(BaseModel):
    message: str


class UploadResponse(BaseModel):
    url: str
