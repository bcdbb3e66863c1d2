from datetime import datetime
from typing import Optional

from pydantic import field_validator

from invoicely.schemas.common import CamelModel


class BusinessSettingsUpsert(CamelModel):
    user_id: Optional[int] = None  # taken from the path when posted to /business-settings/{user_id}
    business_name: str
    address: str
    city: str
    state: str
    zip_code: str
    phone: Optional[str] = None
    email: Optional[str] = None
    logo: Optional[str] = None

    @field_validator("business_name", "address", "city", "state", "zip_code")
    @classmethod
    def required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field is required")
        return v

    @field_validator("phone", "email", "logo")
    @classmethod
    def blank_is_missing(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class BusinessSettingsResponse(CamelModel):
    id: int
    user_id: int
    business_name: str
    address: str
    city: str
    state: str
    zip_code: str
    phone: Optional[str] = None
    email: Optional[str] = None
    logo: Optional[str] = None
    updated_at: Optional[datetime] = None
