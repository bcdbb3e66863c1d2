"""Business settings: one profile per user, upserted."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from invoicely.api.deps import get_db
from invoicely.schemas.business_settings import BusinessSettingsResponse, BusinessSettingsUpsert
from invoicely.services import storage

router = APIRouter()

@router.get("/{user_id}")
def get_business_settings(user_id: int, db: Session = Depends(get_db)):
    """Settings for a user, or {} when none are saved yet."""
    row = storage.get_business_settings(db, user_id)
    if not row:
        return {}
    return BusinessSettingsResponse.model_validate(row).model_dump(by_alias=True, mode="json")

@router.post("", response_model=BusinessSettingsResponse)
def save_business_settings(data: BusinessSettingsUpsert, db: Session = Depends(get_db)):
    return storage.upsert_business_settings(db, data)

@router.post("/{user_id}", response_model=BusinessSettingsResponse)
def save_business_settings_for_user(
    user_id: int,
    data: BusinessSettingsUpsert,
    db: Session = Depends(get_db),
):
    data.user_id = user_id
    return storage.upsert_business_settings(db, data)
