"""Dashboard summary cards and the invoice template catalogue."""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from invoicely.api.deps import get_db
from invoicely.schemas.dashboard import DashboardSummary
from invoicely.schemas.invoice import TemplateInfo
from invoicely.services.dashboard_service import get_dashboard_summary
from invoicely.services.invoice_service import mark_overdue
from invoicely.services.invoice_templates import list_templates

router = APIRouter()


@router.get("/dashboard/{user_id}", response_model=DashboardSummary)
def dashboard(user_id: int, db: Session = Depends(get_db)):
    mark_overdue(db, user_id)
    return get_dashboard_summary(db, user_id)


@router.get("/templates", response_model=List[TemplateInfo])
def templates():
    return [TemplateInfo(id=t.id, name=t.name, description=t.description) for t in list_templates()]
