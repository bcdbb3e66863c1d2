"""Invoices: CRUD, status changes, PDF export and AI descriptions."""
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from invoicely.ai import generate_invoice_description
from invoicely.api.deps import get_db
from invoicely.core.exceptions import BusinessError
from invoicely.schemas.common import MessageResponse
from invoicely.schemas.invoice import (
    DescriptionRequest,
    DescriptionResponse,
    InvoiceCreate,
    InvoiceResponse,
    InvoiceStatusUpdate,
    InvoiceUpdate,
)
from invoicely.services import storage
from invoicely.services.invoice_service import mark_overdue
from invoicely.services.pdf_service import generate_invoice_pdf, pdf_filename

router = APIRouter()


@router.post("", response_model=InvoiceResponse)
def create_invoice(data: InvoiceCreate, db: Session = Depends(get_db)):
    """Create an invoice with its line items. Totals are computed server side."""
    return storage.create_invoice(db, data)


@router.post("/generate-description", response_model=DescriptionResponse)
def generate_description(data: DescriptionRequest):
    """AI-written invoice description; a generic sentence if the AI is unavailable."""
    description = generate_invoice_description(data.client_name, data.amount, data.services)
    return DescriptionResponse(description=description)


@router.get("/edit/{invoice_id}", response_model=InvoiceResponse)
def get_invoice(invoice_id: int, db: Session = Depends(get_db)):
    """Single invoice with line items, for the edit form."""
    invoice = storage.get_invoice(db, invoice_id)
    if not invoice:
        raise BusinessError.not_found("Invoice")
    return invoice


@router.get("/{invoice_id}/pdf")
def download_invoice_pdf(invoice_id: int, db: Session = Depends(get_db)):
    invoice = storage.get_invoice(db, invoice_id)
    if not invoice:
        raise BusinessError.not_found("Invoice")
    business = storage.get_business_settings(db, invoice.user_id)

    try:
        buffer = generate_invoice_pdf(invoice, business)
    except Exception as e:
        raise BusinessError.server_error(e)

    return StreamingResponse(
        buffer,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={pdf_filename(invoice)}"},
    )


@router.get("/{user_id}", response_model=List[InvoiceResponse])
def list_invoices(user_id: int, db: Session = Depends(get_db)):
    """All invoices of a user, newest first. Pending invoices past due become overdue."""
    mark_overdue(db, user_id)
    return storage.get_invoices_by_user_id(db, user_id)


@router.patch("/{invoice_id}/status", response_model=InvoiceResponse)
def update_invoice_status(invoice_id: int, data: InvoiceStatusUpdate, db: Session = Depends(get_db)):
    return storage.update_invoice_status(db, invoice_id, data.status)


@router.patch("/{invoice_id}", response_model=InvoiceResponse)
def update_invoice(invoice_id: int, data: InvoiceUpdate, db: Session = Depends(get_db)):
    """Partial update; a lineItems array replaces every existing line item."""
    return storage.update_invoice(db, invoice_id, data)


@router.delete("/{invoice_id}", response_model=MessageResponse)
def delete_invoice(invoice_id: int, db: Session = Depends(get_db)):
    storage.delete_invoice(db, invoice_id)
    return {"message": "Invoice deleted successfully"}
