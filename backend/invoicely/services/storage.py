"""
Persistence for users, invoices, expenses and business settings.

Every function takes the request's Session. Writes commit before returning;
invoice writes (header + line items) happen in one transaction and are rolled
back as a whole on failure. Missing entities raise NotFoundError.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from invoicely.core.exceptions import NotFoundError, ValidationError
from invoicely.core.security import get_password_hash
from invoicely.models.business_settings import BusinessSettings
from invoicely.models.expense import Expense
from invoicely.models.invoice import Invoice, LineItem
from invoicely.models.user import User
from invoicely.schemas.business_settings import BusinessSettingsUpsert
from invoicely.schemas.expense import ExpenseCreate, ExpenseUpdate
from invoicely.schemas.invoice import InvoiceCreate, InvoiceUpdate, LineItemCreate
from invoicely.services.invoice_service import (
    calculate_line_amount,
    calculate_totals,
    default_line_description,
    generate_invoice_number,
)

logger = logging.getLogger(__name__)


def _plain(value):
    """Enum members are stored by value."""
    return getattr(value, "value", value)


# ==============================================================================
# USERS
# ==============================================================================

def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def create_user(db: Session, username: str, password: str) -> User:
    if get_user_by_username(db, username):
        raise ValidationError(f"Username '{username}' is already taken")
    user = User(username=username, password_hash=get_password_hash(password))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _require_user(db: Session, user_id: int) -> User:
    user = get_user(db, user_id)
    if not user:
        raise NotFoundError("User")
    return user


# ==============================================================================
# INVOICES
# ==============================================================================

def _build_line_items(items: List[LineItemCreate], client_name: str) -> List[LineItem]:
    lines = []
    for item in items:
        lines.append(
            LineItem(
                description=item.description or default_line_description(client_name),
                quantity=item.quantity,
                unit_price=item.unit_price,
                amount=calculate_line_amount(item.quantity, item.unit_price),
            )
        )
    return lines


def _apply_totals(invoice: Invoice) -> None:
    totals = calculate_totals([line.amount for line in invoice.line_items], invoice.tax_rate)
    invoice.subtotal = totals["subtotal"]
    invoice.tax_amount = totals["tax_amount"]
    invoice.amount = totals["total_amount"]


def next_invoice_number(db: Session, user_id: int) -> str:
    count = db.query(Invoice).filter(Invoice.user_id == user_id).count()
    return generate_invoice_number(count)


def create_invoice(db: Session, data: InvoiceCreate) -> Invoice:
    """Insert an invoice and its line items in one transaction."""
    _require_user(db, data.user_id)

    invoice = Invoice(
        user_id=data.user_id,
        client_name=data.client_name,
        invoice_number=data.invoice_number or next_invoice_number(db, data.user_id),
        description=data.description,
        status=_plain(data.status),
        due_date=data.due_date,
        template=_plain(data.template),
        tax_rate=data.tax_rate,
    )
    invoice.line_items = _build_line_items(data.line_items, data.client_name)
    _apply_totals(invoice)

    try:
        db.add(invoice)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to create invoice for user {data.user_id}")
        raise
    db.refresh(invoice)
    logger.info(
        f"Created invoice {invoice.id} ({invoice.invoice_number}) for user {invoice.user_id}: "
        f"{len(invoice.line_items)} line item(s), total {invoice.amount}"
    )
    return invoice


def get_invoice(db: Session, invoice_id: int) -> Optional[Invoice]:
    return (
        db.query(Invoice)
        .options(selectinload(Invoice.line_items))
        .filter(Invoice.id == invoice_id)
        .first()
    )


def _require_invoice(db: Session, invoice_id: int) -> Invoice:
    invoice = get_invoice(db, invoice_id)
    if not invoice:
        raise NotFoundError("Invoice")
    return invoice


def get_invoices_by_user_id(db: Session, user_id: int) -> List[Invoice]:
    return (
        db.query(Invoice)
        .options(selectinload(Invoice.line_items))
        .filter(Invoice.user_id == user_id)
        .order_by(Invoice.created_at.desc(), Invoice.id.desc())
        .all()
    )


def update_invoice(db: Session, invoice_id: int, data: InvoiceUpdate) -> Invoice:
    """Update header fields; when line items are given, delete and reinsert them all.

    Totals are recomputed on every update since the tax rate may change alone.
    """
    invoice = _require_invoice(db, invoice_id)

    changes = data.model_dump(exclude_unset=True, exclude={"line_items"})
    try:
        for field, value in changes.items():
            if value is None and field != "description":
                continue
            setattr(invoice, field, _plain(value))

        if data.line_items is not None:
            # Old rows go first; delete-orphan removes them on flush
            invoice.line_items.clear()
            db.flush()
            invoice.line_items.extend(_build_line_items(data.line_items, invoice.client_name))

        _apply_totals(invoice)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to update invoice {invoice_id}")
        raise
    db.refresh(invoice)
    logger.info(f"Updated invoice {invoice.id}: fields={sorted(changes)}, line_items_replaced={data.line_items is not None}")
    return invoice


def update_invoice_status(db: Session, invoice_id: int, status: str) -> Invoice:
    invoice = _require_invoice(db, invoice_id)
    previous = invoice.status
    invoice.status = _plain(status)
    db.commit()
    db.refresh(invoice)
    logger.info(f"Invoice {invoice.id} status {previous} -> {invoice.status}")
    return invoice


def delete_invoice(db: Session, invoice_id: int) -> None:
    """Delete an invoice together with its line items."""
    invoice = _require_invoice(db, invoice_id)
    try:
        db.delete(invoice)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to delete invoice {invoice_id}")
        raise
    logger.info(f"Deleted invoice {invoice_id}")


# ==============================================================================
# EXPENSES
# ==============================================================================

def create_expense(db: Session, data: ExpenseCreate) -> Expense:
    _require_user(db, data.user_id)
    expense = Expense(
        user_id=data.user_id,
        description=data.description,
        amount=data.amount,
        category=_plain(data.category) or "Other",
        sub_category=data.sub_category,
        date=data.date,
    )
    db.add(expense)
    db.commit()
    db.refresh(expense)
    logger.info(f"Created expense {expense.id} for user {expense.user_id}: {expense.category} {expense.amount}")
    return expense


def get_expense(db: Session, expense_id: int) -> Optional[Expense]:
    return db.query(Expense).filter(Expense.id == expense_id).first()


def get_expenses_by_user_id(db: Session, user_id: int) -> List[Expense]:
    return (
        db.query(Expense)
        .filter(Expense.user_id == user_id)
        .order_by(Expense.date.desc(), Expense.id.desc())
        .all()
    )


def update_expense(db: Session, expense_id: int, data: ExpenseUpdate) -> Expense:
    expense = get_expense(db, expense_id)
    if not expense:
        raise NotFoundError("Expense")

    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if value is None and field != "sub_category":
            continue
        setattr(expense, field, _plain(value))
    db.commit()
    db.refresh(expense)
    logger.info(f"Updated expense {expense.id}: fields={sorted(changes)}")
    return expense


def delete_expense(db: Session, expense_id: int) -> None:
    expense = get_expense(db, expense_id)
    if not expense:
        raise NotFoundError("Expense")
    db.delete(expense)
    db.commit()
    logger.info(f"Deleted expense {expense_id}")


# ==============================================================================
# BUSINESS SETTINGS
# ==============================================================================

def get_business_settings(db: Session, user_id: int) -> Optional[BusinessSettings]:
    return db.query(BusinessSettings).filter(BusinessSettings.user_id == user_id).first()


def upsert_business_settings(db: Session, data: BusinessSettingsUpsert) -> BusinessSettings:
    """One settings row per user: update it if present, otherwise create it."""
    if data.user_id is None:
        raise ValidationError("userId is required")
    _require_user(db, data.user_id)

    values = data.model_dump(exclude={"user_id"})
    existing = get_business_settings(db, data.user_id)
    if existing:
        for field, value in values.items():
            setattr(existing, field, value)
        settings_row = existing
    else:
        settings_row = BusinessSettings(user_id=data.user_id, **values)
        db.add(settings_row)
    db.commit()
    db.refresh(settings_row)
    logger.info(f"Saved business settings for user {data.user_id} ({'updated' if existing else 'created'})")
    return settings_row
