"""Invoice arithmetic and defaults. Used by storage on every invoice write."""
import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from invoicely.models.invoice import Invoice

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def to_money(value) -> Decimal:
    """Round to cents, half up."""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def calculate_line_amount(quantity, unit_price) -> Decimal:
    """Line amount = quantity x unit price, rounded to cents.

    The client also sends an amount; it is never trusted.
    """
    return to_money(Decimal(str(quantity)) * Decimal(str(unit_price)))


def calculate_totals(line_amounts: Iterable[Decimal], tax_rate=0) -> dict:
    """Calculate subtotal, tax and total for a set of line amounts.

    Args:
        line_amounts: Already rounded line amounts
        tax_rate: Fraction between 0 and 1 (0.0825 for 8.25%)

    Returns:
        dict with subtotal, tax_rate, tax_amount, total_amount
    """
    subtotal = to_money(sum((Decimal(str(a)) for a in line_amounts), Decimal("0")))
    rate = Decimal(str(tax_rate or 0))
    tax_amount = to_money(subtotal * rate)
    total = subtotal + tax_amount

    return {
        "subtotal": subtotal,
        "tax_rate": rate,
        "tax_amount": tax_amount,
        "total_amount": total,
    }


def default_line_description(client_name: str) -> str:
    return f"Professional services for {client_name}"


def generate_invoice_number(existing_count: int, today: Optional[date] = None) -> str:
    """INV-<YYYYMMDD>-<NNNN>, numbered per user."""
    today = today or date.today()
    return f"INV-{today.strftime('%Y%m%d')}-{existing_count + 1:04d}"


def mark_overdue(db: Session, user_id: int, today: Optional[date] = None) -> int:
    """Flip pending invoices past their due date to overdue.

    Returns the number of invoices changed. Paid invoices are never touched.
    """
    today = today or date.today()
    changed = (
        db.query(Invoice)
        .filter(
            Invoice.user_id == user_id,
            Invoice.status == "pending",
            Invoice.due_date < today,
        )
        .update({Invoice.status: "overdue"}, synchronize_session="fetch")
    )
    if changed:
        db.commit()
        logger.info(f"Marked {changed} invoice(s) overdue for user {user_id}")
    return changed
