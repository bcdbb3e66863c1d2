"""Aggregates behind the dashboard cards."""
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from invoicely.models.expense import Expense
from invoicely.models.invoice import Invoice
from invoicely.services.invoice_service import to_money


def get_dashboard_summary(db: Session, user_id: int) -> dict:
    """
    Invoice and expense totals for one user.
    Returns: invoiced/paid/outstanding amounts, overdue count, expenses by category, net income
    """
    # Totals per invoice status
    status_rows = (
        db.query(Invoice.status, func.count(Invoice.id), func.sum(Invoice.amount))
        .filter(Invoice.user_id == user_id)
        .group_by(Invoice.status)
        .all()
    )
    counts = {status: count for status, count, _ in status_rows}
    sums = {status: Decimal(str(total or 0)) for status, _, total in status_rows}

    total_invoiced = sum(sums.values(), Decimal("0"))
    total_paid = sums.get("paid", Decimal("0"))

    # Expense totals per category
    category_rows = (
        db.query(Expense.category, func.count(Expense.id), func.sum(Expense.amount))
        .filter(Expense.user_id == user_id)
        .group_by(Expense.category)
        .order_by(Expense.category)
        .all()
    )
    expenses_by_category = {category: to_money(total or 0) for category, _, total in category_rows}
    total_expenses = sum(expenses_by_category.values(), Decimal("0"))

    return {
        "user_id": user_id,
        "invoice_count": sum(counts.values()),
        "total_invoiced": to_money(total_invoiced),
        "total_paid": to_money(total_paid),
        "total_outstanding": to_money(total_invoiced - total_paid),
        "overdue_count": counts.get("overdue", 0),
        "expense_count": sum(count for _, count, _ in category_rows),
        "total_expenses": to_money(total_expenses),
        "expenses_by_category": expenses_by_category,
        "net_income": to_money(total_paid - total_expenses),
    }
