from decimal import Decimal
from typing import Dict

from invoicely.schemas.common import CamelModel


class DashboardSummary(CamelModel):
    user_id: int
    invoice_count: int
    total_invoiced: Decimal
    total_paid: Decimal
    total_outstanding: Decimal
    overdue_count: int
    expense_count: int
    total_expenses: Decimal
    expenses_by_category: Dict[str, Decimal]
    net_income: Decimal  # paid invoices minus expenses
