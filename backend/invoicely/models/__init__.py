from invoicely.models.user import User
from invoicely.models.invoice import Invoice, LineItem
from invoicely.models.expense import Expense
from invoicely.models.business_settings import BusinessSettings

__all__ = ["User", "Invoice", "LineItem", "Expense", "BusinessSettings"]
