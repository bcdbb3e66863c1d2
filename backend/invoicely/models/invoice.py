from sqlalchemy import Column, Integer, String, Text, ForeignKey, Numeric, Date, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from invoicely.db.base import Base


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    client_name = Column(String(255), nullable=False)
    invoice_number = Column(String(64), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(16), nullable=False, default="pending")  # pending, paid, overdue
    due_date = Column(Date, nullable=False)
    template = Column(String(32), nullable=False, default="modern")
    subtotal = Column(Numeric(12, 2), nullable=False, default=0)  # Sum of line amounts
    tax_rate = Column(Numeric(5, 4), nullable=False, default=0)  # 0.0825 = 8.25%
    tax_amount = Column(Numeric(12, 2), nullable=False, default=0)
    amount = Column(Numeric(12, 2), nullable=False, default=0)  # Total amount (subtotal + tax)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    line_items = relationship(
        "LineItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="LineItem.id",
    )
    user = relationship("User", backref="invoices")


class LineItem(Base):
    __tablename__ = "line_items"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    quantity = Column(Numeric(12, 2), nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)  # quantity * unit_price, computed server side

    invoice = relationship("Invoice", back_populates="line_items")
