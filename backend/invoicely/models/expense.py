from sqlalchemy import Column, Integer, String, Text, ForeignKey, Numeric, Date
from sqlalchemy.orm import relationship
from invoicely.db.base import Base


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String(64), nullable=False, default="Other")
    sub_category = Column(String(128), nullable=True)  # AI suggested, free text
    date = Column(Date, nullable=False)

    user = relationship("User", backref="expenses")
