from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from invoicely.db.base import Base


class BusinessSettings(Base):
    __tablename__ = "business_settings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    business_name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=False)
    city = Column(String(128), nullable=False)
    state = Column(String(64), nullable=False)
    zip_code = Column(String(32), nullable=False)
    phone = Column(String(64), nullable=True)
    email = Column(String(255), nullable=True)
    logo = Column("logo_url", String(512), nullable=True)  # /uploads/<file> from the logo upload
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", backref="business_settings")
