from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from datetime import datetime, timezone

from marketplace.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    address = Column(Text, nullable=False)
    payment_method = Column(String(50), nullable=False)

    status = Column(String(20), nullable=False, default="processing")
    amount = Column(Numeric(10, 2), nullable=False)  # items total + shipping
    shipping_cost = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
