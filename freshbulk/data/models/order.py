from sqlalchemy import Column, Integer, String, DateTime, Numeric, Text, JSON
from datetime import datetime, timezone

from freshbulk.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    order_number = Column(String(40), nullable=False, unique=True, index=True)

    customer_name = Column(String(200), nullable=False)
    customer_email = Column(String(254), nullable=False, index=True)
    customer_phone = Column(String(20), nullable=False)

    delivery_address = Column(Text, nullable=False)
    delivery_city = Column(String(100), nullable=False)
    delivery_postal_code = Column(String(12), nullable=False)

    status = Column(String(20), nullable=False, default="Pending")  # Pending, In Progress, Delivered, ...
    notes = Column(Text, nullable=True)
    total_amount = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    # snapshot pozycji, nie FK do produktow
    items = Column(JSON, nullable=False)
