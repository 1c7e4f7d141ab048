# storefront/data/models/order.py
from sqlalchemy import Column, String, DateTime, Numeric, JSON
from sqlalchemy.orm import relationship

from storefront.data.database import Base, new_id, utcnow


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(64), nullable=False, index=True)

    shipping_address = Column(JSON, nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    status = Column(String(20), nullable=False, default="created")  # created, processing, fulfilled, cancelled
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
