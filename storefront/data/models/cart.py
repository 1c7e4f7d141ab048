# storefront/data/models/cart.py
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from storefront.data.database import Base, new_id, utcnow


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(String(36), primary_key=True, default=new_id)
    # one cart per user, enforced by the store
    user_id = Column(String(64), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
