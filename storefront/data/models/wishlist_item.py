from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base, new_id, utcnow


class WishlistItemModel(Base):
    __tablename__ = "wishlist_items"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(64), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    product = relationship("ProductModel")

    # a product is on a user's wishlist at most once
    __table_args__ = (UniqueConstraint("user_id", "product_id", name="u_wishlist_user_product"),)
