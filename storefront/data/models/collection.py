# storefront/data/models/collection.py
from sqlalchemy import Column, String, Text, Numeric, DateTime, ForeignKey, UniqueConstraint

from storefront.data.database import Base, new_id, utcnow


class CollectionModel(Base):
    __tablename__ = "collections"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=True)
    cover_image_url = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default="active")  # active, draft
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class CollectionItemModel(Base):
    __tablename__ = "collection_items"

    id = Column(String(36), primary_key=True, default=new_id)
    collection_id = Column(String(36), ForeignKey("collections.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False)

    __table_args__ = (UniqueConstraint("collection_id", "product_id", name="u_collection_product"),)
