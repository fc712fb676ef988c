# app/models.py
"""SQLAlchemy ORM models for persisted entities.

`Listing` holds service-provider posts, `Property` holds real-estate pages.
Both are keyed naturally by their source `url`.
"""
from sqlalchemy import Column, Integer, Text, Numeric, TIMESTAMP, JSON, func, Index
from .db import Base

class Listing(Base):
    __tablename__ = "listings"
    id = Column(Integer, primary_key=True, index=True)
    url = Column(Text, nullable=False, unique=True, index=True)
    title = Column(Text, nullable=False)
    display_title = Column(Text, nullable=False)
    image_url = Column(Text)
    contact_number = Column(Text)
    tags = Column(JSON)
    category = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    last_updated = Column(TIMESTAMP(timezone=True), server_default=func.now())


class Property(Base):
    __tablename__ = "properties"
    id = Column(Integer, primary_key=True, index=True)
    url = Column(Text, nullable=False, unique=True, index=True)
    title = Column(Text, nullable=False)
    image_url = Column(Text)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    transaction_kind = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    last_updated = Column(TIMESTAMP(timezone=True), server_default=func.now())

Index("idx_listings_category", Listing.category)
Index("idx_properties_transaction_kind", Property.transaction_kind)
