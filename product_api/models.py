# product_api/models.py

"""
SQLAlchemy database models for the Product API.
"""

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, true
from sqlalchemy.sql import func

from .db import Base


class Product(Base):
    """
    SQLAlchemy model for the 'products' table.
    Represents a product with its price and availability flag.
    """

    __tablename__ = "products"

    # Primary Key: assigned by the database, never reused or changed.
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    name = Column(String, nullable=False)

    price = Column(Float, nullable=False)

    # New products are available until toggled.
    availability = Column(Boolean, nullable=False, default=True, server_default=true())

    # Timestamps are kept for auditing only, never exposed by the API.
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', availability={self.availability})>"
