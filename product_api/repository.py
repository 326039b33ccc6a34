# product_api/repository.py

"""
Row-level access to the products table.
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from .models import Product
from .schemas import ProductCreate


class ProductRepository:
    """CRUD accessor keyed by integer id. Every write commits one row."""

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.id.desc()).all()

    def find_by_id(self, product_id: int) -> Optional[Product]:
        return self.db.get(Product, product_id)

    def insert(self, data: ProductCreate) -> Product:
        product = Product(**data.model_dump())
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def save(self, product: Product) -> Product:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
