from typing import List, Optional

from inventory_api.models.product import Product
from sqlalchemy import func
from sqlalchemy.orm import Session


class ProductRepository:
    """
    Query primitives for the products table. Methods flush but never commit;
    the caller owns the transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: int) -> Optional[Product]:
        return self.db.get(Product, product_id)

    def exists(self, product_id: int) -> bool:
        qry = self.db.query(Product.id).filter(Product.id == product_id)
        return self.db.query(qry.exists()).scalar()

    def exists_by_name(self, name: str) -> bool:
        qry = self.db.query(Product.id).filter(func.lower(Product.name) == func.lower(name))
        return self.db.query(qry.exists()).scalar()

    def list_newest_first(self) -> List[Product]:
        return (
            self.db.query(Product)
            .order_by(Product.created_at.desc(), Product.id.desc())
            .all()
        )

    def list_by_name(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.name).all()

    def search_by_name(self, term: str) -> List[Product]:
        return (
            self.db.query(Product)
            .filter(Product.name.icontains(term, autoescape=True))
            .all()
        )

    def search_by_name_or_description(self, term: str) -> List[Product]:
        return (
            self.db.query(Product)
            .filter(
                (Product.name.icontains(term, autoescape=True))
                | (Product.description.icontains(term, autoescape=True))
            )
            .all()
        )

    def find_by_category(self, category: str) -> List[Product]:
        return (
            self.db.query(Product)
            .filter(func.lower(Product.category) == func.lower(category))
            .all()
        )

    def search_by_category(self, term: str) -> List[Product]:
        return (
            self.db.query(Product)
            .filter(Product.category.icontains(term, autoescape=True))
            .all()
        )

    def find_in_stock(self, min_quantity: int = 0) -> List[Product]:
        return self.db.query(Product).filter(Product.quantity > min_quantity).all()

    def find_low_stock(self, threshold: int) -> List[Product]:
        return self.db.query(Product).filter(Product.quantity <= threshold).all()

    def add(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()  # ensure id assigned
        return product

    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self.db.flush()

    def delete_by_id(self, product_id: int) -> int:
        n = self.db.query(Product).filter(Product.id == product_id).delete()
        self.db.flush()
        return n
