import logging
from contextlib import contextmanager
from typing import List, Optional

from filelock import Timeout
from sqlalchemy.orm import Session

from inventory_api.config import settings
from inventory_api.models.product import Product, utcnow
from inventory_api.repositories.product_repo import ProductRepository
from inventory_api.schemas.product_schema import ProductRecord
from inventory_api.utils.locks import product_name_lock

log = logging.getLogger(__name__)


class ProductException(Exception):
    pass


class ProductNotFound(ProductException):
    def __init__(self, product_id: int):
        super().__init__(f"Product not found with id: {product_id}")
        self.product_id = product_id


class DuplicateProductName(ProductException):
    def __init__(self, name: str):
        super().__init__(f"Product with name '{name}' already exists")
        self.name = name


class ProductService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository(db)

    def list_products(self) -> List[ProductRecord]:
        return self._to_records(self.repo.list_newest_first())

    def get_product(self, product_id: int) -> Optional[ProductRecord]:
        p = self.repo.get(product_id)
        return self._to_record(p) if p else None

    def create_product(self, record: ProductRecord) -> ProductRecord:
        """
        Persist a new product. Client-supplied id and timestamps are ignored.

        The duplicate-name check and the insert are separate statements, so
        two concurrent creates with the same name can both succeed unless
        SERIALIZE_NAME_WRITES is on (and then only on a single host).
        """
        with self._name_guard(record.name):
            if self.repo.exists_by_name(record.name):
                log.warning("Rejected create: duplicate name %r", record.name)
                raise DuplicateProductName(record.name)

            p = Product(
                name=record.name,
                description=record.description,
                price=record.price,
                quantity=record.quantity,
                category=record.category,
            )
            self.repo.add(p)
            self.db.commit()

        self.db.refresh(p)
        log.info("Created product id=%s name=%r", p.id, p.name)
        return self._to_record(p)

    def update_product(self, product_id: int, record: ProductRecord) -> ProductRecord:
        """
        Replace every mutable field of an existing product.

        Raises ProductNotFound when the id is unknown and DuplicateProductName
        when the new name (compared case-insensitively) belongs to another
        product. Keeping the current name in a different case is allowed.
        """
        with self._name_guard(record.name):
            p = self.repo.get(product_id)
            if not p:
                log.warning("Rejected update: product id=%s not found", product_id)
                raise ProductNotFound(product_id)

            if p.name.lower() != record.name.lower() and self.repo.exists_by_name(record.name):
                log.warning("Rejected update of id=%s: duplicate name %r", product_id, record.name)
                raise DuplicateProductName(record.name)

            p.name = record.name
            p.description = record.description
            p.price = record.price
            p.quantity = record.quantity
            p.category = record.category
            p.updated_at = utcnow()
            self.db.commit()

        self.db.refresh(p)
        log.info("Updated product id=%s", p.id)
        return self._to_record(p)

    def delete_product(self, product_id: int) -> None:
        if not self.repo.exists(product_id):
            log.warning("Rejected delete: product id=%s not found", product_id)
            raise ProductNotFound(product_id)
        self.repo.delete_by_id(product_id)
        self.db.commit()
        log.info("Deleted product id=%s", product_id)

    def search_products(self, term: Optional[str]) -> List[ProductRecord]:
        if term is None or not term.strip():
            return self.list_products()
        return self._to_records(self.repo.search_by_name_or_description(term.strip()))

    def get_products_by_category(self, category: str) -> List[ProductRecord]:
        return self._to_records(self.repo.search_by_category(category))

    def get_low_stock_products(self, threshold: Optional[int] = None) -> List[ProductRecord]:
        if threshold is None:
            threshold = settings.LOW_STOCK_THRESHOLD
        return self._to_records(self.repo.find_low_stock(threshold))

    @contextmanager
    def _name_guard(self, name: str):
        try:
            with product_name_lock(name):
                yield
        except Timeout:
            raise ProductException("Could not acquire product name lock; try again")

    @staticmethod
    def _to_record(p: Product) -> ProductRecord:
        return ProductRecord.model_validate(p)

    def _to_records(self, products: List[Product]) -> List[ProductRecord]:
        return [self._to_record(p) for p in products]
