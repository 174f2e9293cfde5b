# catalog.py
import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func

from db import ProductRecord
from models import Product, ProductFilter, is_valid_override
from scoring import estimate

logger = logging.getLogger(__name__)


class ProductNotFoundError(LookupError):
    def __init__(self, product_id: str):
        super().__init__(f"Product {product_id!r} not found.")
        self.product_id = product_id


class InvalidOverrideError(ValueError):
    pass


def record_to_product(record: ProductRecord) -> Product:
    return Product(
        id=record.id,
        name=record.name,
        description=record.description or "",
        category=record.category,
        price=record.price or 0.0,
        image_url=record.image_url or "",
        in_stock=bool(record.in_stock),
        weight_kg=record.weight_kg,
        origin_country=record.origin_country or "",
        packaging_type=record.packaging_type,
        base_production_emission=record.base_production_emission or 0.0,
        override_emission=record.override_emission,
    )


def apply_product_to_record(product: Product, record: ProductRecord) -> None:
    record.name = product.name
    record.description = product.description
    record.category = product.category.value
    record.price = product.price
    record.image_url = product.image_url
    record.in_stock = product.in_stock
    record.weight_kg = product.weight_kg
    record.origin_country = product.origin_country
    record.packaging_type = product.packaging_type.value
    record.base_production_emission = product.base_production_emission
    record.override_emission = product.override_emission


class CatalogStore:
    """
    Product catalog backed by the `products` table.

    Reads return plain Product objects; footprints are never stored here; callers
    run scoring.estimate() on what they get back. The only mutation the storefront
    performs is set_override().
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def seed(self, raw_products: Iterable[Dict[str, Any]]) -> int:
        """
        Insert or replace products from static seed dicts. Raises ValueError
        listing the problems if any record fails validation or an id repeats
        within the batch; nothing is written then.

        Existing products keep their catalog position; new ones go after the
        current last product, in batch order.
        """
        products = [Product.from_dict(raw_product) for raw_product in raw_products]

        problems = []
        seen_ids = set()
        for product in products:
            problems.extend(f"{product.id or product.name or '?'}: {msg}" for msg in product.validate())
            if product.id and product.id in seen_ids:
                problems.append(f"{product.id}: duplicate id in seed data.")
            seen_ids.add(product.id)
        if problems:
            raise ValueError("Invalid seed data: " + "; ".join(problems))

        with self._session_factory() as db_session:
            last_position = db_session.query(func.max(ProductRecord.position)).scalar()
            next_position = -1 if last_position is None else last_position
            for product in products:
                record = db_session.get(ProductRecord, product.id)
                if record is None:
                    next_position += 1
                    record = ProductRecord(id=product.id, position=next_position)
                    db_session.add(record)
                apply_product_to_record(product, record)
            db_session.commit()

        logger.info("Seeded %d products", len(products))
        return len(products)

    def seed_if_empty(self, raw_products: Iterable[Dict[str, Any]]) -> int:
        with self._session_factory() as db_session:
            has_products = db_session.query(ProductRecord.id).first() is not None
        if has_products:
            return 0
        return self.seed(raw_products)

    def list_products(self, product_filter: Optional[ProductFilter] = None) -> List[Product]:
        """
        Return products matching `product_filter`, in catalog order unless a sort is given.

        Filter steps (each skipped when unset):
          1. case-insensitive substring search on the name
          2. category equality
          3. footprint score within the inclusive range (estimated fresh)
          4. sort: footprint-asc | price-asc | name-asc
        """
        product_filter = product_filter or ProductFilter()

        with self._session_factory() as db_session:
            query = db_session.query(ProductRecord)
            if product_filter.category is not None:
                query = query.filter(ProductRecord.category == product_filter.category.value)
            records = query.order_by(ProductRecord.position, ProductRecord.id).all()

        products = [record_to_product(record) for record in records]

        search_text = product_filter.search.lower()
        if search_text:
            products = [product for product in products if search_text in product.name.lower()]

        if product_filter.footprint_range is not None:
            min_score, max_score = product_filter.footprint_range
            products = [
                product for product in products
                if min_score <= estimate(product).score <= max_score
            ]

        # sorted() is stable, so ties keep catalog order
        if product_filter.sort_by == "footprint-asc":
            products = sorted(products, key=lambda product: estimate(product).score)
        elif product_filter.sort_by == "price-asc":
            products = sorted(products, key=lambda product: product.price)
        elif product_filter.sort_by == "name-asc":
            products = sorted(products, key=lambda product: product.name.casefold())

        return products

    def get_product(self, product_id: str) -> Product:
        with self._session_factory() as db_session:
            record = db_session.get(ProductRecord, str(product_id))
            if record is None:
                raise ProductNotFoundError(product_id)
            return record_to_product(record)

    def get_categories(self) -> List[str]:
        with self._session_factory() as db_session:
            category_rows = db_session.query(ProductRecord.category).distinct().all()
        return sorted(category for (category,) in category_rows)

    def set_override(self, product_id: str, value: Optional[float]) -> Product:
        """
        Set (or clear, with None) the admin emission override of one product.

        Raises:
            InvalidOverrideError  : value is not a finite number >= 0
            ProductNotFoundError  : unknown product_id
        """
        if value is not None:
            if not is_valid_override(value):
                raise InvalidOverrideError("override_emission must be a finite number >= 0.")
            value = float(value)

        with self._session_factory() as db_session:
            record = db_session.get(ProductRecord, str(product_id))
            if record is None:
                raise ProductNotFoundError(product_id)
            record.override_emission = value
            db_session.commit()
            product = record_to_product(record)

        if value is None:
            logger.info("Cleared emission override on product %s", product_id)
        else:
            logger.info("Set emission override on product %s to %.3f kgCO2e", product_id, value)
        return product
