import os
import logging
from decimal import Decimal
from typing import List, Optional, Sequence
import psycopg
from ..models.models import Product, RecordValidationError

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = "id, name, price, grade, link"


def row_to_product(row: Sequence) -> Product:
    id, name, price, grade, link = row
    # numeric columns come back as Decimal
    if isinstance(price, Decimal):
        price = float(price)
    return Product(id=id, name=name, price=price, grade=grade, link=link)


class Catalog:
    """Read-only access to the products table."""

    def __init__(self, database_url: Optional[str] = None):
        self.DATABASE_URL = database_url or os.getenv('DATABASE_URL')
        if not self.DATABASE_URL:
            raise ValueError("DATABASE_URL environment variable is not set")

    def get_connection(self) -> psycopg.Connection:
        return psycopg.connect(
            self.DATABASE_URL,
            connect_timeout=30,
            application_name='storefront'
        )

    def get_products(self) -> List[Product]:
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(f"SELECT {PRODUCT_COLUMNS} FROM products ORDER BY name")
                rows = cur.fetchall()

        products = []
        for row in rows:
            try:
                products.append(row_to_product(row))
            except RecordValidationError as e:
                logger.warning(f"Skipping product row {row[0]!r}: {e}")
        return products

    def get_product(self, product_id: int) -> Optional[Product]:
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(f"SELECT {PRODUCT_COLUMNS} FROM products WHERE id = %s", (product_id,))
                row = cur.fetchone()

        if row is None:
            return None
        try:
            return row_to_product(row)
        except RecordValidationError as e:
            logger.warning(f"Product {product_id} is invalid: {e}")
            return None
