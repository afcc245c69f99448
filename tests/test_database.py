from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from storefront.database.database import Catalog, row_to_product
from storefront.models.models import GradeType, Product, RecordValidationError


def _catalog_with_rows(monkeypatch, fetchall=None, fetchone=None):
    cursor = MagicMock()
    cursor.fetchall.return_value = fetchall or []
    cursor.fetchone.return_value = fetchone
    conn = MagicMock()
    conn.__enter__.return_value = conn
    conn.cursor.return_value.__enter__.return_value = cursor

    catalog = Catalog("postgresql://user@localhost/shop")
    monkeypatch.setattr(catalog, "get_connection", lambda: conn)
    return catalog, cursor


def test_catalog_requires_database_url(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(ValueError):
        Catalog()


def test_catalog_reads_url_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://env@localhost/shop")
    assert Catalog().DATABASE_URL == "postgresql://env@localhost/shop"


def test_row_to_product_converts_decimal_price():
    product = row_to_product((3, "Kit", Decimal("12.50"), "mg", "https://example/3"))
    assert product == Product(3, "Kit", 12.5, GradeType.MG, "https://example/3")


def test_row_to_product_validates():
    with pytest.raises(RecordValidationError):
        row_to_product((3, "Kit", Decimal("12.50"), "zz", "https://example/3"))


def test_get_products_skips_invalid_rows(monkeypatch, caplog):
    catalog, cursor = _catalog_with_rows(monkeypatch, fetchall=[
        (1, "Widget", Decimal("9.99"), "hg", "https://example/1"),
        (2, "Broken", Decimal("1.00"), "xx", "https://example/2"),
        (3, "Gadget", Decimal("5.00"), "rg", "https://example/3"),
    ])

    products = catalog.get_products()

    assert [p.id for p in products] == [1, 3]
    assert "ORDER BY name" in cursor.execute.call_args[0][0]
    assert "Skipping product row 2" in caplog.text


def test_get_product_found(monkeypatch):
    catalog, cursor = _catalog_with_rows(
        monkeypatch, fetchone=(1, "Widget", Decimal("9.99"), "hg", "https://example/1"))

    product = catalog.get_product(1)

    assert product.name == "Widget"
    assert cursor.execute.call_args[0][1] == (1,)


def test_get_product_missing(monkeypatch):
    catalog, _ = _catalog_with_rows(monkeypatch, fetchone=None)
    assert catalog.get_product(99) is None
