import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional

PRODUCT_FIELDS = ('id', 'name', 'price', 'grade', 'link')
MAX_QUANTITY = 10000


class RecordValidationError(ValueError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


class GradeType(str, Enum):
    HG = 'hg'
    MG = 'mg'
    SD = 'sd'
    PG = 'pg'
    RG = 'rg'

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> 'GradeType':
        """Return the grade for a member or tag string, case-insensitive."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            tag = value.strip().lower()
            for grade in cls:
                if grade.value == tag:
                    return grade
        allowed = ', '.join(grade.value for grade in cls)
        shown = repr(value) if isinstance(value, str) else type(value).__name__
        raise RecordValidationError('grade', f"{shown} is not one of: {allowed}")


def _require_int(field: str, value: Any, minimum: int, maximum: Optional[int] = None) -> int:
    # bool is an int subclass but never a valid id or count
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecordValidationError(field, f"expected an integer, got {type(value).__name__}")
    if value < minimum:
        raise RecordValidationError(field, f"must be >= {minimum}")
    if maximum is not None and value > maximum:
        raise RecordValidationError(field, f"must be <= {maximum}")
    return value


def _require_text(field: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise RecordValidationError(field, "must be a non-empty string")
    return value.strip()


def _require_price(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RecordValidationError('price', f"expected a number, got {type(value).__name__}")
    try:
        price = float(value)
    except OverflowError:
        raise RecordValidationError('price', "too large to represent as a float")
    if not math.isfinite(price) or price < 0:
        raise RecordValidationError('price', "must be a finite number >= 0")
    return price


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    price: float
    grade: GradeType
    link: str

    def __post_init__(self):
        # frozen, so normalized values go through object.__setattr__
        object.__setattr__(self, 'id', _require_int('id', self.id, 0))
        object.__setattr__(self, 'name', _require_text('name', self.name))
        object.__setattr__(self, 'price', _require_price(self.price))
        object.__setattr__(self, 'grade', GradeType.parse(self.grade))
        object.__setattr__(self, 'link', _require_text('link', self.link))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Product':
        """Build a product from a feed record. Unknown keys are ignored."""
        missing = [field for field in PRODUCT_FIELDS if field not in data]
        if missing:
            raise RecordValidationError(missing[0], "missing from record")
        return cls(**{field: data[field] for field in PRODUCT_FIELDS})

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'grade': self.grade.value,
            'link': self.link,
        }


@dataclass(frozen=True)
class CartItem:
    """A product paired with the number of units selected.

    The product is held by composition; the accessors below expose its fields
    so a cart item can be used wherever a product's shape is expected.
    """
    product: Product
    quantity: int = 1

    def __post_init__(self):
        if not isinstance(self.product, Product):
            raise RecordValidationError('product', f"expected a Product, got {type(self.product).__name__}")
        object.__setattr__(self, 'quantity', _require_int('quantity', self.quantity, 1, MAX_QUANTITY))

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> 'CartItem':
        return cls(product=product, quantity=quantity)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'CartItem':
        if 'quantity' not in data:
            raise RecordValidationError('quantity', "missing from record")
        return cls(product=Product.from_dict(data), quantity=data['quantity'])

    def with_quantity(self, quantity: int) -> 'CartItem':
        return replace(self, quantity=quantity)

    def to_dict(self) -> Dict[str, Any]:
        record = self.product.to_dict()
        record['quantity'] = self.quantity
        return record

    @property
    def id(self) -> int:
        return self.product.id

    @property
    def name(self) -> str:
        return self.product.name

    @property
    def price(self) -> float:
        return self.product.price

    @property
    def grade(self) -> GradeType:
        return self.product.grade

    @property
    def link(self) -> str:
        return self.product.link
