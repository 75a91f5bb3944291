"""Field-level validation rules for product payloads"""

import re
from decimal import Decimal
from typing import Callable, List, Optional

from ..core.exceptions import ProductValidationError
from .product import ProductRequest

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100
DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 500
MIN_PRICE = Decimal("0.01")
# 32-bit integer column
MAX_STOCK_QUANTITY = 2**31 - 1
CATEGORY_PATTERN = re.compile(r"[A-Za-z0-9 ]+")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _check_name(value: Optional[str]) -> Optional[str]:
    if _is_blank(value):
        return "Product name is required"
    if not NAME_MIN_LENGTH <= len(value) <= NAME_MAX_LENGTH:
        return (
            f"Product name must be between {NAME_MIN_LENGTH} "
            f"and {NAME_MAX_LENGTH} characters"
        )
    return None


def _check_description(value: Optional[str]) -> Optional[str]:
    if _is_blank(value):
        return "Product description is required"
    if not DESCRIPTION_MIN_LENGTH <= len(value) <= DESCRIPTION_MAX_LENGTH:
        return (
            f"Description must be between {DESCRIPTION_MIN_LENGTH} "
            f"and {DESCRIPTION_MAX_LENGTH} characters"
        )
    return None


def _check_price(value: Optional[Decimal]) -> Optional[str]:
    if value is None:
        return "Price is required"
    if value < MIN_PRICE:
        return "Price must be greater than 0"
    return None


def _check_category(value: Optional[str]) -> Optional[str]:
    if _is_blank(value):
        return "Category is required"
    if not CATEGORY_PATTERN.fullmatch(value):
        return "Category can only contain letters, numbers, and spaces"
    return None


def _check_stock_quantity(value: Optional[int]) -> Optional[str]:
    if value is None:
        return "Stock quantity is required"
    if value < 0:
        return "Stock quantity cannot be negative"
    if value > MAX_STOCK_QUANTITY:
        return f"Stock quantity cannot exceed {MAX_STOCK_QUANTITY}"
    return None


# (wire field name, attribute, rule) in reporting order
_RULES: List[tuple[str, str, Callable]] = [
    ("name", "name", _check_name),
    ("description", "description", _check_description),
    ("price", "price", _check_price),
    ("category", "category", _check_category),
    ("stockQuantity", "stock_quantity", _check_stock_quantity),
]


def validate_product(payload: ProductRequest) -> List[str]:
    """
    Check every field of a product payload.

    Returns one ``"<field>: <reason>"`` message per violated field, using
    the JSON field names. Only the first failing rule of a field is
    reported. An empty list means the payload is valid.
    """
    errors: List[str] = []
    for field_name, attribute, rule in _RULES:
        reason = rule(getattr(payload, attribute))
        if reason is not None:
            errors.append(f"{field_name}: {reason}")
    return errors


def ensure_valid_product(payload: ProductRequest) -> None:
    """Raise ProductValidationError if the payload violates any field rule"""
    errors = validate_product(payload)
    if errors:
        raise ProductValidationError(errors)
