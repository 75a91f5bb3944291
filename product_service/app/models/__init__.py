from .base import ExactDecimal, ProductServiceBase, generate_document_id, utc_now
from .product import Product

"""Product Service Models"""

__all__ = [
    "ExactDecimal",
    "ProductServiceBase",
    "Product",
    "generate_document_id",
    "utc_now",
]
