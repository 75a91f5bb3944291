"""Domain exceptions raised by the product service"""

from typing import List


class ProductServiceError(Exception):
    """Base class for product service errors"""


class ProductNotFoundError(ProductServiceError):
    def __init__(self, lookup_value: str, lookup_field: str = "id"):
        self.lookup_value = lookup_value
        self.lookup_field = lookup_field
        super().__init__(f"Product not found with {lookup_field}: {lookup_value}")


class ProductValidationError(ProductServiceError):
    """One or more product fields violate their constraints"""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Invalid input data")
