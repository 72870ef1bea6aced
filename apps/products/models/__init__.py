"""
Product models.

Model Hierarchy:
- Category: Hierarchical categories (category > subcategory)
- Product: Simple product, or the parent of its variants
- Variant: Sellable unit of a variant product, one attribute combination
"""

from .category import Category
from .product import Product
from .variant import Variant

__all__ = [
    'Category',
    'Product',
    'Variant',
]
