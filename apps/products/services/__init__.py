from .catalog import ProductCatalogService, product_refresh_suspended
from .variant_selection import VariantSelectionService

__all__ = [
    'ProductCatalogService',
    'VariantSelectionService',
    'product_refresh_suspended',
]
