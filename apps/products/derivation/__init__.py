"""
Pure derivation core for products and variants.

attributes -> combinations -> identifiers -> status -> SEO metadata.
Nothing in this package touches the database.
"""

from .combinations import (
    BuilderPhase,
    CombinationError,
    VariantCombinationBuilder,
    generate_combinations,
    merge_combinations,
    make_attribute,
)
from .identifiers import (
    fill_identifiers,
    generate_variant_name,
    generate_variant_sku,
    generate_variant_slug,
)
from .pipeline import derive_status_and_seo, normalize_structure
from .seo import synthesize_seo, derive_robots, truncate
from .status import derive_product_status, derive_unit_status, derive_variant

__all__ = [
    'BuilderPhase',
    'CombinationError',
    'VariantCombinationBuilder',
    'generate_combinations',
    'merge_combinations',
    'make_attribute',
    'fill_identifiers',
    'generate_variant_name',
    'generate_variant_sku',
    'generate_variant_slug',
    'derive_status_and_seo',
    'normalize_structure',
    'synthesize_seo',
    'derive_robots',
    'truncate',
    'derive_product_status',
    'derive_unit_status',
    'derive_variant',
]
