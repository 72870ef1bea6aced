"""
The full derivation pipeline for a product document.

identifiers -> status -> SEO, run on every save before persistence.
"""

import copy

from apps.products.choices import ProductStructure, ProductType

from .identifiers import fill_identifiers
from .seo import synthesize_seo
from .status import derive_product_status


SIMPLE_ONLY_FIELDS = ('cost_price', 'selling_price', 'base_stock', 'min_stock')


def normalize_structure(document):
    """Null the side of the product that its structure does not use."""
    document = dict(document)
    if document.get('product_type') == ProductType.DIGITAL:
        document['product_structure'] = ProductStructure.SIMPLE.value
    structure = document.get('product_structure') or ProductStructure.SIMPLE.value
    document['product_structure'] = structure

    if structure == ProductStructure.VARIANT:
        for field in SIMPLE_ONLY_FIELDS:
            document[field] = None
    else:
        document['variants'] = []
    return document


def fill_variant_identifiers(document):
    document = dict(document)
    document['variants'] = [
        fill_identifiers(variant, document.get('sku') or '', document.get('name') or '')
        for variant in document.get('variants') or []
    ]
    return document


def derive_status_and_seo(document, base_url=None):
    """
    Return a copy of ``document`` with every derived field populated.

    The input is left untouched. Running the function on its own output
    yields the same output.
    """
    document = copy.deepcopy(dict(document or {}))
    document = normalize_structure(document)
    document = fill_variant_identifiers(document)
    document = derive_product_status(document)
    document['seo'] = synthesize_seo(document, base_url=base_url)
    return document
