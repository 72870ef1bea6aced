"""
Status derivation for sellable units.

A sellable unit is a simple product or one variant of a variant-structured
product. Nothing in here raises: incomplete input degrades to ``draft`` and
unpublished.
"""

import logging
from decimal import Decimal, InvalidOperation

from apps.products.choices import ProductStatus, ProductStructure, ProductType


logger = logging.getLogger(__name__)

UNPUBLISHABLE_STATUSES = (ProductStatus.DRAFT, ProductStatus.ARCHIVED)


def to_quantity(value):
    """Return ``value`` as a Decimal, or None when it is not configured."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        quantity = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    # NaN and infinity compare by raising
    if not quantity.is_finite():
        return None
    return quantity


def derive_unit_status(stock, min_stock, current_status=None):
    if current_status == ProductStatus.ARCHIVED:
        return ProductStatus.ARCHIVED.value

    stock = to_quantity(stock)
    min_stock = to_quantity(min_stock)
    if stock is None or min_stock is None:
        return ProductStatus.DRAFT.value
    if stock <= min_stock:
        return ProductStatus.OUT_OF_STOCK.value
    return ProductStatus.SELLING.value


def derive_unit_published(status, published):
    # Out of stock units keep their flag: visible but not purchasable.
    if status in UNPUBLISHABLE_STATUSES:
        return False
    return bool(published)


def derive_variant(variant):
    variant = dict(variant or {})
    status = derive_unit_status(
        variant.get('stock'), variant.get('min_stock'), variant.get('status')
    )
    variant['status'] = status
    variant['published'] = derive_unit_published(status, variant.get('published', True))
    return variant


def is_sellable(variant):
    return bool(variant.get('published')) and variant.get('status') == ProductStatus.SELLING


def has_sellable_variant(document):
    return any(is_sellable(variant) for variant in document.get('variants') or [])


def derive_product_status(document):
    """
    Derive ``status``/``published`` of the product and of its variants.

    Returns a new document.
    """
    document = dict(document)
    product_type = document.get('product_type') or ProductType.PHYSICAL
    structure = document.get('product_structure') or ProductStructure.SIMPLE
    current_status = document.get('status')

    document['variants'] = [derive_variant(v) for v in document.get('variants') or []]

    if product_type == ProductType.DIGITAL:
        if current_status == ProductStatus.ARCHIVED:
            status = ProductStatus.ARCHIVED.value
        else:
            status = ProductStatus.SELLING.value
        document['status'] = status
        document['published'] = derive_unit_published(status, document.get('published'))
        return document

    if structure == ProductStructure.VARIANT:
        # The parent is never sellable on its own.
        document['status'] = None
        document['published'] = None
        if not has_sellable_variant(document):
            logger.debug("No published selling variant for '%s', unpublishing", document.get('slug'))
            document['published'] = False
        return document

    status = derive_unit_status(document.get('base_stock'), document.get('min_stock'), current_status)
    document['status'] = status
    document['published'] = derive_unit_published(status, document.get('published'))
    return document
