import re

from django.core.exceptions import ValidationError

from .choices import ProductStructure, ProductType
from .derivation.status import to_quantity


SLUG_PATTERN = re.compile(r'^[a-z0-9-]+$')
SKU_MAX_LENGTH = 30


def _is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def _check_non_negative(errors, key, value, label):
    if _is_blank(value):
        return
    quantity = to_quantity(value)
    if quantity is None:
        errors.setdefault(key, []).append(f'{label} must be a number')
    elif quantity < 0:
        errors.setdefault(key, []).append(f'{label} cannot be negative')


def _variant_errors(document):
    messages = []
    variants = document.get('variants') or []

    if not variants:
        messages.append('At least one variant combination is required for variant products')

    for position, variant in enumerate(variants, start=1):
        label = variant.get('sku') or f'#{position}'
        if _is_blank(variant.get('selling_price')):
            messages.append(f'Variant {label}: selling price is required')
        if _is_blank(variant.get('cost_price')):
            messages.append(f'Variant {label}: cost price is required')
        for field, name in (('cost_price', 'cost price'), ('selling_price', 'selling price'),
                            ('stock', 'stock'), ('min_stock', 'minimum stock')):
            value = variant.get(field)
            if _is_blank(value):
                continue
            quantity = to_quantity(value)
            if quantity is None or quantity < 0:
                messages.append(f'Variant {label}: {name} must be a non-negative number')

    skus = [
        str(variant.get('sku')).strip().upper()
        for variant in variants
        if not _is_blank(variant.get('sku'))
    ]
    if len(skus) != len(set(skus)):
        messages.append('Variant SKUs must be unique')

    return messages


def validate_product_document(document):
    """
    Validate a product document before derivation and persistence.

    Raises ValidationError with a ``{field: [messages]}`` dict.
    """
    errors = {}
    product_type = document.get('product_type') or ProductType.PHYSICAL
    structure = document.get('product_structure') or ProductStructure.SIMPLE

    if _is_blank(document.get('name')):
        errors['name'] = ['Product name is required']

    sku = document.get('sku')
    if _is_blank(sku):
        errors['sku'] = ['SKU is required']
    elif len(str(sku).strip()) > SKU_MAX_LENGTH:
        errors['sku'] = [f'SKU must be {SKU_MAX_LENGTH} characters or less']

    slug = document.get('slug')
    if not _is_blank(slug) and not SLUG_PATTERN.match(slug):
        errors['slug'] = ['Slug must be lowercase, alphanumeric, and use hyphens for spaces']

    if product_type not in ProductType.values:
        errors['product_type'] = [f"Unknown product type '{product_type}'"]
    if structure not in ProductStructure.values:
        errors['product_structure'] = [f"Unknown product structure '{structure}'"]

    if product_type == ProductType.DIGITAL:
        if structure == ProductStructure.VARIANT:
            errors['product_structure'] = ['Digital products cannot have variants']
        if to_quantity(document.get('base_stock')):
            errors['base_stock'] = ['Digital products should not have stock']
        if to_quantity(document.get('min_stock')):
            errors['min_stock'] = ['Digital products should not have minimum stock threshold']

    if structure == ProductStructure.SIMPLE:
        _check_non_negative(errors, 'cost_price', document.get('cost_price'), 'Cost price')
        _check_non_negative(errors, 'selling_price', document.get('selling_price'), 'Selling price')
        _check_non_negative(errors, 'base_stock', document.get('base_stock'), 'Stock')
        _check_non_negative(errors, 'min_stock', document.get('min_stock'), 'Minimum stock')

        if product_type == ProductType.PHYSICAL:
            if _is_blank(document.get('cost_price')):
                errors.setdefault('cost_price', []).append('Cost price is required for simple products')
            if _is_blank(document.get('selling_price')):
                errors.setdefault('selling_price', []).append('Selling price is required for simple products')

        cost = to_quantity(document.get('cost_price'))
        selling = to_quantity(document.get('selling_price'))
        if cost and selling and selling <= cost and 'selling_price' not in errors:
            errors['selling_price'] = ['Selling price must be greater than cost price']

    elif structure == ProductStructure.VARIANT:
        variant_messages = _variant_errors(document)
        if variant_messages:
            errors['variants'] = variant_messages

    if errors:
        raise ValidationError(errors)
