"""
SKU, slug and display name generation for variants.

All generators are deterministic: the same base identifiers and attribute
map always produce the same output.
"""

import re
from typing import Dict, Optional

from apps.products import conf


_SLUG_INVALID_CHARS = re.compile(r'[^a-z0-9-]')
_SLUG_REPEATED_HYPHENS = re.compile(r'-{2,}')

DEFAULT_VARIANT_SLUG = 'variant'

_UNSET = object()


def _attribute_values(attributes: Optional[Dict[str, str]]):
    """Non-empty attribute values in declared order."""
    if not attributes:
        return []
    return [
        str(value).strip()
        for value in attributes.values()
        if value is not None and str(value).strip()
    ]


def generate_variant_sku(base_sku: str, attributes: Optional[Dict[str, str]], segment_length=_UNSET) -> str:
    """
    Build a variant SKU from the product SKU and the attribute values.

    Example:
        generate_variant_sku('tshirt', {'size': 'Medium', 'color': 'Red'})
        -> 'TSHIRT-MED-RED'
    """
    if segment_length is _UNSET:
        segment_length = conf.get_setting('VARIANT_SKU_SEGMENT_LENGTH')

    base = (base_sku or '').strip().upper()
    segments = [
        (value[:segment_length] if segment_length else value).upper()
        for value in _attribute_values(attributes)
    ]
    if not segments:
        return base
    suffix = '-'.join(segments)
    return f"{base}-{suffix}" if base else suffix


def slugify_value(value: str) -> str:
    slug = _SLUG_INVALID_CHARS.sub('-', str(value).strip().lower())
    slug = _SLUG_REPEATED_HYPHENS.sub('-', slug)
    return slug.strip('-')


def generate_variant_slug(attributes: Optional[Dict[str, str]]) -> str:
    """Slug made only of the attribute values, e.g. 'm-red'."""
    parts = [slugify_value(value) for value in _attribute_values(attributes)]
    slug = '-'.join(part for part in parts if part)
    return slug or DEFAULT_VARIANT_SLUG


def generate_variant_name(product_name: str, attributes: Optional[Dict[str, str]]) -> str:
    product_name = (product_name or '').strip()
    values = _attribute_values(attributes)
    if not values:
        return product_name
    return f"{product_name} - {' '.join(values)}"


def fill_identifiers(combination: dict, base_sku: str, product_name: str, regenerate=False) -> dict:
    """
    Populate ``sku``, ``slug`` and ``name`` of a combination.

    Empty fields are always generated. Non-empty fields are kept unless
    ``regenerate`` is true. ``regenerate`` may also be an iterable of field
    names to regenerate only those. Returns a new dict.
    """
    if regenerate is True:
        fields_to_regenerate = {'sku', 'slug', 'name'}
    elif not regenerate:
        fields_to_regenerate = set()
    else:
        fields_to_regenerate = set(regenerate)

    attributes = combination.get('attributes') or {}
    generators = {
        'sku': lambda: generate_variant_sku(base_sku, attributes),
        'slug': lambda: generate_variant_slug(attributes),
        'name': lambda: generate_variant_name(product_name, attributes),
    }

    result = dict(combination)
    for field, generate in generators.items():
        current = result.get(field)
        if field in fields_to_regenerate or not (current and str(current).strip()):
            result[field] = generate()
    return result
