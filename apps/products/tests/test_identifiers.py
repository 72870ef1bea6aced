from apps.products.derivation import (
    fill_identifiers,
    generate_variant_name,
    generate_variant_sku,
    generate_variant_slug,
)


def test_sku_is_deterministic():
    first = generate_variant_sku('TSHIRT', {'size': 'M', 'color': 'Red'})
    second = generate_variant_sku('TSHIRT', {'size': 'M', 'color': 'Red'})
    assert first == second == 'TSHIRT-M-RED'


def test_sku_uses_value_prefixes():
    assert generate_variant_sku('tshirt', {'size': 'Medium', 'color': 'Purple'}) == 'TSHIRT-MED-PUR'


def test_sku_segment_length_from_settings(settings):
    settings.PRODUCTS_VARIANT_SKU_SEGMENT_LENGTH = 2
    assert generate_variant_sku('MUG', {'color': 'White'}) == 'MUG-WH'


def test_sku_full_values():
    assert generate_variant_sku('MUG', {'color': 'White'}, segment_length=None) == 'MUG-WHITE'


def test_sku_without_attributes_is_base():
    assert generate_variant_sku('mug', {}) == 'MUG'


def test_slug_is_made_of_attribute_values():
    assert generate_variant_slug({'size': 'X Large', 'color': 'Navy/Blue'}) == 'x-large-navy-blue'


def test_slug_fallback():
    assert generate_variant_slug({}) == 'variant'
    assert generate_variant_slug({'size': '!!!'}) == 'variant'


def test_name_lists_values_in_declared_order():
    assert generate_variant_name('T-Shirt', {'color': 'Red', 'size': 'M'}) == 'T-Shirt - Red M'


def test_name_without_attributes():
    assert generate_variant_name('T-Shirt', {}) == 'T-Shirt'


def test_fill_only_empty_fields():
    combination = {'sku': 'MANUAL', 'slug': '', 'name': None, 'attributes': {'size': 'M'}}

    filled = fill_identifiers(combination, 'TSHIRT', 'T-Shirt')

    assert filled == {'sku': 'MANUAL', 'slug': 'm', 'name': 'T-Shirt - M', 'attributes': {'size': 'M'}}
    assert combination['slug'] == ''


def test_fill_regenerates_selected_fields():
    combination = {'sku': 'MANUAL', 'slug': 'custom', 'name': 'Custom', 'attributes': {'size': 'M'}}

    filled = fill_identifiers(combination, 'TSHIRT', 'T-Shirt', regenerate=['sku'])

    assert filled['sku'] == 'TSHIRT-M'
    assert filled['slug'] == 'custom'
    assert filled['name'] == 'Custom'


def test_fill_is_idempotent():
    combination = {'attributes': {'size': 'M', 'color': 'Red'}}
    once = fill_identifiers(combination, 'TSHIRT', 'T-Shirt', regenerate=True)
    assert fill_identifiers(once, 'TSHIRT', 'T-Shirt', regenerate=True) == once
