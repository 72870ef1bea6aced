from decimal import Decimal

import pytest

from apps.products.services import ProductCatalogService, VariantSelectionService


pytestmark = pytest.mark.django_db


def variant(size, color, stock=10, **extra):
    return dict({
        'attributes': {'size': size, 'color': color},
        'cost_price': Decimal('10.00'),
        'selling_price': Decimal('25.00'),
        'stock': stock,
        'min_stock': 2,
    }, **extra)


@pytest.fixture
def product():
    return ProductCatalogService.save_document({
        'name': 'T-Shirt',
        'sku': 'TSHIRT',
        'product_structure': 'variant',
        'variants': [
            variant('M', 'Red'),
            variant('M', 'Black'),
            variant('XL', 'Black', stock=0),
            variant('S', 'White', published=False),
        ],
    })


def test_exact_match(product):
    result = VariantSelectionService.find_best_match(product, {'size': 'M', 'color': 'Black'})

    assert result['type'] == 'variant'
    assert result['sku'] == 'TSHIRT-M-BLA'
    assert result['is_exact_match'] is True


def test_attribute_names_are_case_insensitive(product):
    result = VariantSelectionService.find_best_match(product, {'Size': 'XL'})
    assert result['sku'] == 'TSHIRT-XL-BLA'


def test_partial_match_prefers_sellable(product):
    match = VariantSelectionService.find_best_matching_variant(product, {'size': 'XL', 'color': 'Red'})
    assert match.sku == 'TSHIRT-M-RED'


def test_no_selection_returns_sellable_variant(product):
    match = VariantSelectionService.find_best_matching_variant(product, {})
    assert match.is_sellable


def test_unpublished_variants_are_hidden(product):
    options = VariantSelectionService.get_all_available_options(product, {})

    assert [o['value'] for o in options['size']['options']] == ['M', 'XL']
    assert [o['value'] for o in options['color']['options']] == ['Red', 'Black']


def test_options_narrow_with_selection(product):
    available = VariantSelectionService.get_available_options_for_selection(
        product, {'size': 'XL'}, 'color'
    )
    assert available == ['Black']


def test_selected_option_is_flagged(product):
    options = VariantSelectionService.get_all_available_options(product, {'size': 'M'})
    assert [o['is_selected'] for o in options['size']['options']] == [True, False]


def test_archived_product_has_no_match(product):
    ProductCatalogService.archive(product)

    result = VariantSelectionService.find_best_match(product, {'size': 'M'})

    assert result['type'] == 'none'
