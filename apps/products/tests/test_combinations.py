from decimal import Decimal

import pytest

from apps.products.derivation import (
    BuilderPhase,
    CombinationError,
    VariantCombinationBuilder,
    generate_combinations,
    make_attribute,
    merge_combinations,
)


@pytest.fixture
def builder():
    builder = VariantCombinationBuilder(['size', 'color', 'material'], product_name='T-Shirt', base_sku='TSHIRT')
    builder.mark_ready()
    return builder


def test_make_attribute_uses_default_options():
    attribute = make_attribute('Size')
    assert attribute['id'] == 'attr-size'
    assert attribute['options'] == ['XS', 'S', 'M', 'L', 'XL', 'XXL']
    assert attribute['allow_custom'] is True


def test_make_attribute_requires_name():
    with pytest.raises(CombinationError):
        make_attribute('  ')


def test_generates_product_of_selected_values(builder):
    builder.select('attr-size', ['S', 'M'])
    builder.select('attr-color', ['Red', 'Blue', 'Black'])
    combinations = builder.select('attr-material', ['Cotton'])

    assert len(combinations) == 2 * 3 * 1
    keys = {tuple(sorted(c['attributes'].items())) for c in combinations}
    assert len(keys) == 6


def test_attributes_without_selection_are_left_out():
    size = make_attribute('size')
    color = make_attribute('color')
    combinations = generate_combinations([size, color], {size['id']: ['S', 'M'], color['id']: []})

    assert [c['attributes'] for c in combinations] == [{'size': 'S'}, {'size': 'M'}]


def test_attribute_maps_follow_declared_order():
    size = make_attribute('size')
    color = make_attribute('color')
    combinations = generate_combinations([size, color], {color['id']: ['Red'], size['id']: ['M']})

    assert list(combinations[0]['attributes']) == ['size', 'color']


def test_adding_a_value_preserves_entered_data(builder):
    builder.select('attr-size', ['S', 'M'])
    builder.select('attr-color', ['Red'])
    builder.update_combination(
        0, selling_price=Decimal('19.90'), stock=7, images=['s-red.jpg'], name='Small red tee'
    )

    combinations = builder.select('attr-size', ['S', 'M', 'L'])

    assert len(combinations) == 3
    small = next(c for c in combinations if c['attributes'] == {'size': 'S', 'color': 'Red'})
    assert small['selling_price'] == Decimal('19.90')
    assert small['stock'] == 7
    assert small['images'] == ['s-red.jpg']
    assert small['name'] == 'Small red tee'


def test_combinations_without_match_are_dropped(builder):
    builder.select('attr-size', ['S', 'M'])
    combinations = builder.select('attr-size', ['M'])

    assert [c['attributes'] for c in combinations] == [{'size': 'M'}]


def test_merge_matches_regardless_of_key_order():
    existing = [{'attributes': {'color': 'Red', 'size': 'M'}, 'stock': 3}]
    generated = [{'attributes': {'size': 'M', 'color': 'Red'}, 'stock': None}]

    merged = merge_combinations(existing, generated)

    assert merged[0]['stock'] == 3
    assert list(merged[0]['attributes']) == ['size', 'color']


def test_empty_selection_clears_when_ready(builder):
    builder.select('attr-size', ['S'])
    assert builder.select('attr-size', []) == []


def test_empty_selection_keeps_combinations_while_loading():
    builder = VariantCombinationBuilder(['size'])
    persisted = [{'sku': 'TSHIRT-M', 'attributes': {'size': 'M'}}]
    builder.combinations = list(persisted)

    assert builder.phase is BuilderPhase.LOADING
    assert builder.regenerate() == persisted


def test_load_rebuilds_selection_without_regenerating():
    builder = VariantCombinationBuilder(['size'], base_sku='TSHIRT')
    persisted = [
        {'sku': 'CUSTOM-1', 'attributes': {'size': 'M', 'color': 'Teal'}, 'stock': 4},
        {'sku': 'CUSTOM-2', 'attributes': {'size': 'L', 'color': 'Teal'}, 'stock': 2},
    ]

    combinations = builder.load(persisted)

    assert builder.phase is BuilderPhase.READY
    assert [c['sku'] for c in combinations] == ['CUSTOM-1', 'CUSTOM-2']
    assert builder.selected_values['attr-size'] == ['M', 'L']
    assert builder.selected_values['attr-color'] == ['Teal']
    assert 'Teal' in builder.find_attribute_by_name('color')['options']


def test_load_twice_is_rejected():
    builder = VariantCombinationBuilder(['size'])
    builder.load([])
    with pytest.raises(CombinationError):
        builder.load([])


def test_unknown_option_rejected_without_custom_values():
    builder = VariantCombinationBuilder()
    builder.add_attribute('size', ['S', 'M'], allow_custom=False)
    builder.mark_ready()

    with pytest.raises(CombinationError):
        builder.select('attr-size', ['XL'])


def test_custom_option_is_added(builder):
    builder.select('attr-size', ['3XL'])
    assert '3XL' in builder.get_attribute('attr-size')['options']


def test_duplicate_attribute_rejected(builder):
    with pytest.raises(CombinationError):
        builder.add_attribute('Size')


def test_remove_attribute_regenerates(builder):
    builder.select('attr-size', ['S', 'M'])
    builder.select('attr-color', ['Red'])

    combinations = builder.remove_attribute('attr-color')

    assert [c['attributes'] for c in combinations] == [{'size': 'S'}, {'size': 'M'}]


def test_identifiers_generated_for_new_combinations(builder):
    builder.select('attr-size', ['M'])
    combination = builder.select('attr-color', ['Red'])[0]

    assert combination['sku'] == 'TSHIRT-M-RED'
    assert combination['slug'] == 'm-red'
    assert combination['name'] == 'T-Shirt - M Red'


def test_manual_identifiers_survive_until_regenerated(builder):
    builder.select('attr-size', ['M'])
    builder.update_combination(0, sku='MY-SKU')

    builder.set_product(base_sku='SHIRT')
    assert builder.combinations[0]['sku'] == 'MY-SKU'

    builder.regenerate_identifiers(fields=['sku'])
    assert builder.combinations[0]['sku'] == 'SHIRT-M'


def test_attributes_cannot_be_edited_directly(builder):
    builder.select('attr-size', ['M'])
    with pytest.raises(CombinationError):
        builder.update_combination(0, attributes={'size': 'L'})


def test_remove_combination_out_of_range(builder):
    with pytest.raises(CombinationError):
        builder.remove_combination(5)


def test_to_data(builder):
    builder.select('attr-size', ['M'])
    data = builder.to_data()

    assert data['attributes'][0] == {'id': 'attr-size', 'name': 'size', 'values': ['M']}
    assert len(data['combinations']) == 1
