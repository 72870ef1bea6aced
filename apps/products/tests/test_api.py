import pytest

from apps.products.models import Category, Product
from apps.products.services import ProductCatalogService


pytestmark = pytest.mark.django_db


@pytest.fixture
def simple_payload():
    return {
        'name': 'Canvas Tote Bag',
        'sku': 'tote',
        'cost_price': '12.00',
        'selling_price': '29.90',
        'base_stock': 20,
        'min_stock': 5,
        'published': True,
        'image_urls': ['https://cdn.example.com/tote.jpg'],
    }


@pytest.fixture
def variant_payload():
    return {
        'name': 'T-Shirt',
        'sku': 'TSHIRT',
        'product_structure': 'variant',
        'variants': [
            {'attributes': {'size': 'M', 'color': 'Red'}, 'cost_price': '10.00',
             'selling_price': '25.00', 'stock': 10, 'min_stock': 2},
            {'attributes': {'size': 'L', 'color': 'Red'}, 'cost_price': '10.00',
             'selling_price': '25.00', 'stock': 0, 'min_stock': 2},
        ],
    }


def test_create_simple_product(api_client, simple_payload):
    response = api_client.post('/api/products/', simple_payload, format='json')

    assert response.status_code == 201
    assert response.data['slug'] == 'canvas-tote-bag'
    assert response.data['sku'] == 'TOTE'
    assert response.data['status'] == 'selling'
    assert response.data['seo']['robots'] == 'index,follow'
    assert response.data['seo']['og_image'] == 'https://cdn.example.com/tote.jpg'


def test_status_in_payload_is_ignored(api_client, simple_payload):
    simple_payload.update(status='selling', base_stock=None, min_stock=None)

    response = api_client.post('/api/products/', simple_payload, format='json')

    assert response.data['status'] == 'draft'
    assert response.data['published'] is False
    assert response.data['seo']['robots'] == 'noindex,nofollow'


def test_create_variant_product(api_client, variant_payload):
    response = api_client.post('/api/products/', variant_payload, format='json')

    assert response.status_code == 201
    assert response.data['status'] is None
    assert response.data['selling_price'] is None
    assert [v['sku'] for v in response.data['variants']] == ['TSHIRT-M-RED', 'TSHIRT-L-RED']
    assert [v['status'] for v in response.data['variants']] == ['selling', 'out_of_stock']


def test_duplicate_variant_skus_rejected(api_client, variant_payload):
    variant_payload['variants'][0]['sku'] = 'same'
    variant_payload['variants'][1]['sku'] = 'SAME'

    response = api_client.post('/api/products/', variant_payload, format='json')

    assert response.status_code == 400
    assert 'variants' in response.data
    assert Product.objects.count() == 0


def test_missing_prices_rejected(api_client, simple_payload):
    del simple_payload['cost_price']

    response = api_client.post('/api/products/', simple_payload, format='json')

    assert response.status_code == 400
    assert 'cost_price' in response.data


def test_list_and_filter(api_client, simple_payload, variant_payload):
    api_client.post('/api/products/', simple_payload, format='json')
    api_client.post('/api/products/', variant_payload, format='json')

    response = api_client.get('/api/products/')
    assert response.data['count'] == 2

    response = api_client.get('/api/products/', {'status': 'selling'})
    assert [p['slug'] for p in response.data['results']] == ['canvas-tote-bag']

    response = api_client.get('/api/products/', {'product_structure': 'variant'})
    assert [p['slug'] for p in response.data['results']] == ['t-shirt']

    response = api_client.get('/api/products/', {'in_stock': 'true'})
    assert response.data['count'] == 2


def test_filter_by_category(api_client, simple_payload):
    category = Category.objects.create(name='Bags')
    simple_payload['categories'] = [category.pk]
    api_client.post('/api/products/', simple_payload, format='json')

    assert api_client.get('/api/products/', {'category': 'bags'}).data['count'] == 1
    assert api_client.get('/api/products/', {'category': 'shoes'}).data['count'] == 0


def test_retrieve_by_slug(api_client, variant_payload):
    api_client.post('/api/products/', variant_payload, format='json')

    response = api_client.get('/api/products/t-shirt/')

    assert response.status_code == 200
    assert len(response.data['variants']) == 2


def test_partial_update(api_client, simple_payload):
    api_client.post('/api/products/', simple_payload, format='json')

    response = api_client.patch('/api/products/canvas-tote-bag/', {'base_stock': 1}, format='json')

    assert response.status_code == 200
    assert response.data['status'] == 'out_of_stock'
    assert response.data['seo']['robots'] == 'noindex,follow'


def test_delete_archives(api_client, simple_payload):
    api_client.post('/api/products/', simple_payload, format='json')

    response = api_client.delete('/api/products/canvas-tote-bag/')

    assert response.status_code == 200
    assert response.data['status'] == 'archived'
    assert Product.objects.filter(slug='canvas-tote-bag').exists()

    response = api_client.post('/api/products/canvas-tote-bag/restore/')
    assert response.data['status'] == 'selling'
    assert response.data['published'] is False


def test_toggle_published(api_client, variant_payload):
    api_client.post('/api/products/', variant_payload, format='json')

    response = api_client.post('/api/products/t-shirt/toggle-published/', {'published': False}, format='json')
    assert response.status_code == 400
    assert 'variant_sku' in response.data

    response = api_client.post(
        '/api/products/t-shirt/toggle-published/',
        {'published': False, 'variant_sku': 'TSHIRT-M-RED'},
        format='json',
    )
    assert response.status_code == 200
    assert response.data['published'] is False


def test_bulk_archive(api_client, simple_payload):
    product = ProductCatalogService.save_document(dict(simple_payload, sku='TOTE'))

    response = api_client.post('/api/products/bulk-archive/', {'ids': [product.pk]}, format='json')

    assert response.data == {'updated': 1, 'archived': True}
    product.refresh_from_db()
    assert product.status == 'archived'


def test_preview(api_client, simple_payload):
    response = api_client.post('/api/products/preview/', simple_payload, format='json')

    assert response.status_code == 200
    assert response.data['status'] == 'selling'
    assert response.data['seo']['canonical'] == 'https://shop.example.com/products/canvas-tote-bag'
    assert Product.objects.count() == 0


def test_variant_options(api_client, variant_payload):
    api_client.post('/api/products/', variant_payload, format='json')

    response = api_client.get('/api/products/t-shirt/variant-options/', {'size': 'L', 'color': 'Red'})

    assert response.data['type'] == 'variant'
    assert response.data['sku'] == 'TSHIRT-L-RED'
    assert response.data['is_sellable'] is False


def test_variant_list_filters(api_client, variant_payload):
    api_client.post('/api/products/', variant_payload, format='json')

    response = api_client.get('/api/variants/', {'attribute': 'size:L'})
    assert [v['sku'] for v in response.data['results']] == ['TSHIRT-L-RED']

    response = api_client.get('/api/variants/', {'status': 'selling'})
    assert [v['sku'] for v in response.data['results']] == ['TSHIRT-M-RED']


def test_generate_combinations(api_client):
    payload = {
        'product_name': 'T-Shirt',
        'base_sku': 'TSHIRT',
        'attributes': [{'name': 'size'}, {'name': 'color'}],
        'selected_values': {'attr-size': ['S', 'M'], 'attr-color': ['Red']},
    }

    response = api_client.post('/api/combinations/generate/', payload, format='json')

    assert response.status_code == 200
    assert [c['sku'] for c in response.data['combinations']] == ['TSHIRT-S-RED', 'TSHIRT-M-RED']


def test_generate_combinations_preserves_existing(api_client):
    payload = {
        'base_sku': 'TSHIRT',
        'attributes': [{'name': 'size'}],
        'selected_values': {'attr-size': ['S', 'M']},
        'combinations': [{'sku': 'KEEP-S', 'attributes': {'size': 'S'}, 'stock': 4}],
    }

    response = api_client.post('/api/combinations/generate/', payload, format='json')

    combinations = response.data['combinations']
    assert combinations[0]['sku'] == 'KEEP-S'
    assert combinations[0]['stock'] == 4
    assert combinations[1]['sku'] == 'TSHIRT-M'


def test_generate_combinations_invalid_attribute(api_client):
    payload = {'attributes': [{'name': 'size'}], 'selected_values': {'attr-weight': ['1kg']}}

    response = api_client.post('/api/combinations/generate/', payload, format='json')

    assert response.status_code == 400


def test_category_roots(api_client):
    parent = Category.objects.create(name='Clothing')
    Category.objects.create(name='T-Shirts', parent=parent)

    response = api_client.get('/api/categories/roots/')

    assert [c['name'] for c in response.data] == ['Clothing']
    assert [c['name'] for c in response.data[0]['subcategories']] == ['T-Shirts']


def test_patching_archived_product_keeps_it_archived(api_client, variant_payload):
    api_client.post('/api/products/', variant_payload, format='json')
    api_client.delete('/api/products/t-shirt/')

    response = api_client.patch(
        '/api/products/t-shirt/', {'variants': variant_payload['variants']}, format='json'
    )

    assert response.status_code == 200
    assert [(v['status'], v['published']) for v in response.data['variants']] == [
        ('archived', False), ('archived', False)
    ]
    assert Product.objects.get(slug='t-shirt').is_archived


def test_unpublished_variant_stays_unpublished_after_edit(api_client, variant_payload):
    api_client.post('/api/products/', variant_payload, format='json')
    api_client.post(
        '/api/products/t-shirt/toggle-published/',
        {'published': False, 'variant_sku': 'TSHIRT-M-RED'},
        format='json',
    )

    for variant in variant_payload['variants']:
        variant['selling_price'] = '30.00'
    response = api_client.patch(
        '/api/products/t-shirt/', {'variants': variant_payload['variants']}, format='json'
    )

    assert response.status_code == 200
    assert [(v['sku'], v['published']) for v in response.data['variants']] == [
        ('TSHIRT-M-RED', False), ('TSHIRT-L-RED', True)
    ]
    assert response.data['variants'][0]['selling_price'] == '30.00'


def test_name_with_underscore_gets_valid_slug(api_client, simple_payload):
    simple_payload['name'] = 'Cool_Bag'

    response = api_client.post('/api/products/', simple_payload, format='json')

    assert response.status_code == 201
    assert response.data['slug'] == 'cool-bag'


def test_category_filter_includes_subcategories(api_client, simple_payload):
    clothing = Category.objects.create(name='Clothing')
    bags = Category.objects.create(name='Bags', parent=clothing)
    simple_payload['categories'] = [bags.pk]
    api_client.post('/api/products/', simple_payload, format='json')

    assert api_client.get('/api/products/', {'category': 'clothing'}).data['count'] == 1
    assert api_client.get('/api/products/', {'category': 'bags'}).data['count'] == 1
