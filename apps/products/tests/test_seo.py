import pytest

from apps.products.derivation import derive_robots, synthesize_seo, truncate
from apps.products.derivation.seo import canonical_url, is_in_stock


def simple(**overrides):
    document = {
        'name': 'Canvas Tote Bag',
        'slug': 'canvas-tote-bag',
        'product_type': 'physical',
        'product_structure': 'simple',
        'published': True,
        'base_stock': 20,
        'min_stock': 5,
        'image_urls': [],
        'variants': [],
    }
    document.update(overrides)
    return document


@pytest.mark.parametrize('overrides,expected', [
    ({}, 'index,follow'),
    ({'base_stock': 3}, 'noindex,follow'),
    ({'published': False}, 'noindex,nofollow'),
    ({'base_stock': None}, 'noindex,follow'),
])
def test_robots_for_simple_products(overrides, expected):
    assert derive_robots(simple(**overrides)) == expected


def test_robots_for_variant_products():
    document = simple(product_structure='variant', published=None, variants=[
        {'status': 'out_of_stock', 'published': True},
        {'status': 'selling', 'published': True},
    ])
    assert derive_robots(document) == 'index,follow'

    document['variants'][1]['published'] = False
    assert derive_robots(document) == 'noindex,follow'

    document['variants'][0]['published'] = False
    assert derive_robots(document) == 'noindex,nofollow'


def test_digital_products_are_in_stock():
    assert is_in_stock({'product_type': 'digital'}) is True


def test_robots_ignores_manual_value():
    seo = synthesize_seo(simple(published=False, seo={'robots': 'index,follow'}))
    assert seo['robots'] == 'noindex,nofollow'


def test_truncate_keeps_short_text():
    assert truncate('short', 10) == 'short'


def test_og_description_truncated():
    description = 'x' * 200

    seo = synthesize_seo(simple(seo={'description': description}))

    assert len(seo['og_description']) == 157
    assert seo['og_description'] == 'x' * 154 + '...'


def test_og_title_truncated_from_name():
    seo = synthesize_seo(simple(name='N' * 80))
    assert len(seo['og_title']) == 60
    assert seo['og_title'].endswith('...')


def test_og_title_prefers_seo_title():
    seo = synthesize_seo(simple(seo={'title': 'Best tote'}))
    assert seo['og_title'] == 'Best tote'


def test_manual_og_values_win():
    seo = synthesize_seo(simple(seo={'og_title': 'Manual', 'og_description': 'Manual text', 'og_image': 'a.jpg'}))
    assert seo['og_title'] == 'Manual'
    assert seo['og_description'] == 'Manual text'
    assert seo['og_image'] == 'a.jpg'


def test_og_description_fallbacks():
    assert synthesize_seo(simple(description='From description'))['og_description'] == 'From description'
    assert synthesize_seo(simple())['og_description'] == (
        'Discover Canvas Tote Bag - quality product available now!'
    )


def test_canonical_from_base_url(storefront_base_url):
    seo = synthesize_seo(simple())
    assert seo['canonical'] == f'{storefront_base_url}/products/canvas-tote-bag'


def test_canonical_base_url_argument():
    assert canonical_url('mug', 'https://other.example.com/') == 'https://other.example.com/products/mug'


def test_manual_canonical_wins():
    seo = synthesize_seo(simple(seo={'canonical': 'https://blog.example.com/totes'}))
    assert seo['canonical'] == 'https://blog.example.com/totes'


def test_generated_canonical_follows_slug(storefront_base_url):
    stale = f'{storefront_base_url}/products/old-slug'
    seo = synthesize_seo(simple(seo={'canonical': stale}))
    assert seo['canonical'] == f'{storefront_base_url}/products/canvas-tote-bag'


def test_og_image_prefers_first_variant_with_images():
    document = simple(
        product_structure='variant',
        image_urls=['main.jpg'],
        variants=[{'images': []}, {'images': ['v2.jpg', 'v2b.jpg']}, {'images': ['v3.jpg']}],
    )
    assert synthesize_seo(document)['og_image'] == 'v2.jpg'


def test_og_image_falls_back_to_product_images():
    assert synthesize_seo(simple(image_urls=['main.jpg']))['og_image'] == 'main.jpg'
    assert synthesize_seo(simple())['og_image'] is None


def test_synthesis_is_idempotent():
    document = simple(description='d' * 300, seo={'keywords': ['tote']})
    first = synthesize_seo(document)
    second = synthesize_seo(dict(document, seo=first))
    assert first == second
