from decimal import Decimal

import pytest
from rest_framework.test import APIClient


BASE_URL = 'https://shop.example.com'


@pytest.fixture(autouse=True)
def storefront_base_url(settings):
    settings.PRODUCTS_STOREFRONT_BASE_URL = BASE_URL
    settings.PRODUCTS_VARIANT_SKU_SEGMENT_LENGTH = 3
    return BASE_URL


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def simple_document():
    return {
        'name': 'Canvas Tote Bag',
        'sku': 'tote',
        'description': 'Heavy canvas tote bag',
        'product_type': 'physical',
        'product_structure': 'simple',
        'cost_price': Decimal('12.00'),
        'selling_price': Decimal('29.90'),
        'base_stock': 20,
        'min_stock': 5,
        'published': True,
        'image_urls': ['https://cdn.example.com/tote.jpg'],
    }


@pytest.fixture
def variant_document():
    return {
        'name': 'T-Shirt',
        'sku': 'TSHIRT',
        'description': 'Cotton t-shirt',
        'product_type': 'physical',
        'product_structure': 'variant',
        'variants': [
            {
                'attributes': {'size': 'M', 'color': 'Red'},
                'cost_price': Decimal('10.00'),
                'selling_price': Decimal('25.00'),
                'stock': 10,
                'min_stock': 2,
                'images': ['https://cdn.example.com/m-red.jpg'],
            },
            {
                'attributes': {'size': 'L', 'color': 'Red'},
                'cost_price': Decimal('10.00'),
                'selling_price': Decimal('25.00'),
                'stock': 1,
                'min_stock': 2,
            },
        ],
    }
