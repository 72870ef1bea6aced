"""
App settings with defaults.

Each value can be overridden in the Django settings module using the
``PRODUCTS_`` prefixed name.
"""

from django.conf import settings


DEFAULTS = {
    'STOREFRONT_BASE_URL': 'https://yourstore.com',
    'VARIANT_SKU_SEGMENT_LENGTH': 3,
    'OG_TITLE_MAX_LENGTH': 60,
    'OG_DESCRIPTION_MAX_LENGTH': 157,
}


def get_setting(name):
    return getattr(settings, f'PRODUCTS_{name}', DEFAULTS[name])


def storefront_base_url():
    return (get_setting('STOREFRONT_BASE_URL') or DEFAULTS['STOREFRONT_BASE_URL']).rstrip('/')
