"""
Django signals for the products app.
Keeps the derived fields of a product in sync when one of its variants is
saved or deleted on its own, e.g. from the admin.
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Product, Variant
from .services.catalog import ProductCatalogService, is_product_refresh_suspended


def _refresh_product(product_id):
    product = Product.objects.filter(pk=product_id).first()
    if product is not None:
        ProductCatalogService.refresh(product)


@receiver(post_save, sender=Variant)
def refresh_product_on_variant_save(sender, instance, raw=False, **kwargs):
    """
    Re-derive the parent product after a standalone variant save.
    """
    if raw or is_product_refresh_suspended():
        return
    _refresh_product(instance.product_id)


@receiver(post_delete, sender=Variant)
def refresh_product_on_variant_delete(sender, instance, origin=None, **kwargs):
    if is_product_refresh_suspended():
        return
    # Cascade from deleting the product itself
    if isinstance(origin, Product) or getattr(origin, 'model', None) is Product:
        return
    _refresh_product(instance.product_id)
