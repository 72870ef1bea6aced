"""
Service for saving products and their variants.

Every write goes through the pure derivation pipeline before it reaches the
database, so status, published and SEO fields are always consistent with
the stock data being saved.
"""

import contextlib
import contextvars
import logging
from typing import Any, Dict, Iterable, Optional

from django.core.exceptions import ValidationError
from django.db import transaction

from apps.products.choices import ProductStatus
from apps.products.derivation import derive_status_and_seo
from apps.products.derivation.combinations import attribute_key
from apps.products.derivation.pipeline import fill_variant_identifiers
from apps.products.models import Product, Variant
from apps.products.validators import validate_product_document


logger = logging.getLogger(__name__)

# Stored on the product but not part of the derivation document
EXTRA_FIELDS = (
    'tags', 'weight', 'warranty', 'is_cod_available', 'is_free_shipping',
    'is_new_arrival', 'file_path', 'file_size', 'download_format',
    'license_type', 'download_limit',
)

_refresh_suspended = contextvars.ContextVar('product_refresh_suspended', default=False)


@contextlib.contextmanager
def product_refresh_suspended():
    """Stop variant signals from refreshing their product while the service writes."""
    token = _refresh_suspended.set(True)
    try:
        yield
    finally:
        _refresh_suspended.reset(token)


def is_product_refresh_suspended():
    return _refresh_suspended.get()


class ProductCatalogService:
    """
    Service to create, update, archive and publish products.
    """

    @staticmethod
    def prepare_document(document: Dict[str, Any], instance: Optional[Product] = None) -> Dict[str, Any]:
        """
        Merge an incoming document over the stored state of ``instance``.

        Keys missing from ``document`` keep their stored value, so partial
        updates work. Identifiers of variants are filled where empty; the
        structure is normalized later by the derivation pipeline.
        """
        stored = instance.to_document() if instance is not None and instance.pk else {}
        prepared = dict(stored)
        prepared.update({k: v for k, v in document.items() if k not in EXTRA_FIELDS and k != 'categories'})

        if 'seo' in document:
            prepared['seo'] = {**stored.get('seo', {}), **(document.get('seo') or {})}
        if prepared.get('sku'):
            prepared['sku'] = str(prepared['sku']).strip().upper()
        if not prepared.get('slug') and prepared.get('name'):
            prepared['slug'] = Product.unique_slug(
                prepared['name'], exclude_pk=instance.pk if instance is not None else None
            )

        variants = [
            dict(variant, sku=str(variant['sku']).strip().upper()) if variant.get('sku') else dict(variant)
            for variant in prepared.get('variants') or []
        ]
        if 'variants' in document and stored.get('variants'):
            variants = ProductCatalogService._merge_stored_variants(stored['variants'], variants)
        prepared['variants'] = variants
        return fill_variant_identifiers(prepared)

    @staticmethod
    def _merge_stored_variants(stored, incoming):
        """
        Lay incoming variants over the stored variants they refer to.

        A variant is matched by id, then by SKU, then by its attribute map.
        Stored fields the payload leaves out survive, so an archived or
        unpublished variant stays that way until it is changed explicitly.
        """
        by_id = {variant['id']: variant for variant in stored if variant.get('id')}
        by_sku = {variant['sku']: variant for variant in stored if variant.get('sku')}
        by_attributes = {}
        for variant in stored:
            by_attributes.setdefault(attribute_key(variant.get('attributes')), variant)

        merged = []
        used = set()
        for variant in incoming:
            match = (
                by_id.get(variant.get('id'))
                or by_sku.get(variant.get('sku'))
                or (by_attributes.get(attribute_key(variant['attributes'])) if variant.get('attributes') else None)
            )
            if match is None or match['id'] in used:
                merged.append(variant)
                continue
            used.add(match['id'])
            merged.append({**match, **variant, 'id': match['id']})
        return merged

    @staticmethod
    def preview(document: Dict[str, Any], instance: Optional[Product] = None) -> Dict[str, Any]:
        """Validate and derive without saving anything."""
        prepared = ProductCatalogService.prepare_document(document, instance)
        validate_product_document(prepared)

        slug_taken = Product.objects.filter(slug=prepared['slug'])
        if instance is not None and instance.pk:
            slug_taken = slug_taken.exclude(pk=instance.pk)
        if slug_taken.exists():
            raise ValidationError({'slug': [f"Slug '{prepared['slug']}' already exists"]})

        return derive_status_and_seo(prepared)

    @staticmethod
    def save_document(document: Dict[str, Any], instance: Optional[Product] = None) -> Product:
        """
        Create or update a product from a document.

        Raises ValidationError with per-field messages; nothing is saved then.
        """
        derived = ProductCatalogService.preview(document, instance)

        product = instance if instance is not None else Product()
        for field in EXTRA_FIELDS:
            if field in document:
                setattr(product, field, document[field])

        with transaction.atomic():
            ProductCatalogService._persist(product, derived)
            if 'categories' in document:
                product.categories.set(document['categories'] or [])

        logger.info(
            "Saved product '%s' (%s, status=%s, robots=%s, %d variants)",
            product.slug, product.product_structure, product.status,
            product.seo.get('robots'), len(derived['variants']),
        )
        return product

    @staticmethod
    def refresh(product: Product) -> Product:
        """Re-run the derivation on the stored state of ``product``."""
        derived = derive_status_and_seo(product.to_document())
        with transaction.atomic():
            ProductCatalogService._persist(product, derived)
        logger.debug("Refreshed derived fields of '%s'", product.slug)
        return product

    @staticmethod
    def archive(product: Product) -> Product:
        """Soft removal: the product and all its variants become archived."""
        with product_refresh_suspended():
            document = product.to_document()
            if not product.is_variant_product:
                document['status'] = ProductStatus.ARCHIVED.value
                document['published'] = False
            for variant in document['variants']:
                variant['status'] = ProductStatus.ARCHIVED.value
                variant['published'] = False
            ProductCatalogService._save_derived(product, document)

        logger.info("Archived product '%s'", product.slug)
        return product

    @staticmethod
    def restore(product: Product) -> Product:
        """Undo an archive; the product comes back unpublished."""
        with product_refresh_suspended():
            document = product.to_document()
            if document.get('status') == ProductStatus.ARCHIVED:
                document['status'] = None
            document['published'] = False
            for variant in document['variants']:
                if variant.get('status') == ProductStatus.ARCHIVED:
                    variant['status'] = None
                variant['published'] = False
            ProductCatalogService._save_derived(product, document)

        logger.info("Restored product '%s' (status=%s)", product.slug, product.status)
        return product

    @staticmethod
    def bulk_archive(ids: Iterable[int], archived: bool = True) -> int:
        count = 0
        for product in Product.objects.filter(pk__in=list(ids)):
            if archived:
                ProductCatalogService.archive(product)
            else:
                ProductCatalogService.restore(product)
            count += 1
        return count

    @staticmethod
    def set_published(product: Product, published: bool, variant_sku: Optional[str] = None) -> Product:
        """
        Publish or unpublish a simple product or one variant.

        Publishing an archived unit brings it back; a unit without stock
        configuration stays a draft and therefore unpublished.
        """
        with product_refresh_suspended():
            document = product.to_document()

            if product.is_variant_product:
                if not variant_sku:
                    raise ValidationError({'variant_sku': ['A variant SKU is required for variant products']})
                unit = next(
                    (v for v in document['variants'] if v['sku'] == variant_sku.strip().upper()),
                    None,
                )
                if unit is None:
                    raise ValidationError({'variant_sku': [f"Variant '{variant_sku}' not found"]})
            else:
                unit = document

            if published and unit.get('status') == ProductStatus.ARCHIVED:
                unit['status'] = None
            unit['published'] = bool(published)
            ProductCatalogService._save_derived(product, document)

        logger.info(
            "Set published=%s on '%s'%s", published, product.slug,
            f" variant {variant_sku}" if variant_sku else '',
        )
        return product

    # -------------------------------------------------------------------------
    # Persistence helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _save_derived(product, document):
        derived = derive_status_and_seo(document)
        with transaction.atomic():
            ProductCatalogService._persist(product, derived)

    @staticmethod
    def _persist(product, derived):
        with product_refresh_suspended():
            product.apply_document(derived)
            product.save()
            ProductCatalogService._sync_variants(product, derived['variants'])

    @staticmethod
    def _sync_variants(product, documents):
        existing = {variant.pk: variant for variant in product.variants.all()}
        by_sku = {variant.sku: variant for variant in existing.values()}
        stored_skus = {pk: variant.sku for pk, variant in existing.items()}

        variants = []
        for position, document in enumerate(documents):
            variant = existing.get(document.get('id')) or by_sku.get(document.get('sku'))
            if variant is None or variant in variants:
                variant = Variant(product=product)
            variant.product = product
            variant.apply_document(document)
            variant.position = position
            variants.append(variant)

        kept = {variant.pk for variant in variants if variant.pk}
        stale = [pk for pk in existing if pk not in kept]
        if stale:
            product.variants.filter(pk__in=stale).delete()

        # Park renamed SKUs so a swap never collides on (product, sku)
        renamed = [v.pk for v in variants if v.pk and v.sku != stored_skus[v.pk]]
        for pk in renamed:
            Variant.objects.filter(pk=pk).update(sku=f"~{pk}")

        for variant in variants:
            variant.save()
        return variants
