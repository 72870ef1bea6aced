from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from simple_history.models import HistoricalRecords

from apps.products.choices import ProductStatus
from apps.products.derivation import derive_variant, fill_identifiers


DOCUMENT_FIELDS = (
    'sku', 'slug', 'name', 'cost_price', 'selling_price', 'stock',
    'min_stock', 'status', 'published', 'attributes', 'images',
)


class Variant(models.Model):
    """
    Individual sellable unit of a variant product.
    Each variant is one combination of attribute values, e.g. {size: M, color: Red}.
    """
    product = models.ForeignKey(
        'products.Product',
        on_delete=models.CASCADE,
        related_name='variants',
        verbose_name='Product'
    )
    sku = models.CharField(
        max_length=100,
        blank=True,
        verbose_name='SKU',
        help_text='Generated from the product SKU and attribute values if empty'
    )
    slug = models.SlugField(
        max_length=255,
        blank=True,
        verbose_name='Slug'
    )
    name = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Name',
        help_text='Custom name (generated from product name and attributes if empty)'
    )

    # Pricing
    cost_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Cost price'
    )
    selling_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Selling price'
    )

    # Inventory
    stock = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name='Stock'
    )
    min_stock = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name='Minimum stock'
    )

    # Derived from stock on save
    status = models.CharField(
        max_length=20,
        choices=ProductStatus.choices,
        default=ProductStatus.SELLING,
        verbose_name='Status'
    )
    published = models.BooleanField(
        default=True,
        verbose_name='Published'
    )

    attributes = models.JSONField(
        default=dict,
        blank=True,
        verbose_name='Attributes',
        help_text='Attribute name to value, e.g. {"size": "M", "color": "Red"}'
    )
    images = models.JSONField(
        default=list,
        blank=True,
        verbose_name='Images'
    )
    position = models.PositiveIntegerField(
        default=0,
        verbose_name='Position'
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Created at'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Updated at'
    )

    # History tracking
    history = HistoricalRecords()

    class Meta:
        ordering = ['product', 'position', 'sku']
        unique_together = ['product', 'sku']
        verbose_name = 'Variant'
        verbose_name_plural = 'Variants'

    def __str__(self):
        return self.name or self.sku

    def save(self, *args, **kwargs):
        self.apply_document(self.derive())
        super().save(*args, **kwargs)

    def derive(self):
        """Identifiers for empty fields, then status and published."""
        document = fill_identifiers(self.to_document(), self.product.sku, self.product.name)
        return derive_variant(document)

    def to_document(self):
        document = {field: getattr(self, field) for field in DOCUMENT_FIELDS}
        document['id'] = self.pk
        document['attributes'] = dict(self.attributes or {})
        document['images'] = list(self.images or [])
        return document

    def apply_document(self, document):
        for field in DOCUMENT_FIELDS:
            if field in document:
                setattr(self, field, document[field])
        self.attributes = self.attributes or {}
        self.images = self.images or []
        self.name = self.name or ''
        return self

    def get_option_value(self, attribute_name):
        """Get the value of one attribute, matching the name case-insensitively."""
        attribute_name = attribute_name.lower()
        for name, value in (self.attributes or {}).items():
            if name.lower() == attribute_name:
                return value
        return None

    @property
    def is_sellable(self):
        return self.published and self.status == ProductStatus.SELLING

    @property
    def primary_image(self):
        return self.images[0] if self.images else None

    @property
    def profit_margin(self):
        if not self.cost_price or self.cost_price == 0:
            return None
        return ((self.selling_price - self.cost_price) / self.cost_price) * 100
