from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from simple_history.models import HistoricalRecords

from apps.products.choices import ProductStatus, ProductStructure, ProductType

from .slugs import unique_slug


DOCUMENT_FIELDS = (
    'name', 'slug', 'sku', 'description', 'product_type', 'product_structure',
    'cost_price', 'selling_price', 'base_stock', 'min_stock', 'status',
    'published', 'image_urls',
)


class Product(models.Model):
    """
    Base product model.

    A simple product is sold as one unit with its own price and stock.
    A variant product is sold through its variants; its own price, stock,
    status and published fields stay empty.
    """
    name = models.CharField(
        max_length=255,
        verbose_name='Name'
    )
    slug = models.SlugField(
        max_length=255,
        unique=True,
        verbose_name='Slug'
    )
    sku = models.CharField(
        max_length=30,
        verbose_name='SKU'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Description'
    )
    product_type = models.CharField(
        max_length=20,
        choices=ProductType.choices,
        default=ProductType.PHYSICAL,
        verbose_name='Product type'
    )
    product_structure = models.CharField(
        max_length=20,
        choices=ProductStructure.choices,
        default=ProductStructure.SIMPLE,
        verbose_name='Product structure'
    )
    categories = models.ManyToManyField(
        'Category',
        blank=True,
        related_name='products',
        verbose_name='Categories'
    )

    # Pricing and inventory, simple products only
    cost_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Cost price'
    )
    selling_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Selling price'
    )
    base_stock = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name='Stock'
    )
    min_stock = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name='Minimum stock'
    )

    # Derived on every save, see ProductCatalogService
    status = models.CharField(
        max_length=20,
        choices=ProductStatus.choices,
        null=True,
        blank=True,
        default=ProductStatus.DRAFT,
        verbose_name='Status'
    )
    published = models.BooleanField(
        null=True,
        blank=True,
        default=False,
        verbose_name='Published'
    )

    image_urls = models.JSONField(
        default=list,
        blank=True,
        verbose_name='Images'
    )
    tags = models.JSONField(
        default=list,
        blank=True,
        verbose_name='Tags'
    )
    seo = models.JSONField(
        default=dict,
        blank=True,
        verbose_name='SEO',
        help_text='title, description, keywords, canonical, robots, og_title, og_description, og_image'
    )

    # Physical details
    weight = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        null=True,
        blank=True,
        verbose_name='Weight (kg)'
    )
    warranty = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Warranty'
    )
    is_cod_available = models.BooleanField(
        default=True,
        verbose_name='Cash on delivery'
    )
    is_free_shipping = models.BooleanField(
        default=False,
        verbose_name='Free shipping'
    )
    is_new_arrival = models.BooleanField(
        default=False,
        verbose_name='New arrival'
    )

    # Digital details
    file_path = models.CharField(
        max_length=500,
        blank=True,
        verbose_name='File path'
    )
    file_size = models.PositiveBigIntegerField(
        null=True,
        blank=True,
        verbose_name='File size (bytes)'
    )
    download_format = models.CharField(
        max_length=50,
        blank=True,
        verbose_name='Download format'
    )
    license_type = models.CharField(
        max_length=100,
        blank=True,
        verbose_name='License type'
    )
    download_limit = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name='Download limit'
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
        ordering = ['name']
        verbose_name = 'Product'
        verbose_name_plural = 'Products'

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = Product.unique_slug(self.name, exclude_pk=self.pk)
        if self.sku:
            self.sku = self.sku.strip().upper()
        super().save(*args, **kwargs)

    @staticmethod
    def unique_slug(name, exclude_pk=None):
        return unique_slug(Product, name, exclude_pk=exclude_pk, default='product')

    @property
    def is_variant_product(self):
        return self.product_structure == ProductStructure.VARIANT

    @property
    def is_archived(self):
        if self.is_variant_product:
            variants = list(self.variants.all())
            return bool(variants) and all(v.status == ProductStatus.ARCHIVED for v in variants)
        return self.status == ProductStatus.ARCHIVED

    @property
    def variant_count(self):
        return self.variants.count()

    @property
    def published_variant_count(self):
        return self.variants.filter(published=True).count()

    @property
    def canonical_url(self):
        return (self.seo or {}).get('canonical')

    def to_document(self, variants=None):
        """
        Plain dict representation consumed by the derivation pipeline.

        ``variants`` defaults to the stored variants of a saved product.
        """
        document = {field: getattr(self, field) for field in DOCUMENT_FIELDS}
        document['image_urls'] = list(self.image_urls or [])
        document['seo'] = dict(self.seo or {})
        if variants is None:
            variants = self.variants.all() if self.pk else []
        document['variants'] = [
            v.to_document() if hasattr(v, 'to_document') else dict(v)
            for v in variants
        ]
        return document

    def apply_document(self, document):
        """Copy product level fields of a (derived) document onto the instance."""
        for field in DOCUMENT_FIELDS:
            if field in document:
                setattr(self, field, document[field])
        self.description = self.description or ''
        self.image_urls = self.image_urls or []
        if 'seo' in document:
            self.seo = dict(document['seo'] or {})
        return self
