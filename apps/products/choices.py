from django.db import models


class ProductType(models.TextChoices):
    PHYSICAL = 'physical', 'Physical'
    DIGITAL = 'digital', 'Digital'


class ProductStructure(models.TextChoices):
    SIMPLE = 'simple', 'Simple'
    VARIANT = 'variant', 'Variant'


class ProductStatus(models.TextChoices):
    SELLING = 'selling', 'Selling'
    OUT_OF_STOCK = 'out_of_stock', 'Out of stock'
    DRAFT = 'draft', 'Draft'
    ARCHIVED = 'archived', 'Archived'
    LOW_STOCK = 'low_stock', 'Low stock'


class RobotsDirective(models.TextChoices):
    INDEX_FOLLOW = 'index,follow', 'index, follow'
    NOINDEX_FOLLOW = 'noindex,follow', 'noindex, follow'
    INDEX_NOFOLLOW = 'index,nofollow', 'index, nofollow'
    NOINDEX_NOFOLLOW = 'noindex,nofollow', 'noindex, nofollow'
