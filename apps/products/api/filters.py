from django.db.models import Q
from django_filters import rest_framework as filters

from apps.products.choices import ProductStatus, ProductStructure
from apps.products.models import Category, Product, Variant


class ProductFilter(filters.FilterSet):
    """Filter for products by classification, publish state and stock."""

    category = filters.CharFilter(method='filter_category')

    # Price filters, simple products only
    min_price = filters.NumberFilter(field_name='selling_price', lookup_expr='gte')
    max_price = filters.NumberFilter(field_name='selling_price', lookup_expr='lte')

    in_stock = filters.BooleanFilter(method='filter_in_stock')
    archived = filters.BooleanFilter(method='filter_archived')

    class Meta:
        model = Product
        fields = ['category', 'status', 'product_type', 'product_structure', 'published']

    def filter_category(self, queryset, name, value):
        """Products in the category or any of its subcategories."""
        category = Category.objects.filter(slug=value).first()
        if category is None:
            return queryset.none()
        categories = [category, *category.get_descendants()]
        return queryset.filter(categories__in=categories).distinct()

    def _in_stock_q(self):
        return (
            Q(product_structure=ProductStructure.SIMPLE, status=ProductStatus.SELLING)
            | Q(
                product_structure=ProductStructure.VARIANT,
                variants__published=True,
                variants__status=ProductStatus.SELLING,
            )
        )

    def filter_in_stock(self, queryset, name, value):
        if value is True:
            return queryset.filter(self._in_stock_q()).distinct()
        elif value is False:
            return queryset.exclude(pk__in=Product.objects.filter(self._in_stock_q()).values('pk'))
        return queryset

    def filter_archived(self, queryset, name, value):
        archived_variants = Product.objects.filter(
            product_structure=ProductStructure.VARIANT,
            variants__status=ProductStatus.ARCHIVED,
        ).exclude(
            variants__status__in=[s for s in ProductStatus.values if s != ProductStatus.ARCHIVED]
        )
        archived = Q(status=ProductStatus.ARCHIVED) | Q(pk__in=archived_variants.values('pk'))
        if value is True:
            return queryset.filter(archived)
        elif value is False:
            return queryset.exclude(archived)
        return queryset


class VariantFilter(filters.FilterSet):
    """Filter for variants with support for attribute values."""

    product = filters.CharFilter(field_name='product__slug')
    product_id = filters.NumberFilter(field_name='product__id')

    # Price filters
    min_price = filters.NumberFilter(field_name='selling_price', lookup_expr='gte')
    max_price = filters.NumberFilter(field_name='selling_price', lookup_expr='lte')

    # Attribute filters
    attribute = filters.CharFilter(method='filter_by_attribute')

    class Meta:
        model = Variant
        fields = ['product', 'product_id', 'status', 'published', 'sku']

    def filter_by_attribute(self, queryset, name, value):
        """
        Filter by attribute in format: attribute_name:value
        Example: ?attribute=color:Red
        """
        if ':' not in value:
            return queryset

        attribute_name, option_value = value.split(':', 1)
        if not attribute_name.isidentifier() or '__' in attribute_name:
            return queryset.none()
        return queryset.filter(**{f'attributes__{attribute_name}': option_value})
