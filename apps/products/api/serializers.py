from rest_framework import serializers

from apps.products.derivation import CombinationError, VariantCombinationBuilder
from apps.products.models import Category, Product, Variant
from apps.products.services import ProductCatalogService


# =============================================================================
# Category Serializers
# =============================================================================

class CategorySerializer(serializers.ModelSerializer):
    full_path = serializers.CharField(read_only=True)

    class Meta:
        model = Category
        fields = [
            'id', 'name', 'slug', 'parent', 'full_path', 'description',
            'is_active', 'display_order'
        ]


# =============================================================================
# Variant Serializers
# =============================================================================

class VariantSerializer(serializers.ModelSerializer):
    """Read serializer for variants; status and published are derived."""
    product_slug = serializers.CharField(source='product.slug', read_only=True)
    is_sellable = serializers.BooleanField(read_only=True)
    profit_margin = serializers.FloatField(read_only=True)

    class Meta:
        model = Variant
        fields = [
            'id', 'product', 'product_slug', 'sku', 'slug', 'name',
            'cost_price', 'selling_price', 'stock', 'min_stock',
            'status', 'published', 'is_sellable', 'profit_margin',
            'attributes', 'images', 'position', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class VariantInputSerializer(serializers.Serializer):
    """One variant of a product write payload."""
    id = serializers.IntegerField(required=False, allow_null=True)
    sku = serializers.CharField(max_length=100, required=False, allow_blank=True)
    slug = serializers.CharField(max_length=255, required=False, allow_blank=True)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    cost_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)
    selling_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)
    stock = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    min_stock = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    published = serializers.BooleanField(required=False)
    attributes = serializers.DictField(child=serializers.CharField(), required=False, default=dict)
    images = serializers.ListField(child=serializers.CharField(), required=False, default=list)

    def validate_slug(self, value):
        return value.lower()


# =============================================================================
# Product Serializers
# =============================================================================

class SeoInputSerializer(serializers.Serializer):
    """Manual SEO values; anything left empty is derived on save."""
    title = serializers.CharField(max_length=60, required=False, allow_blank=True, allow_null=True)
    description = serializers.CharField(max_length=160, required=False, allow_blank=True, allow_null=True)
    keywords = serializers.ListField(child=serializers.CharField(), required=False)
    canonical = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    og_title = serializers.CharField(max_length=95, required=False, allow_blank=True, allow_null=True)
    og_description = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)
    og_image = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ProductListSerializer(serializers.ModelSerializer):
    """Product list with variant counts."""
    variant_count = serializers.IntegerField(read_only=True)
    published_variant_count = serializers.IntegerField(read_only=True)
    primary_image = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'sku', 'product_type', 'product_structure',
            'selling_price', 'status', 'published', 'variant_count',
            'published_variant_count', 'primary_image'
        ]

    def get_primary_image(self, obj):
        return (obj.seo or {}).get('og_image')


class ProductDetailSerializer(serializers.ModelSerializer):
    """Full product detail with variants, categories and SEO."""
    variants = VariantSerializer(many=True, read_only=True)
    categories = CategorySerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'sku', 'description', 'product_type',
            'product_structure', 'cost_price', 'selling_price', 'base_stock',
            'min_stock', 'status', 'published', 'image_urls', 'tags', 'seo',
            'categories', 'variants', 'weight', 'warranty', 'is_cod_available',
            'is_free_shipping', 'is_new_arrival', 'file_path', 'file_size',
            'download_format', 'license_type', 'download_limit',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.Serializer):
    """
    Create/update payload for products.

    Validation and derivation happen in ProductCatalogService; status and
    robots are never taken from the payload.
    """
    name = serializers.CharField(max_length=255)
    slug = serializers.CharField(max_length=255, required=False, allow_blank=True)
    sku = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    product_type = serializers.CharField(required=False, default='physical')
    product_structure = serializers.CharField(required=False, default='simple')
    cost_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)
    selling_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)
    base_stock = serializers.IntegerField(required=False, allow_null=True)
    min_stock = serializers.IntegerField(required=False, allow_null=True)
    published = serializers.BooleanField(required=False, default=False)
    image_urls = serializers.ListField(child=serializers.CharField(), required=False)
    tags = serializers.ListField(child=serializers.CharField(), required=False)
    seo = SeoInputSerializer(required=False)
    categories = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(), many=True, required=False
    )
    variants = VariantInputSerializer(many=True, required=False)

    weight = serializers.DecimalField(max_digits=10, decimal_places=3, required=False, allow_null=True)
    warranty = serializers.CharField(required=False, allow_blank=True)
    is_cod_available = serializers.BooleanField(required=False)
    is_free_shipping = serializers.BooleanField(required=False)
    is_new_arrival = serializers.BooleanField(required=False)
    file_path = serializers.CharField(required=False, allow_blank=True)
    file_size = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    download_format = serializers.CharField(required=False, allow_blank=True)
    license_type = serializers.CharField(required=False, allow_blank=True)
    download_limit = serializers.IntegerField(min_value=0, required=False, allow_null=True)

    def validate(self, attrs):
        # Raises django ValidationError with per-field messages
        ProductCatalogService.preview(attrs, instance=self.instance)
        return attrs

    def create(self, validated_data):
        return ProductCatalogService.save_document(validated_data)

    def update(self, instance, validated_data):
        return ProductCatalogService.save_document(validated_data, instance=instance)

    def to_representation(self, instance):
        return ProductDetailSerializer(instance, context=self.context).data


class PublishToggleSerializer(serializers.Serializer):
    published = serializers.BooleanField()
    variant_sku = serializers.CharField(required=False, allow_blank=True)


class BulkArchiveSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)
    archived = serializers.BooleanField(default=True)


# =============================================================================
# Combination Serializers
# =============================================================================

class AttributeInputSerializer(serializers.Serializer):
    id = serializers.CharField(required=False)
    name = serializers.CharField(max_length=100)
    options = serializers.ListField(child=serializers.CharField(), required=False)
    allow_custom = serializers.BooleanField(required=False, default=True)


class CombinationGenerateSerializer(serializers.Serializer):
    """
    Generate combinations for an attribute selection.

    Existing combinations are loaded first and preserved where their
    attribute map is still part of the new cartesian product.
    """
    product_name = serializers.CharField(required=False, allow_blank=True, default='')
    base_sku = serializers.CharField(required=False, allow_blank=True, default='')
    attributes = AttributeInputSerializer(many=True, required=False, default=list)
    selected_values = serializers.DictField(
        child=serializers.ListField(child=serializers.CharField()),
        required=False, default=dict
    )
    combinations = serializers.ListField(child=serializers.DictField(), required=False, default=list)

    def build(self):
        data = self.validated_data
        try:
            builder = VariantCombinationBuilder(
                product_name=data['product_name'],
                base_sku=data['base_sku'],
            )
            for attribute in data['attributes']:
                builder.add_attribute(
                    attribute['name'], attribute.get('options'), attribute['allow_custom'],
                    attribute_id=attribute.get('id'),
                )
            builder.load(data['combinations'])
            for attribute_id, values in data['selected_values'].items():
                builder.select(attribute_id, values)
        except CombinationError as exc:
            raise serializers.ValidationError({'detail': str(exc)})
        return builder
