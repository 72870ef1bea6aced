import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Prefetch
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.fields import get_error_detail
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.products.models import Category, Product, Variant
from apps.products.services import ProductCatalogService, VariantSelectionService
from .filters import ProductFilter, VariantFilter
from .serializers import (
    BulkArchiveSerializer,
    CategorySerializer,
    CombinationGenerateSerializer,
    ProductDetailSerializer,
    ProductListSerializer,
    ProductWriteSerializer,
    PublishToggleSerializer,
    VariantSerializer,
)


logger = logging.getLogger(__name__)


def _as_api_error(exc):
    return ValidationError(detail=get_error_detail(exc))


class ProductViewSet(viewsets.ModelViewSet):
    """
    API endpoint for products.

    list: List products
    retrieve: Get product detail with variants
    create: Create a product; status, published and SEO are derived
    update: Update a product; derived fields are recomputed
    destroy: Archive a product (soft removal)
    """
    queryset = Product.objects.all()
    lookup_field = 'slug'
    filterset_class = ProductFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'sku', 'description']
    ordering_fields = ['name', 'created_at', 'updated_at', 'selling_price']
    ordering = ['name']

    def get_serializer_class(self):
        if self.action == 'list':
            return ProductListSerializer
        elif self.action == 'retrieve':
            return ProductDetailSerializer
        return ProductWriteSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action == 'retrieve':
            queryset = queryset.prefetch_related(
                Prefetch('variants', queryset=Variant.objects.order_by('position', 'sku')),
                'categories',
            )
        return queryset

    def perform_destroy(self, instance):
        ProductCatalogService.archive(instance)

    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        self.perform_destroy(product)
        return Response(ProductDetailSerializer(product, context={'request': request}).data)

    @action(detail=True, methods=['post'])
    def restore(self, request, slug=None):
        """Restore an archived product to an unpublished state."""
        product = ProductCatalogService.restore(self.get_object())
        return Response(ProductDetailSerializer(product, context={'request': request}).data)

    @action(detail=True, methods=['post'], url_path='toggle-published')
    def toggle_published(self, request, slug=None):
        """
        Publish or unpublish a simple product or one of its variants.

        Expected payload:
        {
            "published": true,
            "variant_sku": "TSHIRT-M-RED"   # variant products only
        }
        """
        serializer = PublishToggleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            product = ProductCatalogService.set_published(
                self.get_object(),
                serializer.validated_data['published'],
                serializer.validated_data.get('variant_sku') or None,
            )
        except DjangoValidationError as exc:
            raise _as_api_error(exc)
        return Response(ProductDetailSerializer(product, context={'request': request}).data)

    @action(detail=False, methods=['post'], url_path='bulk-archive')
    def bulk_archive(self, request):
        """
        Bulk archive or restore products.

        Expected payload:
        {
            "ids": [1, 2, 3],
            "archived": true
        }
        """
        serializer = BulkArchiveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        count = ProductCatalogService.bulk_archive(
            serializer.validated_data['ids'],
            serializer.validated_data['archived'],
        )
        return Response({'updated': count, 'archived': serializer.validated_data['archived']})

    @action(detail=False, methods=['post'])
    def preview(self, request):
        """Run validation and derivation on a payload without saving it."""
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        derived = ProductCatalogService.preview(serializer.validated_data)
        return Response(derived)

    @action(detail=True, methods=['get'], url_path='variant-options')
    def variant_options(self, request, slug=None):
        """
        Find the best matching variant for attribute selections.

        Query params: any attribute=value pairs (e.g., ?size=M&color=Red)
        """
        product = self.get_object()
        exclude_params = ['format']
        selections = {
            k: v for k, v in request.query_params.items()
            if k not in exclude_params
        }
        return Response(VariantSelectionService.find_best_match(product, selections))


class VariantViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for variants (read-only; variants are written through their product).
    """
    queryset = Variant.objects.select_related('product')
    serializer_class = VariantSerializer
    filterset_class = VariantFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['sku', 'name', 'product__name']
    ordering_fields = ['sku', 'selling_price', 'stock', 'created_at']
    ordering = ['product', 'position', 'sku']


class CategoryViewSet(viewsets.ModelViewSet):
    """
    API endpoint for categories and subcategories.
    """
    queryset = Category.objects.select_related('parent')
    serializer_class = CategorySerializer
    lookup_field = 'slug'
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['parent', 'is_active']
    search_fields = ['name']
    ordering = ['display_order', 'name']

    @action(detail=False, methods=['get'])
    def roots(self, request):
        """Top level categories with their active subcategories."""
        roots = self.get_queryset().filter(parent__isnull=True, is_active=True)
        data = []
        for category in roots:
            item = CategorySerializer(category).data
            item['subcategories'] = CategorySerializer(
                category.children.filter(is_active=True), many=True
            ).data
            data.append(item)
        return Response(data)


class CombinationGenerateView(APIView):
    """
    Generate variant combinations from an attribute selection.

    Expected payload:
    {
        "product_name": "T-Shirt",
        "base_sku": "TSHIRT",
        "attributes": [{"id": "attr-size", "name": "size"}, {"name": "color"}],
        "selected_values": {"attr-size": ["S", "M"], "attr-color": ["Red"]},
        "combinations": [... previously generated or persisted combinations ...]
    }
    """

    def post(self, request):
        serializer = CombinationGenerateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        builder = serializer.build()
        logger.debug('Generated %d combinations', len(builder.combinations))
        return Response(builder.to_data(), status=status.HTTP_200_OK)
