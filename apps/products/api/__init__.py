from .serializers import (
    CategorySerializer,
    VariantSerializer,
    ProductListSerializer,
    ProductDetailSerializer,
    ProductWriteSerializer,
    CombinationGenerateSerializer,
)

__all__ = [
    'CategorySerializer',
    'VariantSerializer',
    'ProductListSerializer',
    'ProductDetailSerializer',
    'ProductWriteSerializer',
    'CombinationGenerateSerializer',
]
