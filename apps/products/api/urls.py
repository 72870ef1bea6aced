from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    ProductViewSet,
    VariantViewSet,
    CategoryViewSet,
    CombinationGenerateView,
)

router = DefaultRouter()
router.register(r'products', ProductViewSet, basename='product')
router.register(r'variants', VariantViewSet, basename='variant')
router.register(r'categories', CategoryViewSet, basename='category')

urlpatterns = [
    path('combinations/generate/', CombinationGenerateView.as_view(), name='combination-generate'),
    path('', include(router.urls)),
]
