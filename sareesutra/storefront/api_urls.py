"""
Django REST Framework API URLs with Router.

Автоматически генерирует URL patterns для ViewSets.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .viewsets import HomeMediaViewSet, ProductMediaViewSet


router = DefaultRouter()

router.register(r'home-media', HomeMediaViewSet, basename='api-home-media')
router.register(r'product-media', ProductMediaViewSet, basename='api-product-media')

urlpatterns = [
    path('', include(router.urls)),
]
