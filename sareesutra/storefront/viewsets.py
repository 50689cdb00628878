"""
Django REST Framework ViewSets for Storefront media API.

ViewSets отдают итоговые медиа главной страницы и планы отображения товаров.
Вся логика выбора изображений живет в storefront.services.media.
"""

import logging

from django.conf import settings
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response

from .serializers import (
    BannerSerializer,
    DisplayPlanSerializer,
    HeroImagesUpdateSerializer,
    MediaSlotSerializer,
    VariantQuerySerializer,
)
from .services import home_media
from .services.media import (
    MediaResolutionError,
    resolve_display,
    select_spotlight,
    select_variant_image,
    today_iso,
)
from .services.product_lookup import get_product_by_id, get_spotlight_pool, lookup_in_worker
from .services.settings_gateway import SettingsGateway

logger = logging.getLogger(__name__)


def _resolve_plan(product, width_setting='MEDIA_THUMBNAIL_WIDTH', default_width=800):
    return resolve_display(
        product,
        lookup=lookup_in_worker,
        target_width=getattr(settings, width_setting, default_width),
        max_workers=getattr(settings, 'MEDIA_BUNDLE_LOOKUP_WORKERS', 4),
    )


class HomeMediaViewSet(viewsets.ViewSet):
    """
    ViewSet для медиа главной страницы.

    Предоставляет:
        - list: GET /api/home-media/ - слоты, hero-карусели, баннер
        - slots: POST /api/home-media/slots/ - сохранить слоты (staff)
        - hero: POST /api/home-media/hero/ - сохранить hero-карусели (staff)
        - banner: POST /api/home-media/banner/ - сохранить баннер (staff)
    """

    def get_permissions(self):
        if self.action == 'list':
            return [AllowAny()]
        return [IsAdminUser()]

    def get_gateway(self):
        return SettingsGateway()

    def list(self, request):
        media = home_media.load_home_media(self.get_gateway())
        return Response(home_media.serialize_home_media(media))

    def _write_response(self, result):
        if not result.success:
            return Response(
                {'success': False, 'error': result.error or 'Unknown error'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        media = home_media.load_home_media(self.get_gateway())
        return Response({'success': True, **home_media.serialize_home_media(media)})

    @action(detail=False, methods=['post'], url_path='slots')
    def slots(self, request):
        """
        Сохраняет переопределения слотов.

        Body: список объектов {key, url, link}. Неизвестные ключи отклоняются.
        """
        serializer = MediaSlotSerializer(data=request.data, many=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        result = home_media.save_home_slots(self.get_gateway(), serializer.validated_data)
        return self._write_response(result)

    @action(detail=False, methods=['post'], url_path='hero')
    def hero(self, request):
        serializer = HeroImagesUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        gateway = self.get_gateway()
        result = None
        for key in (home_media.HERO_IMAGES_KEY, home_media.HERO_IMAGES_MOBILE_KEY):
            if key not in serializer.validated_data:
                continue
            result = home_media.save_hero_images(gateway, key, serializer.validated_data[key])
            if not result.success:
                break
        if result is None:
            return Response({'success': False, 'error': 'Nothing to update'}, status=status.HTTP_400_BAD_REQUEST)
        return self._write_response(result)

    @action(detail=False, methods=['post'], url_path='banner')
    def banner(self, request):
        serializer = BannerSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        result = home_media.save_banner(
            self.get_gateway(),
            serializer.validated_data['enabled'],
            serializer.validated_data.get('text', ''),
        )
        return self._write_response(result)


class ProductMediaViewSet(viewsets.ViewSet):
    """
    ViewSet для планов отображения товаров.

    Предоставляет:
        - retrieve: GET /api/product-media/{id}/?variant=<size> (скрытые товары - 404)
        - spotlight: GET /api/product-media/spotlight/ - товар дня

    Permissions: Read-only для всех пользователей
    """
    permission_classes = [AllowAny]

    def retrieve(self, request, pk=None):
        query = VariantQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

        product = get_product_by_id(pk)
        if product is None or product.is_hidden:
            return Response({'success': False, 'error': 'Product not found'}, status=status.HTTP_404_NOT_FOUND)

        try:
            plan = _resolve_plan(product)
        except MediaResolutionError as exc:
            logger.warning("Cannot resolve media for product %s: %s", pk, exc)
            return Response({'success': False, 'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        data = {'product_id': product.id, 'plan': DisplayPlanSerializer(plan).data}
        size = query.validated_data.get('variant')
        if size:
            variant = next((item for item in product.variants if item.size == size), None)
            if variant is None:
                return Response({'success': False, 'error': 'Variant not found'}, status=status.HTTP_404_NOT_FOUND)
            data['variant'] = {
                'size': variant.size,
                'price': str(variant.price) if variant.price is not None else None,
                'image': select_variant_image(product, variant),
            }
        return Response(data)

    @action(detail=False, methods=['get'], url_path='spotlight')
    def spotlight(self, request):
        """
        Товар дня: отмеченный is_featured или ротация по дате.
        Изображения крупнее, чем в карточке (MEDIA_SPOTLIGHT_WIDTH).
        """
        today = today_iso()
        product = select_spotlight(get_spotlight_pool(), today)
        if product is None:
            return Response({'date': today, 'product_id': None, 'plan': None})
        try:
            plan = _resolve_plan(product, 'MEDIA_SPOTLIGHT_WIDTH', 1200)
        except MediaResolutionError as exc:
            logger.warning("Cannot resolve spotlight media for product %s: %s", product.id, exc)
            return Response({'success': False, 'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({
            'date': today,
            'product_id': product.id,
            'plan': DisplayPlanSerializer(plan).data,
        })
