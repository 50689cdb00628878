"""
Django REST Framework Serializers for Storefront media API.

Сериализаторы для валидации входящих настроек медиа и представления
планов отображения товаров.
"""

from rest_framework import serializers

from .services.media import DEFAULT_HOME_MEDIA_SLOTS, slots_by_key


class MediaSlotSerializer(serializers.Serializer):
    """
    Сериализатор для слота медиа на главной странице.

    Fields:
        - key: Ключ слота (должен существовать в каталоге по умолчанию)
        - url: Ссылка на изображение (любой формат, нормализуется при сохранении)
        - link: Ссылка перехода (optional)

    label/location не принимаются: их задает только каталог по умолчанию.
    """
    key = serializers.CharField(max_length=100)
    url = serializers.CharField(required=False, allow_blank=True, max_length=2048)
    link = serializers.CharField(required=False, allow_blank=True, max_length=2048)

    def validate_key(self, value):
        """Проверяет, что слот с таким ключом существует."""
        if value not in slots_by_key(DEFAULT_HOME_MEDIA_SLOTS):
            raise serializers.ValidationError("Unknown media slot.")
        return value


class HeroImageSerializer(serializers.Serializer):
    url = serializers.CharField(max_length=2048)
    link = serializers.CharField(required=False, allow_blank=True, max_length=2048, default="")


class HeroImagesUpdateSerializer(serializers.Serializer):
    """
    Сериализатор для обновления каруселей hero (desktop/mobile).
    """
    hero_images = HeroImageSerializer(many=True, required=False)
    hero_images_mobile = HeroImageSerializer(many=True, required=False)


class BannerSerializer(serializers.Serializer):
    """
    Сериализатор для объявления в шапке сайта.
    """
    enabled = serializers.BooleanField()
    text = serializers.CharField(required=False, allow_blank=True, max_length=300, default="")

    def validate(self, attrs):
        if attrs.get('enabled') and not attrs.get('text', '').strip():
            raise serializers.ValidationError({'text': "Text is required when the banner is enabled."})
        return attrs


class DisplayPlanSerializer(serializers.Serializer):
    """
    Представление плана отображения товара (read-only).

    Fields:
        - mode: bundle-grid / single / placeholder
        - image: Изображение для режима single
        - images: Изображения сетки набора (до 4)
        - layout: Колонки/строки сетки
        - default_image: Главное изображение товара (для сброса при выборе варианта)
    """
    mode = serializers.CharField()
    image = serializers.CharField(allow_null=True)
    images = serializers.ListField(child=serializers.CharField())
    layout = serializers.DictField(child=serializers.IntegerField(), allow_null=True)
    default_image = serializers.CharField(allow_null=True)


class VariantQuerySerializer(serializers.Serializer):
    variant = serializers.CharField(required=False, allow_blank=True, max_length=50)
