from django.core.exceptions import ValidationError
from django.db import models

from .services.media.normalizer import normalize_media_url
from .services.product_lookup import coerce_bundle_ids


class Product(models.Model):
    title = models.CharField(max_length=200)
    slug = models.SlugField(unique=True)
    description = models.TextField(blank=True, verbose_name='Description')
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    size = models.CharField(max_length=50, blank=True, verbose_name='Default size')
    # Canonical image URLs; first entry is the main image.
    images = models.JSONField(blank=True, default=list, verbose_name='Image URLs')
    is_gift_set = models.BooleanField(default=False, verbose_name='Gift set')
    # Product ids whose images make up the gift set grid.
    bundle_items = models.JSONField(blank=True, default=list, verbose_name='Bundle items')
    is_hidden = models.BooleanField(default=False, verbose_name='Hidden')
    is_featured = models.BooleanField(default=False, verbose_name='Featured')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['id']
        indexes = [
            models.Index(fields=['is_hidden', 'is_featured'], name='idx_product_visibility'),
        ]

    def clean(self):
        super().clean()
        bad = []
        for item in self.bundle_items or []:
            try:
                int(item)
            except (TypeError, ValueError):
                bad.append(item)
        if bad:
            raise ValidationError({'bundle_items': f'Bundle items must be product ids, got {bad!r}.'})

    def save(self, *args, **kwargs):
        # Pasted links are canonicalised once, on the way into storage.
        # Empty entries are kept so that [""] still means "no main image".
        self.images = [normalize_media_url(url) if url else '' for url in (self.images or [])]
        self.bundle_items = list(coerce_bundle_ids(self.bundle_items))
        super().save(*args, **kwargs)

    def __str__(self):
        return self.title

    @property
    def main_image(self):
        if self.images and self.images[0]:
            return self.images[0]
        return None


class ProductVariant(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='variants')
    size = models.CharField(max_length=50)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    image = models.CharField(max_length=2048, blank=True, verbose_name='Variant image URL')
    order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['order', 'id']
        unique_together = (('product', 'size'),)

    def save(self, *args, **kwargs):
        if self.image:
            self.image = normalize_media_url(self.image)
        super().save(*args, **kwargs)

    def __str__(self):
        return f'{self.product.title} [{self.size}]'


class SiteSetting(models.Model):
    """
    Generic string-keyed settings blob (JSON or plain text).
    """
    key = models.CharField(max_length=100, unique=True)
    value = models.TextField(blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['key']

    def __str__(self):
        return self.key
