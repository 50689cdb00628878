"""
Tests for the site settings gateway.
"""
from unittest import mock

from django.core.cache.backends.locmem import LocMemCache
from django.db import DatabaseError
from django.test import TestCase

from storefront.models import SiteSetting
from storefront.services.settings_gateway import SettingsGateway


class SettingsGatewayTests(TestCase):
    def setUp(self):
        self.gateway = SettingsGateway()

    def test_missing_key_returns_none(self):
        self.assertIsNone(self.gateway.get_string("absent"))
        self.assertFalse(self.gateway.has_key("absent"))

    def test_get_string(self):
        SiteSetting.objects.create(key="banner_text", value="Festive sale")
        self.assertEqual(self.gateway.get_string("banner_text"), "Festive sale")

    def test_empty_value_counts_as_missing(self):
        SiteSetting.objects.create(key="banner_text", value="")
        self.assertIsNone(self.gateway.get_string("banner_text"))

    def test_get_json_returns_default_on_missing_or_invalid(self):
        self.assertEqual(self.gateway.get_json("absent", [1]), [1])
        SiteSetting.objects.create(key="broken", value="{not json")
        with self.assertLogs("storefront.services.settings_gateway", level="WARNING"):
            self.assertEqual(self.gateway.get_json("broken", {"fallback": True}), {"fallback": True})

    def test_set_value_serialises_objects(self):
        result = self.gateway.set_value("hero_images", [{"url": "/a.jpg", "link": ""}])
        self.assertTrue(result.success)
        self.assertEqual(SiteSetting.objects.get(key="hero_images").value, '[{"url": "/a.jpg", "link": ""}]')
        self.assertEqual(self.gateway.get_json("hero_images", []), [{"url": "/a.jpg", "link": ""}])

    def test_set_value_upserts_strings(self):
        self.gateway.set_value("banner_enabled", "false")
        self.gateway.set_value("banner_enabled", "true")
        self.assertEqual(SiteSetting.objects.filter(key="banner_enabled").count(), 1)
        self.assertIs(self.gateway.get_json("banner_enabled", False), True)

    def test_set_value_rejects_unserialisable(self):
        with self.assertLogs("storefront.services.settings_gateway", level="ERROR"):
            result = self.gateway.set_value("bad", {"value": object()})
        self.assertFalse(result.success)
        self.assertTrue(result.error)

    def test_database_errors_degrade(self):
        with mock.patch.object(SiteSetting.objects, "filter", side_effect=DatabaseError("down")):
            with self.assertLogs("storefront.services.settings_gateway", level="WARNING"):
                self.assertEqual(self.gateway.get_json("home_media_slots", "default"), "default")
        with mock.patch.object(SiteSetting.objects, "update_or_create", side_effect=DatabaseError("down")):
            with self.assertLogs("storefront.services.settings_gateway", level="ERROR"):
                result = self.gateway.set_value("banner_text", "x")
        self.assertFalse(result.success)
        self.assertEqual(result.error, "down")


class SettingsGatewayCacheTests(TestCase):
    def setUp(self):
        self.cache = LocMemCache("settings-gateway-tests", {})
        self.cache.clear()
        self.gateway = SettingsGateway(cache_backend=self.cache, timeout=60)

    def test_reads_are_cached_and_writes_invalidate(self):
        SiteSetting.objects.create(key="banner_text", value="First")
        self.assertEqual(self.gateway.get_string("banner_text"), "First")

        SiteSetting.objects.filter(key="banner_text").update(value="Changed behind the cache")
        self.assertEqual(self.gateway.get_string("banner_text"), "First")

        self.gateway.set_value("banner_text", "Second")
        self.assertEqual(self.gateway.get_string("banner_text"), "Second")

    def test_misses_are_cached(self):
        self.assertIsNone(self.gateway.get_string("absent"))
        with self.assertNumQueries(0):
            self.assertIsNone(self.gateway.get_string("absent"))
