"""
Tests for homepage media composition, default seeding and the banner context processor.
"""
import json
from io import StringIO

from django.core.management import call_command
from django.test import RequestFactory, TestCase

from storefront.context_processors import announcement_banner
from storefront.models import SiteSetting
from storefront.services import home_media
from storefront.services.media import DEFAULT_HOME_MEDIA_SLOTS, PLACEHOLDER_IMAGE, HeroImage
from storefront.services.settings_gateway import SettingsGateway


class LoadHomeMediaTests(TestCase):
    def setUp(self):
        self.gateway = SettingsGateway()

    def test_defaults_without_settings(self):
        media = home_media.load_home_media(self.gateway)
        self.assertEqual(media.slots, list(DEFAULT_HOME_MEDIA_SLOTS))
        self.assertEqual(media.hero_images, [])
        self.assertFalse(media.banner.visible)

    def test_partial_override_is_merged(self):
        SiteSetting.objects.create(
            key="home_media_slots",
            value=json.dumps([
                {"key": "brand_story", "url": "https://drive.google.com/file/d/story42/view"},
                {"key": "removed_slot", "url": "/gone.jpg"},
            ]),
        )
        media = home_media.load_home_media(self.gateway)
        self.assertEqual(len(media.slots), len(DEFAULT_HOME_MEDIA_SLOTS))
        self.assertEqual(media.slot_url("brand_story"), "https://drive.google.com/thumbnail?id=story42&sz=w800")
        self.assertEqual(media.slot("brand_story").label, "Brand Story Image")
        self.assertEqual(media.slot_url("hero_main"), "/home/banner-main.jpg")
        self.assertIsNone(media.slot("removed_slot"))

    def test_corrupt_slots_fall_back_to_defaults(self):
        SiteSetting.objects.create(key="home_media_slots", value="[{broken")
        self.assertEqual(home_media.load_home_slots(self.gateway), list(DEFAULT_HOME_MEDIA_SLOTS))

    def test_non_list_slots_fall_back_to_defaults(self):
        SiteSetting.objects.create(key="home_media_slots", value='{"hero_main": "/x.jpg"}')
        self.assertEqual(home_media.load_home_slots(self.gateway), list(DEFAULT_HOME_MEDIA_SLOTS))

    def test_hero_images_upgrade_legacy_strings(self):
        SiteSetting.objects.create(
            key="hero_images",
            value=json.dumps(["/hero-1.jpg", {"url": ":7070/broken", "link": "/sale"}]),
        )
        self.assertEqual(
            home_media.load_hero_images(self.gateway),
            [HeroImage(url="/hero-1.jpg", link=""), HeroImage(url=PLACEHOLDER_IMAGE, link="/sale")],
        )

    def test_legacy_single_hero_url(self):
        SiteSetting.objects.create(key="hero_image_url", value="cdn.example.com/hero.jpg")
        self.assertEqual(
            home_media.load_hero_images(self.gateway),
            [HeroImage(url="https://cdn.example.com/hero.jpg", link="")],
        )
        self.assertEqual(home_media.load_hero_images(self.gateway, home_media.HERO_IMAGES_MOBILE_KEY), [])

    def test_banner(self):
        SiteSetting.objects.create(key="banner_enabled", value="true")
        SiteSetting.objects.create(key="banner_text", value="Free shipping")
        banner = home_media.load_banner(self.gateway)
        self.assertTrue(banner.visible)
        self.assertEqual(banner.text, "Free shipping")

    def test_serialize_home_media(self):
        data = home_media.serialize_home_media(home_media.load_home_media(self.gateway))
        self.assertEqual(data["slots"][0]["key"], "hero_main")
        self.assertEqual(set(data), {"slots", "hero_images", "hero_images_mobile", "banner"})


class SaveHomeMediaTests(TestCase):
    def setUp(self):
        self.gateway = SettingsGateway()

    def test_save_home_slots_persists_full_merged_list(self):
        result = home_media.save_home_slots(self.gateway, [{"key": "gallery_2", "url": "example.com/g2.jpg", "link": ""}])
        self.assertTrue(result.success)
        stored = json.loads(SiteSetting.objects.get(key="home_media_slots").value)
        self.assertEqual(len(stored), len(DEFAULT_HOME_MEDIA_SLOTS))
        gallery = next(entry for entry in stored if entry["key"] == "gallery_2")
        self.assertEqual(gallery["url"], "https://example.com/g2.jpg")
        self.assertEqual(gallery["link"], "/products")

    def test_save_banner(self):
        result = home_media.save_banner(self.gateway, True, "Diwali edit")
        self.assertTrue(result.success)
        self.assertEqual(SiteSetting.objects.get(key="banner_enabled").value, "true")


class InitializeDefaultSettingsTests(TestCase):
    def test_seeds_once(self):
        self.assertTrue(home_media.initialize_default_settings())
        self.assertFalse(home_media.initialize_default_settings())
        self.assertEqual(SiteSetting.objects.get(key="banner_enabled").value, "false")
        self.assertEqual(SiteSetting.objects.get(key="banner_text").value, home_media.DEFAULT_BANNER_TEXT)
        slots = json.loads(SiteSetting.objects.get(key="home_media_slots").value)
        self.assertEqual([slot["key"] for slot in slots], [slot.key for slot in DEFAULT_HOME_MEDIA_SLOTS])

    def test_management_command(self):
        out = StringIO()
        call_command("init_site_settings", stdout=out)
        self.assertIn("initialized", out.getvalue())
        out = StringIO()
        call_command("init_site_settings", stdout=out)
        self.assertIn("already exist", out.getvalue())


class AnnouncementBannerContextTests(TestCase):
    def test_hidden_without_text(self):
        SiteSetting.objects.create(key="banner_enabled", value="true")
        context = announcement_banner(RequestFactory().get("/"))
        self.assertEqual(context, {"banner_enabled": False, "banner_text": ""})

    def test_visible(self):
        SiteSetting.objects.create(key="banner_enabled", value="true")
        SiteSetting.objects.create(key="banner_text", value="New arrivals")
        context = announcement_banner(RequestFactory().get("/"))
        self.assertEqual(context, {"banner_enabled": True, "banner_text": "New arrivals"})
