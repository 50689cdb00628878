"""
Tests for per-context media plan loading and stale completion handling.
"""
import threading
from concurrent.futures import ThreadPoolExecutor

from django.test import SimpleTestCase

from storefront.services.media import (
    MODE_BUNDLE_GRID,
    MODE_SINGLE,
    GenerationTracker,
    MediaPlanLoader,
    ProductMedia,
)

SLOW_SET = ProductMedia(id=10, is_gift_set=True, bundle_items=(1,))
FAST_PRODUCT = ProductMedia(id=20, images=("/fast.jpg",))


class GenerationTrackerTests(SimpleTestCase):
    def test_newer_ticket_supersedes_older(self):
        tracker = GenerationTracker()
        first = tracker.issue("page")
        second = tracker.issue("page")
        self.assertFalse(tracker.is_current(first))
        self.assertTrue(tracker.is_current(second))

    def test_contexts_are_independent(self):
        tracker = GenerationTracker()
        a = tracker.issue("a")
        tracker.issue("b")
        self.assertTrue(tracker.is_current(a))

    def test_invalidate(self):
        tracker = GenerationTracker()
        ticket = tracker.issue("a")
        tracker.invalidate("a")
        self.assertFalse(tracker.is_current(ticket))


class MediaPlanLoaderTests(SimpleTestCase):
    def setUp(self):
        self.release = threading.Event()

        def lookup(product_id):
            self.release.wait(timeout=2)
            return ProductMedia(id=product_id, images=("/member.jpg",))

        self.executor = ThreadPoolExecutor(max_workers=2)
        self.loader = MediaPlanLoader(lookup, executor=self.executor)

    def tearDown(self):
        self.release.set()
        self.executor.shutdown(wait=True)

    def test_plan_is_stored_for_context(self):
        self.release.set()
        self.loader.request("detail", FAST_PRODUCT).result(timeout=2)
        self.assertEqual(self.loader.current_plan("detail").mode, MODE_SINGLE)

    def test_stale_completion_is_discarded(self):
        slow = self.loader.request("detail", SLOW_SET)
        fast = self.loader.request("detail", FAST_PRODUCT)
        fast.result(timeout=2)

        self.release.set()
        slow_plan = slow.result(timeout=2)

        self.assertEqual(slow_plan.mode, MODE_BUNDLE_GRID)
        self.assertEqual(self.loader.current_plan("detail").image, "/fast.jpg")

    def test_discard_ignores_in_flight_request(self):
        pending = self.loader.request("card-10", SLOW_SET)
        self.loader.discard("card-10")
        self.release.set()
        pending.result(timeout=2)
        self.assertIsNone(self.loader.current_plan("card-10"))
