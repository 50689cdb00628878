"""
Unit tests for the storefront media subsystem.

Test structure:
- test_media_normalizer.py: pasted link canonicalisation
- test_media_slots.py: home media slot catalogue and merge
- test_media_resolver.py: product display plans, bundle lookups
- test_media_loader.py: stale completion handling
- test_spotlight.py: daily spotlight selection
- test_settings_gateway.py: key/value settings store
- test_home_media.py: homepage composition, default seeding, banner
- test_product_lookup.py: models and product snapshots
- test_media_api.py: REST endpoints
"""
