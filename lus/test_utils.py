"""
Test utilities
"""


from django.core.cache import cache
from django.test import TestCase


class CacheResetTest(TestCase):
    """
    Test case that resets the cache before and after each test.

    Passage and assessment reads are cached by the persistence gateway, so
    every test starts from an empty cache.
    """
    def setUp(self):
        super().setUp()
        cache.clear()

    def tearDown(self):
        super().tearDown()
        cache.clear()
