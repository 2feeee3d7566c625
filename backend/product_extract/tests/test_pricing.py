#!/usr/bin/env python3
"""
Price Normalizer Tests
======================

Run:
    python -m unittest backend.product_extract.tests.test_pricing
"""

import unittest

from backend.product_extract.pricing import (
    default_price_processor, digits_only_price_processor, normalize_price
)


class TestDefaultPriceProcessor(unittest.TestCase):

    def test_thousands_separator_and_currency(self):
        self.assertEqual(default_price_processor("$1,299.00"), 1299.00)

    def test_free_means_no_price(self):
        self.assertEqual(default_price_processor("Free"), 0)

    def test_empty_text(self):
        self.assertEqual(default_price_processor(""), 0)
        self.assertEqual(default_price_processor(None), 0)

    def test_range_takes_first_number(self):
        self.assertEqual(default_price_processor("$10 - $20"), 10.0)
        self.assertEqual(default_price_processor("$1,000.50 – $2,000"), 1000.50)

    def test_price_split_by_whitespace(self):
        """Child spans joined with spaces must not cut the number short"""
        self.assertEqual(default_price_processor("$24 .99"), 24.99)
        self.assertEqual(default_price_processor("1 299.00"), 1299.0)
        self.assertEqual(default_price_processor("$ 1,049 .50"), 1049.5)

    def test_range_words_and_dashes(self):
        self.assertEqual(default_price_processor("$10-$20"), 10.0)
        self.assertEqual(default_price_processor("$15 to $30"), 15.0)
        self.assertEqual(default_price_processor("Sale - $20"), 20.0)

    def test_text_around_price(self):
        self.assertEqual(default_price_processor("Now only 24.99 USD!"), 24.99)

    def test_trailing_period(self):
        self.assertEqual(default_price_processor("Price: 45."), 45.0)


class TestDigitsOnlyPriceProcessor(unittest.TestCase):

    def test_whole_part_with_separator(self):
        """Amazon's .a-price-whole renders like '1,299.'"""
        self.assertEqual(digits_only_price_processor("1,299."), 1299.0)

    def test_offscreen_price(self):
        self.assertEqual(digits_only_price_processor("$39.99"), 39.99)

    def test_whitespace_in_whole_part(self):
        self.assertEqual(digits_only_price_processor("1 299 ."), 1299.0)

    def test_no_digits(self):
        self.assertEqual(digits_only_price_processor("See price in cart"), 0)


class TestNormalizePrice(unittest.TestCase):

    def test_numbers(self):
        self.assertEqual(normalize_price(19), 19.0)
        self.assertEqual(normalize_price(19.5), 19.5)

    def test_strings(self):
        self.assertEqual(normalize_price("49.50"), 49.5)
        self.assertEqual(normalize_price("$1,049"), 1049.0)

    def test_non_positive_is_absent(self):
        self.assertIsNone(normalize_price(0))
        self.assertIsNone(normalize_price("0.00"))
        self.assertIsNone(normalize_price(-3))

    def test_unusable_values(self):
        self.assertIsNone(normalize_price(None))
        self.assertIsNone(normalize_price(True))
        self.assertIsNone(normalize_price("call us"))
        self.assertIsNone(normalize_price(float('nan')))

    def test_non_finite_is_absent(self):
        """json.loads accepts Infinity"""
        self.assertIsNone(normalize_price(float('inf')))
        self.assertIsNone(normalize_price(float('-inf')))


if __name__ == '__main__':
    unittest.main()
