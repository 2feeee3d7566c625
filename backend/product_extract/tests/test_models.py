#!/usr/bin/env python3
"""
ExtractedProduct Tests
======================
"""

import unittest

from backend.product_extract.models import ExtractedProduct


class TestExtractedProduct(unittest.TestCase):

    def test_usable(self):
        self.assertTrue(ExtractedProduct(name='Mouse').is_usable())
        self.assertTrue(ExtractedProduct(price=5.0).is_usable())
        self.assertFalse(ExtractedProduct(image='https://cdn/x.jpg', specifications='spec').is_usable())
        self.assertFalse(ExtractedProduct(name='Mouse', error='oops').is_usable())
        self.assertFalse(ExtractedProduct.failure('oops').is_usable())

    def test_to_dict_omits_absent_fields(self):
        self.assertEqual(ExtractedProduct(name='Mouse').to_dict(), {'name': 'Mouse'})
        self.assertEqual(ExtractedProduct.failure('nope').to_dict(), {'error': 'nope'})

    def test_fill_missing_keeps_known_fields(self):
        known = ExtractedProduct(name='Selector Name', specifications='From the page')
        other = ExtractedProduct(name='LD Name', price=12.0, image='https://cdn/i.jpg')

        known.fill_missing(other)

        self.assertEqual(known.to_dict(), {
            'name': 'Selector Name',
            'price': 12.0,
            'specifications': 'From the page',
            'image': 'https://cdn/i.jpg',
        })

    def test_from_dict(self):
        product = ExtractedProduct.from_dict({
            'name': '  Mouse ', 'price': 24, 'image': '', 'specifications': None, 'extra': 'ignored',
        })
        self.assertEqual(product.to_dict(), {'name': 'Mouse', 'price': 24.0})

    def test_from_dict_rejects_bad_prices(self):
        for price in (0, -1, '24.99', None, True):
            self.assertIsNone(ExtractedProduct.from_dict({'price': price}).price, repr(price))

    def test_from_dict_error(self):
        product = ExtractedProduct.from_dict({'error': 'No product data found.'})
        self.assertEqual(product.error, 'No product data found.')
        self.assertFalse(product.is_usable())


if __name__ == '__main__':
    unittest.main()
