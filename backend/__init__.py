"""
Backend package for the wishlist product extractor.
"""
