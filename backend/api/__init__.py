"""
API Package
===========

REST API endpoints for product extraction.
"""

from .extract_routes import register_extract_routes

__all__ = ['register_extract_routes']
