#!/usr/bin/env python3
"""
Backend Application
===================

Main entry point for the product extraction backend API.
Serves:
- POST /api/extract-product (headless-browser product extraction)
- GET  /api/health
"""

from flask import Flask
from flask_cors import CORS

from backend.config import config
from backend.api import register_extract_routes


def create_app(fetcher=None) -> Flask:
    """Build the Flask app. Tests pass a fake fetcher."""
    app = Flask(__name__)
    CORS(app,
         resources={r"/api/*": {"origins": "*"}},
         methods=['POST', 'OPTIONS'],
         allow_headers=['Content-Type'],
         send_wildcard=True)

    register_extract_routes(app, fetcher)
    return app


app = create_app()

# =============================================================================
# RUN SERVER
# =============================================================================

if __name__ == '__main__':
    print("=" * 80)
    print("🛍️  Wishlist Product Extraction API")
    print("=" * 80)
    print(f"📍 Host: {config.HOST}")
    print(f"🔌 Port: {config.PORT}")
    print(f"🐛 Debug: {config.DEBUG}")
    print("=" * 80)
    print("")
    print("📦 Endpoints:")
    print("  ✓ POST /api/extract-product - Render a product page and extract name/price/specs/image")
    print("  ✓ GET  /api/health")
    print("")

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)
