"""
Product Extraction API
======================

POST /api/extract-product  {"url": "..."}

Renders the page in a headless browser and returns the extracted product.
This is the endpoint the server fetch strategy talks to.
"""

import asyncio

from flask import current_app, jsonify, request

from backend.product_extract.errors import InvalidUrlError, PageLoadError
from backend.product_extract.extractor import INVALID_URL, validate_url
from backend.product_extract.fetchers import BrowserFetcher
from backend.product_extract.logger import logger

FETCHER_KEY = 'product_extract.browser_fetcher'

PAGE_LOAD_FAILED = "Failed to load the webpage. The site might be blocking automated access."
SERVER_ERROR = "Server error during extraction. Please try again."


def _get_fetcher() -> BrowserFetcher:
    fetcher = current_app.extensions.get(FETCHER_KEY)
    if fetcher is None:
        fetcher = BrowserFetcher()
        current_app.extensions[FETCHER_KEY] = fetcher
    return fetcher


def extract_product():
    """POST /api/extract-product - Extract product data from a URL"""
    if request.method == 'OPTIONS':
        return '', 200

    if request.method != 'POST':
        return jsonify({"error": "Method not allowed"}), 405

    body = request.get_json(silent=True) or {}
    url = body.get('url') if isinstance(body, dict) else None

    if not url:
        return jsonify({"error": "URL is required"}), 400

    try:
        url = validate_url(url)
    except InvalidUrlError:
        return jsonify({"error": INVALID_URL}), 400

    logger.info(f"Extracting from: {url}")

    try:
        product = asyncio.run(_get_fetcher().render(url))
    except PageLoadError as e:
        logger.error(f"Page error for {url}: {e}")
        return jsonify({"error": PAGE_LOAD_FAILED}), 500
    except Exception as e:
        logger.exception(f"Extraction error for {url}: {e}")
        return jsonify({"error": SERVER_ERROR}), 500

    # "No product data" is a business result, not a server failure
    return jsonify(product.to_dict()), 200


def health_check():
    """GET /api/health - Health check endpoint"""
    return jsonify({
        "status": "healthy",
        "service": "Product Extraction API",
        "version": "1.0.0"
    })


def register_extract_routes(app, fetcher: BrowserFetcher = None):
    """Register extraction routes with Flask app"""
    if fetcher is not None:
        app.extensions[FETCHER_KEY] = fetcher

    app.add_url_rule(
        '/api/extract-product', 'extract_product', extract_product,
        methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS'],
        provide_automatic_options=False,
    )
    app.add_url_rule('/api/health', 'health_check', health_check, methods=['GET'])
