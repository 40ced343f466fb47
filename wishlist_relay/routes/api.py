"""
JSON endpoints used by the storefront.
Routes exist both bare and under /api; the two deployments of the storefront
theme call different prefixes.
"""
from urllib.parse import unquote

from flask import Blueprint, current_app, jsonify, request

from wishlist_relay.services.shopify import ShopifyError
from wishlist_relay.services.wishlist_service import get_wishlist, toggle_wishlist_item

api_bp = Blueprint('api', __name__)


def get_json_payload() -> dict:
    """Request body as a dict; a missing or non-object body reads as {}."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _decode_id(raw: str) -> str:
    # Storefront sends encodeURIComponent(gid); Werkzeug has already undone one layer.
    return unquote(raw)


def _store():
    return current_app.extensions['wishlist_store']


def _shopify():
    return current_app.extensions['shopify_client']


# ──────────────────────────────────────────────────────────────────
#  HEALTH
#     GET /health, /api/health
# ──────────────────────────────────────────────────────────────────
@api_bp.route('/health')
@api_bp.route('/api/health')
def health():
    return jsonify({'status': 'Wishlist server running'})


# ──────────────────────────────────────────────────────────────────
#  DIAGNOSTICS
#     GET /test-shopify
#     GET /test-customer/<id>
# ──────────────────────────────────────────────────────────────────
@api_bp.route('/test-shopify')
def test_shopify():
    try:
        return jsonify(_shopify().fetch_shop_name())
    except ShopifyError as e:
        current_app.logger.error(f'[API] test-shopify error: {e}')
        return jsonify({'error': 'Shopify connection failed'}), 500


@api_bp.route('/test-customer/<path:customer_id>')
def test_customer(customer_id):
    customer_id = _decode_id(customer_id)
    try:
        return jsonify(_shopify().fetch_customer(customer_id))
    except ShopifyError as e:
        current_app.logger.error(f'[API] test-customer error for {customer_id}: {e}')
        return jsonify({'error': 'Customer fetch failed'}), 500


# ──────────────────────────────────────────────────────────────────
#  WISHLIST
#     GET  /wishlist/<customer_id>
#     POST /wishlist/toggle/<customer_id>   { productId }
# ──────────────────────────────────────────────────────────────────
@api_bp.route('/wishlist/<path:customer_id>')
@api_bp.route('/api/wishlist/<path:customer_id>')
def wishlist(customer_id):
    customer_id = _decode_id(customer_id)
    try:
        return jsonify(get_wishlist(_store(), customer_id))
    except Exception as e:
        current_app.logger.error(f'[API] wishlist fetch error for {customer_id}: {e}')
        return jsonify({'error': 'Failed to fetch wishlist'}), 500


@api_bp.route('/wishlist/toggle/<path:customer_id>', methods=['POST'])
@api_bp.route('/api/wishlist/toggle/<path:customer_id>', methods=['POST'])
def toggle_wishlist(customer_id):
    customer_id = _decode_id(customer_id)
    product_id = get_json_payload().get('productId')

    if not product_id:
        return jsonify({'error': 'productId required'}), 400

    # Themes post {{ product.id }} as a number; the metafield holds strings.
    product_id = str(product_id)

    try:
        return jsonify(toggle_wishlist_item(_store(), customer_id, product_id))
    except Exception as e:
        current_app.logger.error(f'[API] wishlist toggle error for {customer_id}: {e}')
        return jsonify({'error': 'Wishlist update failed'}), 500
