import logging

from flask import Flask
from flask_cors import CORS

from wishlist_relay.config import Config
from wishlist_relay.routes.api import api_bp
from wishlist_relay.services.shopify import ShopifyClient, ShopifySettings
from wishlist_relay.services.wishlist_service import MetafieldWishlistStore


def create_app(config=None, store=None):
    """Build the Flask app.

    Args:
        config: optional mapping applied over Config (tests use this)
        store: optional WishlistStore replacing the Shopify metafield store
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if config:
        app.config.update(config)

    app.logger.setLevel(getattr(logging, str(app.config['LOG_LEVEL']).upper(), logging.INFO))

    # Origins outside this list get no CORS headers, so browsers refuse the response.
    CORS(app, origins=app.config['CORS_ORIGINS'])

    settings = ShopifySettings.from_config(app.config)
    if not settings.is_configured:
        app.logger.warning('Shopify: SHOPIFY_SHOP, SHOPIFY_ADMIN_TOKEN or API_VERSION is missing')

    client = ShopifyClient(settings)
    app.extensions['shopify_client'] = client
    app.extensions['wishlist_store'] = store or MetafieldWishlistStore(client)

    # Customer ids are GIDs ("gid://shopify/Customer/1"); keep the double slash intact.
    app.url_map.merge_slashes = False
    app.register_blueprint(api_bp)
    return app
