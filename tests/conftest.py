import time

import pytest

from wishlist_relay import create_app

TEST_CONFIG = {
    'TESTING': True,
    'SHOPIFY_SHOP': 'test-shop.myshopify.com',
    'SHOPIFY_ADMIN_TOKEN': 'shpat_test',
    'API_VERSION': '2024-10',
    'SHOPIFY_TIMEOUT': None,
    'CORS_ORIGINS': ['https://fraegra.myshopify.com', 'https://fraegra.com'],
}


class FakeStore:
    """In-memory stand-in for the Shopify metafield store."""

    def __init__(self, wishlists=None):
        self.wishlists = dict(wishlists or {})
        self.saves = []
        self.fail_with = None
        self.read_delay = 0

    def fetch_wishlist(self, customer_id):
        if self.fail_with:
            raise self.fail_with
        if self.read_delay:
            time.sleep(self.read_delay)
        return list(self.wishlists.get(customer_id, []))

    def save_wishlist(self, customer_id, items):
        self.saves.append((customer_id, list(items)))
        self.wishlists[customer_id] = list(items)


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def app(store):
    return create_app(config=TEST_CONFIG, store=store)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app
