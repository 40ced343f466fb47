"""Wishlist domain operations.

The wishlist lives in Shopify as a JSON list inside the customer metafield
``custom.wishlist_products``. This module holds the parsing/toggle rules and
the metafield-backed store. The blueprint only decodes ids and validates the
request body before calling in here.
"""

from __future__ import annotations

import json
from typing import Protocol

from flask import current_app

from wishlist_relay.helpers.locks import KeyedLock
from wishlist_relay.services.shopify import ShopifyClient, ShopifyUserError

WISHLIST_NAMESPACE = 'custom'
WISHLIST_KEY = 'wishlist_products'
WISHLIST_TYPE = 'list.single_line_text_field'

WISHLIST_QUERY = '''
query getWishlist($id: ID!) {
  customer(id: $id) {
    metafield(namespace: "custom", key: "wishlist_products") {
      value
    }
  }
}
'''

WISHLIST_MUTATION = '''
mutation updateWishlist($input: CustomerInput!) {
  customerUpdate(input: $input) {
    customer { id }
    userErrors { field message }
  }
}
'''


class WishlistStore(Protocol):
    def fetch_wishlist(self, customer_id: str) -> list[str]: ...

    def save_wishlist(self, customer_id: str, items: list[str]) -> None: ...


def parse_wishlist(raw: str | None) -> list[str]:
    """Decode a stored metafield value; anything unusable reads as empty."""
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        current_app.logger.warning(f'Wishlist: ignoring corrupt metafield value {raw[:80]!r}')
        return []
    if not isinstance(value, list):
        current_app.logger.warning(f'Wishlist: ignoring non-list metafield value {raw[:80]!r}')
        return []
    return value


def toggle_product(wishlist: list[str], product_id: str) -> tuple[str, list[str]]:
    """Return (action, new_list). Removal drops every occurrence."""
    if product_id in wishlist:
        return 'removed', [p for p in wishlist if p != product_id]
    return 'added', [*wishlist, product_id]


class MetafieldWishlistStore:
    def __init__(self, client: ShopifyClient):
        self.client = client

    def fetch_wishlist(self, customer_id: str) -> list[str]:
        data = self.client.execute(WISHLIST_QUERY, {'id': customer_id})
        # Unknown customer and missing metafield both come back as null.
        customer = data.get('customer') or {}
        metafield = customer.get('metafield') or {}
        return parse_wishlist(metafield.get('value'))

    def save_wishlist(self, customer_id: str, items: list[str]) -> None:
        data = self.client.execute(
            WISHLIST_MUTATION,
            {
                'input': {
                    'id': customer_id,
                    'metafields': [
                        {
                            'namespace': WISHLIST_NAMESPACE,
                            'key': WISHLIST_KEY,
                            'type': WISHLIST_TYPE,
                            'value': json.dumps(items),
                        }
                    ],
                }
            },
        )
        user_errors = (data.get('customerUpdate') or {}).get('userErrors') or []
        if user_errors:
            current_app.logger.error(f'Wishlist: customerUpdate userErrors for {customer_id}: {user_errors}')
            raise ShopifyUserError(user_errors)


_customer_locks = KeyedLock()


def get_wishlist(store: WishlistStore, customer_id: str) -> dict:
    return {'wishlist': store.fetch_wishlist(customer_id)}


def toggle_wishlist_item(store: WishlistStore, customer_id: str, product_id: str) -> dict:
    """Add the product if absent, otherwise remove all of its occurrences.

    The read and the write are serialized per customer inside this process.
    Two workers toggling the same customer can still overwrite each other.

    Returns ``{'success': True, 'action': 'added'|'removed', 'wishlist': [...]}``.
    """
    with _customer_locks.hold(customer_id):
        current = store.fetch_wishlist(customer_id)
        action, updated = toggle_product(current, product_id)
        store.save_wishlist(customer_id, updated)

    current_app.logger.info(f'Wishlist: {action} {product_id} for {customer_id} ({len(updated)} items)')
    return {'success': True, 'action': action, 'wishlist': updated}
