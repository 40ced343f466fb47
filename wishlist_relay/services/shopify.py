"""Shopify Admin GraphQL client.

Every call is a single POST to
``https://{shop}/admin/api/{api_version}/graphql.json`` authenticated with the
static admin token. There are no retries and no caching; the caller decides
what a failure means.

Shopify returns ``{"data": ..., "errors": [...]}``. Any non-empty ``errors``
list is logged and turned into a generic ShopifyRequestError.
"""

from __future__ import annotations

from dataclasses import dataclass

import requests
from flask import current_app


class ShopifyError(RuntimeError):
    """Base class for upstream failures."""


class ShopifyConfigError(ShopifyError):
    pass


class ShopifyRequestError(ShopifyError):
    pass


class ShopifyUserError(ShopifyError):
    """A mutation came back with ``userErrors``."""

    def __init__(self, user_errors: list[dict]):
        self.user_errors = user_errors
        messages = '; '.join(e.get('message', '') for e in user_errors)
        super().__init__(f'Shopify rejected the update: {messages}')


@dataclass(frozen=True)
class ShopifySettings:
    shop: str
    access_token: str
    api_version: str
    timeout: float | None = None

    @classmethod
    def from_config(cls, config) -> 'ShopifySettings':
        return cls(
            shop=(config.get('SHOPIFY_SHOP') or '').strip(),
            access_token=(config.get('SHOPIFY_ADMIN_TOKEN') or '').strip(),
            api_version=(config.get('API_VERSION') or '').strip(),
            timeout=config.get('SHOPIFY_TIMEOUT'),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.shop and self.access_token and self.api_version)

    @property
    def endpoint(self) -> str:
        return f'https://{self.shop}/admin/api/{self.api_version}/graphql.json'


SHOP_NAME_QUERY = '''
{
  shop {
    name
  }
}
'''

CUSTOMER_QUERY = '''
query getCustomer($id: ID!) {
  customer(id: $id) {
    id
    email
    firstName
    lastName
    metafield(namespace: "custom", key: "wishlist_products") {
      id
      namespace
      key
      type
      value
    }
  }
}
'''


class ShopifyClient:
    def __init__(self, settings: ShopifySettings, session: requests.Session | None = None):
        self.settings = settings
        self._http = session or requests

    def _headers(self) -> dict:
        return {
            'X-Shopify-Access-Token': self.settings.access_token,
            'Content-Type': 'application/json',
        }

    def execute(self, query: str, variables: dict | None = None) -> dict:
        """Run a query or mutation and return its ``data`` payload.

        Raises:
            ShopifyConfigError: shop, token or API version missing
            ShopifyRequestError: network failure, bad HTTP status, non-JSON
                body, or an ``errors`` list in the response
        """
        if not self.settings.is_configured:
            raise ShopifyConfigError('Shopify credentials are not configured')

        payload = {'query': query, 'variables': variables or {}}

        try:
            res = self._http.post(
                self.settings.endpoint,
                json=payload,
                headers=self._headers(),
                timeout=self.settings.timeout,
            )
        except requests.RequestException as e:
            current_app.logger.error(f'Shopify: request to {self.settings.shop} failed: {e}')
            raise ShopifyRequestError('Shopify request failed') from e

        try:
            body = res.json()
        except ValueError as e:
            current_app.logger.error(f'Shopify: non-JSON response (HTTP {res.status_code})')
            raise ShopifyRequestError('Shopify request failed') from e

        if not isinstance(body, dict):
            current_app.logger.error(f'Shopify: unexpected response body (HTTP {res.status_code}): {body!r:.200}')
            raise ShopifyRequestError('Shopify request failed')

        # Shopify reports throttling and query errors as 200 + errors, so the
        # envelope is checked before the status.
        errors = body.get('errors')
        if errors:
            current_app.logger.error(f'Shopify: GraphQL errors: {errors}')
            raise ShopifyRequestError('Shopify request failed')

        if not res.ok:
            current_app.logger.error(f'Shopify: HTTP {res.status_code}')
            raise ShopifyRequestError('Shopify request failed')

        return body.get('data') or {}

    def fetch_shop_name(self) -> dict:
        return self.execute(SHOP_NAME_QUERY)

    def fetch_customer(self, customer_id: str) -> dict:
        """Raw customer + wishlist metafield, for debugging."""
        return self.execute(CUSTOMER_QUERY, {'id': customer_id})
