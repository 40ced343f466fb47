import pytest
import requests

from wishlist_relay.services.shopify import (
    ShopifyClient,
    ShopifyConfigError,
    ShopifyRequestError,
    ShopifySettings,
)

SETTINGS = ShopifySettings(shop='test-shop.myshopify.com', access_token='shpat_test', api_version='2024-10')


class FakeResponse:
    def __init__(self, body=None, status_code=200, bad_json=False):
        self._body = body
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self._bad_json = bad_json

    def json(self):
        if self._bad_json:
            raise ValueError('not json')
        return self._body


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.exc:
            raise self.exc
        return self.response


def test_endpoint_embeds_shop_and_version():
    assert SETTINGS.endpoint == 'https://test-shop.myshopify.com/admin/api/2024-10/graphql.json'


def test_settings_from_config_strips_values():
    settings = ShopifySettings.from_config({
        'SHOPIFY_SHOP': ' shop.myshopify.com ',
        'SHOPIFY_ADMIN_TOKEN': 'tok',
        'API_VERSION': '2024-10',
    })
    assert settings.shop == 'shop.myshopify.com'
    assert settings.is_configured
    assert settings.timeout is None


def test_execute_posts_query_and_returns_data(app_ctx):
    session = FakeSession(FakeResponse({'data': {'shop': {'name': 'Fraegra'}}}))
    client = ShopifyClient(SETTINGS, session=session)

    data = client.execute('{ shop { name } }', {'a': 1})

    assert data == {'shop': {'name': 'Fraegra'}}
    assert len(session.calls) == 1
    url, kwargs = session.calls[0]
    assert url == SETTINGS.endpoint
    assert kwargs['json'] == {'query': '{ shop { name } }', 'variables': {'a': 1}}
    assert kwargs['headers']['X-Shopify-Access-Token'] == 'shpat_test'
    assert kwargs['headers']['Content-Type'] == 'application/json'


def test_execute_defaults_variables_to_empty_mapping(app_ctx):
    session = FakeSession(FakeResponse({'data': {}}))
    ShopifyClient(SETTINGS, session=session).execute('{ shop { name } }')
    assert session.calls[0][1]['json']['variables'] == {}


def test_errors_envelope_raises_generic_error(app_ctx):
    body = {'data': None, 'errors': [{'message': 'Field customer is missing'}]}
    client = ShopifyClient(SETTINGS, session=FakeSession(FakeResponse(body)))

    with pytest.raises(ShopifyRequestError, match='Shopify request failed'):
        client.execute('{ bad }')


def test_network_failure_raises_request_error(app_ctx):
    session = FakeSession(exc=requests.ConnectionError('boom'))
    with pytest.raises(ShopifyRequestError):
        ShopifyClient(SETTINGS, session=session).execute('{ shop { name } }')


def test_non_json_body_raises_request_error(app_ctx):
    session = FakeSession(FakeResponse(status_code=502, bad_json=True))
    with pytest.raises(ShopifyRequestError):
        ShopifyClient(SETTINGS, session=session).execute('{ shop { name } }')


def test_http_error_status_raises_request_error(app_ctx):
    session = FakeSession(FakeResponse({'data': None}, status_code=500))
    with pytest.raises(ShopifyRequestError):
        ShopifyClient(SETTINGS, session=session).execute('{ shop { name } }')


def test_missing_settings_never_touch_network(app_ctx):
    session = FakeSession(FakeResponse({'data': {}}))
    client = ShopifyClient(ShopifySettings(shop='', access_token='', api_version=''), session=session)

    with pytest.raises(ShopifyConfigError):
        client.execute('{ shop { name } }')
    assert session.calls == []


def test_fetch_customer_passes_id(app_ctx):
    body = {'data': {'customer': {'id': 'gid://shopify/Customer/1', 'metafield': None}}}
    session = FakeSession(FakeResponse(body))

    data = ShopifyClient(SETTINGS, session=session).fetch_customer('gid://shopify/Customer/1')

    assert data['customer']['id'] == 'gid://shopify/Customer/1'
    assert session.calls[0][1]['json']['variables'] == {'id': 'gid://shopify/Customer/1'}


def test_non_object_json_body_raises_request_error(app_ctx):
    session = FakeSession(FakeResponse(['unexpected']))
    with pytest.raises(ShopifyRequestError):
        ShopifyClient(SETTINGS, session=session).execute('{ shop { name } }')
