"""Pytest fixtures: an in-memory Shopify stand-in wired into the client and app."""

import pytest

from collections_service.app import create_app
from collections_service.config import Settings
from collections_service.shopify import ShopifyClient
from helpers import FakeShopify


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        shopify_url="https://example.myshopify.com/admin/api/2024-01/graphql.json",
        shopify_token="shpat_secret",
    )


@pytest.fixture
def shopify():
    return FakeShopify()


@pytest.fixture
def client(settings, shopify):
    return ShopifyClient.from_settings(settings, session=shopify)


@pytest.fixture
def app(settings, client):
    return create_app(settings, client)


@pytest.fixture
def http(app):
    return app.test_client()
