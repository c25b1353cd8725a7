"""Shopify stand-ins shared by the test modules."""

import requests


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self._payload = payload
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self.text is not None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeShopify:
    """
    Stands in for requests.Session against the GraphQL endpoint.

    collections/products map a handle to the node Shopify would return
    (None for an unknown handle). Handles in ``failing`` answer with HTTP 502.
    """

    def __init__(self, collections=None, products=None, failing=()):
        self.collections = collections or {}
        self.products = products or {}
        self.failing = set(failing)
        self.headers = {}
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout, "headers": dict(self.headers)})
        query = json["query"]
        handle = json["variables"]["handle"]
        if handle in self.failing:
            return FakeResponse(status_code=502)
        if "collectionByHandle" in query:
            return FakeResponse({"data": {"collectionByHandle": self.collections.get(handle)}})
        return FakeResponse({"data": {"productByHandle": self.products.get(handle)}})

    def product_handles_requested(self):
        return [
            call["json"]["variables"]["handle"]
            for call in self.calls
            if "productByHandle" in call["json"]["query"]
        ]


def make_collection(id, title, handles):
    return {
        "id": id,
        "title": title,
        "products": {
            "edges": [
                {"node": {"id": f"gid://product/{h}", "title": h.title(), "handle": h}}
                for h in handles
            ]
        },
    }


def make_product(id, title, description="", images=(), variants=(), featured_image=None):
    node = {
        "id": id,
        "title": title,
        "description": description,
        "featuredImage": featured_image,
        "images": {"edges": [{"node": image} for image in images]},
        "variants": {"edges": [{"node": variant} for variant in variants]},
    }
    return node
