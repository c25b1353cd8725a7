import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter, Retry

from collections_service.config import Settings
from collections_service.errors import ShapeError, UpstreamError

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-Shopify-Access-Token"

# ---------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------
COLLECTION_QUERY = """
query getCollection($handle: String!) {
    collectionByHandle(handle: $handle) {
        id
        title
        products(first: 5) {
            edges {
                node {
                    id
                    title
                    handle
                }
            }
        }
    }
}
"""

PRODUCT_QUERY = """
query getProductByHandle($handle: String!) {
    productByHandle(handle: $handle) {
        id
        title
        description
        featuredImage {
            url
            altText
        }
        images(first: 10) {
            edges {
                node {
                    url
                    altText
                }
            }
        }
        variants(first: 10) {
            edges {
                node {
                    id
                    title
                    price
                    image {
                        altText
                        url
                    }
                }
            }
        }
    }
}
"""


def build_session(token: str, max_retries: int = 0) -> requests.Session:
    session = requests.Session()
    if max_retries:
        retry = Retry(
            total=max_retries,
            backoff_factor=0.5,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["POST"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
    session.headers.update(
        {
            TOKEN_HEADER: token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
    )
    return session


class ShopifyClient:
    """Thin requests wrapper around the Shopify GraphQL endpoint."""

    def __init__(
        self,
        endpoint: str,
        token: str,
        timeout: float = 10.0,
        max_retries: int = 0,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self._session = session if session is not None else build_session(token, max_retries)
        self._session.headers[TOKEN_HEADER] = token

    @classmethod
    def from_settings(cls, settings: Settings, session: Optional[requests.Session] = None) -> "ShopifyClient":
        return cls(
            settings.shopify_url,
            settings.shopify_token.get_secret_value(),
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
            session=session,
        )

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        POST a GraphQL query and return its ``data`` object.

        Raises UpstreamError for transport failures, non-2xx responses and
        GraphQL ``errors``; ShapeError when the body is not a GraphQL result.
        """
        payload: Dict[str, Any] = {"query": query, "variables": variables or {}}
        logger.debug("shopify query variables=%s", payload["variables"])
        try:
            resp = self._session.post(self.endpoint, json=payload, timeout=self.timeout)
            resp.raise_for_status()
        except requests.HTTPError as e:
            status = getattr(e.response, "status_code", "error")
            raise UpstreamError(f"shopify responded with HTTP {status}") from e
        except requests.RequestException as e:
            raise UpstreamError(f"shopify request failed: {type(e).__name__}") from e

        try:
            body = resp.json()
        except ValueError as e:
            raise ShapeError("shopify response is not valid JSON") from e

        if not isinstance(body, dict):
            raise ShapeError("shopify response is not a JSON object")

        errors = body.get("errors")
        if errors:
            raise UpstreamError(f"shopify returned errors: {_error_messages(errors)}")

        data = body.get("data")
        if not isinstance(data, dict):
            raise ShapeError("shopify response has no data object")
        return data


def _error_messages(errors: Any) -> str:
    if isinstance(errors, list):
        messages = [
            str(err.get("message", err)) if isinstance(err, dict) else str(err)
            for err in errors
        ]
        return "; ".join(messages)
    return str(errors)
