import json
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from collections_service.errors import CollectionFetchError, CollectionNotFoundError, CollectionsServiceError
from collections_service.fetchers import fetch_collection, fetch_product
from collections_service.models import Image, RawProduct
from collections_service.shopify import ShopifyClient

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Reshaping
# ---------------------------------------------------------------------
def simplify_image(image: Image) -> Dict[str, Any]:
    return {"altText": image.alt_text, "url": image.url}


def simplify_product(handle: str, raw: RawProduct) -> Dict[str, Any]:
    """
    Flatten a product into the response shape.

    Variants take the product's handle. featuredImage and variant images
    are only present when Shopify returned one.
    """
    product: Dict[str, Any] = {
        "handle": handle,
        "id": raw.id,
        "title": raw.title,
        "description": raw.description,
        "images": [simplify_image(image) for image in raw.images],
        "variants": [],
    }
    if raw.featured_image is not None:
        product["featuredImage"] = simplify_image(raw.featured_image)

    for node in raw.variants:
        variant: Dict[str, Any] = {
            "handle": handle,
            "id": node.id,
            "title": node.title,
            "price": node.price,
        }
        if node.image is not None:
            variant["image"] = simplify_image(node.image)
        product["variants"].append(variant)

    return product


# ---------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------
def _product_or_none(client: ShopifyClient, handle: str) -> Optional[Dict[str, Any]]:
    try:
        raw = fetch_product(client, handle)
    except CollectionsServiceError as e:
        logger.warning("error fetching product details for %r, skipping: %s", handle, e.message)
        return None
    return simplify_product(handle, raw)


def build_collection_products(client: ShopifyClient, handle: str, max_workers: int = 1) -> Dict[str, Any]:
    """
    Fetch a collection and the details of each of its products.

    Products that fail to load are skipped; the rest keep the collection's
    order. Collection-level failures raise.
    """
    try:
        collection = fetch_collection(client, handle)
    except CollectionNotFoundError:
        raise
    except CollectionsServiceError as e:
        raise CollectionFetchError(f"error fetching collection: {e.message}") from e

    handles: List[str] = []
    for ref in collection.products:
        if ref.handle:
            handles.append(ref.handle)
        else:
            logger.warning("collection %r lists a product without a handle: %s", handle, ref.id)

    if max_workers > 1 and len(handles) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(handles))) as pool:
            results = list(pool.map(lambda h: _product_or_none(client, h), handles))
    else:
        results = [_product_or_none(client, h) for h in handles]

    products = [product for product in results if product is not None]
    logger.info("collection %r: %d of %d products aggregated", handle, len(products), len(handles))

    return {
        "id": collection.id,
        "title": collection.title,
        "products": products,
    }


def collection_products(client: ShopifyClient, handle: str, max_workers: int = 1) -> str:
    return json.dumps(build_collection_products(client, handle, max_workers), indent=2)
