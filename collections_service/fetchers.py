from pydantic import ValidationError

from collections_service.errors import CollectionNotFoundError, ProductNotFoundError, ShapeError
from collections_service.models import RawCollection, RawProduct
from collections_service.sanitize import sanitize_string
from collections_service.shopify import COLLECTION_QUERY, PRODUCT_QUERY, ShopifyClient


def fetch_collection(client: ShopifyClient, handle: str) -> RawCollection:
    data = client.execute(COLLECTION_QUERY, {"handle": handle})
    node = data.get("collectionByHandle")
    if node is None:
        raise CollectionNotFoundError(f"collection not found: {handle!r}")
    try:
        return RawCollection.model_validate(node)
    except ValidationError as e:
        raise ShapeError(f"unexpected collection shape for {handle!r}: {e.error_count()} invalid field(s)") from e


def fetch_product(client: ShopifyClient, handle: str) -> RawProduct:
    """Fetch one product by handle, with its description sanitized."""
    data = client.execute(PRODUCT_QUERY, {"handle": handle})
    node = data.get("productByHandle")
    if node is None:
        raise ProductNotFoundError(f"product not found: {handle!r}")
    try:
        product = RawProduct.model_validate(node)
    except ValidationError as e:
        raise ShapeError(f"unexpected product shape for {handle!r}: {e.error_count()} invalid field(s)") from e
    return product.model_copy(update={"description": sanitize_string(product.description)})
