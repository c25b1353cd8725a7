"""
Typed records for the two Shopify GraphQL responses we consume.

Connections arrive as {"edges": [{"node": {...}}]}; they are unwrapped to
plain lists of nodes while decoding. A missing, null or malformed
connection (or edge) decodes as an empty list.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def edge_nodes(connection: Any) -> List[dict]:
    if not isinstance(connection, dict):
        return []
    edges = connection.get("edges")
    if not isinstance(edges, list):
        return []
    return [
        edge["node"]
        for edge in edges
        if isinstance(edge, dict) and isinstance(edge.get("node"), dict)
    ]


class ShopifyRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Image(ShopifyRecord):
    url: str
    alt_text: Optional[str] = Field(default=None, alias="altText")


class Variant(ShopifyRecord):
    id: str
    title: str
    price: str
    image: Optional[Image] = None


class RawProduct(ShopifyRecord):
    id: str
    title: str
    description: str = ""
    featured_image: Optional[Image] = Field(default=None, alias="featuredImage")
    images: List[Image] = Field(default_factory=list)
    variants: List[Variant] = Field(default_factory=list)

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, value):
        return "" if value is None else value

    @field_validator("images", "variants", mode="before")
    @classmethod
    def _unwrap_edges(cls, value):
        return edge_nodes(value)


class ProductRef(ShopifyRecord):
    id: Optional[str] = None
    title: Optional[str] = None
    handle: Optional[str] = None


class RawCollection(ShopifyRecord):
    id: str
    title: str
    products: List[ProductRef] = Field(default_factory=list)

    @field_validator("products", mode="before")
    @classmethod
    def _unwrap_edges(cls, value):
        return edge_nodes(value)
