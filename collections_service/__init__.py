"""Collections service: Shopify collection products as simplified JSON."""

__version__ = "0.1.0"
