class CollectionsServiceError(Exception):
    """Base error for anything that can fail while serving a collection."""

    def __init__(self, message: str, *args):
        self.message = message
        super().__init__(message, *args)


class ConfigurationError(CollectionsServiceError, RuntimeError):
    """Raised at startup when required environment variables are missing or invalid."""


class UpstreamError(CollectionsServiceError):
    """Raised when the Shopify API is unreachable or answers with an error."""


class ShapeError(CollectionsServiceError):
    """Raised when the Shopify response does not have the expected fields."""


class CollectionNotFoundError(CollectionsServiceError):
    pass


class ProductNotFoundError(CollectionsServiceError):
    pass


class CollectionFetchError(CollectionsServiceError):
    pass
