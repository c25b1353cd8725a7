import logging
from typing import Optional, Tuple

from flask import Blueprint, Flask, Response, current_app, jsonify
from flask_cors import CORS

from collections_service.aggregator import collection_products
from collections_service.config import Settings, load_settings
from collections_service.errors import CollectionsServiceError
from collections_service.shopify import ShopifyClient

logger = logging.getLogger(__name__)

bp = Blueprint("collections", __name__)


@bp.route("/api/collections/<handle>", methods=["GET"])
def get_collection_products(handle: str) -> Response:
    """Return the collection with its simplified products as JSON."""
    settings: Settings = current_app.config["SETTINGS"]
    client: ShopifyClient = current_app.extensions["shopify_client"]

    logger.info("fetching collection products for %r", handle)
    try:
        body = collection_products(client, handle, max_workers=settings.product_workers)
    except CollectionsServiceError as e:
        logger.error("error fetching collection products for %r: %s", handle, e.message)
        return Response(
            f"error fetching collection products: {e.message}",
            status=500,
            mimetype="text/plain",
        )

    return Response(body, status=200, mimetype="application/json")


@bp.route("/health", methods=["GET"])
def health() -> Tuple[Response, int]:
    return jsonify({"status": "ok", "service": "collections-service"}), 200


def create_app(settings: Optional[Settings] = None, client: Optional[ShopifyClient] = None) -> Flask:
    if settings is None:
        settings = load_settings()

    app = Flask(__name__)
    CORS(app, resources={r"/*": {"origins": "*"}})

    app.config["SETTINGS"] = settings
    app.extensions["shopify_client"] = client or ShopifyClient.from_settings(settings)

    app.register_blueprint(bp)
    return app


def main() -> None:
    # configuration errors stop the process before it starts serving
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings)
    logger.info("Starting server on port %s...", settings.port)
    app.run(host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
