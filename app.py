"""Taniku 農業商店後端 Flask 應用。"""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from common.errors import StoreError, StoreIOError
from common.services.auth_service import AuthService
from common.services.cart_service import CartService
from common.services.catalog_service import CatalogService
from common.services.checkout_service import CheckoutService
from common.services.order_service import OrderService
from common.utils.ids import IdGenerator
from config import StoreConfig
from routes import admin, api, user
from services import (
    ItemRepository,
    JsonRecordStore,
    OrderRepository,
    SessionStore,
    UserRepository,
    ensure_data_files,
)


logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "伺服器發生未預期的錯誤，請稍後再試。"


def _handle_store_error(exc: StoreError):
    if isinstance(exc, StoreIOError):
        logger.error("資料存取失敗: %s", exc.message, exc_info=exc)
        return jsonify({"error": GENERIC_SERVER_ERROR}), 500
    return jsonify({"error": exc.message}), exc.status_code


def _handle_http_error(exc: HTTPException):
    response = jsonify({"error": exc.description})
    response.status_code = exc.code
    for name, value in exc.get_headers():
        if name.lower() != "content-type":
            response.headers[name] = value
    return response


def _handle_unexpected(exc: Exception):
    logger.exception("未處理的錯誤: %s", exc)
    return jsonify({"error": GENERIC_SERVER_ERROR}), 500


def build_components(config: StoreConfig) -> dict:
    store = JsonRecordStore(config.data_dir)
    ids = IdGenerator()
    sessions = SessionStore(ttl_seconds=config.token_ttl.total_seconds())

    item_repo = ItemRepository(store, ids)
    order_repo = OrderRepository(store, ids)
    user_repo = UserRepository(store, ids)
    cart_service = CartService(sessions)

    return {
        "store": store,
        "sessions": sessions,
        "item_repo": item_repo,
        "order_repo": order_repo,
        "user_repo": user_repo,
        "auth_service": AuthService(user_repo, sessions, secret=config.jwt_secret, token_ttl=config.token_ttl),
        "catalog_service": CatalogService(item_repo),
        "cart_service": cart_service,
        "checkout_service": CheckoutService(item_repo, order_repo, cart_service),
        "order_service": OrderService(order_repo),
    }


def create_app(config: Optional[StoreConfig] = None) -> Flask:
    config = config or StoreConfig.load()
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)
    app.config["STORE_CONFIG"] = config

    components = build_components(config)
    ensure_data_files(components["store"], config)
    app.extensions["store_components"] = components

    app.register_blueprint(user.user_bp)
    app.register_blueprint(api.api_bp)
    app.register_blueprint(admin.admin_bp)

    app.register_error_handler(StoreError, _handle_store_error)
    app.register_error_handler(HTTPException, _handle_http_error)
    app.register_error_handler(Exception, _handle_unexpected)

    return app


def main() -> None:
    app = create_app()
    config = app.config["STORE_CONFIG"]
    logger.info("Taniku 商店後端啟動於 http://%s:%s", config.host, config.port)
    app.run(host=config.host, port=config.port, debug=False, threaded=True)


if __name__ == "__main__":
    main()
