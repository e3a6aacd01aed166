"""提供前台使用的 API 路由：商品瀏覽、購物車、結帳與訂單。"""

from __future__ import annotations

from flask import Blueprint, g, jsonify, request

from .guards import components, json_body, login_required, path_id


api_bp = Blueprint("store_api", __name__, url_prefix="/api")


@api_bp.get("/items")
def list_items():
    catalog = components()["catalog_service"]
    items = catalog.list_products(
        query=request.args.get("search"),
        category=request.args.get("category"),
    )
    return jsonify([item.to_dict() for item in items])


@api_bp.get("/items/<item_id>")
def get_item(item_id: str):
    item = components()["catalog_service"].get_product(path_id(item_id, "商品 ID"))
    return jsonify(item.to_dict())


# --- Cart API ---

@api_bp.post("/cart/add")
@login_required
def add_to_cart():
    payload = json_body()
    item = payload.get("item")
    cart = components()["cart_service"].add_item(session_id=g.current_user.sid, item=item)
    name = item.get("name") if isinstance(item, dict) else ""
    return jsonify({"message": f"{name} 已加入購物車。", **cart})


@api_bp.get("/cart")
@login_required
def get_cart():
    return jsonify(components()["cart_service"].get_cart(session_id=g.current_user.sid))


@api_bp.put("/cart/update")
@login_required
def update_cart():
    payload = json_body()
    cart = components()["cart_service"].update_item(
        session_id=g.current_user.sid,
        item_id=payload.get("itemId"),
        change=payload.get("change"),
    )
    return jsonify({"message": "購物車已更新。", **cart})


@api_bp.delete("/cart/remove/<item_id>")
@login_required
def remove_from_cart(item_id: str):
    cart = components()["cart_service"].remove_item(session_id=g.current_user.sid, item_id=item_id)
    return jsonify({"message": "已從購物車移除。", **cart})


# --- Checkout & Orders API ---

@api_bp.post("/checkout")
@login_required
def checkout():
    payload = json_body()
    order = components()["checkout_service"].checkout(user=g.current_user, shipping=payload)
    return jsonify({"message": "貨到付款訂單已建立。", "order": order.to_dict()}), 201


@api_bp.get("/orders")
@login_required
def list_own_orders():
    orders = components()["order_service"].list_for_user(g.current_user.id)
    return jsonify([order.to_dict() for order in orders])


@api_bp.get("/orders/<order_id>")
@login_required
def get_order(order_id: str):
    order = components()["order_service"].get_order(path_id(order_id, "訂單 ID"), g.current_user)
    return jsonify({"order": order.to_dict()})


@api_bp.delete("/orders/<order_id>")
@login_required
def delete_own_order(order_id: str):
    oid = path_id(order_id, "訂單 ID")
    components()["order_service"].delete_own(oid, g.current_user.id)
    return jsonify({"message": f"訂單 #{oid} 已從紀錄中刪除。"})
