"""管理後台 API：商品維護與訂單狀態。"""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from .guards import components, json_body, path_id, require_admin


admin_bp = Blueprint("store_admin", __name__, url_prefix="/api")


@admin_bp.before_request
def guard_admin_routes():
    require_admin()
    return None


@admin_bp.post("/items")
def create_item():
    payload = json_body()
    item = components()["catalog_service"].create_product(payload)
    return jsonify({"message": "商品已新增。", "item": item.to_dict()}), 201


@admin_bp.put("/items/<item_id>")
def update_item(item_id: str):
    payload = json_body()
    item = components()["catalog_service"].update_product(path_id(item_id, "商品 ID"), payload)
    return jsonify({"message": "商品已更新。", "item": item.to_dict()})


@admin_bp.delete("/items/<item_id>")
def delete_item(item_id: str):
    components()["catalog_service"].delete_product(path_id(item_id, "商品 ID"))
    return jsonify({"message": "商品已刪除。"})


@admin_bp.get("/orders/all")
def list_all_orders():
    orders = components()["order_service"].list_all(request.args.get("search"))
    return jsonify([order.to_dict() for order in orders])


@admin_bp.put("/orders/<order_id>/status")
def update_order_status(order_id: str):
    oid = path_id(order_id, "訂單 ID")
    payload = json_body()
    order = components()["order_service"].set_status(oid, payload.get("status"))
    return jsonify({"message": f"訂單 #{oid} 狀態已更新為 {order.status}。", "order": order.to_dict()})
