"""帳號相關 API：註冊、登入、登出與個人資料。"""

from __future__ import annotations

from flask import Blueprint, g, jsonify

from .guards import components, json_body, login_required


user_bp = Blueprint("store_user", __name__, url_prefix="/api")


@user_bp.post("/register")
def register():
    payload = json_body()
    components()["auth_service"].register(
        username=payload.get("username"),
        email=payload.get("email"),
        password=payload.get("password"),
    )
    return jsonify({"message": "註冊成功，請登入。"}), 201


@user_bp.post("/login")
def login():
    payload = json_body()
    token, user = components()["auth_service"].login(
        email=payload.get("email"),
        password=payload.get("password"),
    )
    return jsonify({"message": "登入成功", "token": token, "user": user.public_dict()})


@user_bp.post("/logout")
@login_required
def logout():
    components()["auth_service"].logout(g.current_user)
    return jsonify({"message": "已登出。"})


@user_bp.get("/user")
@login_required
def current_user():
    user = g.current_user
    return jsonify({"user": {"id": user.id, "username": user.username, "role": user.role}})


@user_bp.put("/profile")
@login_required
def update_profile():
    payload = json_body()
    token, user = components()["auth_service"].update_profile(
        g.current_user,
        username=payload.get("username"),
        email=payload.get("email"),
        password=payload.get("password"),
    )
    return jsonify({"message": "個人資料已更新。", "token": token, "user": user.public_dict()})
