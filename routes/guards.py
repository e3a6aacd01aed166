"""路由共用的元件存取與登入驗證工具。"""

from __future__ import annotations

from functools import wraps
from typing import Any, Dict, Optional

from flask import current_app, g, request

from common.errors import AuthorizationError, ValidationError
from common.models.user import CurrentUser
from common.utils.validators import parse_int


def components() -> Dict[str, Any]:
    return current_app.extensions["store_components"]


def _bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def authenticate_request() -> CurrentUser:
    """驗證 Bearer 憑證並掛到 ``g.current_user``。"""

    user = components()["auth_service"].authenticate(_bearer_token())
    g.current_user = user
    return user


def require_admin() -> CurrentUser:
    user = authenticate_request()
    if not user.is_admin:
        raise AuthorizationError("需要管理者權限才能操作此功能。")
    return user


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        authenticate_request()
        return view(*args, **kwargs)

    return wrapper


def path_id(value: str, label: str = "ID") -> int:
    return parse_int(value, label)


def json_body() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("請求內容必須是 JSON 物件。")
    return payload
