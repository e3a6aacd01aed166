"""Error taxonomy shared by the storefront services.

Services raise these; the Flask app maps them to JSON responses using
``status_code``.
"""

from typing import Iterable, Optional


class StoreError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(StoreError):
    status_code = 400


class EmptyCartError(ValidationError):
    def __init__(self, message: str = "購物車是空的，無法結帳。") -> None:
        super().__init__(message)


class MissingShippingFieldError(ValidationError):
    def __init__(self, fields: Iterable[str]) -> None:
        self.fields = list(fields)
        super().__init__("收件資料不完整，缺少欄位：" + ", ".join(self.fields))


class InvalidStatusError(ValidationError):
    def __init__(self, status: Optional[str], allowed: Iterable[str]) -> None:
        self.status = status
        super().__init__(f"無效的訂單狀態：{status}。可用狀態：{', '.join(allowed)}。")


class InvalidStateError(ValidationError):
    pass


class ConflictError(StoreError):
    status_code = 400


class AuthenticationError(StoreError):
    status_code = 401


class AuthorizationError(StoreError):
    status_code = 403


class NotFoundError(StoreError):
    status_code = 404


class ItemNotFoundError(NotFoundError):
    def __init__(self, item_id) -> None:
        self.item_id = item_id
        super().__init__(f"商品 ID {item_id} 已不在商品目錄中。")


class StoreIOError(StoreError):
    """Persistence failure; detail is logged, never sent to the client."""

    status_code = 500
