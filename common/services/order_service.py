from typing import List, Optional

from ..errors import AuthorizationError, InvalidStateError, InvalidStatusError, NotFoundError
from ..models.order import ORDER_STATUSES, Order
from ..models.user import CurrentUser
from .logging import log_event


class OrderService:
    """Order history, admin status changes and owner deletion."""

    def __init__(self, order_repo):
        self._orders = order_repo

    def list_for_user(self, user_id: int) -> List[Order]:
        return [o for o in self._orders.list_orders() if o.user_id == user_id]

    def list_all(self, search: Optional[str] = None) -> List[Order]:
        orders = self._orders.list_orders()
        if not search:
            return orders
        needle = search.strip().lower()
        return [
            o for o in orders
            if needle in str(o.id)
            or needle in (o.username or "").lower()
            or needle in (o.receiver_name or "").lower()
            or needle in (o.delivery_city or "").lower()
        ]

    def get_order(self, order_id: int, caller: CurrentUser) -> Order:
        """Owner or admin only; this is the data behind the printed receipt."""
        order = self._orders.get_order(order_id)
        if order is None:
            raise NotFoundError("找不到指定的訂單。")
        if order.user_id != caller.id and not caller.is_admin:
            raise AuthorizationError("您沒有權限查看此訂單。")
        return order

    def set_status(self, order_id: int, status: Optional[str]) -> Order:
        new_status = status.strip().lower() if isinstance(status, str) else ""
        if new_status not in ORDER_STATUSES:
            raise InvalidStatusError(status, ORDER_STATUSES)
        order = self._orders.update_status(order_id, new_status)
        if order is None:
            raise NotFoundError("找不到指定的訂單。")
        log_event("info", "order.status_changed", order_id=order_id, status=new_status)
        return order

    def delete_own(self, order_id: int, caller_user_id: int) -> None:
        def _guard(order: Order) -> None:
            if order.user_id != caller_user_id:
                raise AuthorizationError("您不能刪除其他使用者的訂單。")
            if not order.is_terminal:
                raise InvalidStateError(
                    f"只有狀態為 completed 或 cancelled 的訂單可以刪除，目前狀態：{order.status}。"
                )

        if not self._orders.delete_order(order_id, check=_guard):
            raise NotFoundError("找不到指定的訂單。")
        log_event("info", "order.deleted", order_id=order_id, user_id=caller_user_id)
