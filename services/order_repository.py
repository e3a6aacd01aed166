"""訂單記錄儲存庫。"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, List, Optional

from common.models.order import Order
from common.utils.ids import IdGenerator, max_id

from .json_store import JsonRecordStore


ORDERS = "orders"

OrderCheck = Callable[[Order], None]


class OrderRepository:
    """管理訂單的儲存與查詢。

    檢查函式（``check``）在持有集合鎖時執行；若拋出例外，交易放棄寫入。
    """

    def __init__(self, store: JsonRecordStore, ids: IdGenerator) -> None:
        self._store = store
        self._ids = ids

    def add_order(self, order: Order) -> Order:
        """指派訂單編號並附加到訂單清單。"""

        with self._store.transaction(ORDERS) as records:
            order.id = self._ids.next_id(floor=max_id(records))
            records.append(order.to_dict())
        return order

    def list_orders(self) -> List[Order]:
        """依寫入順序列出全部訂單。"""

        return [Order.from_dict(raw) for raw in self._store.load(ORDERS)]

    def get_order(self, order_id: int) -> Optional[Order]:
        for raw in self._store.load(ORDERS):
            if raw.get("id") == order_id:
                return Order.from_dict(raw)
        return None

    def update_status(self, order_id: int, status: str) -> Optional[Order]:
        """更新訂單狀態並記錄更新時間。"""

        with self._store.transaction(ORDERS) as records:
            for index, raw in enumerate(records):
                if raw.get("id") == order_id:
                    raw["status"] = status
                    raw["updatedAt"] = datetime.now(timezone.utc).isoformat()
                    records[index] = raw
                    return Order.from_dict(raw)
        return None

    def delete_order(self, order_id: int, check: Optional[OrderCheck] = None) -> bool:
        """刪除訂單記錄。"""

        with self._store.transaction(ORDERS) as records:
            for index, raw in enumerate(records):
                if raw.get("id") == order_id:
                    if check is not None:
                        check(Order.from_dict(raw))
                    del records[index]
                    return True
        return False
