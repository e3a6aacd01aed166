"""管理商品目錄資料的儲存模組。"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from common.models.item import Item
from common.utils.ids import IdGenerator, max_id

from .json_store import JsonRecordStore


ITEMS = "items"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ItemRepository:
    """提供檔案型儲存的商品資料存取介面。"""

    def __init__(self, store: JsonRecordStore, ids: IdGenerator) -> None:
        self._store = store
        self._ids = ids

    def list_items(self) -> List[Item]:
        """讀取全部商品資料。"""

        return [Item.from_dict(raw) for raw in self._store.load(ITEMS)]

    def get_item(self, item_id: int) -> Optional[Item]:
        """依識別碼取得商品資料。"""

        for item in self.list_items():
            if item.id == item_id:
                return item
        return None

    def add_item(self, item: Item) -> Item:
        """新增商品，識別碼由產生器指派（傳入的 id 會被忽略）。"""

        with self._store.transaction(ITEMS) as data:
            item.id = self._ids.next_id(floor=max_id(data))
            item.created_at = _now()
            data.append(item.to_dict())
        return item

    def replace_item(self, item_id: int, item: Item) -> Optional[Item]:
        """以新內容整筆取代商品（id 與建立時間保留），找不到時回傳 None。"""

        with self._store.transaction(ITEMS) as data:
            for index, entry in enumerate(data):
                if entry.get("id") == item_id:
                    item.id = item_id
                    item.created_at = entry.get("createdAt")
                    item.updated_at = _now()
                    data[index] = item.to_dict()
                    return item
        return None

    def delete_item(self, item_id: int) -> bool:
        """刪除指定商品。"""

        with self._store.transaction(ITEMS) as data:
            remaining = [entry for entry in data if entry.get("id") != item_id]
            if len(remaining) == len(data):
                return False
            data[:] = remaining
        return True
