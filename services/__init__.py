"""商店後端的檔案型儲存模組入口。"""

from .bootstrap import ensure_data_files
from .item_repository import ItemRepository
from .json_store import JsonRecordStore
from .order_repository import OrderRepository
from .session_store import SessionStore
from .user_repository import UserRepository

__all__ = [
    "ensure_data_files",
    "ItemRepository",
    "JsonRecordStore",
    "OrderRepository",
    "SessionStore",
    "UserRepository",
]
