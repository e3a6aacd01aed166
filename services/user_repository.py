"""使用者帳號儲存庫。"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, List, Optional

from common.models.user import User
from common.utils.ids import IdGenerator, max_id

from .json_store import JsonRecordStore


USERS = "users"


class UserRepository:
    """管理使用者帳號資料。"""

    def __init__(self, store: JsonRecordStore, ids: IdGenerator) -> None:
        self._store = store
        self._ids = ids

    def list_users(self) -> List[User]:
        return [User.from_dict(raw) for raw in self._store.load(USERS)]

    def get_user(self, user_id: int) -> Optional[User]:
        for user in self.list_users():
            if user.id == user_id:
                return user
        return None

    def find_by_email(self, email: str) -> Optional[User]:
        """以 email 查詢（不分大小寫）。"""

        needle = email.strip().lower()
        for user in self.list_users():
            if user.email.lower() == needle:
                return user
        return None

    def add_user(self, user: User, check: Optional[Callable[[List[User]], None]] = None) -> User:
        """新增使用者；``check`` 於鎖內以現有使用者清單執行（例如重複檢查）。"""

        with self._store.transaction(USERS) as records:
            if check is not None:
                check([User.from_dict(raw) for raw in records])
            user.id = self._ids.next_id(floor=max_id(records))
            user.created_at = datetime.now(timezone.utc).isoformat()
            records.append(user.to_dict())
        return user

    def update_user(
        self,
        user_id: int,
        apply: Callable[[User, List[User]], User],
    ) -> Optional[User]:
        """於鎖內套用 ``apply(目前資料, 其他使用者)`` 並寫回結果。"""

        with self._store.transaction(USERS) as records:
            for index, raw in enumerate(records):
                if raw.get("id") == user_id:
                    others = [User.from_dict(r) for r in records if r.get("id") != user_id]
                    updated = apply(User.from_dict(raw), others)
                    updated.updated_at = datetime.now(timezone.utc).isoformat()
                    records[index] = updated.to_dict()
                    return updated
        return None
