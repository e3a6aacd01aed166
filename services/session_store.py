"""伺服器端登入工作階段與購物車狀態。"""

from __future__ import annotations

import copy
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
from uuid import uuid4

from common.errors import AuthenticationError
from common.models.cart_item import CartItem


@dataclass
class _Session:
    user_id: int
    expires_at: float
    cart: List[CartItem] = field(default_factory=list)


class SessionStore:
    """以 session id 為鍵保存每次登入的購物車。

    每次登入產生新的 session id（購物車從空開始），登出或逾時即丟棄。
    讀取購物車取得的是副本；所有修改都透過 :meth:`update_cart` 在鎖內完成。
    """

    def __init__(self, ttl_seconds: float = 24 * 3600, clock: Optional[Callable[[], float]] = None) -> None:
        self._ttl = ttl_seconds
        self._clock = clock or time.time
        self._sessions: Dict[str, _Session] = {}
        self._lock = threading.Lock()

    def open_session(self, user_id: int) -> str:
        sid = uuid4().hex
        with self._lock:
            self._purge_expired()
            self._sessions[sid] = _Session(user_id=user_id, expires_at=self._clock() + self._ttl)
        return sid

    def close_session(self, sid: str) -> bool:
        with self._lock:
            return self._sessions.pop(sid, None) is not None

    def is_active(self, sid: Optional[str], user_id: Optional[int] = None) -> bool:
        if not sid:
            return False
        with self._lock:
            session = self._active(sid)
            if session is None:
                return False
            return user_id is None or session.user_id == user_id

    def get_cart(self, sid: str) -> List[CartItem]:
        with self._lock:
            return copy.deepcopy(self._require(sid).cart)

    def update_cart(self, sid: str, change: Callable[[List[CartItem]], List[CartItem]]) -> List[CartItem]:
        """在鎖內以 ``change(目前購物車副本)`` 的結果取代購物車。

        ``change`` 拋出例外時購物車維持原狀。
        """

        with self._lock:
            session = self._require(sid)
            session.cart = list(change(copy.deepcopy(session.cart)))
            return copy.deepcopy(session.cart)

    def clear_cart(self, sid: str) -> None:
        with self._lock:
            self._require(sid).cart = []

    def _require(self, sid: str) -> _Session:
        session = self._active(sid)
        if session is None:
            raise AuthenticationError("登入狀態已失效，請重新登入。")
        return session

    def _active(self, sid: str) -> Optional[_Session]:
        session = self._sessions.get(sid)
        if session is not None and session.expires_at <= self._clock():
            del self._sessions[sid]
            return None
        return session

    def _purge_expired(self) -> None:
        now = self._clock()
        for sid in [s for s, session in self._sessions.items() if session.expires_at <= now]:
            del self._sessions[sid]
