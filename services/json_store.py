"""以 JSON 檔案保存資料集合（users / items / orders）的儲存層。"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from common.errors import StoreIOError


logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class JsonRecordStore:
    """每個集合對應一個 JSON 陣列檔案，並以一把鎖序列化讀取-修改-寫入。

    所有變更都是「整個集合覆寫」，因此同一集合的 load → mutate → save
    必須包在 :meth:`transaction` 之內，避免兩個請求互相覆蓋。
    """

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, collection: str) -> Path:
        return self._data_dir / f"{collection}.json"

    def load(self, collection: str, default: Optional[List[Record]] = None) -> List[Record]:
        """讀取整個集合；檔案不存在時寫入預設值並回傳。"""

        with self._lock_for(collection):
            return self._read(collection, default)

    def save(self, collection: str, records: List[Record]) -> None:
        """以單一操作覆寫整個集合。"""

        with self._lock_for(collection):
            self._write(collection, records)

    @contextmanager
    def transaction(
        self, collection: str, default: Optional[List[Record]] = None
    ) -> Iterator[List[Record]]:
        """持有集合鎖期間提供可修改的清單，正常離開時寫回檔案。

        區塊內拋出例外時不寫回，檔案維持原狀。
        """

        with self._lock_for(collection):
            records = self._read(collection, default)
            yield records
            self._write(collection, records)

    def _lock_for(self, collection: str) -> threading.RLock:
        with self._locks_guard:
            lock = self._locks.get(collection)
            if lock is None:
                lock = threading.RLock()
                self._locks[collection] = lock
            return lock

    def _read(self, collection: str, default: Optional[List[Record]]) -> List[Record]:
        path = self.path_for(collection)
        if not path.exists():
            initial = copy.deepcopy(default) if default is not None else []
            self._write(collection, initial)
            return initial
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.exception("讀取資料檔失敗: %s", path)
            raise StoreIOError(f"無法讀取 {path.name}") from exc
        if not text.strip():
            return []
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("資料檔格式錯誤: %s (%s)", path, exc)
            raise StoreIOError(f"{path.name} 格式錯誤") from exc
        if not isinstance(payload, list):
            logger.error("資料檔內容異常，預期為陣列格式: %s", path)
            raise StoreIOError(f"{path.name} 內容異常，預期為陣列格式")
        if not all(isinstance(entry, dict) for entry in payload):
            logger.error("資料檔含有非物件的資料列: %s", path)
            raise StoreIOError(f"{path.name} 內容異常，每筆資料都必須是物件")
        return payload

    def _write(self, collection: str, records: List[Record]) -> None:
        path = self.path_for(collection)
        tmp_name = None
        try:
            content = json.dumps(records, ensure_ascii=False, indent=2)
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=f".{collection}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content + "\n")
            os.replace(tmp_name, path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as exc:
            logger.exception("寫入資料檔失敗: %s", path)
            raise StoreIOError(f"無法寫入 {path.name}") from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
