"""商店後端設定模組。"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


logger = logging.getLogger(__name__)

DEFAULT_JWT_SECRET = "TANIKU_SECRET_KEY_12345_SANGAT_RAHASIA"


@dataclass
class StoreConfig:
    """封裝商店後端的設定值。"""

    jwt_secret: str
    data_dir: Path
    token_ttl_hours: float = 24
    admin_username: str = "AdminTaniku"
    admin_email: str = "admin@taniku.com"
    admin_password: str = "taniku123"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(hours=self.token_ttl_hours)

    @classmethod
    def load(cls, data_dir: Optional[Path] = None) -> "StoreConfig":
        """從環境變數（與專案根目錄的 .env）建構設定，並確保資料目錄存在。"""

        project_root = Path(__file__).resolve().parent
        load_dotenv(project_root / ".env")

        jwt_secret = os.environ.get("STORE_JWT_SECRET", DEFAULT_JWT_SECRET)
        if jwt_secret == DEFAULT_JWT_SECRET:
            logger.warning("STORE_JWT_SECRET 使用預設值，正式環境請在 .env 設定。")

        config = cls(
            jwt_secret=jwt_secret,
            data_dir=Path(data_dir or os.environ.get("STORE_DATA_DIR") or project_root / "data"),
            token_ttl_hours=float(os.environ.get("STORE_TOKEN_TTL_HOURS", "24")),
            admin_username=os.environ.get("STORE_ADMIN_USERNAME", "AdminTaniku"),
            admin_email=os.environ.get("STORE_ADMIN_EMAIL", "admin@taniku.com"),
            admin_password=os.environ.get("STORE_ADMIN_PASSWORD", "taniku123"),
            host=os.environ.get("STORE_HOST", "0.0.0.0"),
            port=int(os.environ.get("STORE_PORT", "3000")),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
        )
        config.data_dir.mkdir(parents=True, exist_ok=True)
        return config
