"""初始化資料檔：商品目錄、訂單清單與預設管理員帳號。"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from common.models.user import ROLE_ADMIN
from common.services.auth_service import hash_password

from .item_repository import ITEMS
from .json_store import JsonRecordStore
from .order_repository import ORDERS
from .user_repository import USERS


logger = logging.getLogger(__name__)

_PLACEHOLDER = "https://placehold.co/300x200/{bg}/{fg}/png?text={text}"

DEFAULT_ITEMS = [
    {
        "id": 1,
        "category": "benih",
        "name": "Benih Padi Ciherang 5kg",
        "price": 120000,
        "description": "Benih unggul padi varietas Ciherang dengan daya tumbuh tinggi.",
        "image": _PLACEHOLDER.format(bg="4CAF50", fg="FFFFFF", text="Benih+Padi"),
        "originalPrice": 135000,
        "badge": "PROMO",
    },
    {
        "id": 2,
        "category": "bibit",
        "name": "Bibit Kopi Robusta 20 batang",
        "price": 400000,
        "description": "Bibit kopi robusta pilihan siap tanam.",
        "image": _PLACEHOLDER.format(bg="795548", fg="FFFFFF", text="Bibit+Kopi"),
    },
    {
        "id": 3,
        "category": "pupuk",
        "name": "Pupuk Urea 50kg",
        "price": 350000,
        "description": "Pupuk urea kualitas tinggi untuk meningkatkan hasil panen.",
        "image": _PLACEHOLDER.format(bg="8BC34A", fg="333333", text="Pupuk+Urea"),
    },
    {
        "id": 4,
        "category": "pupuk",
        "name": "Pupuk NPK 25kg",
        "price": 280000,
        "description": "Pupuk majemuk untuk pertumbuhan daun, bunga, dan buah.",
        "image": _PLACEHOLDER.format(bg="CDDC39", fg="333333", text="Pupuk+NPK"),
    },
    {
        "id": 5,
        "category": "pestisida",
        "name": "Insektisida Cair 250ml",
        "price": 55000,
        "description": "Obat pengendali hama serangga pada tanaman.",
        "image": _PLACEHOLDER.format(bg="F44336", fg="FFFFFF", text="Insektisida"),
    },
    {
        "id": 6,
        "category": "pestisida",
        "name": "Fungisida Bubuk 100gr",
        "price": 35000,
        "description": "Obat pengendali jamur penyebab penyakit tanaman.",
        "image": _PLACEHOLDER.format(bg="9C27B0", fg="FFFFFF", text="Fungisida"),
    },
    {
        "id": 7,
        "category": "alat",
        "name": "Cangkul Baja Berkualitas",
        "price": 80000,
        "description": "Alat pertanian kokoh untuk segala jenis tanah.",
        "image": _PLACEHOLDER.format(bg="03A9F4", fg="FFFFFF", text="Cangkul"),
    },
    {
        "id": 8,
        "category": "alat",
        "name": "Sprayer Elektrik 16L",
        "price": 450000,
        "description": "Alat penyemprot elektrik untuk pupuk cair dan pestisida.",
        "image": _PLACEHOLDER.format(bg="009688", fg="FFFFFF", text="Sprayer"),
    },
]


def ensure_data_files(store: JsonRecordStore, config) -> None:
    """確保三個資料集合存在；使用者清單為空時建立管理員帳號。"""

    store.load(ITEMS, DEFAULT_ITEMS)
    store.load(ORDERS, [])

    with store.transaction(USERS) as users:
        if not users:
            users.append(
                {
                    "id": 1,
                    "username": config.admin_username,
                    "email": config.admin_email,
                    "password": hash_password(config.admin_password),
                    "role": ROLE_ADMIN,
                    "createdAt": datetime.now(timezone.utc).isoformat(),
                }
            )
            logger.info("已建立預設管理員帳號: %s", config.admin_email)

    logger.info("資料檔初始化完成: %s", store.data_dir)
