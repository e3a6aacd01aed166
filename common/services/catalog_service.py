from typing import Any, Dict, List, Optional

from ..errors import NotFoundError, ValidationError
from ..models.item import DEFAULT_IMAGE, VALID_CATEGORIES, Item
from ..utils.validators import optional_price, optional_text, parse_price, require_text
from .logging import log_event


class CatalogService:
    """Catalog querying and admin maintenance.

    Responsibilities:
    - List/search items with an optional category filter
    - Get single item detail
    - Validate and persist admin create/update/delete

    ``originalPrice`` and ``badge`` share one nullable convention on both
    create and update: absent, null or blank means the key is dropped.
    """

    def __init__(self, item_repo):
        self._items = item_repo

    def list_products(self, *, query: Optional[str] = None, category: Optional[str] = None) -> List[Item]:
        items = self._items.list_items()
        if category:
            wanted = category.strip().lower()
            items = [it for it in items if it.category.lower() == wanted]
        if query:
            needle = query.strip().lower()
            items = [
                it for it in items
                if needle in it.name.lower() or needle in (it.description or "").lower()
            ]
        return items

    def get_product(self, item_id: int) -> Item:
        item = self._items.get_item(item_id)
        if item is None:
            raise NotFoundError("找不到指定的商品。")
        return item

    def create_product(self, fields: Dict[str, Any]) -> Item:
        item = self._build_item(fields)
        created = self._items.add_item(item)
        log_event("info", "item.created", item_id=created.id, category=created.category, price=created.price)
        return created

    def update_product(self, item_id: int, fields: Dict[str, Any]) -> Item:
        existing = self.get_product(item_id)
        item = self._build_item(fields, existing=existing)
        updated = self._items.replace_item(item_id, item)
        if updated is None:
            # deleted between the read and the write
            raise NotFoundError("找不到指定的商品。")
        log_event("info", "item.updated", item_id=item_id, price=updated.price)
        return updated

    def delete_product(self, item_id: int) -> None:
        if not self._items.delete_item(item_id):
            raise NotFoundError("找不到指定的商品。")
        log_event("info", "item.deleted", item_id=item_id)

    @staticmethod
    def _build_item(fields: Dict[str, Any], existing: Optional[Item] = None) -> Item:
        category = require_text(fields.get("category")).lower()
        name = require_text(fields.get("name"))
        if not category or not name:
            raise ValidationError("分類、名稱與價格為必填，且價格必須是數字。")
        if category not in VALID_CATEGORIES:
            raise ValidationError(f"無效的分類。可選：{', '.join(VALID_CATEGORIES)}。")
        price = parse_price(fields.get("price"), "price")
        if not price:
            raise ValidationError("價格必須大於 0。")
        original_price = optional_price(fields.get("originalPrice"), "originalPrice")

        description = require_text(fields.get("description"))
        image = require_text(fields.get("image"))
        if existing is not None:
            description = description or existing.description
            image = image or existing.image
        return Item(
            id=existing.id if existing is not None else 0,
            category=category,
            name=name,
            price=price,
            description=description,
            image=image or DEFAULT_IMAGE,
            original_price=original_price,
            badge=optional_text(fields.get("badge")),
        )
