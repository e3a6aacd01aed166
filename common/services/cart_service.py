from decimal import Decimal
from typing import Any, Dict, List

from ..errors import NotFoundError, ValidationError
from ..models.cart_item import CartItem
from ..utils.validators import parse_int, parse_price, require_text


class CartService:
    """Cart operations backed by the per-login session store.

    Prices are snapshots of what the client sent; they are only checked
    against the catalog at checkout.
    """

    def __init__(self, sessions):
        self._sessions = sessions

    def lines(self, *, session_id: str) -> List[CartItem]:
        return self._sessions.get_cart(session_id)

    def get_cart(self, *, session_id: str) -> Dict:
        return self._view(self.lines(session_id=session_id))

    def add_item(self, *, session_id: str, item: Any) -> Dict:
        if not isinstance(item, dict):
            raise ValidationError("商品資料不完整。")
        name = require_text(item.get("name"))
        if item.get("id") in (None, "") or not name:
            raise ValidationError("商品資料不完整。")
        item_id = parse_int(item.get("id"), "id")
        price = parse_price(item.get("price"), "price")
        if not price:
            raise ValidationError("商品價格必須大於 0。")
        line = CartItem(
            id=item_id,
            name=name,
            price=price,
            image=item.get("image"),
            category=item.get("category"),
            quantity=1,
        )

        def _add(cart: List[CartItem]) -> List[CartItem]:
            existing = next((it for it in cart if it.id == item_id), None)
            if existing:
                existing.quantity += 1
            else:
                cart.append(line)
            return cart

        return self._view(self._sessions.update_cart(session_id, _add))

    def update_item(self, *, session_id: str, item_id: Any, change: Any) -> Dict:
        if item_id in (None, "") or change in (None, ""):
            raise ValidationError("商品 ID 與數量變化為必填。")
        iid = parse_int(item_id, "itemId")
        delta = parse_int(change, "change")

        def _change(cart: List[CartItem]) -> List[CartItem]:
            line = next((it for it in cart if it.id == iid), None)
            if line is None:
                raise NotFoundError("購物車中找不到此商品。")
            line.quantity += delta
            return [it for it in cart if it.quantity > 0]

        return self._view(self._sessions.update_cart(session_id, _change))

    def remove_item(self, *, session_id: str, item_id: Any) -> Dict:
        iid = parse_int(item_id, "itemId")

        def _remove(cart: List[CartItem]) -> List[CartItem]:
            remaining = [it for it in cart if it.id != iid]
            if len(remaining) == len(cart):
                raise NotFoundError("購物車中找不到此商品。")
            return remaining

        return self._view(self._sessions.update_cart(session_id, _remove))

    def clear(self, *, session_id: str) -> None:
        self._sessions.clear_cart(session_id)

    def discard_ordered(self, *, session_id: str, ordered: Dict[int, int]) -> None:
        """Take ordered quantities (item id -> quantity) out of the cart.

        Lines added while the order was being written stay in the cart.
        """

        def _discard(cart: List[CartItem]) -> List[CartItem]:
            for line in cart:
                line.quantity -= ordered.get(line.id, 0)
            return [line for line in cart if line.quantity > 0]

        self._sessions.update_cart(session_id, _discard)

    @staticmethod
    def _view(cart: List[CartItem]) -> Dict:
        items = [line.to_dict() for line in cart]
        # display only; checkout re-prices from the catalog
        subtotal = sum((Decimal(str(it["price"])) * Decimal(it["quantity"]) for it in items), Decimal("0"))
        return {"cart": items, "subtotal": float(subtotal)}
