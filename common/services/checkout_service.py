from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Union

from ..errors import EmptyCartError, ItemNotFoundError, MissingShippingFieldError
from ..models.order import PAYMENT_COD, SHIPPING_FIELDS, STATUS_PENDING, Order, OrderLine
from ..models.user import CurrentUser
from .logging import log_event


def to_money(amount: Decimal) -> Union[int, float]:
    """Round to 2 decimal places; whole amounts stay integers in the JSON."""
    rounded = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if rounded == rounded.to_integral_value():
        return int(rounded)
    return float(rounded)


def read_shipping(payload: Dict[str, Any]) -> Dict[str, str]:
    values = {}
    missing = []
    for name in SHIPPING_FIELDS:
        raw = payload.get(name)
        text = str(raw).strip() if raw is not None else ""
        if not text:
            missing.append(name)
        values[name] = text
    if missing:
        raise MissingShippingFieldError(missing)
    notes = payload.get("notes")
    values["notes"] = str(notes).strip() if notes is not None else ""
    return values


class CheckoutService:
    """Turns the caller's cart into a cash-on-delivery order.

    Lines are re-priced from the catalog as it is at checkout time; the
    price captured when the item went into the cart is never charged. All
    validation happens before the ledger write, and the ordered lines leave
    the cart only after the order is persisted.
    """

    def __init__(self, item_repo, order_repo, cart_service):
        self._items = item_repo
        self._orders = order_repo
        self._carts = cart_service

    def checkout(self, *, user: CurrentUser, shipping: Dict[str, Any]) -> Order:
        cart = self._carts.lines(session_id=user.sid)
        if not cart:
            raise EmptyCartError()
        details = read_shipping(shipping or {})

        catalog = {item.id: item for item in self._items.list_items()}
        total = Decimal("0")
        snapshot = []
        for line in cart:
            item = catalog.get(line.id)
            if item is None:
                raise ItemNotFoundError(line.id)
            total += Decimal(str(item.price)) * Decimal(line.quantity)
            snapshot.append(
                OrderLine(
                    item_id=item.id,
                    name=item.name,
                    price=item.price,
                    quantity=line.quantity,
                    category=item.category,
                )
            )

        order = Order(
            id=0,
            user_id=user.id,
            username=user.username,
            receiver_name=details["receiverName"],
            contact_phone=details["contactPhone"],
            contact_email=details["contactEmail"],
            delivery_address=details["deliveryAddress"],
            delivery_province=details["deliveryProvince"],
            delivery_city=details["deliveryCity"],
            delivery_district=details["deliveryDistrict"],
            notes=details["notes"],
            items=snapshot,
            total_amount=to_money(total),
            status=STATUS_PENDING,
            payment_method=PAYMENT_COD,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self._orders.add_order(order)
        self._carts.discard_ordered(
            session_id=user.sid,
            ordered={line.item_id: line.quantity for line in snapshot},
        )
        log_event(
            "info",
            "order.created",
            order_id=order.id,
            user_id=user.id,
            items=len(snapshot),
            total=order.total_amount,
        )
        return order
