from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

Number = Union[int, float]

STATUS_PENDING = "pending"
STATUS_PROCESSING = "processing"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"

ORDER_STATUSES = (STATUS_PENDING, STATUS_PROCESSING, STATUS_COMPLETED, STATUS_CANCELLED)
TERMINAL_STATUSES = frozenset({STATUS_COMPLETED, STATUS_CANCELLED})

PAYMENT_COD = "COD"

SHIPPING_FIELDS = (
    "receiverName",
    "contactPhone",
    "contactEmail",
    "deliveryAddress",
    "deliveryProvince",
    "deliveryCity",
    "deliveryDistrict",
)


@dataclass(frozen=True)
class OrderLine:
    item_id: int
    name: str
    price: Number
    quantity: int
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "itemId": self.item_id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "OrderLine":
        return cls(
            item_id=raw["itemId"],
            name=raw.get("name", ""),
            price=raw.get("price", 0),
            quantity=int(raw.get("quantity", 0)),
            category=raw.get("category"),
        )


@dataclass
class Order:
    id: int
    user_id: int
    username: str
    receiver_name: str
    contact_phone: str
    contact_email: str
    delivery_address: str
    delivery_province: str
    delivery_city: str
    delivery_district: str
    items: List[OrderLine] = field(default_factory=list)
    total_amount: Number = 0
    notes: str = ""
    status: str = STATUS_PENDING
    payment_method: str = PAYMENT_COD
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "userId": self.user_id,
            "username": self.username,
            "receiverName": self.receiver_name,
            "contactPhone": self.contact_phone,
            "contactEmail": self.contact_email,
            "deliveryAddress": self.delivery_address,
            "deliveryProvince": self.delivery_province,
            "deliveryCity": self.delivery_city,
            "deliveryDistrict": self.delivery_district,
            "notes": self.notes,
            "items": [line.to_dict() for line in self.items],
            "totalAmount": self.total_amount,
            "status": self.status,
            "paymentMethod": self.payment_method,
            "createdAt": self.created_at,
        }
        if self.updated_at:
            data["updatedAt"] = self.updated_at
        return data

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Order":
        return cls(
            id=raw["id"],
            user_id=raw.get("userId"),
            username=raw.get("username", ""),
            receiver_name=raw.get("receiverName", ""),
            contact_phone=raw.get("contactPhone", ""),
            contact_email=raw.get("contactEmail", ""),
            delivery_address=raw.get("deliveryAddress", ""),
            delivery_province=raw.get("deliveryProvince", ""),
            delivery_city=raw.get("deliveryCity", ""),
            delivery_district=raw.get("deliveryDistrict", ""),
            items=[OrderLine.from_dict(line) for line in raw.get("items", [])],
            total_amount=raw.get("totalAmount", 0),
            notes=raw.get("notes") or "",
            status=raw.get("status", STATUS_PENDING),
            payment_method=raw.get("paymentMethod", PAYMENT_COD),
            created_at=raw.get("createdAt"),
            updated_at=raw.get("updatedAt"),
        )
