from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

Number = Union[int, float]


@dataclass
class CartItem:
    """One cart line. ``price`` is the snapshot taken when the item was added."""

    id: int
    name: str
    price: Number
    image: Optional[str] = None
    category: Optional[str] = None
    quantity: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "image": self.image,
            "category": self.category,
            "quantity": self.quantity,
        }
