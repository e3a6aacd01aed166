from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

Number = Union[int, float]

VALID_CATEGORIES = ("benih", "bibit", "pupuk", "pestisida", "alat")
DEFAULT_IMAGE = "https://placehold.co/300x200?text=TANIKU"


@dataclass
class Item:
    """Catalog entry. ``price`` is the authoritative selling price."""

    id: int
    category: str
    name: str
    price: Number
    description: str = ""
    image: str = DEFAULT_IMAGE
    original_price: Optional[Number] = None
    badge: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "category": self.category,
            "name": self.name,
            "price": self.price,
            "description": self.description,
            "image": self.image,
        }
        # optional keys are omitted rather than stored as null
        if self.original_price is not None:
            data["originalPrice"] = self.original_price
        if self.badge:
            data["badge"] = self.badge
        if self.created_at:
            data["createdAt"] = self.created_at
        if self.updated_at:
            data["updatedAt"] = self.updated_at
        return data

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Item":
        original_price = raw.get("originalPrice")
        if original_price == "":
            original_price = None
        return cls(
            id=raw["id"],
            category=str(raw.get("category", "")),
            name=str(raw.get("name", "")),
            price=raw.get("price", 0),
            description=str(raw.get("description") or ""),
            image=str(raw.get("image") or DEFAULT_IMAGE),
            original_price=original_price,
            badge=raw.get("badge") or None,
            created_at=raw.get("createdAt"),
            updated_at=raw.get("updatedAt"),
        )
