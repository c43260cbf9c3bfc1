from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Product:
    """
    Catalog entry with its on-hand stock.

    Names are unique case-insensitively. quantity never goes below zero and
    is only decremented by committed sales.
    """
    id: int
    name: str
    price: int | float
    quantity: int
    image: str = ""

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r} quantity={self.quantity}>"

    def matches_name(self, name: str) -> bool:
        return self.name.lower() == name.strip().lower()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "image": self.image,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        return cls(
            id=data["id"],
            name=data["name"],
            price=data["price"],
            quantity=data["quantity"],
            image=data.get("image") or "",
        )
