# shopcart/domain/product.py
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ProductSnapshot:
    """
    Kopia danych produktu z katalogu zrobiona w momencie dodania do koszyka.
    Zmiana ceny w katalogu nie zmienia istniejacych pozycji.
    """

    id: str
    name: str
    cost: Decimal
    category: str | None = None
    rating: int | None = None
    image: str | None = None

    @classmethod
    def from_catalog(cls, data: dict) -> "ProductSnapshot":
        return cls(
            id=str(data.get("id") or data["_id"]),
            name=data["name"],
            cost=Decimal(str(data["cost"])),
            category=data.get("category"),
            rating=data.get("rating"),
            image=data.get("image"),
        )
