#shopcart/data/models/cart.py
from decimal import Decimal

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from shopcart.data.database import Base


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True)
    # jeden koszyk na uzytkownika (email)
    owner = Column(String, nullable=False, unique=True, index=True)
    version = Column(Integer, nullable=False, default=1)

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItemModel.position",
    )

    def find_item(self, product_id: str):
        return next((i for i in self.items if i.product_id == product_id), None)

    @property
    def total(self) -> Decimal:
        return sum((i.product.cost * i.quantity for i in self.items), Decimal("0.00"))
