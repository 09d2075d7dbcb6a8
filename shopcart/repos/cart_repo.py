# shopcart/repos/cart_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from shopcart.data.models.cart import CartModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def find_by_owner(self, owner: str) -> CartModel | None:
        return self.db.execute(
            select(CartModel)
            .where(CartModel.owner == owner)
            .options(selectinload(CartModel.items))
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def create(self, owner: str) -> CartModel:
        # bez commita, koszyk zapisze sie razem z pierwsza pozycja
        cart = CartModel(owner=owner, version=1)
        self.db.add(cart)
        self.db.flush()
        return cart

    def bump_version(self, cart: CartModel) -> int:
        """
        Optimistic locking: UPDATE carts SET version = v+1 WHERE id = :id AND version = v
        Zwraca liczbe zmienionych wierszy (0 = konflikt).
        """
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart.id, CartModel.version == cart.version)
            .values(version=cart.version + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def save(self, cart: CartModel):
        self.db.add(cart)
        self.db.flush()

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    def refresh(self, cart: CartModel) -> CartModel:
        self.db.refresh(cart)
        return cart
