from contextlib import contextmanager
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopcart.data.models.cart import CartModel
from shopcart.data.models.cart_item import CartItemModel
from shopcart.data.models.user import UserModel
from shopcart.domain.errors import (
    ConflictError,
    InternalError,
    InvalidRequestError,
    NotFoundError,
)
from shopcart.repos.cart_repo import CartRepo
from shopcart.repos.checkout_repo import CheckoutRepo
from shopcart.repos.user_repo import UserRepo
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCT_ALREADY_IN_CART = (
    "Product already in cart. Use the cart sidebar to update or remove product from cart"
)
PRODUCT_NOT_IN_DATABASE = "Product doesn't exist in database"
PRODUCT_NOT_IN_CART = "Product not in cart"


class CartService:
    """
    Use case'y dla domeny cart
    query (get_cart) tylko odczyt
    commands (add, update, remove, checkout) modyfikuja stan pod lockiem wlasciciela

    Wlasciciel koszyka to zawsze email uwierzytelnionego uzytkownika,
    nigdy wartosc z requestu.
    """

    def __init__(self, db: Session, product_catalog, lock_service):
        self.repo = CartRepo(db)
        self.users = UserRepo(db)
        self.checkouts = CheckoutRepo(db)
        self.product_catalog = product_catalog
        self.lock_service = lock_service

    #query - odczyt
    def get_cart(self, user: UserModel) -> CartModel:
        cart = self.repo.find_by_owner(user.email)
        if not cart:
            raise NotFoundError("User does not have a cart")
        return cart

    #commands
    def add_product(self, user: UserModel, product_id: str, quantity: int) -> CartModel:
        if quantity <= 0:
            raise InvalidRequestError("Quantity must be greater than 0")

        with self._mutation(user.email):
            cart = self.repo.find_by_owner(user.email)

            if not cart:
                logger.info(f"Creating cart for {user.email}")
                try:
                    cart = self.repo.create(user.email)
                except SQLAlchemyError as e:
                    logger.error(f"Cart creation failed for {user.email}: {e}")
                    raise InternalError("Internal server error") from e

            product = self.product_catalog.find_by_id(product_id)
            if product is None:
                raise InvalidRequestError(PRODUCT_NOT_IN_DATABASE)

            if cart.find_item(product_id):
                raise InvalidRequestError(PRODUCT_ALREADY_IN_CART)

            #nowa pozycja na koncu, cena zamrozona w snapshocie
            position = max((i.position for i in cart.items), default=0) + 1
            cart.items.append(
                CartItemModel(product=product, quantity=quantity, position=position)
            )

            cart = self._commit(cart)

        logger.info(f"Product {product_id} x{quantity} added to cart of {user.email}")
        return cart

    def update_product(self, user: UserModel, product_id: str, quantity: int) -> CartModel:
        """
        Ustawia nowa ilosc pozycji. quantity == 0 usuwa pozycje,
        ujemna ilosc jest odrzucana.
        """
        if quantity < 0:
            raise InvalidRequestError("Quantity must not be negative")

        with self._mutation(user.email):
            cart = self.repo.find_by_owner(user.email)
            if not cart:
                raise InvalidRequestError(
                    "User does not have a cart. Use POST to create cart and add a product"
                )

            if self.product_catalog.find_by_id(product_id) is None:
                raise InvalidRequestError(PRODUCT_NOT_IN_DATABASE)

            item = cart.find_item(product_id)
            if not item:
                raise InvalidRequestError(PRODUCT_NOT_IN_CART)

            if quantity == 0:
                cart.items.remove(item)
            else:
                item.quantity = quantity

            cart = self._commit(cart)

        logger.info(f"Product {product_id} in cart of {user.email} set to {quantity}")
        return cart

    def remove_product(self, user: UserModel, product_id: str) -> None:
        with self._mutation(user.email):
            cart = self.repo.find_by_owner(user.email)
            if not cart:
                raise InvalidRequestError("User does not have a cart")

            item = cart.find_item(product_id)
            if not item:
                raise InvalidRequestError(PRODUCT_NOT_IN_CART)

            cart.items.remove(item)
            self._commit(cart)

        logger.info(f"Product {product_id} removed from cart of {user.email}")

    def checkout(self, user: UserModel, idempotency_key: str | None = None) -> CartModel:
        """
        Kolejnosc sprawdzen jest stala, kazde jest koncowe:
        koszyk istnieje -> nie jest pusty -> adres ustawiony -> wystarczy srodkow.
        Obciazenie portfela, wyczyszczenie koszyka i znacznik idempotencji
        ida w jednej transakcji.
        """
        with self._mutation(user.email):
            if idempotency_key and self.checkouts.find(user.email, idempotency_key):
                logger.info(f"Checkout {idempotency_key} for {user.email} already applied")
                return self.get_cart(user)

            cart = self.repo.find_by_owner(user.email)
            if not cart:
                raise NotFoundError("User does not have a cart")

            if not cart.items:
                raise InvalidRequestError("Cart is empty")

            #swiezy stan uzytkownika pod lockiem
            buyer = self.users.find_by_key(user.email)
            if buyer is None:
                raise NotFoundError("User not found")

            if not buyer.has_set_non_default_address():
                raise InvalidRequestError("Address not set")

            total = cart.total
            if Decimal(buyer.wallet_money) < total:
                raise InvalidRequestError("Insufficient balance")

            buyer.wallet_money = Decimal(buyer.wallet_money) - total
            self.users.save(buyer)

            cart.items.clear()
            if idempotency_key:
                self.checkouts.add(user.email, idempotency_key, total)

            cart = self._commit(cart)

        logger.info(f"Checkout for {user.email} charged {total}, wallet left {buyer.wallet_money}")
        return cart

    @contextmanager
    def _mutation(self, owner: str):
        #jeden writer na koszyk, kazdy blad wycofuje sesje
        with self.lock_service.owner_lock(owner):
            try:
                yield
            except Exception as e:
                logger.warning(f"Cart mutation for {owner} aborted: {e}")
                self.repo.rollback()
                raise

    def _commit(self, cart: CartModel) -> CartModel:
        self.repo.save(cart)

        # Optimistic locking, na pole wersji
        rowcount = self.repo.bump_version(cart)
        if rowcount == 0:
            raise ConflictError("Cart was modified by another operation")

        self.repo.commit()
        return self.repo.refresh(cart)
