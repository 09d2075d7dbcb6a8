#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from shopcart.data.models.user import UserModel
from shopcart.data.models.cart import CartModel
from shopcart.data.models.cart_item import CartItemModel
from shopcart.data.models.checkout_record import CheckoutRecordModel

__all__ = ["UserModel", "CartModel", "CartItemModel", "CheckoutRecordModel"]
