from sqlalchemy import Column, Integer, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship, composite

from shopcart.data.database import Base
from shopcart.domain.product import ProductSnapshot


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)

    # snapshot produktu, nie klucz obcy do katalogu
    product_id = Column(String, nullable=False)
    product_name = Column(String, nullable=False)
    product_cost = Column(Numeric(12, 2), nullable=False)
    product_category = Column(String, nullable=True)
    product_rating = Column(Integer, nullable=True)
    product_image = Column(String, nullable=True)

    product = composite(
        ProductSnapshot,
        product_id,
        product_name,
        product_cost,
        product_category,
        product_rating,
        product_image,
    )

    cart = relationship("CartModel", back_populates="items")

    __table_args__ = (UniqueConstraint("cart_id", "product_id", name="u_cart_product"),)
