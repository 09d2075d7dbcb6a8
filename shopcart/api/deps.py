# shopcart/api/deps.py
from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from shopcart.data.database import get_db
from shopcart.data.models.user import UserModel
from shopcart.repos.user_repo import UserRepo
from shopcart.services.cart_service import CartService


def get_current_user(
    x_user_email: str = Header(..., description="Ustawiany przez gateway po uwierzytelnieniu"),
    db: Session = Depends(get_db),
) -> UserModel:
    user = UserRepo(db).find_by_key(x_user_email.strip().lower())
    if not user:
        raise HTTPException(status_code=401, detail="Please authenticate")
    return user


def get_cart_service(request: Request, db: Session = Depends(get_db)) -> CartService:
    #lock i katalog tworzone raz przy starcie aplikacji (app.state)
    return CartService(
        db=db,
        product_catalog=request.app.state.product_catalog,
        lock_service=request.app.state.lock_service,
    )
