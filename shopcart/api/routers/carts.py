#shopcart/api/routers/carts.py
from fastapi import APIRouter, Depends, Header, HTTPException, Response

from shopcart.api.deps import get_cart_service, get_current_user
from shopcart.data.models.user import UserModel
from shopcart.domain.errors import CartError
from shopcart.domain.schemas import CartItemIn, CartOut
from shopcart.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def _http_error(e: CartError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=CartOut)
def get_cart(
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.get_cart(user)
    except CartError as e:
        raise _http_error(e)


@router.post("", response_model=CartOut)
def add_product(
    payload: CartItemIn,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.add_product(user, payload.product_id, payload.quantity)
    except CartError as e:
        raise _http_error(e)


@router.put("", response_model=CartOut)
def update_product(
    payload: CartItemIn,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        if payload.quantity == 0:
            svc.remove_product(user, payload.product_id)
            return Response(status_code=204)
        return svc.update_product(user, payload.product_id, payload.quantity)
    except CartError as e:
        raise _http_error(e)


@router.delete("/items/{product_id}", status_code=204)
def remove_product(
    product_id: str,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        svc.remove_product(user, product_id)
    except CartError as e:
        raise _http_error(e)
    return Response(status_code=204)


@router.put("/checkout", response_model=CartOut)
def checkout(
    idempotency_key: str | None = Header(None),
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.checkout(user, idempotency_key=idempotency_key)
    except CartError as e:
        raise _http_error(e)
