from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from shopcart.api.deps import get_current_user
from shopcart.data.database import get_db
from shopcart.data.models.user import UserModel
from shopcart.domain.errors import CartError
from shopcart.services.user_service import UserService
from shopcart.domain.schemas import AddressIn, AddressOut, UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=UserRead, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.create_user(payload)
    except CartError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.get("/{user_id}", response_model=UserRead | AddressOut)
def get_user(
    user_id: int,
    q: str | None = None,
    requester: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    try:
        if q == "address":
            return AddressOut(address=service.get_address(user_id, requester))
        return UserRead.model_validate(service.get_user(user_id, requester))
    except CartError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.put("/{user_id}", response_model=AddressOut)
def set_address(
    user_id: int,
    payload: AddressIn,
    requester: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    try:
        return AddressOut(address=service.set_address(user_id, requester, payload.address))
    except CartError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
