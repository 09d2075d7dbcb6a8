from sqlalchemy.orm import Session
from shopcart.data.models.user import UserModel
from shopcart.domain.errors import ForbiddenError, InvalidRequestError, NotFoundError
from shopcart.domain.schemas import UserCreate
from shopcart.repos.user_repo import UserRepo
from shopcart.utils.settings import MIN_ADDRESS_LENGTH
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def create_user(self, payload: UserCreate) -> UserModel:
        email = payload.email.strip().lower()
        if self.repo.find_by_key(email):
            raise InvalidRequestError("Email already taken")

        user = UserModel(name=payload.name.strip(), email=email)
        created = self.repo.create_user(user)
        logger.info(f"Created user {created.id} <{created.email}>")
        return created

    def get_user(self, user_id: int, requester: UserModel) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.email != requester.email:
            raise ForbiddenError("User not authorized to access this resource")
        return user

    def get_address(self, user_id: int, requester: UserModel) -> str:
        return self.get_user(user_id, requester).address

    def set_address(self, user_id: int, requester: UserModel, address: str) -> str:
        user = self.get_user(user_id, requester)

        address = (address or "").strip()
        if not address:
            raise InvalidRequestError("Please provide the address string")
        if len(address) < MIN_ADDRESS_LENGTH:
            raise InvalidRequestError(
                f"Address field must be at least {MIN_ADDRESS_LENGTH} characters long"
            )

        user.address = address
        self.repo.save(user)
        self.repo.commit()
        logger.info(f"Address updated for user {user.id}")
        return user.address
