from sqlalchemy import select
from sqlalchemy.orm import Session
from shopcart.data.models.user import UserModel

class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def find_by_key(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel)
            .where(UserModel.email == email)
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def save(self, user: UserModel):
        self.db.add(user)
        self.db.flush()

    def commit(self):
        self.db.commit()
