# shopcart/data/seed.py
from shopcart.data.database import SessionLocal
from shopcart.data.models import UserModel
from shopcart.repos.user_repo import UserRepo

DEMO_EMAIL = "crio-user@gmail.com"

def seed():
    db = SessionLocal()
    try:
        # not forcing: only seed if empty
        if UserRepo(db).find_by_key(DEMO_EMAIL):
            return
        UserRepo(db).create_user(UserModel(name="crio-user", email=DEMO_EMAIL))
    finally:
        db.close()

if __name__ == "__main__":
    seed()
