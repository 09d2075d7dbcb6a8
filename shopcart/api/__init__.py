# shopcart/api/__init__.py
from fastapi import FastAPI

from shopcart.api.routers import carts, health, users
from shopcart.services.lock_service import InProcessLockService, LockService
from shopcart.services.product_client import ProductClient
from shopcart.utils.settings import LOCK_BACKEND


def build_lock_service():
    if LOCK_BACKEND == "memory":
        return InProcessLockService()
    return LockService()


def create_app(product_catalog=None, lock_service=None) -> FastAPI:
    app = FastAPI(title="Cart Service", version="1.0.0")

    app.state.product_catalog = product_catalog or ProductClient()
    app.state.lock_service = lock_service or build_lock_service()

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(carts.router)
    return app
