"""API routers package."""

from brokerage.api.routers.accounts import router as accounts_router
from brokerage.api.routers.users import router as users_router
from brokerage.api.routers.orders import router as orders_router
from brokerage.api.routers.portfolio import router as portfolio_router
from brokerage.api.routers.securities import router as securities_router

__all__ = [
    "accounts_router",
    "users_router",
    "orders_router",
    "portfolio_router",
    "securities_router",
]
