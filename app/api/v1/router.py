from fastapi import APIRouter
from . import admin, analytics, revenue, withdrawals

api_router = APIRouter()

api_router.include_router(revenue.router, prefix="/revenue", tags=["revenue"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(withdrawals.router, prefix="/provider", tags=["provider"])

__all__ = ["api_router"]
