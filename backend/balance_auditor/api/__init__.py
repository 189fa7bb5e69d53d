"""API route definitions for Balance Auditor."""

from fastapi import APIRouter

from .balances import router as balances_router


api_router = APIRouter()
api_router.include_router(balances_router)


__all__ = ["api_router"]
