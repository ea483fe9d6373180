from fastapi import APIRouter

from .periods import router as periods_router
from .expenses import router as expenses_router
from .identity import router as identity_router

api_router = APIRouter()

api_router.include_router(periods_router, prefix="/periods", tags=["periods"])
api_router.include_router(expenses_router, prefix="/periods", tags=["expenses"])
api_router.include_router(identity_router, prefix="/identity", tags=["identity"])
