from fastapi import APIRouter
from .config import router as config_router
from .onboarding import router as onboarding_router
from .users import router as users_router

api_router = APIRouter()

api_router.include_router(config_router, prefix="/config", tags=["config"])
api_router.include_router(onboarding_router, prefix="/onboarding", tags=["onboarding"])
api_router.include_router(users_router, tags=["users"])
