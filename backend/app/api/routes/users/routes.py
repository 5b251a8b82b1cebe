from typing import List

from fastapi import APIRouter, Depends, status

from app.users.schemas import AccountRead, UserCreate, UserProfileUpdate, UserWithProfile
from app.users.service import UserService, get_user_service

router = APIRouter()


@router.post("/users", response_model=AccountRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    service: UserService = Depends(get_user_service),
):
    """Register a new user together with their profile"""
    return await service.register(user_data.email, user_data.password, user_data.profile)


@router.get("/users", response_model=List[UserWithProfile])
async def get_all_users(service: UserService = Depends(get_user_service)):
    return await service.list_users()


@router.get("/data", response_model=List[UserWithProfile])
async def get_data(service: UserService = Depends(get_user_service)):
    """Alias of GET /users kept for existing clients"""
    return await service.list_users()


@router.put("/users", response_model=UserWithProfile)
async def update_user_profile(
    update_data: UserProfileUpdate,
    service: UserService = Depends(get_user_service),
):
    """Update the first profile entry of the payload and return the user with its profile"""
    return await service.update_profile(update_data.user_id, update_data.user_profiles[0])
