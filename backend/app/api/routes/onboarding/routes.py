from typing import List

from fastapi import APIRouter, Body, Depends

from app.onboarding.schemas import ComponentAssignmentIn, OnboardingConfigRead
from app.onboarding.service import OnboardingConfigService, get_onboarding_config_service

router = APIRouter()


@router.get("/config", response_model=List[OnboardingConfigRead])
async def get_onboarding_config(
    service: OnboardingConfigService = Depends(get_onboarding_config_service),
):
    """Get the onboarding configuration ordered by page"""
    return await service.find_all()


@router.put("/config", response_model=List[OnboardingConfigRead])
async def update_onboarding_config(
    components: List[ComponentAssignmentIn] = Body(...),
    service: OnboardingConfigService = Depends(get_onboarding_config_service),
):
    """Replace the onboarding configuration with a bare list of components"""
    return await service.replace(components)
