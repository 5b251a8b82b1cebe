from typing import List

from fastapi import APIRouter, Depends, status

from app.onboarding.schemas import OnboardingConfigCreate, OnboardingConfigRead
from app.onboarding.service import OnboardingConfigService, get_onboarding_config_service

router = APIRouter()


@router.post("", response_model=List[OnboardingConfigRead], status_code=status.HTTP_201_CREATED)
async def create_config(
    config: OnboardingConfigCreate,
    service: OnboardingConfigService = Depends(get_onboarding_config_service),
):
    """Validate and store a configuration alongside the existing rows"""
    return await service.create(config.components)


@router.get("", response_model=List[OnboardingConfigRead])
async def get_config(
    service: OnboardingConfigService = Depends(get_onboarding_config_service),
):
    return await service.find_all()


@router.put("", response_model=List[OnboardingConfigRead])
async def replace_config(
    config: OnboardingConfigCreate,
    service: OnboardingConfigService = Depends(get_onboarding_config_service),
):
    """Replace the whole configuration"""
    return await service.replace(config.components)
