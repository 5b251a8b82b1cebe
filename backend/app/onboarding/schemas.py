import uuid
from enum import Enum
from typing import List, Optional, Union
from datetime import datetime

from pydantic import BaseModel, Field

from app.core.config import Settings, settings


class ComponentName(str, Enum):
    ABOUT_ME = "about_me"
    ADDRESS = "address"
    BIRTHDATE = "birthdate"


class ComponentAssignmentIn(BaseModel):
    # Free string on purpose: unknown names are reported by the placement
    # rules, after the page count checks.
    component_name: str = Field(min_length=1)
    page_number: int


class OnboardingConfigCreate(BaseModel):
    components: List[ComponentAssignmentIn] = Field(min_length=1)


class OnboardingConfigRead(BaseModel):
    id: Optional[Union[uuid.UUID, int]] = None
    component_name: str
    page_number: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PlacementRules(BaseModel):
    """Which pages must be filled, how full they may get and which components exist"""

    pages: List[int] = [2, 3]
    allowed_components: List[str] = [name.value for name in ComponentName]
    min_per_page: int = 1
    max_per_page: int = 2

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "PlacementRules":
        return cls(
            pages=config.ONBOARDING_PAGES,
            allowed_components=config.ONBOARDING_COMPONENTS,
            min_per_page=config.MIN_COMPONENTS_PER_PAGE,
            max_per_page=config.MAX_COMPONENTS_PER_PAGE,
        )
