import re
import uuid
from datetime import datetime
from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, Field
from pydantic.functional_validators import AfterValidator


def validate_email_flexible(v: str) -> str:
    """Custom email validator that allows .local domains for development/testing."""
    if not v:
        raise ValueError("Email is required")

    # Basic email format validation
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
    if not re.match(email_pattern, v):
        raise ValueError("Invalid email format")

    return v.lower()


FlexibleEmailStr = Annotated[str, AfterValidator(validate_email_flexible)]

UserId = Union[uuid.UUID, int]


class ProfileFields(BaseModel):
    about_me: Optional[str] = None
    street_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    birthdate: Optional[str] = None


class UserCreate(BaseModel):
    email: FlexibleEmailStr
    password: str = Field(min_length=1)
    profile: ProfileFields = Field(default_factory=ProfileFields)


class ProfileRead(ProfileFields):
    id: Optional[UserId] = None
    user_id: UserId
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AccountRead(BaseModel):
    id: UserId
    email: str
    created_at: Optional[datetime] = None


class UserWithProfile(AccountRead):
    user_profiles: List[ProfileRead] = []


class UserProfileUpdate(BaseModel):
    user_id: UserId
    user_profiles: List[ProfileFields] = Field(min_length=1)
