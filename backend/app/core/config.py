from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional, Literal
import os


class Settings(BaseSettings):
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    model_config = SettingsConfigDict(
        env_file=".env", env_ignore_empty=True, extra="ignore"
    )

    # Basic settings
    API_V1_STR: str = ""
    PROJECT_NAME: str = "Onboarding API"
    PROJECT_DESCRIPTION: str = "Onboarding page configuration and user registration"
    VERSION: str = "0.1.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # CORS
    ALLOWED_HOSTS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    @property
    def get_allowed_hosts(self) -> List[str]:
        """Get allowed hosts from environment or use defaults"""
        env_hosts = os.getenv("ALLOWED_HOSTS")
        if env_hosts:
            return [host.strip() for host in env_hosts.split(",")]
        return self.ALLOWED_HOSTS

    # Supabase
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None

    @property
    def supabase_key(self) -> str:
        return self.SUPABASE_SERVICE_ROLE_KEY or self.SUPABASE_ANON_KEY or ""

    # Tables
    ONBOARDING_CONFIG_TABLE: str = "onboarding_config"
    USERS_TABLE: str = "users"
    USER_PROFILES_TABLE: str = "user_profiles"

    # Onboarding placement rules
    ONBOARDING_PAGES: List[int] = [2, 3]
    ONBOARDING_COMPONENTS: List[str] = ["about_me", "address", "birthdate"]
    MIN_COMPONENTS_PER_PAGE: int = 1
    MAX_COMPONENTS_PER_PAGE: int = 2

    # Password hashing (bcrypt cost factor)
    PASSWORD_HASH_ROUNDS: int = 10


settings = Settings()
