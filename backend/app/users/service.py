import asyncio
import functools
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from app.auth.utils import generate_password_hash
from app.core.config import settings
from app.core.database import get_store
from app.core.exceptions import (
    HashingError,
    PersistenceError,
    ProfileCreationError,
    UserNotFoundError,
)
from app.core.logging import get_logger
from app.core.store import StoreError, SupabaseStore
from app.users.schemas import ProfileFields, UserId

logger = get_logger(__name__)

PROFILE_EMBED = "*, user_profiles(*)"
PRIVATE_ACCOUNT_FIELDS = {"password"}


def _public_account(row: Dict[str, Any]) -> Dict[str, Any]:
    account = {k: v for k, v in row.items() if k not in PRIVATE_ACCOUNT_FIELDS}
    # PostgREST embeds a one-to-one relation as an object (or null)
    if "user_profiles" in account:
        profiles = account["user_profiles"]
        if profiles is None:
            account["user_profiles"] = []
        elif isinstance(profiles, dict):
            account["user_profiles"] = [profiles]
    return account


class UserService:
    """
    Registers users and maintains their profiles.

    Registration writes an account and then its profile as two separate store
    calls. When the profile insert fails the account is deleted again; that
    delete is attempted once and a failure there leaves an orphaned account,
    which is logged but not reported to the caller.
    """

    def __init__(
        self,
        store: Optional[SupabaseStore] = None,
        password_hasher: Callable[[str], str] = generate_password_hash,
    ):
        self.store = store or get_store()
        self.password_hasher = password_hasher
        self.users_table = settings.USERS_TABLE
        self.profiles_table = settings.USER_PROFILES_TABLE

    async def _hash_password(self, password: str) -> str:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(
                None, functools.partial(self.password_hasher, password)
            )
        except Exception as e:
            logger.error(f"[UserService] Password hashing failed: {e}")
            raise HashingError("Error hashing password") from e

    async def register(
        self, email: str, password: str, profile: Optional[ProfileFields] = None
    ) -> Dict[str, Any]:
        logger.info("[UserService] Starting user creation process")
        logger.debug(f"[UserService] Processing user data for {email}")

        hashed_password = await self._hash_password(password)
        logger.info("[UserService] Password hashed successfully")

        try:
            rows = await self.store.insert(
                self.users_table, [{"email": email, "password": hashed_password}]
            )
        except StoreError as e:
            logger.error(f"[UserService] Failed to create user in database: {e.message}")
            raise PersistenceError("Error creating user") from e
        if not rows:
            logger.error("[UserService] User insert returned no rows")
            raise PersistenceError("Error creating user")

        user = rows[0]
        logger.info(f"[UserService] User {user['id']} created successfully in database")

        profile_row = {"user_id": user["id"]}
        if profile is not None:
            profile_row.update(profile.model_dump(exclude_unset=True))

        try:
            await self.store.insert(self.profiles_table, [profile_row])
        except Exception as e:
            reason = e.message if isinstance(e, StoreError) else repr(e)
            logger.error(f"[UserService] Failed to create user profile: {reason}")
            await self._remove_account(user["id"])
            raise ProfileCreationError("Error creating user profile") from e

        logger.info("[UserService] User profile created successfully")
        return _public_account(user)

    async def _remove_account(self, user_id: UserId) -> None:
        logger.warning(f"[UserService] Removing user {user_id} after failed profile creation")
        try:
            await self.store.delete(self.users_table, {"id": user_id})
        except Exception as e:
            reason = e.message if isinstance(e, StoreError) else repr(e)
            logger.error(
                f"[UserService] Compensating delete failed, user {user_id} has no profile: {reason}"
            )
            return
        logger.info(f"[UserService] User {user_id} removed")

    async def list_users(self) -> List[Dict[str, Any]]:
        logger.info("[UserService] Starting to fetch all users")
        try:
            rows = await self.store.select(self.users_table, columns=PROFILE_EMBED)
        except StoreError as e:
            logger.error(f"[UserService] Failed to fetch users from database: {e.message}")
            raise PersistenceError("Error fetching users") from e

        logger.info(f"[UserService] Successfully fetched {len(rows)} users")
        return [_public_account(row) for row in rows]

    async def update_profile(self, user_id: UserId, fields: ProfileFields) -> Dict[str, Any]:
        """Overwrite the given profile fields, then return the user with its profile"""
        logger.info(f"[UserService] Starting profile update for user {user_id}")

        patch = fields.model_dump(exclude_unset=True)
        patch["updated_at"] = datetime.now(timezone.utc).isoformat()

        try:
            updated = await self.store.update(
                self.profiles_table, patch, {"user_id": user_id}
            )
        except StoreError as e:
            logger.error(f"[UserService] Failed to update user profile: {e.message}")
            raise PersistenceError("Error updating user profile") from e
        if not updated:
            logger.warning(f"[UserService] No profile found for user {user_id}")
            raise UserNotFoundError("User profile not found")

        logger.info("[UserService] User profile updated successfully")

        try:
            rows = await self.store.select(
                self.users_table, columns=PROFILE_EMBED, match={"id": user_id}
            )
        except StoreError as e:
            logger.error(f"[UserService] Failed to fetch updated user: {e.message}")
            raise PersistenceError("Error fetching updated user") from e
        if not rows:
            logger.warning(f"[UserService] User {user_id} not found after profile update")
            raise UserNotFoundError("User not found")

        return _public_account(rows[0])


def get_user_service() -> UserService:
    return UserService()
