from typing import Any, Dict, List, Optional, Sequence

from app.core.config import settings
from app.core.database import get_store
from app.core.exceptions import OnboardingValidationError, PersistenceError
from app.core.logging import get_logger
from app.core.store import StoreError, SupabaseStore
from app.onboarding.schemas import ComponentAssignmentIn, PlacementRules
from app.onboarding.validation import validate_components

logger = get_logger(__name__)


class OnboardingConfigService:
    """
    Owns the onboarding configuration table.

    The configuration is only ever read or written as a whole. ``replace``
    deletes every row and inserts the new set; the two calls are not atomic, so
    the table is briefly empty in between and stays empty if the insert fails.
    Concurrent replaces are not serialized here: whichever insert lands last
    wins.
    """

    def __init__(
        self,
        store: Optional[SupabaseStore] = None,
        rules: Optional[PlacementRules] = None,
        table: str = settings.ONBOARDING_CONFIG_TABLE,
    ):
        self.store = store or get_store()
        self.rules = rules or PlacementRules.from_settings()
        self.table = table

    def validate(self, components: Sequence[ComponentAssignmentIn]) -> None:
        try:
            validate_components(components, self.rules)
        except OnboardingValidationError as e:
            logger.warning(
                f"[OnboardingConfigService] Validation failed ({e.error_code}): {e.message}"
            )
            raise
        logger.info("[OnboardingConfigService] Configuration validation passed")

    async def create(self, components: Sequence[ComponentAssignmentIn]) -> List[Dict[str, Any]]:
        """Validate and insert a configuration without clearing the existing rows"""
        logger.info("[OnboardingConfigService] Starting configuration creation")
        self.validate(components)
        rows = await self._insert(components)
        logger.info(f"[OnboardingConfigService] Successfully created {len(rows)} configuration rows")
        return rows

    async def find_all(self) -> List[Dict[str, Any]]:
        logger.info("[OnboardingConfigService] Fetching all configurations")
        try:
            rows = await self.store.select(self.table, order_by="page_number")
        except StoreError as e:
            logger.error(f"[OnboardingConfigService] Failed to fetch configurations: {e.message}")
            raise PersistenceError("Error fetching configuration") from e
        logger.info(f"[OnboardingConfigService] Successfully fetched {len(rows)} configurations")
        return rows

    async def replace(self, components: Sequence[ComponentAssignmentIn]) -> List[Dict[str, Any]]:
        """
        Replace the whole configuration with ``components``.

        Nothing is written when validation fails. A failed delete stops before
        the insert; a failed insert after a successful delete leaves the table
        empty. Returns the rows as stored, including generated columns.
        """
        logger.info("[OnboardingConfigService] Starting configuration replace")
        self.validate(components)

        logger.info("[OnboardingConfigService] Deleting existing configuration")
        try:
            await self.store.delete_all(self.table)
        except StoreError as e:
            logger.error(
                f"[OnboardingConfigService] Failed to delete existing configuration: {e.message}"
            )
            raise PersistenceError("Error clearing existing configuration") from e

        logger.info("[OnboardingConfigService] Inserting new configuration")
        rows = await self._insert(components, after_delete=True)
        logger.info("[OnboardingConfigService] Successfully replaced configuration")
        return rows

    async def _insert(
        self, components: Sequence[ComponentAssignmentIn], after_delete: bool = False
    ) -> List[Dict[str, Any]]:
        payload = [
            {"component_name": c.component_name, "page_number": c.page_number}
            for c in components
        ]
        try:
            return await self.store.insert(self.table, payload)
        except StoreError as e:
            logger.error(f"[OnboardingConfigService] Failed to insert configuration: {e.message}")
            if after_delete:
                logger.error(
                    "[OnboardingConfigService] Existing configuration was already deleted; "
                    "the configuration table is now empty"
                )
            raise PersistenceError("Error saving configuration") from e


def get_onboarding_config_service() -> OnboardingConfigService:
    return OnboardingConfigService()
