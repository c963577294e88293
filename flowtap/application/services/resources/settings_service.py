"""Settings service. The three settings sections are documents on the settings store."""

from collections.abc import Mapping
from typing import Any

from flowtap.application.services.mutation_rules import document_rule
from flowtap.application.services.request_lifecycle import OperationResult
from flowtap.application.services.resources.base import StoreService
from flowtap.domain.exceptions import EntityNotFoundError

# section name → (API path, label used in messages)
SETTINGS_SECTIONS: dict[str, tuple[str, str]] = {
    "store": ("/settings/store", "Store"),
    "pos": ("/settings/pos", "POS"),
    "notifications": ("/settings/notifications", "Notification"),
}


class SettingsService(StoreService):
    def _section(self, section: str) -> tuple[str, str]:
        try:
            return SETTINGS_SECTIONS[section]
        except KeyError:
            raise EntityNotFoundError("SettingsSection", section) from None

    async def fetch_section(self, section: str) -> OperationResult:
        path, label = self._section(section)
        return await self._run(
            f"fetch{label}Settings",
            lambda: self._transport.get(path),
            document_rule(section),
            f"{label} settings fetched successfully",
            read_only=True,
        )

    async def update_section(
        self, section: str, payload: Mapping[str, Any]
    ) -> OperationResult:
        path, label = self._section(section)
        return await self._run(
            f"update{label}Settings",
            lambda: self._transport.put(path, dict(payload)),
            document_rule(section),
            f"{label} settings updated successfully",
        )

    async def fetch_store_settings(self) -> OperationResult:
        return await self.fetch_section("store")

    async def update_store_settings(self, payload: Mapping[str, Any]) -> OperationResult:
        return await self.update_section("store", payload)

    async def fetch_pos_settings(self) -> OperationResult:
        return await self.fetch_section("pos")

    async def update_pos_settings(self, payload: Mapping[str, Any]) -> OperationResult:
        return await self.update_section("pos", payload)

    async def fetch_notification_settings(self) -> OperationResult:
        return await self.fetch_section("notifications")

    async def update_notification_settings(self, payload: Mapping[str, Any]) -> OperationResult:
        return await self.update_section("notifications", payload)
