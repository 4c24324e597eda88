"""
Use case: List all platform settings.

Output: list[SettingResult] ordered by key
Side effects: None (read-only query).
"""

from tradedesk.application.backoffice.dtos import SettingResult
from tradedesk.domain.backoffice.ports import SettingRepository


class ListSettingsUseCase:
    def __init__(self, setting_repo: SettingRepository) -> None:
        self._setting_repo = setting_repo

    def execute(self) -> list[SettingResult]:
        return [SettingResult.from_entity(s) for s in self._setting_repo.list_all()]
