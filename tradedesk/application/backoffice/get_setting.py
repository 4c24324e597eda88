"""
Use case: Read one setting by key.

Input: key, and whether only ``public`` settings may be returned
Output: SettingResult
Side effects: None (read-only query).
Failure cases: SettingNotFoundError, also for non-public settings when
    public_only is set.
"""

from tradedesk.application.backoffice.dtos import SettingResult
from tradedesk.domain.backoffice.entities import SettingType
from tradedesk.domain.backoffice.errors import SettingNotFoundError
from tradedesk.domain.backoffice.ports import SettingRepository


class GetSettingUseCase:
    def __init__(self, setting_repo: SettingRepository) -> None:
        self._setting_repo = setting_repo

    def execute(self, key: str, public_only: bool = False) -> SettingResult:
        setting = self._setting_repo.get(key)
        if setting is None or (public_only and setting.type is not SettingType.PUBLIC):
            raise SettingNotFoundError(key)
        return SettingResult.from_entity(setting)
