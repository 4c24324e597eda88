"""
Use case: Create or replace a platform setting.

Input: UpsertSettingCommand (key, value, type)
Output: SettingResult
Side effects: Inserts or updates the setting row.
"""

import logging

from tradedesk.application.backoffice.dtos import SettingResult, UpsertSettingCommand
from tradedesk.domain.backoffice.entities import Setting, SettingType
from tradedesk.domain.backoffice.ports import SettingRepository

logger = logging.getLogger(__name__)


class UpsertSettingUseCase:
    def __init__(self, setting_repo: SettingRepository) -> None:
        self._setting_repo = setting_repo

    def execute(self, command: UpsertSettingCommand) -> SettingResult:
        setting = self._setting_repo.upsert(
            Setting(key=command.key, value=command.value, type=SettingType(command.type))
        )
        logger.info("Setting saved: key=%s", setting.key)
        return SettingResult.from_entity(setting)
