"""
Dependency injection for the back-office bounded context.
"""

from fastapi import Depends
from sqlalchemy.engine import Engine

from tradedesk.application.backoffice.create_content import CreateContentUseCase
from tradedesk.application.backoffice.get_published_content import (
    GetPublishedContentUseCase,
)
from tradedesk.application.backoffice.get_setting import GetSettingUseCase
from tradedesk.application.backoffice.list_contents import ListContentsUseCase
from tradedesk.application.backoffice.list_settings import ListSettingsUseCase
from tradedesk.application.backoffice.update_content import UpdateContentUseCase
from tradedesk.application.backoffice.upsert_setting import UpsertSettingUseCase
from tradedesk.domain.backoffice.ports import ContentRepository, SettingRepository
from tradedesk.infrastructure.backoffice.content_repository import (
    ContentRepositoryAdapter,
)
from tradedesk.infrastructure.backoffice.setting_repository import (
    SettingRepositoryAdapter,
)
from tradedesk.interfaces.dependencies import get_engine


def get_content_repository(engine: Engine = Depends(get_engine)) -> ContentRepository:
    return ContentRepositoryAdapter(engine)


def get_setting_repository(engine: Engine = Depends(get_engine)) -> SettingRepository:
    return SettingRepositoryAdapter(engine)


def get_create_content_use_case(
    repo: ContentRepository = Depends(get_content_repository),
) -> CreateContentUseCase:
    return CreateContentUseCase(repo)


def get_update_content_use_case(
    repo: ContentRepository = Depends(get_content_repository),
) -> UpdateContentUseCase:
    return UpdateContentUseCase(repo)


def get_list_contents_use_case(
    repo: ContentRepository = Depends(get_content_repository),
) -> ListContentsUseCase:
    return ListContentsUseCase(repo)


def get_published_content_use_case(
    repo: ContentRepository = Depends(get_content_repository),
) -> GetPublishedContentUseCase:
    return GetPublishedContentUseCase(repo)


def get_upsert_setting_use_case(
    repo: SettingRepository = Depends(get_setting_repository),
) -> UpsertSettingUseCase:
    return UpsertSettingUseCase(repo)


def get_list_settings_use_case(
    repo: SettingRepository = Depends(get_setting_repository),
) -> ListSettingsUseCase:
    return ListSettingsUseCase(repo)


def get_setting_use_case(
    repo: SettingRepository = Depends(get_setting_repository),
) -> GetSettingUseCase:
    return GetSettingUseCase(repo)
