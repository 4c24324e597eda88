"""
FastAPI routers for the back-office bounded context.

``admin_router`` manages content pages and settings (administrators only).
``router`` serves published pages and public settings to anyone.
"""

from fastapi import APIRouter, Depends, status

from tradedesk.application.backoffice.create_content import CreateContentUseCase
from tradedesk.application.backoffice.dtos import (
    CreateContentCommand,
    UpdateContentCommand,
    UpsertSettingCommand,
)
from tradedesk.application.backoffice.get_published_content import (
    GetPublishedContentUseCase,
)
from tradedesk.application.backoffice.get_setting import GetSettingUseCase
from tradedesk.application.backoffice.list_contents import ListContentsUseCase
from tradedesk.application.backoffice.list_settings import ListSettingsUseCase
from tradedesk.application.backoffice.update_content import UpdateContentUseCase
from tradedesk.application.backoffice.upsert_setting import UpsertSettingUseCase
from tradedesk.interfaces.backoffice.dependencies import (
    get_create_content_use_case,
    get_list_contents_use_case,
    get_list_settings_use_case,
    get_published_content_use_case,
    get_setting_use_case,
    get_update_content_use_case,
    get_upsert_setting_use_case,
)
from tradedesk.interfaces.backoffice.schemas import (
    ContentCreateRequest,
    ContentResponse,
    ContentUpdateRequest,
    SettingRequest,
    SettingResponse,
)
from tradedesk.interfaces.brokerage.schemas import ErrorResponse
from tradedesk.interfaces.dependencies import require_admin

admin_router = APIRouter(
    prefix="/admin", tags=["backoffice"], dependencies=[Depends(require_admin)]
)
router = APIRouter(tags=["backoffice"])


@admin_router.get(
    "/content",
    response_model=list[ContentResponse],
    summary="All content pages",
)
def list_contents(
    use_case: ListContentsUseCase = Depends(get_list_contents_use_case),
) -> list[ContentResponse]:
    return [ContentResponse.model_validate(p) for p in use_case.execute()]


@admin_router.post(
    "/content",
    response_model=ContentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
    summary="Create a content page",
)
def create_content(
    request: ContentCreateRequest,
    use_case: CreateContentUseCase = Depends(get_create_content_use_case),
) -> ContentResponse:
    command = CreateContentCommand(
        title=request.title,
        slug=request.slug,
        content=request.content,
        is_published=request.is_published,
    )
    return ContentResponse.model_validate(use_case.execute(command))


@admin_router.put(
    "/content/{content_id}",
    response_model=ContentResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Update a content page",
)
def update_content(
    content_id: int,
    request: ContentUpdateRequest,
    use_case: UpdateContentUseCase = Depends(get_update_content_use_case),
) -> ContentResponse:
    command = UpdateContentCommand(
        content_id=content_id,
        changes=request.model_dump(exclude_unset=True, exclude_none=True),
    )
    return ContentResponse.model_validate(use_case.execute(command))


@admin_router.get(
    "/settings",
    response_model=list[SettingResponse],
    summary="All settings",
)
def list_settings(
    use_case: ListSettingsUseCase = Depends(get_list_settings_use_case),
) -> list[SettingResponse]:
    return [SettingResponse.model_validate(s) for s in use_case.execute()]


@admin_router.post(
    "/settings",
    response_model=SettingResponse,
    summary="Create or replace a setting",
)
def upsert_setting(
    request: SettingRequest,
    use_case: UpsertSettingUseCase = Depends(get_upsert_setting_use_case),
) -> SettingResponse:
    command = UpsertSettingCommand(key=request.key, value=request.value, type=request.type)
    return SettingResponse.model_validate(use_case.execute(command))


@router.get(
    "/content/{slug}",
    response_model=ContentResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Published content page",
)
def get_published_content(
    slug: str,
    use_case: GetPublishedContentUseCase = Depends(get_published_content_use_case),
) -> ContentResponse:
    return ContentResponse.model_validate(use_case.execute(slug))


@router.get(
    "/settings/{key}",
    response_model=SettingResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Public setting",
    description="Read a setting of type ``public``. Other settings are not exposed.",
)
def get_public_setting(
    key: str,
    use_case: GetSettingUseCase = Depends(get_setting_use_case),
) -> SettingResponse:
    return SettingResponse.model_validate(use_case.execute(key, public_only=True))
