"""
Pydantic schemas for back-office API request/response validation.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class ContentCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=200, pattern=SLUG_PATTERN)
    content: str
    is_published: bool = False


class ContentUpdateRequest(BaseModel):
    """Partial update. Omitted fields are left unchanged."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    slug: Optional[str] = Field(
        default=None, min_length=1, max_length=200, pattern=SLUG_PATTERN
    )
    content: Optional[str] = None
    is_published: Optional[bool] = None


class ContentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    content: str
    is_published: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class SettingRequest(BaseModel):
    key: str = Field(..., min_length=1, max_length=100)
    value: str
    type: Literal["system", "user", "public"] = "system"


class SettingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    value: str
    type: str
    updated_at: Optional[datetime]
