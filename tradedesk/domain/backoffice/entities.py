"""
Domain entities for the back-office bounded context.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class SettingType(Enum):
    """Scope of a platform setting."""

    SYSTEM = "system"
    USER = "user"
    PUBLIC = "public"


@dataclass
class ContentPage:
    """A CMS page addressed by its slug."""

    title: str
    slug: str
    content: str
    id: Optional[int] = None
    is_published: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Setting:
    """A key/value platform setting."""

    key: str
    value: str
    type: SettingType = SettingType.SYSTEM
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
