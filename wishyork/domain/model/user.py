"""User profile as stored by the wider application."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from wishyork.domain.model.common import DomainModel
from wishyork.domain.value import UserId, Username


class UserProfile(DomainModel):
    """Public profile used to snapshot comment authors."""

    id: UserId
    name: str = Field(min_length=1, max_length=100)
    username: Username
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
