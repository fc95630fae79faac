"""Application users. Every workout, progress entry and wellness entry belongs to one."""

from __future__ import annotations
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel


Role = Literal["viewer", "editor"]


class User(BaseModel):
    """A user, created automatically on first login via the identity provider.

    `id` is the owner key for all training data; `idp_user_id` is the JWT 'sub' claim.
    """

    id: UUID
    idp_user_id: UUID
    email: str | None
    username: str | None
    role: Role
    created_at: datetime
    updated_at: datetime

    @property
    def is_editor(self) -> bool:
        """Editors may import and modify training data."""
        return self.role == "editor"
