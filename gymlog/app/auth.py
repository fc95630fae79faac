"""OAuth authentication and role-based authorization."""

from .oauth import (
    get_current_user,
    require_viewer,
    require_editor,
)

__all__ = [
    "get_current_user",
    "require_viewer",
    "require_editor",
]
