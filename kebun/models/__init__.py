"""Models package — imports all models for metadata discovery."""

from kebun.models.base import Base, create_session_factory
from kebun.models.plant import Plant
from kebun.models.user import User

__all__ = ["Base", "create_session_factory", "Plant", "User"]
