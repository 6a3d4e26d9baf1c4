"""Kebun Storage — records and the capability both backends implement."""

import uuid
from datetime import datetime
from typing import Any, Protocol

from pydantic import BaseModel, Field, field_validator


class PlantRecord(BaseModel):
    """A plant as the core sees it, independent of the backend."""

    id: uuid.UUID
    name: str
    plant_type: str
    image: str | None = None
    planted_date: datetime
    age: int = 0
    user_id: uuid.UUID
    # Raw JSON blob; read and written through StatusStore.
    status: Any = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("status", mode="before")
    @classmethod
    def _none_status(cls, value: Any) -> Any:
        return {} if value is None else value


class UserRecord(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    password: str
    city: str | None = None
    birth_date: str | None = None
    avatar: str | None = None
    bio: str | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class PlantRepository(Protocol):
    """Storage capability for plants.

    Every lookup is scoped by owner. ``get`` raises NotFoundError, failures of
    the underlying store surface as StorageError.
    """

    def create(self, plant: PlantRecord) -> PlantRecord: ...

    def get(self, plant_id: uuid.UUID, user_id: uuid.UUID) -> PlantRecord: ...

    def list(self, user_id: uuid.UUID) -> list[PlantRecord]: ...

    def save(self, plant: PlantRecord) -> PlantRecord: ...

    def delete(self, plant_id: uuid.UUID, user_id: uuid.UUID) -> bool: ...


class UserRepository(Protocol):
    def create(self, user: UserRecord) -> UserRecord: ...

    def get_by_email(self, email: str) -> UserRecord | None: ...

    def get_by_id(self, user_id: uuid.UUID) -> UserRecord | None: ...
