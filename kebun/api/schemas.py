"""Kebun API — Pydantic request/response schemas."""

import uuid
from datetime import datetime
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


# ── Envelope ──────────────────────────────────────────────────────────────────

class ApiResponse(BaseModel, Generic[T]):
    status: str = "success"
    message: str
    data: T | None = None


# ── Auth schemas ──────────────────────────────────────────────────────────────

class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=6, max_length=128)
    confirm_password: str = Field(..., min_length=1, max_length=128)
    city: str | None = None
    birth_date: str | None = None


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class UserPublic(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    city: str | None = None
    birth_date: str | None = None
    avatar: str | None = None
    bio: str | None = None
    created_at: datetime | None = None


class LoginResponse(BaseModel):
    user: UserPublic
    token: str


# ── Plant schemas ─────────────────────────────────────────────────────────────

class PlantCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="User-given plant name")
    plant_type: str = Field(..., min_length=1, max_length=50, description="Vegetable, Fruit, Herb, Flower")
    image: str | None = Field(None, description="Image URL or base64 payload")


class PlantUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    plant_type: str | None = Field(None, min_length=1, max_length=50)
    image: str | None = None


class PlantStatusUpdate(BaseModel):
    date: str = Field(..., description="Calendar date, YYYY-MM-DD", examples=["2025-07-15"])
    status_type: str = Field(..., description="watered, fertilized or harvested")
    value: bool = Field(..., strict=True)


class PlantResponse(BaseModel):
    id: uuid.UUID
    name: str
    plant_type: str
    image: str | None
    planted_date: datetime
    age: int
    user_id: uuid.UUID
    status: dict[str, Any]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ── Dashboard schemas ─────────────────────────────────────────────────────────

class DashboardStats(BaseModel):
    total_plants: int
    watered_today: int
    fertilized_today: int
    harvested_today: int
    need_watering: int
    need_fertilizing: int
    ready_to_harvest: int

    model_config = {"from_attributes": True}


# ── Generic response ──────────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    service: str
    version: str
    backends: list[str]
