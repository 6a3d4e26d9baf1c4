"""Plants router — CRUD, daily status updates and the dashboard."""

import uuid

from fastapi import APIRouter, Depends, Query

from kebun.api.deps import get_backend, get_current_user_id
from kebun.api.schemas import (
    ApiResponse,
    DashboardStats,
    PlantCreate,
    PlantResponse,
    PlantStatusUpdate,
    PlantUpdate,
)
from kebun.core.core import Backend
from kebun.core.status import StatusStore
from kebun.core.storage import PlantRecord

router = APIRouter()


def _plant_response(plant: PlantRecord) -> PlantResponse:
    """Convert a stored plant to PlantResponse, normalizing its status blob."""
    return PlantResponse(
        id=plant.id,
        name=plant.name,
        plant_type=plant.plant_type,
        image=plant.image,
        planted_date=plant.planted_date,
        age=plant.age,
        user_id=plant.user_id,
        status=StatusStore.from_json(plant.status).to_json(),
        created_at=plant.created_at,
        updated_at=plant.updated_at,
    )


@router.post("/plants", response_model=ApiResponse[PlantResponse])
def create_plant(
    body: PlantCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    backend: Backend = Depends(get_backend),
):
    """Register a new plant for the authenticated user."""
    plant = backend.plants.create_plant(user_id, body.name, body.plant_type, body.image)
    return ApiResponse(message="Plant added successfully", data=_plant_response(plant))


@router.get("/plants", response_model=ApiResponse[list[PlantResponse]])
def list_plants(
    user_id: uuid.UUID = Depends(get_current_user_id),
    backend: Backend = Depends(get_backend),
):
    plants = backend.plants.list_plants(user_id)
    return ApiResponse(
        message=f"{len(plants)} plants found",
        data=[_plant_response(p) for p in plants],
    )


@router.get("/plants/{plant_id}", response_model=ApiResponse[PlantResponse])
def get_plant(
    plant_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    backend: Backend = Depends(get_backend),
):
    plant = backend.plants.get_plant(plant_id, user_id)
    return ApiResponse(message="Plant found", data=_plant_response(plant))


@router.put("/plants/{plant_id}", response_model=ApiResponse[PlantResponse])
def update_plant(
    plant_id: uuid.UUID,
    body: PlantUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    backend: Backend = Depends(get_backend),
):
    """Update plant details. Omitted fields keep their current value."""
    plant = backend.plants.update_plant(plant_id, user_id, body.model_dump(exclude_none=True))
    return ApiResponse(message="Plant updated successfully", data=_plant_response(plant))


@router.patch("/plants/{plant_id}/status", response_model=ApiResponse[PlantResponse])
def update_plant_status(
    plant_id: uuid.UUID,
    body: PlantStatusUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    backend: Backend = Depends(get_backend),
):
    """Mark one care action (watered, fertilized, harvested) for one date."""
    plant = backend.plants.update_status(plant_id, user_id, body.date, body.status_type, body.value)
    return ApiResponse(message="Plant status updated successfully", data=_plant_response(plant))


@router.delete("/plants/{plant_id}", response_model=ApiResponse[None])
def delete_plant(
    plant_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    backend: Backend = Depends(get_backend),
):
    backend.plants.delete_plant(plant_id, user_id)
    return ApiResponse(message="Plant deleted successfully")


@router.get("/dashboard", response_model=ApiResponse[DashboardStats])
def get_dashboard_stats(
    day: str | None = Query(None, alias="date", description="YYYY-MM-DD"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    backend: Backend = Depends(get_backend),
):
    """Per-day counts across the user's plants. Defaults to today."""
    summary = backend.plants.dashboard(user_id, day)
    return ApiResponse(
        message="Dashboard stats retrieved successfully",
        data=DashboardStats.model_validate(summary),
    )
