"""Kebun Remote — REST storage backend ("sb") for Supabase / PostgREST."""

import logging
import uuid
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from kebun.core.config import Settings
from kebun.core.errors import ConflictError, NotFoundError, StorageError
from kebun.core.storage import PlantRecord, UserRecord

logger = logging.getLogger("kebun.remote")

REST_PATH = "/rest/v1"


def rest_base_url(project_url: str) -> str:
    """Normalize a Supabase project URL to its ``/rest/v1`` root."""
    url = project_url.rstrip("/")
    if not url.endswith(REST_PATH):
        url = f"{url}{REST_PATH}"
    return url


def create_rest_client(settings: Settings) -> httpx.Client:
    """Build the shared HTTP client for the REST backend.

    Owned by the application lifespan and closed on shutdown.
    """
    return httpx.Client(
        base_url=rest_base_url(settings.supabase_url),
        headers={
            "apikey": settings.supabase_key,
            "Authorization": f"Bearer {settings.supabase_key}",
        },
        timeout=settings.rest_timeout_seconds,
    )


class RestTable:
    """Thin PostgREST table accessor over a shared httpx client."""

    def __init__(self, client: httpx.Client, table: str):
        self.client = client
        self.table = table

    def request(
        self,
        method: str,
        params: dict[str, str] | None = None,
        payload: Any = None,
        representation: bool = False,
    ) -> list[dict]:
        headers = {"Prefer": "return=representation"} if representation else {}
        try:
            response = self.client.request(
                method, f"/{self.table}", params=params, json=payload, headers=headers
            )
        except httpx.HTTPError as e:
            raise StorageError(f"REST {method} /{self.table} failed: {e}") from e

        if response.is_error:
            logger.warning(f"REST {method} /{self.table} -> {response.status_code}: {response.text[:200]}")
            if response.status_code == 409:
                raise ConflictError(f"{self.table} record already exists")
            raise StorageError(f"Remote store error ({response.status_code}): {response.text}")

        if not response.content:
            return []
        try:
            data = response.json()
        except ValueError as e:
            raise StorageError(f"Remote store returned invalid JSON: {e}") from e
        if not isinstance(data, list):
            raise StorageError(f"Remote store returned unexpected payload: {type(data).__name__}")
        return data


def _eq(value: Any) -> str:
    return f"eq.{value}"


def _parse(model, rows: list[dict]):
    try:
        return [model.model_validate(row) for row in rows]
    except PydanticValidationError as e:
        raise StorageError(f"Remote store returned malformed {model.__name__}: {e}") from e


class RestPlantRepository:
    """Plant persistence through the ``plants`` table of a PostgREST API."""

    def __init__(self, client: httpx.Client):
        self.table = RestTable(client, "plants")

    def create(self, plant: PlantRecord) -> PlantRecord:
        rows = self.table.request("POST", payload=plant.model_dump(mode="json"), representation=True)
        created = _parse(PlantRecord, rows)
        if not created:
            raise StorageError("Failed to create plant")
        logger.info(f"Created plant: {created[0].id} ({created[0].name})")
        return created[0]

    def get(self, plant_id: uuid.UUID, user_id: uuid.UUID) -> PlantRecord:
        rows = self.table.request("GET", params={"id": _eq(plant_id), "user_id": _eq(user_id)})
        found = _parse(PlantRecord, rows)
        if not found:
            raise NotFoundError("Plant not found")
        return found[0]

    def list(self, user_id: uuid.UUID) -> list[PlantRecord]:
        rows = self.table.request(
            "GET", params={"user_id": _eq(user_id), "order": "created_at.desc"}
        )
        return _parse(PlantRecord, rows)

    def save(self, plant: PlantRecord) -> PlantRecord:
        """Write back the mutable columns. Last write wins."""
        payload = plant.model_dump(
            mode="json", include={"name", "plant_type", "image", "age", "status", "updated_at"}
        )
        rows = self.table.request(
            "PATCH",
            params={"id": _eq(plant.id), "user_id": _eq(plant.user_id)},
            payload=payload,
            representation=True,
        )
        saved = _parse(PlantRecord, rows)
        if not saved:
            raise NotFoundError("Plant not found")
        return saved[0]

    def delete(self, plant_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        rows = self.table.request(
            "DELETE",
            params={"id": _eq(plant_id), "user_id": _eq(user_id)},
            representation=True,
        )
        if rows:
            logger.info(f"Deleted plant: {plant_id}")
        return bool(rows)


class RestUserRepository:
    def __init__(self, client: httpx.Client):
        self.table = RestTable(client, "users")

    def create(self, user: UserRecord) -> UserRecord:
        payload = user.model_dump(mode="json", exclude_none=True)
        try:
            rows = self.table.request("POST", payload=payload, representation=True)
        except ConflictError:
            raise ConflictError("Email already exists") from None
        created = _parse(UserRecord, rows)
        if not created:
            raise StorageError("Failed to create user")
        logger.info(f"Created user: {created[0].id}")
        return created[0]

    def get_by_email(self, email: str) -> UserRecord | None:
        found = _parse(UserRecord, self.table.request("GET", params={"email": _eq(email)}))
        return found[0] if found else None

    def get_by_id(self, user_id: uuid.UUID) -> UserRecord | None:
        found = _parse(UserRecord, self.table.request("GET", params={"id": _eq(user_id)}))
        return found[0] if found else None
