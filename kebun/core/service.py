"""Kebun Services — plant and auth use cases shared by every backend."""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Any

from kebun.core.dashboard import DashboardSummary, compute
from kebun.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from kebun.core.security import TokenIssuer, hash_password, verify_password
from kebun.core.status import StatusStore, apply_update, validate_date
from kebun.core.storage import PlantRecord, PlantRepository, UserRecord, UserRepository

logger = logging.getLogger("kebun.service")

UPDATABLE_PLANT_FIELDS = ("name", "plant_type", "image")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def safe_user(user: UserRecord) -> dict[str, Any]:
    """Public view of a user, without the password hash."""
    return user.model_dump(exclude={"password"})


class PlantService:
    """Plant use cases on top of one storage backend."""

    def __init__(self, plants: PlantRepository):
        self.plants = plants

    def create_plant(
        self,
        user_id: uuid.UUID,
        name: str,
        plant_type: str,
        image: str | None = None,
    ) -> PlantRecord:
        now = _utc_now()
        plant = PlantRecord(
            id=uuid.uuid4(),
            name=name,
            plant_type=plant_type,
            image=image,
            planted_date=now,
            age=0,
            user_id=user_id,
            status={},
            created_at=now,
            updated_at=now,
        )
        return self.plants.create(plant)

    def list_plants(self, user_id: uuid.UUID) -> list[PlantRecord]:
        return self.plants.list(user_id)

    def get_plant(self, plant_id: uuid.UUID, user_id: uuid.UUID) -> PlantRecord:
        return self.plants.get(plant_id, user_id)

    def update_plant(self, plant_id: uuid.UUID, user_id: uuid.UUID, changes: dict[str, Any]) -> PlantRecord:
        """Partially update descriptive fields.

        The status blob is not writable here; use :meth:`update_status`.
        """
        unknown = set(changes) - set(UPDATABLE_PLANT_FIELDS)
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        plant = self.plants.get(plant_id, user_id)
        updated = plant.model_copy(update={**changes, "updated_at": _utc_now()})
        return self.plants.save(updated)

    def update_status(
        self,
        plant_id: uuid.UUID,
        user_id: uuid.UUID,
        day: str,
        field: str,
        value: bool,
    ) -> PlantRecord:
        """Record one care action for one date.

        Read-modify-write of the whole plant: fetch, merge in memory, save.
        Concurrent updates to the same plant are not serialized and the later
        save wins.
        """
        plant = self.plants.get(plant_id, user_id)
        merged = apply_update(StatusStore.from_json(plant.status), day, field, value)
        updated = plant.model_copy(update={"status": merged.to_json(), "updated_at": _utc_now()})
        saved = self.plants.save(updated)
        logger.info(f"Plant {plant_id}: {field}={value} on {day}")
        return saved

    def delete_plant(self, plant_id: uuid.UUID, user_id: uuid.UUID) -> None:
        if not self.plants.delete(plant_id, user_id):
            raise NotFoundError("Plant not found")

    def dashboard(self, user_id: uuid.UUID, day: str | date | None = None) -> DashboardSummary:
        if day is None:
            day = date.today()
        if isinstance(day, date):
            day = day.isoformat()
        validate_date(day)
        return compute(self.plants.list(user_id), day)


class AuthService:
    """Registration, login and token handling on top of one user store."""

    def __init__(self, users: UserRepository, tokens: TokenIssuer):
        self.users = users
        self.tokens = tokens

    @staticmethod
    def _normalize_email(email: str) -> str:
        return email.strip().lower()

    def _login_response(self, user: UserRecord) -> dict[str, Any]:
        return {"user": safe_user(user), "token": self.tokens.issue(user.id)}

    def register(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: str,
        city: str | None = None,
        birth_date: str | None = None,
    ) -> dict[str, Any]:
        if password != confirm_password:
            raise ValidationError("Password and confirm password do not match")
        email = self._normalize_email(email)
        if self.users.get_by_email(email) is not None:
            raise ConflictError("Email already exists")

        user = self.users.create(UserRecord(
            id=uuid.uuid4(),
            name=name,
            email=email,
            password=hash_password(password),
            city=city,
            birth_date=birth_date,
            created_at=_utc_now(),
        ))
        logger.info(f"Registered user {user.id}")
        return self._login_response(user)

    def login(self, email: str, password: str) -> dict[str, Any]:
        user = self.users.get_by_email(self._normalize_email(email))
        if user is None or not verify_password(password, user.password):
            raise AuthError("Invalid email or password")
        return self._login_response(user)

    def me(self, user_id: uuid.UUID) -> dict[str, Any]:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return safe_user(user)

    def issue(self, user_id: uuid.UUID) -> str:
        return self.tokens.issue(user_id)

    def verify(self, token: str) -> uuid.UUID:
        return self.tokens.verify(token)
