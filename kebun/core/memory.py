"""Kebun Memory — relational storage backend ("pg") on SQLAlchemy."""

import logging
import uuid

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from kebun.core.errors import ConflictError, NotFoundError, StorageError
from kebun.core.storage import PlantRecord, UserRecord
from kebun.models.plant import Plant
from kebun.models.user import User

logger = logging.getLogger("kebun.memory")

_PLANT_COLUMNS = ("name", "plant_type", "image", "age", "status", "updated_at")


class SqlPlantRepository:
    """Plant persistence in a relational database.

    All queries are scoped by ``user_id``.
    """

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def _session(self) -> Session:
        return self.session_factory()

    def create(self, plant: PlantRecord) -> PlantRecord:
        try:
            with self._session() as session:
                row = Plant(**plant.model_dump())
                session.add(row)
                session.commit()
                session.refresh(row)
                logger.info(f"Created plant: {row.id} ({row.name})")
                return PlantRecord.model_validate(row)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to create plant: {e}") from e

    def get(self, plant_id: uuid.UUID, user_id: uuid.UUID) -> PlantRecord:
        try:
            with self._session() as session:
                row = (
                    session.query(Plant)
                    .filter(Plant.id == plant_id, Plant.user_id == user_id)
                    .first()
                )
                if row is None:
                    raise NotFoundError("Plant not found")
                return PlantRecord.model_validate(row)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load plant {plant_id}: {e}") from e

    def list(self, user_id: uuid.UUID) -> list[PlantRecord]:
        try:
            with self._session() as session:
                rows = (
                    session.query(Plant)
                    .filter(Plant.user_id == user_id)
                    .order_by(Plant.created_at.desc())
                    .all()
                )
                return [PlantRecord.model_validate(r) for r in rows]
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to list plants: {e}") from e

    def save(self, plant: PlantRecord) -> PlantRecord:
        """Write back the whole record. Last write wins."""
        try:
            with self._session() as session:
                row = (
                    session.query(Plant)
                    .filter(Plant.id == plant.id, Plant.user_id == plant.user_id)
                    .first()
                )
                if row is None:
                    raise NotFoundError("Plant not found")
                for key in _PLANT_COLUMNS:
                    setattr(row, key, getattr(plant, key))
                session.commit()
                session.refresh(row)
                return PlantRecord.model_validate(row)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to save plant {plant.id}: {e}") from e

    def delete(self, plant_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        try:
            with self._session() as session:
                deleted = (
                    session.query(Plant)
                    .filter(Plant.id == plant_id, Plant.user_id == user_id)
                    .delete(synchronize_session=False)
                )
                session.commit()
                if deleted:
                    logger.info(f"Deleted plant: {plant_id}")
                return deleted > 0
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to delete plant {plant_id}: {e}") from e


class SqlUserRepository:
    def __init__(self, session_factory):
        self.session_factory = session_factory

    def _session(self) -> Session:
        return self.session_factory()

    def create(self, user: UserRecord) -> UserRecord:
        try:
            with self._session() as session:
                row = User(**user.model_dump(exclude_none=True))
                session.add(row)
                session.commit()
                session.refresh(row)
                logger.info(f"Created user: {row.id}")
                return UserRecord.model_validate(row)
        except IntegrityError as e:
            raise ConflictError("Email already exists") from e
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to create user: {e}") from e

    def get_by_email(self, email: str) -> UserRecord | None:
        try:
            with self._session() as session:
                row = session.query(User).filter(User.email == email).first()
                return UserRecord.model_validate(row) if row else None
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to look up user: {e}") from e

    def get_by_id(self, user_id: uuid.UUID) -> UserRecord | None:
        try:
            with self._session() as session:
                row = session.get(User, user_id)
                return UserRecord.model_validate(row) if row else None
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to look up user {user_id}: {e}") from e
