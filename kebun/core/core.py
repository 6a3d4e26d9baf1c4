"""Kebun Core — wires services to the configured storage backends."""

import logging
from enum import Enum

import httpx

from kebun.core.config import Settings
from kebun.core.errors import BackendUnavailableError
from kebun.core.memory import SqlPlantRepository, SqlUserRepository
from kebun.core.remote import RestPlantRepository, RestUserRepository
from kebun.core.security import TokenIssuer
from kebun.core.service import AuthService, PlantService

logger = logging.getLogger("kebun.core")


class BackendName(str, Enum):
    PG = "pg"
    SB = "sb"


class Backend:
    """Plant and auth services bound to one storage backend."""

    def __init__(self, name: BackendName, plants: PlantService, auth: AuthService):
        self.name = name
        self.plants = plants
        self.auth = auth

    def __repr__(self) -> str:
        return f"<Backend {self.name.value!r}>"


class Kebun:
    """Holds one :class:`Backend` per configured store.

    Storage handles (session factory, HTTP client) are passed in by the owner,
    which is also responsible for closing them.
    """

    def __init__(
        self,
        settings: Settings,
        session_factory=None,
        rest_client: httpx.Client | None = None,
    ):
        self.settings = settings
        self.tokens = TokenIssuer(settings)
        self.backends: dict[BackendName, Backend] = {}

        if session_factory is not None:
            self.backends[BackendName.PG] = Backend(
                BackendName.PG,
                PlantService(SqlPlantRepository(session_factory)),
                AuthService(SqlUserRepository(session_factory), self.tokens),
            )
        if rest_client is not None:
            self.backends[BackendName.SB] = Backend(
                BackendName.SB,
                PlantService(RestPlantRepository(rest_client)),
                AuthService(RestUserRepository(rest_client), self.tokens),
            )
        logger.info(f"Kebun initialized with backends: {[b.value for b in self.backends]}")

    def backend(self, name: BackendName | str) -> Backend:
        try:
            return self.backends[BackendName(name)]
        except (KeyError, ValueError):
            raise BackendUnavailableError(f"Storage backend '{getattr(name, 'value', name)}' is not configured") from None
