import json
import uuid

import httpx
import pytest
from fastapi.testclient import TestClient

from kebun.api.main import create_app
from kebun.core.config import Settings
from kebun.core.memory import SqlPlantRepository, SqlUserRepository
from kebun.core.security import TokenIssuer
from kebun.core.service import AuthService, PlantService
from kebun.models import Base
from kebun.models.base import create_session_factory


class FakePostgrest:
    """In-memory stand-in for a PostgREST ``/rest/v1`` API, for httpx.MockTransport."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = {"plants": [], "users": []}
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None

    def _matches(self, row: dict, filters: dict[str, str]) -> bool:
        for key, cond in filters.items():
            op, _, value = cond.partition(".")
            if op != "eq" or str(row.get(key)) != value:
                return False
        return True

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"message": "boom"})

        table = request.url.path.rsplit("/", 1)[-1]
        rows = self.tables[table]
        params = dict(request.url.params)
        order = params.pop("order", None)
        wants_rows = request.headers.get("prefer") == "return=representation"

        if request.method == "GET":
            found = [r for r in rows if self._matches(r, params)]
            if order:
                column, _, direction = order.partition(".")
                found.sort(key=lambda r: r[column], reverse=direction == "desc")
            return httpx.Response(200, json=found)

        if request.method == "POST":
            row = json.loads(request.content)
            rows.append(row)
            return httpx.Response(201, json=[row] if wants_rows else None)

        if request.method == "PATCH":
            changes = json.loads(request.content)
            updated = []
            for row in rows:
                if self._matches(row, params):
                    row.update(changes)
                    updated.append(row)
            return httpx.Response(200, json=updated if wants_rows else None)

        if request.method == "DELETE":
            removed = [r for r in rows if self._matches(r, params)]
            self.tables[table] = [r for r in rows if not self._matches(r, params)]
            return httpx.Response(200, json=removed if wants_rows else None)

        return httpx.Response(405)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'kebun.db'}",
        supabase_url="",
        supabase_key="",
        jwt_secret="test-secret",
    )


@pytest.fixture
def session_factory(settings):
    engine, factory = create_session_factory(settings.database_url)
    Base.metadata.create_all(bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def plant_service(session_factory):
    return PlantService(SqlPlantRepository(session_factory))


@pytest.fixture
def auth_service(session_factory, settings):
    return AuthService(SqlUserRepository(session_factory), TokenIssuer(settings))


@pytest.fixture
def postgrest():
    return FakePostgrest()


@pytest.fixture
def rest_client(postgrest):
    client = httpx.Client(
        base_url="https://example.supabase.co/rest/v1",
        headers={"apikey": "anon-key", "Authorization": "Bearer anon-key"},
        transport=httpx.MockTransport(postgrest),
    )
    yield client
    client.close()


@pytest.fixture
def user_id():
    return uuid.uuid4()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def auth_headers(client):
    resp = client.post("/pg/auth/register", json={
        "name": "Sari",
        "email": "sari@example.com",
        "password": "rahasia123",
        "confirm_password": "rahasia123",
        "city": "Bandung",
    })
    assert resp.status_code == 200, resp.text
    token = resp.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}
