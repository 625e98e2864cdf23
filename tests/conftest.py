import os

# Point the app at throwaway resources before its settings are loaded
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BACKEND_API_URL"] = "http://backend.test/api"

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import leavedash.models  # noqa: F401
from leavedash.api.dependencies import get_backend_client
from leavedash.client.base import create_backend_client
from leavedash.db.session import Base, get_db
from leavedash.main import app

# Test database: one shared in-memory SQLite connection
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeBackend:
    """Stand-in for the leave backend: canned responses keyed by method and path."""

    prefix = "/api"

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, json=None, status_code=200, handler=None):
        if handler is None:
            def handler(request):
                return httpx.Response(status_code, json=json)
        self.routes[(method, self.prefix + path)] = handler

    def calls(self, method, path):
        return [r for r in self.requests if r.method == method and r.url.path == self.prefix + path]

    def __call__(self, request):
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        return handler(request)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database tables"""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Create a fresh database session for each test"""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
async def backend_client(backend):
    """Async client wired to the fake backend, for service-level tests"""
    async with create_backend_client(transport=httpx.MockTransport(backend)) as client:
        yield client


@pytest.fixture
def client(db_session, backend):
    """Create test client with database and backend overrides"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    async def override_get_backend_client():
        async with create_backend_client(transport=httpx.MockTransport(backend)) as backend_client:
            yield backend_client

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_backend_client] = override_get_backend_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

