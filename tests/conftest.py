"""
Configuración de pytest para tests

La base de datos es un MongoDB en memoria (mongomock_motor) inyectado
sobre get_db, así que no hace falta un Mongo levantado.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import ServerSelectionTimeoutError

from pet_records.db import get_db
from pet_records.main import app
from pet_records.middleware.rate_limit import limiter
from pet_records.store import PetStore

TEST_DB_NAME = "pet_records_test"

@pytest.fixture(autouse=True)
def disable_rate_limiting():
    """Deshabilita rate limiting para todos los tests"""
    previous = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = previous

@pytest.fixture
def test_db():
    """Base de datos nueva y vacía para cada test"""
    return AsyncMongoMockClient()[TEST_DB_NAME]

@pytest.fixture
def clock():
    """Reloj que avanza un segundo en cada llamada"""
    state = {"now": datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)}

    def tick():
        current = state["now"]
        state["now"] = current + timedelta(seconds=1)
        return current

    return tick

@pytest.fixture
def store(test_db, clock):
    return PetStore(test_db["pets"], clock=clock)

@pytest.fixture
def client(test_db):
    """Fixture para cliente de test de FastAPI"""
    async def override_get_db():
        return test_db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

@pytest.fixture
def pet_payload():
    """Datos de mascota de prueba"""
    return {
        "name": "Rex",
        "type": "DOG",
        "age": 3,
        "owner": {"name": "Ann", "phone": "555-1111"},
    }

@pytest.fixture
def cat_payload():
    return {
        "name": "  Misu ",
        "type": "cat",
        "age": 5,
        "owner": {"name": "Luis Ortega", "phone": " 555-2222 ", "email": "  Luis@Example.COM "},
    }

class BrokenCollection:
    """Colección que simula MongoDB caído"""

    def _fail(self):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    async def insert_one(self, *args, **kwargs):
        self._fail()

    async def find_one(self, *args, **kwargs):
        self._fail()

    async def find_one_and_update(self, *args, **kwargs):
        self._fail()

    async def find_one_and_delete(self, *args, **kwargs):
        self._fail()

    def find(self, *args, **kwargs):
        self._fail()

@pytest.fixture
def broken_store():
    return PetStore(BrokenCollection())
