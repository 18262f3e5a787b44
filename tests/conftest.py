import random

import pytest
from fastapi.testclient import TestClient

from diwaifox.core.config import Settings
from diwaifox.main import create_app
from diwaifox.models import UserRole
from diwaifox.repositories import build_memory_repositories, build_sql_repositories
from diwaifox.services import FixedDistanceEstimator, Principal, build_services

ADMIN_EMAIL = "admin@diwaifox.com"
ADMIN_PASSWORD = "admin123"
DISTANCE_KM = 10.0


def make_settings(**overrides) -> Settings:
    values = dict(
        BCRYPT_ROUNDS=4,
        JWT_SECRET="test-secret",
        DATABASE_URL=None,
        LOG_LEVEL="WARNING",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def app_settings():
    return make_settings()


@pytest.fixture(params=["memory", "sqlite"])
def repositories(request):
    if request.param == "memory":
        repos = build_memory_repositories()
    else:
        repos = build_sql_repositories("sqlite://")
    yield repos
    repos.close()


@pytest.fixture
def memory_repositories():
    return build_memory_repositories()


@pytest.fixture
def services(app_settings, repositories):
    return build_services(
        app_settings,
        repositories,
        distance_estimator=FixedDistanceEstimator(DISTANCE_KM),
        rng=random.Random(7),
    )


class UserFactory:
    """Регистрирует пользователей через CredentialStore и возвращает Principal."""

    def __init__(self, services):
        self.services = services
        self.counter = 0

    def __call__(self, role: UserRole = UserRole.PASSENGER, **extra) -> Principal:
        self.counter += 1
        email = extra.pop("email", f"{role.value}{self.counter}@diwaifox.com")
        if role is UserRole.DRIVER:
            extra.setdefault("vehicle_type", "suv")
            extra.setdefault("license_plate", f"PNG-{self.counter:03d}")
        user, _ = self.services.credentials.register(
            email=email,
            password="secret123",
            name=f"User {self.counter}",
            phone=f"+675-000-{self.counter:04d}",
            role=role,
            **extra,
        )
        return Principal(id=user.id, email=user.email, role=UserRole(user.role))


@pytest.fixture
def make_user(services):
    return UserFactory(services)


@pytest.fixture(params=["memory", "sqlite"])
def client(request):
    overrides = {"DATABASE_URL": "sqlite://"} if request.param == "sqlite" else {}
    app = create_app(
        make_settings(**overrides),
        distance_estimator=FixedDistanceEstimator(DISTANCE_KM),
        rng=random.Random(42),
    )
    with TestClient(app) as test_client:
        yield test_client


def register(client, email, role="passenger", **extra):
    """Регистрирует пользователя через API, возвращает (headers, user)."""
    payload = {
        "email": email,
        "password": "secret123",
        "name": email.split("@")[0].title(),
        "phone": "+675-555-0100",
        "role": role,
    }
    payload.update(extra)
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text
    body = response.json()
    return {"Authorization": f"Bearer {body['token']}"}, body["user"]


def login_admin(client):
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
