import pytest
from fastapi.testclient import TestClient

from backend.main import create_app
from backend.store import SEED_COURSES, CatalogStore, CourseRepository, UserStore, build_seed_users


@pytest.fixture(scope='session')
def seed_users():
    return build_seed_users()


@pytest.fixture
def store(seed_users) -> CatalogStore:
    return CatalogStore(users=UserStore(seed_users), courses=CourseRepository(seed=SEED_COURSES))


@pytest.fixture
def client(store) -> TestClient:
    return TestClient(create_app(store))


def _login(client: TestClient, email: str) -> str:
    response = client.post('/auth/login', json={'email': email, 'password': 'Password1!'})
    assert response.status_code == 200
    return response.json()['token']


@pytest.fixture
def teacher_headers(client) -> dict[str, str]:
    return {'Authorization': f'Bearer {_login(client, "teacher@test.com")}'}


@pytest.fixture
def student_headers(client) -> dict[str, str]:
    return {'Authorization': f'Bearer {_login(client, "student@test.com")}'}
