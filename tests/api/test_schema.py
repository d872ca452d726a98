import pytest
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field

from jsonform.api import create_app
from jsonform.repository import Repository


class User(BaseModel):
    name: str = Field(min_length=3)
    age: int = 0


@pytest.fixture
def repository():
    repository = Repository()
    repository.add(User, "user")
    return repository


@pytest.fixture
def client(repository):
    app = create_app(repository, prefix="/json-form/")
    with TestClient(app) as client:
        yield client


def test_get_schema(client: TestClient, repository):
    response = client.get("/json-form/user-schema.json")

    assert response.status_code == 200
    data = response.json()
    assert data == repository.get_schema_by_name("user").to_dict()
    assert data["form"][0] == {"key": "name"}
    assert data["schema"]["properties"]["name"]["required"] is True


def test_get_unknown_schema(client: TestClient):
    response = client.get("/json-form/missing-schema.json")

    assert response.status_code == 404
    assert "missing" in response.json()["detail"]


def test_list_schemas(client: TestClient, repository):
    repository.add(User, "other")

    response = client.get("/json-form/schemas")

    assert response.status_code == 200
    assert response.json() == {"success": True, "names": ["other", "user"]}
