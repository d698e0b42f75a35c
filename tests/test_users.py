import uuid

import pytest
from fastapi import status


def _create_user(client, email="test@example.com"):
    response = client.post("/api/v1/users", json={"email": email})
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


def test_create_user(client):
    """Test creating a user."""
    data = _create_user(client)
    assert data["email"] == "test@example.com"
    assert data["home_latitude"] is None
    assert "id" in data
    assert "created_at" in data


def test_create_user_duplicate_email(client):
    _create_user(client, "dup@example.com")
    response = client.post("/api/v1/users", json={"email": "dup@example.com"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_get_user_not_found(client):
    """Test getting a non-existent user."""
    response = client.get(f"/api/v1/users/{uuid.uuid4()}")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_set_home_location(client):
    user = _create_user(client)
    response = client.patch(
        f"/api/v1/users/{user['id']}/home",
        json={"home_city": "  Brooklyn, New York ", "home_latitude": 40.65, "home_longitude": -73.95},
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["home_city"] == "Brooklyn, New York"
    assert data["home_latitude"] == 40.65
    assert data["home_longitude"] == -73.95

    fetched = client.get(f"/api/v1/users/{user['id']}").json()
    assert fetched["home_latitude"] == 40.65


def test_partial_update_keeps_other_fields(client):
    user = _create_user(client)
    client.patch(
        f"/api/v1/users/{user['id']}/home",
        json={"home_city": "Austin, Texas", "home_latitude": 30.27, "home_longitude": -97.74},
    )
    response = client.patch(f"/api/v1/users/{user['id']}/home", json={"home_city": "ATX"})
    data = response.json()
    assert data["home_city"] == "ATX"
    assert data["home_latitude"] == 30.27


def test_null_clears_home(client):
    user = _create_user(client)
    client.patch(
        f"/api/v1/users/{user['id']}/home",
        json={"home_city": "Austin, Texas", "home_latitude": 30.27, "home_longitude": -97.74},
    )
    response = client.patch(
        f"/api/v1/users/{user['id']}/home",
        json={"home_city": None, "home_latitude": None, "home_longitude": None},
    )
    data = response.json()
    assert data["home_city"] is None
    assert data["home_latitude"] is None
    assert data["home_longitude"] is None


def test_empty_home_update_rejected(client):
    user = _create_user(client)
    response = client.patch(f"/api/v1/users/{user['id']}/home", json={})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.parametrize(
    "body",
    [
        {"home_latitude": 91},
        {"home_latitude": -90.5},
        {"home_longitude": 180.01},
        {"home_longitude": -181},
    ],
)
def test_out_of_range_coordinates_rejected(client, body):
    user = _create_user(client)
    response = client.patch(f"/api/v1/users/{user['id']}/home", json=body)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_set_home_unknown_user(client):
    response = client.patch(f"/api/v1/users/{uuid.uuid4()}/home", json={"home_city": "X"})
    assert response.status_code == status.HTTP_404_NOT_FOUND
