from jose import jwt

from core.config import settings
from models.users import User


async def test_refresh_token_success(client, user_tokens):
    """Test successful token refresh with valid refresh token."""
    response = await client.post("/auth/refresh", json={
        "refreshToken": user_tokens["refreshToken"]
    })

    assert response.status_code == 200
    new_tokens = response.json()
    assert set(new_tokens) == {"accessToken", "refreshToken"}
    assert new_tokens["refreshToken"] != user_tokens["refreshToken"]

    payload = jwt.decode(
        new_tokens["accessToken"],
        settings.jwt_config().secret,
        algorithms=[settings.JWT_ALGORITHM]
    )
    assert payload["type"] == "access"


async def test_refresh_accepts_snake_case_field(client, user_tokens):
    response = await client.post("/auth/refresh", json={
        "refresh_token": user_tokens["refreshToken"]
    })

    assert response.status_code == 200


async def test_refresh_token_rotation(client, user_tokens):
    """Old refresh token stops working after one successful refresh."""
    old_refresh_token = user_tokens["refreshToken"]

    response = await client.post("/auth/refresh", json={"refreshToken": old_refresh_token})
    assert response.status_code == 200

    response = await client.post("/auth/refresh", json={"refreshToken": old_refresh_token})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid refresh token."


async def test_rotated_token_can_be_refreshed_again(client, user_tokens):
    first = await client.post("/auth/refresh", json={"refreshToken": user_tokens["refreshToken"]})
    second = await client.post("/auth/refresh", json={"refreshToken": first.json()["refreshToken"]})

    assert second.status_code == 200


async def test_refresh_with_access_token(client, user_tokens):
    """Test that access token cannot be used as refresh token."""
    response = await client.post("/auth/refresh", json={"refreshToken": user_tokens["accessToken"]})

    assert response.status_code == 401


async def test_refresh_invalid_token_format(client):
    response = await client.post("/auth/refresh", json={"refreshToken": "invalid_token_format"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid refresh token."


async def test_refresh_for_deleted_user(client, user_tokens, session):
    session.query(User).delete()
    session.commit()

    response = await client.post("/auth/refresh", json={"refreshToken": user_tokens["refreshToken"]})

    assert response.status_code == 401


async def test_refresh_empty_token(client):
    response = await client.post("/auth/refresh", json={"refreshToken": ""})

    assert response.status_code == 400


async def test_refresh_missing_token(client):
    response = await client.post("/auth/refresh", json={})

    assert response.status_code == 400

