from typing import Optional

from appointment_api.seed import seed_admin

from .conftest import TestingSessionLocal

DEFAULT_PASSWORD = "password123"

def register(client, email: str, password: str = DEFAULT_PASSWORD, name: Optional[str] = None) -> dict:
    """Register through REST and return the response body."""
    response = client.post(
        "/auth/register",
        json={"email": email, "password": password, "name": name or email.split("@")[0]},
    )
    assert response.status_code == 201, response.text
    return response.json()

def login(client, email: str, password: str = DEFAULT_PASSWORD) -> str:
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]

def make_admin(client, email: str, password: str = DEFAULT_PASSWORD) -> str:
    """Create an admin account directly in the database and log in as it."""
    db = TestingSessionLocal()
    try:
        seed_admin(db, email, password)
    finally:
        db.close()
    return login(client, email, password)

def gql(client, query: str, variables: Optional[dict] = None, token: Optional[str] = None) -> dict:
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    payload = {"query": query}
    if variables is not None:
        payload["variables"] = variables
    response = client.post("/graphql", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()

def error_messages(result: dict) -> list:
    return [error["message"] for error in result.get("errors") or []]
