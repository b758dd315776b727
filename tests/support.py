# Request helpers shared by the API tests.

from typing import Any, Dict, Optional

from fastapi.testclient import TestClient

API = "/api/v1"
TEST_SECRET = "test-secret"


def register(client: TestClient, email: str = "a@x.com", password: str = "secret1", role: str = "customer", **extra: Any):
    return client.post(f"{API}/create-user", json={"email": email, "password": password, "role": role, **extra})


def login_token(client: TestClient, email: str = "a@x.com", password: str = "secret1") -> str:
    response = client.post(f"{API}/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def auth_header(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def create(client: TestClient, path: str, payload: Dict[str, Any], token: Optional[str] = None) -> Dict[str, Any]:
    headers = auth_header(token) if token else None
    response = client.post(f"{API}/{path}", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def session_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "title": "Linear Algebra Crash Course",
        "description": "Vectors, matrices and eigenvalues",
        "tutor_name": "Rafi",
        "tutor_email": "tutor@x.com",
        "registration_fee": 0,
    }
    payload.update(overrides)
    return payload


def product_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "name": "Denim Jacket",
        "price": 40.0,
        "category": "outerwear",
        "seller_email": "seller@x.com",
        "rating": 4.0,
        "stock": 10,
    }
    payload.update(overrides)
    return payload
