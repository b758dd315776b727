from datetime import timedelta

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from config import ALL_RESOURCES, Settings, load_settings
from crud import envelope, parse_object_id, serialize_doc
from schemas import UserCreate
from security import create_access_token, decode_token, hash_password, verify_password
from validation import PayloadValidationError, validate_payload


def test_validate_payload_returns_model():
    user = validate_payload(UserCreate, {"email": "A@X.com", "password": "secret1", "role": "tutor"})
    assert user.email == "a@x.com"
    assert user.role == "tutor"


def test_validate_payload_lists_field_errors():
    with pytest.raises(PayloadValidationError) as exc_info:
        validate_payload(UserCreate, {"email": "bad", "password": "      ", "role": "customer"})
    errors = {e["field"]: e["message"] for e in exc_info.value.errors}
    assert set(errors) == {"email", "password"}
    assert errors["password"] == "Password must not be blank"


def test_validate_payload_rejects_non_objects():
    with pytest.raises(PayloadValidationError) as exc_info:
        validate_payload(UserCreate, ["not", "a", "dict"])
    assert exc_info.value.errors == [{"field": "body", "message": "Payload must be a JSON object"}]


def test_password_hash_roundtrip():
    hashed = hash_password("secret1")
    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)
    assert not verify_password("secret1", "")
    assert not verify_password("secret1", "plaintext-from-an-old-import")


def test_token_claims_and_expiry():
    settings = Settings(jwt_secret="unit-secret")
    claims = decode_token(create_access_token({"email": "a@x.com", "role": "admin"}, settings), settings)
    assert claims["email"] == "a@x.com"
    assert claims["role"] == "admin"

    expired = create_access_token({"email": "a@x.com"}, settings, timedelta(minutes=-1))
    with pytest.raises(HTTPException) as exc_info:
        decode_token(expired, settings)
    assert exc_info.value.status_code == 401


def test_parse_object_id():
    with pytest.raises(HTTPException) as exc_info:
        parse_object_id("42", "order")
    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Invalid order id format"
    assert str(parse_object_id("0123456789ab0123456789ab", "order")) == "0123456789ab0123456789ab"


def test_serialize_doc_exposes_string_id():
    oid = parse_object_id("0123456789ab0123456789ab", "x")
    assert serialize_doc({"_id": oid, "ref": oid, "n": 1}) == {
        "id": "0123456789ab0123456789ab",
        "ref": "0123456789ab0123456789ab",
        "n": 1,
    }
    assert serialize_doc(None) is None


def test_envelope_omits_missing_data():
    assert envelope("done") == {"success": True, "message": "done"}
    assert envelope("ok", [], token="t") == {"success": True, "message": "ok", "data": [], "token": "t"}


def test_load_settings_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "mongodb://db:27017")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ACCESS_TOKEN_SECRET", "from-env")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example.com, https://b.example.com")
    monkeypatch.setenv("RESOURCES", "product,order")
    settings = load_settings(env_file="/nonexistent/.env")
    assert settings.database_url == "mongodb://db:27017"
    assert settings.port == 8080
    assert settings.jwt_secret == "from-env"
    assert settings.allowed_origins == ["https://a.example.com", "https://b.example.com"]
    assert settings.resources == ["product", "order"]


def test_load_settings_defaults(monkeypatch):
    for name in ("RESOURCES", "ACCESS_TOKEN_SECRET", "JWT_SECRET", "TOKEN_EXPIRE_DAYS"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings(env_file="/nonexistent/.env")
    assert settings.resources == ALL_RESOURCES
    assert settings.token_expire_days == 7
    assert settings.jwt_secret == "dev-secret-change"


def test_unknown_resource_is_rejected():
    with pytest.raises(ValidationError):
        Settings(resources=["session", "spaceships"])
