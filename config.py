import os
import logging
from typing import Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

ALL_RESOURCES = ["session", "material", "booking", "product", "order", "wishlist"]

DEFAULT_COLLECTIONS = {
    "user": "user",
    "session": "session",
    "material": "material",
    "booking": "booked",
    "product": "product",
    "order": "order",
    "wishlist": "wishlist",
}

_LOGGING_CONFIGURED = False


class Settings(BaseModel):
    app_name: str = "StudyMart API"
    database_url: str = "mongodb://localhost:27017"
    database_name: str = "studyPlatform"
    host: str = "0.0.0.0"
    port: int = 5000
    jwt_secret: str = "dev-secret-change"
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 7
    allowed_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    api_prefix: str = "/api/v1"
    resources: List[str] = Field(default_factory=lambda: list(ALL_RESOURCES))
    collections: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_COLLECTIONS))
    top_rated_limit: int = 6
    log_level: str = "INFO"

    @field_validator("resources")
    @classmethod
    def known_resources(cls, value: List[str]) -> List[str]:
        unknown = [name for name in value if name not in ALL_RESOURCES]
        if unknown:
            raise ValueError(f"Unknown resources: {', '.join(unknown)}")
        return value

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, value: str) -> str:
        if value and not value.startswith("/"):
            value = "/" + value
        return value.rstrip("/")

    def collection_name(self, resource: str) -> str:
        return self.collections.get(resource, resource)


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build settings from the process environment (and a .env file if present)."""
    load_dotenv(env_file)
    return Settings(
        database_url=os.getenv("DATABASE_URL", "mongodb://localhost:27017"),
        database_name=os.getenv("DATABASE_NAME", "studyPlatform"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", 5000)),
        jwt_secret=os.getenv("ACCESS_TOKEN_SECRET") or os.getenv("JWT_SECRET", "dev-secret-change"),
        token_expire_days=int(os.getenv("TOKEN_EXPIRE_DAYS", 7)),
        allowed_origins=_env_list("ALLOWED_ORIGINS", ["http://localhost:3000"]),
        api_prefix=os.getenv("API_PREFIX", "/api/v1"),
        resources=_env_list("RESOURCES", ALL_RESOURCES),
        top_rated_limit=int(os.getenv("TOP_RATED_LIMIT", 6)),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


def configure_logging(level_name: str = "INFO") -> None:
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    _LOGGING_CONFIGURED = True
