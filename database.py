import logging
from typing import Any, Callable, Dict

from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from config import Settings

logger = logging.getLogger(__name__)


def connect(settings: Settings) -> MongoClient:
    # MongoClient connects lazily, so building the app never blocks on the server
    return MongoClient(settings.database_url)


def get_db(request: Request) -> Database:
    return request.app.state.db


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def collection(resource: str) -> Callable[[Request], Collection]:
    """Dependency factory resolving a resource name to its configured collection."""

    def dependency(request: Request) -> Collection:
        settings: Settings = request.app.state.settings
        return request.app.state.db[settings.collection_name(resource)]

    dependency.__name__ = f"{resource}_collection"
    return dependency


def ensure_indexes(db: Database, settings: Settings) -> None:
    try:
        db[settings.collection_name("user")].create_index([("email", ASCENDING)], unique=True)
    except PyMongoError as e:
        logger.warning("Could not create unique index on user email: %s", e)


def database_status(db: Database) -> Dict[str, Any]:
    """Report whether the database answers, for the /test diagnostics route."""
    response: Dict[str, Any] = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "database_name": None,
        "connection_status": "Not Connected",
        "collections": [],
    }
    if db is None:
        return response
    try:
        response["database_name"] = db.name
        response["collections"] = sorted(db.list_collection_names())[:10]
        response["database"] = "✅ Connected & Working"
        response["connection_status"] = "Connected"
    except PyMongoError as e:
        response["database"] = f"⚠️  Connected but Error: {str(e)[:80]}"
    return response
