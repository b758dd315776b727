import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.database import Database
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, configure_logging, load_settings
from database import connect, database_status, ensure_indexes, get_db
from routers import RESOURCE_ROUTERS, users
from validation import field_errors

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, **extra})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, "Validation failed", errors=field_errors(exc.errors()))

    @app.exception_handler(PyMongoError)
    async def database_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return _error(500, "Database error")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Internal server error")


def create_app(settings: Optional[Settings] = None, db: Optional[Database] = None) -> FastAPI:
    """Build the API; pass `db` to run against an existing database handle."""
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    client = None
    if db is None:
        client = connect(settings)
        db = client[settings.database_name]

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ensure_indexes(app.state.db, settings)
        logger.info("%s serving resources: %s", settings.app_name, ", ".join(settings.resources))
        yield
        if client is not None:
            client.close()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.db = db

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/")
    def read_root():
        return {"message": f"{settings.app_name} is on"}

    @app.get("/test")
    def test_database(database: Database = Depends(get_db)):
        return database_status(database)

    app.include_router(users.router, prefix=settings.api_prefix)
    for name in settings.resources:
        app.include_router(RESOURCE_ROUTERS[name], prefix=settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
