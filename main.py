import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from librarium.config import Settings, get_settings
from librarium.infrastructure.database import Database
from librarium.infrastructure.repositories import RoleRepository
from librarium.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


def _build_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Abre la base de datos al arrancar y libera el pool de conexiones al cerrar."""

        database = Database.from_settings(settings)
        database.initialize()
        session = database.session()
        try:
            RoleRepository(session).ensure_defaults()
        finally:
            session.close()
        app.state.database = database
        try:
            yield
        finally:
            database.dispose()

    return lifespan


async def _database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error while handling %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Error interno del servidor"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Crea y configura la aplicación principal de FastAPI."""

    settings = settings or get_settings()
    app = FastAPI(title="Librarium API", lifespan=_build_lifespan(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(SQLAlchemyError, _database_error_handler)

    register_routes(app)
    return app


app = create_app()
