from fastapi import FastAPI

from .activity import router as activity_router
from .auth import router as auth_router
from .books import admin_router as admin_books_router
from .books import router as books_router
from .fines import member_router as member_fines_router
from .fines import router as fines_router
from .health import router as health_router
from .notifications import router as notifications_router
from .overdue import router as overdue_router
from .reservations import admin_router as admin_reservations_router
from .reservations import router as reservations_router
from .reviews import book_reviews_router
from .reviews import router as reviews_router
from .transactions import member_router as member_transactions_router
from .transactions import router as transactions_router
from .users import router as users_router

API_PREFIX = "/api"


def register_routes(app: FastAPI) -> None:
    """Registra todos los routers de la API en la aplicación FastAPI."""

    for router in (
        health_router,
        auth_router,
        users_router,
        books_router,
        book_reviews_router,
        reviews_router,
        reservations_router,
        notifications_router,
        member_transactions_router,
        member_fines_router,
        admin_books_router,
        admin_reservations_router,
        transactions_router,
        fines_router,
        overdue_router,
        activity_router,
    ):
        app.include_router(router, prefix=API_PREFIX)
