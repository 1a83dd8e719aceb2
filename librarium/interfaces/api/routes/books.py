"""Rutas del catálogo de libros."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from librarium.application.use_cases.books import (
    create_book as create_book_uc,
    get_book as get_book_uc,
    get_book_availability,
    list_books as list_books_uc,
)
from librarium.domain.entities import Book, User
from librarium.infrastructure.database import get_db
from librarium.interfaces.api.dependencies import require_staff
from librarium.interfaces.api.routes_helpers import parse_identifier, to_http_exception
from librarium.interfaces.api.schemas import (
    BookAvailabilityRead,
    BookCreate,
    BookListResponse,
    BookRead,
)

INVALID_BOOK_ID = "ID de libro inválido"

router = APIRouter(prefix="/books", tags=["books"])
admin_router = APIRouter(prefix="/admin/books", tags=["books"])


def _to_read_model(book: Book) -> BookRead:
    return BookRead.model_validate(book)


@router.get("", response_model=BookListResponse)
def list_books(
    q: str | None = Query(None, max_length=200, description="Texto a buscar en título, autor o ISBN"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Devuelve una página del catálogo."""

    result = list_books_uc(db, query=q, page=page, limit=limit)
    return BookListResponse(
        books=[_to_read_model(book) for book in result.books],
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )


@router.get("/{book_id}", response_model=BookRead)
def read_book(book_id: str, db: Session = Depends(get_db)):
    """Obtiene el detalle de un libro."""

    identifier = parse_identifier(book_id, INVALID_BOOK_ID)
    try:
        book = get_book_uc(db, identifier)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(book)


@router.get("/{book_id}/availability", response_model=BookAvailabilityRead)
def read_book_availability(book_id: str, db: Session = Depends(get_db)):
    """Indica cuántos ejemplares están disponibles y el largo de la cola de reservas."""

    identifier = parse_identifier(book_id, INVALID_BOOK_ID)
    try:
        availability = get_book_availability(db, identifier)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return BookAvailabilityRead.model_validate(availability)


@admin_router.post("", response_model=BookRead, status_code=status.HTTP_201_CREATED)
def create_book(
    payload: BookCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """Registra un libro nuevo junto con sus ejemplares."""

    try:
        book = create_book_uc(
            db,
            title=payload.title,
            copies=payload.copies,
            isbn=payload.isbn,
            author_name=payload.author_name,
            category_name=payload.category_name,
            publication_year=payload.publication_year,
            language=payload.language,
            description=payload.description,
            shelf_location=payload.shelf_location,
            created_by=current_user.id,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_model(book)
