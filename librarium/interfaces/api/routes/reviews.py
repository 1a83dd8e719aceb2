"""Rutas para reseñas de libros y sus estadísticas de calificación."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from librarium.application.use_cases.reviews import (
    MAX_REVIEWS_PAGE_SIZE,
    create_review as create_review_uc,
    delete_review as delete_review_uc,
    get_book_rating_stats,
    list_book_reviews,
    update_review as update_review_uc,
)
from librarium.domain.entities import User
from librarium.infrastructure.database import get_db
from librarium.infrastructure.repositories import REVIEW_SORT_RECENT
from librarium.interfaces.api.dependencies import get_current_active_user
from librarium.interfaces.api.routes_helpers import parse_identifier, to_http_exception
from librarium.interfaces.api.schemas import (
    RatingStatsRead,
    ReviewCreate,
    ReviewListResponse,
    ReviewPagination,
    ReviewRead,
    ReviewUpdate,
)

INVALID_BOOK_ID = "ID de libro inválido"
INVALID_REVIEW_ID = "ID de reseña inválido"

book_reviews_router = APIRouter(prefix="/books", tags=["reviews"])
router = APIRouter(prefix="/reviews", tags=["reviews"])


@book_reviews_router.get("/{book_id}/reviews/stats", response_model=RatingStatsRead)
def read_rating_stats(book_id: str, db: Session = Depends(get_db)):
    """Devuelve el promedio, los totales y la distribución de calificaciones del libro."""

    identifier = parse_identifier(book_id, INVALID_BOOK_ID)
    try:
        stats = get_book_rating_stats(db, identifier)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return RatingStatsRead.model_validate(stats)


@book_reviews_router.get("/{book_id}/reviews", response_model=ReviewListResponse)
def read_book_reviews(
    book_id: str,
    sort_by: str = Query(REVIEW_SORT_RECENT, alias="sortBy"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_REVIEWS_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    """Lista las reseñas de un libro con paginación."""

    identifier = parse_identifier(book_id, INVALID_BOOK_ID)
    try:
        result = list_book_reviews(db, identifier, sort_by=sort_by, page=page, limit=limit)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return ReviewListResponse(
        reviews=[ReviewRead.model_validate(review) for review in result.reviews],
        pagination=ReviewPagination(
            page=result.page,
            limit=result.limit,
            total=result.total,
            total_pages=result.total_pages,
        ),
    )


@book_reviews_router.post(
    "/{book_id}/reviews", response_model=ReviewRead, status_code=status.HTTP_201_CREATED
)
def create_review(
    book_id: str,
    payload: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Publica la reseña del usuario autenticado para el libro."""

    identifier = parse_identifier(book_id, INVALID_BOOK_ID)
    try:
        review = create_review_uc(
            db,
            user_id=current_user.id,
            book_id=identifier,
            rating=payload.rating,
            review_text=payload.review_text,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return ReviewRead.model_validate(review)


@router.put("/{review_id}", response_model=ReviewRead)
def update_review(
    review_id: str,
    payload: ReviewUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Actualiza una reseña propia."""

    identifier = parse_identifier(review_id, INVALID_REVIEW_ID)
    try:
        review = update_review_uc(
            db,
            identifier,
            user_id=current_user.id,
            rating=payload.rating,
            review_text=payload.review_text,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return ReviewRead.model_validate(review)


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_review(
    review_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    """Elimina una reseña propia."""

    identifier = parse_identifier(review_id, INVALID_REVIEW_ID)
    try:
        delete_review_uc(db, identifier, user_id=current_user.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
