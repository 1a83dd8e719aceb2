"""Tests for reviews and rating statistics."""

from __future__ import annotations

import pytest


@pytest.fixture()
def post_review(client, headers_for):
    def _post_review(user, book_id: int, rating: int, text: str | None = None):
        payload = {"rating": rating}
        if text is not None:
            payload["review_text"] = text
        return client.post(
            f"/api/books/{book_id}/reviews", json=payload, headers=headers_for(user)
        )

    return _post_review


def test_stats_for_book_without_reviews(client, make_book) -> None:
    book = make_book()

    response = client.get(f"/api/books/{book.id}/reviews/stats")

    assert response.status_code == 200
    assert response.json() == {
        "average_rating": 0.0,
        "total_reviews": 0,
        "verified_reviews": 0,
        "rating_distribution": {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0},
    }


def test_stats_aggregate_ratings(client, make_book, make_user, make_loan, post_review) -> None:
    book = make_book(copies=2)
    borrower, reader, critic = make_user(), make_user(), make_user()
    make_loan(borrower.id, book.id, due_in_days=5)

    assert post_review(borrower, book.id, 5).status_code == 201
    assert post_review(reader, book.id, 4).status_code == 201
    assert post_review(critic, book.id, 4).status_code == 201

    body = client.get(f"/api/books/{book.id}/reviews/stats").json()

    assert body["average_rating"] == pytest.approx(4.3)
    assert body["total_reviews"] == 3
    assert body["verified_reviews"] == 1
    assert body["rating_distribution"] == {"1": 0, "2": 0, "3": 0, "4": 2, "5": 1}


def test_stats_average_rounds_half_up(client, make_book, make_user, post_review) -> None:
    book = make_book()
    for rating in (2, 2, 2, 3):
        assert post_review(make_user(), book.id, rating).status_code == 201

    body = client.get(f"/api/books/{book.id}/reviews/stats").json()

    assert body["average_rating"] == 2.3


def test_stats_validates_book_id(client) -> None:
    assert client.get("/api/books/abc/reviews/stats").status_code == 400
    assert client.get("/api/books/77/reviews/stats").status_code == 404


def test_review_marks_verified_borrower(make_book, make_user, make_loan, post_review) -> None:
    book = make_book()
    borrower, stranger = make_user(), make_user()
    make_loan(borrower.id, book.id, due_in_days=3)

    verified = post_review(borrower, book.id, 5, "Imprescindible")
    unverified = post_review(stranger, book.id, 3)

    assert verified.json()["is_verified_borrower"] is True
    assert verified.json()["review_text"] == "Imprescindible"
    assert unverified.json()["is_verified_borrower"] is False


def test_member_reviews_a_book_once(make_book, make_user, post_review) -> None:
    book = make_book()
    member = make_user()

    assert post_review(member, book.id, 4).status_code == 201
    second = post_review(member, book.id, 2)

    assert second.status_code == 400
    assert second.json()["detail"] == "Ya has publicado una reseña para este libro"


def test_review_requires_authentication(client, make_book) -> None:
    book = make_book()

    response = client.post(f"/api/books/{book.id}/reviews", json={"rating": 5})

    assert response.status_code == 401


def test_list_reviews_sorted_by_rating(client, make_book, make_user, post_review) -> None:
    book = make_book()
    for rating in (3, 5, 1):
        post_review(make_user(), book.id, rating)

    response = client.get(
        f"/api/books/{book.id}/reviews", params={"sortBy": "rating-high", "limit": 2}
    )

    assert response.status_code == 200
    body = response.json()
    assert [review["rating"] for review in body["reviews"]] == [5, 3]
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "total_pages": 2}

    low = client.get(f"/api/books/{book.id}/reviews", params={"sortBy": "rating-low"}).json()
    assert [review["rating"] for review in low["reviews"]] == [1, 3, 5]


def test_list_reviews_rejects_unknown_sort(client, make_book) -> None:
    book = make_book()

    response = client.get(f"/api/books/{book.id}/reviews", params={"sortBy": "random"})

    assert response.status_code == 400


def test_only_author_updates_or_deletes_review(
    client, make_book, make_user, post_review, headers_for
) -> None:
    book = make_book()
    author, other = make_user(), make_user()
    review_id = post_review(author, book.id, 2, "Flojo").json()["id"]

    forbidden = client.put(
        f"/api/reviews/{review_id}", json={"rating": 1}, headers=headers_for(other)
    )
    assert forbidden.status_code == 403
    assert client.delete(f"/api/reviews/{review_id}", headers=headers_for(other)).status_code == 403

    updated = client.put(
        f"/api/reviews/{review_id}", json={"rating": 4}, headers=headers_for(author)
    )
    assert updated.status_code == 200
    assert updated.json()["rating"] == 4
    assert updated.json()["review_text"] == "Flojo"

    deleted = client.delete(f"/api/reviews/{review_id}", headers=headers_for(author))
    assert deleted.status_code == 204
    assert client.get(f"/api/books/{book.id}/reviews/stats").json()["total_reviews"] == 0


def test_update_without_fields_is_rejected(client, make_book, make_user, post_review, headers_for) -> None:
    book = make_book()
    author = make_user()
    review_id = post_review(author, book.id, 3).json()["id"]

    response = client.put(f"/api/reviews/{review_id}", json={}, headers=headers_for(author))

    assert response.status_code == 400
