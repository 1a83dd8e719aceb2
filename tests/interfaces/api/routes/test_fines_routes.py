"""Tests for the fine listings, statistics and waivers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from librarium.infrastructure.models import ActivityLogModel, FineModel


@pytest.fixture()
def make_fine(db_session):
    """Return a factory inserting a fine, optionally tied to a loan."""

    def _make_fine(user_id: int, amount: str, *, status: str = "pending", transaction_id=None):
        fine = FineModel(
            user_id=user_id,
            transaction_id=transaction_id,
            amount=Decimal(amount),
            reason="Devolución tardía",
            days_overdue=int(Decimal(amount) / Decimal("0.50")),
            status=status,
        )
        db_session.add(fine)
        db_session.commit()
        db_session.refresh(fine)
        return fine

    return _make_fine


@pytest.mark.parametrize(
    "path", ["/api/admin/fines", "/api/admin/fines/stats", "/api/admin/fines/1/waive"]
)
def test_admin_fine_routes_are_staff_only(client, make_user, headers_for, path) -> None:
    call = client.put if path.endswith("waive") else client.get

    assert call(path).status_code == 401
    assert call(path, headers=headers_for(make_user())).status_code == 401


def test_staff_lists_fines_with_member_and_loan(
    client, make_book, make_user, make_loan, make_fine, headers_for
) -> None:
    member = make_user(name="Ana Lectora")
    loan = make_loan(member.id, make_book().id, due_in_days=-3)
    make_fine(member.id, "1.50", transaction_id=loan.id)
    make_fine(member.id, "0.50", status="paid")
    headers = headers_for(make_user("staff"))

    response = client.get("/api/admin/fines", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert [item["fine"]["amount"] for item in body] == ["0.50", "1.50"]
    assert body[1]["user"]["name"] == "Ana Lectora"
    assert body[1]["transaction"]["id"] == loan.id
    assert body[0]["transaction"] is None

    pending = client.get("/api/admin/fines", params={"status": "pending"}, headers=headers).json()
    assert [item["fine"]["status"] for item in pending] == ["pending"]
    assert client.get(
        "/api/admin/fines", params={"status": "lost"}, headers=headers
    ).status_code == 400


def test_fine_stats_group_by_status(client, make_user, make_fine, headers_for) -> None:
    member = make_user()
    make_fine(member.id, "1.50")
    make_fine(member.id, "2.00")
    make_fine(member.id, "0.50", status="paid")

    response = client.get("/api/admin/fines/stats", headers=headers_for(make_user("staff")))

    assert response.status_code == 200
    assert response.json() == {
        "pending": {"count": 2, "amount": "3.50"},
        "paid": {"count": 1, "amount": "0.50"},
        "waived": {"count": 0, "amount": "0.00"},
    }


def test_staff_waives_pending_fine(client, db_session, make_user, make_fine, headers_for) -> None:
    member = make_user()
    staff = make_user("staff")
    fine = make_fine(member.id, "3.00")

    response = client.put(f"/api/admin/fines/{fine.id}/waive", headers=headers_for(staff))
    again = client.put(f"/api/admin/fines/{fine.id}/waive", headers=headers_for(staff))

    assert response.status_code == 200
    assert response.json()["status"] == "waived"
    assert again.status_code == 200
    db_session.expire_all()
    assert db_session.get(FineModel, fine.id).status == "waived"
    entries = db_session.query(ActivityLogModel).filter(ActivityLogModel.action == "waive_fine").all()
    assert [(entry.entity_id, entry.user_id) for entry in entries] == [(fine.id, staff.id)]


def test_waive_rejects_paid_missing_and_malformed(
    client, db_session, make_user, make_fine, headers_for
) -> None:
    member = make_user()
    headers = headers_for(make_user("staff"))
    paid = make_fine(member.id, "1.00", status="paid")

    assert client.put(f"/api/admin/fines/{paid.id}/waive", headers=headers).status_code == 400
    assert client.put("/api/admin/fines/999/waive", headers=headers).status_code == 404
    assert client.put("/api/admin/fines/abc/waive", headers=headers).status_code == 400
    db_session.expire_all()
    assert db_session.get(FineModel, paid.id).status == "paid"


def test_member_sees_own_fines_with_summary(
    client, make_book, make_user, make_loan, make_fine, headers_for
) -> None:
    member, other = make_user(), make_user()
    book = make_book("Pedro Páramo")
    loan = make_loan(member.id, book.id, due_in_days=-2)
    make_fine(member.id, "1.00", transaction_id=loan.id)
    make_fine(member.id, "0.50", status="paid")
    make_fine(member.id, "2.50", status="waived")
    make_fine(other.id, "9.00")

    response = client.get("/api/member/fines", headers=headers_for(member))

    assert response.status_code == 200
    body = response.json()
    assert len(body["fines"]) == 3
    assert body["fines"][0]["book"] is None
    assert body["fines"][-1]["book"]["title"] == "Pedro Páramo"
    assert body["summary"] == {
        "total_pending": "1.00",
        "total_paid": "0.50",
        "pending_count": 1,
        "paid_count": 1,
        "waived_count": 1,
    }


def test_late_return_fine_shows_up_for_member(
    client, make_book, make_user, make_loan, headers_for
) -> None:
    member = make_user()
    loan = make_loan(member.id, make_book().id, due_in_days=-1.5)
    client.post(
        "/api/admin/transactions/return",
        json={"transaction_id": loan.id},
        headers=headers_for(make_user("staff")),
    )

    body = client.get("/api/member/fines", headers=headers_for(member)).json()

    assert [item["fine"]["amount"] for item in body["fines"]] == ["1.00"]
    assert body["summary"]["total_pending"] == "1.00"


def test_member_fines_require_authentication(client) -> None:
    assert client.get("/api/member/fines").status_code == 401
