"""Tests for member loan renewals."""

from __future__ import annotations

from datetime import timedelta

import pytest

from librarium.application.use_cases.loans import RENEWAL_LIMITS, RENEWAL_PERIOD_DAYS
from librarium.infrastructure.models import ActivityLogModel, TransactionModel


def _renew(client, headers, transaction_id: int):
    return client.post(
        "/api/member/renew", json={"transaction_id": transaction_id}, headers=headers
    )


def test_member_renews_open_loan(client, db_session, make_book, make_user, make_loan, headers_for) -> None:
    member = make_user()
    loan = make_loan(member.id, make_book().id, due_in_days=3)
    previous_due = loan.due_date

    response = _renew(client, headers_for(member), loan.id)

    assert response.status_code == 200
    body = response.json()
    assert body["renewal_count"] == 1
    assert body["max_renewals"] == RENEWAL_LIMITS["standard"]
    assert body["renewals_remaining"] == RENEWAL_LIMITS["standard"] - 1
    assert body["transaction"]["renewal_count"] == 1
    db_session.expire_all()
    stored = db_session.get(TransactionModel, loan.id)
    assert stored.due_date == previous_due + timedelta(days=RENEWAL_PERIOD_DAYS)
    assert stored.renewal_count == 1
    actions = [row.action for row in db_session.query(ActivityLogModel).all()]
    assert actions == ["renew_loan"]


@pytest.mark.parametrize("membership, limit", [("standard", 2), ("student", 3), ("premium", 5)])
def test_renewal_limit_depends_on_membership(
    client, make_book, make_user, make_loan, headers_for, membership, limit
) -> None:
    member = make_user(membership_type=membership)
    loan = make_loan(member.id, make_book().id, due_in_days=2)
    headers = headers_for(member)

    for _ in range(limit):
        assert _renew(client, headers, loan.id).status_code == 200
    refused = _renew(client, headers, loan.id)

    assert refused.status_code == 400
    assert str(limit) in refused.json()["detail"]


def test_overdue_loan_cannot_be_renewed(client, db_session, make_book, make_user, make_loan, headers_for) -> None:
    member = make_user()
    loan = make_loan(member.id, make_book().id, due_in_days=-1)

    response = _renew(client, headers_for(member), loan.id)

    assert response.status_code == 400
    db_session.expire_all()
    assert db_session.get(TransactionModel, loan.id).renewal_count == 0


def test_cannot_renew_someone_elses_or_returned_loan(
    client, make_book, make_user, make_loan, headers_for
) -> None:
    owner, other = make_user(), make_user()
    staff = make_user("staff")
    loan = make_loan(owner.id, make_book().id, due_in_days=4)

    assert _renew(client, headers_for(other), loan.id).status_code == 404
    assert _renew(client, headers_for(owner), 999).status_code == 404

    client.post(
        "/api/admin/transactions/return",
        json={"transaction_id": loan.id},
        headers=headers_for(staff),
    )
    assert _renew(client, headers_for(owner), loan.id).status_code == 404


def test_renewal_requires_authentication(client) -> None:
    assert client.post("/api/member/renew", json={"transaction_id": 1}).status_code == 401
