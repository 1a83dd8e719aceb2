"""Expire reservations whose pickup window has closed.

Meant to run periodically (cron or a scheduled job). Each expired hold frees
the book for the next member in the queue.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from librarium.application.use_cases.reservations import expire_reservations
from librarium.config import get_settings
from librarium.infrastructure.database import Database


def main() -> None:
    database = Database.from_settings(get_settings())
    session = database.session()
    try:
        expired = expire_reservations(session)
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error al expirar reservas: {exc}") from exc
    finally:
        session.close()
        database.dispose()

    print(f"Reservas expiradas: {len(expired)}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
