"""Enable the ``vector`` extension on the configured PostgreSQL database."""

from __future__ import annotations

import argparse
import os

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from librarium.infrastructure.database import Database

ENABLE_VECTOR_SQL = "CREATE EXTENSION IF NOT EXISTS vector"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Enable the pgvector extension.")
    parser.add_argument(
        "--database-url",
        default=os.environ.get("DATABASE_URL"),
        help="URL de conexión (por defecto: variable de entorno DATABASE_URL)",
    )
    return parser.parse_args(argv)


def enable_pgvector(database: Database) -> None:
    """Create the extension if it is missing; running it twice is harmless."""

    if database.engine.dialect.name != "postgresql":
        raise ValueError("La extensión vector solo está disponible en PostgreSQL.")
    with database.engine.begin() as connection:
        connection.execute(text(ENABLE_VECTOR_SQL))


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    if not args.database_url:
        raise SystemExit("DATABASE_URL es obligatorio para habilitar la extensión.")

    database = Database(args.database_url)
    try:
        enable_pgvector(database)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    except SQLAlchemyError as exc:
        raise SystemExit(f"No se pudo habilitar la extensión vector: {exc}") from exc
    finally:
        database.dispose()

    print("Extensión vector habilitada.")


if __name__ == "__main__":
    main()
