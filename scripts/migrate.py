"""Create the ORM tables and apply pending SQL migrations in order.

Every file in the migrations directory is applied once, in lexical order, and
recorded in the ``schema_migration`` table so the script can be rerun safely.
"""

from __future__ import annotations

import argparse
import logging
import os
import re
from pathlib import Path

from sqlalchemy import Column, DateTime, MetaData, String, Table, func, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from librarium.infrastructure.database import Database

logger = logging.getLogger(__name__)

DEFAULT_MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"
_DOLLAR_TAG = re.compile(r"\$[A-Za-z_]*\$")

_metadata = MetaData()
schema_migration = Table(
    "schema_migration",
    _metadata,
    Column("name", String(255), primary_key=True),
    Column("applied_at", DateTime, nullable=False, server_default=func.now()),
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Apply database migrations.")
    parser.add_argument(
        "--database-url",
        default=os.environ.get("DATABASE_URL"),
        help="URL de conexión (por defecto: variable de entorno DATABASE_URL)",
    )
    parser.add_argument(
        "--migrations-dir",
        default=os.environ.get("MIGRATIONS_DIR") or str(DEFAULT_MIGRATIONS_DIR),
        help="Directorio con los archivos .sql de migración",
    )
    return parser.parse_args(argv)


def split_statements(script: str) -> list[str]:
    """Split a SQL script into statements on top-level ``;``.

    Semicolons inside quoted literals, quoted identifiers and ``$tag$`` bodies
    are kept. ``--`` comments are dropped and blank statements skipped.
    """

    statements: list[str] = []
    current: list[str] = []

    def flush() -> None:
        statement = "".join(current).strip()
        if statement:
            statements.append(statement)
        current.clear()

    position, length = 0, len(script)
    while position < length:
        char = script[position]
        if script.startswith("--", position):
            end = script.find("\n", position)
            position = length if end == -1 else end
            continue
        if char in ("'", '"'):
            end = script.find(char, position + 1)
            end = length if end == -1 else end + 1
            current.append(script[position:end])
            position = end
            continue
        if char == "$":
            match = _DOLLAR_TAG.match(script, position)
            if match:
                tag = match.group(0)
                end = script.find(tag, match.end())
                end = length if end == -1 else end + len(tag)
                current.append(script[position:end])
                position = end
                continue
        if char == ";":
            flush()
        else:
            current.append(char)
        position += 1
    flush()
    return statements


def _applied_migrations(connection: Connection) -> set[str]:
    return set(connection.execute(select(schema_migration.c.name)).scalars())


def apply_migrations(database: Database, migrations_dir: Path) -> list[str]:
    """Apply every pending migration file and return the names applied now."""

    if not migrations_dir.is_dir():
        raise ValueError(f"El directorio de migraciones no existe: {migrations_dir}")

    _metadata.create_all(bind=database.engine, checkfirst=True)
    applied: list[str] = []
    with database.engine.begin() as connection:
        done = _applied_migrations(connection)

    for path in sorted(migrations_dir.glob("*.sql")):
        if path.name in done:
            continue
        with database.engine.begin() as connection:
            for statement in split_statements(path.read_text(encoding="utf-8")):
                connection.exec_driver_sql(statement)
            connection.execute(schema_migration.insert().values(name=path.name))
        logger.info("Applied migration %s", path.name)
        applied.append(path.name)
    return applied


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    if not args.database_url:
        raise SystemExit("DATABASE_URL es obligatorio para ejecutar las migraciones.")

    database = Database(args.database_url)
    try:
        database.initialize()
        applied = apply_migrations(database, Path(args.migrations_dir))
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    except SQLAlchemyError as exc:
        raise SystemExit(f"Error al aplicar las migraciones: {exc}") from exc
    finally:
        database.dispose()

    if applied:
        print("Migraciones aplicadas:\n" + "\n".join(f"  {name}" for name in applied))
    else:
        print("La base de datos ya está actualizada.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
