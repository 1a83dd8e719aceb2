"""Tests for the SQL migration runner."""

from __future__ import annotations

import pytest
from sqlalchemy import inspect

from librarium.infrastructure.database import Database
from scripts.migrate import DEFAULT_MIGRATIONS_DIR, apply_migrations, main, split_statements


@pytest.fixture()
def migration_database(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'migrations.db'}")
    database.initialize()
    yield database
    database.dispose()


def test_split_statements_ignores_comments_and_blanks() -> None:
    script = "-- comentario\nCREATE TABLE a (id INT);\n\n  ;\nCREATE INDEX ix ON a (id);\n"

    assert split_statements(script) == ["CREATE TABLE a (id INT)", "CREATE INDEX ix ON a (id)"]


def test_split_statements_keeps_quoted_semicolons() -> None:
    script = (
        "INSERT INTO nota VALUES ('a;b', 'it''s', '-- ;');\n"
        'CREATE INDEX "ix;raro" ON nota (id);\n'
        "CREATE FUNCTION uno() RETURNS int AS $$ BEGIN RETURN 1; END; $$ LANGUAGE plpgsql;\n"
        "SELECT 1 -- fin; comentario\n;"
    )

    assert split_statements(script) == [
        "INSERT INTO nota VALUES ('a;b', 'it''s', '-- ;')",
        'CREATE INDEX "ix;raro" ON nota (id)',
        "CREATE FUNCTION uno() RETURNS int AS $$ BEGIN RETURN 1; END; $$ LANGUAGE plpgsql",
        "SELECT 1",
    ]


def test_migrations_apply_once(migration_database) -> None:
    first = apply_migrations(migration_database, DEFAULT_MIGRATIONS_DIR)
    second = apply_migrations(migration_database, DEFAULT_MIGRATIONS_DIR)

    assert first == sorted(path.name for path in DEFAULT_MIGRATIONS_DIR.glob("*.sql"))
    assert second == []
    indexes = {item["name"] for item in inspect(migration_database.engine).get_indexes("transaction")}
    assert "ix_transaction_open_due" in indexes


def test_new_migration_files_are_picked_up(migration_database, tmp_path) -> None:
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "0001_first.sql").write_text("CREATE INDEX ix_book_language ON book (language);")
    apply_migrations(migration_database, migrations)
    (migrations / "0002_second.sql").write_text("CREATE INDEX ix_book_year ON book (publication_year);")

    assert apply_migrations(migration_database, migrations) == ["0002_second.sql"]


def test_missing_directory_is_rejected(migration_database, tmp_path) -> None:
    with pytest.raises(ValueError):
        apply_migrations(migration_database, tmp_path / "nope")


def test_main_requires_database_url(monkeypatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)

    with pytest.raises(SystemExit):
        main([])


def test_main_applies_migrations(tmp_path, capsys) -> None:
    url = f"sqlite:///{tmp_path / 'cli.db'}"

    main(["--database-url", url, "--migrations-dir", str(DEFAULT_MIGRATIONS_DIR)])
    main(["--database-url", url, "--migrations-dir", str(DEFAULT_MIGRATIONS_DIR)])

    output = capsys.readouterr().out
    assert "0001_loan_indexes.sql" in output
    assert "La base de datos ya está actualizada." in output
