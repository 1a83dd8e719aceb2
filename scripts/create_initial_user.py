"""Utility script to create the first staff account in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from librarium.application.use_cases.users import create_user
from librarium.config import get_settings
from librarium.domain.entities import ADMIN_ROLE_ALIASES, ROLE_ADMIN
from librarium.infrastructure.database import Database
from librarium.infrastructure.repositories import RoleRepository


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial staff user for the Librarium API.",
    )
    parser.add_argument(
        "--name",
        default="Administrador",
        help="Nombre completo del usuario (por defecto: Administrador)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Correo electrónico del usuario (por defecto: admin@example.com)",
    )
    parser.add_argument(
        "--role",
        default=ROLE_ADMIN,
        choices=sorted(ADMIN_ROLE_ALIASES),
        help="Rol del usuario (por defecto: admin)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Contraseña del usuario. Si no se proporciona se solicitará interactivamente.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args(argv)

    password = args.password or getpass("Ingrese la contraseña del usuario: ")
    if not password:
        raise SystemExit("No se proporcionó una contraseña válida.")

    database = Database.from_settings(get_settings())
    database.initialize()

    session = database.session()
    try:
        RoleRepository(session).ensure_defaults()
        user = create_user(
            session,
            name=args.name,
            role_alias=args.role,
            email=args.email,
            password=password,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"No se pudo crear el usuario: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error al guardar el usuario en la base de datos: {exc}") from exc
    else:
        print(
            "Usuario creado exitosamente:\n"
            f"  ID: {user.id}\n"
            f"  Nombre: {user.name}\n"
            f"  Email: {user.email}\n"
            f"  Rol: {user.role.alias}"
        )
    finally:
        session.close()
        database.dispose()


if __name__ == "__main__":
    main()
