"""Crea los usuarios iniciales (admin u owner). No existe registro público de usuarios."""

import argparse
import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy.orm import Session

from ..auth import ROLES, get_password_hash
from ..config import Settings
from ..database import create_db_engine, create_session_factory
from ..models.usuario import Usuario

logger = logging.getLogger(__name__)


def crear_usuario(db: Session, name: str, email: str, password: str, role: str) -> Optional[Usuario]:
    """
    Crea un usuario con la contraseña hasheada.
    Devuelve None si ya existe un usuario con ese email.
    """
    if role not in ROLES:
        raise ValueError(f"el rol debe ser uno de {ROLES}")

    existing_user = db.query(Usuario).filter(Usuario.email == email).first()
    if existing_user:
        logger.info(f"Usuario ya existe: {email}")
        return None

    user = Usuario(name=name, email=email, password_hash=get_password_hash(password), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Usuario creado: {user.id} {user.email} ({user.role})")
    return user


def build_parser() -> argparse.ArgumentParser:
    load_dotenv()
    parser = argparse.ArgumentParser(description="Crea un usuario administrador u owner.")
    parser.add_argument("--owner", action="store_true", help="Usar los valores por defecto del usuario owner (OWNER_*)")
    parser.add_argument("--name", help="Nombre visible del usuario")
    parser.add_argument("--email", help="Email de acceso")
    parser.add_argument("--password", help="Contraseña en texto plano (solo se guarda su hash)")
    parser.add_argument("--role", choices=ROLES, help="Rol del usuario")
    return parser


def resolver_datos(args: argparse.Namespace) -> dict:
    """Completa los argumentos no indicados con las variables de entorno o los valores por defecto."""
    if args.owner:
        defaults = {
            "name": os.getenv("OWNER_NAME", "Owner"),
            "email": os.getenv("OWNER_EMAIL", "owner@example.com"),
            "password": os.getenv("OWNER_PASSWORD", "owner123"),
            "role": "owner",
        }
    else:
        defaults = {
            "name": os.getenv("ADMIN_NAME", "Admin"),
            "email": os.getenv("ADMIN_EMAIL", "admin@example.com"),
            "password": os.getenv("ADMIN_PASSWORD", "admin123"),
            "role": os.getenv("ADMIN_ROLE", "admin"),
        }
    return {campo: getattr(args, campo) or valor for campo, valor in defaults.items()}


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    args = build_parser().parse_args(argv)
    datos = resolver_datos(args)

    if datos["role"] not in ROLES:
        logger.error(f"ADMIN_ROLE debe ser uno de {ROLES}")
        return 1

    settings = Settings.from_env()
    session_factory = create_session_factory(create_db_engine(settings))
    with session_factory() as db:
        crear_usuario(db, **datos)
    return 0


if __name__ == "__main__":
    sys.exit(main())
