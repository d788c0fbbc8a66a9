"""
Configuración global para todas las pruebas pytest
"""
import base64
from datetime import date
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from taller.auth import create_access_token, get_password_hash
from taller.config import Settings
from taller.main import create_app
from taller.models.cliente import Cliente as DBCliente
from taller.models.reparacion import Reparacion as DBReparacion
from taller.models.usuario import Usuario as DBUsuario
from taller.models.vehiculo import Vehiculo as DBVehiculo
from taller.schemas.token import TokenData

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin123"
OWNER_EMAIL = "owner@example.com"
OWNER_PASSWORD = "owner123"


@pytest.fixture(scope="session")
def password_hashes():
    """Hashes bcrypt calculados una sola vez para toda la sesión de tests."""
    return {
        ADMIN_PASSWORD: get_password_hash(ADMIN_PASSWORD),
        OWNER_PASSWORD: get_password_hash(OWNER_PASSWORD),
    }


@pytest.fixture
def settings():
    """
    Base de datos SQLite en memoria, nueva para cada test.
    """
    return Settings(
        database_url="sqlite://",
        secret_key="clave-de-pruebas",
        create_tables=True,
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def db_session(app):
    """Sesión sobre la misma base que usa la aplicación."""
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(app):
    """Cliente HTTP de pruebas."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin_user(db_session, password_hashes):
    user = DBUsuario(name="Admin", email=ADMIN_EMAIL, password_hash=password_hashes[ADMIN_PASSWORD], role="admin")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def owner_user(db_session, password_hashes):
    user = DBUsuario(name="Owner", email=OWNER_EMAIL, password_hash=password_hashes[OWNER_PASSWORD], role="owner")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def admin_headers(admin_user, settings):
    return {"Authorization": f"Bearer {create_access_token(admin_user, settings)}"}


@pytest.fixture
def owner_headers(owner_user, settings):
    return {"Authorization": f"Bearer {create_access_token(owner_user, settings)}"}


@pytest.fixture
def admin_claims(admin_user):
    """Claims de un administrador, para llamar directamente a las rutas."""
    return TokenData(id=admin_user.id, role="admin", name=admin_user.name, email=admin_user.email)


@pytest.fixture
def create_test_cliente(db_session):
    """
    Factory function para crear clientes de prueba en la BD.
    """
    def _create_cliente(nombre="Cliente Test", **datos):
        cliente = DBCliente(nombre=nombre, **datos)
        db_session.add(cliente)
        db_session.commit()
        db_session.refresh(cliente)
        return cliente

    return _create_cliente


@pytest.fixture
def create_test_vehiculo(db_session, create_test_cliente):
    def _create_vehiculo(placa="ABC123", cliente=None, **datos):
        cliente = cliente or create_test_cliente()
        vehiculo = DBVehiculo(cliente_id=cliente.id, placa=placa, **datos)
        db_session.add(vehiculo)
        db_session.commit()
        db_session.refresh(vehiculo)
        return vehiculo

    return _create_vehiculo


@pytest.fixture
def create_test_reparacion(db_session, create_test_vehiculo):
    def _create_reparacion(vehiculo=None, descripcion="Cambio de aceite", fecha_ingreso=date(2024, 1, 15), **datos):
        vehiculo = vehiculo or create_test_vehiculo()
        reparacion = DBReparacion(
            vehiculo_id=vehiculo.id,
            descripcion=descripcion,
            fecha_ingreso=fecha_ingreso,
            estado=datos.pop("estado", "pendiente"),
            **datos
        )
        db_session.add(reparacion)
        db_session.commit()
        db_session.refresh(reparacion)
        return reparacion

    return _create_reparacion


@pytest.fixture
def png_base64():
    """Imagen PNG real de 4x4 píxeles codificada en base64."""
    buffer = BytesIO()
    Image.new("RGB", (4, 4), color=(200, 30, 30)).save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")
