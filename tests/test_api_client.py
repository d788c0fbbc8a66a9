"""
Pruebas del cliente HTTP de la API contra la aplicación en memoria.
"""
from datetime import date

import pytest

from taller.api_client import ApiError, TallerApiClient


@pytest.fixture
def api(client):
    return TallerApiClient(base_url="http://testserver", session=client)


class FakeResponse:
    def __init__(self, status_code, payload=None, content=b"x"):
        self.status_code = status_code
        self._payload = payload
        self.content = content

    def json(self):
        if self._payload is None:
            raise ValueError("sin JSON")
        return self._payload


class TestHandle:

    def test_usa_campo_error(self):
        with pytest.raises(ApiError) as exc_info:
            TallerApiClient._handle(FakeResponse(409, {"error": "ya existe"}))
        assert exc_info.value.status_code == 409
        assert str(exc_info.value) == "ya existe"

    def test_usa_campo_message(self):
        with pytest.raises(ApiError) as exc_info:
            TallerApiClient._handle(FakeResponse(500, {"message": "caído"}))
        assert exc_info.value.message == "caído"

    def test_sin_cuerpo_json(self):
        with pytest.raises(ApiError) as exc_info:
            TallerApiClient._handle(FakeResponse(502))
        assert exc_info.value.message == "HTTP 502"

    def test_204_devuelve_none(self):
        assert TallerApiClient._handle(FakeResponse(204, content=b"")) is None


class TestTallerApiClient:

    def test_login_guarda_token(self, api, admin_user):
        data = api.login("admin@example.com", "admin123")

        assert api.token == data["token"]
        assert api.me()["role"] == "admin"

    def test_login_fallido(self, api, admin_user):
        with pytest.raises(ApiError) as exc_info:
            api.login("admin@example.com", "incorrecta")

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "credenciales inválidas"
        assert api.token is None

    def test_sin_token(self, api):
        with pytest.raises(ApiError) as exc_info:
            api.listar_clientes()
        assert exc_info.value.message == "unauthorized"

    def test_logout_descarta_token(self, api, owner_user):
        api.login("owner@example.com", "owner123")
        api.logout()

        with pytest.raises(ApiError) as exc_info:
            api.me()
        assert exc_info.value.status_code == 401

    def test_health(self, api):
        assert api.health() == {"status": "ok", "db": True}

    def test_flujo_del_taller(self, api, admin_user, png_base64):
        api.login("admin@example.com", "admin123")

        cliente = api.crear_cliente("Jorge", telefono="0991")
        vehiculo = api.crear_vehiculo(cliente["id"], "GYE100", marca="Kia", modelo="Rio")
        reparacion = api.crear_reparacion(vehiculo["id"], "Cambio de embrague", costo_estimado=300,
                                          fecha_ingreso=date.today().isoformat(), tecnico="Luis")
        api.actualizar_reparacion(reparacion["id"], estado="completada", costo_final=280)
        imagen = api.subir_imagen_reparacion(reparacion["id"], "embrague.png", "image/png", png_base64)

        hoy = date.today().isoformat()
        reporte = api.obtener_reportes(hoy, hoy, tecnico="luis", placa=None)

        assert api.obtener_cliente(cliente["id"])["nombre"] == "Jorge"
        assert api.obtener_vehiculo(vehiculo["id"])["cliente_nombre"] == "Jorge"
        assert api.obtener_reparacion(reparacion["id"])["estado"] == "completada"
        assert [i["id"] for i in api.listar_imagenes_reparacion(reparacion["id"])] == [imagen["id"]]
        assert reporte["total_reparaciones"] == 1
        assert reporte["total_ingresos"] == 280

        assert api.eliminar_imagen_reparacion(reparacion["id"], imagen["id"]) is None
        api.eliminar_cliente(cliente["id"])
        assert api.listar_vehiculos() == []
        assert api.listar_reparaciones() == []

    def test_owner_no_puede_eliminar(self, api, owner_user, create_test_cliente):
        cliente = create_test_cliente()
        api.login("owner@example.com", "owner123")

        with pytest.raises(ApiError) as exc_info:
            api.eliminar_cliente(cliente.id)

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "forbidden"
        assert api.actualizar_cliente(cliente.id, telefono="123")["telefono"] == "123"
