"""
PRUEBAS DE CAJA BLANCA - Módulo Clientes y Vehículos
Objetivo: CRUD de clientes y vehículos con borrado restringido a administradores

Rutas de ejecución cubiertas:
- RAMA 1: Campos obligatorios ausentes -> 400
- RAMA 2: Padre inexistente (cliente de un vehículo) -> 404
- RAMA 3: Clave única repetida (cédula, placa) -> 409
- RAMA 4: Actualización parcial: los campos no enviados se conservan
- RAMA 5: DELETE: 403 sin rol admin, 404 si no existe, 204 y cascada si existe
"""
import pytest
from fastapi import HTTPException

from taller.models.cliente import Cliente as DBCliente
from taller.models.reparacion import Reparacion as DBReparacion
from taller.models.vehiculo import Vehiculo as DBVehiculo
from taller.routes.clientes import create_cliente, get_cliente_or_404
from taller.routes.vehiculos import create_vehiculo
from taller.schemas.cliente import ClienteCreate
from taller.schemas.vehiculo import VehiculoCreate


class TestClientesCajaBlanca:

    def test_get_cliente_or_404_inexistente(self, db_session):
        with pytest.raises(HTTPException) as exc_info:
            get_cliente_or_404(cliente_id=9999, db=db_session)

        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "cliente no encontrado"

    def test_rama1_nombre_requerido(self, db_session):
        with pytest.raises(HTTPException) as exc_info:
            create_cliente(ClienteCreate(telefono="555"), db=db_session)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "nombre es requerido"

    def test_rama3_cedula_repetida(self, db_session, create_test_cliente):
        create_test_cliente(nombre="Uno", cedula="0912345678")

        with pytest.raises(HTTPException) as exc_info:
            create_cliente(ClienteCreate(nombre="Dos", cedula="0912345678"), db=db_session)

        assert exc_info.value.status_code == 409
        assert db_session.query(DBCliente).count() == 1

    def test_crear_y_obtener(self, client, owner_headers):
        response = client.post("/api/clientes", json={"nombre": "Ana", "telefono": "0999", "email": "ana@example.com"},
                               headers=owner_headers)

        assert response.status_code == 201
        creado = response.json()
        assert creado["nombre"] == "Ana"
        assert creado["direccion"] is None

        response = client.get(f"/api/clientes/{creado['id']}", headers=owner_headers)
        assert response.status_code == 200
        assert response.json() == creado

    def test_listar_mas_recientes_primero(self, client, owner_headers, create_test_cliente):
        primero = create_test_cliente(nombre="Primero")
        segundo = create_test_cliente(nombre="Segundo")

        response = client.get("/api/clientes", headers=owner_headers)

        assert [c["id"] for c in response.json()] == [segundo.id, primero.id]

    def test_obtener_inexistente(self, client, owner_headers):
        response = client.get("/api/clientes/9999", headers=owner_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "cliente no encontrado"}

    def test_rama4_actualizacion_parcial(self, client, owner_headers, create_test_cliente):
        cliente = create_test_cliente(nombre="Carlos", telefono="111", direccion="Av. Siempre Viva")

        response = client.put(f"/api/clientes/{cliente.id}", json={"telefono": "222", "direccion": None},
                              headers=owner_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["nombre"] == "Carlos"
        assert data["telefono"] == "222"
        assert data["direccion"] == "Av. Siempre Viva"

    def test_actualizar_inexistente(self, client, owner_headers):
        response = client.put("/api/clientes/9999", json={"nombre": "X"}, headers=owner_headers)
        assert response.status_code == 404

    def test_rama5_owner_no_puede_eliminar(self, client, owner_headers, create_test_cliente, db_session):
        cliente = create_test_cliente()

        response = client.delete(f"/api/clientes/{cliente.id}", headers=owner_headers)

        assert response.status_code == 403
        assert response.json() == {"error": "forbidden"}
        db_session.expire_all()
        assert db_session.query(DBCliente).filter(DBCliente.id == cliente.id).first() is not None

    def test_rama5_eliminar_inexistente(self, client, admin_headers):
        response = client.delete("/api/clientes/9999", headers=admin_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "cliente no encontrado"}

    def test_rama5_eliminar_en_cascada(self, client, admin_headers, create_test_cliente,
                                       create_test_vehiculo, create_test_reparacion, db_session):
        cliente = create_test_cliente()
        vehiculo = create_test_vehiculo(cliente=cliente)
        create_test_reparacion(vehiculo=vehiculo)

        response = client.delete(f"/api/clientes/{cliente.id}", headers=admin_headers)

        assert response.status_code == 204
        assert response.content == b""
        db_session.expire_all()
        assert db_session.query(DBCliente).count() == 0
        assert db_session.query(DBVehiculo).count() == 0
        assert db_session.query(DBReparacion).count() == 0


class TestVehiculosCajaBlanca:

    def test_rama1_campos_requeridos(self, db_session):
        with pytest.raises(HTTPException) as exc_info:
            create_vehiculo(VehiculoCreate(marca="Kia"), db=db_session)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "cliente_id y placa son requeridos"

    def test_rama2_cliente_inexistente(self, db_session):
        with pytest.raises(HTTPException) as exc_info:
            create_vehiculo(VehiculoCreate(cliente_id=9999, placa="ZZZ999"), db=db_session)

        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "cliente no encontrado"
        assert db_session.query(DBVehiculo).count() == 0

    def test_crear_devuelve_nombre_del_cliente(self, client, owner_headers, create_test_cliente):
        cliente = create_test_cliente(nombre="Rosa")

        response = client.post("/api/vehiculos",
                               json={"cliente_id": cliente.id, "placa": "PBA1234", "marca": "Chevrolet", "anio": 2019},
                               headers=owner_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["placa"] == "PBA1234"
        assert data["anio"] == 2019
        assert data["cliente_nombre"] == "Rosa"

    def test_rama3_placa_repetida(self, client, owner_headers, create_test_vehiculo):
        vehiculo = create_test_vehiculo(placa="DUP001")

        response = client.post("/api/vehiculos", json={"cliente_id": vehiculo.cliente_id, "placa": "DUP001"},
                               headers=owner_headers)

        assert response.status_code == 409
        assert response.json() == {"error": "ya existe un vehiculo con esa placa"}

    def test_rama2_cambiar_a_cliente_inexistente(self, client, owner_headers, create_test_vehiculo):
        vehiculo = create_test_vehiculo()

        response = client.put(f"/api/vehiculos/{vehiculo.id}", json={"cliente_id": 9999}, headers=owner_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "cliente no encontrado"}

    def test_rama4_actualizacion_parcial(self, client, owner_headers, create_test_vehiculo):
        vehiculo = create_test_vehiculo(placa="PAR001", marca="Ford", modelo="Focus")

        response = client.put(f"/api/vehiculos/{vehiculo.id}", json={"modelo": "Fiesta"}, headers=owner_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["placa"] == "PAR001"
        assert data["marca"] == "Ford"
        assert data["modelo"] == "Fiesta"

    def test_listar_y_obtener(self, client, owner_headers, create_test_vehiculo):
        vehiculo = create_test_vehiculo(placa="GET001")

        listado = client.get("/api/vehiculos", headers=owner_headers)
        detalle = client.get(f"/api/vehiculos/{vehiculo.id}", headers=owner_headers)
        inexistente = client.get("/api/vehiculos/9999", headers=owner_headers)

        assert [v["placa"] for v in listado.json()] == ["GET001"]
        assert detalle.json()["cliente_nombre"] == "Cliente Test"
        assert inexistente.status_code == 404

    def test_rama5_owner_no_puede_eliminar(self, client, owner_headers, create_test_vehiculo, db_session):
        vehiculo = create_test_vehiculo()

        response = client.delete(f"/api/vehiculos/{vehiculo.id}", headers=owner_headers)

        assert response.status_code == 403
        db_session.expire_all()
        assert db_session.query(DBVehiculo).count() == 1

    def test_rama5_admin_elimina(self, client, admin_headers, create_test_vehiculo, db_session):
        vehiculo = create_test_vehiculo()

        response = client.delete(f"/api/vehiculos/{vehiculo.id}", headers=admin_headers)
        segunda_vez = client.delete(f"/api/vehiculos/{vehiculo.id}", headers=admin_headers)

        assert response.status_code == 204
        assert segunda_vez.status_code == 404
        assert segunda_vez.json() == {"error": "vehiculo no encontrado"}
