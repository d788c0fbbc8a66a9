# taller/api_client.py

import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error devuelto por la API, con el mensaje del campo `error` de la respuesta."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __str__(self):
        return self.message


class TallerApiClient:
    """
    Cliente HTTP de la API del taller. Guarda el token de la sesión y lo envía
    como `Authorization: Bearer <token>` en cada pedido.

    `session` puede ser cualquier objeto con un método `request` compatible con
    `requests.Session` (por ejemplo el TestClient de FastAPI).
    """

    def __init__(self, base_url: str = "http://localhost:4000", token: Optional[str] = None,
                 session=None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # --- Manejo del token ---
    def set_token(self, token: Optional[str]) -> None:
        self.token = token

    def logout(self) -> None:
        self.set_token(None)

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @staticmethod
    def _handle(response) -> Any:
        if response.status_code >= 400:
            message = f"HTTP {response.status_code}"
            try:
                data = response.json()
                if isinstance(data, dict):
                    message = data.get("error") or data.get("message") or message
            except ValueError:
                pass
            logger.debug(f"Error de la API: {response.status_code} {message}")
            raise ApiError(response.status_code, message)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def _request(self, method: str, path: str, json: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        response = self.session.request(
            method,
            f"{self.base_url}{path}",
            json=json,
            params=params,
            headers=self._headers(),
            timeout=self.timeout,
        )
        return self._handle(response)

    # --- Auth ---
    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.set_token(data["token"])
        return data

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/auth/me")

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")

    # --- Clientes ---
    def listar_clientes(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/clientes")

    def obtener_cliente(self, cliente_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/clientes/{cliente_id}")

    def crear_cliente(self, nombre: str, **datos) -> Dict[str, Any]:
        return self._request("POST", "/api/clientes", json={"nombre": nombre, **datos})

    def actualizar_cliente(self, cliente_id: int, **cambios) -> Dict[str, Any]:
        return self._request("PUT", f"/api/clientes/{cliente_id}", json=cambios)

    def eliminar_cliente(self, cliente_id: int) -> None:
        self._request("DELETE", f"/api/clientes/{cliente_id}")

    # --- Vehículos ---
    def listar_vehiculos(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/vehiculos")

    def obtener_vehiculo(self, vehiculo_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/vehiculos/{vehiculo_id}")

    def crear_vehiculo(self, cliente_id: int, placa: str, **datos) -> Dict[str, Any]:
        return self._request("POST", "/api/vehiculos", json={"cliente_id": cliente_id, "placa": placa, **datos})

    def actualizar_vehiculo(self, vehiculo_id: int, **cambios) -> Dict[str, Any]:
        return self._request("PUT", f"/api/vehiculos/{vehiculo_id}", json=cambios)

    def eliminar_vehiculo(self, vehiculo_id: int) -> None:
        self._request("DELETE", f"/api/vehiculos/{vehiculo_id}")

    # --- Reparaciones ---
    def listar_reparaciones(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/reparaciones")

    def obtener_reparacion(self, reparacion_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/reparaciones/{reparacion_id}")

    def crear_reparacion(self, vehiculo_id: int, descripcion: str, **datos) -> Dict[str, Any]:
        return self._request("POST", "/api/reparaciones",
                             json={"vehiculo_id": vehiculo_id, "descripcion": descripcion, **datos})

    def actualizar_reparacion(self, reparacion_id: int, **cambios) -> Dict[str, Any]:
        return self._request("PUT", f"/api/reparaciones/{reparacion_id}", json=cambios)

    def eliminar_reparacion(self, reparacion_id: int) -> None:
        self._request("DELETE", f"/api/reparaciones/{reparacion_id}")

    # --- Reportes ---
    def obtener_reportes(self, desde: str, hasta: str, **filtros) -> Dict[str, Any]:
        params = {"desde": desde, "hasta": hasta}
        params.update({campo: valor for campo, valor in filtros.items() if valor})
        return self._request("GET", "/api/reportes", params=params)

    # --- Imágenes de reparaciones ---
    def listar_imagenes_reparacion(self, reparacion_id: int) -> List[Dict[str, Any]]:
        return self._request("GET", f"/api/reparaciones/{reparacion_id}/imagenes")

    def subir_imagen_reparacion(self, reparacion_id: int, nombre_archivo: str, tipo_mime: str,
                                datos_base64: str, descripcion: Optional[str] = None) -> Dict[str, Any]:
        payload = {
            "nombre_archivo": nombre_archivo,
            "tipo_mime": tipo_mime,
            "datos_base64": datos_base64,
            "descripcion": descripcion,
        }
        return self._request("POST", f"/api/reparaciones/{reparacion_id}/imagenes", json=payload)

    def eliminar_imagen_reparacion(self, reparacion_id: int, imagen_id: int) -> None:
        self._request("DELETE", f"/api/reparaciones/{reparacion_id}/imagenes/{imagen_id}")
