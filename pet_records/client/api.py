# pet_records/client/api.py
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

API_URL = "/api/pets"


class ApiError(Exception):
    """Fallo devuelto por la API ({success: false}) o de transporte."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PetsApi:
    """
    Cliente REST de /api/pets. Recibe un httpx.Client ya configurado
    (base_url, timeout); en los tests sirve el TestClient de FastAPI.

    Usado como context manager cierra el cliente http al salir.
    """

    def __init__(self, http: httpx.Client):
        self.http = http

    @classmethod
    def connect(cls, base_url: str = "http://localhost:3000") -> "PetsApi":
        """Crea su propio httpx.Client; hay que cerrarlo con close() o usando ``with``."""
        return cls(httpx.Client(base_url=base_url))

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "PetsApi":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def list(self) -> List[Dict[str, Any]]:
        return self._request("GET", API_URL)

    def get(self, pet_id: str) -> Dict[str, Any]:
        return self._request("GET", f"{API_URL}/{pet_id}")

    def create(self, pet: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", API_URL, json=pet)

    def update(self, pet_id: str, pet: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"{API_URL}/{pet_id}", json=pet)

    def delete(self, pet_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"{API_URL}/{pet_id}")

    def search(self, query: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"{API_URL}/search/{quote(query, safe='')}")

    def _request(self, method: str, url: str, json: Optional[Dict[str, Any]] = None):
        try:
            response = self.http.request(method, url, json=json)
        except httpx.HTTPError as e:
            raise ApiError(str(e)) from e

        try:
            body = response.json()
        except ValueError:
            raise ApiError(f"Unexpected response ({response.status_code})", response.status_code)

        if not body.get("success"):
            raise ApiError(body.get("error") or "Request failed", response.status_code)
        return body.get("data")
