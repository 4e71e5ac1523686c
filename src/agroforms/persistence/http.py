"""
Adaptador de persistencia sobre la API REST de la finca.

Rutas por recurso:
    POST /api/<recurso>          crear
    PUT  /api/<recurso>/<id>     actualizar
    GET  /api/<recurso>/<id>     obtener
"""

import logging
from typing import Any, Dict, Optional

import httpx

from agroforms.persistence.base import PersistenceAdapter, PersistenceError, PersistenceResult


logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Mensaje de error reportado por el servidor."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        message = data.get("message") or data.get("error")
        if message:
            return str(message)
    return response.text.strip() or f"HTTP {response.status_code}"


def _record_from(response: httpx.Response) -> Optional[Dict[str, Any]]:
    """Extrae el registro del cuerpo de la respuesta (admite envoltorio 'data')."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        return data["data"]
    return data if isinstance(data, dict) else None


class HttpRecordAdapter(PersistenceAdapter):
    """Cliente asíncrono de un recurso de la API REST."""

    def __init__(
        self,
        base_url: str,
        resource: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.collection = resource
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)

    def _url(self, record_id: Optional[str] = None) -> str:
        url = f"{self.base_url}/api/{self.collection}"
        if record_id is not None:
            url += f"/{record_id}"
        return url

    async def create(self, payload: Dict[str, Any]) -> PersistenceResult:
        return await self._write("POST", self._url(), payload)

    async def update(self, record_id: str, payload: Dict[str, Any]) -> PersistenceResult:
        return await self._write("PUT", self._url(record_id), payload)

    async def _write(self, method: str, url: str, payload: Dict[str, Any]) -> PersistenceResult:
        try:
            response = await self.client.request(method, url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            message = _error_message(exc.response)
            logger.warning("%s %s -> %s: %s", method, url, exc.response.status_code, message)
            return PersistenceResult.failure(message)
        except httpx.HTTPError as exc:
            logger.warning("%s %s falló: %s", method, url, exc)
            return PersistenceResult.failure(str(exc) or exc.__class__.__name__)

        logger.info("%s %s -> %s", method, url, response.status_code)
        return PersistenceResult.success(_record_from(response))

    async def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        url = self._url(record_id)
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as exc:
            raise PersistenceError(f"GET {url} falló: {exc}") from exc

        if response.status_code == 404:
            return None
        if response.is_error:
            raise PersistenceError(f"GET {url} -> {response.status_code}: {_error_message(response)}")
        return _record_from(response)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
