"""Record store proxied through a hosted table service (PostgREST-style REST API).

The service owns ``id`` and ``created_at`` (column defaults) and speaks the
same snake_case field names as the rest of the backend:

    GET    /{table}?select=*&order=created_at.asc,id.asc
    GET    /{table}?select=*&id=eq.{id}
    POST   /{table}                      (Prefer: return=representation)
    PATCH  /{table}?id=eq.{id}           (Prefer: return=representation)
    DELETE /{table}?id=eq.{id}           (Prefer: return=representation)

An empty representation from PATCH/DELETE means no row matched the id.
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Type

import httpx
from fastapi.encoders import jsonable_encoder

from app.core.errors import CollaboratorUnavailable, RecordNotFound, ValidationFailed
from app.stores.base import EntityCodec, EntityT, writable_fields

logger = logging.getLogger(__name__)

RETURN_REPRESENTATION = {"Prefer": "return=representation"}


def build_remote_client(base_url: str, api_key: str, timeout: float) -> httpx.AsyncClient:
    headers = {"Accept": "application/json"}
    if api_key:
        headers["apikey"] = api_key
        headers["Authorization"] = f"Bearer {api_key}"
    return httpx.AsyncClient(base_url=base_url.rstrip("/"), headers=headers, timeout=timeout)


class RemoteTableStore(Generic[EntityT]):
    def __init__(
        self,
        model: Type[EntityT],
        table: str,
        client: httpx.AsyncClient,
        entity: str,
    ) -> None:
        self.entity = entity
        self.table = table
        self._codec = EntityCodec(model, entity)
        self._client = client

    async def list(self) -> List[EntityT]:
        rows = await self._request("GET", params={"select": "*", "order": "created_at.asc,id.asc"})
        return [self._codec.load_stored(row) for row in rows]

    async def get(self, record_id: str) -> EntityT:
        rows = await self._request("GET", params={"select": "*", "id": f"eq.{record_id}"})
        if not rows:
            raise RecordNotFound.for_record(self.entity, record_id)
        return self._codec.load_stored(rows[0])

    async def create(self, fields: Dict[str, Any]) -> EntityT:
        rows = await self._request(
            "POST",
            json=jsonable_encoder(writable_fields(fields)),
            headers=RETURN_REPRESENTATION,
        )
        if not rows:
            raise CollaboratorUnavailable(
                f"The table service returned no {self.entity} after insert.",
                entity=self.entity,
            )
        return self._codec.load(rows[0])

    async def update(self, record_id: str, changes: Dict[str, Any]) -> EntityT:
        rows = await self._request(
            "PATCH",
            params={"id": f"eq.{record_id}"},
            json=jsonable_encoder(writable_fields(changes)),
            headers=RETURN_REPRESENTATION,
        )
        return self._single(rows, record_id)

    async def delete(self, record_id: str) -> None:
        rows = await self._request(
            "DELETE",
            params={"id": f"eq.{record_id}"},
            headers=RETURN_REPRESENTATION,
        )
        if not rows:
            raise RecordNotFound.for_record(self.entity, record_id)

    def _single(self, rows: List[Dict[str, Any]], record_id: str) -> EntityT:
        if not rows:
            raise RecordNotFound.for_record(self.entity, record_id)
        return self._codec.load(rows[0])

    async def _request(
        self,
        method: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> List[Dict[str, Any]]:
        try:
            response = await self._client.request(
                method, f"/{self.table}", params=params, json=json, headers=headers
            )
        except httpx.HTTPError as exc:
            logger.error(
                "Table service request failed",
                extra={"entity": self.entity, "method": method, "error": str(exc)},
            )
            raise CollaboratorUnavailable(
                f"The {self.entity} table service is unreachable.", entity=self.entity
            ) from exc

        if response.status_code >= 500 or response.status_code in (401, 403, 404):
            logger.error(
                "Table service error",
                extra={"entity": self.entity, "method": method, "status_code": response.status_code},
            )
            raise CollaboratorUnavailable(
                f"The {self.entity} table service failed ({response.status_code}).",
                entity=self.entity,
            )
        if response.status_code >= 400:
            raise ValidationFailed(_error_message(response), entity=self.entity)

        if not response.content:
            return []
        try:
            payload = response.json()
        except ValueError as exc:
            logger.error(
                "Table service returned a non-JSON body",
                extra={"entity": self.entity, "method": method, "status_code": response.status_code},
            )
            raise CollaboratorUnavailable(
                f"The {self.entity} table service sent an unreadable response.",
                entity=self.entity,
            ) from exc
        if isinstance(payload, dict):
            return [payload]
        if not isinstance(payload, list) or not all(isinstance(row, dict) for row in payload):
            logger.error(
                "Table service returned an unexpected payload",
                extra={"entity": self.entity, "method": method, "payload_type": type(payload).__name__},
            )
            raise CollaboratorUnavailable(
                f"The {self.entity} table service sent an unexpected response.",
                entity=self.entity,
            )
        return payload


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"Rejected with status {response.status_code}"
    if isinstance(body, dict):
        return body.get("message") or body.get("details") or str(body)
    return str(body)
