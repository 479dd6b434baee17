"""Async HTTP client for the properties API.

Every call unwraps the ``{success, data | error}`` envelope. Any non-2xx
answer, or no answer at all, becomes an ``APIError``. Nothing is retried.
"""
from typing import Any, List, Mapping, Optional, Union
from uuid import UUID

import httpx

from app.config import settings
from app.core.logging import get_logger
from app.schemas.property_schema import PropertyCreate, PropertyFilter, PropertyRead

logger = get_logger(__name__)

Payload = Union[PropertyCreate, Mapping[str, Any]]


class APIError(Exception):
    """A failed API call. ``status_code`` is None for network failures."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _query_params(filters: Union[PropertyFilter, Mapping[str, Any], None]) -> dict:
    if filters is None:
        return {}
    if not isinstance(filters, PropertyFilter):
        filters = PropertyFilter(**filters)
    params = {
        "type": filters.type.value if filters.type else None,
        "minPrice": filters.min_price,
        "maxPrice": filters.max_price,
        "search": filters.search,
    }
    return {key: value for key, value in params.items() if value is not None}


def _body(payload: Payload) -> dict:
    if isinstance(payload, PropertyCreate):
        return payload.model_dump(mode="json")
    return dict(payload)


class PropertyAPI:
    """Thin wrapper around ``httpx.AsyncClient`` for /properties."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.api_url,
            timeout=timeout or settings.request_timeout,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "PropertyAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _send(self, method: str, url: str, **kwargs) -> dict:
        logger.debug("Making %s request to %s", method, url)
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Network error - no response received: %s", exc)
            raise APIError(f"Network error: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_error:
            message = body.get("error") if isinstance(body, dict) else None
            logger.error("Response error: %s %s", response.status_code, message)
            raise APIError(message or response.reason_phrase, response.status_code)
        return body

    async def list(self, filters: Union[PropertyFilter, Mapping[str, Any], None] = None) -> List[PropertyRead]:
        body = await self._send("GET", "/properties", params=_query_params(filters))
        return [PropertyRead.model_validate(item) for item in body["data"]]

    async def get(self, property_id: Union[str, UUID]) -> PropertyRead:
        body = await self._send("GET", f"/properties/{property_id}")
        return PropertyRead.model_validate(body["data"])

    async def create(self, payload: Payload) -> PropertyRead:
        body = await self._send("POST", "/properties", json=_body(payload))
        return PropertyRead.model_validate(body["data"])

    async def update(self, property_id: Union[str, UUID], payload: Payload) -> PropertyRead:
        body = await self._send("PUT", f"/properties/{property_id}", json=_body(payload))
        return PropertyRead.model_validate(body["data"])

    async def delete(self, property_id: Union[str, UUID]) -> None:
        await self._send("DELETE", f"/properties/{property_id}")
