"""
Upstream list data source
Fetches row collections from the Technicians Web API and validates them into
typed records before they reach the list pipeline
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from . import config
from .exceptions import FetchError

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


@dataclass
class FetchResult:
    """Rows returned by one fetch plus the total the server reported"""

    rows: list[dict[str, Any]]
    count: int
    extras: dict[str, Any] = field(default_factory=dict)


def unwrap_payload(payload: Any, collection_key: Optional[str] = None) -> FetchResult:
    """
    Normalize the upstream response shapes into a FetchResult.

    Accepts a bare JSON array, a ``{"data": [...], "count": N}`` envelope, or a
    named collection (``collection_key``) whose sibling members are returned as
    extras.
    """
    if isinstance(payload, list):
        rows = payload
        return FetchResult(rows=_only_maps(rows), count=len(rows))

    if not isinstance(payload, dict):
        raise FetchError("Unexpected response from server")

    key = collection_key or "data"
    rows = payload.get(key)
    if rows is None:
        # Upstream returns null for an empty collection
        rows = []
    if not isinstance(rows, list):
        raise FetchError("Unexpected response from server")

    count = payload.get("count")
    if not isinstance(count, int) or isinstance(count, bool):
        count = len(rows)

    extras = {k: v for k, v in payload.items() if k not in (key, "count")}
    return FetchResult(rows=_only_maps(rows), count=count, extras=extras)


def _only_maps(rows: list[Any]) -> list[dict[str, Any]]:
    kept = [r for r in rows if isinstance(r, dict)]
    if len(kept) != len(rows):
        logger.warning(f"⚠️ Dropped {len(rows) - len(kept)} non-object rows from upstream payload")
    return kept


def validate_rows(rows: list[dict[str, Any]], model: type[RecordT]) -> list[RecordT]:
    """Validate raw row maps into records, dropping rows that do not validate"""
    records: list[RecordT] = []
    for index, row in enumerate(rows):
        try:
            records.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning(f"⚠️ Skipping invalid {model.__name__} row {index}: {e.error_count()} error(s)")
    return records


class HttpDataSource:
    """Reads list endpoints of the upstream API over HTTP"""

    def __init__(
        self,
        base_url: str = config.UPSTREAM_API_URL,
        token: Optional[str] = config.UPSTREAM_API_TOKEN,
        timeout: float = config.UPSTREAM_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def fetch(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None,
        collection_key: Optional[str] = None,
    ) -> FetchResult:
        """GET ``path`` with ``params`` as the query string and unwrap the rows"""
        query = {k: v for k, v in (params or {}).items() if v is not None}
        logger.info(f"📥 Fetching {path} with {query}")

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(path, params=query, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"❌ Request to {path} failed: {e}")
            raise FetchError(str(e) or type(e).__name__, path=path) from e

        if response.status_code >= 400:
            logger.error(f"❌ {path} returned {response.status_code}: {response.text[:200]}")
            raise FetchError(
                f"Server responded with status {response.status_code}",
                path=path,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"❌ {path} returned a non-JSON body")
            raise FetchError("Server returned an invalid response", path=path) from e

        result = unwrap_payload(payload, collection_key)
        logger.info(f"✅ {path} returned {len(result.rows)} rows (count={result.count})")
        return result
