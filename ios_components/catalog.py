"""
Client for the remote component catalog.

The catalog is a tree of static JSON files on a raw-file host:

    {base}/index.json                 -> {"components": [{name, description, tags}, ...]}
    {base}/components/{name}.json     -> full spec document for one component

Every call is a single GET with no retries and no caching.
"""

import logging
from urllib.parse import quote

import httpx

from ios_components.errors import CatalogError, ComponentNotFound, NetworkError, RemoteUnavailable

logger = logging.getLogger(__name__)


class CatalogClient:
    def __init__(self, base_url: str, timeout: float = 15.0, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def index_url(self) -> str:
        return f"{self.base_url}/index.json"

    def component_url(self, name: str) -> str:
        """URL of a component's spec; the name is encoded as one path segment."""
        return f"{self.base_url}/components/{quote(name, safe='')}.json"

    async def _get(self, url: str) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                return await client.get(url)
        except httpx.HTTPError as e:
            logger.warning("[catalog] GET %s failed: %s", url, e)
            raise NetworkError(str(e) or type(e).__name__) from e

    @staticmethod
    def _decode(response: httpx.Response):
        try:
            return response.json()
        except ValueError as e:
            raise CatalogError(f"Invalid JSON from {response.request.url}: {e}") from e

    async def fetch_index(self) -> dict:
        """Fetch index.json. Raises RemoteUnavailable on non-2xx, NetworkError on transport failure."""
        response = await self._get(self.index_url())
        if not response.is_success:
            logger.warning("[catalog] index returned %s %s", response.status_code, response.reason_phrase)
            raise RemoteUnavailable(response.status_code, response.reason_phrase)
        data = self._decode(response)
        if not isinstance(data, dict):
            raise CatalogError("Component index is not a JSON object")
        return data

    async def fetch_components(self) -> list[dict]:
        """The index's component list, in the order the catalog serves it."""
        data = await self.fetch_index()
        components = data.get("components", [])
        return components if isinstance(components, list) else []

    async def fetch_component_spec(self, name: str):
        """Fetch one component's spec document, returned exactly as decoded."""
        response = await self._get(self.component_url(name))
        if not response.is_success:
            logger.info("[catalog] component %r returned %s", name, response.status_code)
            raise ComponentNotFound(name)
        return self._decode(response)
