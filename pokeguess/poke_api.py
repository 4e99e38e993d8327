# pokeguess/poke_api.py
"""
Thin PokeAPI client.

Only the four lookups the game needs are exposed. Every call opens its own
httpx.Client so the client object can be shared between threads.
"""

from typing import Any, Dict, List, Optional

import httpx

from pokeguess.config import FETCH_TIMEOUT, POKEAPI_BASE_URL, logger
from pokeguess.errors import FetchTimeout, NotFoundInCatalog, RemoteFetchError

# upper bound for resource listings used by search()
SEARCH_LIST_LIMIT = 10000


class PokeApiClient:
    def __init__(
        self,
        base_url: str = POKEAPI_BASE_URL,
        timeout: float = FETCH_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self._transport = transport

    def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = self.base_url + path.lstrip("/")
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(url, params=params, follow_redirects=True)
        except httpx.TimeoutException as e:
            raise FetchTimeout(f"timed out after {self.timeout}s fetching {url}") from e
        except httpx.HTTPError as e:
            raise RemoteFetchError(f"error fetching {url}: {e}") from e

        if response.status_code == 404:
            raise NotFoundInCatalog(f"not found: {url}", status_code=404)
        if response.status_code >= 400:
            raise RemoteFetchError(
                f"unexpected status {response.status_code} fetching {url}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise RemoteFetchError(f"invalid JSON from {url}: {e}") from e

    def pokemon(self, id_or_name: str) -> Dict[str, Any]:
        return self._get_json(f"pokemon/{id_or_name}")

    def pokemon_species(self, name: str) -> Dict[str, Any]:
        return self._get_json(f"pokemon-species/{name}")

    def evolution_chain(self, chain_id: str) -> Dict[str, Any]:
        return self._get_json(f"evolution-chain/{chain_id}")

    def search(self, endpoint: str, query: str) -> List[str]:
        """
        Names from `endpoint` containing `query`, in catalog order.
        """
        listing = self._get_json(endpoint, params={"offset": 0, "limit": SEARCH_LIST_LIMIT})
        results = listing.get("results") or []
        names = [r.get("name", "") for r in results if query in (r.get("name") or "")]
        logger.debug(f"search {endpoint} for {query!r}: {len(names)} results")
        return names
