# pokeguess/enrichment.py

import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Dict, Optional

from pydantic import ValidationError

from pokeguess.config import logger
from pokeguess.errors import CacheIOError, RemoteFetchError
from pokeguess.poke_api import PokeApiClient
from pokeguess.pokemon_cache import PokemonCache
from pokeguess.records import EvolutionNode, PokemonRecord


def id_from_url(url: str) -> str:
    """
    Last path segment of a resource URL, whatever host serves it:
    "https://pokeapi.co/api/v2/generation/4/" -> "4"
    """
    return (url or "").rstrip("/").rsplit("/", 1)[-1]


def _generation_number(species: Dict[str, Any]) -> int:
    url = (species.get("generation") or {}).get("url", "")
    try:
        return int(id_from_url(url))
    except ValueError:
        logger.warning(f"can't parse generation from url {url!r}")
        return 0


def _build_chain(node: Dict[str, Any]) -> EvolutionNode:
    return EvolutionNode(
        species_name=(node.get("species") or {}).get("name", ""),
        evolves_to=[_build_chain(child) for child in node.get("evolves_to") or []],
    )


def build_record(pokemon: Dict[str, Any], species: Dict[str, Any], chain: Dict[str, Any]) -> PokemonRecord:
    """
    Flatten the three PokeAPI payloads into one PokemonRecord.
    """
    return PokemonRecord(
        id=pokemon["id"],
        name=pokemon["name"],
        types=[t["type"]["name"] for t in pokemon.get("types") or []],
        color=(species.get("color") or {}).get("name", ""),
        egg_groups=[g["name"] for g in species.get("egg_groups") or []],
        habitat=(species.get("habitat") or {}).get("name", ""),
        generation=_generation_number(species),
        evolution_chain=_build_chain(chain.get("chain") or {}),
        sprite_url=(pokemon.get("sprites") or {}).get("front_default"),
    )


class PokemonFetcher:
    """
    Cache-first lookup of complete PokemonRecords.

    On a miss it walks pokemon -> species -> evolution chain, then hands the
    assembled record to a background writer thread. Writer failures are only
    logged, the caller already has its record.
    """

    def __init__(
        self,
        api: PokeApiClient,
        cache: PokemonCache,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.api = api
        self.cache = cache
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="cache-writer")
        self._lock = threading.Lock()
        self._pending: set[Future] = set()

    def find_pokemon(self, key, by_id: bool) -> PokemonRecord:
        key = str(key)

        try:
            ok, cached = self.cache.get(key, by_id)
        except CacheIOError as e:
            logger.error(f"can't load pokemon {key} from cache: {e}")
            ok, cached = False, None

        if ok:
            logger.info(f"load pokemon from cache: id={cached.id} name={cached.name}")
            return cached

        # Each step needs the previous payload, so these stay sequential.
        # Any RemoteFetchError propagates untouched.
        pokemon = self.api.pokemon(key)

        species_name = (pokemon.get("species") or {}).get("name") or pokemon.get("name")
        species = self.api.pokemon_species(species_name)

        chain_url = (species.get("evolution_chain") or {}).get("url", "")
        chain_id = id_from_url(chain_url)
        chain = self.api.evolution_chain(chain_id)

        try:
            record = build_record(pokemon, species, chain)
        except (KeyError, TypeError, ValidationError) as e:
            raise RemoteFetchError(f"malformed catalog data for pokemon {key}: {e}") from e

        self._schedule_write(record)
        return record

    # -----------------------
    # Background cache writes
    # -----------------------

    def _schedule_write(self, record: PokemonRecord) -> None:
        future = self._executor.submit(self.cache.put, record)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(lambda f, name=record.name: self._on_write_done(f, name))

    def _on_write_done(self, future: Future, name: str) -> None:
        with self._lock:
            self._pending.discard(future)
        exc = future.exception()
        if exc is not None:
            logger.error(f"can't write pokemon {name} to cache: {exc}")

    def wait_for_writes(self, timeout: Optional[float] = None) -> None:
        """
        Block until every write scheduled so far has finished.
        """
        with self._lock:
            pending = list(self._pending)
        if pending:
            wait(pending, timeout=timeout)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
