"""
Shared pytest fixtures for the pokeguess test suite.

Provides:
    - session_factory: a fresh SQLite cache database under tmp_path
    - make_record: builds PokemonRecords with sensible defaults
    - bulbasaur / charizard: fully populated sample records
    - fake_api: an in-process stand-in for PokeApiClient
    - catalog payload helpers mirroring the PokeAPI JSON shapes
"""

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Ensure pokeguess/ is importable regardless of where pytest is invoked
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pokeguess.db_helpers import init_database  # noqa: E402
from pokeguess.errors import NotFoundInCatalog, RemoteFetchError  # noqa: E402
from pokeguess.records import EvolutionNode, PokemonRecord  # noqa: E402


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

def chain_of(*names):
    """Linear evolution chain: chain_of("a", "b") -> a -> b."""
    node = None
    for name in reversed(names):
        node = EvolutionNode(species_name=name, evolves_to=[node] if node else [])
    return node


@pytest.fixture
def make_record():
    def _make(**overrides):
        data = {
            "id": 1,
            "name": "bulbasaur",
            "types": ["grass", "poison"],
            "color": "green",
            "egg_groups": ["monster", "plant"],
            "habitat": "grassland",
            "generation": 1,
            "evolution_chain": chain_of("bulbasaur", "ivysaur", "venusaur"),
            "sprite_url": "https://sprites.example/1.png",
        }
        data.update(overrides)
        return PokemonRecord(**data)
    return _make


@pytest.fixture
def bulbasaur(make_record):
    return make_record()


@pytest.fixture
def charizard(make_record):
    return make_record(
        id=6,
        name="charizard",
        types=["fire", "flying"],
        color="red",
        egg_groups=["monster", "dragon"],
        habitat="mountain",
        generation=1,
        evolution_chain=chain_of("charmander", "charmeleon", "charizard"),
        sprite_url="https://sprites.example/6.png",
    )


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture
def session_factory(tmp_path):
    return init_database(str(tmp_path / "cache.db"))


# ---------------------------------------------------------------------------
# Fake catalog
# ---------------------------------------------------------------------------

def pokemon_payload(pid, name, types, species=None):
    return {
        "id": pid,
        "name": name,
        "types": [{"slot": i + 1, "type": {"name": t, "url": ""}} for i, t in enumerate(types)],
        "species": {"name": species or name, "url": ""},
        "sprites": {"front_default": f"https://sprites.example/{pid}.png"},
    }


def species_payload(name, color, egg_groups, habitat, generation, chain_id):
    return {
        "name": name,
        "color": {"name": color},
        "egg_groups": [{"name": g} for g in egg_groups],
        "habitat": {"name": habitat} if habitat else None,
        "generation": {"url": f"https://pokeapi.co/api/v2/generation/{generation}/"},
        "evolution_chain": {"url": f"https://pokeapi.co/api/v2/evolution-chain/{chain_id}/"},
    }


def chain_payload(chain_id, *names):
    node = {}
    for name in reversed(names):
        node = {"species": {"name": name}, "evolves_to": [node] if node else []}
    return {"id": chain_id, "chain": node}


class FakePokeApi:
    """
    In-memory catalog with the PokeApiClient interface.

    `failing_ids` makes pokemon(<id>) raise, `calls` records every lookup.
    """

    def __init__(self):
        self.pokemon_by_key = {}
        self.species_by_name = {}
        self.chains_by_id = {}
        self.failing_ids = set()
        self.calls = []

    def add(self, pid, name, types, color, egg_groups, habitat, generation, chain_names, chain_id=None):
        chain_id = str(chain_id or pid)
        payload = pokemon_payload(pid, name, types)
        self.pokemon_by_key[str(pid)] = payload
        self.pokemon_by_key[name] = payload
        self.species_by_name[name] = species_payload(name, color, egg_groups, habitat, generation, chain_id)
        self.chains_by_id[chain_id] = chain_payload(chain_id, *chain_names)

    def pokemon(self, id_or_name):
        self.calls.append(("pokemon", str(id_or_name)))
        if str(id_or_name) in {str(i) for i in self.failing_ids}:
            raise RemoteFetchError(f"boom for {id_or_name}", status_code=500)
        try:
            return self.pokemon_by_key[str(id_or_name)]
        except KeyError:
            raise NotFoundInCatalog(f"not found: {id_or_name}", status_code=404)

    def pokemon_species(self, name):
        self.calls.append(("pokemon_species", name))
        try:
            return self.species_by_name[name]
        except KeyError:
            raise NotFoundInCatalog(f"species not found: {name}", status_code=404)

    def evolution_chain(self, chain_id):
        self.calls.append(("evolution_chain", str(chain_id)))
        try:
            return self.chains_by_id[str(chain_id)]
        except KeyError:
            raise NotFoundInCatalog(f"chain not found: {chain_id}", status_code=404)

    def search(self, endpoint, query):
        self.calls.append(("search", query))
        names = sorted(k for k in self.pokemon_by_key if not k.isdigit())
        return [n for n in names if query in n]


@pytest.fixture
def fake_api():
    api = FakePokeApi()
    api.add(1, "bulbasaur", ["grass", "poison"], "green", ["monster", "plant"], "grassland", 1,
            ["bulbasaur", "ivysaur", "venusaur"])
    api.add(4, "charmander", ["fire"], "red", ["monster", "dragon"], "mountain", 1,
            ["charmander", "charmeleon", "charizard"])
    api.add(25, "pikachu", ["electric"], "yellow", ["ground", "fairy"], "forest", 1,
            ["pichu", "pikachu", "raichu"], chain_id=10)
    return api


class SequenceRandom:
    """random.Random stand-in whose randrange() replays fixed values."""

    def __init__(self, values):
        self._values = list(values)
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        return self._values.pop(0)
