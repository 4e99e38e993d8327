# pokeguess/evolution.py

from pokeguess.errors import StageNotFound
from pokeguess.records import EvolutionNode


def get_evolution_stage(name: str, chain: EvolutionNode) -> int:
    """
    Stage (1-3) of `name` inside `chain`.

    Gender/form suffixes are dropped first ("nidoran-f" -> "nidoran").
    Only the first branch of each level is followed, so alternative
    evolutions (eevee, tyrogue...) are never found past the root.
    """
    name = name.split("-")[0]

    if chain.species_name == name:
        return 1

    if not chain.evolves_to:
        raise StageNotFound(f"can't find evolution stage for {name}")

    second = chain.evolves_to[0]
    if second.species_name == name:
        return 2

    if not second.evolves_to:
        raise StageNotFound(f"can't find evolution stage for {name}")

    if second.evolves_to[0].species_name == name:
        return 3

    raise StageNotFound(f"can't find evolution stage for {name}")
