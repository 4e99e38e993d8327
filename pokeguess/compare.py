# pokeguess/compare.py

from typing import Tuple

from pokeguess.config import logger
from pokeguess.errors import StageNotFound
from pokeguess.evolution import get_evolution_stage
from pokeguess.records import PokemonRecord

CORRECT = ":green_square:"
PARTIAL = ":yellow_square:"
INCORRECT = ":red_square:"

NAME_LABEL = "**Name**: "
TYPE_LABEL = "**Type(s)**: "
COLOR_LABEL = "**Main Color**: "
EGG_GROUP_LABEL = "**Egg groups**: "
STAGE_LABEL = "**Evolution stage**:\t\t"
HABITAT_LABEL = "**Habitat**:\t\t"
GENERATION_LABEL = "**Generation**: "

FORM_NAME_HINT = " (Current Pokemon's name have gender or forms in name) "

TOTAL_CHECKS = 7


def compare_generation(answer: PokemonRecord, guess: PokemonRecord) -> Tuple[int, int]:
    """
    Returns (direction, guess generation): 0 if equal, 1 if the answer is
    newer than the guess, -1 if older.
    """
    if answer.generation == guess.generation:
        return 0, guess.generation
    if answer.generation > guess.generation:
        return 1, guess.generation
    return -1, guess.generation


def _stage_or_zero(pokemon: PokemonRecord) -> int:
    try:
        return get_evolution_stage(pokemon.name, pokemon.evolution_chain)
    except StageNotFound as e:
        logger.error(f"can't get evolution stage for {pokemon.name}: {e}")
        return 0


def compare(answer: PokemonRecord, guess: PokemonRecord) -> Tuple[bool, str]:
    """
    Score `guess` against `answer` on seven attributes.

    Returns (all_correct, report) where report has one line per attribute,
    always showing the guess's value.
    """
    correct = 0
    lines = []

    # Name
    name_suffix = FORM_NAME_HINT if "-" in answer.name else ""
    if answer.name == guess.name:
        lines.append(CORRECT + NAME_LABEL + guess.name + name_suffix)
        correct += 1
    else:
        lines.append(INCORRECT + NAME_LABEL + guess.name + name_suffix)

    # Types: membership overlap, order does not matter
    type_correct = sum(1 for t in answer.types if t in guess.types)
    guess_types = ", ".join(guess.types)
    if type_correct == len(answer.types) and len(answer.types) == len(guess.types):
        lines.append(CORRECT + TYPE_LABEL + guess_types)
        correct += 1
    elif type_correct == 0:
        lines.append(INCORRECT + TYPE_LABEL + guess_types)
    else:
        lines.append(PARTIAL + TYPE_LABEL + guess_types)

    # Main color
    if answer.color == guess.color:
        lines.append(CORRECT + COLOR_LABEL + guess.color)
        correct += 1
    else:
        lines.append(INCORRECT + COLOR_LABEL + guess.color)

    # Egg groups: every answer group must be in the guess, the first
    # missing one stops the count (extra guess groups are ignored)
    egg_groups_correct = 0
    for group in answer.egg_groups:
        if group in guess.egg_groups:
            egg_groups_correct += 1
        else:
            egg_groups_correct = -1
            break

    guess_groups = ", ".join(guess.egg_groups)
    if egg_groups_correct == len(answer.egg_groups):
        lines.append(CORRECT + EGG_GROUP_LABEL + guess_groups)
        correct += 1
    elif egg_groups_correct == -1:
        lines.append(INCORRECT + EGG_GROUP_LABEL + guess_groups)
    else:
        lines.append(PARTIAL + EGG_GROUP_LABEL + guess_groups)

    # Evolution stage
    answer_stage = _stage_or_zero(answer)
    guess_stage = _stage_or_zero(guess)
    if answer_stage == guess_stage:
        lines.append(CORRECT + STAGE_LABEL + str(guess_stage))
        correct += 1
    else:
        lines.append(INCORRECT + STAGE_LABEL + str(guess_stage))

    # Habitat
    if answer.habitat == guess.habitat:
        lines.append(CORRECT + HABITAT_LABEL + guess.habitat)
        correct += 1
    else:
        lines.append(INCORRECT + HABITAT_LABEL + guess.habitat)

    # Generation
    direction, guess_generation = compare_generation(answer, guess)
    if direction == 0:
        lines.append(CORRECT + GENERATION_LABEL + str(guess_generation))
        correct += 1
    else:
        lines.append(INCORRECT + GENERATION_LABEL + str(guess_generation))

    return correct == TOTAL_CHECKS, "".join(line + "\n" for line in lines)
