# pokeguess/records.py
from typing import Optional

from pydantic import BaseModel, Field


class EvolutionNode(BaseModel):
    species_name: str
    evolves_to: list["EvolutionNode"] = Field(default_factory=list)


class PokemonRecord(BaseModel):
    """
    Everything the game needs about one pokemon: the pokemon itself, its
    species and its evolution chain, flattened into one cacheable unit.
    """
    id: int
    name: str
    types: list[str]
    color: str
    egg_groups: list[str] = Field(default_factory=list)
    habitat: str = ""  # empty when the catalog has no habitat
    generation: int
    evolution_chain: EvolutionNode
    sprite_url: Optional[str] = None


class ChatEvent(BaseModel):
    room_id: str
    author_id: str
    is_bot: bool = False
    text: str


class OutboundMessage(BaseModel):
    # "text" -> only `text` is set, "embed" -> the rich fields are set
    kind: str = "text"
    text: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    color: Optional[int] = None
    thumbnail_url: Optional[str] = None

    @classmethod
    def plain(cls, text: str) -> "OutboundMessage":
        return cls(kind="text", text=text)

    @classmethod
    def embed(cls, title: str, description: str, color: int, thumbnail_url: Optional[str] = None) -> "OutboundMessage":
        return cls(
            kind="embed",
            title=title,
            description=description,
            color=color,
            thumbnail_url=thumbnail_url,
        )
