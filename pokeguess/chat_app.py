# pokeguess/chat_app.py

from typing import List

from pokeguess.compare import compare
from pokeguess.config import COMMAND_PREFIX, logger
from pokeguess.enrichment import PokemonFetcher
from pokeguess.errors import RandomSelectionExhausted, RemoteFetchError
from pokeguess.game_sessions import GameSessions
from pokeguess.poke_api import PokeApiClient
from pokeguess.records import ChatEvent, OutboundMessage

GIVE_UP_COMMANDS = ("giveup", "give up")

CORRECT_EMBED_COLOR = 0x00FF00
GUESS_EMBED_COLOR = 0xFFFFFF

CATALOG_UNAVAILABLE = "The pokemon catalog is unavailable right now, try again later."


class GuessGameApp:
    """
    Turns inbound chat events into outbound replies.

    Commands (after the prefix):
      <name>            guess a pokemon
      giveup | give up  reveal the answer and start a new round
    """

    def __init__(
        self,
        fetcher: PokemonFetcher,
        sessions: GameSessions,
        api: PokeApiClient,
        prefix: str = COMMAND_PREFIX,
    ):
        self.fetcher = fetcher
        self.sessions = sessions
        self.api = api
        self.prefix = prefix

    def handle(self, event: ChatEvent) -> List[OutboundMessage]:
        if event.is_bot or not event.text.startswith(self.prefix):
            return []

        name = event.text[len(self.prefix):].strip().lower()
        logger.info(f"command: room={event.room_id} author={event.author_id} command={name!r}")

        if not name:
            return [OutboundMessage.plain(f"Usage: {self.prefix} <pokemon name> | {self.prefix} giveup")]

        try:
            answer = self.sessions.answer_for(event.room_id)
        except RandomSelectionExhausted as e:
            logger.error(f"can't pick an answer: room={event.room_id} error={e}")
            return [OutboundMessage.plain(CATALOG_UNAVAILABLE)]

        if name in GIVE_UP_COMMANDS:
            return [OutboundMessage.plain(answer.name)] + self._next_round(event.room_id)

        if name == answer.name:
            _, description = compare(answer, answer)
            return [
                OutboundMessage.embed(
                    title=answer.name,
                    description=description,
                    color=CORRECT_EMBED_COLOR,
                    thumbnail_url=answer.sprite_url,
                )
            ] + self._next_round(event.room_id)

        try:
            guess = self.fetcher.find_pokemon(name, by_id=False)
        except RemoteFetchError as e:
            logger.error(f"can't get pokemon: room={event.room_id} name={name} error={e}")
            return [self._not_found_message(event.room_id, name)]

        _, description = compare(answer, guess)
        return [
            OutboundMessage.embed(
                title=guess.name,
                description=description,
                color=GUESS_EMBED_COLOR,
                thumbnail_url=guess.sprite_url,
            )
        ]

    def _next_round(self, room_id: str) -> List[OutboundMessage]:
        """
        Pick the next answer. If the catalog stays unreachable the room keeps
        its current answer and the players are told so.
        """
        try:
            self.sessions.select_random(room_id)
        except RandomSelectionExhausted as e:
            logger.error(f"can't pick the next answer: room={room_id} error={e}")
            return [OutboundMessage.plain(CATALOG_UNAVAILABLE)]
        return []

    def _not_found_message(self, room_id: str, name: str) -> OutboundMessage:
        try:
            similar = self.api.search("pokemon", name)
        except RemoteFetchError as e:
            logger.error(f"can't search pokemon: room={room_id} name={name} error={e}")
            similar = []

        return OutboundMessage.plain(
            "Not found pokemon name: " + name + "\nSimilar pokemon name: " + ", ".join(similar)
        )
