# pokeguess/game_sessions.py

import random
import threading
import time
from typing import Optional

from pokeguess.config import MAX_POKEMON_ID, RANDOM_MAX_ATTEMPTS, RANDOM_RETRY_DELAY, logger
from pokeguess.enrichment import PokemonFetcher
from pokeguess.errors import RandomSelectionExhausted, RemoteFetchError
from pokeguess.records import PokemonRecord


class GameSessions:
    """
    In-memory, per-room answer store.
    - one active answer per room, last write wins
    - thread-safe (the platform may deliver rooms concurrently)
    - the lock is never held while fetching from the catalog
    """

    def __init__(
        self,
        fetcher: PokemonFetcher,
        max_pokemon_id: int = MAX_POKEMON_ID,
        max_attempts: Optional[int] = RANDOM_MAX_ATTEMPTS,
        retry_delay: float = RANDOM_RETRY_DELAY,
        rng: Optional[random.Random] = None,
    ):
        self.fetcher = fetcher
        self.max_pokemon_id = max_pokemon_id
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self._rng = rng or random.Random()
        self._lock = threading.Lock()
        # room_id -> PokemonRecord
        self._answers: dict[str, PokemonRecord] = {}

    def get(self, room_id: str) -> Optional[PokemonRecord]:
        with self._lock:
            return self._answers.get(str(room_id))

    def set(self, room_id: str, record: PokemonRecord) -> None:
        with self._lock:
            self._answers[str(room_id)] = record

    def answer_for(self, room_id: str) -> PokemonRecord:
        """
        Current answer for the room, picking one on first use.
        """
        answer = self.get(room_id)
        if answer is None:
            answer = self.select_random(room_id)
        return answer

    def _draw_id(self) -> int:
        return self._rng.randrange(self.max_pokemon_id - 1) + 1

    def select_random(self, room_id: str) -> PokemonRecord:
        """
        Keep drawing random ids until one resolves, then make it the room's
        answer. With max_attempts=None this never gives up.
        """
        attempt = 0
        while True:
            attempt += 1
            pokemon_id = self._draw_id()
            logger.info(f"random pokemon: room={room_id} attempt={attempt} id={pokemon_id}")

            try:
                record = self.fetcher.find_pokemon(pokemon_id, by_id=True)
            except RemoteFetchError as e:
                logger.error(f"can't find pokemon from random: room={room_id} id={pokemon_id} error={e}")
                if self.max_attempts is not None and attempt >= self.max_attempts:
                    raise RandomSelectionExhausted(
                        f"no pokemon resolved after {attempt} attempts for room {room_id}"
                    ) from e
                if self.retry_delay:
                    time.sleep(self.retry_delay)
                continue

            self.set(room_id, record)
            logger.info(f"finish random pokemon: room={room_id} id={record.id} name={record.name}")
            return record
