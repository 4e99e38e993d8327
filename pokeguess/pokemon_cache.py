# pokeguess/pokemon_cache.py

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from pokeguess.config import CACHE_TTL_DAYS, logger
from pokeguess.entities import PokemonCacheRow
from pokeguess.errors import CacheIOError
from pokeguess.records import PokemonRecord


def _as_utc(value: datetime) -> datetime:
    # SQLite hands DateTime columns back without tzinfo; we always write UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PokemonCache:
    """
    SQLite-backed cache of fully assembled PokemonRecords.

    - one row per pokemon name, `id` is a secondary lookup column
    - fixed TTL (not sliding): a row is valid for `ttl` after its last write
    - expired rows are left in place and simply reported as a miss
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        ttl: timedelta = timedelta(days=CACHE_TTL_DAYS),
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.SessionFactory = session_factory
        self.ttl = ttl
        self.clock = clock

    def put(self, record: PokemonRecord) -> None:
        """
        Upsert the record keyed by name. Raises CacheIOError on failure.
        """
        session: Session = self.SessionFactory()
        try:
            session.merge(
                PokemonCacheRow(
                    name=record.name,
                    id=record.id,
                    payload=record.model_dump_json().encode("utf-8"),
                    updated_at=self.clock(),
                )
            )
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise CacheIOError(f"can't write pokemon {record.name}: {e}") from e
        finally:
            session.close()

    def get(self, key, by_id: bool, now: Optional[datetime] = None) -> Tuple[bool, Optional[PokemonRecord]]:
        """
        Look a record up by id or by name.

        Returns (False, None) when the row is missing or older than the TTL.
        Raises CacheIOError only for storage or decoding failures.
        """
        session: Session = self.SessionFactory()
        try:
            query = session.query(PokemonCacheRow)
            if by_id:
                try:
                    query = query.filter(PokemonCacheRow.id == int(key))
                except (TypeError, ValueError):
                    return False, None
            else:
                query = query.filter(PokemonCacheRow.name == str(key))
            row = query.first()
        except SQLAlchemyError as e:
            raise CacheIOError(f"can't load pokemon {key}: {e}") from e
        finally:
            session.close()

        if row is None:
            return False, None

        now = now or self.clock()
        if _as_utc(row.updated_at) + self.ttl <= _as_utc(now):
            logger.debug(f"cache expired for pokemon {row.name} (updated_at={row.updated_at})")
            return False, None

        try:
            record = PokemonRecord.model_validate_json(row.payload)
        except ValidationError as e:
            raise CacheIOError(f"can't decode cached pokemon {row.name}: {e}") from e

        return True, record
