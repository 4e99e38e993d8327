from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from pokeguess.chat_app import GuessGameApp
from pokeguess.config import CORS_ORIGINS, DB_PATH, SERVER_HOST, SERVER_PORT, logger
from pokeguess.db_helpers import init_database
from pokeguess.enrichment import PokemonFetcher
from pokeguess.game_sessions import GameSessions
from pokeguess.poke_api import PokeApiClient
from pokeguess.pokemon_cache import PokemonCache
from pokeguess.records import ChatEvent


def build_game(db_path: str = DB_PATH) -> GuessGameApp:
    # Failing to open the cache db is fatal, let it raise
    session_factory = init_database(db_path)
    api = PokeApiClient()
    fetcher = PokemonFetcher(api, PokemonCache(session_factory))
    return GuessGameApp(fetcher, GameSessions(fetcher), api)


def create_app(
    game: Optional[GuessGameApp] = None,
    cors_origins: Optional[List[str]] = None,
) -> FastAPI:
    if cors_origins is None:
        cors_origins = CORS_ORIGINS

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.game = game or build_game()
        logger.info("Bot is now running.")
        try:
            yield
        finally:
            # drain background cache writes before exit
            app.state.game.fetcher.close()

    app = FastAPI(lifespan=lifespan)

    # CORS only for explicitly configured origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # sync handler: FastAPI runs it in its threadpool, so rooms are served concurrently
    @app.post("/events")
    def send_event(event: ChatEvent):
        try:
            messages = app.state.game.handle(event)
        except Exception as e:
            logger.exception(f"Error while handling event for room {event.room_id}")
            raise HTTPException(status_code=500, detail=str(e))
        return {
            "status": "success",
            "messages": [m.model_dump(exclude_none=True) for m in messages],
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)
